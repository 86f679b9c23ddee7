"""Public API for terminal escape-time fractal rendering."""

from .fractals import FRACTALS, FractalDefinition, FractalKind, UnknownFractalError, lookup, names
from .generator import (
    MAX_GRID_SPAN,
    GridRange,
    ViewportConfig,
    ViewportError,
    sample_row,
    to_complex,
    viewport_to_grid_range,
)
from .glyphs import cell_glyph, pair_glyph, rasterize_row, rasterize_row_pair
from .renderer import (
    ITERATION_DEPTH,
    classify_frame,
    evaluate,
    evaluate_row,
    iter_escape_rows,
    iter_rows,
    rasterize_rows,
    render_frame,
)

__all__ = [
    "FRACTALS",
    "FractalDefinition",
    "FractalKind",
    "GridRange",
    "ITERATION_DEPTH",
    "MAX_GRID_SPAN",
    "UnknownFractalError",
    "ViewportConfig",
    "ViewportError",
    "cell_glyph",
    "classify_frame",
    "evaluate",
    "evaluate_row",
    "iter_escape_rows",
    "iter_rows",
    "lookup",
    "names",
    "pair_glyph",
    "rasterize_row",
    "rasterize_row_pair",
    "rasterize_rows",
    "render_frame",
    "sample_row",
    "to_complex",
    "viewport_to_grid_range",
]
