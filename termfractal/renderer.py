"""Escape-time evaluation and the row-by-row frame driver."""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np

from .fractals import FractalDefinition
from .generator import ViewportConfig, sample_row, viewport_to_grid_range
from .glyphs import rasterize_row, rasterize_row_pair

# Every sample runs the full depth, diverged or not, so render time does not
# depend on the image. Changing it changes the rendered output.
ITERATION_DEPTH = 36


def _iterate(z, c, fractal: FractalDefinition):
    with np.errstate(all="ignore"):
        for _ in range(ITERATION_DEPTH):
            z = fractal.transition(z, c)
        return fractal.escapes(z)


def evaluate(sample: complex, seed: complex, fractal: FractalDefinition) -> bool:
    """Iterate ``fractal`` from ``seed`` with parameter ``sample`` and report escape."""

    z = np.complex128(seed)
    c = np.complex128(sample)
    return bool(_iterate(z, c, fractal))


def evaluate_row(samples: np.ndarray, fractal: FractalDefinition) -> np.ndarray:
    """Classify a row of samples element-wise, each seeded with itself."""

    c = np.asarray(samples, dtype=np.complex128)
    return np.asarray(_iterate(c.copy(), c, fractal), dtype=bool)


def iter_escape_rows(viewport: ViewportConfig, fractal: FractalDefinition) -> Iterator[np.ndarray]:
    """Yield the escape mask of each grid row, top row first."""

    grid = viewport_to_grid_range(viewport)
    for row in grid.rows:
        yield evaluate_row(sample_row(row, grid, viewport.resolution), fractal)


def rasterize_rows(
    escape_rows: Iterable[np.ndarray],
    *,
    supersample: bool = False,
    debug: bool = False,
) -> Iterator[str]:
    """Turn classified rows into lines of text, consuming them lazily.

    With ``supersample`` each line encodes two rows through half-block
    glyphs. When the row count is odd the final line has no bottom sample
    inside the viewport, and that half is drawn as outside.
    """

    if not supersample:
        for escaped in escape_rows:
            yield rasterize_row(escaped, debug)
        return

    rows = iter(escape_rows)
    for top in rows:
        bottom = next(rows, None)
        if bottom is None:
            bottom = np.ones_like(top)
        yield rasterize_row_pair(top, bottom, debug)


def iter_rows(
    viewport: ViewportConfig,
    fractal: FractalDefinition,
    *,
    supersample: bool = False,
    debug: bool = False,
) -> Iterator[str]:
    """Yield the rendered frame one line at a time, top row first."""

    yield from rasterize_rows(iter_escape_rows(viewport, fractal), supersample=supersample, debug=debug)


def render_frame(
    viewport: ViewportConfig,
    fractal: FractalDefinition,
    *,
    supersample: bool = False,
    debug: bool = False,
) -> str:
    return "".join(f"{line}\n" for line in iter_rows(viewport, fractal, supersample=supersample, debug=debug))


def classify_frame(viewport: ViewportConfig, fractal: FractalDefinition) -> np.ndarray:
    """Return the escape mask of the whole viewport, shaped (rows, columns)."""

    grid = viewport_to_grid_range(viewport)
    mask = np.empty(grid.shape, dtype=bool)
    for index, escaped in enumerate(iter_escape_rows(viewport, fractal)):
        mask[index] = escaped
    return mask
