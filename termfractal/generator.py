"""Mapping between the integer sample grid and the complex plane."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

# Upper bound on the samples along either axis of one frame.
MAX_GRID_SPAN = 100_000

_BOUNDS = ("real_start", "real_end", "complex_start", "complex_end")


class ViewportError(ValueError):
    """Raised when a viewport cannot be sampled."""


@dataclass(frozen=True)
class ViewportConfig:
    """Rectangle of the complex plane and the number of samples per unit length."""

    real_start: float
    real_end: float
    complex_start: float
    complex_end: float
    resolution: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.resolution, bool) or not isinstance(self.resolution, (int, np.integer)):
            raise ViewportError(f"resolution must be an integer, got {self.resolution!r}.")
        if self.resolution <= 0:
            raise ViewportError(f"resolution must be positive, got {self.resolution}.")
        for field in _BOUNDS:
            value = getattr(self, field)
            try:
                finite = math.isfinite(value)
            except TypeError as exc:
                raise ViewportError(f"{field} must be a number, got {value!r}.") from exc
            if not finite:
                raise ViewportError(f"{field} must be a finite number, got {value!r}.")
        if self.real_end < self.real_start:
            raise ViewportError(
                f"real_end ({self.real_end}) must not be less than real_start ({self.real_start})."
            )
        if self.complex_end < self.complex_start:
            raise ViewportError(
                f"complex_end ({self.complex_end}) must not be less than complex_start ({self.complex_start})."
            )
        for field in _BOUNDS:
            if not math.isfinite(float(getattr(self, field)) * int(self.resolution)):
                raise ViewportError(f"{field} times resolution {self.resolution} overflows the sample grid.")
        for axis, start, end in (
            ("real", self.real_start, self.real_end),
            ("imaginary", -self.complex_end, -self.complex_start),
        ):
            span = _truncate(end, self.resolution) - _truncate(start, self.resolution) + 1
            if span > MAX_GRID_SPAN:
                raise ViewportError(f"{axis} axis spans {span} samples, more than the maximum of {MAX_GRID_SPAN}.")


@dataclass(frozen=True)
class GridRange:
    """Inclusive integer bounds of the sample grid for a viewport."""

    col_start: int
    col_end: int
    row_start: int
    row_end: int

    @property
    def columns(self) -> range:
        return range(self.col_start, self.col_end + 1)

    @property
    def rows(self) -> range:
        return range(self.row_start, self.row_end + 1)

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.rows), len(self.columns)


def _truncate(bound: float, resolution: int) -> int:
    # Truncation toward zero, not rounding or flooring: negative bounds keep
    # the pixel boundaries of the reference renders.
    return math.trunc(float(bound) * int(resolution))


def viewport_to_grid_range(viewport: ViewportConfig) -> GridRange:
    """Scale the viewport bounds by the resolution and truncate them to grid indices.

    Rows come from the negated imaginary bounds, so the first row holds the
    most positive imaginary part.
    """

    resolution = viewport.resolution
    return GridRange(
        col_start=_truncate(viewport.real_start, resolution),
        col_end=_truncate(viewport.real_end, resolution),
        row_start=_truncate(-viewport.complex_end, resolution),
        row_end=_truncate(-viewport.complex_start, resolution),
    )


def to_complex(col: int, row: int, resolution: int) -> complex:
    return complex(col / resolution, row / resolution)


def sample_row(row: int, grid: GridRange, resolution: int) -> np.ndarray:
    """Return the samples of one grid row, ordered by increasing real part.

    The row index is negated on the way in, undoing the flip applied by
    :func:`viewport_to_grid_range`.
    """

    cols = np.arange(grid.col_start, grid.col_end + 1, dtype=np.float64)
    samples = np.empty(cols.shape, dtype=np.complex128)
    samples.real = cols / resolution
    samples.imag = -row / resolution
    return samples
