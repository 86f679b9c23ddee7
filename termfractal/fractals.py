"""Registry of the escape-time formulas that can be rendered."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable

import numpy as np

# Fixed point of cos(z); the julia escape clause is measured from it.
DOTTIE_NUMBER = 0.739085133215160641655312087673


class UnknownFractalError(ValueError):
    """Raised when a fractal name is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown fractal '{name}'. Valid choices: {', '.join(names())}.")


class FractalKind(Enum):
    MANDELBROT = "mandelbrot"
    MANDELBROT_CUBED = "mandelbrot-cubed"
    JULIA = "julia"
    BAT = "bat"
    BATSTATIC = "batstatic"
    SPIRAL = "spiral"
    CRAB = "crab"


@dataclass(frozen=True)
class FractalDefinition:
    """A transition rule paired with the escape clause applied to its last iterate."""

    kind: FractalKind
    transition: Callable[[np.ndarray, np.ndarray], np.ndarray]
    escape_radius: float
    escape_center: complex = 0j

    @property
    def name(self) -> str:
        return self.kind.value

    def escapes(self, z):
        """Return whether ``z`` lies outside the escape radius.

        Works element-wise on numpy arrays. Written as the negation of the
        bounded test so that NaN and infinite iterates count as escaped.
        """

        return np.logical_not(np.abs(z - self.escape_center) <= self.escape_radius)


def _mandelbrot(z, c):
    return z * z + c


def _mandelbrot_cubed(z, c):
    return z * z * z + c


def _julia(z, c):
    return np.cos(z)


def _bat(z, c):
    return np.arctanh(1 / z + 1 / c)


def _batstatic(z, c):
    return 1 / np.tan(1 - z * z)


def _spiral(z, c):
    return np.log(1 + z * z)


def _crab(z, c):
    return np.power(z, 1 - z)


_DEFINITIONS = (
    FractalDefinition(FractalKind.MANDELBROT, _mandelbrot, 3.0),
    FractalDefinition(FractalKind.MANDELBROT_CUBED, _mandelbrot_cubed, 3.0),
    FractalDefinition(FractalKind.JULIA, _julia, 3.0, complex(DOTTIE_NUMBER, 0.0)),
    FractalDefinition(FractalKind.BAT, _bat, 1.0),
    FractalDefinition(FractalKind.BATSTATIC, _batstatic, 1.0),
    FractalDefinition(FractalKind.SPIRAL, _spiral, 1.0),
    FractalDefinition(FractalKind.CRAB, _crab, 1.0),
)

FRACTALS = MappingProxyType({definition.name: definition for definition in _DEFINITIONS})


def names() -> tuple[str, ...]:
    return tuple(FRACTALS)


def lookup(name: str) -> FractalDefinition:
    """Return the definition registered under ``name``.

    Matching ignores case and surrounding whitespace. Unknown names raise
    :class:`UnknownFractalError` rather than falling back to a default.
    """

    key = name.strip().lower()
    try:
        return FRACTALS[key]
    except KeyError:
        raise UnknownFractalError(name) from None
