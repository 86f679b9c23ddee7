"""Glyph selection for classified samples."""

from __future__ import annotations

from typing import Iterable

RESET = "\x1b[0m"
FILL_BACKGROUND = "\x1b[44m"
FILL_FOREGROUND = "\x1b[34m"
HIGHLIGHT = "\x1b[41m"

# Single-sample cells are two columns wide so they come out roughly square.
FILLED = f"{FILL_BACKGROUND}  {RESET}"
EMPTY = "  "
DEBUG_EMPTY = f"{HIGHLIGHT}  {RESET}"

FULL_BLOCK = "█"
UPPER_HALF_BLOCK = "▀"
LOWER_HALF_BLOCK = "▄"
BLANK = " "

_HALF_BLOCKS = {
    (True, True): FULL_BLOCK,
    (True, False): UPPER_HALF_BLOCK,
    (False, True): LOWER_HALF_BLOCK,
    (False, False): BLANK,
}


def cell_glyph(inside: bool, debug: bool = False) -> str:
    if inside:
        return FILLED
    return DEBUG_EMPTY if debug else EMPTY


def half_block(top_inside: bool, bottom_inside: bool) -> str:
    """Return the bare half-block character encoding two stacked samples."""

    return _HALF_BLOCKS[(bool(top_inside), bool(bottom_inside))]


def pair_glyph(top_inside: bool, bottom_inside: bool, debug: bool = False) -> str:
    """Return the colored glyph for a vertical pair of samples.

    Debug mode puts the highlight background behind every glyph; it never
    changes which glyph is chosen.
    """

    glyph = f"{FILL_FOREGROUND}{half_block(top_inside, bottom_inside)}{RESET}"
    if debug:
        return f"{HIGHLIGHT}{glyph}{RESET}"
    return glyph


def rasterize_row(escaped: Iterable[bool], debug: bool = False) -> str:
    return "".join(cell_glyph(not flag, debug) for flag in escaped)


def rasterize_row_pair(top_escaped: Iterable[bool], bottom_escaped: Iterable[bool], debug: bool = False) -> str:
    return "".join(
        pair_glyph(not top, not bottom, debug) for top, bottom in zip(top_escaped, bottom_escaped)
    )
