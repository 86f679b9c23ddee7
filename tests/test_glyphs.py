import numpy as np
import pytest

from termfractal import cell_glyph, pair_glyph, rasterize_row, rasterize_row_pair
from termfractal.glyphs import (
    BLANK,
    DEBUG_EMPTY,
    EMPTY,
    FILL_FOREGROUND,
    FILLED,
    FULL_BLOCK,
    HIGHLIGHT,
    LOWER_HALF_BLOCK,
    RESET,
    UPPER_HALF_BLOCK,
    half_block,
)

TRUTH_TABLE = [
    (True, True, FULL_BLOCK),
    (True, False, UPPER_HALF_BLOCK),
    (False, True, LOWER_HALF_BLOCK),
    (False, False, BLANK),
]


@pytest.mark.parametrize("top, bottom, glyph", TRUTH_TABLE)
def test_half_block_truth_table(top, bottom, glyph):
    assert half_block(top, bottom) == glyph


def test_half_block_characters():
    assert (FULL_BLOCK, UPPER_HALF_BLOCK, LOWER_HALF_BLOCK, BLANK) == ("█", "▀", "▄", " ")


@pytest.mark.parametrize("top, bottom, glyph", TRUTH_TABLE)
def test_pair_glyph_is_colored(top, bottom, glyph):
    assert pair_glyph(top, bottom) == f"{FILL_FOREGROUND}{glyph}{RESET}"


@pytest.mark.parametrize("top, bottom, glyph", TRUTH_TABLE)
def test_debug_wraps_every_pair_identically(top, bottom, glyph):
    plain = pair_glyph(top, bottom)
    assert pair_glyph(top, bottom, debug=True) == f"{HIGHLIGHT}{plain}{RESET}"


def test_pair_glyph_accepts_numpy_booleans():
    assert pair_glyph(np.bool_(True), np.bool_(False)) == pair_glyph(True, False)


def test_cell_glyphs():
    assert cell_glyph(True) == FILLED
    assert cell_glyph(True, debug=True) == FILLED
    assert cell_glyph(False) == EMPTY
    assert cell_glyph(False, debug=True) == DEBUG_EMPTY
    assert EMPTY == "  "


def test_rasterize_row_fills_bounded_samples():
    escaped = np.array([False, True, True, False])
    assert rasterize_row(escaped) == FILLED + EMPTY + EMPTY + FILLED
    assert rasterize_row(escaped, debug=True) == FILLED + DEBUG_EMPTY + DEBUG_EMPTY + FILLED


def test_rasterize_row_pair_follows_truth_table():
    top_escaped = [False, False, True, True]
    bottom_escaped = [False, True, False, True]
    assert rasterize_row_pair(top_escaped, bottom_escaped) == "".join(
        pair_glyph(top, bottom) for top, bottom, _ in TRUTH_TABLE
    )


def test_rasterize_empty_row():
    assert rasterize_row([]) == ""
    assert rasterize_row_pair([], []) == ""
