import pytest

pygame = pytest.importorskip("pygame")

from tilemerge.direction import ShiftDirection  # noqa: E402
from tilemerge.interface import (  # noqa: E402
    EMPTY_CELL_COLOR, KEY_DIRECTIONS, TEXT_COLOR_DARK, TEXT_COLOR_LIGHT, TILE_COLORS,
    text_color, tile_color, tile_font_size,
)


class TestTileStyling:
    def test_empty_cell_color(self):
        assert tile_color(None) == EMPTY_CELL_COLOR
        assert tile_color(0) == EMPTY_CELL_COLOR

    def test_known_values(self):
        assert tile_color(2) == TILE_COLORS[2]
        assert tile_color(2048) == TILE_COLORS[2048]

    def test_large_values_share_last_color(self):
        assert tile_color(65536) == TILE_COLORS[4096]

    def test_text_color(self):
        assert text_color(4) == TEXT_COLOR_DARK
        assert text_color(8) == TEXT_COLOR_LIGHT

    def test_font_shrinks_with_digits(self):
        sizes = [tile_font_size(v) for v in (2, 128, 1024, 16384, 131072)]
        assert sizes == sorted(sizes, reverse=True)
        assert len(set(sizes)) == 5


class TestKeyBindings:
    def test_arrows_and_wasd(self):
        assert KEY_DIRECTIONS[pygame.K_LEFT] is ShiftDirection.LEFT
        assert KEY_DIRECTIONS[pygame.K_w] is ShiftDirection.UP
        assert set(KEY_DIRECTIONS.values()) == set(ShiftDirection)
        assert len(KEY_DIRECTIONS) == 8
