import pytest

from tilemerge.direction import ShiftDirection, access_order


class TestShiftDirection:
    def test_member_order(self):
        assert list(ShiftDirection) == [
            ShiftDirection.DOWN, ShiftDirection.LEFT, ShiftDirection.RIGHT, ShiftDirection.UP,
        ]

    def test_steps(self):
        assert ShiftDirection.DOWN.step == (1, 0)
        assert ShiftDirection.UP.step == (-1, 0)
        assert ShiftDirection.LEFT.step == (0, -1)
        assert ShiftDirection.RIGHT.step == (0, 1)

    @pytest.mark.parametrize("name, expected", [
        ("up", ShiftDirection.UP), ("DOWN", ShiftDirection.DOWN), (" left ", ShiftDirection.LEFT),
        ("w", ShiftDirection.UP), ("a", ShiftDirection.LEFT), ("s", ShiftDirection.DOWN), ("d", ShiftDirection.RIGHT),
    ])
    def test_from_name(self, name, expected):
        assert ShiftDirection.from_name(name) is expected

    def test_from_name_unknown(self):
        with pytest.raises(ValueError):
            ShiftDirection.from_name("sideways")


class TestAccessOrder:
    def test_up_and_left_are_row_major(self):
        expected = [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert list(access_order(ShiftDirection.UP, 2)) == expected
        assert list(access_order(ShiftDirection.LEFT, 2)) == expected

    def test_down_reverses_rows(self):
        assert list(access_order(ShiftDirection.DOWN, 2)) == [(1, 0), (1, 1), (0, 0), (0, 1)]

    def test_right_reverses_columns(self):
        assert list(access_order(ShiftDirection.RIGHT, 2)) == [(0, 1), (0, 0), (1, 1), (1, 0)]

    @pytest.mark.parametrize("direction", list(ShiftDirection))
    def test_visits_every_cell_once(self, direction):
        cells = list(access_order(direction, 4))
        assert len(cells) == 16
        assert len(set(cells)) == 16
