from enum import Enum
from typing import Dict, Iterator, Tuple


class ShiftDirection(Enum):
    """
    The four directions a shift can move pieces toward.
    Member order is the order the agent tries directions in.
    """
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"

    @property
    def step(self) -> Tuple[int, int]:
        """(row delta, column delta) of one step toward this direction."""
        return DIRECTION_STEPS[self]

    @classmethod
    def from_name(cls, name: str) -> "ShiftDirection":
        """Accept 'up', 'UP', 'w', ... as used by the front ends."""
        key = name.strip().lower()
        if key in KEY_ALIASES:
            return KEY_ALIASES[key]
        return cls(key)


DIRECTION_STEPS: Dict[ShiftDirection, Tuple[int, int]] = {
    ShiftDirection.DOWN: (1, 0),
    ShiftDirection.LEFT: (0, -1),
    ShiftDirection.RIGHT: (0, 1),
    ShiftDirection.UP: (-1, 0),
}

KEY_ALIASES: Dict[str, ShiftDirection] = {
    'w': ShiftDirection.UP,
    'a': ShiftDirection.LEFT,
    's': ShiftDirection.DOWN,
    'd': ShiftDirection.RIGHT,
}


def access_order(direction: ShiftDirection, size: int) -> Iterator[Tuple[int, int]]:
    """
    Yield every (row, column) of a size x size grid in the order a shift
    visits them: row-major, rows reversed for DOWN, columns reversed for RIGHT.
    Cells nearer the target edge always come first.
    """
    last = size - 1
    for r in range(size):
        row = last - r if direction is ShiftDirection.DOWN else r
        for c in range(size):
            column = last - c if direction is ShiftDirection.RIGHT else c
            yield row, column
