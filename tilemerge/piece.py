from typing import Optional

from .randomness import RandomSource, SystemRandomSource

# Probability that a randomly created piece starts as a 2 (otherwise 4)
SPAWN_TWO_PROBABILITY = 0.9


def is_piece_value(value) -> bool:
    """True for powers of two >= 2."""
    return isinstance(value, int) and value >= 2 and (value & (value - 1)) == 0


class GamePiece:
    """
    A single piece and its value.

    If no value is provided the piece is initialized from `random_source`:
    90% chance of 2, 10% chance of 4.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Optional[int] = None, random_source: Optional[RandomSource] = None):
        if value is None:
            if random_source is None:
                random_source = SystemRandomSource()
            value = 2 if random_source.uniform_unit() < SPAWN_TWO_PROBABILITY else 4
        if not is_piece_value(value):
            raise ValueError(f"Piece value must be a power of two >= 2, got {value!r}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def upgrade(self) -> None:
        """Double the value in place. Only the board calls this, on merge."""
        self._value *= 2

    def clone(self) -> "GamePiece":
        new_piece = GamePiece.__new__(GamePiece)
        new_piece._value = self._value
        return new_piece

    def __repr__(self):
        return f"GamePiece({self._value})"


class PieceFactory:
    """Creates pieces, drawing random initial values from one injected source."""

    def __init__(self, random_source: Optional[RandomSource] = None):
        self.random_source = random_source if random_source is not None else SystemRandomSource()

    def create(self, value: Optional[int] = None) -> GamePiece:
        if value is not None:
            return GamePiece(value)
        return GamePiece(random_source=self.random_source)
