"""
board.py

The square playing field: owns the grid of pieces, the shift/merge
algorithm, occupancy queries and deep cloning.
"""

from typing import Any, List, NamedTuple, Optional, Sequence, Set, Tuple

import numpy as np

from .direction import ShiftDirection, access_order
from .piece import GamePiece
from .randomness import RandomSource

# Type alias for clarity
ValueGrid = np.ndarray[Any, np.dtype[np.int64]]


class Coordinate(NamedTuple):
    row_index: int
    column_index: int


class BoardSnapshot(NamedTuple):
    """Read-only view handed to renderers: size plus a grid of values (None = empty)."""
    size: int
    cells: Tuple[Tuple[Optional[int], ...], ...]


class OutOfBoundsError(IndexError):
    """A coordinate outside the board was passed to a board operation."""


class GameBoard:
    """
    A size x size grid of cells, each holding a GamePiece or None.
    Out-of-range coordinates are a caller bug and raise OutOfBoundsError.
    """

    # --------------------------------------------------------------------- #
    #                               INIT                                    #
    # --------------------------------------------------------------------- #
    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ValueError(f"Board size must be a positive integer, got {size!r}")
        self._size: int = size
        self._grid: np.ndarray = np.full((size, size), None, dtype=object)

    @classmethod
    def from_values(cls, rows: Sequence[Sequence[Optional[int]]]) -> "GameBoard":
        """Build a board from a square value matrix; 0 or None marks an empty cell."""
        size = len(rows)
        board = cls(size)
        for r, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {size}")
            for c, value in enumerate(row):
                if value:
                    board._grid[r, c] = GamePiece(int(value))
        return board

    # ------------------------------------------------------------------ #
    #                         QUERIES                                     #
    # ------------------------------------------------------------------ #
    @property
    def size(self) -> int:
        return self._size

    def is_valid_coordinate(self, coord: Tuple[int, int]) -> bool:
        r, c = coord
        return 0 <= r < self._size and 0 <= c < self._size

    def _check(self, coord: Tuple[int, int]) -> Tuple[int, int]:
        if not self.is_valid_coordinate(coord):
            raise OutOfBoundsError(f"Coordinate {tuple(coord)} outside {self._size}x{self._size} board")
        return coord[0], coord[1]

    def piece_at(self, coord: Tuple[int, int]) -> Optional[GamePiece]:
        return self._grid[self._check(coord)]

    def empty_coordinates(self) -> List[Coordinate]:
        """All empty cells in row-major order."""
        return [Coordinate(r, c)
                for r in range(self._size)
                for c in range(self._size)
                if self._grid[r, c] is None]

    def random_empty_coordinates(self, count: int, random_source: RandomSource) -> List[Coordinate]:
        """
        Sample min(count, empty cells) distinct empty coordinates without
        replacement. Each draw is uniform over the candidates still left.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        candidates = self.empty_coordinates()
        chosen: List[Coordinate] = []
        while len(chosen) < count and candidates:
            index = random_source.uniform_int(0, len(candidates) - 1)
            chosen.append(candidates.pop(index))
        return chosen

    def max_value_piece(self) -> Optional[GamePiece]:
        """Piece with the greatest value; the first one in row-major order on ties."""
        best: Optional[GamePiece] = None
        for piece in self._grid.flat:
            if piece is not None and (best is None or piece.value > best.value):
                best = piece
        return best

    def has_valid_moves(self) -> bool:
        """True if any cell is empty or two axis-adjacent cells hold equal values."""
        grid = self._grid
        last = self._size - 1
        for r in range(self._size):
            for c in range(self._size):
                piece = grid[r, c]
                if piece is None:
                    return True
                if c < last and grid[r, c + 1] is not None and grid[r, c + 1].value == piece.value:
                    return True
                if r < last and grid[r + 1, c] is not None and grid[r + 1, c].value == piece.value:
                    return True
        return False

    def values(self) -> ValueGrid:
        """Value matrix with 0 for empty cells."""
        out = np.zeros((self._size, self._size), dtype=np.int64)
        for (r, c), piece in np.ndenumerate(self._grid):
            if piece is not None:
                out[r, c] = piece.value
        return out

    def snapshot(self) -> BoardSnapshot:
        cells = tuple(
            tuple(None if piece is None else piece.value for piece in row)
            for row in self._grid
        )
        return BoardSnapshot(self._size, cells)

    # ------------------------------------------------------------------ #
    #                         MUTATIONS                                   #
    # ------------------------------------------------------------------ #
    def place(self, piece: GamePiece, coord: Tuple[int, int]) -> None:
        self._grid[self._check(coord)] = piece

    def remove(self, coord: Tuple[int, int]) -> None:
        self._grid[self._check(coord)] = None

    def move(self, from_coord: Tuple[int, int], to_coord: Tuple[int, int]) -> bool:
        """Read, clear, write. Returns False (and does nothing) if the source is empty."""
        self._check(to_coord)
        piece = self.piece_at(from_coord)
        if piece is None:
            return False
        self.remove(from_coord)
        self.place(piece, to_coord)
        return True

    def shift(self, direction: ShiftDirection) -> bool:
        """
        Slide every piece as far as possible toward `direction`, merging
        equal neighbours. Returns True if anything moved or merged.

        Cells are visited nearest-the-target-edge first, so a piece that has
        reached its final cell is never picked up again as a mover. A cell
        that received a merge in this call blocks later movers, which keeps
        every piece to at most one merge per shift.
        """
        grid = self._grid
        size = self._size
        dr, dc = direction.step
        merged_cells: Set[Tuple[int, int]] = set()
        moved = False

        for r, c in access_order(direction, size):
            piece = grid[r, c]
            if piece is None:
                continue

            destination = None
            merge_required = False
            nr, nc = r + dr, c + dc
            while 0 <= nr < size and 0 <= nc < size:
                candidate = grid[nr, nc]
                if candidate is None:
                    destination = (nr, nc)
                elif candidate.value == piece.value and (nr, nc) not in merged_cells:
                    destination = (nr, nc)
                    merge_required = True
                    break
                else:
                    break
                nr, nc = nr + dr, nc + dc

            if destination is None:
                continue

            grid[r, c] = None
            if merge_required:
                grid[destination].upgrade()
                merged_cells.add(destination)
            else:
                grid[destination] = piece
            moved = True

        return moved

    def clone(self) -> "GameBoard":
        """Deep copy: pieces are cloned too, since merges upgrade them in place."""
        new_board = GameBoard.__new__(GameBoard)
        new_board._size = self._size
        new_grid = np.full((self._size, self._size), None, dtype=object)
        for (r, c), piece in np.ndenumerate(self._grid):
            if piece is not None:
                new_grid[r, c] = piece.clone()
        new_board._grid = new_grid
        return new_board

    def __repr__(self):
        return f"GameBoard(size={self._size}, values={self.values().tolist()})"
