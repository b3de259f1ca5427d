import sys
from typing import TextIO

from .board import BoardSnapshot


class GameRenderer:
    """
    Observer of a game. The controller calls render_board after every
    change and render_message once when the game ends.
    """

    def render_board(self, snapshot: BoardSnapshot) -> None:
        raise NotImplementedError

    def render_message(self, status) -> None:
        raise NotImplementedError


def format_snapshot(snapshot: BoardSnapshot, cell_width: int = 6) -> str:
    """ASCII grid for a snapshot, empty cells shown as '.'."""
    sep = "+" + ("-" * cell_width + "+") * snapshot.size
    lines = [sep]
    for row in snapshot.cells:
        cells = ("." if value is None else str(value) for value in row)
        lines.append("|" + "|".join(cell.center(cell_width) for cell in cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


class AsciiRenderer(GameRenderer):
    """Prints the board to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO = None, cell_width: int = 6):
        self.stream = stream if stream is not None else sys.stdout
        self.cell_width = cell_width
        self.boards_rendered = 0

    def render_board(self, snapshot: BoardSnapshot) -> None:
        self.boards_rendered += 1
        print(format_snapshot(snapshot, self.cell_width), file=self.stream)

    def render_message(self, status) -> None:
        text = "You win!" if status.name == "WON" else "Game over!"
        print(f"\n{text}", file=self.stream)
