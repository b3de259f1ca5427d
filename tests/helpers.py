from tilemerge.board import GameBoard
from tilemerge.piece import GamePiece
from tilemerge.renderers import GameRenderer


class RecordingRenderer(GameRenderer):
    def __init__(self):
        self.snapshots = []
        self.messages = []

    def render_board(self, snapshot):
        self.snapshots.append(snapshot)

    def render_message(self, status):
        self.messages.append(status)


def row_values(board, r):
    return [None if p is None else p.value for p in (board.piece_at((r, c)) for c in range(board.size))]


def column_values(board, c):
    return [None if p is None else p.value for p in (board.piece_at((r, c)) for r in range(board.size))]


def random_board(source, size=4, fill=0.6):
    """Board with roughly `fill` of its cells holding values 2..64."""
    board = GameBoard(size)
    for r in range(size):
        for c in range(size):
            if source.uniform_unit() < fill:
                board.place(GamePiece(2 ** source.uniform_int(1, 6)), (r, c))
    return board
