"""
Turn sequencing: shift, spawn, win/loss detection and renderer notification.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .agent import GameAgent
from .board import GameBoard
from .config import starting_piece_count as resolve_starting_piece_count
from .direction import ShiftDirection
from .piece import PieceFactory
from .randomness import RandomSource, SeededRandomSource, SystemRandomSource
from .renderers import GameRenderer

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class GameController:
    """
    Owns the live board. The only caller of GameBoard.shift and of piece
    spawning during a game; the agent only ever sees clones.
    """

    def __init__(self, board: GameBoard, piece_factory: PieceFactory, random_source: RandomSource,
                 renderers: Iterable[GameRenderer] = (), win_value: int = 2048,
                 starting_piece_count: int = 2, agent: Optional[GameAgent] = None):
        self._board = board
        self.piece_factory = piece_factory
        self.random_source = random_source
        self.renderers: List[GameRenderer] = list(renderers)
        self.win_value = win_value
        self.starting_piece_count = starting_piece_count
        self.agent = agent

        self._status: Optional[GameStatus] = None
        self._move_count = 0

    # --- Properties ---
    @property
    def board(self) -> GameBoard:
        return self._board

    @property
    def status(self) -> Optional[GameStatus]:
        return self._status

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def in_progress(self) -> bool:
        return self._status is GameStatus.IN_PROGRESS

    # --- Renderer registration ---
    def add_renderer(self, renderer: GameRenderer) -> None:
        if renderer not in self.renderers:
            self.renderers.append(renderer)

    def remove_renderer(self, renderer: GameRenderer) -> None:
        if renderer in self.renderers:
            self.renderers.remove(renderer)

    def _render_board(self) -> None:
        snapshot = self._board.snapshot()
        for renderer in self.renderers:
            renderer.render_board(snapshot)

    def _render_message(self) -> None:
        for renderer in self.renderers:
            renderer.render_message(self._status)

    # --- Game flow ---
    def start_game(self) -> None:
        if self._status is GameStatus.IN_PROGRESS:
            raise RuntimeError("Game already started.")

        self._move_count = 0
        self._place_new_pieces(self.starting_piece_count)
        self._status = GameStatus.IN_PROGRESS
        logger.info(f"Game started on a {self._board.size}x{self._board.size} board, "
                    f"target {self.win_value}")
        self._render_board()

    def restart(self) -> None:
        self._board = GameBoard(self._board.size)
        self._status = None
        self.start_game()

    def _place_new_pieces(self, count: int) -> None:
        for coordinate in self._board.random_empty_coordinates(count, self.random_source):
            self._board.place(self.piece_factory.create(), coordinate)

    def move(self, direction: ShiftDirection) -> bool:
        """
        Apply one player move. Returns False if the game is not running or
        the shift changed nothing; no piece is spawned in that case.
        """
        if not self.in_progress:
            logger.debug(f"Ignoring {direction.value}: game is not in progress")
            return False

        if not self._board.shift(direction):
            return False

        self._move_count += 1
        self._place_new_pieces(1)

        highest = self._board.max_value_piece()
        if highest is not None and highest.value >= self.win_value:
            self._status = GameStatus.WON
        elif not self._board.has_valid_moves():
            self._status = GameStatus.LOST

        self._render_board()

        if self._status is not GameStatus.IN_PROGRESS:
            logger.info(f"Game finished: {self._status.value} after {self._move_count} moves, "
                        f"max tile {highest.value if highest else 0}")
            self._render_message()
        return True

    # --- Agent ---
    def recommend_move(self) -> Optional[ShiftDirection]:
        if self.agent is None:
            return None
        return self.agent.recommend_next_move(self._board.clone())

    def play_recommended_move(self) -> Optional[ShiftDirection]:
        """Apply the agent's recommendation; returns it, or None if nothing was applied."""
        if not self.in_progress:
            return None
        direction = self.recommend_move()
        if direction is None or not self.move(direction):
            return None
        return direction


def build_controller(config: Dict[str, Any], renderers: Iterable[GameRenderer] = ()) -> GameController:
    """Wire board, random source, piece factory and agent from a config dict."""
    if config.get("seed") is not None:
        random_source: RandomSource = SeededRandomSource(config["seed"])
    else:
        random_source = SystemRandomSource()
    piece_factory = PieceFactory(random_source)
    agent = GameAgent(piece_factory, target_value=config["win_value"],
                      search_depth=config["search_depth"], workers=config.get("workers", 1))
    return GameController(
        GameBoard(config["grid_size"]),
        piece_factory,
        random_source,
        renderers=renderers,
        win_value=config["win_value"],
        starting_piece_count=resolve_starting_piece_count(config, random_source),
        agent=agent,
    )
