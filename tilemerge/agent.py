"""
agent.py  -  move recommendation by depth-limited expectimax.

Max nodes are the player's turn (pick the best direction), chance nodes are
the random spawn (2 with p=0.9, 4 with p=0.1 on any empty cell, uniformly).
Every node works on its own clone, so the board passed in is never mutated
and sibling branches never see each other's state.
"""

import logging
import math
import multiprocessing
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from .board import GameBoard
from .direction import ShiftDirection
from .piece import PieceFactory

logger = logging.getLogger(__name__)

SPAWN_OUTCOMES: Tuple[Tuple[int, float], ...] = ((2, 0.9), (4, 0.1))


class HeuristicWeights(NamedTuple):
    empty_cells: float = 350.0
    smoothness: float = 3.0
    monotonicity: float = 10.0
    corner_bonus: float = 300.0
    max_value: float = 1.0


DEFAULT_WEIGHTS = HeuristicWeights()


# -----------------------------------------------------------------
# static evaluation
# -----------------------------------------------------------------
def log2_values(values: np.ndarray) -> np.ndarray:
    """Elementwise log2 with log2(0) defined as 0."""
    out = np.zeros(values.shape, dtype=np.float64)
    occupied = values > 0
    out[occupied] = np.log2(values[occupied])
    return out


def smoothness(values: np.ndarray) -> float:
    """
    Minus the sum of |log2 difference| between each piece and its right and
    down neighbours. Pairs with an empty cell are skipped. Always <= 0.
    """
    logs = log2_values(values)
    occupied = values > 0

    horizontal = occupied[:, :-1] & occupied[:, 1:]
    vertical = occupied[:-1, :] & occupied[1:, :]
    total = np.abs(logs[:, :-1] - logs[:, 1:])[horizontal].sum()
    total += np.abs(logs[:-1, :] - logs[1:, :])[vertical].sum()
    return -float(total)


def _line_monotonicity(logs: np.ndarray, occupied: np.ndarray, axis: int) -> float:
    # Steps between directly adjacent cells along `axis`, both occupied.
    if axis == 1:
        diffs = logs[:, 1:] - logs[:, :-1]
        both = occupied[:, 1:] & occupied[:, :-1]
    else:
        diffs = logs[1:, :] - logs[:-1, :]
        both = occupied[1:, :] & occupied[:-1, :]
    increasing = np.where(both & (diffs > 0), diffs, 0.0).sum(axis=axis)
    decreasing = np.where(both & (diffs < 0), -diffs, 0.0).sum(axis=axis)
    return float(np.maximum(increasing, decreasing).sum())


def monotonicity(values: np.ndarray) -> float:
    """Sum over rows and columns of max(increasing steps, decreasing steps) in log2 space."""
    logs = log2_values(values)
    occupied = values > 0
    return _line_monotonicity(logs, occupied, axis=1) + _line_monotonicity(logs, occupied, axis=0)


def corner_bonus(values: np.ndarray) -> int:
    highest = values.max()
    if highest <= 0:
        return 0
    corners = (values[0, 0], values[0, -1], values[-1, 0], values[-1, -1])
    return int(any(corner == highest for corner in corners))


def evaluate_board(board: GameBoard, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> float:
    """Weighted linear combination of the heuristic features. No lookahead."""
    values = board.values()
    empty = int(np.count_nonzero(values == 0))
    highest = int(values.max())
    return (weights.empty_cells * empty
            + weights.smoothness * smoothness(values)
            + weights.monotonicity * monotonicity(values)
            + weights.corner_bonus * corner_bonus(values)
            + weights.max_value * highest)


# -----------------------------------------------------------------
# search
# -----------------------------------------------------------------
class GameAgent:
    """
    Recommends the next move for a board.

    `search_depth` is shared by both node kinds: every max->chance and
    chance->max transition consumes one unit. With `workers > 1` the root
    directions are scored in a process pool.
    """

    DIRECTIONS: List[ShiftDirection] = list(ShiftDirection)

    def __init__(self, piece_factory: Optional[PieceFactory] = None, target_value: int = 2048,
                 search_depth: int = 3, weights: HeuristicWeights = DEFAULT_WEIGHTS, workers: int = 1):
        if search_depth < 0:
            raise ValueError(f"search_depth must be non-negative, got {search_depth}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.piece_factory = piece_factory if piece_factory is not None else PieceFactory()
        self.target_value = target_value
        self.search_depth = search_depth
        self.weights = weights
        self.workers = workers
        self.last_search_nodes = 0
        self._nodes = 0
        self._pool = None

    def recommend_next_move(self, board: GameBoard) -> Optional[ShiftDirection]:
        """
        Best direction for `board`, or None if no direction changes it.
        Ties go to the earliest direction in DIRECTIONS.
        """
        self._nodes = 0
        candidates = []
        for direction in self.DIRECTIONS:
            board_clone = board.clone()
            if board_clone.shift(direction):
                candidates.append((direction, board_clone))

        if not candidates:
            self.last_search_nodes = 0
            logger.debug("No direction changes the board")
            return None

        if self.workers > 1 and len(candidates) > 1:
            scores = self._score_in_pool(candidates)
        else:
            scores = [self._expectimax_node(b, self.search_depth, False) for _, b in candidates]

        recommended = None
        best_value = -math.inf
        for (direction, _), value in zip(candidates, scores):
            if value > best_value:
                best_value = value
                recommended = direction

        self.last_search_nodes = self._nodes
        logger.debug(f"Recommended {recommended.value} (value={best_value:.1f}, nodes={self._nodes})")
        return recommended

    def chance_value(self, board: GameBoard, depth: Optional[int] = None) -> float:
        """
        Expected value of `board` right before a random spawn, searched to
        `depth` (search_depth by default). This is how each root move is scored.
        """
        self._nodes = 0
        return self._expectimax_node(board, self.search_depth if depth is None else depth, False)

    def evaluate(self, board: GameBoard) -> float:
        self._nodes += 1
        return evaluate_board(board, self.weights)

    def _is_terminal(self, board: GameBoard, depth: int) -> bool:
        if depth == 0 or not board.has_valid_moves():
            return True
        highest = board.max_value_piece()
        return highest is not None and highest.value == self.target_value

    def _expectimax_node(self, board: GameBoard, depth: int, is_player_turn: bool) -> float:
        if self._is_terminal(board, depth):
            return self.evaluate(board)
        self._nodes += 1

        if is_player_turn:
            best = -math.inf
            for direction in self.DIRECTIONS:
                board_clone = board.clone()
                if not board_clone.shift(direction):
                    continue
                value = self._expectimax_node(board_clone, depth - 1, False)
                if value > best:
                    best = value
            if best == -math.inf:
                return self.evaluate(board)
            return best

        empty_coordinates = board.empty_coordinates()
        if not empty_coordinates:
            return self.evaluate(board)

        expected = 0.0
        for coord in empty_coordinates:
            for value, probability in SPAWN_OUTCOMES:
                spawned = board.clone()
                spawned.place(self.piece_factory.create(value), coord)
                expected += (probability / len(empty_coordinates)) * \
                    self._expectimax_node(spawned, depth - 1, True)
        return expected

    def _score_in_pool(self, candidates: List[Tuple[ShiftDirection, GameBoard]]) -> List[float]:
        jobs = [(b, self.search_depth, self.target_value, self.weights) for _, b in candidates]
        if self._pool is None:
            processes = min(self.workers, len(self.DIRECTIONS))
            self._pool = multiprocessing.get_context('spawn').Pool(processes)
            logger.debug(f"Started search pool with {processes} processes")
        results = self._pool.starmap(_score_root_child, jobs)
        self._nodes += sum(nodes for _, nodes in results)
        return [value for value, _ in results]

    def close(self) -> None:
        """Shut down the worker pool, if one was started. The agent stays usable."""
        if self._pool is not None:
            self._pool.close()
            self._pool.join()
            self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _score_root_child(board: GameBoard, depth: int, target_value: int,
                      weights: HeuristicWeights) -> Tuple[float, int]:
    """Pool worker: score one root child as a chance node, return (value, nodes visited)."""
    agent = GameAgent(target_value=target_value, search_depth=depth, weights=weights)
    value = agent.chance_value(board)
    return value, agent._nodes
