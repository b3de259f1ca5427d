# Sliding-tile merge puzzle with an expectimax move recommender
from .direction import ShiftDirection, access_order
from .randomness import RandomSource, SystemRandomSource, SeededRandomSource, ScriptedRandomSource
from .piece import GamePiece, PieceFactory
from .board import GameBoard, Coordinate, BoardSnapshot, OutOfBoundsError
from .agent import GameAgent, HeuristicWeights, DEFAULT_WEIGHTS, evaluate_board
from .renderers import GameRenderer, AsciiRenderer
from .controller import GameController, GameStatus, build_controller

__version__ = "0.1.0"

__all__ = [
    "ShiftDirection",
    "access_order",

    "RandomSource",
    "SystemRandomSource",
    "SeededRandomSource",
    "ScriptedRandomSource",

    "GamePiece",
    "PieceFactory",

    "GameBoard",
    "Coordinate",
    "BoardSnapshot",
    "OutOfBoundsError",

    "GameAgent",
    "HeuristicWeights",
    "DEFAULT_WEIGHTS",
    "evaluate_board",

    "GameRenderer",
    "AsciiRenderer",

    "GameController",
    "GameStatus",
    "build_controller",
]
