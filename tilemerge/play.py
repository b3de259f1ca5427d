#!/usr/bin/env python3
"""
Play the puzzle in the terminal, in a pygame window, or let the agent play.

Example usage:
    tilemerge-play                      # terminal, w/a/s/d + h (hint) + p (play hint)
    tilemerge-play --gui                # pygame window
    tilemerge-play --auto --seed 7      # agent plays a reproducible game
"""

import argparse
import logging
import sys
import time
from typing import Any, Dict, Optional, Sequence

from .config import add_game_arguments, config_from_args, load_config
from .controller import GameController, build_controller
from .direction import ShiftDirection
from .renderers import AsciiRenderer

logger = logging.getLogger(__name__)

HELP_TEXT = "Moves: w/a/s/d   h: hint   p: play hint   q: quit"


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def terminal_loop(controller: GameController, read_line=input) -> None:
    """Read commands until the game ends or the player quits."""
    print(HELP_TEXT)
    while controller.in_progress:
        try:
            command = read_line("> ").strip().lower()
        except EOFError:
            break

        if command in ("q", "quit"):
            break
        if command == "h":
            hint = controller.recommend_move()
            print(f"Hint: {hint.value if hint else 'no move changes the board'}")
            continue
        if command == "p":
            played = controller.play_recommended_move()
            if played is None:
                print("No move to play.")
            else:
                print(f"Played {played.value}")
            continue

        try:
            direction = ShiftDirection.from_name(command)
        except ValueError:
            print(HELP_TEXT)
            continue
        if not controller.move(direction):
            print("That move changes nothing.")


def auto_loop(controller: GameController, delay: float = 0.0) -> None:
    """Let the agent play until the game is decided or it has no move."""
    while controller.in_progress:
        direction = controller.play_recommended_move()
        if direction is None:
            break
        print(f"\nMove {controller.move_count}: {direction.value}")
        if delay:
            time.sleep(delay)


def run(config: Dict[str, Any], gui: bool = False, auto: bool = False, delay: float = 0.0) -> GameController:
    if gui:
        from .interface import PygameInterface

        controller = build_controller(config)
        with controller.agent:
            interface = PygameInterface(controller)
            controller.start_game()
            interface.run()
        return controller

    controller = build_controller(config, renderers=[AsciiRenderer()])
    with controller.agent:
        controller.start_game()
        if auto:
            auto_loop(controller, delay)
        else:
            terminal_loop(controller)

    highest = controller.board.max_value_piece()
    print(f"\nFinished after {controller.move_count} moves. Max tile: {highest.value if highest else 0}")
    return controller


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Sliding-tile merge puzzle with an expectimax agent")
    add_game_arguments(parser, load_config())
    parser.add_argument("--gui", action="store_true", help="Open a pygame window")
    parser.add_argument("--auto", action="store_true", help="Let the agent play the whole game")
    parser.add_argument("--delay", type=float, default=0.0, help="Seconds between auto-play moves")
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))
    setup_logging(config["log_level"])
    logger.info(f"Configuration: {config}")

    try:
        run(config, gui=args.gui, auto=args.auto, delay=args.delay)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
