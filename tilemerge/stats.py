#!/usr/bin/env python3
"""
Play multiple games with the expectimax agent and generate statistics.
Reports max-tile achievement rates, win rate, average moves and the average
tile sum of the final boards.

Example usage:
    tilemerge-stats --games 20 --depth 2 --seed 1 --save-stats
"""

import argparse
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from tabulate import tabulate
from tqdm import tqdm

from .config import add_game_arguments, config_from_args, load_config
from .controller import GameStatus, build_controller
from .play import setup_logging

logger = logging.getLogger(__name__)


def play_game(config: Dict[str, Any], max_moves: Optional[int] = None) -> Dict[str, Any]:
    """Play a single agent game and return its statistics."""
    controller = build_controller(config)
    with controller.agent:
        controller.start_game()
        while controller.in_progress:
            if max_moves is not None and controller.move_count >= max_moves:
                break
            if controller.play_recommended_move() is None:
                break

    values = controller.board.values()
    return {
        'max_tile': int(values.max()),
        'tile_sum': int(values.sum()),
        'moves': controller.move_count,
        'won': controller.status is GameStatus.WON,
    }


def play_games(config: Dict[str, Any], num_games: int = 10, max_moves: Optional[int] = None) -> List[Dict[str, Any]]:
    """Play `num_games` games; game i uses seed + i when a seed is configured."""
    results = []
    for i in tqdm(range(num_games), desc="games", disable=num_games <= 1):
        game_config = dict(config)
        if config.get("seed") is not None:
            game_config["seed"] = config["seed"] + i
        result = play_game(game_config, max_moves=max_moves)
        logger.info(f"Game {i} finished. Max tile: {result['max_tile']}, moves: {result['moves']}")
        results.append(result)
    return results


def analyze_results(results: List[Dict[str, Any]], win_threshold: int = 2048) -> Dict[str, Any]:
    """Aggregate per-game results into summary statistics."""
    if not results:
        raise ValueError("No results to analyze")

    max_tiles = [result['max_tile'] for result in results]

    # Rates for every power of two from 4 up to at least the win threshold
    max_power = max(int(np.log2(win_threshold)), int(np.ceil(np.log2(max(max_tiles + [2])))))
    tile_stats = {}
    for power in range(2, max_power + 1):
        tile_value = 2 ** power
        count = sum(1 for tile in max_tiles if tile >= tile_value)
        tile_stats[tile_value] = (count, count / len(results) * 100)

    wins = sum(1 for tile in max_tiles if tile >= win_threshold)
    return {
        'tile_stats': tile_stats,
        'avg_tile_sum': float(np.mean([result['tile_sum'] for result in results])),
        'avg_moves': float(np.mean([result['moves'] for result in results])),
        'num_games': len(results),
        'win_rate': wins / len(results) * 100,
        'win_threshold': win_threshold,
    }


def format_statistics(stats: Dict[str, Any]) -> str:
    table_data = [
        [f"{tile_value}", f"{count}/{stats['num_games']}", f"{percentage:.1f}%"]
        for tile_value, (count, percentage) in sorted(stats['tile_stats'].items())
    ]
    lines = [
        f"Statistics for {stats['num_games']} games:",
        f"Average tile sum: {stats['avg_tile_sum']:.1f}",
        f"Average moves: {stats['avg_moves']:.1f}",
        f"Win rate (>= {stats['win_threshold']}): {stats['win_rate']:.1f}%",
        "",
        "Max Tile Achievement Rates:",
        tabulate(table_data, headers=["Tile", "Count", "Percentage"], tablefmt="grid"),
    ]
    return "\n".join(lines)


def save_statistics(stats: Dict[str, Any], config: Dict[str, Any], output_dir: str) -> str:
    """Save statistics to a timestamped JSON file and return its path."""
    os.makedirs(output_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"stats_depth{config['search_depth']}_{stats['num_games']}games_{timestamp}.json"
    filepath = os.path.join(output_dir, filename)

    json_stats = {key: stats[key] for key in ('num_games', 'avg_tile_sum', 'avg_moves', 'win_rate', 'win_threshold')}
    json_stats['tile_stats'] = {
        str(tile_value): {'count': count, 'percentage': percentage}
        for tile_value, (count, percentage) in stats['tile_stats'].items()
    }
    json_stats['config'] = {
        'grid_size': config['grid_size'],
        'search_depth': config['search_depth'],
        'seed': config.get('seed'),
        'date': timestamp,
    }

    with open(filepath, 'w') as f:
        json.dump(json_stats, f, indent=2)
    return filepath


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play many agent games and analyze max tile statistics")
    add_game_arguments(parser, load_config())
    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument("--max-moves", type=int, default=None, help="Stop each game after this many moves")
    parser.add_argument("--save-stats", action="store_true", help="Save statistics to a JSON file")
    parser.add_argument("--output-dir", type=str, default="stats", help="Directory to save statistics")
    args = parser.parse_args(argv)

    if args.games < 1:
        parser.error("--games must be at least 1")
    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))
    setup_logging(config["log_level"])

    print(f"Playing {args.games} games at search depth {config['search_depth']}...")
    results = play_games(config, num_games=args.games, max_moves=args.max_moves)
    stats = analyze_results(results, win_threshold=config["win_value"])
    print()
    print(format_statistics(stats))

    if args.save_stats:
        filepath = save_statistics(stats, config, args.output_dir)
        print(f"\nStatistics saved to {filepath}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
