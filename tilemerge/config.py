import argparse
import os
from typing import Any, Dict, Mapping, Optional, Sequence

from .piece import is_piece_value
from .randomness import RandomSource, SystemRandomSource

PROFILES = ("development", "production")

DEFAULT_CONFIG: Dict[str, Any] = {
    "grid_size": 4,
    "win_value": 2048,
    "search_depth": 3,
    "profile": "development",
    "starting_piece_count": None,   # None: derived from the profile
    "workers": 1,
    "seed": None,
}

# environment variable -> (config key, parser)
ENV_VARS = {
    "TILEMERGE_GRID_SIZE": ("grid_size", int),
    "TILEMERGE_WIN_VALUE": ("win_value", int),
    "TILEMERGE_SEARCH_DEPTH": ("search_depth", int),
    "TILEMERGE_PROFILE": ("profile", str),
}


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Defaults overlaid with TILEMERGE_* environment variables."""
    if environ is None:
        environ = os.environ
    config = dict(DEFAULT_CONFIG)
    for name, (key, parse) in ENV_VARS.items():
        raw = environ.get(name)
        if raw is None or raw == "":
            continue
        try:
            config[key] = parse(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {name}: {raw!r}") from e
    return config


def starting_piece_count(config: Dict[str, Any], random_source: Optional[RandomSource] = None) -> int:
    """
    Explicit count if configured; otherwise 2 in development and a random
    draw in [2, 6] in production.
    """
    if config.get("starting_piece_count") is not None:
        return config["starting_piece_count"]
    if config["profile"] == "production":
        if random_source is None:
            random_source = SystemRandomSource()
        return random_source.uniform_int(2, 6)
    return 2


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    if config["grid_size"] < 1:
        raise ValueError(f"grid_size must be at least 1, got {config['grid_size']}")
    if not is_piece_value(config["win_value"]) or config["win_value"] < 4:
        raise ValueError(f"win_value must be a power of two >= 4, got {config['win_value']}")
    if config["search_depth"] < 0:
        raise ValueError(f"search_depth must be non-negative, got {config['search_depth']}")
    if config["workers"] < 1:
        raise ValueError(f"workers must be at least 1, got {config['workers']}")
    if config["profile"] not in PROFILES:
        raise ValueError(f"profile must be one of {PROFILES}, got {config['profile']!r}")
    count = config.get("starting_piece_count")
    if count is not None and count < 0:
        raise ValueError(f"starting_piece_count must be non-negative, got {count}")
    return config


def add_game_arguments(parser: argparse.ArgumentParser, defaults: Dict[str, Any]) -> None:
    """Flags shared by every entry point."""
    parser.add_argument("--size", type=int, default=defaults["grid_size"], help="Board size (rows = columns)")
    parser.add_argument("--win-value", type=int, default=defaults["win_value"], help="Tile value that wins the game")
    parser.add_argument("--depth", type=int, default=defaults["search_depth"], help="Expectimax search depth")
    parser.add_argument("--profile", type=str, choices=PROFILES, default=defaults["profile"],
                        help="Configuration profile (production randomizes the starting piece count)")
    parser.add_argument("--starting-pieces", type=int, default=defaults["starting_piece_count"],
                        help="Pieces placed at the start (default: from profile)")
    parser.add_argument("--workers", type=int, default=defaults["workers"],
                        help="Processes used to score the root moves of each search (pool kept for the whole game)")
    parser.add_argument("--seed", type=int, default=defaults["seed"], help="Seed for reproducible spawns")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")


def config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    config = {
        "grid_size": args.size,
        "win_value": args.win_value,
        "search_depth": args.depth,
        "profile": args.profile,
        "starting_piece_count": args.starting_pieces,
        "workers": args.workers,
        "seed": args.seed,
        "log_level": args.log_level,
    }
    return validate_config(config)


def parse_args(argv: Optional[Sequence[str]] = None,
               environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    parser = argparse.ArgumentParser(description="Sliding-tile merge puzzle")
    add_game_arguments(parser, load_config(environ))
    args = parser.parse_args(argv)
    return config_from_args(args)
