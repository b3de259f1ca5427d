import io
import json

import pytest

from tilemerge.config import DEFAULT_CONFIG
from tilemerge.controller import GameStatus, build_controller
from tilemerge.play import auto_loop, main, terminal_loop
from tilemerge.renderers import AsciiRenderer
from tilemerge.stats import analyze_results, format_statistics, play_game, play_games, save_statistics


def small_config(**overrides):
    config = dict(DEFAULT_CONFIG)
    config.update(grid_size=3, win_value=64, search_depth=1, seed=5)
    config.update(overrides)
    return config


def scripted_input(lines):
    pending = list(lines)

    def read_line(prompt):
        if not pending:
            raise EOFError
        return pending.pop(0)
    return read_line


class TestTerminalLoop:
    def test_commands(self, capsys):
        controller = build_controller(small_config(), renderers=[AsciiRenderer(io.StringIO())])
        controller.start_game()
        terminal_loop(controller, read_line=scripted_input(["h", "p", "jump", "q", "a"]))

        out = capsys.readouterr().out
        assert "Hint:" in out
        assert "Played" in out
        assert "Moves: w/a/s/d" in out
        assert controller.move_count == 1

    def test_stops_at_end_of_input(self):
        controller = build_controller(small_config())
        controller.start_game()
        terminal_loop(controller, read_line=scripted_input(["w", "a", "s", "d"]))
        assert controller.move_count <= 4


class TestAutoLoop:
    def test_plays_until_decided(self, capsys):
        controller = build_controller(small_config(grid_size=2, win_value=2048))
        controller.start_game()
        auto_loop(controller)
        assert controller.status is GameStatus.LOST
        assert controller.move_count > 0

    def test_main_auto(self, capsys):
        assert main(["--auto", "--size", "2", "--depth", "1", "--seed", "3"]) == 0
        assert "Finished after" in capsys.readouterr().out

    def test_main_rejects_bad_config(self):
        with pytest.raises(SystemExit):
            main(["--size", "0"])


class TestStats:
    def test_play_game(self):
        result = play_game(small_config(grid_size=2))
        assert set(result) == {"max_tile", "tile_sum", "moves", "won"}
        assert result["max_tile"] >= 2

    def test_max_moves(self):
        result = play_game(small_config(grid_size=4), max_moves=3)
        assert result["moves"] == 3

    def test_play_games_uses_consecutive_seeds(self):
        results = play_games(small_config(grid_size=2), num_games=3)
        assert len(results) == 3
        assert results[0] == play_game(small_config(grid_size=2, seed=5))
        assert results[2] == play_game(small_config(grid_size=2, seed=7))

    def test_analyze_results(self):
        results = [
            {"max_tile": 64, "tile_sum": 200, "moves": 100, "won": True},
            {"max_tile": 32, "tile_sum": 100, "moves": 50, "won": False},
        ]
        stats = analyze_results(results, win_threshold=64)
        assert stats["num_games"] == 2
        assert stats["win_rate"] == 50.0
        assert stats["avg_moves"] == 75.0
        assert stats["avg_tile_sum"] == 150.0
        assert stats["tile_stats"][32] == (2, 100.0)
        assert stats["tile_stats"][64] == (1, 50.0)
        assert min(stats["tile_stats"]) == 4
        assert max(stats["tile_stats"]) == 64

    def test_analyze_requires_results(self):
        with pytest.raises(ValueError):
            analyze_results([])

    def test_format_and_save(self, tmp_path):
        stats = analyze_results([{"max_tile": 16, "tile_sum": 40, "moves": 20, "won": False}], win_threshold=32)
        text = format_statistics(stats)
        assert "Max Tile Achievement Rates" in text
        assert "16" in text

        path = save_statistics(stats, small_config(), str(tmp_path / "out"))
        with open(path) as f:
            saved = json.load(f)
        assert saved["num_games"] == 1
        assert saved["tile_stats"]["16"] == {"count": 1, "percentage": 100.0}
        assert saved["config"]["search_depth"] == 1
