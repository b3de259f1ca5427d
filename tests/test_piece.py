import pytest

from tilemerge.piece import GamePiece, PieceFactory, is_piece_value
from tilemerge.randomness import ScriptedRandomSource, SeededRandomSource


class TestGamePiece:
    def test_explicit_value(self):
        assert GamePiece(8).value == 8

    @pytest.mark.parametrize("value", [0, 1, 3, 6, -2, 2.0])
    def test_invalid_values_rejected(self, value):
        with pytest.raises(ValueError):
            GamePiece(value)

    @pytest.mark.parametrize("draw, expected", [(0.0, 2), (0.5, 2), (0.899, 2), (0.9, 4), (0.99, 4)])
    def test_random_value_is_weighted(self, draw, expected):
        piece = GamePiece(random_source=ScriptedRandomSource(units=[draw]))
        assert piece.value == expected

    def test_upgrade_doubles_in_place(self):
        piece = GamePiece(4)
        piece.upgrade()
        assert piece.value == 8
        piece.upgrade()
        assert piece.value == 16

    def test_clone_is_independent(self):
        piece = GamePiece(2)
        copy = piece.clone()
        copy.upgrade()
        assert piece.value == 2
        assert copy.value == 4

    def test_value_is_read_only(self):
        piece = GamePiece(2)
        with pytest.raises(AttributeError):
            piece.value = 4

    def test_is_piece_value(self):
        assert is_piece_value(2)
        assert is_piece_value(4096)
        assert not is_piece_value(1)
        assert not is_piece_value(12)
        assert not is_piece_value(True)


class TestPieceFactory:
    def test_explicit_value_uses_no_draws(self):
        source = ScriptedRandomSource()
        factory = PieceFactory(source)
        assert factory.create(32).value == 32

    def test_random_values_come_from_injected_source(self):
        source = ScriptedRandomSource(units=[0.1, 0.95, 0.3])
        factory = PieceFactory(source)
        assert [factory.create().value for _ in range(3)] == [2, 4, 2]
        assert source.remaining == 0

    def test_distribution_is_roughly_ninety_ten(self):
        factory = PieceFactory(SeededRandomSource(0))
        values = [factory.create().value for _ in range(5000)]
        fours = values.count(4) / len(values)
        assert set(values) == {2, 4}
        assert 0.07 < fours < 0.13

    def test_default_source(self):
        assert PieceFactory().create().value in (2, 4)
