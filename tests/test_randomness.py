import pytest

from tilemerge.randomness import ScriptedRandomSource, SeededRandomSource, SystemRandomSource


class TestRandomSources:
    @pytest.mark.parametrize("source_cls", [SystemRandomSource, SeededRandomSource])
    def test_ranges(self, source_cls):
        source = source_cls()
        for _ in range(200):
            assert 3 <= source.uniform_int(3, 7) <= 7
            assert 0.0 <= source.uniform_unit() < 1.0
        assert source.uniform_int(5, 5) == 5

    @pytest.mark.parametrize("source", [SystemRandomSource(), SeededRandomSource(1), ScriptedRandomSource(ints=[1])])
    def test_inverted_range_rejected(self, source):
        with pytest.raises(ValueError):
            source.uniform_int(2, 1)

    def test_seeded_is_reproducible(self):
        a, b = SeededRandomSource(99), SeededRandomSource(99)
        assert [a.uniform_int(0, 100) for _ in range(20)] == [b.uniform_int(0, 100) for _ in range(20)]
        assert a.uniform_unit() == b.uniform_unit()

    def test_scripted_replays_in_order(self):
        source = ScriptedRandomSource(ints=[2, 0], units=[0.25])
        assert source.uniform_int(0, 3) == 2
        assert source.uniform_unit() == 0.25
        assert source.uniform_int(0, 0) == 0
        assert source.remaining == 0

    def test_scripted_exhaustion_is_an_error(self):
        source = ScriptedRandomSource()
        with pytest.raises(RuntimeError):
            source.uniform_int(0, 1)
        with pytest.raises(RuntimeError):
            source.uniform_unit()

    def test_scripted_draw_outside_range_is_an_error(self):
        with pytest.raises(ValueError):
            ScriptedRandomSource(ints=[5]).uniform_int(0, 3)
