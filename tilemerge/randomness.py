"""
Injectable random sources.

Board sampling and piece spawning never touch the global `random` state;
they draw from one of these objects so games can be replayed exactly.
"""

import random
from typing import Iterable, List, Optional


class RandomSource:
    """Uniform integer and unit-interval draws."""

    def uniform_int(self, minimum: int, maximum: int) -> int:
        """Integer in [minimum, maximum], both ends inclusive."""
        raise NotImplementedError

    def uniform_unit(self) -> float:
        """Float in [0, 1)."""
        raise NotImplementedError


def _check_range(minimum: int, maximum: int) -> None:
    if minimum > maximum:
        raise ValueError(f"Minimum value {minimum} must not exceed maximum value {maximum}.")


class _StdlibRandomSource(RandomSource):
    def __init__(self, rng: random.Random):
        self._rng = rng

    def uniform_int(self, minimum: int, maximum: int) -> int:
        _check_range(minimum, maximum)
        return self._rng.randint(minimum, maximum)

    def uniform_unit(self) -> float:
        return self._rng.random()


class SystemRandomSource(_StdlibRandomSource):
    """OS entropy (random.SystemRandom). Not reproducible."""

    def __init__(self):
        super().__init__(random.SystemRandom())


class SeededRandomSource(_StdlibRandomSource):
    """Mersenne Twister with a fixed seed, for reproducible games."""

    def __init__(self, seed: Optional[int] = None):
        super().__init__(random.Random(seed))
        self.seed = seed


class ScriptedRandomSource(RandomSource):
    """
    Replays predetermined draws. `ints` are consumed by uniform_int and
    `units` by uniform_unit; running out of either is an error so a test
    never silently depends on draws it did not script.
    """

    def __init__(self, ints: Iterable[int] = (), units: Iterable[float] = ()):
        self._ints: List[int] = list(ints)
        self._units: List[float] = list(units)

    def uniform_int(self, minimum: int, maximum: int) -> int:
        _check_range(minimum, maximum)
        if not self._ints:
            raise RuntimeError("ScriptedRandomSource ran out of integer draws")
        value = self._ints.pop(0)
        if not minimum <= value <= maximum:
            raise ValueError(f"Scripted draw {value} outside [{minimum}, {maximum}]")
        return value

    def uniform_unit(self) -> float:
        if not self._units:
            raise RuntimeError("ScriptedRandomSource ran out of unit draws")
        return self._units.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._ints) + len(self._units)
