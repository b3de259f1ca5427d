import pytest

from tilemerge.randomness import SeededRandomSource
from tests.helpers import RecordingRenderer, random_board


@pytest.fixture
def recorder():
    return RecordingRenderer()


@pytest.fixture
def random_boards():
    source = SeededRandomSource(42)
    return [random_board(source, size=4, fill=0.3 + 0.1 * (i % 6)) for i in range(40)]
