from __future__ import annotations

import pytest

# "HELLO WORLD" as a 1-M symbol: padded data codewords and their 10 EC codewords
HELLO_WORLD_1M_DATA = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
HELLO_WORLD_1M_EC = [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


@pytest.fixture
def hello_world_vector() -> tuple[list[int], list[int]]:
    return HELLO_WORLD_1M_DATA, HELLO_WORLD_1M_EC


@pytest.fixture
def structural_dark_count() -> int:
    """
    Dark cells contributed by finder + timing patterns on a 21x21 grid:
    3 finders * (24 border + 9 core) + 3 dark timing cells per line * 2 lines.
    """
    return 3 * (24 + 9) + 2 * 3
