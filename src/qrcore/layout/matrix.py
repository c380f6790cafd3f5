from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional, Tuple

import numpy as np

from qrcore.protocol.errors import CapacityOverflowError
from qrcore.utils.bitops import BitsLike, as_bit_array

logger = logging.getLogger(__name__)

# Version 1 symbol
SIZE = 21
FINDER_SIZE = 7
TIMING_INDEX = 6

DARK = 1
LIGHT = 0

OVERFLOW_POLICIES = ("truncate", "raise")


@dataclass(frozen=True)
class Config:
    """
    on_overflow: what to do with bits that do not fit the data cells.
      "truncate" -> drop them silently (default)
      "raise"    -> CapacityOverflowError
    """
    on_overflow: str = "truncate"


def finder_origins() -> List[Tuple[int, int]]:
    """(row, col) of the top-left cell of each finder pattern."""
    far = SIZE - FINDER_SIZE
    return [(0, 0), (0, far), (far, 0)]


def _finder_pattern() -> np.ndarray:
    y, x = np.indices((FINDER_SIZE, FINDER_SIZE))
    last = FINDER_SIZE - 1
    border = (x == 0) | (y == 0) | (x == last) | (y == last)
    inner = (x >= 2) & (x <= 4) & (y >= 2) & (y <= 4)
    return np.where(border | inner, DARK, LIGHT).astype(np.uint8)


def _timing_range() -> range:
    return range(FINDER_SIZE + 1, SIZE - FINDER_SIZE - 1)


@lru_cache(maxsize=None)
def _function_mask() -> np.ndarray:
    mask = np.zeros((SIZE, SIZE), dtype=bool)
    for r, c in finder_origins():
        mask[r:r + FINDER_SIZE, c:c + FINDER_SIZE] = True
    for i in _timing_range():
        mask[TIMING_INDEX, i] = True
        mask[i, TIMING_INDEX] = True
    mask.setflags(write=False)
    return mask


def function_mask() -> np.ndarray:
    """Boolean grid, True on finder and timing cells."""
    return _function_mask().copy()


@lru_cache(maxsize=None)
def _data_positions() -> Tuple[Tuple[int, int], ...]:
    mask = _function_mask()
    out = []
    for col in range(SIZE - 1, 0, -2):
        if col == TIMING_INDEX:
            continue
        for row in range(SIZE):
            if not mask[row, col]:
                out.append((row, col))
    return tuple(out)


def data_positions() -> List[Tuple[int, int]]:
    """
    Data cells in fill order: columns SIZE-1, SIZE-3, ... down to 1 (column 0 is
    never a start), the timing column skipped, rows top to bottom.
    """
    return list(_data_positions())


def capacity() -> int:
    return len(_data_positions())


def _place_finder_patterns(grid: np.ndarray) -> None:
    pattern = _finder_pattern()
    for r, c in finder_origins():
        grid[r:r + FINDER_SIZE, c:c + FINDER_SIZE] = pattern


def _place_timing_patterns(grid: np.ndarray) -> None:
    for i in _timing_range():
        v = DARK if i % 2 == 0 else LIGHT
        grid[TIMING_INDEX, i] = v
        grid[i, TIMING_INDEX] = v


def _place_data(grid: np.ndarray, bits: np.ndarray) -> int:
    positions = _data_positions()
    n = min(bits.size, len(positions))
    for (row, col), bit in zip(positions[:n], bits[:n]):
        grid[row, col] = DARK if bit else LIGHT
    return n


def build(bits: BitsLike, *, cfg: Optional[Config] = None) -> np.ndarray:
    """
    Lay a bitstream out on a fresh SIZE x SIZE grid (1 = dark, 0 = light).

    Passes run in strict order: finder patterns, timing patterns, data. Data never
    lands on a finder or timing cell. The returned array is read-only.
    """
    cfg = cfg if cfg is not None else Config()
    policy = _get_on_overflow(cfg)
    arr = as_bit_array(bits)

    cap = capacity()
    if arr.size > cap:
        if policy == "raise":
            raise CapacityOverflowError(arr.size, cap)
        logger.debug("discarding %d bits beyond matrix capacity of %d", arr.size - cap, cap)

    grid = np.full((SIZE, SIZE), LIGHT, dtype=np.uint8)
    _place_finder_patterns(grid)
    _place_timing_patterns(grid)
    _place_data(grid, arr)

    grid.setflags(write=False)
    return grid


def _get_on_overflow(cfg: Any) -> str:
    policy = getattr(cfg, "on_overflow", None)
    if policy is None:
        raise AttributeError("cfg missing required attribute: on_overflow")
    if not isinstance(policy, str):
        raise TypeError("cfg.on_overflow must be str")
    if policy not in OVERFLOW_POLICIES:
        raise ValueError(f"cfg.on_overflow must be one of {OVERFLOW_POLICIES}")
    return policy
