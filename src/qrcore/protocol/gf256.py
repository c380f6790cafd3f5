from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from qrcore.protocol.errors import FieldInitializationError

logger = logging.getLogger(__name__)

# GF(256) with primitive polynomial 0x11D (x^8 + x^4 + x^3 + x^2 + 1), generator alpha = 2
PRIMITIVE_POLY = 0x11D
FIELD_ORDER = 255


@dataclass(frozen=True)
class GFTables:
    """
    exp: 512 entries, exp[i] = alpha^(i mod 255). Sized so that log[a] + log[b]
         (at most 508) indexes it directly.
    log: 256 entries, log[v] = i such that exp[i] == v. log[0] is unused.
    """
    exp: Tuple[int, ...]
    log: Tuple[int, ...]


_TABLES: Optional[GFTables] = None
_TABLES_LOCK = threading.Lock()


def _build_tables() -> GFTables:
    exp = [0] * 512
    log = [0] * 256

    x = 1
    for i in range(FIELD_ORDER):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLY
    for i in range(FIELD_ORDER, 512):
        exp[i] = exp[i - FIELD_ORDER]

    for v in range(1, 256):
        if exp[log[v]] != v:
            raise FieldInitializationError(f"exp[log[{v}]] != {v}")

    return GFTables(exp=tuple(exp), log=tuple(log))


def get_tables() -> GFTables:
    """
    Return the process-wide GF(256) tables, building them on first use.
    Concurrent first callers block on the lock; exactly one build happens.
    """
    global _TABLES
    tables = _TABLES
    if tables is not None:
        return tables
    with _TABLES_LOCK:
        if _TABLES is None:
            _TABLES = _build_tables()
            logger.debug("built GF(256) tables for primitive polynomial 0x%X", PRIMITIVE_POLY)
        return _TABLES


def multiply(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    t = get_tables()
    return t.exp[t.log[a] + t.log[b]]


def poly_mul(p: Sequence[int], q: Sequence[int]) -> List[int]:
    """Product of two polynomials, coefficients highest degree first."""
    r = [0] * (len(p) + len(q) - 1)
    for i, a in enumerate(p):
        if a == 0:
            continue
        for j, b in enumerate(q):
            if b == 0:
                continue
            r[i + j] ^= multiply(a, b)
    return r


def poly_eval(poly: Sequence[int], x: int) -> int:
    # Horner, highest degree first
    y = 0
    for c in poly:
        y = multiply(y, x) ^ c
    return y
