# src/qrcore/protocol/fec/fec_rs.py
from __future__ import annotations

import operator
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Sequence, Tuple

from qrcore.protocol import gf256

# Codeword length limit of RS over GF(256)
MAX_CODEWORD_LEN = 255


@lru_cache(maxsize=None)
def _generator_poly(degree: int) -> Tuple[int, ...]:
    exp = gf256.get_tables().exp
    g = [1]
    # QR choice: roots at alpha^0 .. alpha^(degree-1)
    for i in range(degree):
        g = gf256.poly_mul(g, [1, exp[i]])
    return tuple(g)


def generator_poly(degree: int) -> List[int]:
    """
    Monic generator polynomial prod_{i<degree} (x - alpha^i), highest degree first.
    Length is degree + 1 and the first coefficient is always 1.
    """
    if not isinstance(degree, int):
        raise TypeError("degree must be int")
    if degree < 0:
        raise ValueError("degree must be >= 0")
    return list(_generator_poly(degree))


def generate_ec_codewords(data: Sequence[int], *, nsym: int) -> bytes:
    """
    Error-correction codewords for one data block: the remainder of
    data(x) * x^nsym divided by the generator, first codeword = highest degree.

    Runs as an nsym-long shift register (synthetic division), so the cost is
    len(data) * nsym field multiplications.
    """
    _check_nsym(nsym)
    block = _check_data(data)

    gen = _generator_poly(nsym)
    reg = [0] * nsym

    for byte in block:
        factor = byte ^ reg[0]
        del reg[0]
        reg.append(0)
        if factor != 0:
            # gen[0] is the monic leading term consumed by the shift
            for j in range(nsym):
                reg[j] ^= gf256.multiply(gen[j + 1], factor)

    return bytes(reg)


def rs_encode(msg: bytes, *, nsym: int) -> bytes:
    """
    Systematic RS encode: codeword = msg || parity (nsym bytes).
    """
    return bytes(msg) + generate_ec_codewords(msg, nsym=nsym)


def syndromes(codeword: Sequence[int], *, nsym: int) -> List[int]:
    """
    S_i = c(alpha^i) for i = 0..nsym-1, matching the generator roots.
    All zero iff codeword is a multiple of the generator.
    """
    _check_nsym(nsym)
    cw = _check_data(codeword)
    exp = gf256.get_tables().exp
    return [gf256.poly_eval(cw, exp[i]) for i in range(nsym)]


def rs_check(codeword: Sequence[int], *, nsym: int) -> bool:
    return not any(syndromes(codeword, nsym=nsym))


# ---- Normalized module surface ----

@dataclass(frozen=True)
class Config:
    """
    nsym: error-correction codewords per block (the QR level count, e.g. 15 for M).
    """
    nsym: int = 15


def tx(data: bytes, *, cfg: Any) -> bytes:
    """
    Return the parity bytes for a single data block.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("tx: data must be bytes-like")
    return generate_ec_codewords(bytes(data), nsym=_get_nsym(cfg))


def _get_nsym(cfg: Any) -> int:
    nsym = getattr(cfg, "nsym", None)
    if nsym is None:
        raise AttributeError("cfg missing required attribute: nsym")
    _check_nsym(nsym)
    return nsym


def _check_nsym(nsym: Any) -> None:
    if isinstance(nsym, bool) or not isinstance(nsym, int):
        raise TypeError("nsym must be int")
    if not (1 <= nsym <= MAX_CODEWORD_LEN - 1):
        raise ValueError(f"nsym must be in [1,{MAX_CODEWORD_LEN - 1}]")


def _check_data(data: Sequence[int]) -> List[int]:
    block = []
    for i, b in enumerate(data):
        # numpy integer scalars are fine, floats are not
        try:
            v = operator.index(b)
        except TypeError:
            raise TypeError(f"data[{i}] = {b!r} is not an integer") from None
        if not (0 <= v <= 255):
            raise ValueError(f"data[{i}] = {v} is outside the byte range 0..255")
        block.append(v)
    return block
