from __future__ import annotations

from typing import Sequence, Union

import numpy as np

BitsLike = Union[str, Sequence[int], np.ndarray]


def bits_to_bytes(bits: Sequence[int]) -> bytes:
    """Pack MSB-first bits into bytes."""
    if len(bits) % 8 != 0:
        raise ValueError(f"Bit length must be multiple of 8, got {len(bits)}")
    out = bytearray(len(bits) // 8)
    for bi in range(0, len(bits), 8):
        v = 0
        for i in range(8):
            v = (v << 1) | (int(bits[bi + i]) & 1)
        out[bi // 8] = v
    return bytes(out)


def int_to_bits(value: int, width: int) -> str:
    """
    Render an unsigned integer as a fixed-width MSB-first '0'/'1' field.
    """
    if width <= 0:
        raise ValueError("width must be > 0")
    if value < 0 or value >> width:
        raise ValueError(f"value {value} does not fit in {width} bits")
    return format(value, f"0{width}b")


def as_bit_array(bits: BitsLike) -> np.ndarray:
    """
    Normalize a '0'/'1' string, an int sequence or an array into a flat uint8 0/1 array.
    """
    if isinstance(bits, str):
        if bits.strip("01"):
            raise ValueError("bit string may only contain '0' and '1'")
        return np.frombuffer(bits.encode("ascii"), dtype=np.uint8) - ord("0")
    if isinstance(bits, (bytes, bytearray)):
        raise TypeError("bits must be a '0'/'1' string or an int sequence, not bytes")

    arr = np.asarray(bits).reshape(-1)
    if arr.size == 0:
        return np.zeros((0,), dtype=np.uint8)
    if not np.isin(arr, (0, 1)).all():
        raise ValueError("bit sequence may only contain 0 and 1")
    return arr.astype(np.uint8)
