from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from qrcore.protocol.errors import InputTooLongError, UnsupportedCharacterError
from qrcore.protocol.fec.fec_rs import generate_ec_codewords
from qrcore.utils.bitops import int_to_bits

logger = logging.getLogger(__name__)

MODE_BYTE = 0b0100
MODE_BITS = 4
COUNT_BITS = 8
MAX_CHARS = (1 << COUNT_BITS) - 1


class ErrorCorrectionLevel(enum.Enum):
    """QR error-correction level; the value is its codeword count."""
    L = 7
    M = 15
    Q = 25
    H = 30

    @property
    def ec_codewords(self) -> int:
        return self.value

    @classmethod
    def coerce(cls, level: Union["ErrorCorrectionLevel", str]) -> "ErrorCorrectionLevel":
        if isinstance(level, cls):
            return level
        if isinstance(level, str):
            try:
                return cls[level.strip().upper()]
            except KeyError:
                pass
        raise ValueError(f"unknown error correction level {level!r}; expected one of L, M, Q, H")


EC_CODEWORDS = MappingProxyType({lvl.name: lvl.ec_codewords for lvl in ErrorCorrectionLevel})


def text_to_bytes(text: Union[str, bytes, bytearray, memoryview]) -> bytes:
    """
    Byte-mode payload: one byte per character, code points 0..255 only.
    """
    if isinstance(text, (bytes, bytearray, memoryview)):
        data = bytes(text)
    elif isinstance(text, str):
        if len(text) > MAX_CHARS:
            raise InputTooLongError(len(text), MAX_CHARS)
        for i, ch in enumerate(text):
            if ord(ch) > 0xFF:
                raise UnsupportedCharacterError(ch, i)
        data = text.encode("latin-1")
    else:
        raise TypeError("text must be str, bytes, bytearray or memoryview")

    if len(data) > MAX_CHARS:
        raise InputTooLongError(len(data), MAX_CHARS)
    return data


def bitstream_length(n_chars: int, level: Union[ErrorCorrectionLevel, str]) -> int:
    """Padded bitstream length for n_chars characters at the given level."""
    lvl = ErrorCorrectionLevel.coerce(level)
    raw = MODE_BITS + COUNT_BITS + 8 * n_chars + 8 * lvl.ec_codewords
    return -(-raw // 8) * 8


def encode(text: Union[str, bytes], level: Union[ErrorCorrectionLevel, str]) -> str:
    """
    Build the byte-mode bitstream as a '0'/'1' string:

      MODE(4) | COUNT(8) | DATA(8 * len) | EC(8 * level codewords) | zero pad to byte boundary
    """
    lvl = ErrorCorrectionLevel.coerce(level)
    data = text_to_bytes(text)

    fields = [int_to_bits(MODE_BYTE, MODE_BITS), int_to_bits(len(data), COUNT_BITS)]
    fields.extend(int_to_bits(b, 8) for b in data)

    ec = generate_ec_codewords(data, nsym=lvl.ec_codewords)
    fields.extend(int_to_bits(c, 8) for c in ec)

    bits = "".join(fields)
    rem = len(bits) % 8
    if rem:
        bits += "0" * (8 - rem)

    logger.debug("encoded %d chars at level %s into %d bits", len(data), lvl.name, len(bits))
    return bits


# ---- Normalized module surface ----

@dataclass(frozen=True)
class Config:
    """
    level: error correction level (enum member or one of "L", "M", "Q", "H").
    """
    level: Union[ErrorCorrectionLevel, str] = ErrorCorrectionLevel.M


def tx(text: Union[str, bytes], *, cfg: Any) -> str:
    return encode(text, _get_level(cfg))


def _get_level(cfg: Any) -> ErrorCorrectionLevel:
    level = getattr(cfg, "level", None)
    if level is None:
        raise AttributeError("cfg missing required attribute: level")
    return ErrorCorrectionLevel.coerce(level)
