from __future__ import annotations


class QRCoreError(ValueError):
    """Base class for input errors raised while encoding or laying out a symbol."""


class InputTooLongError(QRCoreError):
    def __init__(self, length: int, limit: int):
        super().__init__(f"text has {length} characters; the count field holds at most {limit}")
        self.length = length
        self.limit = limit


class UnsupportedCharacterError(QRCoreError):
    def __init__(self, char: str, position: int):
        super().__init__(
            f"character {char!r} (U+{ord(char):04X}) at position {position} is outside byte mode (0..255)"
        )
        self.char = char
        self.position = position


class CapacityOverflowError(QRCoreError):
    def __init__(self, n_bits: int, capacity: int):
        super().__init__(f"bitstream of {n_bits} bits exceeds matrix capacity of {capacity} bits")
        self.n_bits = n_bits
        self.capacity = capacity


class FieldInitializationError(RuntimeError):
    """GF(256) tables failed their self check. Never expected; treated as fatal."""
