"""Byte multiples used to express traffic thresholds."""

from __future__ import annotations

from enum import Enum


class ByteMultiple(Enum):
    """Decimal multiples of a byte."""

    B = "B"
    KB = "KB"
    MB = "MB"
    GB = "GB"

    def __str__(self) -> str:
        return self.name

    def get_multiplier(self) -> int:
        """Number of bytes in one unit of this multiple."""
        return _MULTIPLIERS[self]

    def get_char(self) -> str:
        """Single-letter suffix of this multiple (empty for plain bytes)."""
        return _CHARS[self]


_MULTIPLIERS = {
    ByteMultiple.B: 1,
    ByteMultiple.KB: 1_000,
    ByteMultiple.MB: 1_000_000,
    ByteMultiple.GB: 1_000_000_000,
}

_CHARS = {
    ByteMultiple.B: "",
    ByteMultiple.KB: "K",
    ByteMultiple.MB: "M",
    ByteMultiple.GB: "G",
}

_FROM_CHAR = {
    "K": ByteMultiple.KB,
    "M": ByteMultiple.MB,
    "G": ByteMultiple.GB,
}


def from_char_to_multiple(ch: str) -> ByteMultiple:
    """Interpret a suffix character (case-insensitive); unknown ones mean bytes."""
    key = ch.upper() if ch.isascii() else ch
    return _FROM_CHAR.get(key, ByteMultiple.B)