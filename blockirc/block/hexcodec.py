"""Lowercase hexadecimal encoding and a whitespace-tolerant decoder."""

from __future__ import annotations

_WHITESPACE = frozenset(b" \r\n\t")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


class FromHexError(ValueError):
    """Raised when a string cannot be decoded as hexadecimal."""


class InvalidHexCharacter(FromHexError):
    """A character that is neither a hex digit nor whitespace was found."""

    def __init__(self, char: str, index: int) -> None:
        self.char = char
        self.index = index
        super().__init__(f"Invalid character '{char}' at position {index}")


class InvalidHexLength(FromHexError):
    """The input holds an odd number of hex digits."""

    def __init__(self) -> None:
        super().__init__("Invalid input length")


def to_hex(data: bytes) -> str:
    """Return the lowercase hexadecimal form of ``data``."""
    return bytes(data).hex()


def from_hex(text: str) -> bytes:
    """Decode hexadecimal ``text`` into bytes.

    Spaces, tabs, carriage returns and newlines are ignored. The position
    reported by :class:`InvalidHexCharacter` is a byte offset into the
    UTF-8 encoding of ``text``.
    """
    raw = text.encode("utf-8")
    digits = bytearray()
    for index, byte in enumerate(raw):
        if byte in _WHITESPACE:
            continue
        if byte not in _HEX_DIGITS:
            char = raw[index:].decode("utf-8", errors="replace")[:1]
            raise InvalidHexCharacter(char, index)
        digits.append(byte)
    if len(digits) % 2:
        raise InvalidHexLength()
    return bytes.fromhex(digits.decode("ascii"))