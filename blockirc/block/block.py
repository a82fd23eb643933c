"""Blocks: a header of version, time and hashes plus transactions."""

from __future__ import annotations

import struct
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

from blockirc.block.hashing import HASH256_BYTES, Hash256
from blockirc.block.hexcodec import FromHexError, from_hex, to_hex
from blockirc.block.transaction import Transaction

_FIELDS = ("version", "timestamp", "previous", "merkle_root")


class BlockFormatError(ValueError):
    """Raised when a block description is malformed."""


class _StrictLoader(yaml.BaseLoader):
    """Loads every scalar as a string and refuses duplicate keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise BlockFormatError(f"duplicate field `{key}`")
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _parse_uint(value: Any, name: str, bits: int) -> int:
    if isinstance(value, bool):
        raise BlockFormatError(f"field `{name}` must be an unsigned integer")
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise BlockFormatError(f"field `{name}` must be an unsigned integer")
        value = int(text)
    if not isinstance(value, int) or not 0 <= value < 2**bits:
        raise BlockFormatError(f"field `{name}` out of range for u{bits}")
    return value


def _parse_hash(value: Any, name: str) -> bytes:
    if not isinstance(value, str):
        raise BlockFormatError(f"field `{name}` must be a hex string")
    try:
        decoded = from_hex(value)
    except FromHexError as exc:
        raise BlockFormatError(f"field `{name}`: {exc}") from exc
    if len(decoded) != HASH256_BYTES:
        raise BlockFormatError(
            f"field `{name}` must be {HASH256_BYTES} bytes, got {len(decoded)}"
        )
    return decoded


@dataclass
class Block:
    """A block header and the transactions it carries."""

    version: int = 1
    timestamp: int = 0
    previous: bytes = bytes(HASH256_BYTES)
    merkle_root: bytes = bytes(HASH256_BYTES)
    transactions: list[Transaction] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in ("previous", "merkle_root"):
            if len(getattr(self, name)) != HASH256_BYTES:
                raise BlockFormatError(f"`{name}` must be {HASH256_BYTES} bytes")

    def add_transaction(self, tx: Transaction) -> None:
        """Append ``tx`` to this block."""
        self.transactions.append(tx)

    def digest(self) -> bytes:
        """Return the 32-byte hash of the block header."""
        hasher = Hash256()
        hasher.write(struct.pack("<I", self.version))
        hasher.write(struct.pack("<Q", self.timestamp))
        hasher.write(bytes(self.previous))
        hasher.write(bytes(self.merkle_root))
        return hasher.finalize()

    @classmethod
    def from_mapping(cls, data: Any) -> "Block":
        """Build a block from a mapping of its four header fields."""
        if not isinstance(data, Mapping):
            raise BlockFormatError("expected a block map")
        unknown = [key for key in data if key not in _FIELDS]
        if unknown:
            raise BlockFormatError(
                f"unknown field `{unknown[0]}`, expected one of {', '.join(_FIELDS)}"
            )
        missing = [name for name in _FIELDS if name not in data]
        if missing:
            raise BlockFormatError(f"missing field `{missing[0]}`")
        return cls(
            version=_parse_uint(data["version"], "version", 32),
            timestamp=_parse_uint(data["timestamp"], "timestamp", 64),
            previous=_parse_hash(data["previous"], "previous"),
            merkle_root=_parse_hash(data["merkle_root"], "merkle_root"),
        )

    @classmethod
    def from_yaml(cls, text: str) -> "Block":
        """Parse a block from one YAML document."""
        try:
            data = yaml.load(text, Loader=_StrictLoader)
        except yaml.YAMLError as exc:
            raise BlockFormatError(f"invalid YAML: {exc}") from exc
        return cls.from_mapping(data)

    def __str__(self) -> str:
        parts = [
            f"block _hash: {to_hex(self.digest())}\n",
            f"version:     {self.version}\n",
            f"timestamp:   {self.timestamp}\n",
            f"previous:    {to_hex(self.previous)}\n",
            f"merkle_root: {to_hex(self.merkle_root)}\n",
            "transactions:\n",
        ]
        parts.extend(str(tx) for tx in self.transactions)
        parts.append("\n")
        return "".join(parts)