"""Transactions and the pieces they are built from."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from blockirc.block.hashing import HASH256_BYTES, Hash256
from blockirc.block.hexcodec import to_hex


@dataclass
class OutPoint:
    """A reference to one output of an earlier transaction."""

    hash: bytes = bytes(HASH256_BYTES)
    index: int = 0

    def feed(self, hasher: Hash256) -> None:
        """Write this out-point's hashed form to ``hasher``."""
        hasher.write(bytes(self.hash))
        hasher.write(struct.pack("<I", self.index))


@dataclass
class TransactionInput:
    """A transaction input spending a previous output."""

    previous_out: OutPoint

    def feed(self, hasher: Hash256) -> None:
        """Write this input's hashed form to ``hasher``."""
        self.previous_out.feed(hasher)


@dataclass
class TransactionOutput:
    """A transaction output carrying an amount."""

    amount: int

    def feed(self, hasher: Hash256) -> None:
        """Write this output's hashed form to ``hasher``."""
        hasher.write(struct.pack("<Q", self.amount))

    def __str__(self) -> str:
        return f"    amount: {self.amount}\n"


@dataclass
class Transaction:
    """A transaction with its inputs and outputs."""

    version: int = 1
    timestamp: int = 0
    inputs: list[TransactionInput] = field(default_factory=list)
    outputs: list[TransactionOutput] = field(default_factory=list)

    def add_output(self, amount: int) -> None:
        """Append an output paying ``amount``."""
        self.outputs.append(TransactionOutput(amount))

    def digest(self) -> bytes:
        """Return the 32-byte hash of this transaction."""
        hasher = Hash256()
        hasher.write(struct.pack("<I", self.version))
        hasher.write(struct.pack("<Q", self.timestamp))
        for tx_input in self.inputs:
            tx_input.feed(hasher)
        for tx_output in self.outputs:
            tx_output.feed(hasher)
        return hasher.finalize()

    def __str__(self) -> str:
        parts = [
            f"  tx _hash:    {to_hex(self.digest())}\n",
            f"  version:     {self.version}\n",
            f"  timestamp:   {self.timestamp}\n",
            "  inputs:\n",
            "  outputs:\n",
        ]
        parts.extend(str(tx_output) for tx_output in self.outputs)
        parts.append("\n")
        return "".join(parts)