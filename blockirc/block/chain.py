"""A chain of blocks, each linked to the hash of the one before."""

from __future__ import annotations

import os
from collections.abc import Iterator

from blockirc.block.block import Block
from blockirc.block.hashing import HASH256_BYTES
from blockirc.block.hexcodec import to_hex

_DOCUMENT_SEPARATOR = "---"


class ChainError(ValueError):
    """Raised when a block does not link to the end of the chain."""


class BlockChain:
    """An ordered list of linked blocks."""

    def __init__(self) -> None:
        self._blocks: list[Block] = []

    def append(self, block: Block) -> None:
        """Add ``block`` at the end, checking that it links to the tail."""
        expected = self._blocks[-1].digest() if self._blocks else bytes(HASH256_BYTES)
        if bytes(block.previous) != expected:
            raise ChainError(
                f"append expected previous '{to_hex(expected)}'; "
                f"actual '{to_hex(block.previous)}'"
            )
        self._blocks.append(block)

    def read_chain(self, path: str | os.PathLike[str]) -> None:
        """Append every block of a YAML file of ``---``-separated documents.

        Text before the first separator is ignored. Blocks read before a
        failing one stay in the chain.
        """
        with open(path, encoding="utf-8") as handle:
            contents = handle.read()
        for document in contents.split(_DOCUMENT_SEPARATOR)[1:]:
            self.append(Block.from_yaml(document))

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    def __getitem__(self, index: int) -> Block:
        return self._blocks[index]

    def __str__(self) -> str:
        return "".join(
            f"{i:08}: {to_hex(block.digest())}\n" for i, block in enumerate(self._blocks)
        )