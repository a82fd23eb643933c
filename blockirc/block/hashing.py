"""Incremental 256-bit BLAKE2s hashing."""

from __future__ import annotations

import hashlib

HASH256_BYTES = 32


class Hash256:
    """A BLAKE2s hasher producing 32-byte digests, fed incrementally."""

    def __init__(self) -> None:
        self._hasher = hashlib.blake2s(digest_size=HASH256_BYTES)

    def write(self, data: bytes) -> int:
        """Feed ``data`` to the hasher and return the number of bytes taken."""
        self._hasher.update(data)
        return len(data)

    def finalize(self) -> bytes:
        """Return the digest of everything written so far."""
        return self._hasher.digest()

    def reset(self) -> None:
        """Discard all input written so far."""
        self._hasher = hashlib.blake2s(digest_size=HASH256_BYTES)