"""BLAKE2b hashing (RFC 7693) with streaming, keyed and parameter-block modes."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional

BLOCK_BYTES = 128
OUT_BYTES = 64
KEY_BYTES = 64
SALT_BYTES = 16
PERSONAL_BYTES = 16
PARAM_BLOCK_BYTES = 64

_MASK64 = (1 << 64) - 1
_MASK128 = (1 << 128) - 1

_IV = (
    0x6A09E667F3BCC908,
    0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B,
    0xA54FF53A5F1D36F1,
    0x510E527FADE682D1,
    0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B,
    0x5BE0CD19137E2179,
)

_SIGMA = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
)

# Column then diagonal step of each round.
_G_LANES = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)

_PARAM_STRUCT = struct.Struct("<BBBBIIIBB14s16s16s")
_WORDS_STRUCT = struct.Struct("<16Q")
_STATE_STRUCT = struct.Struct("<8Q")


class Blake2bError(ValueError):
    """Raised on invalid BLAKE2b parameters or misuse of a hasher."""


def _rotr64(word: int, count: int) -> int:
    return ((word >> count) | (word << (64 - count))) & _MASK64


@dataclass(frozen=True)
class Blake2bParams:
    """The 64-byte BLAKE2b parameter block."""

    digest_length: int = OUT_BYTES
    key_length: int = 0
    fanout: int = 1
    depth: int = 1
    leaf_length: int = 0
    node_offset: int = 0
    xof_length: int = 0
    node_depth: int = 0
    inner_length: int = 0
    salt: bytes = b""
    personal: bytes = b""

    def __post_init__(self) -> None:
        if not 1 <= self.digest_length <= OUT_BYTES:
            raise Blake2bError(f"digest length must be 1..{OUT_BYTES}")
        if not 0 <= self.key_length <= KEY_BYTES:
            raise Blake2bError(f"key length must be 0..{KEY_BYTES}")
        for name in ("fanout", "depth", "node_depth", "inner_length"):
            if not 0 <= getattr(self, name) <= 0xFF:
                raise Blake2bError(f"{name} must fit in one byte")
        for name in ("leaf_length", "node_offset", "xof_length"):
            if not 0 <= getattr(self, name) <= 0xFFFFFFFF:
                raise Blake2bError(f"{name} must fit in four bytes")
        if len(self.salt) > SALT_BYTES:
            raise Blake2bError(f"salt must be at most {SALT_BYTES} bytes")
        if len(self.personal) > PERSONAL_BYTES:
            raise Blake2bError(f"personalization must be at most {PERSONAL_BYTES} bytes")

    def to_bytes(self) -> bytes:
        """Serialize the parameter block in its little-endian wire layout."""
        return _PARAM_STRUCT.pack(
            self.digest_length,
            self.key_length,
            self.fanout,
            self.depth,
            self.leaf_length,
            self.node_offset,
            self.xof_length,
            self.node_depth,
            self.inner_length,
            bytes(14),
            bytes(self.salt).ljust(SALT_BYTES, b"\x00"),
            bytes(self.personal).ljust(PERSONAL_BYTES, b"\x00"),
        )


class Blake2b:
    """Streaming BLAKE2b hasher.

    When ``params`` is given it defines the digest length; ``key``, if any,
    must then match ``params.key_length``.
    """

    def __init__(
        self,
        digest_size: int = OUT_BYTES,
        key: bytes = b"",
        params: Optional[Blake2bParams] = None,
    ) -> None:
        key = bytes(key)
        if len(key) > KEY_BYTES:
            raise Blake2bError(f"key must be at most {KEY_BYTES} bytes")
        if params is None:
            if not 1 <= digest_size <= OUT_BYTES:
                raise Blake2bError(f"digest size must be 1..{OUT_BYTES}")
            params = Blake2bParams(digest_length=digest_size, key_length=len(key))
        elif params.key_length != len(key):
            raise Blake2bError("key length does not match the parameter block")

        words = _STATE_STRUCT.unpack(params.to_bytes())
        self._h = [iv ^ word for iv, word in zip(_IV, words)]
        self._counter = 0
        self._buffer = bytearray()
        self._outlen = params.digest_length
        self._finalized = False

        if key:
            self.update(key.ljust(BLOCK_BYTES, b"\x00"))

    @property
    def digest_size(self) -> int:
        """Number of bytes produced by :meth:`finalize`."""
        return self._outlen

    def update(self, data: bytes) -> None:
        """Absorb more input."""
        if self._finalized:
            raise Blake2bError("hasher already finalized")
        self._buffer += data
        # The last block is held back so finalization always has one to flag.
        while len(self._buffer) > BLOCK_BYTES:
            block = bytes(self._buffer[:BLOCK_BYTES])
            del self._buffer[:BLOCK_BYTES]
            self._counter = (self._counter + BLOCK_BYTES) & _MASK128
            self._compress(block, last=False)

    def finalize(self) -> bytes:
        """Finish hashing and return the digest; the hasher cannot be reused."""
        if self._finalized:
            raise Blake2bError("hasher already finalized")
        self._finalized = True
        self._counter = (self._counter + len(self._buffer)) & _MASK128
        block = bytes(self._buffer).ljust(BLOCK_BYTES, b"\x00")
        self._buffer.clear()
        self._compress(block, last=True)
        return _STATE_STRUCT.pack(*self._h)[: self._outlen]

    def _compress(self, block: bytes, last: bool) -> None:
        m = _WORDS_STRUCT.unpack(block)
        v = self._h + list(_IV)
        v[12] ^= self._counter & _MASK64
        v[13] ^= self._counter >> 64
        if last:
            v[14] ^= _MASK64

        for sigma in _SIGMA:
            for i, (a, b, c, d) in enumerate(_G_LANES):
                x = m[sigma[2 * i]]
                y = m[sigma[2 * i + 1]]
                v[a] = (v[a] + v[b] + x) & _MASK64
                v[d] = _rotr64(v[d] ^ v[a], 32)
                v[c] = (v[c] + v[d]) & _MASK64
                v[b] = _rotr64(v[b] ^ v[c], 24)
                v[a] = (v[a] + v[b] + y) & _MASK64
                v[d] = _rotr64(v[d] ^ v[a], 16)
                v[c] = (v[c] + v[d]) & _MASK64
                v[b] = _rotr64(v[b] ^ v[c], 63)

        self._h = [h ^ v[i] ^ v[i + 8] for i, h in enumerate(self._h)]


def blake2b(data: bytes, digest_size: int = OUT_BYTES, key: bytes = b"") -> bytes:
    """Hash ``data`` in one call, optionally keyed."""
    hasher = Blake2b(digest_size, key)
    hasher.update(data)
    return hasher.finalize()