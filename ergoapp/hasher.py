"""A BLAKE2b hasher that also records every byte it is fed."""

from __future__ import annotations

import enum
from typing import Optional

from ergoapp.blake2b import Blake2b, Blake2bError

RECORD_LIMIT = 65535


class HashMode(enum.IntFlag):
    """Flags controlling a single :meth:`RecordingHasher.hash` call."""

    NONE = 0
    LAST = 1 << 0
    NO_REINIT = 1 << 15


class HashAlgorithm(enum.IntEnum):
    """Hash algorithms known to the hasher."""

    BLAKE2B = 9


class HasherError(RuntimeError):
    """Raised when the hasher cannot accept data or produce a digest."""


class RecordingHasher:
    """Streaming BLAKE2b hasher that keeps a copy of the hashed data.

    The copy lets callers inspect exactly which bytes went into a digest.
    It is limited to ``RECORD_LIMIT`` bytes.
    """

    algorithm = HashAlgorithm.BLAKE2B

    def __init__(self, output_bits: int) -> None:
        self._output_bits = output_bits
        self._hasher = self._new_hasher()
        self._recorded = bytearray()
        self._finalized = False

    def _new_hasher(self) -> Blake2b:
        try:
            return Blake2b(self._output_bits // 8)
        except Blake2bError as exc:
            raise HasherError(f"unsupported output size: {self._output_bits} bits") from exc

    @property
    def output_bits(self) -> int:
        """Digest size in bits."""
        return self._output_bits

    def data(self) -> bytes:
        """Bytes hashed since the last reinitialisation."""
        return bytes(self._recorded)

    def hash(self, data: bytes, mode: int = HashMode.NONE) -> Optional[bytes]:
        """Feed ``data``; with ``HashMode.LAST`` return the digest.

        Unless ``HashMode.NO_REINIT`` is also set, the hasher then starts
        afresh and the recorded data is cleared. Returns ``None`` when the
        call does not finish the hash.
        """
        mode = HashMode(mode)
        if self._finalized:
            raise HasherError("hasher already finalized")
        data = bytes(data)
        if len(self._recorded) + len(data) > RECORD_LIMIT:
            raise HasherError("recorded data limit exceeded")
        self._recorded += data
        self._hasher.update(data)
        if HashMode.LAST not in mode:
            return None
        digest = self._hasher.finalize()
        if HashMode.NO_REINIT in mode:
            self._finalized = True
            return digest
        self._recorded.clear()
        self._hasher = self._new_hasher()
        return digest