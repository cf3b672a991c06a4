import hashlib

import pytest

from ergoapp.hasher import (
    RECORD_LIMIT,
    HashAlgorithm,
    HasherError,
    HashMode,
    RecordingHasher,
)


def test_digest_matches_reference():
    hasher = RecordingHasher(256)
    assert hasher.hash(b"abc", HashMode.NONE) is None
    digest = hasher.hash(b"def", HashMode.LAST)
    assert digest == hashlib.blake2b(b"abcdef", digest_size=32).digest()


def test_records_data_until_last():
    hasher = RecordingHasher(256)
    hasher.hash(b"\x01")
    hasher.hash(b"\x02\x03")
    assert hasher.data() == b"\x01\x02\x03"
    hasher.hash(b"", HashMode.LAST)
    assert hasher.data() == b""


def test_reinit_after_last_gives_fresh_hash():
    hasher = RecordingHasher(256)
    first = hasher.hash(b"payload", HashMode.LAST)
    second = hasher.hash(b"payload", HashMode.LAST)
    assert first == second


def test_no_reinit_keeps_data_and_blocks_further_use():
    hasher = RecordingHasher(256)
    digest = hasher.hash(b"xyz", HashMode.LAST | HashMode.NO_REINIT)
    assert digest == hashlib.blake2b(b"xyz", digest_size=32).digest()
    assert hasher.data() == b"xyz"
    with pytest.raises(HasherError):
        hasher.hash(b"more")


def test_output_size_follows_bits():
    hasher = RecordingHasher(512)
    assert hasher.output_bits == 512
    assert len(hasher.hash(b"", HashMode.LAST)) == 64


@pytest.mark.parametrize("bits", [0, 7, 520])
def test_invalid_output_size(bits):
    with pytest.raises(HasherError):
        RecordingHasher(bits)


def test_record_limit_enforced():
    hasher = RecordingHasher(256)
    hasher.hash(bytes(RECORD_LIMIT))
    with pytest.raises(HasherError):
        hasher.hash(b"\x00")
    assert len(hasher.data()) == RECORD_LIMIT


def test_algorithm_identifier():
    assert RecordingHasher(256).algorithm is HashAlgorithm.BLAKE2B
    assert HashAlgorithm.BLAKE2B == 9