import pytest

from ergoapp.protocol import (
    CHAIN_CODE_LEN,
    COMPRESSED_PUBLIC_KEY_LEN,
    EXTENDED_PUBLIC_KEY_LEN,
    ApduCommand,
    Instruction,
    IoState,
    StatusError,
    StatusWord,
)


def test_status_word_wire_bytes():
    assert StatusWord.OK.to_bytes() == b"\x90\x00"
    assert StatusWord.DENY.to_bytes() == b"\x69\x85"


def test_status_word_round_trip():
    for status in StatusWord:
        assert StatusWord(int.from_bytes(status.to_bytes(), "big")) is status


def test_status_word_lookup():
    assert StatusWord(0xE01A) is StatusWord.SMALL_CHUNK
    assert StatusWord(0xB0FF) is StatusWord.BAD_STATE


def test_status_error_carries_status():
    err = StatusError(0xE00A)
    assert err.status is StatusWord.TOO_MANY_TOKENS
    assert err.message == "TOO_MANY_TOKENS"
    custom = StatusError(StatusWord.BUSY, "device busy")
    assert custom.message == "device busy"
    with pytest.raises(StatusError) as info:
        raise custom
    assert info.value.status is StatusWord.BUSY


def test_status_error_rejects_unknown_code():
    with pytest.raises(ValueError):
        StatusError(0x1234)


def test_instruction_codes():
    assert Instruction(0x21) is Instruction.SIGN_TRANSACTION
    assert Instruction(0x10) is Instruction.GET_EXTENDED_PUBLIC_KEY


def test_io_states_distinct():
    states = [IoState(state.value) for state in IoState]
    assert [state.name for state in states] == ["READY", "RECEIVED", "WAITING"]
    assert len(set(states)) == 3


def test_extended_key_length_invariant():
    key_data = bytes(EXTENDED_PUBLIC_KEY_LEN)
    cmd = ApduCommand(0xE0, 0x10, 0x00, 0x00, EXTENDED_PUBLIC_KEY_LEN, key_data)
    assert cmd.lc == COMPRESSED_PUBLIC_KEY_LEN + CHAIN_CODE_LEN
    assert len(cmd.data) == COMPRESSED_PUBLIC_KEY_LEN + CHAIN_CODE_LEN


def test_apdu_command_fields():
    cmd = ApduCommand(0xE0, 0x03, 0x01, 0x02, 5, bytes([0x00, 0x01, 0x02, 0x03, 0x04]))
    assert cmd.cla == 0xE0
    assert cmd.ins == 0x03
    assert cmd.p1 == 0x01
    assert cmd.p2 == 0x02
    assert cmd.lc == 5
    assert cmd.data == bytes([0x00, 0x01, 0x02, 0x03, 0x04])


def test_apdu_command_lc_mismatch():
    with pytest.raises(ValueError):
        ApduCommand(0xE0, 0x03, 0x00, 0x00, 1, b"")


def test_apdu_command_byte_range():
    with pytest.raises(ValueError):
        ApduCommand(0x100, 0x03, 0x00, 0x00, 0, b"")