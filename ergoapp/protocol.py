"""APDU protocol definitions: constants, status words, instructions and commands."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

CLA = 0xE0
APPVERSION_LEN = 4
MAX_APPNAME_LEN = 64
BIP32_ERGO_COIN = 429
ERGO_ERG_FRACTION_DIGIT_COUNT = 9
ERGO_ID_LEN = 32
TOKEN_MAX_COUNT = 20
SESSION_KEY_LEN = 16
CHAIN_CODE_LEN = 32
PUBLIC_KEY_LEN = 65
COMPRESSED_PUBLIC_KEY_LEN = 33
PRIVATE_KEY_LEN = 32
EXTENDED_PUBLIC_KEY_LEN = COMPRESSED_PUBLIC_KEY_LEN + CHAIN_CODE_LEN
INPUT_FRAME_SIGNATURE_LEN = 16
ERGO_SIGNATURE_LEN = 56
MAX_NUMBER_OF_SCREENS = 8
MAX_TX_DATA_PART_LEN = 32768
MAX_DATA_CHUNK_LEN = 255
MAX_BIP32_STRING_LEN = 60


class StatusWord(enum.IntEnum):
    """Two-byte status word closing every APDU response."""

    OK = 0x9000
    DENY = 0x6985
    WRONG_P1P2 = 0x6A86
    WRONG_APDU_DATA_LENGTH = 0x6A87
    INS_NOT_SUPPORTED = 0x6D00
    CLA_NOT_SUPPORTED = 0x6E00
    BUSY = 0xB000
    WRONG_RESPONSE_LENGTH = 0xB001
    BAD_SESSION_ID = 0xB002
    WRONG_SUBCOMMAND = 0xB003
    SCREENS_BUFFER_OVERFLOW = 0xB004
    BAD_STATE = 0xB0FF
    BAD_TOKEN_ID = 0xE001
    BAD_TOKEN_VALUE = 0xE002
    BAD_CONTEXT_EXTENSION_SIZE = 0xE003
    BAD_DATA_INPUT = 0xE004
    BAD_BOX_ID = 0xE005
    BAD_TOKEN_INDEX = 0xE006
    BAD_FRAME_INDEX = 0xE007
    BAD_INPUT_COUNT = 0xE008
    BAD_OUTPUT_COUNT = 0xE009
    TOO_MANY_TOKENS = 0xE00A
    TOO_MANY_INPUTS = 0xE00B
    TOO_MANY_DATA_INPUTS = 0xE00C
    TOO_MANY_INPUT_FRAMES = 0xE00D
    TOO_MANY_OUTPUTS = 0xE00E
    HASHER_ERROR = 0xE00F
    BUFFER_ERROR = 0xE010
    U64_OVERFLOW = 0xE011
    BIP32_BAD_PATH = 0xE012
    INTERNAL_CRYPTO_ERROR = 0xE013
    NOT_ENOUGH_DATA = 0xE014
    TOO_MUCH_DATA = 0xE015
    ADDRESS_GENERATION_FAILED = 0xE016
    SCHNORR_SIGNING_FAILED = 0xE017
    BAD_FRAME_SIGNATURE = 0xE018
    BAD_NET_TYPE_VALUE = 0xE019
    SMALL_CHUNK = 0xE01A
    BIP32_FORMATTING_FAILED = 0xE101
    ADDRESS_FORMATTING_FAILED = 0xE102

    def to_bytes(self) -> bytes:  # type: ignore[override]
        """Big-endian wire form of the status word."""
        return int(self).to_bytes(2, "big")


class StatusError(Exception):
    """An operation failed with the given status word."""

    def __init__(self, status: int, message: Optional[str] = None) -> None:
        self.status = StatusWord(status)
        self.message = message if message is not None else self.status.name
        super().__init__(f"{self.message} (0x{int(self.status):04X})")


class IoState(enum.Enum):
    """State of the IO loop."""

    READY = enum.auto()
    RECEIVED = enum.auto()
    WAITING = enum.auto()


class Instruction(enum.IntEnum):
    """Known INS codes of APDU commands."""

    NONE = 0x00
    GET_APP_VERSION = 0x01
    GET_APP_NAME = 0x02
    GET_EXTENDED_PUBLIC_KEY = 0x10
    DERIVE_ADDRESS = 0x11
    ATTEST_INPUT_BOX = 0x20
    SIGN_TRANSACTION = 0x21


@dataclass(frozen=True)
class ApduCommand:
    """Fields of one APDU command."""

    cla: int
    ins: int
    p1: int
    p2: int
    lc: int
    data: bytes = b""

    def __post_init__(self) -> None:
        for name in ("cla", "ins", "p1", "p2", "lc"):
            if not 0 <= getattr(self, name) <= 0xFF:
                raise ValueError(f"{name} must fit in one byte")
        object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) != self.lc:
            raise ValueError("lc does not match the length of data")