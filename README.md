# ergoapp

Building blocks for working with an Ergo signing application:

- `ergoapp.blake2b` is a pure-Python BLAKE2b hash. It offers a streaming
  interface, keyed hashing and an explicit parameter block.
- `ergoapp.hasher` wraps BLAKE2b in a hasher that records every byte fed to
  it. With that record you can check exactly which bytes went into a digest.
- `ergoapp.protocol` defines the APDU command fields, the instruction codes,
  the I/O states, the status words and the application's size constants.

The package has no runtime dependencies.

## Installation

```
pip install ergoapp
```

## BLAKE2b

```python
from ergoapp.blake2b import Blake2b, Blake2bParams, blake2b

digest = blake2b(b"abc", 32)             # one-shot, 32-byte digest

hasher = Blake2b(32)                     # streaming
hasher.update(b"a")
hasher.update(b"bc")
assert hasher.finalize() == digest
assert hasher.digest_size == 32

keyed = blake2b(b"abc", 64, key=b"secret")

params = Blake2bParams(digest_length=32, salt=b"salt", personal=b"app")
salted = Blake2b(params=params)
salted.update(b"abc")
salted.finalize()
```

`Blake2bParams` describes the 64-byte parameter block. It covers digest and
key length, fanout, depth, leaf length, node offset, XOF length, node depth,
inner length, salt and personalisation. `to_bytes()` returns the block in
its little-endian layout. When you pass `params` to `Blake2b`, the block sets
the digest length, and a `key` must have exactly `params.key_length` bytes.

`Blake2bError`, a subclass of `ValueError`, is raised for:

- out-of-range sizes or fields,
- keys longer than 64 bytes,
- a key that does not match the parameter block,
- calling `update` or `finalize` after the hasher has been finalized.

## Recording hasher

```python
from ergoapp.hasher import HashMode, RecordingHasher

hasher = RecordingHasher(256)                   # output size in bits
hasher.hash(b"\x01\x02")                        # absorb only, returns None
assert hasher.data() == b"\x01\x02"
digest = hasher.hash(b"\x03", HashMode.LAST)    # finish, then start afresh
assert hasher.data() == b""
```

`hasher.data()` returns the bytes absorbed since the last reset. Add
`HashMode.NO_REINIT` to `HashMode.LAST` to keep the record after the digest
is produced. In that case the hasher is finished, and further calls raise
`HasherError`.

`HasherError` is also raised in two other cases:

- the output size is not a valid BLAKE2b size,
- the record would grow past 65535 bytes.

## Protocol

```python
from ergoapp.protocol import ApduCommand, Instruction, StatusError, StatusWord

command = ApduCommand(cla=0xE0, ins=Instruction.GET_APP_VERSION, p1=0, p2=0, lc=0, data=b"")
StatusWord.OK.to_bytes()        # b"\x90\x00"

try:
    raise StatusError(StatusWord.DENY)
except StatusError as error:
    print(hex(error.status), error.message)   # 0x6985 DENY
```

`ApduCommand` checks two things:

- every header field fits in one byte,
- `lc` equals the length of `data`.

If either check fails it raises `ValueError`.

## What this package does not do

It does not talk to a device. There is no USB or Bluetooth transport, no
parsing of raw APDU byte strings into commands, and no command dispatch. It
also has no address derivation, transaction serialization or signing. It
supplies the hash primitives and the protocol definitions only.

## Running the tests

```
pip install -e ".[test]"
pytest
```