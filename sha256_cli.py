"""SHA-256 text hashing built from the pipeline stages in this repo.

This module provides:

- `hash_text(text, fmt)`: hash the UTF-8 encoding of `text` and render the
  digest as ``hex`` or ``base64``.
- `sha256(data)` / `sha256_hex(data)`: the same over raw bytes.
- `iter_hash_states(data)`: the chaining value after every block.
- `Sha256`: an incremental hasher with a hashlib-like interface.
- CLI usage: ``python sha256_cli.py "message" --format base64``.
"""

from __future__ import annotations

import argparse
import sys
from typing import Iterator, List, Optional

from compress import H0, State, compress64, update_hash_state
from digest import (
    DIGEST_SIZE,
    OUTPUT_FORMATS,
    decode_digest,
    encode_digest,
    finalize_digest,
    validate_format,
)
from errors import DigestError, InputTooLarge
from padding import (
    BLOCK_SIZE,
    MAX_BIT_LENGTH,
    encode_text,
    pad_message,
    padding_for,
    split_into_blocks,
)
from schedule import build_message_schedule


def compress_block(state: State, block: bytes) -> State:
    """Fold one 64-byte block into the running hash state."""
    working = compress64(state, build_message_schedule(block))
    return update_hash_state(state, working)


def iter_hash_states(data: bytes) -> Iterator[State]:
    """Yield the hash state after each block of the padded message.

    Blocks are processed lazily, one per iteration, so a caller hashing a
    large input can stop between blocks. The last state yielded is the one
    the digest is assembled from.
    """
    state = H0
    for block in split_into_blocks(pad_message(data)):
        state = compress_block(state, block)
        yield state


def sha256(data: bytes) -> bytes:
    """Compute the 32-byte SHA-256 digest of `data`.

    >>> sha256(b"abc").hex()
    'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """
    state = H0
    for block in split_into_blocks(pad_message(data)):
        state = compress_block(state, block)
    return finalize_digest(state)


def sha256_hex(data: bytes) -> str:
    return sha256(data).hex()


def hash_text(text: str, fmt: str = "hex") -> str:
    """Hash the UTF-8 encoding of `text` and render it in `fmt`.

    The format is validated before any hashing work, so an unknown tag
    raises `InvalidArgument` without producing output.
    """
    tag = validate_format(fmt)
    return encode_digest(sha256(encode_text(text)), tag)


class Sha256:
    """Incremental SHA-256 hasher.

    Full blocks are compressed as soon as they are available; `digest()`
    pads a copy of the pending bytes, so it may be called at any time and
    further updates are still accepted afterwards.
    """

    name = "sha256"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self._state: State = H0
        self._buffer = bytearray()
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Sha256.update() argument must be bytes-like, not {type(data).__name__}"
            )

        data = bytes(data)
        if (self._length + len(data)) * 8 > MAX_BIT_LENGTH:
            raise InputTooLarge("total input exceeds 2**64 - 1 bits")

        self._length += len(data)
        self._buffer.extend(data)

        full = len(self._buffer) - len(self._buffer) % BLOCK_SIZE
        for i in range(0, full, BLOCK_SIZE):
            self._state = compress_block(self._state, bytes(self._buffer[i : i + BLOCK_SIZE]))
        del self._buffer[:full]

    def digest(self) -> bytes:
        state = self._state
        tail = bytes(self._buffer) + padding_for(self._length)
        for block in split_into_blocks(tail):
            state = compress_block(state, block)
        return finalize_digest(state)

    def hexdigest(self) -> str:
        return encode_digest(self.digest(), "hex")

    def b64digest(self) -> str:
        return encode_digest(self.digest(), "base64")

    def copy(self) -> "Sha256":
        other = Sha256()
        other._state = self._state
        other._buffer = bytearray(self._buffer)
        other._length = self._length
        return other


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text-digest",
        description="Compute the SHA-256 digest of a text string (UTF-8 encoded)",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Text to hash (default: read all of stdin)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=OUTPUT_FORMATS,
        default="hex",
        help="Output encoding: hex or base64 (default: hex)",
    )
    parser.add_argument(
        "--check",
        metavar="DIGEST",
        help="Compare against an expected digest and print OK or MISMATCH",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Usage:
        python sha256_cli.py "message"
        python sha256_cli.py "message" --format base64
        echo -n "message" | python sha256_cli.py
        python sha256_cli.py "abc" --check ba7816bf...

    Prints the digest and returns 0. With ``--check`` prints OK/MISMATCH and
    returns 0/1. Invalid input is reported on stderr with return code 1.
    """
    args = _build_parser().parse_args(argv)

    text = args.text if args.text is not None else sys.stdin.read()

    try:
        rendered = hash_text(text, args.format)
        if args.check is not None:
            expected = decode_digest(args.check, args.format)
            matched = expected == decode_digest(rendered, args.format)
            print("OK" if matched else "MISMATCH")
            return 0 if matched else 1
    except DigestError as e:
        sys.stderr.write(f"error: {e}\n")
        return 1

    print(rendered)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
