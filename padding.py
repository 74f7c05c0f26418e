"""Message preparation for SHA-256: text encoding, padding and block splitting.

The padded message is built as

    message || 0x80 || 0x00 * k || bit_length (64-bit big-endian)

where ``k`` is the smallest number of zero bytes that brings the length to
56 mod 64, so the result is a whole number of 64-byte (512-bit) blocks.
"""

from __future__ import annotations

from typing import List

from errors import InputTooLarge, InvalidArgument


BLOCK_SIZE = 64
LENGTH_FIELD_SIZE = 8
MAX_BIT_LENGTH = (1 << 64) - 1


def encode_text(text: str) -> bytes:
    """Return the UTF-8 bytes of `text`, encoding whole code points.

    Characters outside the Basic Multilingual Plane become 4-byte sequences.
    A string carrying an unpaired surrogate is not valid Unicode text and is
    rejected with `InvalidArgument`.
    """
    if not isinstance(text, str):
        raise InvalidArgument(f"text must be str, got {type(text).__name__}")

    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidArgument(
            f"text contains an unpaired surrogate at index {e.start}"
        ) from e


def encode_length(bit_length: int) -> bytes:
    """Encode the message bit length as the trailing 64-bit big-endian field."""
    if bit_length < 0:
        raise ValueError(f"bit length must be non-negative, got {bit_length}")
    if bit_length > MAX_BIT_LENGTH:
        raise InputTooLarge(
            f"message of {bit_length} bits exceeds the 64-bit length field"
        )
    return bit_length.to_bytes(LENGTH_FIELD_SIZE, byteorder="big")


def padding_for(length: int) -> bytes:
    """Return the padding appended to a message of `length` bytes."""
    # 0x80 plus zeros so that length ≡ 56 mod 64, then the length field.
    zeros = (55 - length) % BLOCK_SIZE
    return b"\x80" + b"\x00" * zeros + encode_length(length * 8)


def pad_message(message: bytes) -> bytes:
    """Pad `message` to a multiple of 64 bytes (512 bits)."""
    message = bytes(message)
    return message + padding_for(len(message))


def split_into_blocks(padded: bytes) -> List[bytes]:
    """Split a padded message into its 64-byte blocks, in order."""
    if len(padded) % BLOCK_SIZE != 0:
        raise ValueError(
            f"Padded message length must be a multiple of {BLOCK_SIZE} bytes, "
            f"got {len(padded)}"
        )
    return [bytes(padded[i : i + BLOCK_SIZE]) for i in range(0, len(padded), BLOCK_SIZE)]
