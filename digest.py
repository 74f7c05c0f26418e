"""Digest assembly and rendering.

The final 8-word hash value is serialised big-endian into 32 bytes, which
are then rendered as lowercase hex (64 chars) or standard Base64 (44 chars,
one trailing ``=``).
"""

from __future__ import annotations

import base64
import binascii
from typing import Sequence

from errors import InvalidArgument


DIGEST_SIZE = 32

OUTPUT_FORMATS = ("hex", "base64")

_OUTPUT_LENGTHS = {"hex": 64, "base64": 44}


def validate_format(fmt: str) -> str:
    """Return `fmt` if it is a recognized output format, else raise `InvalidArgument`."""
    if not isinstance(fmt, str) or fmt not in OUTPUT_FORMATS:
        raise InvalidArgument(
            f"unsupported output format {fmt!r}, expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    return fmt


def output_length(fmt: str) -> int:
    return _OUTPUT_LENGTHS[validate_format(fmt)]


def finalize_digest(state: Sequence[int]) -> bytes:
    """Convert a final hash value H_N into the 32-byte digest."""
    if len(state) != 8:
        raise ValueError(f"Expected an 8-word hash state, got {len(state)} words")
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)


def encode_digest(digest: bytes, fmt: str = "hex") -> str:
    """Render a 32-byte digest in the requested output format."""
    tag = validate_format(fmt)
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"Expected a {DIGEST_SIZE}-byte digest, got {len(digest)}")

    if tag == "base64":
        return base64.b64encode(digest).decode("ascii")
    return digest.hex()


def decode_digest(text: str, fmt: str = "hex") -> bytes:
    """Parse a rendered digest back into its 32 bytes.

    Hex is accepted in either case. Malformed text raises `InvalidArgument`.
    """
    tag = validate_format(fmt)
    text = text.strip()
    try:
        if tag == "base64":
            raw = base64.b64decode(text, validate=True)
        else:
            raw = bytes.fromhex(text)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgument(f"malformed {tag} digest {text!r}: {e}") from e

    if len(raw) != DIGEST_SIZE:
        raise InvalidArgument(
            f"{tag} digest decodes to {len(raw)} bytes, expected {DIGEST_SIZE}"
        )
    return raw
