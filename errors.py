"""Exceptions raised at the edges of the text-digest pipeline.

All of them derive from `ValueError`, so callers that already guard the
hashing helpers with ``except ValueError`` keep working.
"""

from __future__ import annotations


class DigestError(ValueError):
    """Base class for errors reported by the digest entry points."""


class InvalidArgument(DigestError):
    """Raised for an unknown output format or text that cannot be encoded."""


class InputTooLarge(DigestError):
    """Raised when a message's bit length does not fit the 64-bit length field."""
