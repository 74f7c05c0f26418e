"""SHA-256 message schedule.

Each 512-bit block is read as 16 big-endian words, then extended to 64 words:

    W[i] = W[i-16] + σ0(W[i-15]) + W[i-7] + σ1(W[i-2])    (mod 2**32)
"""

from __future__ import annotations

from typing import List

from compress import MASK32, rotr


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    return (x & MASK32) >> n


def small_sigma0(x: int) -> int:
    """σ0(x) = rotr(x, 7) ^ rotr(x, 18) ^ shr(x, 3)."""
    return rotr(x, 7) ^ rotr(x, 18) ^ _shr(x, 3)


def small_sigma1(x: int) -> int:
    """σ1(x) = rotr(x, 17) ^ rotr(x, 19) ^ shr(x, 10)."""
    return rotr(x, 17) ^ rotr(x, 19) ^ _shr(x, 10)


def build_message_schedule(block: bytes) -> List[int]:
    """Given a 64-byte block, build the 64-word message schedule w[0..63]."""
    if len(block) != 64:
        raise ValueError(f"Expected 64-byte block, got {len(block)}")

    w: List[int] = [0] * 64

    for i in range(16):
        w[i] = int.from_bytes(block[4 * i : 4 * (i + 1)], byteorder="big")

    for i in range(16, 64):
        w[i] = (w[i - 16] + small_sigma0(w[i - 15]) + w[i - 7] + small_sigma1(w[i - 2])) & MASK32

    return w
