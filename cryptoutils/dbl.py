"""Doubling and inverse doubling of blocks over GF(2^n), big-endian."""

from __future__ import annotations

_CONSTANTS = {
    8: 0b1_1011,
    16: 0b1000_0111,
    32: 0b100_0010_0101,
}


def _params(block: bytes) -> tuple[int, int]:
    size = len(block)
    try:
        return size * 8, _CONSTANTS[size]
    except KeyError:
        raise ValueError(
            f"unsupported block size {size}; expected 8, 16 or 32 bytes"
        ) from None


def dbl(block: bytes) -> bytes:
    """Multiply ``block`` by x: shift left, reducing if the top bit was set."""
    bits, const = _params(block)
    value = int.from_bytes(block, "big")
    top = value >> (bits - 1)
    value = ((value << 1) & ((1 << bits) - 1)) ^ (top * const)
    return value.to_bytes(bits // 8, "big")


def inv_dbl(block: bytes) -> bytes:
    """Divide ``block`` by x, undoing :func:`dbl`."""
    bits, const = _params(block)
    value = int.from_bytes(block, "big")
    low = value & 1
    value = (value >> 1) ^ (low * ((1 << (bits - 1)) ^ (const >> 1)))
    return value.to_bytes(bits // 8, "big")