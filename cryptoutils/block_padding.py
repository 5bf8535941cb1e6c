"""Padding and unpadding of messages divided into blocks.

Each scheme takes a full block whose first ``pos`` bytes hold the message and
returns the padded block; unpadding returns the message.
"""

from __future__ import annotations

import abc

_MAX_COUNTED_BLOCK = 255


class UnpadError(ValueError):
    """Raised when a block holds malformed padding."""

    def __init__(self, message: str = "Unpad Error") -> None:
        super().__init__(message)


def _check_counted_size(block_size: int) -> None:
    if block_size > _MAX_COUNTED_BLOCK:
        raise ValueError("block size is too big for PKCS#7")


def _check_pos_below(pos: int, block_size: int) -> None:
    if not 0 <= pos < block_size:
        raise ValueError("`pos` is bigger or equal to block size")


def _check_pos_within(pos: int, block_size: int) -> None:
    if not 0 <= pos <= block_size:
        raise ValueError("`pos` is bigger than block size")


def _pkcs7_unpad(block: bytes, strict: bool) -> bytes:
    block = bytes(block)
    size = len(block)
    _check_counted_size(size)
    if not block:
        raise UnpadError()
    n = block[-1]
    if n == 0 or n > size:
        raise UnpadError()
    start = size - n
    if strict and any(byte != n for byte in block[start:-1]):
        raise UnpadError()
    return block[:start]


class Padding(abc.ABC):
    """A padding scheme for messages divided into blocks."""

    @abc.abstractmethod
    def pad(self, block: bytes, pos: int) -> bytes:
        """Pad ``block``, whose message occupies its first ``pos`` bytes."""

    @abc.abstractmethod
    def unpad(self, block: bytes) -> bytes:
        """Return the message held in the padded ``block``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ZeroPadding(Padding):
    """Pad with zeros.

    Not reversible for messages that end in zero bytes.
    """

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        _check_pos_within(pos, len(block))
        return block[:pos] + bytes(len(block) - pos)

    def unpad(self, block: bytes) -> bytes:
        return bytes(block).rstrip(b"\x00")


class Pkcs7(Padding):
    """Pad with bytes each equal to the number of bytes added."""

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        size = len(block)
        _check_counted_size(size)
        _check_pos_below(pos, size)
        n = size - pos
        return block[:pos] + bytes([n]) * n

    def unpad(self, block: bytes) -> bytes:
        return _pkcs7_unpad(block, strict=True)


class Iso10126(Padding):
    """Padding ending in the count of bytes added; other padding bytes are not checked.

    Padding bytes are written as in PKCS#7 rather than at random.
    """

    def pad(self, block: bytes, pos: int) -> bytes:
        return Pkcs7().pad(block, pos)

    def unpad(self, block: bytes) -> bytes:
        return _pkcs7_unpad(block, strict=False)


class AnsiX923(Padding):
    """Pad with zeros and a last byte equal to the number of bytes added."""

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        size = len(block)
        _check_counted_size(size)
        _check_pos_below(pos, size)
        return block[:pos] + bytes(size - pos - 1) + bytes([size - pos])

    def unpad(self, block: bytes) -> bytes:
        block = bytes(block)
        size = len(block)
        _check_counted_size(size)
        if not block:
            raise UnpadError()
        n = block[-1]
        if n == 0 or n > size:
            raise UnpadError()
        start = size - n
        if any(block[start:-1]):
            raise UnpadError()
        return block[:start]


class Iso7816(Padding):
    """Pad with the byte sequence ``80 00 .. 00``."""

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        size = len(block)
        _check_pos_below(pos, size)
        return block[:pos] + b"\x80" + bytes(size - pos - 1)

    def unpad(self, block: bytes) -> bytes:
        stripped = bytes(block).rstrip(b"\x00")
        if not stripped.endswith(b"\x80"):
            raise UnpadError()
        return stripped[:-1]


class NoPadding(Padding):
    """Leave the block as it is; unpadding returns the whole block."""

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        _check_pos_within(pos, len(block))
        return block

    def unpad(self, block: bytes) -> bytes:
        return bytes(block)