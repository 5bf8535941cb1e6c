"""Fixed-size buffer for processing data in blocks."""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence

_MAX_BLOCK_SIZE = 255


class BufferKind(enum.Enum):
    """How a buffer treats a completely filled block.

    An eager buffer processes a full block at once, so its position always
    lies in ``0..block_size``.  A lazy buffer keeps the last full block until
    more data arrives, so its position lies in ``0..=block_size``.
    """

    EAGER = "eager"
    LAZY = "lazy"

    def invariant(self, pos: int, block_size: int) -> bool:
        """Return whether ``pos`` is a valid position for this kind."""
        if self is BufferKind.EAGER:
            return pos < block_size
        return pos <= block_size

    def split_blocks(self, data: bytes, block_size: int) -> tuple[list[bytes], bytes]:
        """Split ``data`` into whole blocks and a tail kept in the buffer."""
        count = len(data) // block_size
        if self is BufferKind.LAZY and data and len(data) % block_size == 0:
            count -= 1
        split = count * block_size
        blocks = [data[i:i + block_size] for i in range(0, split, block_size)]
        return blocks, data[split:]


class BlockBuffer:
    """Buffer that collects data and hands it on in whole blocks."""

    def __init__(
        self,
        block_size: int,
        kind: BufferKind = BufferKind.EAGER,
        data: bytes = b"",
    ) -> None:
        if not 0 < block_size <= _MAX_BLOCK_SIZE:
            raise ValueError(
                f"block size must be between 1 and {_MAX_BLOCK_SIZE}, got {block_size}"
            )
        data = bytes(data)
        if not kind.invariant(len(data), block_size):
            raise ValueError(
                f"{len(data)} bytes of data are not valid for a {kind.value} "
                f"buffer with block size {block_size}"
            )
        self._size = block_size
        self._kind = kind
        self._buffer = bytearray(block_size)
        self._buffer[:len(data)] = data
        self._pos = len(data)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(block_size={self._size}, "
            f"kind={self._kind}, pos={self._pos})"
        )

    @property
    def kind(self) -> BufferKind:
        """The buffer kind."""
        return self._kind

    def copy(self) -> BlockBuffer:
        """Return an independent copy of this buffer."""
        clone = BlockBuffer(self._size, self._kind)
        clone._buffer[:] = self._buffer
        clone._pos = self._pos
        return clone

    def digest_blocks(
        self, data: bytes, compress: Callable[[list[bytes]], None]
    ) -> None:
        """Feed ``data`` through the buffer, passing whole blocks to ``compress``.

        ``compress`` receives a non-empty list of blocks each time it is called.
        """
        data = bytes(data)
        pos = self._pos
        rem = self._size - pos
        n = len(data)
        if self._kind.invariant(n, rem):
            self._buffer[pos:pos + n] = data
            self._pos = pos + n
            return
        if pos != 0:
            left, data = data[:rem], data[rem:]
            self._buffer[pos:] = left
            compress([bytes(self._buffer)])

        blocks, leftover = self._kind.split_blocks(data, self._size)
        if blocks:
            compress(blocks)

        self._buffer[:len(leftover)] = leftover
        self._pos = len(leftover)

    def reset(self) -> None:
        """Reset the cursor position to zero."""
        self._pos = 0

    def pad_with_zeros(self) -> bytes:
        """Pad the buffered data with zeros and return the resulting block."""
        pos = self._pos
        self._buffer[pos:] = bytes(self._size - pos)
        self._pos = 0
        return bytes(self._buffer)

    @property
    def pos(self) -> int:
        """Current cursor position."""
        return self._pos

    @property
    def data(self) -> bytes:
        """The data stored in the buffer."""
        return bytes(self._buffer[:self._pos])

    def set(self, block: bytes, pos: int) -> None:
        """Replace the buffer contents with ``block`` and move the cursor to ``pos``."""
        block = bytes(block)
        if len(block) != self._size:
            raise ValueError(
                f"block must be {self._size} bytes long, got {len(block)}"
            )
        if not self._kind.invariant(pos, self._size):
            raise ValueError(f"position {pos} is not valid for this buffer")
        self._buffer[:] = block
        self._pos = pos

    @property
    def size(self) -> int:
        """Size of the block in bytes."""
        return self._size

    @property
    def remaining(self) -> int:
        """Number of unused bytes in the buffer."""
        return self._size - self._pos

    def _require_eager(self, operation: str) -> None:
        if self._kind is not BufferKind.EAGER:
            raise TypeError(f"{operation} requires an eager buffer")

    def set_data(
        self, length: int, process_blocks: Callable[[Sequence[bytearray]], None]
    ) -> bytes:
        """Return ``length`` bytes of generated data.

        Bytes left in the buffer are used first.  ``process_blocks`` fills the
        zeroed blocks it is given in place; surplus bytes of the last generated
        block are kept for the next call.
        """
        self._require_eager("set_data")
        if length < 0:
            raise ValueError("length must not be negative")
        pos = self._pos
        out = bytearray()
        if pos != 0:
            if length < self.remaining:
                self._pos = pos + length
                return bytes(self._buffer[pos:pos + length])
            out += self._buffer[pos:]

        rest = length - len(out)
        blocks = [bytearray(self._size) for _ in range(rest // self._size)]
        process_blocks(blocks)
        for block in blocks:
            out += block

        leftover = rest % self._size
        if leftover:
            block = bytearray(self._size)
            process_blocks([block])
            out += block[:leftover]
            self._buffer[:] = block
        self._pos = leftover
        return bytes(out)

    def digest_pad(
        self, delim: int, suffix: bytes, compress: Callable[[bytes], None]
    ) -> None:
        """Pad the buffered data with ``delim``, zeros and ``suffix``, then compress.

        If there is not enough room, ``compress`` is called twice.
        """
        self._require_eager("digest_pad")
        suffix = bytes(suffix)
        if len(suffix) > self._size:
            raise ValueError("suffix is too long")
        pos = self._pos
        self._buffer[pos] = delim
        self._buffer[pos + 1:] = bytes(self._size - pos - 1)

        n = self._size - len(suffix)
        if self._size - pos - 1 < len(suffix):
            compress(bytes(self._buffer))
            block = bytearray(self._size)
            block[n:] = suffix
            compress(bytes(block))
        else:
            self._buffer[n:] = suffix
            compress(bytes(self._buffer))
        self._pos = 0

    def len64_padding_be(self, data_len: int, compress: Callable[[bytes], None]) -> None:
        """Pad with 0x80, zeros and a 64-bit big-endian message length."""
        self.digest_pad(0x80, data_len.to_bytes(8, "big"), compress)

    def len64_padding_le(self, data_len: int, compress: Callable[[bytes], None]) -> None:
        """Pad with 0x80, zeros and a 64-bit little-endian message length."""
        self.digest_pad(0x80, data_len.to_bytes(8, "little"), compress)

    def len128_padding_be(self, data_len: int, compress: Callable[[bytes], None]) -> None:
        """Pad with 0x80, zeros and a 128-bit big-endian message length."""
        self.digest_pad(0x80, data_len.to_bytes(16, "big"), compress)