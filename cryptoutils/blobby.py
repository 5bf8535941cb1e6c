"""Reading and writing the blobby binary blob storage format.

The format stores a sequence of binary blobs and uses git-flavoured
variable-length quantities (VLQ) for unsigned numbers.

The data starts with a count ``d`` of de-duplicated blobs, followed by ``d``
entries, each a VLQ length ``m`` and ``m`` bytes.  After them comes any number
of entries, each a VLQ ``n``.  If the lowest bit of ``n`` is 0, ``n >> 1``
bytes of blob follow.  Otherwise the entry refers to de-duplicated blob
number ``n >> 1``.
"""

from __future__ import annotations

import enum
from collections import Counter
from collections.abc import Iterable, Iterator

NEXT_MASK = 0b1000_0000
VAL_MASK = 0b0111_1111
_MAX_VLQ_BYTES = 4


class ErrorKind(enum.Enum):
    """Kinds of failure when decoding blobby data."""

    INVALID_VLQ = "decoded VLQ number is too big"
    INVALID_INDEX = "invalid de-duplicated blob index"
    UNEXPECTED_END = "unexpected end of data"
    NOT_ENOUGH_ELEMENTS = "not enough elements for a group of blobs"


class BlobbyError(ValueError):
    """Raised when blobby data cannot be decoded."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def read_vlq(data: bytes, pos: int) -> tuple[int, int]:
    """Read a VLQ value from ``data`` at ``pos``.

    Returns the value and the position just after it.  Values longer than
    four bytes are rejected.
    """
    if pos >= len(data):
        raise BlobbyError(ErrorKind.UNEXPECTED_END)
    byte = data[pos]
    pos += 1
    more = byte & NEXT_MASK
    value = byte & VAL_MASK
    for _ in range(_MAX_VLQ_BYTES - 1):
        if not more:
            return value, pos
        if pos >= len(data):
            raise BlobbyError(ErrorKind.UNEXPECTED_END)
        byte = data[pos]
        pos += 1
        more = byte & NEXT_MASK
        value = ((value + 1) << 7) + (byte & VAL_MASK)
    if more:
        raise BlobbyError(ErrorKind.INVALID_VLQ)
    return value, pos


def encode_vlq(value: int) -> bytes:
    """Encode ``value`` as a VLQ of at most four bytes."""
    if value < 0:
        raise ValueError("integer is negative")
    out = [value & VAL_MASK]
    value >>= 7
    while value:
        if len(out) == _MAX_VLQ_BYTES:
            raise ValueError("integer is too big")
        value -= 1
        out.append(NEXT_MASK | (value & VAL_MASK))
        value >>= 7
    return bytes(reversed(out))


def _index_priority(blob: bytes) -> int:
    if blob == b"\x00":
        return 2
    if blob == b"\x01":
        return 1
    return 0


def encode_blobs(blobs: Iterable[bytes]) -> tuple[bytes, int]:
    """Encode ``blobs`` in blobby format.

    Returns the encoded data and the number of blobs placed in the
    de-duplication index.
    """
    blobs = [bytes(blob) for blob in blobs]
    counts = Counter(blob for blob in blobs if blob)

    index = sorted(blob for blob, count in counts.items() if count > 1)
    index.sort(key=lambda blob: (_index_priority(blob), counts[blob]))
    index.reverse()
    positions = {blob: i for i, blob in enumerate(index)}

    out = bytearray(encode_vlq(len(index)))
    for entry in index:
        out += encode_vlq(len(entry))
        out += entry

    for blob in blobs:
        dup_pos = positions.get(blob)
        if dup_pos is not None:
            out += encode_vlq((dup_pos << 1) + 1)
        else:
            out += encode_vlq(len(blob) << 1)
            out += blob

    return bytes(out), len(index)


class BlobIterator:
    """Iterator over the blobs stored in blobby data.

    A decoding error is raised once; iteration stops after it.
    """

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        count, pos = read_vlq(data, 0)
        dedup = []
        for _ in range(count):
            size, pos = read_vlq(data, pos)
            if pos + size > len(data):
                raise BlobbyError(ErrorKind.UNEXPECTED_END)
            dedup.append(data[pos:pos + size])
            pos += size
        self._data = data[pos:]
        self._dedup = tuple(dedup)
        self._pos = 0

    def __iter__(self) -> BlobIterator:
        return self

    def __next__(self) -> bytes:
        if self._pos >= len(self._data):
            raise StopIteration
        try:
            return self._read()
        except BlobbyError:
            self._exhaust()
            raise

    def _read(self) -> bytes:
        value, self._pos = read_vlq(self._data, self._pos)
        is_ref = value & 1
        value >>= 1
        if is_ref:
            if value >= len(self._dedup):
                raise BlobbyError(ErrorKind.INVALID_INDEX)
            return self._dedup[value]
        start = self._pos
        self._pos += value
        if self._pos > len(self._data):
            raise BlobbyError(ErrorKind.UNEXPECTED_END)
        return self._data[start:self._pos]

    def _exhaust(self) -> None:
        self._pos = len(self._data)


class BlobNIterator:
    """Iterator over consecutive groups of ``n`` blobs."""

    def __init__(self, data: bytes, n: int) -> None:
        if n < 1:
            raise ValueError("group size must be at least 1")
        self._inner = BlobIterator(data)
        self._n = n

    def __iter__(self) -> BlobNIterator:
        return self

    def __next__(self) -> tuple[bytes, ...]:
        group = []
        for i in range(self._n):
            try:
                group.append(next(self._inner))
            except StopIteration:
                if i == 0:
                    raise
                self._inner._exhaust()
                raise BlobbyError(ErrorKind.NOT_ENOUGH_ELEMENTS) from None
        return tuple(group)


def decode_blobs(data: bytes) -> list[bytes]:
    """Decode all blobs stored in ``data``."""
    return list(BlobIterator(data))


def _iter_groups(data: bytes, n: int) -> Iterator[tuple[bytes, ...]]:
    return BlobNIterator(data, n)