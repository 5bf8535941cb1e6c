"""Convert between hex-per-line text files and blobby files."""

from __future__ import annotations

import binascii
import sys
from typing import BinaryIO

from cryptoutils.blobby import BlobbyError, BlobIterator, encode_blobs


def encode(reader: BinaryIO, writer: BinaryIO) -> int:
    """Encode hex lines from ``reader`` as blobby data into ``writer``.

    Returns the number of bytes written.
    """
    blobs = []
    for line in reader:
        line = line.rstrip(b"\n")
        if line.endswith(b"\r"):
            line = line[:-1]
        try:
            blobs.append(binascii.unhexlify(line))
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid hex data: {exc}") from exc
    data, idx_len = encode_blobs(blobs)
    print(f"Index len: {idx_len}")
    writer.write(data)
    return len(data)


def decode(reader: BinaryIO, writer: BinaryIO) -> int:
    """Decode blobby data from ``reader`` into hex lines in ``writer``.

    Returns the number of records written.
    """
    data = reader.read()
    count = 0
    try:
        for blob in BlobIterator(data):
            writer.write(blob.hex().encode("ascii"))
            writer.write(b"\n")
            count += 1
    except BlobbyError as exc:
        raise ValueError(f"invalid blobby data: {exc.kind.name}") from exc
    return count


def main(argv: list[str] | None = None) -> int:
    """Run the converter: ``convert (encode|decode) IN OUT``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 3:
        print("usage: convert (encode|decode) <input> <output>", file=sys.stderr)
        return 2
    mode, in_path, out_path = args[:3]
    if mode == "encode":
        action = encode
    elif mode == "decode":
        action = decode
    else:
        print("Error: unknown mode", file=sys.stderr)
        return 1
    try:
        with open(in_path, "rb") as in_file, open(out_path, "wb") as out_file:
            count = action(in_file, out_file)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Processed {count} record(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())