# cryptoutils

A collection of small, dependency-free helpers for building and testing
cryptographic code.

## Modules

- `cryptoutils.blobby`: a compact binary format for storing sequences of
  byte blobs. Blobs that occur more than once are stored in a
  de-duplication index, and lengths are written as git-flavoured VLQs of at
  most four bytes. `encode_blobs` returns the encoded data and the size of
  the index. `decode_blobs` returns a list of blobs. `BlobIterator` yields
  blobs one by one, and `BlobNIterator` yields tuples of `n` consecutive
  blobs. Malformed data raises `BlobbyError`, whose `kind` is an
  `ErrorKind`. `read_vlq` and `encode_vlq` handle single numbers.
- `cryptoutils.block_buffer`: `BlockBuffer`, a fixed-size buffer with a
  block size of 1 to 255 bytes. It passes data to a compression function
  in whole blocks. A buffer is eager or lazy (`BufferKind.EAGER`,
  `BufferKind.LAZY`); a lazy buffer keeps the last full block until more
  data arrives. Eager buffers also offer `digest_pad`, `len64_padding_be`,
  `len64_padding_le`, `len128_padding_be` and `set_data`.
- `cryptoutils.block_padding`: block padding schemes `ZeroPadding`,
  `Pkcs7`, `Iso10126`, `AnsiX923`, `Iso7816` and `NoPadding`. Each `pad`
  returns a new padded block, and each `unpad` returns the message.
  Malformed padding raises `UnpadError`.
- `cryptoutils.dbl`: `dbl` and `inv_dbl`, doubling and inverse doubling
  in GF(2^n) for 8, 16 and 32-byte blocks, in big-endian order.
- `cryptoutils.hexlit`: `hex_bytes`, which turns one or more hex strings
  into a single `bytes` value. The strings may contain whitespace and `//`
  or `/* */` comments. Bad input raises `HexLiteralError`.
- `cryptoutils.comments`: `exclude_comments`, which works on byte
  iterables, and `strip_comments`, which works on strings. Both are the
  comment stripper used by `hex_bytes`, and bad comments raise
  `CommentError`.
- `cryptoutils.opaque`: `OpaqueRepr`, a mixin whose `repr` is
  `ClassName { ... }`, so that secrets are not shown.
- `cryptoutils.wycheproof`: parsing of the common parts of Wycheproof test
  vector files (`Suite`, `Group`, `Case`, `CaseResult`, `TestInfo`).
- `cryptoutils.generators`: per-family generators that turn a Wycheproof
  JSON file into `TestInfo` records.
- `cryptoutils.wycheproof2blb`: `find_algorithm` and `convert`, which
  write those records as a blobby file plus a descriptions file.

## Examples

```python
from cryptoutils.blobby import encode_blobs, decode_blobs
from cryptoutils.block_buffer import BlockBuffer
from cryptoutils.block_padding import Pkcs7
from cryptoutils.hexlit import hex_bytes

data, index_len = encode_blobs([b"hello", b"world", b"hello"])
assert decode_blobs(data) == [b"hello", b"world", b"hello"]

padded = Pkcs7().pad(b"test\xff\xff\xff\xff", 4)
assert padded == b"test\x04\x04\x04\x04"
assert Pkcs7().unpad(padded) == b"test"

buf = BlockBuffer(4)
blocks = []
buf.digest_blocks(b"0123456789", blocks.extend)
assert blocks == [b"0123", b"4567"]
assert buf.pad_with_zeros() == b"89\x00\x00"

assert hex_bytes("0a0B /* block comment */ 0c0d") == bytes([10, 11, 12, 13])
```

## Command-line tools

The `blobby-convert` command converts between a file of hex lines (one
blob per line) and a blobby file:

```
blobby-convert encode blobs.txt blobs.blb
blobby-convert decode blobs.blb blobs.txt
```

The `wycheproof2blb` command converts Wycheproof test vectors into a
blobby file and a descriptions file. It reads the vectors from the
`testvectors` directory of the checkout you give it:

```
wycheproof2blb path/to/wycheproof AES-GCM 128 aes128_gcm.blb aes128_gcm.txt
```

The key size is given in bits, and `0` takes all sizes. These algorithm
families are supported:

- AEAD: `AES-GCM`, `AES-GCM-SIV`, `CHACHA20-POLY1305`, `XCHACHA20-POLY1305`
- SIV and MAC: `AES-SIV-CMAC`, `AES-CMAC`
- HKDF: `HKDF-SHA-1`, `HKDF-SHA-256`, `HKDF-SHA-384`, `HKDF-SHA-512`
- HMAC: `HMACSHA1`, `HMACSHA224`, `HMACSHA256`, `HMACSHA384`, `HMACSHA512`
- Signatures: `EDDSA`, `secp256r1`, `secp256k1`

## Running the tests

```
pip install -e .[test]
pytest
```