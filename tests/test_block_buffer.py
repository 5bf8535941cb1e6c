import pytest

from cryptoutils.block_buffer import BlockBuffer, BufferKind


def _run(buf, inputs):
    calls = []
    poses = []
    for i, data in enumerate(inputs):
        buf.digest_blocks(data, lambda blocks, i=i: calls.append((i, list(blocks))))
        poses.append(buf.pos)
    return calls, poses


def test_eager_digest_pad():
    buf = BlockBuffer(4, BufferKind.EAGER)
    inputs = [b"01234567", b"89", b"abcdefghij", b"klmnopqrs", b"tuv", b"wx"]
    calls, poses = _run(buf, inputs)
    assert calls == [
        (0, [b"0123", b"4567"]),
        (2, [b"89ab"]),
        (2, [b"cdef", b"ghij"]),
        (3, [b"klmn", b"opqr"]),
        (4, [b"stuv"]),
    ]
    assert poses == [0, 2, 0, 1, 0, 2]
    assert buf.pad_with_zeros() == b"wx\0\0"
    assert buf.pos == 0


def test_lazy_digest_pad():
    buf = BlockBuffer(4, BufferKind.LAZY)
    inputs = [b"01234567", b"89", b"abcdefghij", b"klmnopqrs"]
    calls, poses = _run(buf, inputs)
    assert calls == [
        (0, [b"0123"]),
        (1, [b"4567"]),
        (2, [b"89ab"]),
        (2, [b"cdef"]),
        (3, [b"ghij"]),
        (3, [b"klmn", b"opqr"]),
    ]
    assert poses == [4, 2, 4, 1]
    assert buf.pad_with_zeros() == b"s\0\0\0"
    assert buf.pos == 0


def test_eager_set_data():
    buf = BlockBuffer(4)
    counter = [0]

    def gen(blocks):
        for block in blocks:
            block[:] = bytes([counter[0]]) * len(block)
            counter[0] += 1

    assert buf.set_data(6, gen) == bytes([0, 0, 0, 0, 1, 1])
    assert buf.pos == 2
    assert buf.set_data(3, gen) == bytes([1, 1, 2])
    assert buf.pos == 1
    assert buf.set_data(3, gen) == bytes([2, 2, 2])
    assert counter[0] == 3
    assert buf.pos == 0


def _collect(method, *args):
    out = bytearray()
    method(*args, out.extend)
    return bytes(out)


def test_eager_paddings_len64():
    length = 0x0001_0203_0405_0607
    buf_be = BlockBuffer(8, data=b"\x42")
    buf_le = buf_be.copy()
    assert _collect(buf_be.len64_padding_be, length) == bytes([
        0x42, 0x80, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x00, 0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07,
    ])
    assert _collect(buf_le.len64_padding_le, length) == bytes([
        0x42, 0x80, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x07, 0x06, 0x05, 0x04, 0x03, 0x02, 0x01, 0x00,
    ])

    buf_be = BlockBuffer(10, data=b"\x42")
    buf_le = buf_be.copy()
    assert _collect(buf_be.len64_padding_be, length) == bytes(
        [0x42, 0x80, 0x00, 0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07]
    )
    assert _collect(buf_le.len64_padding_le, length) == bytes(
        [0x42, 0x80, 0x07, 0x06, 0x05, 0x04, 0x03, 0x02, 0x01, 0x00]
    )


def test_eager_paddings_len128():
    length = 0x0001_0203_0405_0607_0809_0A0B_0C0D_0E0F
    buf = BlockBuffer(16, data=b"\x42")
    assert _collect(buf.len128_padding_be, length) == bytes([
        0x42, 0x80, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x00, 0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07,
        0x08, 0x09, 0x0a, 0x0b, 0x0c, 0x0d, 0x0e, 0x0f,
    ])

    buf = BlockBuffer(24, data=b"\x42")
    assert _collect(buf.len128_padding_be, length) == bytes([
        0x42, 0x80, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x00, 0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07,
        0x08, 0x09, 0x0a, 0x0b, 0x0c, 0x0d, 0x0e, 0x0f,
    ])


def test_eager_digest_pad_custom():
    buf = BlockBuffer(4, data=b"\x42")
    assert _collect(buf.digest_pad, 0xFF, b"\x10\x11\x12") == bytes(
        [0x42, 0xFF, 0x00, 0x00, 0x00, 0x10, 0x11, 0x12]
    )
    assert buf.pos == 0

    buf = BlockBuffer(4, data=b"\x42")
    assert _collect(buf.digest_pad, 0xFF, b"\x10\x11") == bytes([0x42, 0xFF, 0x10, 0x11])


def test_copy_is_independent():
    buf = BlockBuffer(4, data=b"ab")
    clone = buf.copy()
    clone.digest_blocks(b"c", lambda blocks: None)
    assert buf.data == b"ab"
    assert clone.data == b"abc"


def test_data_and_remaining():
    buf = BlockBuffer(8, data=b"xyz")
    assert buf.data == b"xyz"
    assert buf.size == 8
    assert buf.remaining == 5
    buf.reset()
    assert buf.data == b""
    assert buf.remaining == 8


def test_set_replaces_contents():
    buf = BlockBuffer(4)
    buf.set(b"wxyz", 3)
    assert buf.pos == 3
    assert buf.data == b"wxy"


def test_set_rejects_invalid_position():
    with pytest.raises(ValueError):
        BlockBuffer(4).set(b"wxyz", 4)
    lazy = BlockBuffer(4, BufferKind.LAZY)
    lazy.set(b"wxyz", 4)
    assert lazy.data == b"wxyz"


def test_init_rejects_too_much_data():
    with pytest.raises(ValueError):
        BlockBuffer(4, BufferKind.EAGER, b"abcd")
    assert BlockBuffer(4, BufferKind.LAZY, b"abcd").pos == 4


@pytest.mark.parametrize("size", [0, 256])
def test_init_rejects_bad_block_size(size):
    with pytest.raises(ValueError):
        BlockBuffer(size)


def test_eager_only_operations_reject_lazy():
    lazy = BlockBuffer(4, BufferKind.LAZY)
    with pytest.raises(TypeError):
        lazy.set_data(3, lambda blocks: None)
    with pytest.raises(TypeError):
        lazy.digest_pad(0x80, b"", lambda block: None)


def test_digest_pad_suffix_too_long():
    with pytest.raises(ValueError, match="suffix is too long"):
        BlockBuffer(4).digest_pad(0x80, b"12345", lambda block: None)


def test_split_blocks_kinds():
    data = b"abcdefgh"
    assert BufferKind.EAGER.split_blocks(data, 4) == ([b"abcd", b"efgh"], b"")
    assert BufferKind.LAZY.split_blocks(data, 4) == ([b"abcd"], b"efgh")
    assert BufferKind.LAZY.split_blocks(b"", 4) == ([], b"")


def test_invariants():
    assert BufferKind.EAGER.invariant(3, 4) is True
    assert BufferKind.EAGER.invariant(4, 4) is False
    assert BufferKind.LAZY.invariant(4, 4) is True
    assert BufferKind.LAZY.invariant(5, 4) is False


def test_digest_blocks_preserves_all_data():
    buf = BlockBuffer(5)
    seen = bytearray()
    message = bytes(range(37))
    for start in range(0, len(message), 3):
        buf.digest_blocks(message[start:start + 3], lambda blocks: seen.extend(b"".join(blocks)))
    assert bytes(seen) + buf.data == message