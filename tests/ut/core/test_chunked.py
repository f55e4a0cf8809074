import pytest

from tabula.core.codec.chunked import ChunkStatus, decode_bytes, encode_bytes


@pytest.mark.ut
def test_encode_empty_input():
    assert encode_bytes(b"") == b"\x00" * 8 + b"\xf7"


@pytest.mark.ut
def test_encode_partial_group():
    assert encode_bytes(b"abc") == b"abc" + b"\x00" * 5 + b"\xfa"


@pytest.mark.ut
def test_encode_full_group_adds_empty_terminal_group():
    data = b"abcdefgh"
    assert encode_bytes(data) == data + b"\xff" + b"\x00" * 8 + b"\xf7"


@pytest.mark.ut
@pytest.mark.parametrize("length", [0, 1, 7, 8, 9, 16, 17])
def test_encoded_length_is_multiple_of_group(length):
    encoded = encode_bytes(bytes(range(length)))
    assert len(encoded) % 9 == 0
    assert len(encoded) == 9 * (length // 8 + 1)


@pytest.mark.ut
@pytest.mark.parametrize("length", [0, 1, 7, 8, 9, 16, 17])
def test_chunk_round_trip(length):
    data = bytes((i * 37) % 256 for i in range(length))
    encoded = encode_bytes(data)

    result = decode_bytes(encoded)

    assert result.data == data
    assert result.consumed == len(encoded)
    assert result.status is ChunkStatus.complete
    assert result.ok


@pytest.mark.ut
def test_prefix_sorts_first():
    s2 = b"abcdefghij"
    for n in range(len(s2)):
        assert encode_bytes(s2[:n]) < encode_bytes(s2)


@pytest.mark.ut
def test_encoding_preserves_order():
    values = [b"", b"\x00", b"\x00\x00", b"a", b"a\x00", b"ab", b"abcdefgh", b"abcdefgh\x00", b"b", b"\xff"]
    assert sorted(values, key=encode_bytes) == sorted(values)


@pytest.mark.ut
def test_decode_stops_after_terminal_group():
    encoded = encode_bytes(b"key")
    result = decode_bytes(encoded + b"\x01\x02\x03")

    assert result.data == b"key"
    assert result.consumed == len(encoded)


@pytest.mark.ut
def test_decode_from_offset():
    encoded = encode_bytes(b"hello world")
    result = decode_bytes(b"\x01" + encoded, 1)

    assert result.data == b"hello world"
    assert result.consumed == len(encoded)


@pytest.mark.ut
def test_malformed_marker():
    result = decode_bytes(b"\x00" * 8 + b"\x00")

    assert result.data == b""
    assert result.consumed == 9
    assert result.status is ChunkStatus.malformed
    assert not result.ok


@pytest.mark.ut
def test_malformed_marker_keeps_previous_groups():
    data = b"abcdefgh\xff" + b"zzzzzzzz" + b"\x05"
    result = decode_bytes(data)

    assert result.data == b"abcdefgh"
    assert result.consumed == 18
    assert result.status is ChunkStatus.malformed


@pytest.mark.ut
def test_incomplete_input():
    result = decode_bytes(b"abcdefgh\xff" + b"xy")

    assert result.data == b"abcdefgh"
    assert result.consumed == 9
    assert result.status is ChunkStatus.incomplete


@pytest.mark.ut
@pytest.mark.parametrize("data", [b"", b"t", b"t\x80\x00\x00"])
def test_short_input_is_incomplete(data):
    result = decode_bytes(data)

    assert result.data == b""
    assert result.consumed == 0
    assert result.status is ChunkStatus.incomplete


@pytest.mark.ut
def test_padding_bytes_are_not_checked():
    result = decode_bytes(b"ab" + b"\x07" * 6 + b"\xf9")

    assert result.data == b"ab"
    assert result.consumed == 9
    assert result.status is ChunkStatus.complete
