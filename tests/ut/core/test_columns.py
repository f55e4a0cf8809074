import pytest

from tabula.core.codec.chunked import ChunkStatus, encode_bytes
from tabula.core.codec.columns import decode_columns, encode_columns
from tabula.core.codec.integer import encode_i64
from tabula.core.models.column import BytesColumn, IntColumn, TruncatedInt, UnknownColumn


@pytest.mark.ut
def test_decode_string_column():
    values = decode_columns(b"\x01" + encode_bytes(b"abc"))

    assert values == [BytesColumn(b"abc")]
    assert values[0].text == "abc"


@pytest.mark.ut
def test_decode_int_column():
    assert decode_columns(b"\x03" + encode_i64(-5)) == [IntColumn(-5)]


@pytest.mark.ut
def test_decode_multiple_columns_in_order():
    data = encode_columns([7, "abc", b"\xff\xfe", "a longer string value"])

    values = decode_columns(data)

    assert values == [
        IntColumn(7),
        BytesColumn(b"abc"),
        BytesColumn(b"\xff\xfe"),
        BytesColumn(b"a longer string value"),
    ]
    assert values[2].text is None
    assert values[3].text == "a longer string value"


@pytest.mark.ut
def test_decode_empty_input():
    assert decode_columns(b"") == []


@pytest.mark.ut
def test_truncated_int_stops_decoding():
    values = decode_columns(encode_columns([1]) + b"\x03\x80\x01")

    assert values == [IntColumn(1), TruncatedInt(available=2)]


@pytest.mark.ut
def test_unknown_tag_stops_decoding():
    data = encode_columns([1]) + b"\x05" + encode_columns([2])

    assert decode_columns(data) == [IntColumn(1), UnknownColumn(0x05)]


@pytest.mark.ut
def test_unterminated_bytes_column_stops_decoding():
    values = decode_columns(b"\x01abc\x03")

    assert values == [BytesColumn(b"", ChunkStatus.incomplete)]


@pytest.mark.ut
def test_malformed_bytes_column_stops_decoding():
    data = b"\x01" + b"abcdefgh" + b"\x10" + encode_columns([3])

    assert decode_columns(data) == [BytesColumn(b"", ChunkStatus.malformed)]


@pytest.mark.ut
def test_text_view_rejects_replacement_character():
    assert BytesColumn("ok".encode()).text == "ok"
    assert BytesColumn("bad�".encode()).text is None
    assert BytesColumn(b"\xc3\x28").text is None


@pytest.mark.ut
def test_encode_columns_str_is_utf8():
    assert encode_columns(["é"]) == b"\x01" + encode_bytes("é".encode("utf-8"))


@pytest.mark.ut
@pytest.mark.parametrize("value", [1.5, True, None, ["a"]])
def test_encode_columns_rejects_other_types(value):
    with pytest.raises(TypeError):
        encode_columns([value])


@pytest.mark.ut
def test_column_to_dict():
    assert IntColumn(3).to_dict() == {"kind": "int", "value": 3}
    assert BytesColumn(b"abc").to_dict() == {"kind": "str", "value": "abc"}
    assert BytesColumn(b"\xff").to_dict() == {"kind": "bytes", "data": b"\xff"}
    assert UnknownColumn(0x05).to_dict() == {"kind": "unknown", "tag": "0x05"}
    assert BytesColumn(b"", ChunkStatus.incomplete).to_dict() == {
        "kind": "str",
        "value": "",
        "status": "incomplete",
    }
