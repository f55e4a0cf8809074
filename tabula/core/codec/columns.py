from typing import Iterable

from tabula.core.codec.chunked import ChunkStatus, decode_bytes, encode_bytes
from tabula.core.codec.integer import I64_SIZE, decode_i64, encode_i64
from tabula.core.models.column import (
    BytesColumn,
    ColumnValue,
    IntColumn,
    TruncatedInt,
    UnknownColumn,
)

BYTES_FLAG = 0x01
INT_FLAG = 0x03


def decode_columns(data: bytes) -> list[ColumnValue]:
    """
    Decode the tagged column values that follow an index key's id.

    Values are reported positionally. Decoding stops at the end of the
    input, at the first unsupported type tag, or at the first value
    whose extent cannot be determined (a truncated integer or a byte
    string without a clean terminal group).
    """
    values: list[ColumnValue] = []
    pos = 0

    while pos < len(data):
        flag = data[pos]
        pos += 1

        if flag == INT_FLAG:
            if pos + I64_SIZE > len(data):
                values.append(TruncatedInt(available=len(data) - pos))
                break
            values.append(IntColumn(decode_i64(data, pos)))
            pos += I64_SIZE

        elif flag == BYTES_FLAG:
            result = decode_bytes(data, pos)
            values.append(BytesColumn(result.data, result.status))
            pos += result.consumed
            if result.status is not ChunkStatus.complete:
                break

        else:
            values.append(UnknownColumn(flag))
            break

    return values


def encode_columns(values: Iterable[int | bytes | str]) -> bytes:
    out = bytearray()
    for value in values:
        # bool is an int subclass but has no column encoding
        if isinstance(value, bool):
            raise TypeError(f"Unsupported column value type: {type(value).__name__}")
        if isinstance(value, int):
            out.append(INT_FLAG)
            out += encode_i64(value)
        elif isinstance(value, (bytes, bytearray)):
            out.append(BYTES_FLAG)
            out += encode_bytes(bytes(value))
        elif isinstance(value, str):
            out.append(BYTES_FLAG)
            out += encode_bytes(value.encode("utf-8"))
        else:
            raise TypeError(f"Unsupported column value type: {type(value).__name__}")
    return bytes(out)
