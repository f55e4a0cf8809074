from tabula.core.errors import IntegerRangeError, ShortBufferError

I64_SIZE = 8
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1

# Flipping the sign bit of a two's complement int64 is the same as
# shifting the signed range onto [0, 2**64).
_SIGN_SHIFT = 1 << 63


def encode_i64(value: int) -> bytes:
    """
    Encode a signed 64-bit integer as 8 big-endian bytes with the sign
    bit inverted.

    Unsigned byte-wise comparison of the output matches signed numeric
    ordering of the input:

        a < b  <=>  encode_i64(a) < encode_i64(b)
    """
    if not I64_MIN <= value <= I64_MAX:
        raise IntegerRangeError(value)
    return (value + _SIGN_SHIFT).to_bytes(I64_SIZE, "big")


def decode_i64(data: bytes, offset: int = 0) -> int:
    """
    Decode the 8 bytes at `offset` produced by `encode_i64`.

    Raises ShortBufferError when fewer than 8 bytes are available.
    """
    end = offset + I64_SIZE
    if offset < 0 or len(data) < end:
        raise ShortBufferError(I64_SIZE, max(len(data) - offset, 0))
    return int.from_bytes(data[offset:end], "big") - _SIGN_SHIFT
