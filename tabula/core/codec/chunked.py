from dataclasses import dataclass
from enum import StrEnum

GROUP_SIZE = 8
MARKER = 0xFF
ENCODED_GROUP_SIZE = GROUP_SIZE + 1


class ChunkStatus(StrEnum):
    complete = "complete"
    """A terminal group was found and decoded."""

    malformed = "malformed"
    """A terminal marker announced more than 8 bytes of padding."""

    incomplete = "incomplete"
    """The input ran out before a terminal group."""


@dataclass(frozen=True, slots=True)
class ChunkDecodeResult:
    data: bytes
    consumed: int
    status: ChunkStatus

    @property
    def ok(self) -> bool:
        return self.status is ChunkStatus.complete


def encode_bytes(data: bytes) -> bytes:
    """
    Encode `data` into the order-preserving chunked form.

    Every full group of 8 bytes is followed by 0xFF. The last group
    holds the remaining 0..7 bytes (an empty group when the length is a
    multiple of 8), zero padded to 8 bytes and followed by
    0xFF - padding. The output length is always a multiple of 9.
    """
    out = bytearray()
    pos = 0
    while True:
        remaining = len(data) - pos
        if remaining >= GROUP_SIZE:
            out += data[pos:pos + GROUP_SIZE]
            out.append(MARKER)
            pos += GROUP_SIZE
            continue

        pad = GROUP_SIZE - remaining
        out += data[pos:]
        out += b"\x00" * pad
        out.append(MARKER - pad)
        return bytes(out)


def decode_bytes(data: bytes, offset: int = 0) -> ChunkDecodeResult:
    """
    Decode the chunked form starting at `offset`.

    Decoding is lenient: it never raises, since keys are often probed
    without knowing whether they are chunk encoded at all. The result
    carries how many input bytes were consumed from `offset` and why
    decoding stopped:

        complete    terminal group decoded
        malformed   terminal marker with padding > 8, group dropped
        incomplete  fewer than 9 bytes left before any terminal group
    """
    decoded = bytearray()
    pos = offset

    while pos + ENCODED_GROUP_SIZE <= len(data):
        group = data[pos:pos + GROUP_SIZE]
        marker = data[pos + GROUP_SIZE]
        pos += ENCODED_GROUP_SIZE

        if marker == MARKER:
            decoded += group
            continue

        pad = MARKER - marker
        if pad > GROUP_SIZE:
            return ChunkDecodeResult(bytes(decoded), pos - offset, ChunkStatus.malformed)

        decoded += group[:GROUP_SIZE - pad]
        return ChunkDecodeResult(bytes(decoded), pos - offset, ChunkStatus.complete)

    return ChunkDecodeResult(bytes(decoded), pos - offset, ChunkStatus.incomplete)
