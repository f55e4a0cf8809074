from dataclasses import dataclass
from typing import Any

from tabula.core.codec.chunked import ChunkStatus


@dataclass(frozen=True, slots=True)
class IntColumn:
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "int", "value": self.value}


@dataclass(frozen=True, slots=True)
class TruncatedInt:
    """An integer tag followed by fewer than 8 bytes."""
    available: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "int", "truncated": True, "available": self.available}


@dataclass(frozen=True, slots=True)
class BytesColumn:
    data: bytes
    status: ChunkStatus = ChunkStatus.complete

    @property
    def text(self) -> str | None:
        """
        String view of the bytes, or None when they are not clean UTF-8.
        Text carrying a replacement character is rejected as well.
        """
        try:
            decoded = self.data.decode("utf-8")
        except UnicodeDecodeError:
            return None
        if "\ufffd" in decoded:
            return None
        return decoded

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": "bytes", "data": self.data}
        text = self.text
        if text is not None:
            out = {"kind": "str", "value": text}
        if self.status is not ChunkStatus.complete:
            out["status"] = str(self.status)
        return out


@dataclass(frozen=True, slots=True)
class UnknownColumn:
    tag: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "unknown", "tag": f"0x{self.tag:02x}"}


ColumnValue = IntColumn | TruncatedInt | BytesColumn | UnknownColumn
