from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from tabula.core.codec.chunked import ChunkStatus
from tabula.core.models.column import ColumnValue


class KeyMode(StrEnum):
    raw = "raw"
    """The logical key was passed through the chunked encoder."""

    logical = "logical"
    """Plain concatenation of tags and fixed-width integers."""


class EntityKind(StrEnum):
    record = "record"
    index = "index"

    @property
    def tag(self) -> bytes:
        return RECORD_TAG if self is EntityKind.record else INDEX_TAG


TABLE_PREFIX = b"t"
RECORD_TAG = b"_r"
INDEX_TAG = b"_i"


@dataclass(frozen=True, slots=True)
class NotATableKey:
    def to_dict(self) -> dict[str, Any]:
        return {"kind": "not_a_table_key"}


@dataclass(frozen=True, slots=True)
class TruncatedKey:
    reason: str
    length: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "truncated", "reason": self.reason, "length": self.length}


@dataclass(frozen=True, slots=True)
class TablePrefix:
    table_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "table", "table_id": self.table_id}


@dataclass(frozen=True, slots=True)
class RecordKey:
    table_id: int
    row_id: int | None = None

    @property
    def truncated(self) -> bool:
        return self.row_id is None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": "record", "table_id": self.table_id}
        if self.truncated:
            out["truncated"] = True
        else:
            out["row_id"] = self.row_id
        return out


@dataclass(frozen=True, slots=True)
class IndexKey:
    table_id: int
    index_id: int | None = None
    columns: tuple[ColumnValue, ...] = field(default=())

    @property
    def truncated(self) -> bool:
        return self.index_id is None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": "index", "table_id": self.table_id}
        if self.truncated:
            out["truncated"] = True
        else:
            out["index_id"] = self.index_id
        if self.columns:
            out["columns"] = [c.to_dict() for c in self.columns]
        return out


@dataclass(frozen=True, slots=True)
class UnknownTag:
    table_id: int
    tag: bytes

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "unknown_tag", "table_id": self.table_id, "tag": self.tag.hex()}


KeyStructure = (
    NotATableKey
    | TruncatedKey
    | TablePrefix
    | RecordKey
    | IndexKey
    | UnknownTag
)


@dataclass(frozen=True, slots=True)
class ParsedKey:
    """
    Outcome of parsing one key.

    `trailing` is the number of raw-mode bytes left after the chunked
    envelope. The store appends version metadata there; it is reported
    as a count only. Both `trailing` and `envelope` are None for
    logical keys.
    """
    mode: KeyMode
    structure: KeyStructure
    trailing: int | None = None
    envelope: ChunkStatus | None = None

    @property
    def malformed(self) -> bool:
        return self.envelope is ChunkStatus.malformed

    def to_dict(self) -> dict[str, Any]:
        out = {"mode": str(self.mode), **self.structure.to_dict()}
        if self.trailing:
            out["trailing"] = self.trailing
        if self.envelope is not None and self.envelope is not ChunkStatus.complete:
            out["envelope"] = str(self.envelope)
        return out
