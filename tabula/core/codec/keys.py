from typing import Callable, Iterable

from tabula.core.codec.chunked import ChunkStatus, decode_bytes, encode_bytes
from tabula.core.codec.columns import decode_columns, encode_columns
from tabula.core.codec.integer import I64_MAX, decode_i64, encode_i64
from tabula.core.models.key import (
    INDEX_TAG,
    RECORD_TAG,
    TABLE_PREFIX,
    EntityKind,
    IndexKey,
    KeyMode,
    KeyStructure,
    NotATableKey,
    ParsedKey,
    RecordKey,
    TablePrefix,
    TruncatedKey,
    UnknownTag,
)

Normalizer = Callable[[bytes], tuple[bytes, int | None, ChunkStatus | None]]


def _unwrap_raw(key: bytes) -> tuple[bytes, int | None, ChunkStatus | None]:
    result = decode_bytes(key)
    return result.data, len(key) - result.consumed, result.status


def _identity(key: bytes) -> tuple[bytes, int | None, ChunkStatus | None]:
    return key, None, None


class TableKeyCodec:
    """
    Codec for table-store keys.

    Logical layout:

        key = 't' || table_id:8 || tag:2 || id:8 || columns

    with tag '_r' (record, id is the row id) or '_i' (index, id is the
    index id, followed by the indexed column values). Integers use the
    sign-flipped big-endian form, so logical keys sort by table, then
    entity kind, then id.

    In raw mode the whole logical key is additionally wrapped in the
    chunked byte encoding, and the store may append version metadata
    after the envelope.
    """
    TABLE_ID_END: int = 9
    TAG_END: int = 11
    SUFFIX_END: int = 19

    NORMALIZERS: dict[KeyMode, Normalizer] = {
        KeyMode.raw: _unwrap_raw,
        KeyMode.logical: _identity,
    }

    # Table keys all start with 't'; 'u' sorts after every one of them.
    TABLESPACE_START: bytes = TABLE_PREFIX
    TABLESPACE_END: bytes = b"u"

    @classmethod
    def parse(cls, key: bytes, mode: KeyMode = KeyMode.logical) -> ParsedKey:
        logical, trailing, envelope = cls.NORMALIZERS[mode](key)
        return ParsedKey(
            mode=mode,
            structure=cls.parse_logical(logical),
            trailing=trailing,
            envelope=envelope,
        )

    @classmethod
    def parse_logical(cls, key: bytes) -> KeyStructure:
        """
        Interpret an unwrapped key. Never raises: short keys and foreign
        tags come back as TruncatedKey / UnknownTag.
        """
        if not key.startswith(TABLE_PREFIX):
            return NotATableKey()

        if len(key) < cls.TABLE_ID_END:
            return TruncatedKey(reason="table key too short", length=len(key))

        table_id = decode_i64(key, 1)
        if len(key) < cls.TAG_END:
            return TablePrefix(table_id)

        tag = key[cls.TABLE_ID_END:cls.TAG_END]
        has_suffix = len(key) >= cls.SUFFIX_END

        if tag == RECORD_TAG:
            if not has_suffix:
                return RecordKey(table_id)
            return RecordKey(table_id, decode_i64(key, cls.TAG_END))

        if tag == INDEX_TAG:
            if not has_suffix:
                return IndexKey(table_id)
            index_id = decode_i64(key, cls.TAG_END)
            columns = decode_columns(key[cls.SUFFIX_END:])
            return IndexKey(table_id, index_id, tuple(columns))

        return UnknownTag(table_id, tag)

    @classmethod
    def is_index_key(cls, key: bytes, mode: KeyMode = KeyMode.logical) -> bool:
        return isinstance(cls.parse(key, mode).structure, IndexKey)

    @classmethod
    def wrap(cls, logical: bytes, mode: KeyMode) -> bytes:
        if KeyMode(mode) is KeyMode.raw:
            return encode_bytes(logical)
        return logical

    @classmethod
    def table_prefix(
        cls,
        table_id: int,
        kind: EntityKind | None = None,
        mode: KeyMode = KeyMode.logical,
    ) -> bytes:
        logical = TABLE_PREFIX + encode_i64(table_id)
        if kind is not None:
            logical += kind.tag
        return cls.wrap(logical, mode)

    @classmethod
    def record_key(
        cls,
        table_id: int,
        row_id: int,
        mode: KeyMode = KeyMode.logical,
    ) -> bytes:
        logical = TABLE_PREFIX + encode_i64(table_id) + RECORD_TAG + encode_i64(row_id)
        return cls.wrap(logical, mode)

    @classmethod
    def index_key(
        cls,
        table_id: int,
        index_id: int,
        columns: Iterable[int | bytes | str] = (),
        mode: KeyMode = KeyMode.logical,
    ) -> bytes:
        logical = (
            TABLE_PREFIX
            + encode_i64(table_id)
            + INDEX_TAG
            + encode_i64(index_id)
            + encode_columns(columns)
        )
        return cls.wrap(logical, mode)

    @classmethod
    def scan_range(
        cls,
        table_id: int | None = None,
        kind: EntityKind | None = None,
        mode: KeyMode = KeyMode.logical,
    ) -> tuple[bytes, bytes]:
        """
        Return the [start, end) boundaries covering a table's keys.

        The end bound is the bare prefix of the next table: every key of
        table N sorts below the prefix of table N + 1 in both modes.
        Without a table id the whole table space is returned.
        """
        if table_id is None:
            return cls.TABLESPACE_START, cls.TABLESPACE_END

        start = cls.table_prefix(table_id, kind, mode)
        if table_id == I64_MAX:
            end = cls.wrap(cls.TABLESPACE_END, mode)
        else:
            end = cls.table_prefix(table_id + 1, None, mode)
        return start, end
