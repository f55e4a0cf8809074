from tabula.core.codec.integer import encode_i64
from tabula.core.codec.keys import TableKeyCodec
from tabula.core.models.key import KeyMode

KEYSPACE = b"kv"


def table_pairs(mode: KeyMode) -> list[tuple[bytes, bytes]]:
    """
    A small key space: tables -1, 7 and 8, each with two records and one
    index entry whose value carries the row handle after a flag byte.
    """
    pairs = []
    for table_id in (-1, 7, 8):
        for row_id in (1, 2):
            key = TableKeyCodec.record_key(table_id, row_id, mode)
            pairs.append((key, f"row-{table_id}-{row_id}".encode()))
        key = TableKeyCodec.index_key(table_id, 1, ["alice"], mode)
        pairs.append((key, b"\x00" + encode_i64(2)))
    return sorted(pairs)
