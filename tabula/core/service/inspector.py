import logging
from typing import Iterable

from tabula.core.codec.chunked import MARKER
from tabula.core.codec.handle import DEFAULT_PROBES, HandleProbe, find_handle_candidates
from tabula.core.codec.keys import TableKeyCodec
from tabula.core.models.inspection import Inspection
from tabula.core.models.key import IndexKey, KeyMode


def extract_ascii_strings(data: bytes, min_len: int = 4) -> list[str]:
    """
    Return the runs of printable ASCII at least `min_len` long.

    A 0xFF byte inside a run is skipped rather than ending it, so that
    strings split by chunk markers still come out whole.
    """
    runs: list[str] = []
    current = bytearray()

    for b in data:
        if 0x20 <= b < 0x7F:
            current.append(b)
        elif b == MARKER and current:
            continue
        else:
            if len(current) >= min_len:
                runs.append(current.decode("ascii"))
            current.clear()

    if len(current) >= min_len:
        runs.append(current.decode("ascii"))
    return runs


class KeyInspector:
    """
    Turns key/value pairs into Inspection records.

    Handles are only looked for in values of index entries, record
    values have no such layout.
    """
    def __init__(
        self,
        min_string_len: int = 4,
        probes: Iterable[HandleProbe] = DEFAULT_PROBES,
    ) -> None:
        self._min_string_len = min_string_len
        self._probes = tuple(probes)
        self._logger = logging.getLogger("core.service.inspector")

    def inspect(
        self,
        key: bytes,
        value: bytes | None = None,
        mode: KeyMode = KeyMode.logical,
    ) -> Inspection:
        parsed = TableKeyCodec.parse(key, mode)
        if parsed.malformed:
            self._logger.warning(f"Malformed chunk envelope in key {key.hex()}")

        if value is None:
            return Inspection(key=key, parsed=parsed)

        handles = []
        if isinstance(parsed.structure, IndexKey):
            handles = find_handle_candidates(value, self._probes)

        return Inspection(
            key=key,
            parsed=parsed,
            value=value,
            handles=handles,
            strings=extract_ascii_strings(value, self._min_string_len),
        )
