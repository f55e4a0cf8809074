import logging
from dataclasses import dataclass
from typing import AsyncIterator

from tabula.core.codec.keys import TableKeyCodec
from tabula.core.helpers.utils import bytes_to_hex
from tabula.core.models.inspection import Inspection
from tabula.core.models.key import EntityKind, KeyMode
from tabula.core.ports.storage import Storage
from tabula.core.service.inspector import KeyInspector


@dataclass(frozen=True)
class ScanFilter:
    table_id: int | None = None
    """Restrict the scan to one table. None scans the whole table space."""

    kind: EntityKind | None = None
    """Start at the records or the indexes of the table."""

    mode: KeyMode = KeyMode.raw
    """How keys are laid out in the scanned keyspace."""

    limit: int | None = 20

    def describe(self) -> str:
        if self.table_id is None:
            return "all tables"
        if self.kind is None:
            return f"table_id={self.table_id}"
        return f"table_id={self.table_id}, type={self.kind}"


class ScanService:
    """
    Streams inspected key/value pairs of a table range out of a Storage.

    Bad keys never interrupt a scan: whatever the codec makes of them
    is yielded and the scan moves on.
    """
    def __init__(
        self,
        storage: Storage,
        inspector: KeyInspector,
        keyspace: bytes,
        batch_size: int = 256,
    ) -> None:
        self._storage = storage
        self._inspector = inspector
        self._keyspace = keyspace
        self._batch_size = batch_size
        self._logger = logging.getLogger("core.service.scanner")

    @staticmethod
    def key_range(scan_filter: ScanFilter) -> tuple[bytes, bytes]:
        return TableKeyCodec.scan_range(
            scan_filter.table_id,
            scan_filter.kind,
            scan_filter.mode,
        )

    async def scan(self, scan_filter: ScanFilter) -> AsyncIterator[Inspection]:
        start, end = self.key_range(scan_filter)
        self._logger.info(f"Scanning [{scan_filter.describe()}] in {scan_filter.mode} mode")
        self._logger.debug(f"start_key={bytes_to_hex(start)} end_key={bytes_to_hex(end)}")

        count = 0
        async for key, value in self._storage.iter(
            keyspace=self._keyspace,
            start=start,
            end=end,
            limit=scan_filter.limit,
            batch_size=self._batch_size,
        ):
            count += 1
            yield self._inspector.inspect(key, value, scan_filter.mode)

        self._logger.info(f"Found {count} key-value pairs")
