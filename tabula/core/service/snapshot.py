import logging
from pathlib import Path

from tabula.core.ports.serializer import Serializer
from tabula.core.ports.storage import Storage


class SnapshotLoader:
    """
    Moves key/value pairs between a Storage keyspace and a snapshot file.

    A snapshot is a serialized list of [key, value] byte pairs in key
    order, so a range scanned from a live store can be replayed into a
    local one.
    """
    def __init__(
        self,
        storage: Storage,
        serializer: Serializer,
        keyspace: bytes,
        batch_size: int = 256,
    ) -> None:
        self._storage = storage
        self._serializer = serializer
        self._keyspace = keyspace
        self._batch_size = batch_size
        self._logger = logging.getLogger("core.service.snapshot")

    async def load(self, path: Path) -> int:
        pairs = self._serializer.deserialize(path.read_bytes())
        if not isinstance(pairs, list):
            raise ValueError(f"Invalid snapshot format: {path}")

        # nothing is written unless the whole snapshot is valid
        for position, item in enumerate(pairs):
            if (
                not isinstance(item, list)
                or len(item) != 2
                or not all(isinstance(x, bytes) for x in item)
            ):
                raise ValueError(f"Invalid snapshot entry at position {position}: {item!r}")

        for i in range(0, len(pairs), self._batch_size):
            await self._storage.put_many([
                (self._keyspace, key, value)
                for key, value in pairs[i:i + self._batch_size]
            ])

        self._logger.info(f"Loaded {len(pairs)} pairs from {path}")
        return len(pairs)

    async def dump(
        self,
        path: Path,
        start: bytes | None = None,
        end: bytes | None = None,
    ) -> int:
        pairs = [
            [key, value]
            async for key, value in self._storage.iter(
                keyspace=self._keyspace,
                start=start,
                end=end,
                batch_size=self._batch_size,
            )
        ]
        path.write_bytes(self._serializer.serialize(pairs))
        self._logger.info(f"Dumped {len(pairs)} pairs to {path}")
        return len(pairs)
