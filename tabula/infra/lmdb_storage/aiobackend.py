import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import AsyncIterator

from tabula.core.helpers.utils import successor
from tabula.infra.lmdb_storage.backend import LMDBBackend


class LMDBStorage:
    """
    Storage implementation backed by an LMDB environment.

    LMDB is fully synchronous; every operation is delegated to a thread
    pool so the event loop never blocks. Reads and writes use separate
    pools, writes are serialized through a single worker.
    """
    def __init__(
        self,
        path: str,
        map_size: int = 1 << 30,
        max_dbs: int = 8,
        readahead: bool = True,
        writemap: bool = False,
        sync: bool = True,
        lock: bool = True,
        max_readers: int = 4,
        max_writers: int = 1,
    ) -> None:
        self._backend = LMDBBackend(
            path=path,
            map_size=map_size,
            max_dbs=max_dbs,
            readahead=readahead,
            writemap=writemap,
            sync=sync,
            lock=lock,
        )
        self._read_pool = ThreadPoolExecutor(max_workers=max_readers)
        self._write_pool = ThreadPoolExecutor(max_workers=max_writers)

    async def get(self, keyspace: bytes, key: bytes) -> bytes | None:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._read_pool, self._backend.get, keyspace, key
        )

    async def put(self, keyspace: bytes, key: bytes, value: bytes) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            self._write_pool, self._backend.put, keyspace, key, value
        )

    async def put_many(self, items: list[tuple[bytes, bytes, bytes]]) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            self._write_pool, self._backend.put_many, items
        )

    async def iter(
        self,
        keyspace: bytes,
        start: bytes | None = None,
        end: bytes | None = None,
        limit: int | None = None,
        batch_size: int = 1024,
    ) -> AsyncIterator[tuple[bytes, bytes]]:
        loop = asyncio.get_running_loop()
        remaining = None
        next_key = start

        if limit is not None and limit >= 0:
            if batch_size > limit:
                batch_size = limit
            remaining = limit

        if batch_size <= 0:
            return

        while True:
            batch: list[tuple[bytes, bytes]] = await loop.run_in_executor(
                self._read_pool,
                self._backend.scan,
                keyspace,
                next_key,
                end,
                batch_size,
            )

            if not batch:
                break

            for key, value in batch:
                yield key, value

                if remaining is not None:
                    remaining -= 1
                    if remaining <= 0:
                        return

            if len(batch) < batch_size:
                break

            # pagination strict
            next_key = successor(batch[-1][0])

    async def close(self) -> None:
        def shutdown() -> None:
            self._read_pool.shutdown(wait=True)
            self._write_pool.shutdown(wait=True)
            self._backend.close()

        await asyncio.to_thread(shutdown)
