from typing import Protocol, AsyncIterator


class Storage(Protocol):
    """
    Minimal asynchronous interface for a sorted key–value backend holding
    table-store keys. Multiple logical datasets may coexist via keyspaces,
    e.g. raw-mode and logical-mode copies of the same snapshot.

    Keys are compared as raw bytes. The key codec relies on this
    ordering: a table's keys form one contiguous range.
    """

    async def get(self, keyspace: bytes, key: bytes) -> bytes | None:
        """
        Retrieve the value associated with `key` inside the given
        keyspace. Returns None if the key does not exist.
        """

    async def put(self, keyspace: bytes, key: bytes, value: bytes) -> None:
        """
        Store `value` under `key` inside the keyspace, replacing any
        previous value.
        """

    async def put_many(self, items: list[tuple[bytes, bytes, bytes]]) -> None:
        """
        Store a batch of (keyspace, key, value) records in a single
        write transaction.
        """

    async def close(self) -> None:
        """
        Release all underlying resources. After calling close(), the
        instance must not be used again.
        """

    def iter(
        self,
        keyspace: bytes,
        start: bytes | None = None,
        end: bytes | None = None,
        limit: int | None = None,
        batch_size: int = 1024,
    ) -> AsyncIterator[tuple[bytes, bytes]]:
        """
        Asynchronously stream key–value pairs of the half-open range
        [start, end) in ascending byte order.

        A missing `start` begins at the first key, a missing `end` runs
        to the last one. The scan progresses in short batches, each one
        read in its own transaction; keys are neither skipped nor
        duplicated across batches. Iteration stops after `limit` items
        when a limit is given.
        """
