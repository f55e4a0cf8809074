import threading

import lmdb


class LMDBBackend:
    def __init__(
        self,
        path: str,
        map_size: int = 1 << 30,
        max_dbs: int = 8,
        readahead: bool = True,
        writemap: bool = False,
        sync: bool = True,
        lock: bool = True,
    ) -> None:
        self._env = lmdb.open(
            path,
            map_size=map_size,
            max_dbs=max_dbs,
            lock=lock,
            writemap=writemap,
            sync=sync,
            readahead=readahead,
        )
        self._dbis: dict[bytes, object] = {}
        self._dbis_lock = threading.Lock()

    def get(self, db_name: bytes, key: bytes) -> bytes | None:
        dbi = self._get_dbi(db_name)
        with self._env.begin(db=dbi, write=False) as txn:
            return txn.get(key)

    def put(self, db_name: bytes, key: bytes, value: bytes) -> bool:
        dbi = self._get_dbi(db_name)
        with self._env.begin(db=dbi, write=True) as txn:
            return txn.put(key, value)

    def put_many(self, items: list[tuple[bytes, bytes, bytes]]) -> None:
        dbis: dict[bytes, object] = {}
        for db_name, _, _ in items:
            if db_name not in dbis:
                dbis[db_name] = self._get_dbi(db_name)

        with self._env.begin(write=True) as txn:
            for db_name, key, value in items:
                txn.put(key, value, db=dbis[db_name])

    def scan(
        self,
        db_name: bytes,
        start: bytes | None = None,
        end: bytes | None = None,
        limit: int | None = None,
    ) -> list[tuple[bytes, bytes]]:
        """
        Scan the half-open range [start, end) of an LMDB database in
        ascending lexicographic order.

        Parameters
        ----------
        db_name : bytes
            Name of the LMDB database (physical DBI).

        start : bytes | None
            Inclusive lower bound. The cursor is positioned on the first
            key >= start, or on the first key of the DBI when None.

        end : bytes | None
            Exclusive upper bound. The scan stops on the first key >= end.
            None scans to the end of the DBI.

        limit : int | None
            Maximum number of items to return.

        The scan stops when the limit is reached, when the cursor cannot
        advance, or when the key reaches `end`.
        """
        if limit is not None and limit <= 0:
            return []

        if start is not None and end is not None and start >= end:
            return []

        dbi = self._get_dbi(db_name)
        items: list[tuple[bytes, bytes]] = []

        with self._env.begin(write=False) as txn:
            with txn.cursor(db=dbi) as cursor:
                if start is None:
                    positioned = cursor.first()
                else:
                    positioned = cursor.set_range(start)
                if not positioned:
                    return []

                while True:
                    key = cursor.key()
                    if end is not None and key >= end:
                        break

                    items.append((key, cursor.value()))
                    if limit is not None and len(items) >= limit:
                        break

                    if not cursor.next():
                        break

        return items

    def close(self) -> None:
        self._dbis.clear()
        self._env.close()

    def _get_dbi(self, name: bytes) -> object:
        with self._dbis_lock:
            dbi = self._dbis.get(name)
            if dbi is None:
                dbi = self._env.open_db(name)
                self._dbis[name] = dbi
            return dbi
