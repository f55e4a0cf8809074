from tabula.bootstrap.config.settings import TabulaConfig
from tabula.core.codec.handle import default_probes
from tabula.core.ports.storage import Storage
from tabula.core.service.inspector import KeyInspector
from tabula.core.service.scanner import ScanService
from tabula.core.service.snapshot import SnapshotLoader
from tabula.infra.lmdb_storage.aiobackend import LMDBStorage
from tabula.infra.msgpack_serializer import MsgPackSerializer


def build_inspector(config: TabulaConfig) -> KeyInspector:
    return KeyInspector(
        min_string_len=config.inspect.min_string_len,
        probes=default_probes(config.inspect.handle_upper_bound),
    )


def open_storage(config: TabulaConfig) -> Storage:
    config.store.path.mkdir(parents=True, exist_ok=True)
    return LMDBStorage(
        path=str(config.store.path),
        map_size=config.store.map_size,
        max_readers=config.store.max_readers,
    )


def build_scanner(storage: Storage, config: TabulaConfig) -> ScanService:
    return ScanService(
        storage=storage,
        inspector=build_inspector(config),
        keyspace=config.store.keyspace.encode(),
        batch_size=config.scan.batch_size,
    )


def build_snapshot_loader(storage: Storage, config: TabulaConfig) -> SnapshotLoader:
    return SnapshotLoader(
        storage=storage,
        serializer=MsgPackSerializer(),
        keyspace=config.store.keyspace.encode(),
        batch_size=config.scan.batch_size,
    )
