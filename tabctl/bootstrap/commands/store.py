import argparse
import asyncio
from pathlib import Path

from tabctl.bootstrap.deps import get_dispatcher
from tabctl.core.model import Reply
from tabula.bootstrap.config.settings import TabulaConfig
from tabula.bootstrap.deps import build_scanner, build_snapshot_loader, open_storage
from tabula.core.codec.keys import TableKeyCodec
from tabula.core.service.scanner import ScanFilter

dispatcher = get_dispatcher()


@dispatcher.command("scan")
def scan(config: TabulaConfig, namespace: argparse.Namespace) -> Reply:
    scan_filter = ScanFilter(
        table_id=namespace.table_id,
        kind=namespace.kind,
        mode=namespace.mode or config.scan.mode,
        limit=config.scan.limit if namespace.limit is None else namespace.limit,
    )

    async def collect() -> list[dict]:
        storage = open_storage(config)
        try:
            scanner = build_scanner(storage, config)
            return [i.to_dict() async for i in scanner.scan(scan_filter)]
        finally:
            await storage.close()

    pairs = asyncio.run(collect())
    return Reply(
        type="scan",
        data={
            "range": scan_filter.describe(),
            "mode": str(scan_filter.mode),
            "found": len(pairs),
            "pairs": pairs,
        }
    )


@dispatcher.command("load")
def load(config: TabulaConfig, namespace: argparse.Namespace) -> Reply:
    async def run() -> int:
        storage = open_storage(config)
        try:
            return await build_snapshot_loader(storage, config).load(Path(namespace.snapshot))
        finally:
            await storage.close()

    count = asyncio.run(run())
    return Reply(type="ok", data={"loaded": count, "snapshot": namespace.snapshot})


@dispatcher.command("dump")
def dump(config: TabulaConfig, namespace: argparse.Namespace) -> Reply:
    mode = namespace.mode or config.scan.mode
    start, end = TableKeyCodec.scan_range(namespace.table_id, namespace.kind, mode)

    async def run() -> int:
        storage = open_storage(config)
        try:
            loader = build_snapshot_loader(storage, config)
            return await loader.dump(Path(namespace.snapshot), start, end)
        finally:
            await storage.close()

    count = asyncio.run(run())
    return Reply(type="ok", data={"dumped": count, "snapshot": namespace.snapshot})
