import argparse

from tabctl.bootstrap.deps import get_dispatcher
from tabctl.core.model import Reply
from tabula.bootstrap.config.settings import TabulaConfig
from tabula.bootstrap.deps import build_inspector
from tabula.core.codec.keys import TableKeyCodec
from tabula.core.helpers.utils import parse_hex

dispatcher = get_dispatcher()


@dispatcher.command("decode")
def decode(config: TabulaConfig, namespace: argparse.Namespace) -> Reply:
    key = parse_hex(" ".join(namespace.key))
    value = parse_hex(namespace.value) if namespace.value else None
    mode = namespace.mode or config.scan.mode

    inspection = build_inspector(config).inspect(key, value, mode)
    return Reply(type="decode", data=inspection.to_dict())


@dispatcher.command("range")
def key_range(config: TabulaConfig, namespace: argparse.Namespace) -> Reply:
    mode = namespace.mode or config.scan.mode
    start, end = TableKeyCodec.scan_range(namespace.table_id, namespace.kind, mode)
    return Reply(
        type="range",
        data={
            "mode": str(mode),
            "start_key": start,
            "end_key": end,
        }
    )
