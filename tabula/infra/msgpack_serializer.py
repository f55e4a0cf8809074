import msgpack
from typing import Any

from tabula.core.ports.serializer import Serializer


class MsgPackSerializer(Serializer):
    """
    MsgPack-based implementation of the Serializer interface.

    Bytes and str stay distinct on the wire (bin vs str types), which
    keeps binary keys intact across a dump/load cycle.
    """
    def serialize(self, obj: Any) -> bytes:
        return msgpack.packb(obj, use_bin_type=True)

    def deserialize(self, data: bytes) -> Any:
        return msgpack.unpackb(data, raw=False)
