from dataclasses import dataclass, field
from typing import Any

from tabula.core.codec.handle import HandleCandidate
from tabula.core.helpers.utils import bytes_to_hex
from tabula.core.models.key import ParsedKey


@dataclass(frozen=True)
class Inspection:
    """
    Human oriented description of one key/value pair.
    """
    key: bytes
    parsed: ParsedKey
    value: bytes | None = None
    handles: list[HandleCandidate] = field(default_factory=list)
    strings: list[str] = field(default_factory=list)

    @property
    def handle(self) -> HandleCandidate | None:
        """Preferred handle guess."""
        return self.handles[0] if self.handles else None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "key": bytes_to_hex(self.key),
            "decoded": self.parsed.to_dict(),
        }
        if self.value is None:
            return out

        out["value"] = bytes_to_hex(self.value)
        out["value_len"] = len(self.value)
        if self.handles:
            out["handle_candidates"] = [h.to_dict() for h in self.handles]
            out["handle"] = self.handles[0].value
        if self.strings:
            out["strings"] = self.strings
        return out
