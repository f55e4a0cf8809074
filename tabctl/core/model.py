from dataclasses import dataclass, asdict
from typing import Any


@dataclass
class Reply:
    """
    Result of a tabctl command, handed to a Renderer.
    """
    type: str
    """
    type of reply, e.g. "ok", "scan", "error"
    """

    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
