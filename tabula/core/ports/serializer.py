from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines the interface for encoding/decoding snapshot files.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - able to carry raw bytes without re-encoding them
    """

    def serialize(self, obj: Any) -> bytes:
        """Encode a Python object into bytes."""

    def deserialize(self, data: bytes) -> Any:
        """Decode bytes back into a Python object."""
