class CodecError(ValueError):
    """
    Raised when a codec function is called outside its contract.

    Malformed keys are never reported this way: the key grammar always
    answers with a descriptive variant. A CodecError means the caller
    asked for something the format cannot express, e.g. a fixed-width
    read past the end of a buffer.
    """


class ShortBufferError(CodecError):
    def __init__(self, needed: int, available: int) -> None:
        super().__init__(
            f"Invalid fixed-width read: need {needed} bytes, got {available}"
        )
        self.needed = needed
        self.available = available


class IntegerRangeError(CodecError):
    def __init__(self, value: int) -> None:
        super().__init__(f"Value {value} does not fit in a signed 64-bit integer")
        self.value = value
