import functools
import importlib
import logging
import pkgutil
from collections.abc import Callable


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )


def bytes_to_hex(data: bytes) -> str:
    """Space separated lowercase hex, e.g. '74 80 00 2e'."""
    return data.hex(" ")


def parse_hex(text: str) -> bytes:
    """
    Inverse of bytes_to_hex. Accepts contiguous or whitespace separated
    digits and an optional '0x' prefix.
    """
    text = text.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    return bytes.fromhex(text)


def successor(key: bytes) -> bytes:
    """Smallest key strictly greater than `key`."""
    return key + b"\x00"


def scan(package: str):
    """
    Decorator that imports every module of `package` before calling the
    decorated function, so that decorator-registered components exist.
    """
    def decorator(func: Callable):

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            py_package = importlib.import_module(package)

            for module_info in pkgutil.iter_modules(py_package.__path__):
                module_name = f"{package}.{module_info.name}"
                importlib.import_module(module_name)

            return func(*args, **kwargs)

        return wrapper

    return decorator
