import argparse
import functools
from typing import Protocol

from tabctl.core.model import Reply
from tabula.bootstrap.config.settings import TabulaConfig


class CommandHandler(Protocol):
    def __call__(
        self,
        config: TabulaConfig,
        namespace: argparse.Namespace,
    ) -> Reply:
        ...


class CommandDispatcher:
    def __init__(self) -> None:
        self._commands: dict[tuple[str, ...], CommandHandler] = {}

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return list(self._commands)

    def dispatch(
        self,
        *arguments: str,
        config: TabulaConfig,
        namespace: argparse.Namespace
    ) -> Reply:
        command = self._commands.get(arguments)
        if command is None:
            raise RuntimeError(f"Unknown '{' '.join(arguments)}' Command")
        return command(config, namespace)

    def command(self, *arguments: str):
        def decorator(func: CommandHandler):

            @functools.wraps(func)
            def wrapper(
                config: TabulaConfig,
                namespace: argparse.Namespace,
            ) -> Reply:
                return func(config, namespace)

            self._commands[arguments] = wrapper

            return wrapper

        return decorator
