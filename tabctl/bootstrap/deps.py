from functools import lru_cache

from tabctl.core.cmd import TabCmd
from tabctl.core.dispatcher import CommandDispatcher


@lru_cache
def get_dispatcher() -> CommandDispatcher:
    return CommandDispatcher()


@lru_cache
def get_cli() -> TabCmd:
    return TabCmd(get_dispatcher())
