import argparse
import cmd
import logging
import os
import shlex

from tabctl.core.dispatcher import CommandDispatcher
from tabctl.infra.format_renderer import RENDERERS
from tabula.bootstrap.config.loader import CONFIG_ENV
from tabula.bootstrap.config.settings import TabulaConfig, load_config
from tabula.core.models.key import EntityKind, KeyMode


class TabCmd(cmd.Cmd):
    intro = "Entering tabctl interactive mode. Type 'exit' or 'quit' to leave."
    prompt = "tabctl> "

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        argv: list[str] | None = None
    ) -> None:
        super().__init__()

        self._subparsers: dict[str, argparse.ArgumentParser] = {}
        self._argparser = self._argparse()
        self._args = self._argparser.parse_args(argv)
        if self._args.config:
            os.environ[CONFIG_ENV] = self._args.config

        self._config: TabulaConfig | None = None
        self._renderer = RENDERERS[self._args.output]()
        self._dispatcher = dispatcher
        self._logger = logging.getLogger("tabctl.cmd")

    @property
    def args(self) -> argparse.Namespace:
        return self._args

    @property
    def config(self) -> TabulaConfig:
        if self._config is None:
            self._config = load_config()
        return self._config

    @property
    def interactive(self) -> bool:
        return self._args.command is None

    def run(self) -> None:
        if self.interactive:
            self.cmdloop()
        else:
            self.handle(self._args.command, namespace=self._args)

    def handle(self, *arguments: str, namespace: argparse.Namespace) -> None:
        try:
            reply = self._dispatcher.dispatch(
                *arguments,
                config=self.config,
                namespace=namespace
            )
            print(self._renderer.render(reply.to_dict()), end="")
        except Exception as ex:
            self._logger.debug(f"Command {' '.join(arguments)} failed", exc_info=ex)
            print(str(ex))

    def do_scan(self, line):
        self._interactive("scan", line)

    def do_decode(self, line):
        self._interactive("decode", line)

    def do_range(self, line):
        self._interactive("range", line)

    def do_load(self, line):
        self._interactive("load", line)

    def do_dump(self, line):
        self._interactive("dump", line)

    def do_exit(self, arg):
        return True

    def do_quit(self, arg):
        return True

    def do_EOF(self, arg):
        print()
        return True

    def _interactive(self, name: str, line: str) -> None:
        try:
            namespace = self._subparsers[name].parse_args(shlex.split(line))
        except SystemExit:
            # argparse already printed the usage
            return
        self.handle(name, namespace=namespace)

    def _argparse(self) -> argparse.ArgumentParser:
        global_opts = argparse.ArgumentParser(
            prog="tabctl",
            description="Inspect table-store keys and values.",
        )
        global_opts.add_argument("--config", help="Path to a tabula configuration file")
        global_opts.add_argument(
            "-l", "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Logging verbosity, defaults to the configured log_level"
        )
        global_opts.add_argument("-o", "--output", choices=sorted(RENDERERS), default="yaml")

        sub = global_opts.add_subparsers(dest="command")

        scan = self._add_subparser(sub, "scan", help="Scan and decode a table range")
        self._add_range_args(scan)
        scan.add_argument("--limit", type=int)

        decode = self._add_subparser(sub, "decode", help="Decode a single hex key")
        decode.add_argument("key", nargs="+", help="Key bytes in hex")
        decode.add_argument("--value", help="Value bytes in hex")
        decode.add_argument("--mode", type=KeyMode, choices=list(KeyMode))

        key_range = self._add_subparser(sub, "range", help="Print the scan boundaries of a table")
        self._add_range_args(key_range)

        load = self._add_subparser(sub, "load", help="Import a snapshot into the local store")
        load.add_argument("snapshot")

        dump = self._add_subparser(sub, "dump", help="Export a table range to a snapshot")
        dump.add_argument("snapshot")
        self._add_range_args(dump)

        return global_opts

    def _add_subparser(self, sub, name: str, **kwargs) -> argparse.ArgumentParser:
        parser = sub.add_parser(name, **kwargs)
        self._subparsers[name] = parser
        return parser

    @staticmethod
    def _add_range_args(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--table-id", type=int)
        parser.add_argument("--type", dest="kind", type=EntityKind, choices=list(EntityKind))
        parser.add_argument("--mode", type=KeyMode, choices=list(KeyMode))
