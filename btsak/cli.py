"""
Command-line entry point for btsak, the Bluetooth Swiss Army Knife.

Examples:
    # Show the status of the controller behind bnep0
    btsak bnep0 info

    # Use a configuration file for socket parameters and logging
    btsak --config btsak.yaml bnep0 info

    # List the available commands
    btsak help
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from .config import BtsakConfig, load_config
from .info import InfoContext, run_info
from .socket_helper import ControlSocketHelper

PROGNAME = "btsak"

LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class CLIArgs:
    ifname: str | None
    command: str
    argv: list[str]
    config: Path | None = None
    log_level: str | None = None


@dataclass(slots=True, frozen=True)
class Command:
    handler: Callable[[InfoContext, list[str]], int]
    help: str


COMMANDS: dict[str, Command] = {
    "info": Command(run_info, "Show controller address, buffers, MTUs and settings"),
}

VALUE_OPTIONS = ("--config", "--log-level")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGNAME,
        description="Bluetooth controller diagnostic tool",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this message and exit")
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML configuration file")
    parser.add_argument("--log-level", default=None, help="Override configured log level")
    parser.add_argument("words", nargs="*", metavar="<ifname> <command>", help="Interface and command")
    return parser


def command_index(argv: list[str]) -> int | None:
    """Return the position of the command word, skipping global option values."""

    skip_next = False
    for idx, token in enumerate(argv):
        if skip_next:
            skip_next = False
            continue
        if token in VALUE_OPTIONS:
            skip_next = True
            continue
        if token in COMMANDS or token == "help":
            return idx
    return None


def parse_args(argv: Iterable[str]) -> CLIArgs:
    """Split ``argv`` into global options, interface, command and command arguments."""

    argv_list = list(argv)
    parser = build_parser()
    split = command_index(argv_list)
    if split is None:
        # Still parse so that --help and malformed options behave as usual.
        parser.parse_args(argv_list)
        raise ValueError("missing command")
    parsed = parser.parse_args(argv_list[:split])
    if len(parsed.words) > 1:
        raise ValueError(f"unexpected arguments before command: {' '.join(parsed.words[1:])}")
    return CLIArgs(
        ifname=parsed.words[0] if parsed.words else None,
        command=argv_list[split],
        argv=argv_list[split:],
        config=parsed.config,
        log_level=parsed.log_level,
    )


def configure_logging(config: BtsakConfig, override: str | None) -> None:
    level = (override or config.logging.level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def print_commands() -> None:
    print(f"Usage: {PROGNAME} [--config PATH] [--log-level LEVEL] <ifname> <command> [-h]", file=sys.stderr)
    print("\nCommands:", file=sys.stderr)
    for name, command in COMMANDS.items():
        print(f"  {name:<8}{command.help}", file=sys.stderr)
    print(f"  {'help':<8}Show this list", file=sys.stderr)


def main(argv: Iterable[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = parse_args(argv)
        config = load_config(args.config) if args.config else BtsakConfig()
    except (ValueError, FileNotFoundError) as err:
        print(f"Error: {err}", file=sys.stderr)
        print_commands()
        return 1

    configure_logging(config, args.log_level)

    if args.command == "help":
        print_commands()
        return 0

    ifname = args.ifname or config.interface
    if not ifname:
        print(f"Error: no interface given for '{args.command}'", file=sys.stderr)
        print_commands()
        return 1

    context = InfoContext(
        progname=PROGNAME,
        ifname=ifname,
        sockets=ControlSocketHelper(config.socket),
        request_code=config.info.request_code,
    )
    LOG.debug("dispatching '%s' for '%s'", args.command, ifname)
    return COMMANDS[args.command].handler(context, args.argv)


if __name__ == "__main__":
    raise SystemExit(main())
