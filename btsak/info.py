"""
The ``info`` command: query a controller for its status and print it.

Failures while talking to the controller are reported on stderr and never
change the exit status; only the dispatcher decides when the process exits.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from .btreq import SIOCGBTINFO, ControllerInfo, new_request
from .socket_helper import ControlSocketHelper, control_socket

LOG = logging.getLogger(__name__)

EXIT_SUCCESS = 0

_SECURITY_LEVELS = (
    ("low", "No encryption and no authentication"),
    ("medium", "Encryption and no authentication (no MITM)"),
    ("high", "Encryption and authentication (MITM)"),
    ("fips", "Authenticated LE secure connections and encryption"),
)


@dataclass(slots=True)
class InfoContext:
    """Everything the command needs besides its own arguments."""

    progname: str
    ifname: str
    sockets: ControlSocketHelper = field(default_factory=ControlSocketHelper)
    request_code: int = SIOCGBTINFO


@dataclass(slots=True, frozen=True)
class UsageExit:
    """Returned by the usage reporter; the caller terminates with ``exit_code``."""

    exit_code: int


def format_usage(progname: str, command: str) -> str:
    lines = [
        f"{command}:\tEnable security (encryption) for a connection:",
        "\tIf device is paired, key encryption will be enabled. If the link",
        "\tis already encrypted with sufficiently strong key this function",
        "\tdoes nothing.",
        "",
        "\tIf the device is not paired pairing will be initiated. If the device",
        "\tis paired and keys are too weak but input output capabilities allow",
        "\tfor strong enough keys pairing will be initiated.",
        "",
        "\tThis function may return error if required level of security is not",
        "\tpossible to achieve due to local or remote device limitation (eg input",
        "\toutput capabilities).",
        "",
        "Usage:",
        "",
        f"\t{progname} <ifname> {command} [-h] <addr> <addr-type> <level>",
        "",
        "Where:",
        "",
        "\t<addr>\t- The 6-byte address of the connected peer",
        '\t<addr-type>\t- Either "public" or "random"',
        "\t<level>\t- Security level, one of:",
        "",
    ]
    lines.extend(f"\t\t{name}\t- {meaning}" for name, meaning in _SECURITY_LEVELS)
    return "\n".join(lines) + "\n"


def show_usage(progname: str, command: str, exit_code: int) -> UsageExit:
    """Print the usage text to stderr and ask the caller to exit with ``exit_code``."""
    try:
        sys.stderr.write(format_usage(progname, command))
    except OSError as exc:
        LOG.debug("unable to write usage text: %s", exc)
    return UsageExit(exit_code)


def run_info(context: InfoContext, argv: list[str]) -> int:
    """
    Run ``info`` for ``context.ifname``.

    ``argv[0]`` is the command name as typed; ``-h`` as the first argument
    prints usage and returns before any socket is opened.
    """

    command = argv[0] if argv else "info"
    if len(argv) > 1 and argv[1] == "-h":
        return show_usage(context.progname, command, EXIT_SUCCESS).exit_code

    request = new_request(context.ifname)

    with control_socket(context.sockets, context.ifname) as sock:
        if sock is not None:
            LOG.debug("querying controller status for '%s'", context.ifname)
            try:
                context.sockets.ioctl(sock, context.request_code, request)
            except OSError as exc:
                print(f"ERROR:  ioctl(SIOCGBTINFO) failed: {exc.errno}", file=sys.stderr)
            else:
                info = ControllerInfo.from_buffer(request)
                print("\n".join(info.report_lines()))

    return EXIT_SUCCESS


__all__ = ["InfoContext", "UsageExit", "format_usage", "run_info", "show_usage"]
