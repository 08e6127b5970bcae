"""
Control-plane socket helper used by the btsak commands.

Commands never create sockets themselves: they borrow one from
``ControlSocketHelper`` through :func:`control_socket`, which guarantees the
socket is released exactly once whatever happens inside the block.
"""

from __future__ import annotations

import fcntl
import logging
import socket
from collections.abc import Iterator
from contextlib import contextmanager

import psutil

from .config import SocketConfig

LOG = logging.getLogger(__name__)


class ControlSocketHelper:
    """
    Open, drive, and close control sockets for a named controller interface.

    ``close`` accepts ``None`` so that callers can release unconditionally,
    including after a failed ``open``.
    """

    def __init__(self, config: SocketConfig | None = None) -> None:
        self._config = config or SocketConfig()

    def open(self, ifname: str) -> socket.socket:
        """Create a socket for ``ifname``; raises ``OSError`` on failure."""
        LOG.debug(
            "opening control socket for '%s' (family=%d type=%d proto=%d)",
            ifname,
            self._config.family,
            self._config.type,
            self._config.protocol,
        )
        return socket.socket(self._config.family, self._config.type, self._config.protocol)

    def ioctl(self, sock: socket.socket, request: int, buf: bytearray) -> None:
        """Issue ``request`` on ``sock``; the driver fills ``buf`` in place."""
        LOG.debug("ioctl 0x%04x on fd %d (%d bytes)", request, sock.fileno(), len(buf))
        fcntl.ioctl(sock.fileno(), request, buf, True)

    def close(self, sock: socket.socket | None) -> None:
        if sock is None:
            return
        LOG.debug("closing control socket fd %d", sock.fileno())
        sock.close()


def interface_known(ifname: str) -> bool:
    """Return True when the host reports a network interface named ``ifname``."""
    try:
        return ifname in psutil.net_if_stats()
    except (OSError, RuntimeError):
        return False


@contextmanager
def control_socket(helper: ControlSocketHelper, ifname: str) -> Iterator[socket.socket | None]:
    """
    Acquire a control socket for ``ifname`` for the duration of the block.

    Yields ``None`` when the socket cannot be opened. The helper's ``close`` is
    called exactly once on every path.
    """

    sock: socket.socket | None = None
    try:
        try:
            sock = helper.open(ifname)
        except OSError as exc:
            hint = "" if interface_known(ifname) else " (no such interface on this host)"
            LOG.warning("failed to create control socket for '%s': %s%s", ifname, exc, hint)
        yield sock
    finally:
        helper.close(sock)


__all__ = ["ControlSocketHelper", "control_socket", "interface_known"]
