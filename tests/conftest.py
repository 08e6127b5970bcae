"""Shared pytest fixtures for the btsak test suite.

No test opens a real socket or issues a real ioctl: the control socket
helper is replaced by :class:`FakeSocketHelper`, which records every call.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from btsak.btreq import BTREQ


class FakeSocket:
    def __init__(self, fd: int = 7) -> None:
        self.fd = fd

    def fileno(self) -> int:
        return self.fd


class FakeSocketHelper:
    """Stand-in for ``ControlSocketHelper`` with scripted outcomes."""

    def __init__(
        self,
        *,
        open_error: OSError | None = None,
        ioctl_error: OSError | None = None,
        reply: Callable[[bytearray], None] | None = None,
    ) -> None:
        self.open_error = open_error
        self.ioctl_error = ioctl_error
        self.reply = reply
        self.opened: list[str] = []
        self.closed: list[FakeSocket | None] = []
        self.requests: list[tuple[int, bytes]] = []

    def open(self, ifname: str) -> FakeSocket:
        self.opened.append(ifname)
        if self.open_error is not None:
            raise self.open_error
        return FakeSocket()

    def ioctl(self, sock: FakeSocket, request: int, buf: bytearray) -> None:
        self.requests.append((request, bytes(buf)))
        if self.ioctl_error is not None:
            raise self.ioctl_error
        if self.reply is not None:
            self.reply(buf)

    def close(self, sock: FakeSocket | None) -> None:
        self.closed.append(sock)


def fill_reply(
    *,
    bdaddr: bytes = bytes.fromhex("001122334455"),
    flags: int = 0x0001,
    num_cmd: int = 8,
    num_acl: int = 1,
    num_sco: int = 0,
    max_acl: int = 4,
    max_sco: int = 1,
    acl_mtu: int = 672,
    sco_mtu: int = 64,
    link_policy: int = 0,
    packet_type: int = 0,
) -> Callable[[bytearray], None]:
    """Return a callback that writes a controller reply over the request, keeping its name."""

    def _fill(buf: bytearray) -> None:
        name = bytes(buf[:32])
        buf[:] = BTREQ.pack(
            name,
            bdaddr,
            flags,
            num_cmd,
            num_acl,
            num_sco,
            max_acl,
            max_sco,
            acl_mtu,
            sco_mtu,
            link_policy,
            packet_type,
        )

    return _fill


@pytest.fixture
def bnep0_reply() -> Callable[[bytearray], None]:
    return fill_reply()


@pytest.fixture
def packed_record() -> Callable[..., bytes]:
    def _pack(name: bytes = b"bnep0", **values: int) -> bytes:
        fields = {
            "flags": 0,
            "num_cmd": 0,
            "num_acl": 0,
            "num_sco": 0,
            "max_acl": 0,
            "max_sco": 0,
            "acl_mtu": 0,
            "sco_mtu": 0,
            "link_policy": 0,
            "packet_type": 0,
        }
        fields.update(values)
        return BTREQ.pack(name, bytes(6), *fields.values())

    return _pack
