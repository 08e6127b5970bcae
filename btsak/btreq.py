"""
Controller status record exchanged with the Bluetooth driver.

The request and the reply share one fixed-layout buffer: the request carries
only the interface name, and the driver overwrites the buffer in place with
the controller state.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .utils import encode_ifname, format_bdaddr

HCI_DEVNAME_SIZE = 32

# Wireless ioctl commands live above _WLIOCBASE; bluetooth commands start at
# WL_BLUETOOTHFIRST within that range.
_WLIOCBASE = 0x8B00
WL_BLUETOOTHFIRST = 0x0040
SIOCGBTINFO = _WLIOCBASE | (WL_BLUETOOTHFIRST + 0x0005)

# name, bdaddr, flags, num_cmd, num_acl, num_sco, max_acl, max_sco,
# acl_mtu, sco_mtu, link_policy, packet_type
BTREQ = struct.Struct(f"={HCI_DEVNAME_SIZE}s6s10H")


def new_request(ifname: str) -> bytearray:
    """Return a zero-filled status record addressed to ``ifname``."""
    buf = bytearray(BTREQ.size)
    name = encode_ifname(ifname, HCI_DEVNAME_SIZE)
    buf[: len(name)] = name
    return buf


@dataclass(slots=True, frozen=True)
class ControllerInfo:
    """Controller state as reported by the driver."""

    name: str
    bdaddr: bytes
    flags: int
    num_cmd: int
    num_acl: int
    num_sco: int
    max_acl: int
    max_sco: int
    acl_mtu: int
    sco_mtu: int
    link_policy: int
    packet_type: int

    @classmethod
    def from_buffer(cls, buf: bytes | bytearray) -> ControllerInfo:
        if len(buf) != BTREQ.size:
            raise ValueError(f"Status record must be {BTREQ.size} bytes, got {len(buf)}")
        raw_name, bdaddr, *values = BTREQ.unpack(bytes(buf))
        name = raw_name.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(name, bdaddr, *values)

    @property
    def address(self) -> str:
        return format_bdaddr(self.bdaddr)

    def report_lines(self) -> list[str]:
        """Return the fixed-layout status report, one entry per output line."""
        return [
            f"Device: {self.name}",
            f"BDAddr: {self.address}",
            f"Flags:  {self.flags:04x}",
            f"Free:   {self.num_cmd}",
            f"  ACL:  {self.num_acl}",
            f"  SCO:  {self.num_sco}",
            "Max:",
            f"  ACL:  {self.max_acl}",
            f"  SCO:  {self.max_sco}",
            "MTU:",
            f"  ACL:  {self.acl_mtu}",
            f"  SCO:  {self.sco_mtu}",
            f"Policy: {self.link_policy}",
            f"Type:   {self.packet_type}",
        ]


__all__ = [
    "BTREQ",
    "ControllerInfo",
    "HCI_DEVNAME_SIZE",
    "SIOCGBTINFO",
    "WL_BLUETOOTHFIRST",
    "new_request",
]
