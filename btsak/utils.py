"""
Miscellaneous helpers shared across modules.
"""

from __future__ import annotations

BDADDR_SIZE = 6


def encode_ifname(ifname: str, size: int) -> bytes:
    """
    Return the interface name bounded to ``size`` bytes (e.g. bnep0 -> b"bnep0").

    Like ``strncpy`` the result is never longer than the field it is copied
    into; a name that fills the field exactly carries no terminator.
    """

    if size <= 0:
        raise ValueError("Field size must be positive")
    return ifname.encode("utf-8")[:size]


def format_bdaddr(raw: bytes) -> str:
    """
    Render a 6-byte hardware address as colon separated octets, in stored order.
    """

    if len(raw) != BDADDR_SIZE:
        raise ValueError(f"Device address must be {BDADDR_SIZE} bytes, got {len(raw)}")
    return ":".join(f"{octet:02x}" for octet in raw)


__all__ = ["BDADDR_SIZE", "encode_ifname", "format_bdaddr"]
