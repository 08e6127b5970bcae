"""
Configuration models and loader utilities for btsak.

Settings are optional: without a configuration file every value falls back to
the defaults below. When a file is given it is expressed in YAML and
deserialized into pydantic models so the commands can rely on validated,
typed settings.
"""

from __future__ import annotations

import socket
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .btreq import SIOCGBTINFO

AF_BLUETOOTH = getattr(socket, "AF_BLUETOOTH", 31)
BTPROTO_HCI = getattr(socket, "BTPROTO_HCI", 1)


class SocketConfig(BaseModel):
    """Parameters used to open the control-plane socket."""

    family: int = Field(AF_BLUETOOTH, description="Address family, e.g. AF_BLUETOOTH")
    type: int = Field(int(socket.SOCK_RAW), description="Socket type, e.g. SOCK_RAW")
    protocol: int = Field(BTPROTO_HCI, description="Protocol number, e.g. BTPROTO_HCI")

    @field_validator("family", "type", "protocol")
    @classmethod
    def non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Socket parameters must be non-negative")
        return value


class InfoConfig(BaseModel):
    request_code: int = Field(SIOCGBTINFO, ge=0, description="Status query ioctl number")


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


class BtsakConfig(BaseModel):
    interface: str | None = Field(
        None, min_length=1, description="Default controller interface, e.g. bnep0"
    )
    socket: SocketConfig = SocketConfig()
    info: InfoConfig = InfoConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(path: str | Path) -> BtsakConfig:
    """
    Load and validate configuration from the provided YAML file.

    Parameters
    ----------
    path:
        Path pointing to the YAML configuration file.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
    try:
        return BtsakConfig.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "BtsakConfig",
    "InfoConfig",
    "LoggingConfig",
    "SocketConfig",
    "load_config",
]
