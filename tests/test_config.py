"""Tests for configuration loading (config.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from btsak.btreq import SIOCGBTINFO
from btsak.config import BtsakConfig, load_config


def test_defaults() -> None:
    config = BtsakConfig()
    assert config.interface is None
    assert config.info.request_code == SIOCGBTINFO
    assert config.logging.level == "WARNING"


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "btsak.yaml"
    path.write_text(
        "interface: bnep0\n"
        "socket:\n"
        "  family: 2\n"
        "  type: 2\n"
        "  protocol: 0\n"
        "info:\n"
        "  request_code: 0x8b45\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    config = load_config(path)
    assert config.interface == "bnep0"
    assert (config.socket.family, config.socket.type, config.socket.protocol) == (2, 2, 0)
    assert config.info.request_code == 0x8B45
    assert config.logging.level == "DEBUG"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == BtsakConfig()


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "socket:\n  family: -1\n",
        "logging:\n  level: LOUD\n",
        "info:\n  request_code: -4\n",
        "interface: ''\n",
        "- not\n- a mapping\n",
        "socket: [unclosed\n",
    ],
)
def test_invalid_config(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)
