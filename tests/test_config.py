"""Tests for YAML config loading, local overlays and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from rdsmon import config as config_module
from rdsmon.config import AppConfig, coerce_env_value, load_config, local_config_path


@pytest.fixture(autouse=True)
def no_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "os_environ_items", lambda: [])


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(str(tmp_path / "absent.yaml"))
    assert config == AppConfig()
    assert config.decoder.eon_switch_quiescence_groups == 20
    assert config.decoder.quality_history_size == 40


def test_load_config_overlays_local_file(tmp_path: Path) -> None:
    base_path = tmp_path / "rdsmon.yaml"
    base_path.write_text(
        yaml.safe_dump(
            {
                "decoder": {"rbds": False},
                "source": {"kind": "hexfile", "path": "capture.txt"},
                "server": {"port": 9000},
            }
        ),
        encoding="utf-8",
    )
    local_config_path(base_path).write_text(
        yaml.safe_dump({"decoder": {"rbds": True}, "server": {"bind_address": "0.0.0.0"}}),
        encoding="utf-8",
    )

    config = load_config(str(base_path))

    assert config.decoder.rbds is True
    assert config.source.path == "capture.txt"
    assert config.server.port == 9000
    assert config.server.bind_address == "0.0.0.0"


def test_environment_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        config_module,
        "os_environ_items",
        lambda: [
            ("RDSMON__DECODER__RBDS", "true"),
            ("RDSMON__SERVER__PORT", "9999"),
            ("RDSMON__LOGGING__TRACE_INTERVAL_S", "0.5"),
            ("RDSMON__UNKNOWN__KEY", "1"),
            ("RDSMON__DECODER", "ignored"),
            ("HOME", "/root"),
        ],
    )

    config = load_config(str(tmp_path / "absent.yaml"))

    assert config.decoder.rbds is True
    assert config.server.port == 9999
    assert config.logging.trace_interval_s == 0.5


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "rdsmon.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "rdsmon.yaml"
    path.write_text(yaml.safe_dump({"decoder": {"bogus": 1}}), encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(str(path))


def test_shipped_config_loads() -> None:
    shipped = Path(__file__).resolve().parent.parent / "config" / "rdsmon.yaml"
    config = load_config(str(shipped))
    assert config.source.kind in ("hexfile", "tcp")


def test_coerce_env_value() -> None:
    assert coerce_env_value("TRUE") is True
    assert coerce_env_value("42") == 42
    assert coerce_env_value("1.5") == 1.5
    assert coerce_env_value("hello") == "hello"


def test_local_config_path() -> None:
    assert local_config_path(Path("/etc/rdsmon.yaml")) == Path("/etc/rdsmon.local.yaml")
