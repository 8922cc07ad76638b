from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

SourceKind = Literal["hexfile", "tcp"]


@dataclass
class DecoderConfig:
    # Show RBDS programme types and call letters instead of European RDS labels
    rbds: bool = False
    eon_switch_quiescence_groups: int = 20
    quality_history_size: int = 40


@dataclass
class LoggingConfig:
    level: str = "INFO"
    # Per-group trace records allowed per interval at DEBUG level
    trace_max_per_interval: int = 50
    trace_interval_s: float = 1.0


@dataclass
class SourceConfig:
    kind: SourceKind = "hexfile"
    path: str | None = None
    host: str = "127.0.0.1"
    port: int = 8750
    frequency_khz: int | None = None
    strict: bool = False


@dataclass
class ServerConfig:
    bind_address: str = "127.0.0.1"
    port: int = 8088
    max_log_messages: int = 1000


@dataclass
class AppConfig:
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


_SECTIONS = ("decoder", "logging", "source", "server")


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("Config root must be a mapping")
        return data


def _overlay(dst: dict[str, Any], src: dict[str, Any]) -> dict[str, Any]:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _overlay(dst[k], v)
        else:
            dst[k] = v
    return dst


def local_config_path(path: Path) -> Path:
    """``rdsmon.yaml`` -> ``rdsmon.local.yaml`` next to it."""
    return path.with_name(f"{path.stem}.local{path.suffix}")


def default_config_path() -> str:
    module_dir = Path(__file__).resolve().parent
    config_path = module_dir.parent / "config" / "rdsmon.yaml"
    if config_path.exists():
        return str(config_path)
    return "config/rdsmon.yaml"


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return value


def load_config(path_str: str) -> AppConfig:
    path = Path(path_str)
    raw: dict[str, Any] = _read_yaml(path)
    _overlay(raw, _read_yaml(local_config_path(path)))

    # Environment overrides (prefix RDSMON__SECTION__KEY)
    # Example: RDSMON__DECODER__RBDS=true
    prefix = "RDSMON__"
    for k, v in os_environ_items():
        if not k.startswith(prefix):
            continue
        parts = k[len(prefix) :].split("__")
        if len(parts) != 2:
            continue
        section, key = parts
        section = section.lower()
        key = key.lower()
        if section not in _SECTIONS:
            continue
        raw.setdefault(section, {})
        if isinstance(raw[section], dict):
            raw[section][key] = coerce_env_value(v)

    return AppConfig(
        decoder=DecoderConfig(**_section(raw, "decoder")),
        logging=LoggingConfig(**_section(raw, "logging")),
        source=SourceConfig(**_section(raw, "source")),
        server=ServerConfig(**_section(raw, "server")),
    )


def coerce_env_value(val: str) -> Any:
    # Basic bool/int/float coercion for convenience
    lower = val.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    try:
        return int(val)
    except ValueError:
        pass
    try:
        return float(val)
    except ValueError:
        return val


def os_environ_items() -> list[tuple[str, str]]:
    # Wrapped for testability
    from os import environ

    return [(k, v) for k, v in environ.items()]
