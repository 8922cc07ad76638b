"""Logging configuration: level parsing and per-group-type sampling of traces."""

from __future__ import annotations

import logging
import os
import time
from typing import TextIO

from .config import LoggingConfig

# Above CRITICAL, so nothing from the rdsmon loggers reaches the console
SILENT = logging.CRITICAL + 10

_LEVEL_NAMES: dict[str, int] = {
    "OFF": SILENT,
    "QUIET": SILENT,
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    # Per-group traces are emitted at DEBUG
    "TRACE": logging.DEBUG,
    "GROUPS": logging.DEBUG,
}

# Logger that carries one DEBUG record per decoded group
TRACE_LOGGER = "rdsmon.events"

# Attribute set on group trace records through ``extra``
GROUP_SLOT_ATTR = "group_slot"

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def parse_log_level(value: str | None, default: int) -> int:
    """Level from a name (``info``, ``groups``, ``off``) or a number; ``default`` otherwise."""
    raw = (value or "").strip()
    if raw.isdigit():
        return int(raw)
    return _LEVEL_NAMES.get(raw.upper(), default)


class GroupTraceSampler(logging.Filter):
    """Rate-limit group traces separately for each group type.

    A 0A/2A flood would otherwise use up the whole budget and hide the rare
    4A or 14A traces. Each group slot (``"0A"``, ``"4A"``, ``"--"`` when
    block 1 was lost) gets ``max_per_interval`` records per ``interval_s``.
    Records above DEBUG and records from other loggers always pass.
    """

    def __init__(
        self,
        max_per_interval: int,
        interval_s: float,
        logger_name: str = TRACE_LOGGER,
    ) -> None:
        super().__init__()
        self.max_per_interval = max_per_interval
        self.interval_s = interval_s
        self.logger_name = logger_name
        self._windows: dict[str, tuple[float, int]] = {}
        self.dropped: dict[str, int] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno > logging.DEBUG or not record.name.startswith(self.logger_name):
            return True

        slot = getattr(record, GROUP_SLOT_ATTR, "--")
        now = time.monotonic()
        window_start, count = self._windows.get(slot, (now, 0))
        if now - window_start >= self.interval_s:
            window_start, count = now, 0

        if count < self.max_per_interval:
            self._windows[slot] = (window_start, count + 1)
            return True

        self.dropped[slot] = self.dropped.get(slot, 0) + 1
        return False

    @property
    def total_dropped(self) -> int:
        return sum(self.dropped.values())


def configure_logging(
    config: LoggingConfig,
    level_override: str | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install a console handler on the ``rdsmon`` logger.

    Precedence: ``level_override``, then ``RDSMON_LOG_LEVEL``, then the config.
    """
    level = parse_log_level(config.level, logging.INFO)
    level = parse_log_level(os.environ.get("RDSMON_LOG_LEVEL"), level)
    level = parse_log_level(level_override, level)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(GroupTraceSampler(config.trace_max_per_interval, config.trace_interval_s))

    root = logging.getLogger("rdsmon")
    for existing in list(root.handlers):
        if getattr(existing, "_rdsmon_console", False):
            root.removeHandler(existing)
    setattr(handler, "_rdsmon_console", True)
    root.addHandler(handler)
    root.setLevel(level)
    return handler
