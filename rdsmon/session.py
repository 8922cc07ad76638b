"""Decoding session: one decoder fed by one or more event sources."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable

from .config import AppConfig, SourceConfig
from .decoders.group_decoder import DecodedGroupReport, GroupDecoder
from .decoders.station import Station, TunedStation
from .events import EventLog, InputEvent
from .models import (
    DecoderStatsModel,
    StationModel,
    TunedStationModel,
    station_model,
    tuned_station_model,
)
from .sources.hexfile import HexFileGroupReader
from .sources.tcp_tuner import TCPTunerGroupReader

logger = logging.getLogger(__name__)


class DecoderSession:
    """Serializes input events into a :class:`GroupDecoder`.

    Sources may run on their own threads; ``feed`` holds a lock so only one
    group is decoded at a time.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.log = EventLog(max_messages=self.config.server.max_log_messages)
        self.decoder = GroupDecoder(
            self.log,
            rbds=self.config.decoder.rbds,
            eon_switch_quiescence=self.config.decoder.eon_switch_quiescence_groups,
            quality_history_size=self.config.decoder.quality_history_size,
        )
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._stop = threading.Event()
        self.groups_processed = 0

    def feed(self, event: InputEvent) -> DecodedGroupReport | None:
        with self._lock:
            report = self.decoder.process_event(event)
            if report is not None:
                self.groups_processed += 1
            return report

    def lose_sync(self) -> None:
        with self._lock:
            self.decoder.lose_sync()

    def run(self, source: Iterable[InputEvent]) -> int:
        """Feed every event of ``source``; returns the number of groups decoded."""
        count = 0
        for event in source:
            if self._stop.is_set():
                break
            if self.feed(event) is not None:
                count += 1
        return count

    def start(self, source: Iterable[InputEvent], name: str = "rds-source") -> threading.Thread:
        """Run a source on a daemon thread."""
        thread = threading.Thread(target=self.run, args=(source,), name=name, daemon=True)
        self._threads.append(thread)
        thread.start()
        return thread

    def stop(self, timeout: float = 2.0) -> None:
        self._stop.set()
        for thread in self._threads:
            thread.join(timeout=timeout)
        self._threads.clear()

    @property
    def station(self) -> TunedStation | None:
        return self.decoder.station

    def other_networks(self) -> list[Station]:
        station = self.decoder.station
        if station is None:
            return []
        return station.other_networks()

    # Snapshots. Models are built under the decode lock so a reader never
    # walks station state that a source thread is mutating.

    def station_snapshot(self) -> TunedStationModel | None:
        with self._lock:
            station = self.decoder.station
            if station is None:
                return None
            return tuned_station_model(station, rbds=self.config.decoder.rbds)

    def networks_snapshot(self) -> list[StationModel]:
        with self._lock:
            station = self.decoder.station
            if station is None:
                return []
            rbds = self.config.decoder.rbds
            return [station_model(on, rbds=rbds) for on in station.other_networks()]

    def stats_snapshot(self) -> DecoderStatsModel:
        with self._lock:
            return DecoderStatsModel(
                groups_processed=self.groups_processed,
                synced=self.decoder.synced,
                link_quality=self.decoder.link_quality(),
                quality_history=[int(n) for n in self.decoder.quality_history()],
                log_messages=self.log.total,
            )


def open_source(config: SourceConfig) -> HexFileGroupReader | TCPTunerGroupReader:
    """Open the group source described by ``config``."""
    if config.kind == "hexfile":
        if not config.path:
            raise ValueError("source.path is required for a hexfile source")
        if not Path(config.path).is_file():
            raise FileNotFoundError(f"hex group file not found: {config.path}")
        return HexFileGroupReader(config.path, strict=config.strict)
    if config.kind == "tcp":
        tuner = TCPTunerGroupReader(config.host, config.port)
        if config.frequency_khz is not None:
            tuner.set_frequency(config.frequency_khz)
        logger.info("Connected to %s", tuner.device_name)
        return tuner
    raise ValueError(f"unknown source kind: {config.kind!r}")
