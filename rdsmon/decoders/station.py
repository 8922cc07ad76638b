"""Station model: the tuned station and the other networks it references."""

from __future__ import annotations

import datetime as dt
import logging
import threading
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from ..typing import NDArrayInt
from .bindings import ApplicationBindings, Slot
from .clock import ClockTime
from .fields import PIN_DAY, PIN_HOUR, PIN_MINUTE
from .frequencies import AlternateFrequencies, MappedFrequencies
from .service_stats import ServiceLedger
from .tables import pi_to_callsign, pty_label
from .text import LongStationName, ProgrammeTypeName, RadioText, SegmentedText

logger = logging.getLogger(__name__)

# RDS bit rate in bit/s
BIT_RATE = 1187.5


@dataclass(frozen=True)
class TrafficEvent:
    bit_time: int
    text: str


@dataclass(frozen=True)
class ProgrammeItemNumber:
    day: int
    hour: int
    minute: int

    @classmethod
    def from_block(cls, block: int) -> ProgrammeItemNumber:
        return cls(day=PIN_DAY.read(block), hour=PIN_HOUR.read(block), minute=PIN_MINUTE.read(block))

    def __str__(self) -> str:
        return f"D={self.day} {self.hour:02d}:{self.minute:02d}"


class Station:
    """State of one broadcaster, rebuilt incrementally from received groups."""

    def __init__(self, bit_time: int = 0) -> None:
        self.created_at = bit_time
        self.pi = 0
        self.time_of_last_pi = bit_time
        self.tp: bool | None = None
        self.ta: bool | None = None
        self.ms: bool | None = None
        self.pty: int | None = None
        self.di = 0
        self.ps = SegmentedText(8)
        self.long_ps = LongStationName()
        self.rt = RadioText()
        self.ptyn = ProgrammeTypeName()
        self.afs = AlternateFrequencies()
        self.mapped_frequencies = MappedFrequencies()
        self.pin: ProgrammeItemNumber | None = None
        self.pin_valid = False
        self.ecc: int | None = None
        self.language: int | None = None
        self.opc: int | None = None
        self.pac: int | None = None
        self.tmc_id: int | None = None
        self.ews_id: int | None = None
        self.broadcaster_data: int | None = None
        self.linkage_set_number: int | None = None
        self.linkage_actuator: bool | None = None
        self.applications = ApplicationBindings()
        self.announced_odas: dict[int, Slot] = {}
        self.group_stats: NDArrayInt = np.zeros((16, 2), dtype=np.int64)
        self.unknown_groups = 0
        self.total_blocks = 0
        self.total_blocks_ok = 0
        self.service_ledger = ServiceLedger()
        self.traffic_events: list[TrafficEvent] = []
        self.date: ClockTime | None = None
        self.date_bit_time: int | None = None

    def set_pi(self, pi: int) -> bool:
        """Adopt ``pi`` if none is known yet. Returns True when adopted."""
        if self.pi != 0 or pi == 0:
            return False
        self.pi = pi
        return True

    def set_di_bit(self, address: int, value: int) -> None:
        """Set one DI bit; segment address 0 carries d3, address 3 carries d0."""
        bit = 1 << (3 - (address & 0x3))
        if value:
            self.di |= bit
        else:
            self.di &= 0xF ^ bit

    @property
    def stereo(self) -> bool:
        return bool(self.di & 0x1)

    @property
    def artificial_head(self) -> bool:
        return bool(self.di & 0x2)

    @property
    def compressed(self) -> bool:
        return bool(self.di & 0x4)

    @property
    def dynamic_pty(self) -> bool:
        return bool(self.di & 0x8)

    def set_pin(self, block: int) -> bool:
        """Store a programme item number; a zero day marks it invalid."""
        self.pin = ProgrammeItemNumber.from_block(block)
        self.pin_valid = self.pin.day != 0
        return self.pin_valid

    def add_group_to_stats(self, group_type: int | None, version: int | None, nb_ok: int) -> None:
        if group_type is None or version is None:
            self.unknown_groups += 1
        else:
            self.group_stats[group_type, version] += 1
        self.total_blocks += 4
        self.total_blocks_ok += nb_ok

    @property
    def block_error_rate(self) -> float:
        if self.total_blocks == 0:
            return 0.0
        return 1.0 - self.total_blocks_ok / self.total_blocks

    def group_stats_text(self) -> str:
        parts = [
            f"{t}{'AB'[v]}: {int(self.group_stats[t, v])}"
            for t in range(16)
            for v in range(2)
            if self.group_stats[t, v] > 0
        ]
        parts.append(f"U: {self.unknown_groups}")
        return ",   ".join(parts)

    def di_text(self) -> str:
        return ", ".join(
            [
                "Stereo" if self.stereo else "Mono",
                "Artificial head" if self.artificial_head else "Not artificial head",
                "Compressed" if self.compressed else "Not compressed",
                "Dynamic PTY" if self.dynamic_pty else "Static PTY",
            ]
        )

    def pty_name(self, rbds: bool = False) -> str | None:
        if self.pty is None:
            return None
        return pty_label(self.pty, rbds)

    def callsign(self) -> str | None:
        if self.pi == 0:
            return None
        return pi_to_callsign(self.pi)

    def add_traffic_event(self, bit_time: int, text: str) -> None:
        self.traffic_events.append(TrafficEvent(bit_time=bit_time, text=text))

    def set_date(self, clock: ClockTime, bit_time: int) -> None:
        self.date = clock
        self.date_bit_time = bit_time

    def datetime_for_bit_time(self, bit_time: int) -> dt.datetime | None:
        """Extrapolate the last clock time to ``bit_time``."""
        if self.date is None or self.date_bit_time is None:
            return None
        elapsed = (bit_time - self.date_bit_time) / BIT_RATE
        return self.date.local + dt.timedelta(seconds=elapsed)

    def radio_text(self) -> str:
        return self.rt.as_text()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pi={self.pi:04X}, ps={self.ps.as_text()!r})"


class NetworkTable:
    """Other networks keyed by PI, kept in PI order.

    Mutation and enumeration hold a lock so readers on other threads never
    see a partially inserted entry.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stations: dict[int, Station] = {}

    def get(self, pi: int) -> Station | None:
        with self._lock:
            return self._stations.get(pi)

    def get_or_create(self, pi: int, bit_time: int = 0) -> Station:
        if pi == 0:
            raise ValueError("PI 0 cannot identify another network")
        with self._lock:
            station = self._stations.get(pi)
            if station is None:
                station = Station(bit_time)
                station.set_pi(pi)
                self._stations[pi] = station
                logger.debug("New other network %04X", pi)
            return station

    def pop(self, pi: int) -> Station | None:
        with self._lock:
            return self._stations.pop(pi, None)

    def snapshot(self) -> list[Station]:
        with self._lock:
            return [self._stations[pi] for pi in sorted(self._stations)]

    def __contains__(self, pi: object) -> bool:
        with self._lock:
            return pi in self._stations

    def __len__(self) -> int:
        with self._lock:
            return len(self._stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self.snapshot())


class TunedStation(Station):
    """The station the receiver is tuned to; owns the other-network table."""

    def __init__(self, bit_time: int = 0) -> None:
        super().__init__(bit_time)
        self.networks = NetworkTable()

    def set_pi(self, pi: int) -> bool:
        """Adopt ``pi``; an other-network entry already filed under it is dropped."""
        if not super().set_pi(pi):
            return False
        if self.networks.pop(pi) is not None:
            logger.debug("Dropped other network %04X matching own PI", pi)
        return True

    def network(self, pi: int, bit_time: int = 0) -> Station | None:
        """Resolve an EON PI; the tuned station's own PI resolves to itself."""
        if pi == 0:
            return None
        if pi == self.pi:
            return self
        return self.networks.get_or_create(pi, bit_time)

    def other_networks(self) -> list[Station]:
        return self.networks.snapshot()
