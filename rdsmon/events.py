"""Input events fed to the decoder and log messages it produces.

Input events come from a group source (file replay, TCP tuner). Log
messages are appended to an :class:`EventLog`, which keeps a bounded history
and notifies subscribers.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Union

from .decoders.applications import Application
from .decoders.bindings import slot_label
from .decoders.clock import ClockTime as DecodedClockTime
from .decoders.fields import group_type_version
from .decoders.station import Station
from .typing import Blocks

logger = logging.getLogger(__name__)


# Input events


@dataclass(frozen=True)
class StationChangeEvent:
    bit_time: int


@dataclass(frozen=True)
class GroupEvent:
    bit_time: int
    blocks: Blocks

    @property
    def blocks_ok(self) -> tuple[bool, bool, bool, bool]:
        b = self.blocks
        return (b[0] is not None, b[1] is not None, b[2] is not None, b[3] is not None)

    @property
    def nb_ok(self) -> int:
        return sum(self.blocks_ok)


@dataclass(frozen=True)
class FrequencyChangeEvent:
    frequency_khz: int
    bit_time: int = 0


InputEvent = Union[StationChangeEvent, GroupEvent, FrequencyChangeEvent]


# Log messages


def _pi(station: Station | None) -> str | None:
    if station is None or station.pi == 0:
        return None
    return f"{station.pi:04X}"


@dataclass(frozen=True)
class StationTuned:
    bit_time: int
    station: Station

    def to_dict(self) -> dict[str, Any]:
        return {"type": "stationTuned", "bitTime": self.bit_time, "pi": _pi(self.station)}


@dataclass(frozen=True)
class StationLost:
    bit_time: int
    station: Station

    def to_dict(self) -> dict[str, Any]:
        return {"type": "stationLost", "bitTime": self.bit_time, "pi": _pi(self.station)}


@dataclass(frozen=True)
class GroupReceived:
    bit_time: int
    blocks: Blocks
    nb_ok: int
    trace: str

    @property
    def slot(self) -> str:
        """Group type and version such as ``"2A"``, or ``"--"`` without block 1."""
        b1 = self.blocks[1]
        if b1 is None:
            return "--"
        return slot_label(group_type_version(b1))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "groupReceived",
            "bitTime": self.bit_time,
            "blocks": [None if b is None else f"{b:04X}" for b in self.blocks],
            "nbOk": self.nb_ok,
            "trace": self.trace,
        }


@dataclass(frozen=True)
class ClockTime:
    bit_time: int
    time: DecodedClockTime

    def to_dict(self) -> dict[str, Any]:
        return {"type": "clockTime", "bitTime": self.bit_time, "time": str(self.time)}


@dataclass(frozen=True)
class ApplicationChanged:
    bit_time: int
    previous: Application | None
    application: Application

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "applicationChanged",
            "bitTime": self.bit_time,
            "previous": None if self.previous is None else self.previous.name,
            "application": self.application.name,
        }


@dataclass(frozen=True)
class EONSwitch:
    bit_time: int
    network: Station | None

    def to_dict(self) -> dict[str, Any]:
        return {"type": "eonSwitch", "bitTime": self.bit_time, "pi": _pi(self.network)}


@dataclass(frozen=True)
class EONReturn:
    bit_time: int
    network: Station | None

    def to_dict(self) -> dict[str, Any]:
        return {"type": "eonReturn", "bitTime": self.bit_time, "pi": _pi(self.network)}


LogMessage = Union[
    StationTuned,
    StationLost,
    GroupReceived,
    ClockTime,
    ApplicationChanged,
    EONSwitch,
    EONReturn,
]


def describe(message: LogMessage) -> str:
    """One-line human-readable rendering of a log message."""
    if isinstance(message, StationTuned):
        return "Station tuned"
    if isinstance(message, StationLost):
        return f"Station lost: {message.station!r}"
    if isinstance(message, GroupReceived):
        blocks = " ".join("----" if b is None else f"{b:04X}" for b in message.blocks)
        return f"{blocks} {message.trace}".rstrip()
    if isinstance(message, ClockTime):
        return f"Clock time: {message.time}"
    if isinstance(message, ApplicationChanged):
        return f"Application changed: {message.application.name}"
    if isinstance(message, EONSwitch):
        return f"EON switch to {_pi(message.network)}"
    return f"EON return from {_pi(message.network)}"


class EventLog:
    """Bounded history of log messages with subscriber notification.

    Thread-safe: the decoder appends from its session thread while API
    readers take snapshots.
    """

    def __init__(self, max_messages: int = 1000) -> None:
        self._messages: deque[LogMessage] = deque(maxlen=max_messages)
        self._subscribers: list[Callable[[LogMessage], None]] = []
        self._lock = threading.Lock()
        self._total = 0

    def add(self, message: LogMessage) -> None:
        with self._lock:
            self._messages.append(message)
            self._total += 1
            subscribers = list(self._subscribers)

        if isinstance(message, GroupReceived):
            logger.debug("%s", describe(message), extra={"group_slot": message.slot})
        else:
            logger.info("%s", describe(message))

        for callback in subscribers:
            try:
                callback(message)
            except Exception:
                logger.exception("Event log subscriber failed")

    def subscribe(self, callback: Callable[[LogMessage], None]) -> Callable[[], None]:
        """Subscribe to new messages. Returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def messages(self) -> list[LogMessage]:
        with self._lock:
            return list(self._messages)

    def of_type(self, kind: type) -> list[Any]:
        return [m for m in self.messages() if isinstance(m, kind)]

    @property
    def total(self) -> int:
        return self._total
