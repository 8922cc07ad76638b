"""Application handlers bound to group (type, version) slots.

Handlers form a closed set of kinds. Each kind is a small dataclass holding
its own state; :func:`deliver` dispatches a received payload on the concrete
kind. Decoding inside the application payload is not attempted beyond
bookkeeping.

Example:
    app = application_for_aid(0xCD46)
    deliver(app, ApplicationPayload(8, 0, (0x1234, 0x8000, 0x0001, 0x0002), bit_time=0))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Union

from ..typing import Blocks
from .tables import ODA_NAMES, TNGD_LABELS

logger = logging.getLogger(__name__)

# Application identifiers of the ALERT-C traffic message channel
TMC_AIDS = (0xCD46, 0xCD47, 0x0D45)


class ApplicationKind(str, Enum):
    OPEN_DATA = "open_data"
    PAGING = "paging"
    TRAFFIC_MESSAGE = "traffic_message"
    TRANSPARENT_DATA = "transparent_data"
    IN_HOUSE = "in_house"
    GENERIC_OPEN_DATA = "generic_open_data"


@dataclass(frozen=True)
class ApplicationPayload:
    """One group handed to an application."""

    group_type: int
    version: int
    blocks: Blocks
    bit_time: int

    @property
    def blocks_ok(self) -> tuple[bool, bool, bool, bool]:
        b = self.blocks
        return (b[0] is not None, b[1] is not None, b[2] is not None, b[3] is not None)


@dataclass
class OpenDataApp:
    """Registered open data application, identified by its AID."""

    aid: int
    groups_received: int = 0
    last_blocks: Blocks | None = None
    kind: ClassVar[ApplicationKind] = ApplicationKind.OPEN_DATA

    @property
    def name(self) -> str:
        return ODA_NAMES.get(self.aid, f"ODA {self.aid:04X}")


@dataclass
class GenericOpenDataApp:
    """Open data application whose AID is not in the registry."""

    aid: int
    groups_received: int = 0
    last_blocks: Blocks | None = None
    kind: ClassVar[ApplicationKind] = ApplicationKind.GENERIC_OPEN_DATA

    @property
    def name(self) -> str:
        return f"ODA {self.aid:04X}"


@dataclass
class TrafficMessageApp:
    """ALERT-C traffic message channel, either ODA-announced or legacy 8A."""

    aid: int | None = None
    tmc_id: int | None = None
    system_messages: int = 0
    groups_received: int = 0
    last_blocks: Blocks | None = None
    kind: ClassVar[ApplicationKind] = ApplicationKind.TRAFFIC_MESSAGE

    @property
    def name(self) -> str:
        return "TMC"


@dataclass
class PagingApp:
    """Radio paging carried in 7A groups."""

    tngd: int = 0
    interval: int | None = None
    minutes: int = 0
    groups_received: int = 0
    last_blocks: Blocks | None = None
    aid: ClassVar[None] = None
    kind: ClassVar[ApplicationKind] = ApplicationKind.PAGING

    @property
    def name(self) -> str:
        return "Paging"

    @property
    def tngd_label(self) -> str:
        return TNGD_LABELS[self.tngd & 0x7]

    def sync_info(self, tngd: int, bsi: int) -> str:
        """Record the interval numbering bits sent in group 1A."""
        self.tngd = tngd & 0x7
        self.interval = bsi & 0x3
        return f"Paging interval {self.interval} ({self.tngd_label})"

    def full_minute(self) -> str:
        self.minutes += 1
        return f"Paging: full minute #{self.minutes}"


@dataclass
class TransparentDataApp:
    """Transparent data channels of group 5A."""

    channels: dict[int, int] = field(default_factory=dict)
    groups_received: int = 0
    last_blocks: Blocks | None = None
    aid: ClassVar[None] = None
    kind: ClassVar[ApplicationKind] = ApplicationKind.TRANSPARENT_DATA

    @property
    def name(self) -> str:
        return "TDC"


@dataclass
class InHouseApp:
    """Broadcaster in-house data of group 6A."""

    groups_received: int = 0
    last_blocks: Blocks | None = None
    aid: ClassVar[None] = None
    kind: ClassVar[ApplicationKind] = ApplicationKind.IN_HOUSE

    @property
    def name(self) -> str:
        return "In-house"


Application = Union[
    OpenDataApp,
    GenericOpenDataApp,
    TrafficMessageApp,
    PagingApp,
    TransparentDataApp,
    InHouseApp,
]

_HANDLER_TYPES = (
    OpenDataApp,
    GenericOpenDataApp,
    TrafficMessageApp,
    PagingApp,
    TransparentDataApp,
    InHouseApp,
)


def _traffic_message(aid: int) -> Application:
    return TrafficMessageApp(aid=aid)


_AID_CONSTRUCTORS: dict[int, Callable[[int], Application]] = {
    aid: _traffic_message for aid in TMC_AIDS
}


def application_for_aid(aid: int) -> Application:
    """Create the handler for an announced AID."""
    constructor = _AID_CONSTRUCTORS.get(aid)
    if constructor is not None:
        return constructor(aid)
    if aid in ODA_NAMES:
        return OpenDataApp(aid=aid)
    logger.debug("Unregistered AID %04X, using generic handler", aid)
    return GenericOpenDataApp(aid=aid)


def is_known_aid(aid: int) -> bool:
    return aid in _AID_CONSTRUCTORS or aid in ODA_NAMES


def deliver(app: Application, payload: ApplicationPayload) -> str:
    """Hand one group to an application and return a trace fragment."""
    if not isinstance(app, _HANDLER_TYPES):
        raise TypeError(f"not an application handler: {app!r}")
    app.groups_received += 1
    app.last_blocks = payload.blocks
    b1, b2, b3 = payload.blocks[1], payload.blocks[2], payload.blocks[3]

    if isinstance(app, TrafficMessageApp):
        if payload.group_type == 3:
            app.system_messages += 1
            return "TMC system information"
        if b1 is not None and (b1 >> 4) & 0x1:
            return "TMC tuning information"
        return "TMC message"
    if isinstance(app, PagingApp):
        if b1 is not None:
            return f"Paging segment {b1 & 0xF} ({app.tngd_label})"
        return "Paging data"
    if isinstance(app, TransparentDataApp):
        if b1 is None:
            return "TDC data"
        channel = b1 & 0x1F
        app.channels[channel] = app.channels.get(channel, 0) + 1
        return f"TDC channel {channel}"
    if isinstance(app, InHouseApp):
        data = " ".join(f"{b:04X}" for b in (b2, b3) if b is not None)
        return f"In-house data {data}".rstrip()
    return f"{app.name} data"
