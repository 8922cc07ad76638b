"""Group-level RDS decoder.

Consumes one group at a time, updates the tuned station model, routes
application payloads and appends log messages to an :class:`EventLog`.

Example:
    log = EventLog()
    decoder = GroupDecoder(log)
    decoder.process_event(StationChangeEvent(bit_time=0))
    report = decoder.process_group((0xF201, 0x0408, 0xE2E5, 0x5241), bit_time=104)
    print(decoder.station.ps.as_text())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

import numpy as np

from ..events import (
    ApplicationChanged,
    ClockTime,
    EONReturn,
    EONSwitch,
    EventLog,
    FrequencyChangeEvent,
    GroupEvent,
    GroupReceived,
    InputEvent,
    StationChangeEvent,
    StationLost,
    StationTuned,
)
from ..typing import Blocks, NDArrayInt
from . import fields as f
from .applications import (
    TMC_AIDS,
    Application,
    ApplicationPayload,
    InHouseApp,
    PagingApp,
    TrafficMessageApp,
    TransparentDataApp,
    application_for_aid,
    deliver,
    is_known_aid,
)
from .bindings import slot_label
from .charset import rds_chars
from .clock import decode_clock_time
from .diagnostics import Diagnostic, DiagnosticKind, format_diagnostic
from .service_stats import ServiceCategory, ServiceStatRecord
from .station import Station, TunedStation
from .tables import SLOW_LABELLING_VARIANTS, TNGD_LABELS

logger = logging.getLogger(__name__)

# Trace labels of groups 5A-9A and 11A-13A
_DATA_GROUP_LABELS = {
    5: "TDC/ODA",
    6: "IH/ODA",
    7: "RP/ODA",
    8: "TMC/ODA",
    9: "EWS/ODA",
    11: "ODA",
    12: "ODA",
    13: "ERP/ODA",
}

PAGING_SLOT = (7, 0)
TMC_SLOT = (8, 0)


@dataclass
class DecodedGroupReport:
    """Outcome of decoding one group."""

    bit_time: int
    blocks: Blocks
    nb_ok: int
    group_type: int | None = None
    version: int | None = None
    pi: int | None = None
    skipped: bool = False
    committed: bool = False
    trace: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    service_stats: ServiceStatRecord = field(default_factory=ServiceStatRecord)
    new_application: Application | None = None

    @property
    def blocks_ok(self) -> tuple[bool, bool, bool, bool]:
        b = self.blocks
        return (b[0] is not None, b[1] is not None, b[2] is not None, b[3] is not None)

    @property
    def group_label(self) -> str | None:
        if self.group_type is None or self.version is None:
            return None
        return slot_label((self.group_type, self.version))

    def text(self) -> str:
        return ", ".join(t for t in self.trace if t)

    def add(self, text: str) -> None:
        self.trace.append(text)

    def diagnose(self, kind: DiagnosticKind, **params: object) -> None:
        diag = Diagnostic(kind=kind, params=dict(params))
        self.diagnostics.append(diag)
        self.trace.append(format_diagnostic(diag))


class GroupDecoder:
    """Stateful decoder of an RDS group stream for the tuned station."""

    # Groups that must elapse between EON switches before another traffic event is noted
    EON_SWITCH_QUIESCENCE = 20
    QUALITY_HISTORY_SIZE = 40

    def __init__(
        self,
        log: EventLog,
        rbds: bool = False,
        eon_switch_quiescence: int = EON_SWITCH_QUIESCENCE,
        quality_history_size: int = QUALITY_HISTORY_SIZE,
    ) -> None:
        self.log = log
        self.rbds = rbds
        self.eon_switch_quiescence = eon_switch_quiescence
        self.station: TunedStation | None = None
        self.synced = True
        self.group_count_since_eon_switch = 0
        self._quality: NDArrayInt = np.zeros(quality_history_size, dtype=np.int8)
        self._history_ptr = 0
        self._history_filled = 0
        self._handlers: dict[tuple[int, int], Callable[[TunedStation, DecodedGroupReport, int], None]] = {}
        for version in (0, 1):
            self._handlers[(0, version)] = self._group_0
            self._handlers[(1, version)] = self._group_1
            self._handlers[(2, version)] = self._group_2
            self._handlers[(14, version)] = self._group_14
        self._handlers[(3, 0)] = self._group_3a
        self._handlers[(4, 0)] = self._group_4a
        for group_type in _DATA_GROUP_LABELS:
            self._handlers[(group_type, 0)] = self._data_group
        self._handlers[(10, 0)] = self._group_10a
        self._handlers[(15, 0)] = self._group_15a
        self._handlers[(15, 1)] = self._group_15b

    # Input events

    def process_event(self, event: InputEvent) -> DecodedGroupReport | None:
        if isinstance(event, StationChangeEvent):
            self.station_changed(event.bit_time)
            return None
        if isinstance(event, GroupEvent):
            return self.process_group(event.blocks, event.bit_time)
        if isinstance(event, FrequencyChangeEvent):
            logger.debug("Frequency changed to %d kHz", event.frequency_khz)
            return None
        raise TypeError(f"unsupported input event: {event!r}")

    def station_changed(self, bit_time: int) -> TunedStation:
        """Replace the tuned station with a fresh one."""
        previous = self.station
        if previous is not None:
            self.log.add(StationLost(previous.time_of_last_pi, previous))
        self.station = TunedStation(bit_time)
        self.log.add(StationTuned(bit_time, self.station))
        return self.station

    def lose_sync(self) -> None:
        """Hold field updates until a group carries a resolvable PI."""
        self.synced = False

    def reset(self) -> None:
        self.station = None

    # Quality history

    def quality_history(self) -> NDArrayInt:
        """Valid-block counts of the most recent groups, oldest first."""
        size = len(self._quality)
        if self._history_filled < size:
            return self._quality[: self._history_filled].copy()
        return np.roll(self._quality, -self._history_ptr)

    def link_quality(self) -> float:
        history = self.quality_history()
        if len(history) == 0:
            return 0.0
        return float(np.mean(history)) / 4.0

    def _record_quality(self, nb_ok: int) -> None:
        self._quality[self._history_ptr] = nb_ok
        self._history_ptr = (self._history_ptr + 1) % len(self._quality)
        self._history_filled = min(self._history_filled + 1, len(self._quality))

    # Group processing

    def process_group(self, blocks: Sequence[int | None], bit_time: int) -> DecodedGroupReport:
        """Decode one group; ``None`` marks a block that failed its checkword."""
        if len(blocks) != 4:
            raise ValueError(f"a group has 4 blocks (got {len(blocks)})")
        checked: Blocks = tuple(None if b is None else f.check_block(b) for b in blocks)  # type: ignore[assignment]

        station = self.station
        if station is None:
            station = self.station_changed(bit_time)

        report = DecodedGroupReport(bit_time=bit_time, blocks=checked, nb_ok=sum(b is not None for b in checked))
        ok = report.blocks_ok
        self._record_quality(report.nb_ok)

        b0, b1, b2, b3 = checked
        if b1 is not None:
            report.group_type, report.version = f.group_type_version(b1)
        version = report.version

        if b0 is not None:
            report.pi = b0
        elif version == 1 and b2 is not None:
            report.pi = b2

        if report.pi is not None:
            station.set_pi(report.pi)
            station.time_of_last_pi = bit_time
            self.synced = True
            pi_text = f"PI={report.pi:04X}"
            callsign = station.callsign() if self.rbds else None
            if callsign is not None:
                pi_text += f" [{callsign}]"
            report.add(pi_text)
        elif not self.synced:
            report.skipped = True
            report.add("[no PI after sync loss]")
            self._emit_group(report)
            return report

        station.add_group_to_stats(report.group_type, version, report.nb_ok)
        if b1 is not None and report.group_type is not None:
            tp = f.TRAFFIC_PROGRAM.read(b1)
            pty = f.PROGRAMME_TYPE.read(b1)
            station.tp = tp == 1
            station.pty = pty
            report.add(f"Type {report.group_label}, TP={tp}, PTY={pty}")

        stats = report.service_stats
        stats.add(ServiceCategory.PI, 16)
        stats.add(ServiceCategory.OVERHEAD, 5)
        stats.add(ServiceCategory.PROGRAMME_TYPE, 5 + 1)
        if version == 1:
            stats.add(ServiceCategory.PI, 16)

        if b1 is not None and report.group_type is not None and version is not None:
            handler = self._handlers.get((report.group_type, version))
            if handler is not None:
                handler(station, report, b1)

        if ok[1] and ok[2] and ok[3]:
            station.service_ledger.commit(stats)
            report.committed = True

        self._emit_group(report)
        if report.new_application is not None:
            self.log.add(ApplicationChanged(bit_time, None, report.new_application))
        self.group_count_since_eon_switch += 1
        return report

    def _emit_group(self, report: DecodedGroupReport) -> None:
        self.log.add(GroupReceived(report.bit_time, report.blocks, report.nb_ok, report.text()))

    def _bind_new(self, station: TunedStation, report: DecodedGroupReport, slot: tuple[int, int], app: Application) -> None:
        conflict = station.applications.bind(slot, app)
        if conflict is not None:
            report.diagnose(DiagnosticKind.SLOT_CONFLICT, conflict=conflict, slot=slot_label(slot))
        elif station.applications.lookup(slot) is app:
            report.new_application = app

    # Handlers

    def _basic_tuning_bits(self, station: TunedStation, report: DecodedGroupReport, block: int) -> int:
        """TA, M/S and one DI bit of 0A/0B/15B; returns the segment address."""
        bits = f.unpack_block(block, f.BASIC_TUNING)
        new_ta = bits["ta"] == 1
        station.ms = bits["ms"] == 1
        station.set_di_bit(bits["address"], bits["di"])
        if station.tp and station.ta is not None and station.ta != new_ta:
            station.add_traffic_event(
                report.bit_time, ("start" if new_ta else "end") + " of traffic announcement"
            )
        station.ta = new_ta
        report.add(f"TA={bits['ta']}, {'M/s' if station.ms else 'm/S'}, DI[{bits['address']}]={bits['di']}")
        return bits["address"]

    def _group_0(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        address = self._basic_tuning_bits(station, report, b1)
        if b3 is not None:
            chars = rds_chars(*f.block_chars(b3))
            station.ps.set(address, chars)
            report.add(f'PS pos={address}: "{chars}"')
        if report.version == 0 and b2 is not None:
            report.add(station.afs.add_pair(*f.block_chars(b2)))

        stats = report.service_stats
        stats.add(ServiceCategory.PROGRAMME_TYPE, 3)
        stats.add(ServiceCategory.NAME, 2 + 16)
        if report.version == 0:
            stats.add(ServiceCategory.ALTERNATE_FREQUENCIES, 16)

    def _group_1(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        stats = report.service_stats

        if report.version == 0:
            config = f.unpack_block(b1, f.PAGING_CONFIG)
            tngd = config["tngd"]
            report.add(f"RP config: {TNGD_LABELS[tngd]}")
            if tngd > 0:
                app = station.applications.lookup(PAGING_SLOT)
                if app is None:
                    app = PagingApp(tngd=tngd)
                    self._bind_new(station, report, PAGING_SLOT, app)
                if isinstance(app, PagingApp):
                    report.add(app.sync_info(tngd, config["bsi"]))
                else:
                    report.diagnose(
                        DiagnosticKind.SLOT_CONFLICT,
                        conflict=f"paging announced while group 7A is used for {app.name}",
                        slot=slot_label(PAGING_SLOT),
                    )
            stats.add(ServiceCategory.OVERHEAD, 16)

        stats.add(ServiceCategory.PIN, 16)
        stats.add(ServiceCategory.OVERHEAD, 5)

        if b3 is not None:
            if station.set_pin(b3):
                report.add(f"PIN={b3:04X} [{station.pin}]")
            else:
                self._pin_variant(station, report, b3)

        if report.version == 0 and b2 is not None:
            self._slow_labelling(station, report, b2)

    def _pin_variant(self, station: TunedStation, report: DecodedGroupReport, block: int) -> None:
        variant = f.PIN_VARIANT.read(block)
        if variant <= 3:
            opc = f.PIN_OPC.read(block)
            station.opc = opc
            report.add(_opc_text(opc))
            if opc != 0:
                station.pac = f.PIN_PAC.read(block)
                report.add(f"PAC={station.pac}")
        elif variant == 4:
            station.ecc = block & 0xFF
            report.add(f"ECC={station.ecc:02X}")
        else:
            report.diagnose(DiagnosticKind.INVALID_PIN_VARIANT, variant=variant)

    def _slow_labelling(self, station: TunedStation, report: DecodedGroupReport, block: int) -> None:
        label = f.unpack_block(block, f.SLOW_LABELLING)
        variant = label["variant"]
        payload = label["payload"]
        station.linkage_actuator = label["la"] == 1
        report.add(f"LA={label['la']} v={variant}")

        if variant == 0:
            station.ecc = block & 0xFF
            station.opc = f.SLOW_LABEL_OPC.read(block)
            report.add(f"ECC={station.ecc:02X} {_opc_text(station.opc)}")
        elif variant == 1:
            station.tmc_id = payload
            report.add(f"TMC (legacy) ID={payload:03X}")
            app = station.applications.lookup(TMC_SLOT)
            if app is None:
                self._bind_new(station, report, TMC_SLOT, TrafficMessageApp(tmc_id=payload))
            elif isinstance(app, TrafficMessageApp):
                app.tmc_id = payload
            else:
                report.diagnose(
                    DiagnosticKind.SLOT_CONFLICT,
                    conflict=f"TMC announced while group 8A is used for {app.name}",
                    slot=slot_label(TMC_SLOT),
                )
        elif variant == 2:
            opc = f.SLOW_LABEL_OPC.read(block)
            station.opc = opc
            report.add(_opc_text(opc))
            if opc != 0:
                station.pac = block & 0x3F
                report.add(f"PAC={station.pac}")
        elif variant == 3:
            station.language = block & 0xFF
            report.add(f"Language={station.language:02X}")
        elif variant == 6:
            station.broadcaster_data = payload
            report.add(f"{SLOW_LABELLING_VARIANTS[6]}: {payload:03X}")
        elif variant == 7:
            station.ews_id = payload
            report.add(f"{SLOW_LABELLING_VARIANTS[7]}: {payload:03X}")
        else:
            report.diagnose(DiagnosticKind.UNHANDLED_SLOW_LABEL, variant=variant, data=payload)

    def _group_2(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        version = report.version
        report.service_stats.add(ServiceCategory.RADIO_TEXT, 5 + 16 + 16 if version == 0 else 5 + 16)
        if b2 is None and b3 is None:
            return

        rt = f.unpack_block(b1, f.RADIO_TEXT)
        address, ab = rt["address"], rt["ab"]
        first = rds_chars(*f.block_chars(b2)) if b2 is not None else "??"
        second = rds_chars(*f.block_chars(b3)) if b3 is not None else "??"

        if version == 0 and b2 is not None and b3 is not None:
            station.rt.set(ab, address, first + second)
        else:
            if version == 0 and b2 is not None:
                station.rt.set(ab, address * 2, first)
            if b3 is not None:
                station.rt.set(ab, address * 2 + 1 if version == 0 else address, second)
        station.rt.set_flag(ab)

        shown = first + second if version == 0 else second
        report.add(f'RT A/B={"AB"[ab]} pos={address}: "{shown}"')

    def _group_3a(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        report.service_stats.add(ServiceCategory.OPEN_DATA, 5 + 16 + 16)
        if b3 is None:
            return

        aid = b3
        announced = f.unpack_block(b1, f.ODA_ANNOUNCEMENT)
        slot = (announced["app_group_type"], announced["app_version"])
        report.add(f"AID #{aid:04X}" if aid != 0 else "NO AID")

        app = station.applications.lookup(slot)
        if app is not None:
            if isinstance(app, TrafficMessageApp) and app.aid is None and aid in TMC_AIDS:
                app.aid = aid
            elif app.aid is None:
                report.diagnose(DiagnosticKind.ODA_SLOT_NOT_ODA, slot=slot_label(slot), existing=app.name, aid=aid)
            elif app.aid != aid:
                report.diagnose(
                    DiagnosticKind.ODA_AID_MISMATCH, slot=slot_label(slot), existing_aid=app.aid, aid=aid
                )
                app = None
        elif aid != 0:
            app = application_for_aid(aid)
            station.announced_odas[aid] = slot
            if not is_known_aid(aid):
                report.diagnose(DiagnosticKind.UNKNOWN_AID, aid=aid)
            self._bind_new(station, report, slot, app)

        if app is not None:
            report.add(f"({app.name})")

        if slot == (0, 0):
            report.add("only in group 3A")
        elif slot == (15, 1):
            report.diagnose(DiagnosticKind.ENCODER_FAULT, aid=aid)
        else:
            report.add(f"group {slot_label(slot)}")

        if app is not None and app.aid == aid and b2 is not None:
            report.add(f"ODA data={b2:04X}")
            report.add(deliver(app, ApplicationPayload(3, 0, report.blocks, report.bit_time)))

    def _group_4a(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        if b2 is not None and b3 is not None:
            ct = f.clock_fields(b1, b2, b3)
            clock = decode_clock_time(ct.mjd, ct.hour, ct.minute, ct.offset_half_hours)
            if clock is None:
                report.diagnose(DiagnosticKind.INVALID_CLOCK_TIME, mjd=ct.mjd, hour=ct.hour, minute=ct.minute)
            else:
                station.set_date(clock, report.bit_time)
                report.add(f"CT {clock}")
                self.log.add(ClockTime(report.bit_time, clock))

        paging = station.applications.lookup(PAGING_SLOT)
        if isinstance(paging, PagingApp):
            report.add(f"[RP: {paging.full_minute()}]")

        report.service_stats.add(ServiceCategory.CLOCK_TIME, 2 + 16 + 16)
        report.service_stats.add(ServiceCategory.OVERHEAD, 3)

    def _data_group(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        group_type, _ = f.group_type_version(b1)
        slot = (group_type, 0)
        label = _DATA_GROUP_LABELS[group_type]
        if b2 is not None and b3 is not None:
            label += f" {b1 & 0x1F:02X}/{b2:04X}-{b3:04X}"
            if group_type in (5, 6):
                label += f" ({rds_chars(*f.block_chars(b2), *f.block_chars(b3))})"
        report.add(label)

        app = station.applications.lookup(slot)
        if app is None:
            if group_type == 5:
                app = TransparentDataApp()
            elif group_type == 6:
                app = InHouseApp()
            if app is not None:
                self._bind_new(station, report, slot, app)

        if app is None:
            report.service_stats.add(ServiceCategory.WASTE, 5 + 16 + 16)
            return
        report.service_stats.add(app.name, 5 + 16 + 16)
        if b2 is not None and b3 is not None:
            report.add(f"{app.name} --> " + deliver(app, ApplicationPayload(group_type, 0, report.blocks, report.bit_time)))

    def _group_10a(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        ptyn = f.unpack_block(b1, f.PTYN)
        ab, address = ptyn["ab"], ptyn["address"]
        station.ptyn.set_flag(ab)
        shown = ""
        for i, block in enumerate((b2, b3)):
            if block is None:
                shown += "??"
                continue
            chars = rds_chars(*f.block_chars(block))
            station.ptyn.set(address * 2 + i, chars)
            shown += chars
        report.add(f'PTYN flag={"AB"[ab]} pos={address}: "{shown}"')

        report.service_stats.add(ServiceCategory.PROGRAMME_TYPE_NAME, 2 + 16 + 16)
        report.service_stats.add(ServiceCategory.OVERHEAD, 3)

    def _group_14(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        on: Station | None = None
        on_pi = b3
        if on_pi is not None:
            on = station.network(on_pi, report.bit_time)
            report.add(f"ON.PI={on_pi:04X}" + (" (self)" if on is station else ""))

        on_tp = f.EON_TP.read(b1)
        if on is not None:
            on.tp = on_tp == 1

        if report.version == 0:
            variant = f.EON_VARIANT.read(b1)
            report.add(f"ON.TP={on_tp}, v={variant}")
            if b2 is not None:
                self._eon_variant(on, report, variant, b2)
            report.service_stats.add(ServiceCategory.OTHER_NETWORKS, 5 + 16 + 16)
            return

        on_ta = f.EON_TA.read(b1)
        if on_ta:
            message = "Switch now to ON"
            self.log.add(EONSwitch(report.bit_time, on))
        else:
            message = "Switch back from ON"
            self.log.add(EONReturn(report.bit_time, on))
        report.add(f"ON.TP={on_tp}, ON.TA={on_ta}, {message}")
        if on_pi is not None:
            message += f": PI={on_pi:04X}"
        if on is not None:
            message += f" ({on.ps.as_text().strip()})"
        if self.group_count_since_eon_switch > self.eon_switch_quiescence:
            station.add_traffic_event(report.bit_time, message)
        self.group_count_since_eon_switch = 0

        report.service_stats.add(ServiceCategory.OTHER_NETWORKS, 2 + 16)
        report.service_stats.add(ServiceCategory.OVERHEAD, 3)

    def _eon_variant(self, on: Station | None, report: DecodedGroupReport, variant: int, block: int) -> None:
        hi, lo = f.block_chars(block)
        if variant <= 3:
            chars = rds_chars(hi, lo)
            report.add(f'ON.PS pos={variant}: "{chars}"')
            if on is not None:
                on.ps.set(variant, chars)
        elif variant == 4:
            if on is not None:
                report.add("ON." + on.afs.add_pair(hi, lo))
        elif variant <= 9:
            if on is not None:
                report.add("ON." + on.mapped_frequencies.add(hi, lo, lfmf=variant == 9))
        elif variant == 12:
            linkage = f.unpack_block(block, f.LINKAGE)
            report.add(f"Linkage information: {block:04X}")
            if on is not None:
                on.linkage_actuator = linkage["la"] == 1
                on.linkage_set_number = linkage["lsn"]
        elif variant == 13:
            on_pty = f.EON_PTY.read(block)
            on_ta = f.EON_TA_FLAG.read(block)
            report.add(f"ON.PTY={on_pty}, ON.TA={on_ta}")
            if on is not None:
                on.pty = on_pty
                on.ta = on_ta == 1
        elif variant == 14:
            report.add(f"ON.PIN={block:04X}")
            if on is not None:
                on.set_pin(block)
                report.add(f"[{on.pin}]")
        else:
            report.add(f"ON data {block:04X}")

    def _group_15a(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, b2, b3 = report.blocks
        address = f.LONG_PS_ADDRESS.read(b1)
        shown = []
        for i, block in enumerate((b2, b3)):
            if block is None:
                shown.append("-- --")
                continue
            hi, lo = f.block_chars(block)
            station.long_ps.set(address * 2 + i, bytes((hi, lo)))
            shown.append(f"{hi:02X} {lo:02X}")
        report.add(f"Long PS pos={address}: {' '.join(shown)}, TA={f.TRAFFIC_ANNOUNCEMENT.read(b1)}")

        report.service_stats.add(ServiceCategory.PROGRAMME_TYPE, 1)
        report.service_stats.add(ServiceCategory.NAME, 3 + 16 + 16)
        report.service_stats.add(ServiceCategory.OVERHEAD, 1)

    def _group_15b(self, station: TunedStation, report: DecodedGroupReport, b1: int) -> None:
        _, _, _, b3 = report.blocks
        self._basic_tuning_bits(station, report, b1)
        if b3 is not None:
            self._basic_tuning_bits(station, report, b3)

        report.service_stats.add(ServiceCategory.OVERHEAD, 5)
        report.service_stats.add(ServiceCategory.PROGRAMME_TYPE, 6)
        report.service_stats.add(ServiceCategory.PROGRAMME_TYPE, 2 * 5)


def _opc_text(opc: int) -> str:
    return "No ERP" if opc == 0 else f"ERP OPC={opc}"
