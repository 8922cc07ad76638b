"""Tests for application bindings driven by groups 1A, 3A, 4A and the data groups."""

from __future__ import annotations

import datetime as dt
from typing import Callable

from group_builders import PI, block1, clock_blocks
from rdsmon.decoders.applications import (
    GenericOpenDataApp,
    InHouseApp,
    OpenDataApp,
    PagingApp,
    TrafficMessageApp,
    TransparentDataApp,
)
from rdsmon.decoders.diagnostics import DiagnosticKind
from rdsmon.decoders.group_decoder import DecodedGroupReport, GroupDecoder
from rdsmon.events import ApplicationChanged, ClockTime, EventLog

Feed = Callable[..., DecodedGroupReport]


def _announce(slot_type: int, aid: int, version: int = 0, message: int | None = 0x0000) -> tuple:
    return (PI, block1(3, low=(slot_type << 1) | version), message, aid)


def _kinds(report: DecodedGroupReport) -> list[DiagnosticKind]:
    return [d.kind for d in report.diagnostics]


class TestOpenDataAnnouncements:
    def test_tmc_announcement_binds_8a(
        self, decoder: GroupDecoder, event_log: EventLog, feed: Feed
    ) -> None:
        report = feed(*_announce(8, 0xCD46))

        app = decoder.station.applications.lookup((8, 0))
        assert isinstance(app, TrafficMessageApp)
        assert app.aid == 0xCD46
        assert app.system_messages == 1
        assert report.new_application is app
        assert report.diagnostics == []

        changed = event_log.of_type(ApplicationChanged)
        assert len(changed) == 1
        assert changed[0].application is app
        assert changed[0].previous is None

    def test_bound_application_receives_its_groups(
        self, decoder: GroupDecoder, feed: Feed
    ) -> None:
        feed(*_announce(8, 0xCD46))
        report = feed(PI, block1(8), 0x1234, 0x5678)

        app = decoder.station.applications.lookup((8, 0))
        assert app.groups_received == 2
        assert app.last_blocks == (PI, block1(8), 0x1234, 0x5678)
        assert "TMC --> TMC message" in report.trace
        assert decoder.station.service_ledger.totals()["TMC"] == 37

    def test_known_oda_uses_registered_name(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(*_announce(11, 0x4BD7))
        app = decoder.station.applications.lookup((11, 0))
        assert isinstance(app, OpenDataApp)
        assert app.name == "RadioText+"
        assert "(RadioText+)" in report.trace
        assert decoder.station.announced_odas == {0x4BD7: (11, 0)}

    def test_unknown_aid_binds_generic_handler(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(*_announce(11, 0x1111))
        assert isinstance(decoder.station.applications.lookup((11, 0)), GenericOpenDataApp)
        assert _kinds(report) == [DiagnosticKind.UNKNOWN_AID]
        assert "[Unknown AID 1111]" in report.trace

    def test_aid_zero_never_binds(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(*_announce(11, 0x0000))
        assert len(decoder.station.applications) == 0
        assert "NO AID" in report.trace
        assert report.new_application is None

    def test_aid_mismatch_keeps_existing_binding(
        self, decoder: GroupDecoder, feed: Feed
    ) -> None:
        feed(*_announce(8, 0xCD46))
        report = feed(*_announce(8, 0x4BD7))

        app = decoder.station.applications.lookup((8, 0))
        assert isinstance(app, TrafficMessageApp)
        assert app.aid == 0xCD46
        assert app.system_messages == 1
        assert _kinds(report) == [DiagnosticKind.ODA_AID_MISMATCH]

    def test_announcement_for_non_oda_slot(self, decoder: GroupDecoder, feed: Feed) -> None:
        feed(PI, block1(5, low=1), 0x4142, 0x4344)
        report = feed(*_announce(5, 0x4BD7))
        assert isinstance(decoder.station.applications.lookup((5, 0)), TransparentDataApp)
        assert _kinds(report) == [DiagnosticKind.ODA_SLOT_NOT_ODA]

    def test_legacy_tmc_adopts_announced_aid(self, decoder: GroupDecoder, feed: Feed) -> None:
        feed(PI, block1(1), 0x1123, None)
        report = feed(*_announce(8, 0xCD46))

        app = decoder.station.applications.lookup((8, 0))
        assert isinstance(app, TrafficMessageApp)
        assert app.aid == 0xCD46
        assert app.tmc_id == 0x123
        assert report.diagnostics == []
        assert app.system_messages == 1

    def test_3a_only_announcement(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(*_announce(0, 0x4BD7))
        assert "only in group 3A" in report.trace

    def test_15b_slot_is_an_encoder_fault(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(*_announce(15, 0x4BD7, version=1))
        assert DiagnosticKind.ENCODER_FAULT in _kinds(report)

    def test_3a_without_aid_block(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(PI, block1(3, low=8 << 1), 0x0000, None)
        assert len(decoder.station.applications) == 0
        assert report.service_stats.bits["ODA"] == 37


class TestGroup1A:
    def test_paging_binds_7a(self, decoder: GroupDecoder, event_log: EventLog, feed: Feed) -> None:
        report = feed(PI, block1(1, low=(1 << 2) | 2), None, None)

        app = decoder.station.applications.lookup((7, 0))
        assert isinstance(app, PagingApp)
        assert app.tngd == 1
        assert app.interval == 2
        assert "RP config: RP groups 00-99" in report.trace
        assert len(event_log.of_type(ApplicationChanged)) == 1

    def test_no_paging_when_tngd_is_zero(self, decoder: GroupDecoder, feed: Feed) -> None:
        feed(PI, block1(1), None, None)
        assert decoder.station.applications.lookup((7, 0)) is None

    def test_paging_conflicts_with_oda_on_7a(self, decoder: GroupDecoder, feed: Feed) -> None:
        feed(*_announce(7, 0x4BD7))
        report = feed(PI, block1(1, low=1 << 2), None, None)
        assert isinstance(decoder.station.applications.lookup((7, 0)), OpenDataApp)
        assert _kinds(report) == [DiagnosticKind.SLOT_CONFLICT]

    def test_programme_item_number(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(PI, block1(1), None, 0x7A9E)
        station = decoder.station
        assert station.pin_valid
        assert str(station.pin) == "D=15 10:30"
        assert "PIN=7A9E [D=15 10:30]" in report.trace

    def test_pin_variant_4_is_ecc(self, decoder: GroupDecoder, feed: Feed) -> None:
        feed(PI, block1(1), None, 0x04E1)
        assert not decoder.station.pin_valid
        assert decoder.station.ecc == 0xE1

    def test_pin_variant_not_implemented(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(PI, block1(1), None, 0x0500)
        assert _kinds(report) == [DiagnosticKind.INVALID_PIN_VARIANT]

    def test_slow_labelling_ecc_and_linkage_actuator(
        self, decoder: GroupDecoder, feed: Feed
    ) -> None:
        feed(PI, block1(1), 0x80E2, None)
        assert decoder.station.ecc == 0xE2
        assert decoder.station.opc == 0
        assert decoder.station.linkage_actuator is True

    def test_slow_labelling_language(self, decoder: GroupDecoder, feed: Feed) -> None:
        feed(PI, block1(1), 0x3009, None)
        assert decoder.station.language == 0x09

    def test_slow_labelling_tmc_identification(
        self, decoder: GroupDecoder, event_log: EventLog, feed: Feed
    ) -> None:
        feed(PI, block1(1), 0x1123, None)
        app = decoder.station.applications.lookup((8, 0))
        assert isinstance(app, TrafficMessageApp)
        assert app.aid is None
        assert decoder.station.tmc_id == 0x123
        assert len(event_log.of_type(ApplicationChanged)) == 1

    def test_tmc_identification_conflicts_with_other_oda(
        self, decoder: GroupDecoder, feed: Feed
    ) -> None:
        feed(*_announce(8, 0x4BD7))
        report = feed(PI, block1(1), 0x1123, None)
        assert isinstance(decoder.station.applications.lookup((8, 0)), OpenDataApp)
        assert _kinds(report) == [DiagnosticKind.SLOT_CONFLICT]

    def test_unhandled_slow_labelling_variant(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(PI, block1(1), 0x4000, None)
        assert _kinds(report) == [DiagnosticKind.UNHANDLED_SLOW_LABEL]


class TestClockTime:
    def test_valid_clock_time(self, decoder: GroupDecoder, event_log: EventLog, feed: Feed) -> None:
        report = feed(PI, *clock_blocks(58849, 12, 0, offset_half_hours=2))

        station = decoder.station
        assert station.date is not None
        assert station.date.utc == dt.datetime(2020, 1, 1, 12, 0, tzinfo=dt.timezone.utc)
        assert station.date.local.hour == 13
        assert station.date_bit_time == report.bit_time

        events = event_log.of_type(ClockTime)
        assert len(events) == 1
        assert str(events[0].time) == "2020-01-01T13:00:00+01:00"

    def test_clock_extrapolates_with_bit_time(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(PI, *clock_blocks(58849, 12, 0))
        later = decoder.station.datetime_for_bit_time(report.bit_time + 11_875)
        assert later == dt.datetime(2020, 1, 1, 12, 0, 10, tzinfo=dt.timezone.utc)

    def test_invalid_mjd_changes_nothing(
        self, decoder: GroupDecoder, event_log: EventLog, feed: Feed
    ) -> None:
        report = feed(PI, *clock_blocks(15078, 12, 0))
        assert decoder.station.date is None
        assert event_log.of_type(ClockTime) == []
        assert _kinds(report) == [DiagnosticKind.INVALID_CLOCK_TIME]

    def test_clock_marks_paging_full_minute(self, decoder: GroupDecoder, feed: Feed) -> None:
        feed(PI, block1(1, low=1 << 2), None, None)
        report = feed(PI, *clock_blocks(58849, 12, 0))
        assert decoder.station.applications.lookup((7, 0)).minutes == 1
        assert "[RP: Paging: full minute #1]" in report.trace


class TestDataGroups:
    def test_5a_creates_transparent_data_channel(
        self, decoder: GroupDecoder, event_log: EventLog, feed: Feed
    ) -> None:
        report = feed(PI, block1(5, low=3), 0x4142, 0x4344)

        app = decoder.station.applications.lookup((5, 0))
        assert isinstance(app, TransparentDataApp)
        assert app.channels == {3: 1}
        assert "TDC/ODA 03/4142-4344 (ABCD)" in report.trace
        assert decoder.station.service_ledger.totals()["TDC"] == 37
        assert len(event_log.of_type(ApplicationChanged)) == 1

    def test_6a_creates_in_house_handler(self, decoder: GroupDecoder, feed: Feed) -> None:
        report = feed(PI, block1(6), 0x0102, 0x0304)
        assert isinstance(decoder.station.applications.lookup((6, 0)), InHouseApp)
        assert "In-house --> In-house data 0102 0304" in report.trace

    def test_partial_data_group_is_not_delivered(
        self, decoder: GroupDecoder, feed: Feed
    ) -> None:
        feed(*_announce(8, 0xCD46))
        feed(PI, block1(8), 0x1234, None)
        assert decoder.station.applications.lookup((8, 0)).groups_received == 1
