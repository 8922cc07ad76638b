"""Tests for enhanced other networks (groups 14A and 14B)."""

from __future__ import annotations

from typing import Callable

import pytest

from group_builders import PI, block1, text_block
from rdsmon.decoders.group_decoder import DecodedGroupReport, GroupDecoder
from rdsmon.decoders.station import TunedStation
from rdsmon.events import EONReturn, EONSwitch, EventLog

Feed = Callable[..., DecodedGroupReport]

ON_PI = 0xF202


@pytest.fixture
def tuned(decoder: GroupDecoder, feed: Feed) -> TunedStation:
    feed(PI, block1(0), 0xCDCD, text_block("AB"))
    assert decoder.station is not None
    return decoder.station


def test_self_reference_resolves_to_tuned_station(tuned: TunedStation, feed: Feed) -> None:
    report = feed(PI, block1(14), text_block("XX"), PI)

    assert len(tuned.networks) == 0
    assert tuned.network(PI) is tuned
    assert tuned.ps.raw_text()[:2] == "XX"
    assert f"ON.PI={PI:04X} (self)" in report.trace


def test_other_network_ps(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, low=1), text_block("DI"), ON_PI)

    (on,) = tuned.other_networks()
    assert on.pi == ON_PI
    assert on.ps.raw_text() == "??DI????"


def test_other_network_pi_zero_is_ignored(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, low=1), text_block("DI"), 0x0000)
    assert len(tuned.networks) == 0


def test_other_networks_are_pi_ordered(tuned: TunedStation, feed: Feed) -> None:
    for on_pi in (0xF205, 0xF203, 0xF204):
        feed(PI, block1(14), text_block("AB"), on_pi)
    assert [s.pi for s in tuned.other_networks()] == [0xF203, 0xF204, 0xF205]
    assert [s.pi for s in tuned.networks] == [0xF203, 0xF204, 0xF205]


def test_other_network_tp_from_block_1(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, low=0x10 | 13), 0x0000, ON_PI)
    assert tuned.networks.get(ON_PI).tp is True


def test_other_network_af(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, low=4), 0xE305, ON_PI)
    assert tuned.networks.get(ON_PI).afs.snapshot() == [88_000]


def test_other_network_mapped_frequencies(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, low=5), 0x0105, ON_PI)
    assert tuned.networks.get(ON_PI).mapped_frequencies.snapshot() == {87_600: [88_000]}


def test_other_network_pty_and_ta(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, low=13), (10 << 11) | 1, ON_PI)
    on = tuned.networks.get(ON_PI)
    assert on.pty == 10
    assert on.ta is True


def test_other_network_linkage(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, low=12), 0x8123, ON_PI)
    on = tuned.networks.get(ON_PI)
    assert on.linkage_actuator is True
    assert on.linkage_set_number == 0x123


def test_other_network_pin(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, low=14), 0x7A9E, ON_PI)
    assert str(tuned.networks.get(ON_PI).pin) == "D=15 10:30"


def test_switch_and_return_events(tuned: TunedStation, event_log: EventLog, feed: Feed) -> None:
    feed(PI, block1(14, 1, low=0x08), PI, ON_PI)
    feed(PI, block1(14, 1), PI, ON_PI)

    switches = event_log.of_type(EONSwitch)
    returns = event_log.of_type(EONReturn)
    assert len(switches) == 1
    assert len(returns) == 1
    assert switches[0].network.pi == ON_PI
    assert switches[0].to_dict()["pi"] == "F202"


def test_switch_traffic_events_need_quiescence(
    tuned: TunedStation, decoder: GroupDecoder, feed: Feed
) -> None:
    for _ in range(25):
        feed(PI, block1(0), None, None)
    assert decoder.group_count_since_eon_switch > 20

    feed(PI, block1(14, 1, low=0x08), PI, ON_PI)
    feed(PI, block1(14, 1), PI, ON_PI)

    texts = [e.text for e in tuned.traffic_events]
    assert len(texts) == 1
    assert texts[0].startswith("Switch now to ON: PI=F202")
    assert decoder.group_count_since_eon_switch == 1


def test_switch_right_after_tuning_is_not_recorded(tuned: TunedStation, feed: Feed) -> None:
    feed(PI, block1(14, 1, low=0x08), PI, ON_PI)
    assert tuned.traffic_events == []


def test_network_table_rejects_pi_zero(tuned: TunedStation) -> None:
    with pytest.raises(ValueError):
        tuned.networks.get_or_create(0)


def test_own_pi_learned_after_eon_drops_matching_network(decoder: GroupDecoder, feed: Feed) -> None:
    feed(None, block1(14, low=1), text_block("DI"), PI)
    station = decoder.station
    assert station is not None
    assert station.pi == 0
    assert PI in station.networks

    feed(PI, block1(0), None, None)

    assert station.pi == PI
    assert PI not in station.networks
    assert station.other_networks() == []
    assert station.network(PI) is station
