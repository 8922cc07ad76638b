"""Shared pytest fixtures for rdsmon tests."""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from rdsmon.decoders.group_decoder import DecodedGroupReport, GroupDecoder
from rdsmon.events import EventLog, StationChangeEvent


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture
def decoder(event_log: EventLog) -> GroupDecoder:
    """Decoder with a freshly tuned station."""
    dec = GroupDecoder(event_log)
    dec.process_event(StationChangeEvent(bit_time=0))
    return dec


@pytest.fixture
def feed(decoder: GroupDecoder) -> Callable[..., DecodedGroupReport]:
    """Feed one group per call, advancing the bit time by one group."""
    state = {"bit_time": 0}

    def _feed(
        b0: Optional[int], b1: Optional[int], b2: Optional[int], b3: Optional[int]
    ) -> DecodedGroupReport:
        state["bit_time"] += 104
        return decoder.process_group((b0, b1, b2, b3), state["bit_time"])

    return _feed
