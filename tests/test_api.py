"""Tests for the read-only status API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from rdsmon.app import create_app
from rdsmon.config import AppConfig
from rdsmon.events import GroupEvent
from rdsmon.session import DecoderSession

GROUPS = [
    (0xF201, 0x0400, 0xE205, 0x5241),
    (0xF201, 0x0401, 0xCDCD, 0x4449),
    (0xF201, 0x0402, 0xCDCD, 0x4F20),
    (0xF201, 0x0403, 0xCDCD, 0x3120),
    (0xF201, 0xE001, 0x4449, 0xF202),
    (0xF201, 0x3010, 0x0000, 0xCD46),
]


@pytest.fixture
def session() -> DecoderSession:
    return DecoderSession(AppConfig())


@pytest.fixture
def client(session: DecoderSession) -> TestClient:
    return TestClient(create_app(session.config, session))


@pytest.fixture
def decoded(session: DecoderSession) -> DecoderSession:
    for n, blocks in enumerate(GROUPS):
        session.feed(GroupEvent(bit_time=n * 104, blocks=blocks))
    return session


def test_health_before_tuning(client: TestClient) -> None:
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "stationTuned": False, "groupsProcessed": 0}


def test_station_not_found_before_tuning(client: TestClient) -> None:
    assert client.get("/api/v1/station").status_code == 404


def test_station(client: TestClient, decoded: DecoderSession) -> None:
    response = client.get("/api/v1/station")
    assert response.status_code == 200
    data = response.json()
    assert data["pi"] == "F201"
    assert data["ps"] == "RADIO 1 "
    assert data["pty"] == 0
    assert data["applications"] == [
        {"group": "8A", "name": "TMC", "kind": "traffic_message", "aid": "CD46", "groups_received": 1}
    ]


def test_networks(client: TestClient, decoded: DecoderSession) -> None:
    response = client.get("/api/v1/station/networks")
    assert response.status_code == 200
    (network,) = response.json()
    assert network["pi"] == "F202"
    assert network["ps"] == "??DI????"


def test_events_limit(client: TestClient, decoded: DecoderSession) -> None:
    events = client.get("/api/v1/events", params={"limit": 2}).json()
    assert [e["type"] for e in events] == ["groupReceived", "applicationChanged"]
    assert events[1]["application"] == "TMC"


def test_events_limit_is_validated(client: TestClient) -> None:
    assert client.get("/api/v1/events", params={"limit": 0}).status_code == 422


def test_stats(client: TestClient, decoded: DecoderSession) -> None:
    data = client.get("/api/v1/stats").json()
    assert data["synced"] is True
    assert len(data["quality_history"]) == len(GROUPS)
