from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from .models import DecoderStatsModel, StationModel, TunedStationModel
from .session import DecoderSession

logger = logging.getLogger(__name__)

router = APIRouter()


def get_session(request: Request) -> DecoderSession:
    session: DecoderSession | None = getattr(request.app.state, "session", None)
    if session is None:
        raise RuntimeError("DecoderSession not initialized")
    return session


@router.get("/health")
def health_check(session: DecoderSession = Depends(get_session)) -> dict[str, Any]:
    return {
        "status": "ok",
        "stationTuned": session.station is not None,
        "groupsProcessed": session.groups_processed,
    }


@router.get("/station", response_model=TunedStationModel)
def get_station(session: DecoderSession = Depends(get_session)) -> TunedStationModel:
    model = session.station_snapshot()
    if model is None:
        raise HTTPException(status_code=404, detail="No station tuned")
    return model


@router.get("/station/networks", response_model=list[StationModel])
def list_networks(session: DecoderSession = Depends(get_session)) -> list[StationModel]:
    return session.networks_snapshot()


@router.get("/events")
def list_events(
    limit: int = Query(100, ge=1, le=10_000),
    session: DecoderSession = Depends(get_session),
) -> list[dict[str, Any]]:
    messages = session.log.messages()[-limit:]
    return [m.to_dict() for m in messages]


@router.get("/stats", response_model=DecoderStatsModel)
def get_stats(session: DecoderSession = Depends(get_session)) -> DecoderStatsModel:
    return session.stats_snapshot()
