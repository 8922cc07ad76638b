from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .decoders.bindings import slot_label
from .decoders.station import Station, TunedStation


class ApplicationModel(BaseModel):
    group: str
    name: str
    kind: str
    aid: str | None = None
    groupsReceived: int = Field(0, alias="groups_received")
    model_config = ConfigDict(populate_by_name=True)


class TrafficEventModel(BaseModel):
    bitTime: int = Field(..., alias="bit_time")
    text: str
    model_config = ConfigDict(populate_by_name=True)


class StationModel(BaseModel):
    pi: str | None
    callsign: str | None = None
    ps: str
    longPs: str | None = Field(None, alias="long_ps")
    pty: int | None = None
    ptyName: str | None = Field(None, alias="pty_name")
    ptyn: str | None = None
    tp: bool | None = None
    ta: bool | None = None
    music: bool | None = None
    stereo: bool = False
    artificialHead: bool = Field(False, alias="artificial_head")
    compressed: bool = False
    dynamicPty: bool = Field(False, alias="dynamic_pty")
    afsKhz: list[int] = Field(default_factory=list, alias="afs_khz")
    mappedFrequenciesKhz: dict[int, list[int]] = Field(default_factory=dict, alias="mapped_frequencies_khz")
    pin: str | None = None
    pinValid: bool = Field(False, alias="pin_valid")
    linkageSetNumber: int | None = Field(None, alias="linkage_set_number")
    model_config = ConfigDict(populate_by_name=True)


class TunedStationModel(StationModel):
    radioText: str = Field("", alias="radio_text")
    radioTextA: str | None = Field(None, alias="radio_text_a")
    radioTextB: str | None = Field(None, alias="radio_text_b")
    radioTextFlag: str | None = Field(None, alias="radio_text_flag")
    ecc: str | None = None
    language: str | None = None
    clockTime: str | None = Field(None, alias="clock_time")
    groupStats: dict[str, int] = Field(default_factory=dict, alias="group_stats")
    unknownGroups: int = Field(0, alias="unknown_groups")
    totalBlocks: int = Field(0, alias="total_blocks")
    totalBlocksOk: int = Field(0, alias="total_blocks_ok")
    applications: list[ApplicationModel] = Field(default_factory=list)
    serviceBits: dict[str, int] = Field(default_factory=dict, alias="service_bits")
    trafficEvents: list[TrafficEventModel] = Field(default_factory=list, alias="traffic_events")
    otherNetworks: int = Field(0, alias="other_networks")


class DecoderStatsModel(BaseModel):
    groupsProcessed: int = Field(..., alias="groups_processed")
    synced: bool
    linkQuality: float = Field(..., alias="link_quality")
    qualityHistory: list[int] = Field(default_factory=list, alias="quality_history")
    logMessages: int = Field(..., alias="log_messages")
    model_config = ConfigDict(populate_by_name=True)


def _hex(value: int | None, width: int = 4) -> str | None:
    if value is None:
        return None
    return f"{value:0{width}X}"


def _station_fields(station: Station, rbds: bool) -> dict[str, Any]:
    return {
        "pi": _hex(station.pi) if station.pi else None,
        "callsign": station.callsign() if rbds else None,
        "ps": station.ps.as_text(),
        "long_ps": station.long_ps.as_text() if station.long_ps.touched else None,
        "pty": station.pty,
        "pty_name": station.pty_name(rbds),
        "ptyn": station.ptyn.as_text() if station.ptyn.touched else None,
        "tp": station.tp,
        "ta": station.ta,
        "music": station.ms,
        "stereo": station.stereo,
        "artificial_head": station.artificial_head,
        "compressed": station.compressed,
        "dynamic_pty": station.dynamic_pty,
        "afs_khz": station.afs.snapshot(),
        "mapped_frequencies_khz": station.mapped_frequencies.snapshot(),
        "pin": str(station.pin) if station.pin is not None else None,
        "pin_valid": station.pin_valid,
        "linkage_set_number": station.linkage_set_number,
    }


def station_model(station: Station, rbds: bool = False) -> StationModel:
    return StationModel(**_station_fields(station, rbds))


def tuned_station_model(station: TunedStation, rbds: bool = False) -> TunedStationModel:
    rt_a, rt_b = station.rt.buffers
    group_stats = {
        slot_label((t, v)): int(station.group_stats[t, v])
        for t in range(16)
        for v in range(2)
        if station.group_stats[t, v] > 0
    }
    return TunedStationModel(
        **_station_fields(station, rbds),
        radio_text=station.radio_text(),
        radio_text_a=rt_a.as_text() if rt_a.touched else None,
        radio_text_b=rt_b.as_text() if rt_b.touched else None,
        radio_text_flag=None if station.rt.flag is None else "AB"[station.rt.flag],
        ecc=_hex(station.ecc, 2),
        language=_hex(station.language, 2),
        clock_time=str(station.date) if station.date is not None else None,
        group_stats=group_stats,
        unknown_groups=station.unknown_groups,
        total_blocks=station.total_blocks,
        total_blocks_ok=station.total_blocks_ok,
        applications=[
            ApplicationModel(
                group=slot_label(slot),
                name=app.name,
                kind=app.kind.value,
                aid=_hex(app.aid),
                groups_received=app.groups_received,
            )
            for slot, app in station.applications.items()
        ],
        service_bits=station.service_ledger.totals(),
        traffic_events=[
            TrafficEventModel(bit_time=e.bit_time, text=e.text) for e in station.traffic_events
        ],
        other_networks=len(station.networks),
    )
