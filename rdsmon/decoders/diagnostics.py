"""Typed decode diagnostics and their text rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DiagnosticKind(str, Enum):
    SLOT_CONFLICT = "slot_conflict"
    ODA_SLOT_NOT_ODA = "oda_slot_not_oda"
    ODA_AID_MISMATCH = "oda_aid_mismatch"
    UNKNOWN_AID = "unknown_aid"
    INVALID_CLOCK_TIME = "invalid_clock_time"
    INVALID_PIN_VARIANT = "invalid_pin_variant"
    UNHANDLED_SLOW_LABEL = "unhandled_slow_label"
    ENCODER_FAULT = "encoder_fault"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "params": dict(self.params)}


def format_diagnostic(diag: Diagnostic) -> str:
    """Render a diagnostic for the human-readable decode trace."""
    p = diag.params
    if diag.kind is DiagnosticKind.SLOT_CONFLICT:
        return f"[ERR: {p['conflict']}]"
    if diag.kind is DiagnosticKind.ODA_SLOT_NOT_ODA:
        return f"[ERR: group {p['slot']} used by non-ODA {p['existing']}]"
    if diag.kind is DiagnosticKind.ODA_AID_MISMATCH:
        return (
            f"[ERR: group {p['slot']} bound to AID {p['existing_aid']:04X}, "
            f"announced {p['aid']:04X}]"
        )
    if diag.kind is DiagnosticKind.UNKNOWN_AID:
        return f"[Unknown AID {p['aid']:04X}]"
    if diag.kind is DiagnosticKind.INVALID_CLOCK_TIME:
        return f"[Invalid CT: MJD={p['mjd']} {p['hour']:02d}:{p['minute']:02d}]"
    if diag.kind is DiagnosticKind.INVALID_PIN_VARIANT:
        return f"[PIN variant {p['variant']} not implemented]"
    if diag.kind is DiagnosticKind.UNHANDLED_SLOW_LABEL:
        return f"[Unhandled slow labelling variant {p['variant']}]"
    if diag.kind is DiagnosticKind.ENCODER_FAULT:
        return "[Temporary data fault at encoder]"
    return f"[{diag.kind.value}]"
