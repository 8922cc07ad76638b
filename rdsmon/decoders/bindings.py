"""Application bindings for the 32 group (type, version) slots."""

from __future__ import annotations

from dataclasses import dataclass

from .applications import Application

Slot = tuple[int, int]

VERSION_LABELS = ("A", "B")


def slot_label(slot: Slot) -> str:
    group_type, version = slot
    return f"{group_type}{VERSION_LABELS[version]}"


def check_slot(slot: Slot) -> Slot:
    group_type, version = slot
    if not 0 <= group_type <= 15 or version not in (0, 1):
        raise ValueError(f"invalid application slot {slot!r}")
    return (group_type, version)


@dataclass(frozen=True)
class BindingConflict:
    """A slot claim rejected because another kind already holds the slot."""

    slot: Slot
    existing: str
    requested: str

    def __str__(self) -> str:
        return (
            f"group {slot_label(self.slot)} already bound to {self.existing}, "
            f"ignoring {self.requested}"
        )


class ApplicationBindings:
    """At most one application per (type, version) slot."""

    def __init__(self) -> None:
        self._slots: dict[Slot, Application] = {}

    def lookup(self, slot: Slot) -> Application | None:
        return self._slots.get(check_slot(slot))

    def bind(self, slot: Slot, app: Application) -> BindingConflict | None:
        """Install ``app`` in an empty slot.

        Binding the same kind again leaves the existing handler in place.
        A different kind is rejected with a conflict and the slot is untouched.
        """
        slot = check_slot(slot)
        existing = self._slots.get(slot)
        if existing is None:
            self._slots[slot] = app
            return None
        if existing.kind == app.kind:
            return None
        return BindingConflict(slot=slot, existing=existing.name, requested=app.name)

    def items(self) -> list[tuple[Slot, Application]]:
        return sorted(self._slots.items())

    def __len__(self) -> int:
        return len(self._slots)
