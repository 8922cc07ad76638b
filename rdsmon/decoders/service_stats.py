"""Bit accounting of RDS channel capacity per service."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum


class ServiceCategory(str, Enum):
    PI = "PI"
    OVERHEAD = "Overhead"
    PROGRAMME_TYPE = "PTY"
    NAME = "PS"
    ALTERNATE_FREQUENCIES = "AF"
    RADIO_TEXT = "RT"
    OPEN_DATA = "ODA"
    CLOCK_TIME = "CT"
    PROGRAMME_TYPE_NAME = "PTYN"
    OTHER_NETWORKS = "EON"
    PIN = "PIN"
    WASTE = "Waste"


# Application names share the ledger with the fixed categories
CategoryKey = str


def category_key(category: ServiceCategory | str) -> CategoryKey:
    if isinstance(category, ServiceCategory):
        return category.value
    return category


@dataclass
class ServiceStatRecord:
    """Bits used by each service in one group."""

    bits: dict[CategoryKey, int] = field(default_factory=dict)

    def add(self, category: ServiceCategory | str, count: int) -> None:
        key = category_key(category)
        self.bits[key] = self.bits.get(key, 0) + count

    def total(self) -> int:
        return sum(self.bits.values())


class ServiceLedger:
    """Append-only ledger of committed per-group records with running totals."""

    def __init__(self) -> None:
        self._records: list[ServiceStatRecord] = []
        self._totals: Counter[CategoryKey] = Counter()

    def commit(self, record: ServiceStatRecord) -> None:
        self._records.append(record)
        self._totals.update(record.bits)

    @property
    def committed_groups(self) -> int:
        return len(self._records)

    def totals(self) -> dict[CategoryKey, int]:
        return dict(self._totals)

    def shares(self) -> dict[CategoryKey, float]:
        """Fraction of committed bits used by each category."""
        total = sum(self._totals.values())
        if total == 0:
            return {}
        return {k: v / total for k, v in self._totals.items()}
