"""Alternate frequency codes (IEC 62106 section 6.2.1.6)."""

from __future__ import annotations

from dataclasses import dataclass, field

AF_FILLER = 205
AF_NONE = 224
AF_COUNT_BASE = 224
AF_COUNT_MAX = 249
AF_LFMF_FOLLOWS = 250


def fm_frequency_khz(code: int) -> int | None:
    """Frequency in kHz for an FM AF code 1-204 (87.6 to 107.9 MHz)."""
    if 1 <= code <= 204:
        return 87_500 + code * 100
    return None


def lfmf_frequency_khz(code: int) -> int | None:
    """Frequency in kHz for an LF (1-15) or MF (16-135) code following code 250."""
    if 1 <= code <= 15:
        return 153 + (code - 1) * 9
    if 16 <= code <= 135:
        return 531 + (code - 16) * 9
    return None


def describe_frequency(khz: int) -> str:
    if khz >= 10_000:
        return f"{khz / 1000:.1f} MHz"
    return f"{khz} kHz"


@dataclass
class AlternateFrequencies:
    """AF list accumulated from method-A code pairs."""

    frequencies: list[int] = field(default_factory=list)
    expected_count: int | None = None

    def add_pair(self, code1: int, code2: int) -> str:
        """Record one AF code pair and return a short trace description."""
        if AF_COUNT_BASE < code1 <= AF_COUNT_MAX:
            self.expected_count = code1 - AF_COUNT_BASE
            parts = [f"#{self.expected_count}"]
            freq = fm_frequency_khz(code2)
            if freq is not None:
                self._add(freq)
                parts.append(describe_frequency(freq))
            return "AF: " + " ".join(parts)
        if code1 == AF_LFMF_FOLLOWS:
            freq = lfmf_frequency_khz(code2)
            if freq is None:
                return f"AF: invalid LF/MF code {code2}"
            self._add(freq)
            return f"AF: {describe_frequency(freq)}"
        if code1 == AF_NONE:
            return "AF: none"
        parts = []
        for code in (code1, code2):
            freq = fm_frequency_khz(code)
            if freq is not None:
                self._add(freq)
                parts.append(describe_frequency(freq))
            elif code == AF_FILLER:
                parts.append("filler")
            else:
                parts.append(f"code {code}")
        return "AF: " + ", ".join(parts)

    def _add(self, khz: int) -> None:
        if khz not in self.frequencies:
            self.frequencies.append(khz)

    def snapshot(self) -> list[int]:
        return list(self.frequencies)


@dataclass
class MappedFrequencies:
    """Tuning frequency to other-network frequency pairs from EON variants 5-9."""

    pairs: dict[int, set[int]] = field(default_factory=dict)

    def add(self, tuned_code: int, mapped_code: int, lfmf: bool = False) -> str:
        tuned = fm_frequency_khz(tuned_code)
        mapped = lfmf_frequency_khz(mapped_code) if lfmf else fm_frequency_khz(mapped_code)
        if tuned is None or mapped is None:
            return f"mapped freq: invalid codes {tuned_code}/{mapped_code}"
        self.pairs.setdefault(tuned, set()).add(mapped)
        return f"mapped freq: {describe_frequency(tuned)} -> {describe_frequency(mapped)}"

    def snapshot(self) -> dict[int, list[int]]:
        return {k: sorted(v) for k, v in sorted(self.pairs.items())}
