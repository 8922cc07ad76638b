"""Segmented text buffers for PS, RT, PTYN and long PS."""

from __future__ import annotations

from typing import Sequence

from .charset import rds_chars

PLACEHOLDER = "?"
TERMINATOR = "\r"


class SegmentedText:
    """Fixed-capacity character buffer filled a few characters at a time.

    ``set(address, chars)`` writes ``chars`` starting at ``address * len(chars)``,
    so the address unit is the segment size used by the caller: 2 characters
    for PS, 4 for a full RT 2A group, 2 for the per-block RT fallback.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._chars: list[str | None] = [None] * capacity
        self.touched = False

    @property
    def capacity(self) -> int:
        return len(self._chars)

    def set(self, address: int, chars: str) -> None:
        if not chars:
            raise ValueError("at least one character is required")
        start = address * len(chars)
        if address < 0 or start + len(chars) > len(self._chars):
            raise ValueError(
                f"address {address} out of range for {len(chars)}-char segments "
                f"(capacity={len(self._chars)})"
            )
        for i, ch in enumerate(chars):
            self._chars[start + i] = ch
        self.touched = True

    def set_codes(self, address: int, codes: Sequence[int]) -> None:
        self.set(address, rds_chars(*codes))

    def reset(self) -> None:
        self._chars = [None] * len(self._chars)
        self.touched = False

    def is_complete(self) -> bool:
        return all(c is not None for c in self._chars)

    def raw_text(self) -> str:
        return "".join(PLACEHOLDER if c is None else c for c in self._chars)

    def as_text(self) -> str:
        text = self.raw_text()
        end = text.find(TERMINATOR)
        return text if end < 0 else text[:end]

    def __str__(self) -> str:
        return self.as_text()


class RadioText:
    """The two 64-character radio text buffers and the current A/B flag."""

    SIZE = 64

    def __init__(self) -> None:
        self.buffers = (SegmentedText(self.SIZE), SegmentedText(self.SIZE))
        self.flag: int | None = None

    def set(self, ab: int, address: int, chars: str) -> None:
        self.buffers[ab & 1].set(address, chars)

    def set_flag(self, ab: int) -> None:
        self.flag = ab & 1

    @property
    def current(self) -> SegmentedText | None:
        if self.flag is None:
            return None
        return self.buffers[self.flag]

    def as_text(self) -> str:
        current = self.current
        return "" if current is None else current.as_text()

    def touched(self, ab: int) -> bool:
        return self.buffers[ab & 1].touched


class ProgrammeTypeName(SegmentedText):
    """8-character PTYN; a change of the A/B flag clears the buffer."""

    def __init__(self) -> None:
        super().__init__(8)
        self.flag: int | None = None

    def set_flag(self, ab: int) -> None:
        ab &= 1
        if self.flag is not None and self.flag != ab:
            self.reset()
        self.flag = ab


class LongStationName:
    """32-byte long PS, written 2 bytes at a time and decoded as UTF-8."""

    SIZE = 32

    def __init__(self) -> None:
        self._bytes: list[int | None] = [None] * self.SIZE
        self.touched = False

    def set(self, address: int, data: bytes) -> None:
        """Write ``data`` at byte offset ``address * 2``."""
        if len(data) != 2:
            raise ValueError("long PS segments are 2 bytes")
        start = address * 2
        if address < 0 or start + 2 > self.SIZE:
            raise ValueError(f"long PS address {address} out of range")
        self._bytes[start] = data[0]
        self._bytes[start + 1] = data[1]
        self.touched = True

    def as_text(self) -> str:
        raw = bytearray()
        for b in self._bytes:
            if b is None:
                raw.extend(PLACEHOLDER.encode("ascii"))
            elif b == 0x0D:
                break
            else:
                raw.append(b)
        return raw.decode("utf-8", errors="replace").rstrip("\x00")

    def __str__(self) -> str:
        return self.as_text()
