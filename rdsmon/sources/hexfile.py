"""Hex group-stream format: one group per line, four 16-bit hex blocks.

Invalid blocks are written as ``----``. Lines starting with ``%`` carry
receiver annotations: ``% Freq <kHz>`` reports a frequency change and
``% Station`` a station change. Other annotations and ``#`` comments are
ignored.

Example:
    F201 0408 E2E5 5241
    F201 ---- 2020 6174
    % Freq 87600
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from ..events import FrequencyChangeEvent, GroupEvent, InputEvent, StationChangeEvent
from ..typing import Blocks

logger = logging.getLogger(__name__)

# 26-bit blocks (16 data + 10 checkword), four per group
BITS_PER_GROUP = 104

INVALID_BLOCK = "----"


class HexLineError(ValueError):
    """A line that is neither a group nor a known annotation."""


def parse_block(token: str) -> int | None:
    if token == INVALID_BLOCK:
        return None
    if len(token) != 4:
        raise HexLineError(f"block must be 4 hex digits: {token!r}")
    try:
        return int(token, 16)
    except ValueError as exc:
        raise HexLineError(f"block is not hex: {token!r}") from exc


def parse_hex_line(line: str, bit_time: int) -> InputEvent | None:
    """Parse one line; returns None for blank lines, comments and unknown annotations."""
    text = line.strip()
    if not text or text.startswith("#"):
        return None
    if text.startswith("%"):
        words = text[1:].split()
        if not words:
            return None
        keyword = words[0].lower()
        if keyword == "freq":
            if len(words) < 2:
                raise HexLineError(f"frequency annotation without a value: {line!r}")
            try:
                return FrequencyChangeEvent(frequency_khz=int(words[1]), bit_time=bit_time)
            except ValueError as exc:
                raise HexLineError(f"bad frequency: {words[1]!r}") from exc
        if keyword == "station":
            return StationChangeEvent(bit_time=bit_time)
        return None

    tokens = text.split()
    if len(tokens) != 4:
        raise HexLineError(f"expected 4 blocks, got {len(tokens)}: {line!r}")
    blocks: Blocks = (
        parse_block(tokens[0].upper()),
        parse_block(tokens[1].upper()),
        parse_block(tokens[2].upper()),
        parse_block(tokens[3].upper()),
    )
    return GroupEvent(bit_time=bit_time, blocks=blocks)


def format_hex_group(blocks: Blocks) -> str:
    return " ".join(INVALID_BLOCK if b is None else f"{b:04X}" for b in blocks)


class HexFileGroupReader:
    """Replays a hex group file as input events.

    Bit times advance by one group duration per group line. Malformed lines
    are logged and skipped unless ``strict`` is set.
    """

    def __init__(self, path: str | Path, strict: bool = False) -> None:
        self.path = Path(path)
        self.strict = strict
        self.bit_time = 0
        self.skipped_lines = 0

    def __iter__(self) -> Iterator[InputEvent]:
        with self.path.open("r", encoding="utf-8") as fh:
            yield from self.read_lines(fh)

    def read_lines(self, lines: Iterator[str]) -> Iterator[InputEvent]:
        for lineno, line in enumerate(lines, start=1):
            try:
                event = parse_hex_line(line, self.bit_time)
            except HexLineError as e:
                if self.strict:
                    raise
                self.skipped_lines += 1
                logger.warning("%s:%d: %s", self.path, lineno, e)
                continue
            if event is None:
                continue
            if isinstance(event, GroupEvent):
                self.bit_time += BITS_PER_GROUP
            yield event
