"""Bit-field layouts for the 16-bit blocks of RDS groups.

Every layout is a tuple of :class:`BitField` specs addressed by their shift
from the least significant bit. Extraction is pure: callers check block
validity before reading a block.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class BitField:
    """Named field inside a 16-bit block."""

    name: str
    shift: int
    width: int

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"{self.name} width must be positive (got {self.width})")
        if self.shift < 0 or self.shift + self.width > 16:
            raise ValueError(
                f"{self.name} does not fit in a block (shift={self.shift}, width={self.width})"
            )

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def read(self, block: int) -> int:
        return (check_block(block) >> self.shift) & self.mask


def check_block(value: int) -> int:
    """Validate a raw block value."""
    int_value = int(value)
    if int_value < 0 or int_value > 0xFFFF:
        raise ValueError(f"block value out of range 0-0xFFFF (got {int_value})")
    return int_value


def unpack_block(block: int, fields: Sequence[BitField]) -> dict[str, int]:
    """Extract every field of a layout from one block."""
    return {f.name: f.read(block) for f in fields}


def high_byte(block: int) -> int:
    return check_block(block) >> 8


def low_byte(block: int) -> int:
    return check_block(block) & 0xFF


# Block 1, common to all groups
GROUP_TYPE = BitField("group_type", 12, 4)
VERSION = BitField("version", 11, 1)
TRAFFIC_PROGRAM = BitField("tp", 10, 1)
PROGRAMME_TYPE = BitField("pty", 5, 5)

# Block 1 of 0A/0B/15B
TRAFFIC_ANNOUNCEMENT = BitField("ta", 4, 1)
MUSIC_SPEECH = BitField("ms", 3, 1)
DI_BIT = BitField("di", 2, 1)
SEGMENT_ADDRESS = BitField("address", 0, 2)
BASIC_TUNING = (TRAFFIC_ANNOUNCEMENT, MUSIC_SPEECH, DI_BIT, SEGMENT_ADDRESS)

# Block 1 of 1A
TNGD = BitField("tngd", 2, 3)
BSI = BitField("bsi", 0, 2)
PAGING_CONFIG = (TNGD, BSI)

# Block 2 of 1A, slow labelling codes
LINKAGE_ACTUATOR = BitField("la", 15, 1)
SLOW_LABEL_VARIANT = BitField("variant", 12, 3)
SLOW_LABEL_OPC = BitField("opc", 8, 4)
SLOW_LABEL_PAYLOAD = BitField("payload", 0, 12)
SLOW_LABELLING = (LINKAGE_ACTUATOR, SLOW_LABEL_VARIANT, SLOW_LABEL_PAYLOAD)

# Block 3 of type 1: programme item number
PIN_DAY = BitField("day", 11, 5)
PIN_HOUR = BitField("hour", 6, 5)
PIN_MINUTE = BitField("minute", 0, 6)
PIN = (PIN_DAY, PIN_HOUR, PIN_MINUTE)

# Block 3 of type 1 when the day is zero
PIN_VARIANT = BitField("variant", 8, 4)
PIN_OPC = BitField("opc", 0, 4)
PIN_PAC = BitField("pac", 4, 6)

# Block 1 of 2A/2B and 10A
TEXT_AB = BitField("ab", 4, 1)
RT_ADDRESS = BitField("address", 0, 4)
RADIO_TEXT = (TEXT_AB, RT_ADDRESS)
PTYN_ADDRESS = BitField("address", 0, 1)
PTYN = (TEXT_AB, PTYN_ADDRESS)

# Block 1 of 3A
ODA_GROUP_TYPE = BitField("app_group_type", 1, 4)
ODA_VERSION = BitField("app_version", 0, 1)
ODA_ANNOUNCEMENT = (ODA_GROUP_TYPE, ODA_VERSION)

# Block 1 of 14A/14B
EON_TP = BitField("on_tp", 4, 1)
EON_TA = BitField("on_ta", 3, 1)
EON_VARIANT = BitField("variant", 0, 4)

# Block 2 of 14A variant 13
EON_PTY = BitField("pty", 11, 5)
EON_TA_FLAG = BitField("ta", 0, 1)

# Block 2 of 14A variant 12
LINKAGE_SET_NUMBER = BitField("lsn", 0, 12)
EXTENDED_GENERIC = BitField("eg", 14, 1)
INTERNATIONAL_LINKAGE = BitField("ils", 13, 1)
LINKAGE = (LINKAGE_ACTUATOR, EXTENDED_GENERIC, INTERNATIONAL_LINKAGE, LINKAGE_SET_NUMBER)

# Block 1 of 15A
LONG_PS_ADDRESS = BitField("address", 0, 3)


@dataclass(frozen=True)
class ClockFields:
    """Raw clock-time fields carried by a 4A group."""

    mjd: int
    hour: int
    minute: int
    offset_half_hours: int


def group_type_version(block1: int) -> tuple[int, int]:
    """Return (type 0-15, version 0 for A / 1 for B)."""
    return GROUP_TYPE.read(block1), VERSION.read(block1)


def clock_fields(block1: int, block2: int, block3: int) -> ClockFields:
    """Split the 34 clock-time bits spread over blocks 1-3 of a 4A group."""
    mjd = ((check_block(block1) & 0x3) << 15) | ((check_block(block2) & 0xFFFE) >> 1)
    hour = ((block2 & 0x1) << 4) | ((check_block(block3) & 0xF000) >> 12)
    minute = (block3 >> 6) & 0x3F
    offset = block3 & 0x1F
    if block3 & 0x20:
        offset = -offset
    return ClockFields(mjd=mjd, hour=hour, minute=minute, offset_half_hours=offset)


def block_chars(block: int) -> tuple[int, int]:
    """Return the two character bytes of a block, high byte first."""
    return high_byte(block), low_byte(block)


__all__ = [
    "BASIC_TUNING",
    "BitField",
    "ClockFields",
    "LINKAGE",
    "ODA_ANNOUNCEMENT",
    "PAGING_CONFIG",
    "PIN",
    "PTYN",
    "RADIO_TEXT",
    "SLOW_LABELLING",
    "block_chars",
    "check_block",
    "clock_fields",
    "group_type_version",
    "high_byte",
    "low_byte",
    "unpack_block",
]
