"""RDS basic character set (IEC 62106 Annex E, table E.1)."""

from __future__ import annotations

# Code points 0x80-0xFF, one row of 16 per line
_HIGH_TABLE = (
    "áàéèíìóòúùÑÇŞß¡Ĳ"
    "âäêëîïôöûüñçşğıĳ"
    "ªα©‰Ğěňőπ€£$←↑→↓"
    "º¹²³±İńűµ¿÷°¼½¾§"
    "ÁÀÉÈÍÌÓÒÚÙŘČŠŽÐĿ"
    "ÂÄÊËÎÏÔÖÛÜřčšžđŀ"
    "ÃÅÆŒŷÝÕØÞŊŔĆŚŹŦð"
    "ãåæœŵýõøþŋŕćśźŧ "
)

_LOW_OVERRIDES = {
    0x24: "¤",
    0x5E: "―",
    0x60: "║",
    0x7E: "¯",
}


def rds_char(code: int) -> str:
    """Convert one RDS character byte to text.

    Control codes below 0x20 are passed through unchanged so that a carriage
    return can terminate radio text.
    """
    code &= 0xFF
    if code >= 0x80:
        return _HIGH_TABLE[code - 0x80]
    if code == 0x7F:
        return " "
    return _LOW_OVERRIDES.get(code, chr(code))


def rds_chars(*codes: int) -> str:
    return "".join(rds_char(c) for c in codes)
