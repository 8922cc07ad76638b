"""Lookup tables: programme types, paging labels, ODA identifiers, call letters."""

from __future__ import annotations

# European RDS programme types (IEC 62106)
PTY_RDS = {
    0: "None",
    1: "News",
    2: "Current Affairs",
    3: "Information",
    4: "Sport",
    5: "Education",
    6: "Drama",
    7: "Culture",
    8: "Science",
    9: "Varied",
    10: "Pop Music",
    11: "Rock Music",
    12: "Easy Listening",
    13: "Light Classical",
    14: "Serious Classical",
    15: "Other Music",
    16: "Weather",
    17: "Finance",
    18: "Children's",
    19: "Social Affairs",
    20: "Religion",
    21: "Phone In",
    22: "Travel",
    23: "Leisure",
    24: "Jazz Music",
    25: "Country Music",
    26: "National Music",
    27: "Oldies Music",
    28: "Folk Music",
    29: "Documentary",
    30: "Alarm Test",
    31: "Alarm",
}

# North American RBDS programme types (NRSC-4)
PTY_RBDS = {
    0: "None",
    1: "News",
    2: "Information",
    3: "Sports",
    4: "Talk",
    5: "Rock",
    6: "Classic Rock",
    7: "Adult Hits",
    8: "Soft Rock",
    9: "Top 40",
    10: "Country",
    11: "Oldies",
    12: "Soft",
    13: "Nostalgia",
    14: "Jazz",
    15: "Classical",
    16: "R&B",
    17: "Soft R&B",
    18: "Language",
    19: "Religious Music",
    20: "Religious Talk",
    21: "Personality",
    22: "Public",
    23: "College",
    24: "Spanish Talk",
    25: "Spanish Music",
    26: "Hip Hop",
    27: "Unassigned",
    28: "Unassigned",
    29: "Weather",
    30: "Emergency Test",
    31: "Emergency",
}

# Transmitter network group designation of group 1A
TNGD_LABELS = (
    "No RP",
    "RP groups 00-99",
    "RP groups 00-39",
    "RP groups 40-99",
    "RP groups 40-69",
    "RP groups 70-99",
    "RP groups 00-19",
    "RP groups 20-39",
)

SLOW_LABELLING_VARIANTS = {
    0: "ECC/OPC",
    1: "TMC ID",
    2: "Paging ID",
    3: "Language",
    6: "Broadcaster data",
    7: "EWS ID",
}

# Registered open data application identifiers
ODA_NAMES = {
    0x0093: "DAB cross-referencing",
    0x0BCB: "Leisure & Practical Info for Drivers",
    0x0D45: "TMC ALERT-C test",
    0x125F: "I-FM-RDS",
    0x1C68: "ITIS In-vehicle database",
    0x4400: "RDS Light",
    0x4AA1: "Rasant",
    0x4BD7: "RadioText+",
    0x4BD8: "RT+ for eRT",
    0x4D87: "Radio Commerce System",
    0x50DD: "Disaster Warning",
    0x5757: "Personal Weather Station",
    0x6363: "Hybradio RDS-Net",
    0x6365: "RDS2 9-bit AF lists",
    0x6552: "Enhanced RadioText",
    0x6A7A: "Warning receiver",
    0x7373: "Enhanced Early Warning System",
    0xA112: "NL Alert",
    0xA911: "Data FM Selective Multipoint",
    0xABCF: "RF Power Monitoring",
    0xC350: "NRSC Song title and artist",
    0xC3A1: "CEA Personal Radio Service",
    0xC3B0: "iTunes tagging",
    0xC3C3: "NAVTEQ Traffic Plus",
    0xC4D4: "eEAS",
    0xC563: "ID Logic",
    0xC737: "Utility Message Channel",
    0xCD46: "TMC ALERT-C",
    0xCD47: "TMC ALERT-C",
    0xCE6B: "Encrypted TTI ALERT-Plus",
    0xE123: "APS Gateway",
    0xE1C1: "eCARmerce Action code",
    0xE411: "Cell-Loc Beacon downlink",
    0xE911: "EAS open protocol",
    0xFF7F: "RFT Station Logo",
    0xFF80: "RFT+",
}


def pty_label(pty: int, rbds: bool = False) -> str:
    table = PTY_RBDS if rbds else PTY_RDS
    return table.get(pty, "Unknown")


def pi_to_callsign(pi: int) -> str | None:
    """Decode an RBDS PI code to North American call letters.

    - 0x1000-0x54A7: K stations (KAAA-KZZZ)
    - 0x54A8-0x994F: W stations (WAAA-WZZZ)

    Returns None for PI codes outside those ranges.
    """
    if 0x1000 <= pi <= 0x54A7:
        prefix, offset = "K", pi - 0x1000
    elif 0x54A8 <= pi <= 0x994F:
        prefix, offset = "W", pi - 0x54A8
    else:
        return None
    l4 = offset % 26
    offset //= 26
    l3 = offset % 26
    l2 = offset // 26
    return prefix + chr(ord("A") + l2) + chr(ord("A") + l3) + chr(ord("A") + l4)
