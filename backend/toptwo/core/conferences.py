"""
Known conferences and their display names.
"""

from enum import Enum


class ConferenceKey(str, Enum):
    """Conferences with bundled schedules."""
    AAC = "aac"
    ACC = "acc"
    BIG10 = "big10"
    BIG12 = "big12"
    MW = "mw"
    SBC = "sbc"
    SEC = "sec"


DISPLAY_NAMES = {
    ConferenceKey.AAC: "American Athletic",
    ConferenceKey.ACC: "Atlantic Coast",
    ConferenceKey.BIG10: "Big Ten",
    ConferenceKey.BIG12: "Big 12",
    ConferenceKey.MW: "Mountain West",
    ConferenceKey.SBC: "Sun Belt",
    ConferenceKey.SEC: "Southeastern",
}


def get_display_name(key: str) -> str:
    """Display name for a conference key, or the key itself when unknown."""
    try:
        return DISPLAY_NAMES[ConferenceKey(key.lower())]
    except ValueError:
        return key
