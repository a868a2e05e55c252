"""
Conference schedule sources.

Provides a unified interface for loading conference schedules.
"""

from .base import (
    ScheduleSource,
    SourceError,
    ConferenceNotFoundError,
    ScheduleFormatError
)
from .csv_source import DirectorySource, parse_conference_csv


def get_source(kind: str, data_dir: str) -> ScheduleSource:
    """
    Get the schedule source for a source kind.

    Args:
        kind: Source kind ('directory')
        data_dir: Directory holding one CSV file per conference

    Returns:
        Schedule source instance

    Raises:
        ValueError: If the source kind is not supported
    """
    kind_lower = kind.lower()

    if kind_lower == "directory":
        return DirectorySource(data_dir)

    supported = "directory"
    raise ValueError(f"Unsupported source: {kind}. Supported: {supported}")


__all__ = [
    "ScheduleSource",
    "SourceError",
    "ConferenceNotFoundError",
    "ScheduleFormatError",
    "DirectorySource",
    "parse_conference_csv",
    "get_source",
]
