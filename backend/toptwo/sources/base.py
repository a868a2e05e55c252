"""
Abstract base class for conference schedule sources.

A source hands the engine a normalized Conference, whatever storage the
raw schedule text comes from.
"""

from abc import ABC, abstractmethod
from typing import List

from ..simulator.models import Conference


class ScheduleSource(ABC):
    """Abstract base class for schedule sources."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the source name (e.g., 'directory')."""
        pass

    @abstractmethod
    def list_conferences(self) -> List[str]:
        """
        List the conference keys this source can load.

        Returns:
            Conference keys, sorted
        """
        pass

    @abstractmethod
    def read_schedule(self, key: str) -> str:
        """
        Read the raw schedule text for a conference.

        Args:
            key: Conference key (case-insensitive)

        Returns:
            Raw CSV text

        Raises:
            ConferenceNotFoundError: If the conference doesn't exist
        """
        pass

    @abstractmethod
    def load_conference(self, key: str) -> Conference:
        """
        Read and parse a conference schedule.

        Args:
            key: Conference key (case-insensitive)

        Returns:
            Conference with its teams and games

        Raises:
            ConferenceNotFoundError: If the conference doesn't exist
            ScheduleFormatError: If the schedule can't be parsed
        """
        pass


class SourceError(Exception):
    """Raised when a schedule source fails."""
    pass


class ConferenceNotFoundError(SourceError):
    """Raised when a conference cannot be found."""
    pass


class ScheduleFormatError(SourceError):
    """Raised when a schedule cannot be parsed."""
    pass
