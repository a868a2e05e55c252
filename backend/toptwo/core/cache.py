"""
In-memory cache of enumerated scenarios.

Entries are keyed by conference and stay valid only while the schedule
text they were generated from is unchanged.
"""

import hashlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..simulator.models import Game, Scenario

logger = logging.getLogger(__name__)


def content_hash(raw: str) -> str:
    """MD5 hex digest of a raw schedule."""
    return hashlib.md5(raw.encode("utf-8")).hexdigest()


@dataclass
class CachedScenarios:
    """Scenarios for one conference and the schedule they came from."""

    key: str
    content_hash: str
    scenarios: List[Scenario]
    unplayed_games: List[Game]
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ScenarioCache:
    """Scenario cache keyed by lower-cased conference key."""

    def __init__(self):
        self._entries: Dict[str, CachedScenarios] = {}

    def get(self, key: str, content_hash: str) -> Optional[CachedScenarios]:
        """
        Get cached scenarios if the schedule hasn't changed.

        Returns:
            Cached entry or None if not cached/stale
        """
        entry = self._entries.get(key.lower())
        if entry is None:
            return None

        if entry.content_hash != content_hash:
            logger.info(f"Schedule for {key} changed, dropping cached scenarios")
            self._entries.pop(key.lower(), None)
            return None

        return entry

    def set(
        self,
        key: str,
        content_hash: str,
        scenarios: List[Scenario],
        unplayed_games: List[Game]
    ) -> CachedScenarios:
        """
        Cache scenarios for a conference, replacing any existing entry.

        Args:
            key: Conference key
            content_hash: Hash of the schedule the scenarios came from
            scenarios: Enumerated scenarios
            unplayed_games: Unplayed games in outcome order

        Returns:
            Created cache entry
        """
        entry = CachedScenarios(
            key=key.lower(),
            content_hash=content_hash,
            scenarios=scenarios,
            unplayed_games=unplayed_games
        )
        self._entries[entry.key] = entry
        return entry

    def clear(self, key: str) -> bool:
        """Drop one conference's entry. Returns True if there was one."""
        return self._entries.pop(key.lower(), None) is not None

    def clear_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def keys(self) -> List[str]:
        return sorted(self._entries)
