"""
CSV schedule source.

One file per conference, `<key>.csv`, with a header row followed by
`Winner,WPts,Loser,LPts` rows. A game is played only when both point
columns are filled; for an unplayed game the two team columns are just
the schedule slots.
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..simulator.models import Conference, Game
from .base import ScheduleSource, ConferenceNotFoundError, ScheduleFormatError

logger = logging.getLogger(__name__)


def _parse_points(value: str, row_number: int, name: str) -> Optional[int]:
    value = value.strip()
    if value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ScheduleFormatError(
            f"Invalid points value {value!r} on row {row_number} of {name}"
        )


def parse_conference_csv(name: str, raw: str) -> Conference:
    """
    Parse a conference schedule.

    Args:
        name: Conference name, used in game ids
        raw: CSV text; the first non-blank line is a header

    Returns:
        Conference with teams sorted by name

    Raises:
        ScheduleFormatError: If a points column is not a number
    """
    lines = [line.strip() for line in raw.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return Conference(name=name)

    games: List[Game] = []
    for i, (row, parts) in enumerate(zip(lines[1:], csv.reader(lines[1:]))):
        row_number = i + 2
        if len(parts) < 4:
            logger.warning(f"Skipping malformed CSV row {row_number} in {name}: {row}")
            continue

        winner = parts[0].strip()
        loser = parts[2].strip()
        if not winner or not loser:
            logger.warning(f"Skipping row {row_number} in {name} with empty team name")
            continue

        winner_pts = _parse_points(parts[1], row_number, name)
        loser_pts = _parse_points(parts[3], row_number, name)
        games.append(Game(
            id=f"{name}-{i}-{winner}-{loser}",
            winner=winner,
            loser=loser,
            winner_pts=winner_pts,
            loser_pts=loser_pts,
            played=winner_pts is not None and loser_pts is not None
        ))

    teams = sorted({team for game in games for team in game.teams})
    return Conference(name=name, teams=tuple(teams), games=tuple(games))


class DirectorySource(ScheduleSource):
    """Reads `<key>.csv` files from a data directory. Keys are lower-cased file stems."""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    @property
    def source_name(self) -> str:
        return "directory"

    def _files(self) -> Dict[str, Path]:
        if not self.data_dir.is_dir():
            logger.warning(f"Schedule directory {self.data_dir} does not exist")
            return {}
        return {path.stem.lower(): path for path in self.data_dir.glob("*.csv")}

    def _find(self, key: str) -> Path:
        path = self._files().get(key.lower())
        if path is None:
            raise ConferenceNotFoundError(f"Conference {key} not found")
        return path

    def list_conferences(self) -> List[str]:
        return sorted(self._files())

    def read_schedule(self, key: str) -> str:
        return self._find(key).read_text(encoding="utf-8")

    def load_conference(self, key: str) -> Conference:
        path = self._find(key)
        return parse_conference_csv(key.lower(), path.read_text(encoding="utf-8"))
