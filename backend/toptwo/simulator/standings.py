"""
Standings calculation from a (partially) played schedule.
"""

from typing import Dict, Iterable, List, Optional

from .models import Game, TeamRecord


def compute_standings(
    games: Iterable[Game],
    teams: Optional[Iterable[str]] = None
) -> List[TeamRecord]:
    """
    Fold played games into per-team records.

    Every team named in `teams` or in any game gets a record, even with no
    games played. Sorted by win percentage descending, then team name. The
    name ordering is for display only; ties are settled by the tie-breakers.
    """
    wins: Dict[str, int] = {}
    losses: Dict[str, int] = {}

    for team in teams or ():
        wins.setdefault(team, 0)
        losses.setdefault(team, 0)

    for game in games:
        for team in game.teams:
            wins.setdefault(team, 0)
            losses.setdefault(team, 0)
        if not game.played:
            continue
        wins[game.winner] += 1
        losses[game.loser] += 1

    records = [TeamRecord(team=t, wins=wins[t], losses=losses[t]) for t in wins]
    return sort_standings(records)


def sort_standings(records: Iterable[TeamRecord]) -> List[TeamRecord]:
    return sorted(records, key=lambda r: (-r.win_pct, r.team))


def group_by_win_pct(standings: List[TeamRecord]) -> List[List[TeamRecord]]:
    """Split sorted standings into runs of records sharing a win percentage."""
    groups: List[List[TeamRecord]] = []
    for record in standings:
        if groups and groups[-1][0].win_pct == record.win_pct:
            groups[-1].append(record)
        else:
            groups.append([record])
    return groups
