"""
Exhaustive scenario enumeration for a conference's remaining games.
"""

import logging
import random
from typing import Dict, Iterable, List, Optional, Tuple

from .models import (
    Conference,
    Game,
    Outcome,
    RuleChain,
    Scenario,
    TeamRecord,
    TopTwoCounts,
)
from .standings import compute_standings, group_by_win_pct
from .tiebreakers import get_rule_chain, resolve_tiebreaker

logger = logging.getLogger(__name__)

MAX_UNPLAYED_GAMES = 12
TOP_SPOTS = 2


def apply_outcomes(
    games: Iterable[Game],
    unplayed: List[Game],
    outcomes: List[Outcome]
) -> List[Game]:
    """
    Apply a specific set of outcomes to the unplayed games.

    Args:
        games: Full schedule
        unplayed: Unplayed games, in outcome order
        outcomes: One outcome per unplayed game

    Returns:
        Derived schedule copy with every listed game played
    """
    resolved = {g.id: g.resolve(o) for g, o in zip(unplayed, outcomes)}
    return [resolved.get(g.id, g) for g in games]


def outcomes_for_mask(mask: int, n_games: int) -> List[Outcome]:
    """Bit i of mask set means the first named team wins unplayed game i."""
    return [Outcome.from_bit((mask >> i) & 1 == 1) for i in range(n_games)]


def resolve_standings(
    games: List[Game],
    teams: Iterable[str],
    rule_chain: RuleChain,
    rng: Optional[random.Random] = None
) -> Tuple[List[TeamRecord], List[str]]:
    """
    Compute standings and break every tie in them.

    Returns:
        Tuple of (records in final order, rule codes used in first-use order)
    """
    standings = compute_standings(games, teams)
    records = {r.team: r for r in standings}

    ordered: List[TeamRecord] = []
    applied: List[str] = []
    for group in group_by_win_pct(standings):
        if len(group) == 1:
            ordered.append(group[0])
            continue
        resolution = resolve_tiebreaker(
            [r.team for r in group], games, standings,
            rule_chain=rule_chain, rng=rng
        )
        for code in resolution.applied_rules:
            if code not in applied:
                applied.append(code)
        ordered.extend(records[t] for t in resolution.order)

    return ordered, applied


def simulate_conference(
    conference: Conference,
    rule_chain: Optional[RuleChain] = None,
    max_unplayed: int = MAX_UNPLAYED_GAMES,
    rng: Optional[random.Random] = None
) -> List[Scenario]:
    """
    Enumerate every outcome of the remaining games.

    Scenario i corresponds to outcome mask i, so the returned list is in
    numeric order of the outcome vector. Returns an empty list when more
    than max_unplayed games remain.

    Args:
        conference: Schedule with played and unplayed games
        rule_chain: Tie-break rules (looked up by conference name if omitted)
        max_unplayed: Refuse to enumerate above this many unplayed games
        rng: Random source for tie-break draws

    Returns:
        List of scenarios, one per outcome combination
    """
    chain = rule_chain or get_rule_chain(conference.name)
    unplayed = conference.unplayed_games
    n_games = len(unplayed)

    if n_games > max_unplayed:
        logger.warning(
            f"Too many unplayed games for {conference.name} "
            f"({n_games} > {max_unplayed}), enumeration skipped"
        )
        return []

    scenarios = []
    for mask in range(2 ** n_games):
        outcomes = outcomes_for_mask(mask, n_games)
        games = apply_outcomes(conference.games, unplayed, outcomes)
        standings, applied = resolve_standings(games, conference.teams, chain, rng=rng)
        scenarios.append(Scenario(
            outcomes=tuple(outcomes),
            standings=tuple(standings),
            top_two=tuple(r.team for r in standings[:TOP_SPOTS]),
            applied_rules=tuple(applied)
        ))

    logger.info(
        f"Enumerated {len(scenarios)} scenarios for {conference.name} "
        f"({n_games} unplayed games)"
    )
    return scenarios


def top_two_counts(scenarios: List[Scenario]) -> TopTwoCounts:
    """Count, per team, the scenarios in which it finishes in the top two."""
    counts: Dict[str, int] = {}
    for scenario in scenarios:
        for record in scenario.standings:
            counts.setdefault(record.team, 0)
        for team in scenario.top_two:
            counts[team] = counts.get(team, 0) + 1
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))
