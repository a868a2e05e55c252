"""
Tiebreaker resolution for teams tied on conference win percentage.

Each conference applies an ordered chain of rules:
A. Head-to-head (two teams) or round robin among the tied group
B. Win percentage against common opponents
C. Win percentage against the next-highest-placed opponents, level by level
D. Combined win percentage of all opponents played
R. Random draw, when no rule separates the remaining teams

After any rule places a team, the chain restarts from the first rule for
the teams still tied.
"""

import logging
import random
from fractions import Fraction
from typing import Callable, Dict, List, Optional, Tuple

from .models import (
    Game,
    RuleChain,
    TeamRecord,
    TieBreakResolution,
    TieBreakResult,
    TieBreakRule,
)
from .standings import group_by_win_pct

logger = logging.getLogger(__name__)

A = TieBreakRule.HEAD_TO_HEAD
B = TieBreakRule.COMMON_OPPONENTS
C = TieBreakRule.ORDER_OF_FINISH
D = TieBreakRule.COMBINED_OPPONENTS

DEFAULT_RULE_CHAIN = RuleChain(rules=(A, B, C, D))

RULE_CHAINS: Dict[str, RuleChain] = {
    "aac": RuleChain(rules=(A, B, D)),
    "acc": RuleChain(rules=(A, B, C, D), place_winless_last=True),
    "big10": RuleChain(rules=(A, B, C, D)),
    "big12": RuleChain(rules=(A, C, B, D)),
    "sec": RuleChain(rules=(A, B, C, D), place_winless_last=True),
}


def get_rule_chain(conference_name: Optional[str]) -> RuleChain:
    """Look up a conference's rule chain, falling back to the default chain."""
    if not conference_name:
        return DEFAULT_RULE_CHAIN
    return RULE_CHAINS.get(conference_name.lower(), DEFAULT_RULE_CHAIN)


def get_h2h_record(games: List[Game], team: str, other: str) -> Tuple[int, int]:
    """Get (wins, losses) for team against other over played games."""
    wins = 0
    losses = 0
    for game in games:
        if not game.played:
            continue
        if game.winner == team and game.loser == other:
            wins += 1
        elif game.winner == other and game.loser == team:
            losses += 1
    return wins, losses


def _fmt(pct: Fraction) -> str:
    return f"{float(pct):.3f}"


def _unique_max(values: Dict[str, Fraction]) -> Optional[str]:
    """Return the team holding the strict maximum, or None on a tie."""
    best = max(values.values())
    leaders = [team for team, value in values.items() if value == best]
    if len(leaders) == 1:
        return leaders[0]
    return None


def _head_to_head(
    remaining: List[str],
    games: List[Game],
    standings: List[TeamRecord],
    chain: RuleChain
) -> Optional[TieBreakResult]:
    if len(remaining) == 2:
        team, other = remaining
        wins, losses = get_h2h_record(games, team, other)
        if wins == losses:
            return None
        winner, loser = (team, other) if wins > losses else (other, team)
        return TieBreakResult(
            team=winner,
            placed_top=True,
            rule=A,
            explanation=f"{winner} beat {loser} head-to-head"
        )

    members = set(remaining)
    sub_schedule = [g for g in games if g.winner in members and g.loser in members]

    pair_counts: Dict[frozenset, int] = {}
    win_counts = {team: 0 for team in remaining}
    for game in sub_schedule:
        pair = frozenset(game.teams)
        pair_counts[pair] = pair_counts.get(pair, 0) + 1
        win_counts[game.winner] += 1

    n = len(remaining)
    complete = (
        len(pair_counts) == n * (n - 1) // 2
        and all(count == 1 for count in pair_counts.values())
    )
    if complete:
        leader = _unique_max({t: Fraction(w) for t, w in win_counts.items()})
        if leader is not None:
            return TieBreakResult(
                team=leader,
                placed_top=True,
                rule=A,
                explanation=(
                    f"{leader} won the round robin among {', '.join(remaining)} "
                    f"({win_counts[leader]}-{n - 1 - win_counts[leader]})"
                )
            )

    def _beat_all(team: str) -> bool:
        for other in remaining:
            if other == team:
                continue
            wins, losses = get_h2h_record(sub_schedule, team, other)
            if wins <= losses:
                return False
        return True

    def _lost_to_all(team: str) -> bool:
        for other in remaining:
            if other == team:
                continue
            wins, losses = get_h2h_record(sub_schedule, team, other)
            if wins >= losses:
                return False
        return True

    for team in remaining:
        if _beat_all(team):
            return TieBreakResult(
                team=team,
                placed_top=True,
                rule=A,
                explanation=f"{team} defeated every other tied team"
            )

    if chain.place_winless_last:
        for team in remaining:
            if _lost_to_all(team):
                return TieBreakResult(
                    team=team,
                    placed_top=False,
                    rule=A,
                    explanation=f"{team} lost to every other tied team"
                )

    return None


def _common_opponents(
    remaining: List[str],
    games: List[Game],
    standings: List[TeamRecord],
    chain: RuleChain
) -> Optional[TieBreakResult]:
    members = set(remaining)
    opponent_sets = []
    for team in remaining:
        opponents = set()
        for game in games:
            if game.winner == team and game.loser not in members:
                opponents.add(game.loser)
            elif game.loser == team and game.winner not in members:
                opponents.add(game.winner)
        opponent_sets.append(opponents)

    common = set.intersection(*opponent_sets)
    if not common:
        return None

    pcts: Dict[str, Fraction] = {}
    for team in remaining:
        wins = 0
        played = 0
        for game in games:
            if game.winner == team and game.loser in common:
                wins += 1
                played += 1
            elif game.loser == team and game.winner in common:
                played += 1
        pcts[team] = Fraction(wins, played) if played else Fraction(0)

    leader = _unique_max(pcts)
    if leader is None:
        return None
    return TieBreakResult(
        team=leader,
        placed_top=True,
        rule=B,
        explanation=(
            f"{leader} has the best record against common opponents "
            f"{', '.join(sorted(common))} ({_fmt(pcts[leader])})"
        )
    )


def _order_of_finish(
    remaining: List[str],
    games: List[Game],
    standings: List[TeamRecord],
    chain: RuleChain
) -> Optional[TieBreakResult]:
    records = {r.team: r for r in standings}
    if remaining[0] not in records:
        return None
    tied_pct = records[remaining[0]].win_pct
    members = set(remaining)

    for level in group_by_win_pct(standings):
        if level[0].win_pct == tied_pct:
            continue
        group = {r.team for r in level} - members

        pcts: Dict[str, Fraction] = {}
        for team in remaining:
            wins = 0
            played = 0
            for game in games:
                if game.winner == team and game.loser in group:
                    wins += 1
                    played += 1
                elif game.loser == team and game.winner in group:
                    played += 1
            if played == 0:
                break
            pcts[team] = Fraction(wins, played)
        else:
            leader = _unique_max(pcts)
            if leader is not None:
                return TieBreakResult(
                    team=leader,
                    placed_top=True,
                    rule=C,
                    explanation=(
                        f"{leader} has the best record against "
                        f"{', '.join(sorted(group))} ({_fmt(pcts[leader])})"
                    )
                )

    return None


def _combined_opponents(
    remaining: List[str],
    games: List[Game],
    standings: List[TeamRecord],
    chain: RuleChain
) -> Optional[TieBreakResult]:
    records = {r.team: r for r in standings}

    pcts: Dict[str, Fraction] = {}
    for team in remaining:
        opponents = set()
        for game in games:
            if game.winner == team:
                opponents.add(game.loser)
            elif game.loser == team:
                opponents.add(game.winner)
        wins = sum(records[o].wins for o in opponents if o in records)
        played = sum(records[o].games_played for o in opponents if o in records)
        pcts[team] = Fraction(wins, played) if played else Fraction(0)

    leader = _unique_max(pcts)
    if leader is None:
        return None
    return TieBreakResult(
        team=leader,
        placed_top=True,
        rule=D,
        explanation=f"{leader} has the best combined opponent win percentage ({_fmt(pcts[leader])})"
    )


RuleFunc = Callable[[List[str], List[Game], List[TeamRecord], RuleChain], Optional[TieBreakResult]]

RULES: Dict[TieBreakRule, RuleFunc] = {
    A: _head_to_head,
    B: _common_opponents,
    C: _order_of_finish,
    D: _combined_opponents,
}


def resolve_tiebreaker(
    tied_teams: List[str],
    games: List[Game],
    standings: List[TeamRecord],
    rule_chain: RuleChain = DEFAULT_RULE_CHAIN,
    rng: Optional[random.Random] = None
) -> TieBreakResolution:
    """
    Resolve a tie between teams with identical win percentages.

    Multi-team ties: after placing one team, restart the chain from its
    first rule for the teams still tied. Teams placed at the bottom are
    appended after every team placed at the top.

    Args:
        tied_teams: Teams tied on win percentage
        games: Full schedule; only played games are considered
        standings: Standings for the same games, used by order-of-finish and
            combined-opponent rules
        rule_chain: Ordered rules for the conference
        rng: Random source for the draw fallback (module random if omitted)

    Returns:
        Total order of the tied teams plus the rules that produced it
    """
    if len(tied_teams) <= 1:
        return TieBreakResolution(order=tuple(tied_teams))

    played = [g for g in games if g.played]
    remaining = list(tied_teams)
    top: List[str] = []
    bottom: List[str] = []
    results: List[TieBreakResult] = []
    applied: List[str] = []

    while len(remaining) > 1:
        result = None
        for rule in rule_chain.rules:
            result = RULES[rule](remaining, played, standings, rule_chain)
            if result is not None:
                break

        if result is None:
            # No rule separates the group: one random draw settles it
            drawn = list(remaining)
            (rng or random).shuffle(drawn)
            logger.debug(f"Random draw for {remaining} -> {drawn}")
            for team in drawn:
                results.append(TieBreakResult(
                    team=team,
                    placed_top=True,
                    rule=TieBreakRule.RANDOM_DRAW,
                    explanation=f"{team} placed by random draw"
                ))
            if TieBreakRule.RANDOM_DRAW.value not in applied:
                applied.append(TieBreakRule.RANDOM_DRAW.value)
            top.extend(drawn)
            remaining = []
            break

        results.append(result)
        if result.rule.value not in applied:
            applied.append(result.rule.value)
        if result.placed_top:
            top.append(result.team)
        else:
            bottom.append(result.team)
        remaining.remove(result.team)

    # Last remaining team
    top.extend(remaining)

    return TieBreakResolution(
        order=tuple(top + bottom),
        applied_rules=tuple(applied),
        results=tuple(results)
    )
