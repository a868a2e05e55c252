"""
Clinching and blocking conditions derived from enumerated scenarios.

For a team, a sufficient condition is a small set of game results under
which every matching scenario puts the team in the top two. A blocking
condition is the reverse: every matching scenario leaves the team out.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .models import (
    Condition,
    Game,
    GameOutcome,
    Outcome,
    RequirementStatus,
    Scenario,
    TeamRequirements,
)

logger = logging.getLogger(__name__)

MAX_CONDITION_SIZE = 6

# (unplayed game index, first named team wins)
Pick = Tuple[int, bool]


def _check_scenarios(scenarios: List[Scenario], unplayed: List[Game]) -> None:
    for idx, scenario in enumerate(scenarios):
        if len(scenario.outcomes) != len(unplayed):
            raise ValueError(
                f"Scenario {idx} has {len(scenario.outcomes)} outcomes "
                f"but {len(unplayed)} games are unplayed"
            )


def _mask_where(flags: Iterable[bool]) -> int:
    """Bitmask with bit i set for every true flag i."""
    bits = "".join("1" if flag else "0" for flag in flags)
    return int(bits[::-1], 2) if bits else 0


def _bit_indices(mask: int) -> frozenset:
    return frozenset(i for i, bit in enumerate(bin(mask)[:1:-1]) if bit == "1")


def _outcome_masks(scenarios: List[Scenario], n_games: int) -> List[Dict[bool, int]]:
    """Per unplayed game, a bitmask of scenario indices for each result."""
    all_scenarios = (1 << len(scenarios)) - 1
    masks = []
    for game_idx in range(n_games):
        home = _mask_where(s.outcomes[game_idx] == Outcome.HOME_WINS for s in scenarios)
        masks.append({True: home, False: all_scenarios & ~home})
    return masks


def _top_two_mask(scenarios: List[Scenario], team: str) -> int:
    return _mask_where(team in s.top_two for s in scenarios)


def _pick_bits(picks: Iterable[Pick]) -> int:
    """Pick set as a small bitmask: bit 2*game + result."""
    bits = 0
    for game_idx, home_wins in picks:
        bits |= 1 << (2 * game_idx + home_wins)
    return bits


def _proper_subsets(bits: int) -> Iterator[int]:
    sub = (bits - 1) & bits
    while sub:
        yield sub
        sub = (sub - 1) & bits


def _search(
    masks: List[Dict[bool, int]],
    target: int,
    all_scenarios: int,
    max_size: int
) -> List[Tuple[Tuple[Pick, ...], int]]:
    """
    Find every pick set whose matching scenarios are non-empty and all in target.

    Games are picked in index order. A pick set that already qualifies is not
    extended, and neither is one with no target scenario left, since no
    extension of either can be a minimal qualifying set.

    Returns:
        (picks, number of matching scenarios) per qualifying pick set
    """
    others = all_scenarios & ~target
    found: List[Tuple[Tuple[Pick, ...], int]] = []

    def _extend(start: int, picks: Tuple[Pick, ...], match: int) -> None:
        for game_idx in range(start, len(masks)):
            for home_wins in (False, True):
                narrowed = match & masks[game_idx][home_wins]
                if not narrowed & target:
                    continue
                candidate = picks + ((game_idx, home_wins),)
                if not narrowed & others:
                    found.append((candidate, narrowed.bit_count()))
                elif len(candidate) < max_size:
                    _extend(game_idx + 1, candidate, narrowed)

    _extend(0, (), all_scenarios)
    return found


def _pattern(picks: Tuple[Pick, ...]) -> int:
    return sum(1 << i for i, (_, home_wins) in enumerate(picks) if home_wins)


def _covered_by_wider(implied: int, count: int, counts: Dict[int, int]) -> bool:
    """
    Whether another pick set matches a strict superset of these scenarios.

    A pick set matches every one of these scenarios exactly when all of its
    picks are implied by them; it matches strictly more when its count is higher.
    """
    if 2 ** implied.bit_count() <= len(counts):
        return any(
            counts.get(sub, 0) > count
            for sub in (implied, *_proper_subsets(implied))
        )
    return any(
        bits & ~implied == 0 and other > count
        for bits, other in counts.items()
    )


def _reduce(
    found: List[Tuple[Tuple[Pick, ...], int]],
    masks: List[Dict[bool, int]],
    all_scenarios: int
) -> List[Tuple[Tuple[Pick, ...], int, int]]:
    """
    Drop redundant pick sets.

    1. Sort by fewest picks, then most scenarios covered
    2. Drop a pick set when a smaller one is a subset of it
    3. Drop a pick set whose scenarios are a strict subset of another's

    The search never yields the same pick set twice, so there is nothing
    to deduplicate.

    Returns:
        (picks, matching scenario mask, count) for every survivor, in order
    """
    ordered = sorted(found, key=lambda f: (len(f[0]), -f[1]))

    keys = {_pick_bits(picks) for picks, _ in ordered}
    minimal = [
        (picks, count) for picks, count in ordered
        if not any(sub in keys for sub in _proper_subsets(_pick_bits(picks)))
    ]

    counts = {_pick_bits(picks): count for picks, count in minimal}
    survivors = []
    for picks, count in minimal:
        match = all_scenarios
        for game_idx, home_wins in picks:
            match &= masks[game_idx][home_wins]

        # Every single pick that holds across all matching scenarios
        implied = 0
        for game_idx, game_masks in enumerate(masks):
            for home_wins in (False, True):
                if not match & game_masks[not home_wins]:
                    implied |= 1 << (2 * game_idx + home_wins)

        if not _covered_by_wider(implied, count, counts):
            survivors.append((picks, match, count))

    return survivors


def _to_condition(
    picks: Tuple[Pick, ...],
    match: int,
    count: int,
    unplayed: List[Game],
    team: str
) -> Condition:
    outcomes = []
    for game_idx, home_wins in picks:
        game = unplayed[game_idx]
        winner, loser = (game.winner, game.loser) if home_wins else (game.loser, game.winner)
        outcomes.append(GameOutcome(game=game, winner=winner, loser=loser))
    # Outcomes naming the team first
    outcomes.sort(key=lambda o: not o.involves(team))
    return Condition(
        outcomes=tuple(outcomes),
        scenario_count=count,
        scenario_indices=_bit_indices(match)
    )


def _find_conditions(
    scenarios: List[Scenario],
    unplayed: List[Game],
    team: str,
    finishes_top_two: bool,
    max_size: int
) -> List[Condition]:
    _check_scenarios(scenarios, unplayed)
    size = min(len(unplayed), max_size)
    if not scenarios or size == 0:
        return []

    all_scenarios = (1 << len(scenarios)) - 1
    top_two = _top_two_mask(scenarios, team)
    target = top_two if finishes_top_two else all_scenarios & ~top_two

    masks = _outcome_masks(scenarios, len(unplayed))
    found = _search(masks, target, all_scenarios, size)
    # Generation order: size, then game combination, then outcome pattern
    found.sort(key=lambda f: (
        len(f[0]), [g for g, _ in f[0]], _pattern(f[0])
    ))
    return [
        _to_condition(picks, match, count, unplayed, team)
        for picks, match, count in _reduce(found, masks, all_scenarios)
    ]


def find_sufficient_conditions(
    scenarios: List[Scenario],
    unplayed: List[Game],
    team: str,
    max_size: int = MAX_CONDITION_SIZE
) -> List[Condition]:
    """Minimal sets of results that guarantee the team a top-two finish."""
    return _find_conditions(scenarios, unplayed, team, True, max_size)


def find_blocking_conditions(
    scenarios: List[Scenario],
    unplayed: List[Game],
    team: str,
    max_size: int = MAX_CONDITION_SIZE
) -> List[Condition]:
    """Minimal sets of results that keep the team out of the top two."""
    return _find_conditions(scenarios, unplayed, team, False, max_size)


def analyze_team_requirements(
    team: str,
    scenarios: List[Scenario],
    unplayed: List[Game],
    max_size: int = MAX_CONDITION_SIZE
) -> TeamRequirements:
    """
    Work out what a team needs from the remaining games.

    Args:
        team: Team to analyze
        scenarios: Every enumerated scenario, in enumeration order
        unplayed: Unplayed games in the same order as each scenario's outcomes
        max_size: Largest number of games in a single condition

    Returns:
        Team requirements. With no scenarios the status is NOT_COMPUTED; a
        team that never finishes top two is ELIMINATED with no conditions.
    """
    _check_scenarios(scenarios, unplayed)

    if not scenarios:
        return TeamRequirements(team=team, status=RequirementStatus.NOT_COMPUTED)

    top_two_count = sum(1 for s in scenarios if team in s.top_two)
    if top_two_count == 0:
        return TeamRequirements(
            team=team,
            status=RequirementStatus.ELIMINATED,
            total_scenarios=len(scenarios)
        )

    if top_two_count == len(scenarios):
        status = RequirementStatus.CLINCHED
    else:
        status = RequirementStatus.CONTENDING

    return TeamRequirements(
        team=team,
        status=status,
        total_scenarios=len(scenarios),
        top_two_count=top_two_count,
        sufficient_conditions=find_sufficient_conditions(scenarios, unplayed, team, max_size),
        blocking_conditions=find_blocking_conditions(scenarios, unplayed, team, max_size)
    )


def analyze_all_team_requirements(
    scenarios: List[Scenario],
    unplayed: List[Game],
    teams: Optional[Iterable[str]] = None,
    max_size: int = MAX_CONDITION_SIZE
) -> Dict[str, TeamRequirements]:
    """Analyze every team, keyed by team name."""
    if teams is None:
        teams = sorted({r.team for s in scenarios for r in s.standings})
    results = {}
    for team in teams:
        req = analyze_team_requirements(team, scenarios, unplayed, max_size)
        logger.debug(
            f"{team}: {req.status.value} ({len(req.sufficient_conditions)} sufficient, "
            f"{len(req.blocking_conditions)} blocking)"
        )
        results[team] = req
    return results
