"""
Scenario, requirements and what-if API routes.
"""

import logging
import random
from typing import Optional, Tuple
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..schemas import (
    CacheClearResponse,
    ConditionResponse,
    ConferenceRequirementsResponse,
    GameOutcomeResponse,
    GameResponse,
    ScenarioResponse,
    ScenarioSummaryResponse,
    TeamRequirementsResponse,
    WhatIfRequest,
    WhatIfResponse,
)
from ..dependencies import get_cache, get_source, read_conference
from .conferences_routes import record_response
from ...core import config
from ...core.cache import CachedScenarios, ScenarioCache, content_hash
from ...simulator import (
    Conference,
    Condition,
    Scenario,
    TeamRequirements,
    analyze_all_team_requirements,
    analyze_team_requirements,
    apply_picks,
    get_rule_chain,
    matching_scenarios,
    random_picks,
    resolve_standings,
    simulate_conference,
    top_two_counts,
)
from ...sources import ScheduleSource

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/conferences", tags=["scenarios"])


def load_scenarios(
    key: str,
    source: ScheduleSource,
    cache: ScenarioCache
) -> Tuple[Conference, CachedScenarios, bool]:
    """
    Get a conference's scenarios, enumerating them on a cache miss.

    Returns:
        Tuple of (conference, cache entry, whether it was already cached)
    """
    conference, raw = read_conference(source, key)
    digest = content_hash(raw)

    cached = cache.get(conference.name, digest)
    if cached is not None:
        return conference, cached, True

    logger.info(f"Scenario cache miss for {conference.name}, enumerating")
    scenarios = simulate_conference(conference, max_unplayed=config.MAX_UNPLAYED)
    entry = cache.set(conference.name, digest, scenarios, conference.unplayed_games)
    return conference, entry, False


def _skipped(entry: CachedScenarios) -> bool:
    return not entry.scenarios


def scenario_response(scenario: Scenario) -> ScenarioResponse:
    return ScenarioResponse(
        game_results=list(scenario.game_results),
        standings=[record_response(r) for r in scenario.standings],
        top_two=list(scenario.top_two),
        applied_rules=list(scenario.applied_rules)
    )


def condition_response(condition: Condition) -> ConditionResponse:
    return ConditionResponse(
        outcomes=[
            GameOutcomeResponse(game_id=o.game.id, winner=o.winner, loser=o.loser)
            for o in condition.outcomes
        ],
        scenario_count=condition.scenario_count
    )


def requirements_response(req: TeamRequirements) -> TeamRequirementsResponse:
    return TeamRequirementsResponse(
        team=req.team,
        status=req.status.value,
        can_finish_top_two=req.can_finish_top_two,
        total_scenarios=req.total_scenarios,
        top_two_count=req.top_two_count,
        sufficient_conditions=[condition_response(c) for c in req.sufficient_conditions],
        blocking_conditions=[condition_response(c) for c in req.blocking_conditions]
    )


@router.get("/{key}/scenarios", response_model=ScenarioSummaryResponse)
def get_scenarios(
    key: str,
    include_scenarios: bool = False,
    limit: Optional[int] = Query(None, ge=1),
    source: ScheduleSource = Depends(get_source),
    cache: ScenarioCache = Depends(get_cache)
) -> ScenarioSummaryResponse:
    """
    Enumerate every outcome of the remaining games.

    Returns top-two tallies; pass include_scenarios to get the scenarios
    themselves (optionally only the first `limit`).
    """
    conference, entry, cached = load_scenarios(key, source, cache)

    scenarios = None
    if include_scenarios:
        selected = entry.scenarios[:limit] if limit else entry.scenarios
        scenarios = [scenario_response(s) for s in selected]

    return ScenarioSummaryResponse(
        conference=conference.name,
        unplayed_count=len(entry.unplayed_games),
        total_scenarios=len(entry.scenarios),
        skipped=_skipped(entry),
        cached=cached,
        generated_at=entry.generated_at,
        top_two_counts=top_two_counts(entry.scenarios),
        unplayed_games=[GameResponse.model_validate(g) for g in entry.unplayed_games],
        scenarios=scenarios
    )


@router.get("/{key}/requirements", response_model=ConferenceRequirementsResponse)
def get_all_requirements(
    key: str,
    source: ScheduleSource = Depends(get_source),
    cache: ScenarioCache = Depends(get_cache)
) -> ConferenceRequirementsResponse:
    """
    Get sufficient and blocking conditions for every team.
    """
    conference, entry, _ = load_scenarios(key, source, cache)
    results = analyze_all_team_requirements(
        entry.scenarios, entry.unplayed_games, conference.teams,
        max_size=config.MAX_CONDITION
    )

    return ConferenceRequirementsResponse(
        conference=conference.name,
        skipped=_skipped(entry),
        total_scenarios=len(entry.scenarios),
        teams=[requirements_response(r) for r in results.values()]
    )


@router.get("/{key}/teams/{team}/requirements", response_model=TeamRequirementsResponse)
def get_team_requirements(
    key: str,
    team: str,
    source: ScheduleSource = Depends(get_source),
    cache: ScenarioCache = Depends(get_cache)
) -> TeamRequirementsResponse:
    """
    Get what one team needs from the remaining games.
    """
    conference, entry, _ = load_scenarios(key, source, cache)
    if team not in conference.teams:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Team {team} not found in {conference.name}"
        )

    req = analyze_team_requirements(
        team, entry.scenarios, entry.unplayed_games, max_size=config.MAX_CONDITION
    )
    return requirements_response(req)


@router.post("/{key}/what-if", response_model=WhatIfResponse)
def what_if(
    key: str,
    request: WhatIfRequest,
    source: ScheduleSource = Depends(get_source),
    cache: ScenarioCache = Depends(get_cache)
) -> WhatIfResponse:
    """
    Pick winners for some or all unplayed games.

    Returns the scenarios consistent with the picks; once every game is
    picked, also the final standings.
    """
    conference, entry, _ = load_scenarios(key, source, cache)
    unplayed = entry.unplayed_games

    picks = dict(request.picks)
    try:
        if request.fill_random:
            picks = random_picks(unplayed, rng=random.Random(request.seed), existing=picks)
        indices = matching_scenarios(entry.scenarios, unplayed, picks)
        picked = apply_picks(conference, picks)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    all_picked = len(picks) == len(unplayed)
    response = WhatIfResponse(
        conference=conference.name,
        picks=picks,
        unplayed_count=len(unplayed),
        all_picked=all_picked,
        skipped=_skipped(entry),
        matching_scenarios=len(indices),
        top_two_counts=top_two_counts([entry.scenarios[i] for i in indices])
    )

    if all_picked:
        standings, applied = resolve_standings(
            picked.games, picked.teams, get_rule_chain(conference.name)
        )
        response.final_standings = [record_response(r) for r in standings]
        response.top_two = [r.team for r in standings[:2]]
        response.applied_rules = applied

    return response


@router.delete("/{key}/cache", response_model=CacheClearResponse)
def clear_cache(
    key: str,
    cache: ScenarioCache = Depends(get_cache)
) -> CacheClearResponse:
    """
    Drop a conference's cached scenarios.
    """
    return CacheClearResponse(conference=key.lower(), cleared=cache.clear(key))
