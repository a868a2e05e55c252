"""
Conference listing and standings API routes.
"""

from typing import List
from fastapi import APIRouter, Depends

from ..schemas import ConferenceSummary, GameResponse, StandingsResponse, TeamRecordResponse
from ..dependencies import get_source, read_conference
from ...core.conferences import get_display_name
from ...simulator import TeamRecord, get_rule_chain, resolve_standings
from ...sources import ScheduleSource


router = APIRouter(prefix="/conferences", tags=["conferences"])


def record_response(record: TeamRecord) -> TeamRecordResponse:
    return TeamRecordResponse(**record.to_dict())


@router.get("", response_model=List[ConferenceSummary])
def list_conferences(
    source: ScheduleSource = Depends(get_source)
) -> List[ConferenceSummary]:
    """
    List every conference the schedule source provides.
    """
    summaries = []
    for key in source.list_conferences():
        conference, _ = read_conference(source, key)
        chain = get_rule_chain(key)
        summaries.append(ConferenceSummary(
            key=key,
            display_name=get_display_name(key),
            num_teams=len(conference.teams),
            num_games=len(conference.games),
            num_unplayed=len(conference.unplayed_games),
            rule_chain=chain.codes,
            place_winless_last=chain.place_winless_last
        ))
    return summaries


@router.get("/{key}/standings", response_model=StandingsResponse)
def get_standings(
    key: str,
    source: ScheduleSource = Depends(get_source)
) -> StandingsResponse:
    """
    Get current standings from played games, with ties broken.
    """
    conference, _ = read_conference(source, key)
    standings, applied = resolve_standings(
        conference.played_games, conference.teams, get_rule_chain(conference.name)
    )

    return StandingsResponse(
        conference=conference.name,
        display_name=get_display_name(conference.name),
        standings=[record_response(r) for r in standings],
        applied_rules=applied,
        unplayed_games=[GameResponse.model_validate(g) for g in conference.unplayed_games]
    )
