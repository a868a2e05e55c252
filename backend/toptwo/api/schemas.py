"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from typing import Optional, List, Dict
from pydantic import BaseModel, Field


# ============== Conference Schemas ==============

class ConferenceSummary(BaseModel):
    """Conference listing entry."""
    key: str
    display_name: str
    num_teams: int
    num_games: int
    num_unplayed: int
    rule_chain: List[str]
    place_winless_last: bool = False


class GameResponse(BaseModel):
    """A scheduled or played game."""
    id: str
    winner: str
    loser: str
    winner_pts: Optional[int] = None
    loser_pts: Optional[int] = None
    played: bool

    class Config:
        from_attributes = True


class TeamRecordResponse(BaseModel):
    """A team's conference record."""
    team: str
    wins: int
    losses: int
    record: str
    win_pct: float


class StandingsResponse(BaseModel):
    """Current standings with ties broken."""
    conference: str
    display_name: str
    standings: List[TeamRecordResponse]
    applied_rules: List[str] = []
    unplayed_games: List[GameResponse] = []


# ============== Scenario Schemas ==============

class ScenarioResponse(BaseModel):
    """One outcome combination and its final standings."""
    game_results: List[bool]
    standings: List[TeamRecordResponse]
    top_two: List[str]
    applied_rules: List[str] = []


class ScenarioSummaryResponse(BaseModel):
    """Scenario enumeration summary."""
    conference: str
    unplayed_count: int
    total_scenarios: int
    skipped: bool = False
    cached: bool = False
    generated_at: Optional[datetime] = None
    top_two_counts: Dict[str, int] = {}
    unplayed_games: List[GameResponse] = []
    scenarios: Optional[List[ScenarioResponse]] = None


class GameOutcomeResponse(BaseModel):
    """A required result for one game."""
    game_id: str
    winner: str
    loser: str


class ConditionResponse(BaseModel):
    """A set of results that settles a team's top-two fate."""
    outcomes: List[GameOutcomeResponse]
    scenario_count: int


class TeamRequirementsResponse(BaseModel):
    """What a team needs from the remaining games."""
    team: str
    status: str
    can_finish_top_two: bool
    total_scenarios: int
    top_two_count: int
    sufficient_conditions: List[ConditionResponse] = []
    blocking_conditions: List[ConditionResponse] = []


class ConferenceRequirementsResponse(BaseModel):
    """Requirements for every team in a conference."""
    conference: str
    skipped: bool = False
    total_scenarios: int
    teams: List[TeamRequirementsResponse]


# ============== What-If Schemas ==============

class WhatIfRequest(BaseModel):
    """Picked winners for some or all unplayed games."""
    picks: Dict[str, str] = Field(default_factory=dict)  # game id -> winner
    fill_random: bool = False
    seed: Optional[int] = None


class WhatIfResponse(BaseModel):
    """Scenarios consistent with the picks."""
    conference: str
    picks: Dict[str, str]
    unplayed_count: int
    all_picked: bool
    skipped: bool = False
    matching_scenarios: int
    top_two_counts: Dict[str, int] = {}
    final_standings: Optional[List[TeamRecordResponse]] = None
    top_two: Optional[List[str]] = None
    applied_rules: List[str] = []


class CacheClearResponse(BaseModel):
    """Cache clear result."""
    conference: str
    cleared: bool
