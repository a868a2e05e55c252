"""
Conference Top-Two Scenario Engine

Exhaustive enumeration of remaining-game outcomes with conference tie-breakers.
"""

from .models import (
    Game,
    Outcome,
    Conference,
    TeamRecord,
    Scenario,
    TieBreakRule,
    RuleChain,
    TieBreakResult,
    TieBreakResolution,
    GameOutcome,
    Condition,
    RequirementStatus,
    TeamRequirements,
    Picks,
    TopTwoCounts,
)
from .standings import compute_standings, group_by_win_pct
from .tiebreakers import (
    resolve_tiebreaker,
    get_h2h_record,
    get_rule_chain,
    RULE_CHAINS,
    DEFAULT_RULE_CHAIN,
)
from .engine import (
    simulate_conference,
    resolve_standings,
    apply_outcomes,
    top_two_counts,
    MAX_UNPLAYED_GAMES,
)
from .scenarios import (
    analyze_team_requirements,
    analyze_all_team_requirements,
    find_sufficient_conditions,
    find_blocking_conditions,
    MAX_CONDITION_SIZE,
)
from .whatif import validate_picks, apply_picks, matching_scenarios, random_picks

__all__ = [
    # Models
    "Game",
    "Outcome",
    "Conference",
    "TeamRecord",
    "Scenario",
    "TieBreakRule",
    "RuleChain",
    "TieBreakResult",
    "TieBreakResolution",
    "GameOutcome",
    "Condition",
    "RequirementStatus",
    "TeamRequirements",
    "Picks",
    "TopTwoCounts",
    # Standings
    "compute_standings",
    "group_by_win_pct",
    # Tiebreakers
    "resolve_tiebreaker",
    "get_h2h_record",
    "get_rule_chain",
    "RULE_CHAINS",
    "DEFAULT_RULE_CHAIN",
    # Engine
    "simulate_conference",
    "resolve_standings",
    "apply_outcomes",
    "top_two_counts",
    "MAX_UNPLAYED_GAMES",
    # Conditions
    "analyze_team_requirements",
    "analyze_all_team_requirements",
    "find_sufficient_conditions",
    "find_blocking_conditions",
    "MAX_CONDITION_SIZE",
    # What-if
    "validate_picks",
    "apply_picks",
    "matching_scenarios",
    "random_picks",
]
