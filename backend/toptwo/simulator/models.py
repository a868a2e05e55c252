"""
Data models for the scenario engine.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple


class Outcome(str, Enum):
    """Result of an unplayed game, relative to its two schedule slots."""
    HOME_WINS = "home"  # team in the first (winner) slot wins
    AWAY_WINS = "away"  # team in the second (loser) slot wins

    @classmethod
    def from_bit(cls, bit: bool) -> 'Outcome':
        return cls.HOME_WINS if bit else cls.AWAY_WINS


@dataclass(frozen=True)
class Game:
    """
    A conference game.

    For an unplayed game, `winner` and `loser` are only the two schedule
    slots (first named team, second named team). Once played they hold
    the actual result.
    """

    id: str
    winner: str
    loser: str
    winner_pts: Optional[int] = None
    loser_pts: Optional[int] = None
    played: bool = False

    @property
    def teams(self) -> Tuple[str, str]:
        return (self.winner, self.loser)

    def involves(self, team: str) -> bool:
        return team == self.winner or team == self.loser

    def resolve(self, outcome: Outcome) -> 'Game':
        """Return a played copy of this game with the given outcome applied."""
        if outcome == Outcome.HOME_WINS:
            return replace(self, played=True)
        return replace(self, winner=self.loser, loser=self.winner, played=True)


@dataclass(frozen=True)
class Conference:
    """A conference schedule: its teams and every played and unplayed game."""

    name: str
    teams: Tuple[str, ...] = ()
    games: Tuple[Game, ...] = ()

    @property
    def played_games(self) -> List[Game]:
        return [g for g in self.games if g.played]

    @property
    def unplayed_games(self) -> List[Game]:
        return [g for g in self.games if not g.played]

    def with_games(self, games: List[Game]) -> 'Conference':
        return replace(self, games=tuple(games))


@dataclass(frozen=True)
class TeamRecord:
    """A team's conference record."""

    team: str
    wins: int = 0
    losses: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    @property
    def win_pct(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.wins / self.games_played

    @property
    def record_str(self) -> str:
        return f"{self.wins}-{self.losses}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "team": self.team,
            "wins": self.wins,
            "losses": self.losses,
            "record": self.record_str,
            "win_pct": self.win_pct
        }


class TieBreakRule(str, Enum):
    """Tie-break rule codes, as they appear in a rule trace."""
    HEAD_TO_HEAD = "A"
    COMMON_OPPONENTS = "B"
    ORDER_OF_FINISH = "C"
    COMBINED_OPPONENTS = "D"
    RANDOM_DRAW = "R"


@dataclass(frozen=True)
class RuleChain:
    """
    Ordered tie-break rules for one conference.

    place_winless_last enables the round-robin variant where a team that
    lost to every other tied team is placed at the bottom of the group.
    """

    rules: Tuple[TieBreakRule, ...]
    place_winless_last: bool = False

    @property
    def codes(self) -> List[str]:
        return [rule.value for rule in self.rules]


@dataclass(frozen=True)
class TieBreakResult:
    """A single rule's verdict on one team of a tied group."""

    team: str
    placed_top: bool
    rule: TieBreakRule
    explanation: str


@dataclass(frozen=True)
class TieBreakResolution:
    """Total order for a tied group plus the trace of rules that produced it."""

    order: Tuple[str, ...]
    applied_rules: Tuple[str, ...] = ()
    results: Tuple[TieBreakResult, ...] = ()


@dataclass(frozen=True)
class Scenario:
    """One complete assignment of outcomes to the unplayed games."""

    outcomes: Tuple[Outcome, ...]
    standings: Tuple[TeamRecord, ...]
    top_two: Tuple[str, ...]
    applied_rules: Tuple[str, ...] = ()

    @property
    def game_results(self) -> Tuple[bool, ...]:
        """Outcome vector as booleans (True = first named team wins)."""
        return tuple(o == Outcome.HOME_WINS for o in self.outcomes)


@dataclass(frozen=True)
class GameOutcome:
    """A required result for one unplayed game."""

    game: Game
    winner: str
    loser: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.game.id, self.winner)

    def involves(self, team: str) -> bool:
        return team == self.winner or team == self.loser


@dataclass(frozen=True)
class Condition:
    """
    A set of game outcomes that settles a team's top-two fate in every
    scenario consistent with it (guaranteeing it, or blocking it).
    """

    outcomes: Tuple[GameOutcome, ...]
    scenario_count: int
    scenario_indices: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def outcome_keys(self) -> FrozenSet[Tuple[str, str]]:
        return frozenset(o.key for o in self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)


class RequirementStatus(str, Enum):
    """Top-two outlook for a team across all enumerated scenarios."""
    CLINCHED = "clinched"
    CONTENDING = "contending"
    ELIMINATED = "eliminated"
    NOT_COMPUTED = "not_computed"


@dataclass
class TeamRequirements:
    """Condition Analyzer output for one team."""

    team: str
    status: RequirementStatus
    total_scenarios: int = 0
    top_two_count: int = 0
    sufficient_conditions: List[Condition] = field(default_factory=list)
    blocking_conditions: List[Condition] = field(default_factory=list)

    @property
    def can_finish_top_two(self) -> bool:
        return self.status in (RequirementStatus.CLINCHED, RequirementStatus.CONTENDING)


# Type aliases
Picks = Dict[str, str]  # game id -> picked winner
TopTwoCounts = Dict[str, int]
