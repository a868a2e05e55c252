"""
What-if picks: user-chosen winners for some or all unplayed games.
"""

import random
from typing import List, Optional

from .models import Conference, Game, Outcome, Picks, Scenario


def validate_picks(unplayed: List[Game], picks: Picks) -> None:
    """Raise ValueError for a pick on an unknown game or a non-participant."""
    games = {g.id: g for g in unplayed}
    for game_id, winner in picks.items():
        game = games.get(game_id)
        if game is None:
            raise ValueError(f"Game {game_id} is not an unplayed game")
        if not game.involves(winner):
            raise ValueError(f"{winner} does not play in game {game_id}")


def pick_outcome(game: Game, winner: str) -> Outcome:
    return Outcome.HOME_WINS if winner == game.winner else Outcome.AWAY_WINS


def apply_picks(conference: Conference, picks: Picks) -> Conference:
    """Return a copy of the conference with every picked game played."""
    validate_picks(conference.unplayed_games, picks)
    games = []
    for game in conference.games:
        if not game.played and game.id in picks:
            game = game.resolve(pick_outcome(game, picks[game.id]))
        games.append(game)
    return conference.with_games(games)


def matching_scenarios(
    scenarios: List[Scenario],
    unplayed: List[Game],
    picks: Picks
) -> List[int]:
    """Indices of the scenarios consistent with every pick."""
    validate_picks(unplayed, picks)
    required = [
        (idx, pick_outcome(game, picks[game.id]))
        for idx, game in enumerate(unplayed)
        if game.id in picks
    ]
    return [
        i for i, scenario in enumerate(scenarios)
        if all(scenario.outcomes[idx] == outcome for idx, outcome in required)
    ]


def random_picks(
    unplayed: List[Game],
    rng: Optional[random.Random] = None,
    existing: Optional[Picks] = None
) -> Picks:
    """Pick a random winner for every game not already in existing."""
    rng = rng or random.Random()
    picks = dict(existing or {})
    for game in unplayed:
        if game.id not in picks:
            picks[game.id] = rng.choice(game.teams)
    return picks
