"""
Tests for tiebreaker resolution.
"""

import random

import pytest
from toptwo.simulator.models import Game, RuleChain, TieBreakRule
from toptwo.simulator.standings import compute_standings
from toptwo.simulator.tiebreakers import (
    DEFAULT_RULE_CHAIN,
    RULE_CHAINS,
    get_h2h_record,
    get_rule_chain,
    resolve_tiebreaker,
)


def schedule(*results, unplayed=()):
    """Build played games from (winner, loser) pairs, then unplayed ones."""
    games = [
        Game(id=f"g{i}", winner=w, loser=l, winner_pts=1, loser_pts=0, played=True)
        for i, (w, l) in enumerate(results)
    ]
    games += [
        Game(id=f"u{i}", winner=a, loser=b)
        for i, (a, b) in enumerate(unplayed)
    ]
    return games


def resolve(tied, games, chain=DEFAULT_RULE_CHAIN, seed=7):
    return resolve_tiebreaker(
        tied, games, compute_standings(games),
        rule_chain=chain, rng=random.Random(seed)
    )


class TestRuleChains:
    """Tests for the conference rule-chain table."""

    def test_big12_checks_order_of_finish_first(self):
        """Test big12 evaluates rule C before rule B."""
        assert get_rule_chain("Big12").codes == ["A", "C", "B", "D"]

    def test_aac_skips_order_of_finish(self):
        """Test aac uses A, B, D."""
        assert get_rule_chain("aac").codes == ["A", "B", "D"]

    def test_winless_variant(self):
        """Test acc and sec place a team that lost to all at the bottom."""
        assert RULE_CHAINS["acc"].place_winless_last
        assert RULE_CHAINS["sec"].place_winless_last
        assert not RULE_CHAINS["big10"].place_winless_last

    def test_unknown_conference_uses_default(self):
        """Test unknown and empty names fall back to the default chain."""
        assert get_rule_chain("mw") == DEFAULT_RULE_CHAIN
        assert get_rule_chain(None) == DEFAULT_RULE_CHAIN


class TestHeadToHead:
    """Tests for rule A."""

    def test_h2h_record(self):
        """Test head-to-head counting ignores unplayed games."""
        games = schedule(("A", "B"), ("B", "A"), ("A", "B"), unplayed=[("A", "B")])

        assert get_h2h_record(games, "A", "B") == (2, 1)
        assert get_h2h_record(games, "B", "A") == (1, 2)

    def test_two_team_head_to_head(self):
        """Test the head-to-head winner is placed first."""
        games = schedule(("B", "A"), ("A", "C"), ("B", "C"))
        resolution = resolve(["A", "B"], games)

        assert resolution.order == ("B", "A")
        assert resolution.applied_rules == ("A",)
        assert resolution.results[0].rule == TieBreakRule.HEAD_TO_HEAD
        assert resolution.results[0].placed_top

    def test_round_robin_leader(self):
        """Test a complete round robin with a strict leader is settled by rule A alone."""
        games = schedule(("X", "Y"), ("X", "Z"), ("Y", "Z"))
        resolution = resolve(["Z", "Y", "X"], games)

        assert resolution.order == ("X", "Y", "Z")
        assert resolution.applied_rules == ("A",)

    def test_defeated_all_without_complete_round_robin(self):
        """Test a team that beat every other tied team is placed first."""
        games = schedule(("X", "Y"), ("X", "Z"), ("X", "Y"))
        resolution = resolve(["Y", "Z", "X"], games)

        assert resolution.order[0] == "X"
        assert resolution.results[0].rule == TieBreakRule.HEAD_TO_HEAD

    def test_lost_to_all_placed_last(self):
        """Test the bottom variant places a team that lost to every other tied team last."""
        games = schedule(("X", "Z"), ("Y", "Z"))
        resolution = resolve(["X", "Y", "Z"], games, chain=RULE_CHAINS["sec"])

        assert resolution.order[-1] == "Z"
        assert resolution.results[0].team == "Z"
        assert not resolution.results[0].placed_top
        assert resolution.applied_rules[0] == "A"

    def test_lost_to_all_not_used_without_variant(self):
        """Test the default chain never places a team at the bottom."""
        games = schedule(("X", "Z"), ("Y", "Z"))
        resolution = resolve(["X", "Y", "Z"], games)

        assert all(r.placed_top for r in resolution.results)

    def test_unplayed_meeting_is_ignored(self):
        """Test an unplayed game between tied teams decides nothing."""
        games = schedule(unplayed=[("A", "B")])
        resolution = resolve(["A", "B"], games)

        assert "A" not in resolution.applied_rules
        assert sorted(resolution.order) == ["A", "B"]


class TestCommonOpponents:
    """Tests for rule B."""

    def test_best_record_against_common_opponents(self):
        """Test the better record against shared opponents wins."""
        games = schedule(("A", "C"), ("A", "D"), ("B", "C"), ("D", "B"))
        resolution = resolve(["A", "B"], games)

        assert resolution.order == ("A", "B")
        assert resolution.applied_rules == ("B",)

    def test_no_common_opponents(self):
        """Test no shared opponents means rule B makes no decision."""
        games = schedule(("A", "C"), ("B", "D"))
        resolution = resolve(["A", "B"], games, chain=RuleChain(rules=(TieBreakRule.COMMON_OPPONENTS,)))

        assert resolution.applied_rules == ("R",)

    def test_shared_best_record_decides_nothing(self):
        """Test two of three teams sharing the best common-opponent record is no decision."""
        games = schedule(("X", "C"), ("Y", "C"), ("C", "Z"))
        chain = RuleChain(rules=(TieBreakRule.COMMON_OPPONENTS,))
        resolution = resolve(["X", "Y", "Z"], games, chain=chain)

        assert resolution.applied_rules == ("R",)
        assert sorted(resolution.order) == ["X", "Y", "Z"]


class TestOrderOfFinish:
    """Tests for rule C."""

    @pytest.fixture
    def games(self):
        # T finishes 3-1 above A and B (both 1-1); only A beat T
        return schedule(
            ("A", "T"), ("T", "B"), ("M", "A"), ("B", "M"),
            ("T", "X1"), ("T", "X2"), ("X1", "M")
        )

    def test_record_against_higher_level(self, games):
        """Test the record against the best-placed level settles the tie."""
        resolution = resolve(["A", "B"], games, chain=get_rule_chain("big12"))

        assert resolution.order == ("A", "B")
        assert resolution.applied_rules == ("C",)

    def test_default_chain_falls_through_common_opponents(self, games):
        """Test rule B ties on shared opponents T and M before rule C decides."""
        resolution = resolve(["A", "B"], games)

        assert resolution.order == ("A", "B")
        assert resolution.applied_rules == ("C",)

    def test_level_skipped_unless_all_played_it(self):
        """Test a level only one tied team played is skipped, not scored as 0%."""
        games = schedule(("A", "P"), ("P", "x1"), ("P", "x2"), ("P", "x3"), ("B", "Q"))
        chain = RuleChain(rules=(TieBreakRule.ORDER_OF_FINISH,))
        resolution = resolve(["A", "B"], games, chain=chain)

        assert resolution.applied_rules == ("R",)

    def test_tied_level_moves_to_next_level(self):
        """Test equal records against one level fall through to the next level down."""
        # Levels: L2 (1-0), H (5-2), A/B (2-1), M (1-1), the rest winless
        games = schedule(
            ("A", "H"), ("B", "H"), ("A", "M"), ("M", "B"), ("B", "L1"), ("L2", "A"),
            ("H", "f1"), ("H", "f2"), ("H", "f3"), ("H", "f4"), ("H", "f5")
        )
        chain = RuleChain(rules=(TieBreakRule.ORDER_OF_FINISH,))
        resolution = resolve(["B", "A"], games, chain=chain)

        assert resolution.order == ("A", "B")
        assert resolution.applied_rules == ("C",)
        assert "M" in resolution.results[0].explanation


class TestCombinedOpponents:
    """Tests for rule D."""

    def test_strongest_schedule_wins(self):
        """Test the team whose opponents won more is placed first."""
        games = schedule(("A", "P"), ("P", "x1"), ("P", "x2"), ("P", "x3"), ("B", "Q"))
        resolution = resolve(["B", "A"], games)

        assert resolution.order == ("A", "B")
        assert resolution.applied_rules == ("D",)

    def test_equal_opponent_records_fall_to_draw(self):
        """Test equal combined opponent percentages make no decision."""
        games = schedule(("A", "P"), ("B", "Q"))
        chain = RuleChain(rules=(TieBreakRule.COMBINED_OPPONENTS,))
        resolution = resolve(["A", "B"], games, chain=chain)

        assert resolution.applied_rules == ("R",)
        assert resolution.results[0].rule == TieBreakRule.RANDOM_DRAW


class TestFallback:
    """Tests for the random draw fallback."""

    def test_cycle_falls_back_to_random_draw(self):
        """Test an unbreakable three-way cycle ends in a single random draw."""
        games = schedule(("X", "Y"), ("Y", "Z"), ("Z", "X"))
        resolution = resolve(["X", "Y", "Z"], games)

        assert sorted(resolution.order) == ["X", "Y", "Z"]
        assert resolution.applied_rules == ("R",)
        assert all(r.rule == TieBreakRule.RANDOM_DRAW for r in resolution.results)

    def test_seeded_draw_is_reproducible(self):
        """Test the same seed gives the same order."""
        games = schedule(("X", "Y"), ("Y", "Z"), ("Z", "X"))

        first = resolve(["X", "Y", "Z"], games, seed=3)
        second = resolve(["X", "Y", "Z"], games, seed=3)

        assert first.order == second.order


class TestResolveTiebreaker:
    """General resolver behavior."""

    def test_single_team_unchanged(self):
        """Test a group of one is returned as-is with no rules applied."""
        resolution = resolve(["A"], schedule(("A", "B")))

        assert resolution.order == ("A",)
        assert resolution.applied_rules == ()

    def test_rule_codes_unique_in_first_use_order(self):
        """Test a code used twice is listed once."""
        games = schedule(("W", "X"), ("W", "Y"), ("W", "Z"), ("X", "Y"), ("X", "Z"), ("Y", "Z"))
        resolution = resolve(["Z", "Y", "X", "W"], games)

        assert resolution.order == ("W", "X", "Y", "Z")
        assert resolution.applied_rules == ("A",)
        assert len(resolution.results) == 3
