"""Tests for the insight summarizer."""

from match_analytics.engine.insights import InsightSummarizer
from match_analytics.schemas.common import InsightType, MatchPhase
from match_analytics.schemas.stats import (
    BattingStats,
    BoundaryAnalysis,
    BowlingSpell,
    BowlingStats,
    OverMomentum,
    Partnership,
    TeamStats,
)


def create_test_batter(name: str, runs: int, balls: int, dismissals: int = 1) -> BattingStats:
    return BattingStats(
        name=name,
        runs=runs,
        balls=balls,
        dismissals=dismissals,
        strike_rate=runs / balls * 100 if balls else 0.0,
    )


def create_test_bowler(name: str, runs: int, overs: int, wickets: int = 0) -> BowlingStats:
    return BowlingStats(
        name=name,
        runs=runs,
        balls=overs * 6,
        overs=overs,
        wickets=wickets,
        economy=runs / overs if overs else 0.0,
    )


def titles(insights):
    return [i.title for i in insights]


class TestBattingInsights:
    """Tests for batting highlights."""

    def test_explosive_and_milestones(self, params):
        """Test strike-rate, century and half-century selection."""
        summarizer = InsightSummarizer(params)
        batsmen = [
            create_test_batter("Gayle", 104, 50),
            create_test_batter("Kohli", 62, 48),
            create_test_batter("Rohit", 30, 18),
        ]

        insights = summarizer.batting_insights(batsmen)

        assert titles(insights) == ["Explosive Batting", "Century Makers", "Half Century Club"]
        assert insights[0].details == "Highest: Gayle (208.0)"
        assert insights[1].details == "Gayle (104)"
        assert insights[2].details == "Kohli (62)"

    def test_duck_needs_dismissal(self, params):
        """Test that a not-out zero is not a duck."""
        batsmen = [
            create_test_batter("Out", 0, 3, dismissals=1),
            create_test_batter("NotOut", 0, 2, dismissals=0),
        ]

        insights = InsightSummarizer(params).batting_insights(batsmen)

        assert titles(insights) == ["Duck Alert"]
        assert insights[0].details == "Out"

    def test_strike_rate_threshold_is_exclusive(self, params):
        """Test a strike rate of exactly 150 is not explosive."""
        insights = InsightSummarizer(params).batting_insights([create_test_batter("A", 30, 20)])

        assert insights == []


class TestBowlingInsights:
    """Tests for bowling highlights."""

    def test_economical_needs_three_overs(self, params):
        """Test the minimum overs for economical bowling."""
        bowlers = [
            create_test_bowler("Tidy", 10, 4),
            create_test_bowler("Brief", 2, 2),
        ]

        insights = InsightSummarizer(params).bowling_insights(bowlers, [])

        assert titles(insights) == ["Economical Bowling"]
        assert insights[0].details == "Best: Tidy (2.50)"

    def test_five_for_and_expensive(self, params):
        """Test five-wicket hauls and expensive spells."""
        bowlers = [
            create_test_bowler("Bumrah", 20, 4, wickets=5),
            create_test_bowler("Leaky", 45, 4),
            create_test_bowler("OneOver", 15, 1),
        ]

        insights = InsightSummarizer(params).bowling_insights(bowlers, [])

        assert titles(insights) == ["Five-for Achieved", "Expensive Spells"]
        assert insights[0].details == "Bumrah (5/20)"
        assert insights[1].details == "Most expensive: Leaky (11.25)"

    def test_spell_of_the_match(self, params):
        """Test the top-ranked spell is reported once it has three wickets."""
        spell = BowlingSpell(
            bowler="Rashid", team="Lions", overs=4.0, balls=24, runs=18, wickets=3,
            economy=4.5, phase=MatchPhase.MIDDLE,
        )

        insights = InsightSummarizer(params).bowling_insights([], [spell])

        assert titles(insights) == ["Spell of the Match"]
        assert insights[0].description == "Rashid took 3/18 in 4 overs"
        assert insights[0].details == "Middle spell, economy 4.50"


class TestOtherInsights:
    """Tests for partnership, momentum and match highlights."""

    def test_partnerships(self, params):
        """Test fifty and century stands."""
        partnerships = [
            Partnership(team="Lions", batters=["A", "B"], runs=120, balls=80),
            Partnership(team="Lions", batters=["C", None], runs=55, balls=40),
            Partnership(team="Lions", batters=["D", "E"], runs=49, balls=30),
        ]

        insights = InsightSummarizer(params).partnership_insights(partnerships)

        assert titles(insights) == ["Century Stand", "Fifty Partnerships"]
        assert insights[0].details == "A & B (120 off 80)"
        assert insights[1].details == "C (55 off 40)"

    def test_momentum_swing(self, params):
        """Test the largest over swing is reported only past the threshold."""
        overs = [
            OverMomentum(innings=1, team="Lions", over_number=3, net_momentum_change=12),
            OverMomentum(innings=1, team="Lions", over_number=4, net_momentum_change=-16),
        ]
        summarizer = InsightSummarizer(params)

        insights = summarizer.momentum_insights(overs)

        assert len(insights) == 1
        assert insights[0].type == InsightType.MOMENTUM
        assert insights[0].details == "Momentum shifted to the bowling side"
        assert summarizer.momentum_insights(overs[:1]) == []
        assert summarizer.momentum_insights([]) == []

    def test_match_margins(self, params):
        """Test close and dominant margins between the first two innings."""
        summarizer = InsightSummarizer(params)
        close = [TeamStats(team="A", total_runs=150), TeamStats(team="B", total_runs=145)]
        dominant = [TeamStats(team="A", total_runs=220), TeamStats(team="B", total_runs=100)]
        ordinary = [TeamStats(team="A", total_runs=160), TeamStats(team="B", total_runs=130)]

        assert titles(summarizer.match_insights(close)) == ["Nail-biting Finish"]
        assert titles(summarizer.match_insights(dominant)) == ["Dominant Performance"]
        assert summarizer.match_insights(ordinary) == []
        assert summarizer.match_insights(close[:1]) == []

    def test_boundary_bonanza(self, params):
        """Test the boundary count threshold."""
        summarizer = InsightSummarizer(params)
        many = BoundaryAnalysis(total_fours=15, total_sixes=6, boundary_run_percentage=55.123)
        few = BoundaryAnalysis(total_fours=15, total_sixes=5)

        insights = summarizer.match_insights([], many)

        assert titles(insights) == ["Boundary Bonanza"]
        assert insights[0].details == "55.1% of runs came from boundaries"
        assert summarizer.match_insights([], few) == []

    def test_summarize_order(self, params):
        """Test that summarize groups insights in a fixed order."""
        insights = InsightSummarizer(params).summarize(
            batsmen=[create_test_batter("A", 0, 1)],
            bowlers=[create_test_bowler("X", 20, 4, wickets=5)],
            team_stats=[],
            partnerships=[],
            spells=[],
            over_momentum=[OverMomentum(innings=1, team="L", over_number=1, net_momentum_change=20)],
        )

        assert [i.type for i in insights] == [InsightType.BATTING, InsightType.BOWLING, InsightType.MOMENTUM]
