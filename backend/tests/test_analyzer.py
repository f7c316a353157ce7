"""Tests for the match analyzer facade."""

import pytest
from factories import create_test_delivery, create_test_innings, create_test_match, create_test_over

from match_analytics.config import get_settings
from match_analytics.engine.analyzer import MatchAnalyzer, describe_result
from match_analytics.schemas.common import MatchPhase, MomentumPreset
from match_analytics.schemas.record import MatchOutcome


class TestDescribeResult:
    """Tests for match result text."""

    @pytest.mark.parametrize("outcome,expected", [
        ({"winner": "India", "by": {"runs": 36}}, "India won by 36 runs"),
        ({"winner": "India", "by": {"wickets": 6}}, "India won by 6 wickets"),
        ({"winner": "England", "by": {"innings": 1, "runs": 12}}, "England won by an innings and 12 runs"),
        ({"winner": "India"}, "India won"),
        ({"winner": "India", "by": {"runs": 9}, "method": "D/L"}, "India won by 9 runs (D/L)"),
        ({"result": "tie"}, "Tie"),
        ({"result": "no result"}, "No result"),
        ({}, "Result unavailable"),
    ])
    def test_result_text(self, outcome, expected):
        """Test each outcome shape."""
        assert describe_result(MatchOutcome.model_validate(outcome)) == expected


class TestMatchAnalyzer:
    """Tests for the analyzer query methods."""

    def test_summary(self, analyzer):
        """Test the match summary."""
        summary = analyzer.get_match_summary()

        assert summary.teams == ["Lions", "Tigers"]
        assert summary.venue == "Eden Park"
        assert summary.date == "2024-03-10"
        assert summary.match_type == "T20"
        assert summary.result == "Lions won by 21 runs"
        assert summary.player_of_match == "C"
        assert [t.total_runs for t in summary.team_stats] == [21, 0]

    def test_top_players(self, analyzer):
        """Test leaderboards with the default and explicit limits."""
        assert [b.name for b in analyzer.get_top_batsmen(limit=3)] == ["C", "A", "B"]
        assert [b.name for b in analyzer.get_top_bowlers(innings=1)] == ["Bolt", "Starc"]

    def test_innings_out_of_range(self, analyzer):
        """Test that unknown innings numbers raise ValueError."""
        with pytest.raises(ValueError):
            analyzer.get_team_stats(innings=3)
        with pytest.raises(ValueError):
            analyzer.get_partnership_analysis(innings=0)

    def test_phase_queries(self, analyzer):
        """Test named phase lookups."""
        powerplay = analyzer.get_powerplay_analysis()
        death = analyzer.get_death_overs_analysis(innings=1)

        assert [p.phase for p in powerplay] == [MatchPhase.POWERPLAY, MatchPhase.POWERPLAY]
        assert len(death) == 1
        assert death[0].overs == 0
        assert len(analyzer.get_phase_analysis()) == 6
        assert analyzer.get_phase_analysis("middle", innings=2)[0].phase == MatchPhase.MIDDLE
        with pytest.raises(ValueError):
            analyzer.get_phase_analysis("super_over")

    def test_momentum_presets(self, analyzer):
        """Test both momentum presets are available."""
        weighted = analyzer.get_momentum_curve(MomentumPreset.WEIGHTED)
        micro = analyzer.get_momentum_curve(MomentumPreset.MICRO)

        assert len(weighted) == len(micro) == 19
        assert weighted[-1].cumulative != micro[-1].cumulative

    def test_insights(self, analyzer):
        """Test the sample match highlights."""
        insights = analyzer.get_insights()

        assert [i.title for i in insights] == ["Explosive Batting", "Duck Alert", "Biggest Momentum Swing"]
        assert insights[0].details == "Highest: B (200.0)"
        assert insights[1].details == "D"

    def test_report(self, analyzer):
        """Test the full report contains every view."""
        report = analyzer.build_report(limit=2)

        assert report.match_id == "sample"
        assert len(report.top_batsmen) == 2
        assert set(report.momentum) == {"weighted", "micro"}
        assert len(report.over_momentum) == 3
        assert len(report.key_events) == 6
        assert [s.bowler for s in report.bowling_spells] == ["Ashwin", "Bolt", "Starc"]
        assert len(report.phases) == 6
        assert report.extras[0].wides == 1
        assert report.fall_of_wickets[1].wickets[0].player_out == "D"

        dumped = report.model_dump(by_alias=True)
        assert "topBatsmen" in dumped
        assert "strikeRate" in dumped["topBatsmen"][0]

    def test_recomputation_is_stable(self, analyzer):
        """Test repeated queries give identical results and leave the record untouched."""
        before = analyzer.match.model_dump()

        first = analyzer.build_report()
        second = analyzer.build_report()

        assert first == second
        assert analyzer.match.model_dump() == before

    def test_noball_wicket_delivery(self, params):
        """Test a wicket on a no-ball across batting, bowling and fall of wickets."""
        match = create_test_match([create_test_innings("Lions", [create_test_over(0, [
            create_test_delivery("A", "X", "B", runs=1),
            create_test_delivery("B", "X", "A", extras={"noballs": 1}, player_out="B", kind="stumped"),
        ])])])
        analyzer = MatchAnalyzer(match, params)

        fow = analyzer.get_fall_of_wickets()[0].wickets
        bowler = analyzer.get_top_bowlers()[0]
        batsmen = {b.name: b for b in analyzer.get_top_batsmen()}

        assert len(fow) == 1
        assert fow[0].player_out == "B"
        assert fow[0].score_at_fall == 2
        assert bowler.runs == 2
        assert batsmen["B"].dismissals == 1
        assert batsmen["A"].dismissals == 0

    def test_empty_match(self, params):
        """Test every view of a record without innings."""
        report = MatchAnalyzer(create_test_match([]), params).build_report()

        assert report.top_batsmen == []
        assert report.team_stats == []
        assert report.momentum == {"weighted": [], "micro": []}
        assert report.boundary_analysis.boundary_run_percentage == 0
        assert report.insights == []
        assert report.summary.result == "Result unavailable"

    def test_limits_from_settings(self, sample_match, params, monkeypatch):
        """Test that default leaderboard limits follow the application settings."""
        monkeypatch.setenv("MATCH_ANALYTICS_DEFAULT_TOP_LIMIT", "1")
        monkeypatch.setenv("MATCH_ANALYTICS_INSIGHT_PLAYER_LIMIT", "3")
        get_settings.cache_clear()
        try:
            analyzer = MatchAnalyzer(sample_match, params)

            assert analyzer.insight_player_limit == 3
            assert len(analyzer.get_top_batsmen()) == 1
            assert len(analyzer.build_report().top_bowlers) == 1
        finally:
            get_settings.cache_clear()

    def test_explicit_limits(self, sample_match, params):
        """Test constructor overrides and None meaning no limit."""
        analyzer = MatchAnalyzer(sample_match, params, top_limit=2)

        assert len(analyzer.get_top_batsmen()) == 2
        assert len(analyzer.get_top_batsmen(None)) == len(analyzer.get_top_batsmen(100))
