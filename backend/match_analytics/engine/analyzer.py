"""
Match analyzer.

One object per parsed match record, exposing every derived view as a query
method. Each call recomputes its view from the immutable record, so an
analyzer can be shared between concurrent requests for the same match.
"""

from typing import Any, List, Optional

from match_analytics.config import get_settings
from match_analytics.engine.accumulators import select_innings
from match_analytics.engine.batting import BattingAggregator
from match_analytics.engine.bowling import BowlingAggregator
from match_analytics.engine.fall_of_wickets import FallOfWicketsTracker
from match_analytics.engine.insights import InsightSummarizer
from match_analytics.engine.momentum import KeyEventDetector, MomentumScorer
from match_analytics.engine.params import AnalyticsParams, get_analytics_params
from match_analytics.engine.partnerships import PartnershipTracker
from match_analytics.engine.phases import PhaseWindowAnalyzer
from match_analytics.engine.spells import BowlingSpellAnalyzer
from match_analytics.engine.team import TeamAggregator
from match_analytics.schemas.common import MatchPhase, MomentumPreset
from match_analytics.schemas.record import Match, MatchOutcome
from match_analytics.schemas.stats import (
    AnalyticsReport,
    BattingStats,
    BoundaryAnalysis,
    BowlingSpell,
    BowlingStats,
    ExtrasBreakdown,
    InningsFallOfWickets,
    InningsProgression,
    Insight,
    KeyEvent,
    MatchSummary,
    MomentumPoint,
    OverMomentum,
    Partnership,
    PhaseWindowStats,
    TeamStats,
    WicketAnalysis,
)

# Leaderboard limit argument meaning "use the configured default"; None means no limit
DEFAULT_LIMIT: Any = object()


def describe_result(outcome: MatchOutcome) -> str:
    """Human-readable match result, e.g. "India won by 6 wickets (D/L)"."""
    if outcome.winner:
        by = outcome.by
        if by is not None and by.innings and by.runs is not None:
            text = f"{outcome.winner} won by an innings and {by.runs} runs"
        elif by is not None and by.runs is not None:
            text = f"{outcome.winner} won by {by.runs} runs"
        elif by is not None and by.wickets is not None:
            text = f"{outcome.winner} won by {by.wickets} wickets"
        else:
            text = f"{outcome.winner} won"
    elif outcome.result:
        text = outcome.result.capitalize()
    else:
        return "Result unavailable"

    if outcome.method:
        text += f" ({outcome.method})"
    return text


class MatchAnalyzer:
    """
    Query interface over one match record.

    Methods that take `innings` accept a 1-based innings number and raise
    ValueError if the match has no such innings; `None` means all innings.
    """

    def __init__(
        self,
        match: Match,
        params: Optional[AnalyticsParams] = None,
        top_limit: Optional[int] = None,
        insight_player_limit: Optional[int] = None,
    ):
        self.match = match
        self.params = params or get_analytics_params()
        settings = get_settings()
        self.top_limit = settings.default_top_limit if top_limit is None else top_limit
        self.insight_player_limit = (
            settings.insight_player_limit if insight_player_limit is None else insight_player_limit
        )

        self.batting = BattingAggregator()
        self.bowling = BowlingAggregator()
        self.team = TeamAggregator()
        self.partnerships = PartnershipTracker(self.params)
        self.fall_of_wickets = FallOfWicketsTracker()
        self.momentum = MomentumScorer(self.params)
        self.key_events = KeyEventDetector(self.params)
        self.spells = BowlingSpellAnalyzer(self.params)
        self.phases = PhaseWindowAnalyzer(self.params)
        self.insights = InsightSummarizer(self.params)

    def _innings(self, innings: Optional[int] = None):
        return select_innings(self.match, innings)

    def _limit(self, limit: Optional[int]) -> Optional[int]:
        return self.top_limit if limit is DEFAULT_LIMIT else limit

    # ----- summary / players / teams -----

    def get_match_summary(self) -> MatchSummary:
        info = self.match.info
        return MatchSummary(
            teams=info.teams,
            venue=info.venue,
            date=info.dates[0] if info.dates else None,
            match_type=info.match_type,
            result=describe_result(info.outcome),
            player_of_match=info.player_of_match[0] if info.player_of_match else None,
            team_stats=self.get_team_stats(),
        )

    def get_top_batsmen(self, limit: Optional[int] = DEFAULT_LIMIT, innings: Optional[int] = None) -> List[BattingStats]:
        return self.batting.aggregate(self._innings(innings), self._limit(limit))

    def get_top_bowlers(self, limit: Optional[int] = DEFAULT_LIMIT, innings: Optional[int] = None) -> List[BowlingStats]:
        return self.bowling.aggregate(self._innings(innings), self._limit(limit))

    def get_team_stats(self, innings: Optional[int] = None) -> List[TeamStats]:
        return [self.team.team_stats(n, inns) for n, inns in self._innings(innings)]

    def get_extras_breakdown(self, innings: Optional[int] = None) -> List[ExtrasBreakdown]:
        return [self.team.extras(n, inns) for n, inns in self._innings(innings)]

    def get_over_by_over_progression(self, innings: Optional[int] = None) -> List[InningsProgression]:
        return [self.team.progression(n, inns) for n, inns in self._innings(innings)]

    def get_wicket_analysis(self, innings: Optional[int] = None) -> WicketAnalysis:
        return self.team.wicket_analysis(self._innings(innings))

    def get_boundary_analysis(self, innings: Optional[int] = None) -> BoundaryAnalysis:
        return self.team.boundary_analysis(self._innings(innings))

    # ----- partnerships / wickets -----

    def get_partnership_analysis(self, innings: Optional[int] = None) -> List[Partnership]:
        return self.partnerships.track_all(self._innings(innings))

    def get_fall_of_wickets(self, innings: Optional[int] = None) -> List[InningsFallOfWickets]:
        return [self.fall_of_wickets.track(n, inns) for n, inns in self._innings(innings)]

    # ----- momentum -----

    def get_momentum_curve(self, preset: MomentumPreset = MomentumPreset.WEIGHTED) -> List[MomentumPoint]:
        """Ball-by-ball momentum across the whole match."""
        return self.momentum.curve(self.match, preset)

    def get_over_momentum(self, preset: MomentumPreset = MomentumPreset.WEIGHTED) -> List[OverMomentum]:
        return self.momentum.over_momentum(self.match, preset)

    def get_key_events(self) -> List[KeyEvent]:
        return self.key_events.detect(self.match)

    # ----- spells / phases -----

    def get_bowling_spells(self, innings: Optional[int] = None) -> List[BowlingSpell]:
        return self.spells.analyze(self._innings(innings))

    def get_phase_analysis(
        self,
        phase: Optional[MatchPhase] = None,
        innings: Optional[int] = None,
    ) -> List[PhaseWindowStats]:
        """Phase windows per innings; every phase unless one is named."""
        phases = [MatchPhase(phase)] if phase is not None else None
        return self.phases.analyze(self._innings(innings), phases, self.match.info.overs)

    def get_powerplay_analysis(self, innings: Optional[int] = None) -> List[PhaseWindowStats]:
        return self.get_phase_analysis(MatchPhase.POWERPLAY, innings)

    def get_death_overs_analysis(self, innings: Optional[int] = None) -> List[PhaseWindowStats]:
        return self.get_phase_analysis(MatchPhase.DEATH, innings)

    # ----- insights / report -----

    def get_insights(self) -> List[Insight]:
        return self.insights.summarize(
            batsmen=self.get_top_batsmen(self.insight_player_limit),
            bowlers=self.get_top_bowlers(None),
            team_stats=self.get_team_stats(),
            partnerships=self.get_partnership_analysis(),
            spells=self.get_bowling_spells(),
            over_momentum=self.get_over_momentum(),
            boundaries=self.get_boundary_analysis(),
        )

    def build_report(self, limit: Optional[int] = DEFAULT_LIMIT) -> AnalyticsReport:
        """Every view of the match in one structure."""
        return AnalyticsReport(
            match_id=self.match.match_id,
            summary=self.get_match_summary(),
            top_batsmen=self.get_top_batsmen(limit),
            top_bowlers=self.get_top_bowlers(limit),
            team_stats=self.get_team_stats(),
            extras=self.get_extras_breakdown(),
            partnerships=self.get_partnership_analysis(),
            fall_of_wickets=self.get_fall_of_wickets(),
            wicket_analysis=self.get_wicket_analysis(),
            boundary_analysis=self.get_boundary_analysis(),
            progression=self.get_over_by_over_progression(),
            momentum={preset.value: self.get_momentum_curve(preset) for preset in MomentumPreset},
            over_momentum=self.get_over_momentum(),
            key_events=self.get_key_events(),
            bowling_spells=self.get_bowling_spells(),
            phases=self.get_phase_analysis(),
            insights=self.get_insights(),
        )
