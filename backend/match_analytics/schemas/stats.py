"""Derived statistics schemas.

Every record here is created fresh by one aggregation call, filled in during
that call's pass over the deliveries and handed to the caller. Field names
serialize as camelCase for the presentation layer.
"""

from typing import Dict, List, Optional

from match_analytics.schemas.common import (
    BoundaryType,
    CamelModel,
    InsightType,
    KeyEventType,
    MatchPhase,
    MomentumEvent,
)


# ============================================
# PLAYER FIGURES
# ============================================

class BattingStats(CamelModel):
    """Batting figures for one player."""
    name: str
    runs: int = 0
    balls: int = 0
    boundaries: int = 0  # fours
    sixes: int = 0
    dismissals: int = 0
    strike_rate: float = 0.0
    average: float = 0.0  # raw runs when never dismissed


class BowlingStats(CamelModel):
    """Bowling figures for one player."""
    name: str
    runs: int = 0
    balls: int = 0
    wickets: int = 0
    extras: int = 0
    economy: float = 0.0
    average: float = 0.0
    overs: int = 0  # distinct overs the bowler delivered in


# ============================================
# TEAM / INNINGS FIGURES
# ============================================

class TeamStats(CamelModel):
    """Totals for one innings."""
    team: str
    innings: int = 1
    total_runs: int = 0
    total_wickets: int = 0
    total_overs: int = 0
    balls: int = 0
    run_rate: float = 0.0
    boundaries: int = 0
    sixes: int = 0


class ExtrasBreakdown(CamelModel):
    team: str
    innings: int = 1
    byes: int = 0
    leg_byes: int = 0
    wides: int = 0
    no_balls: int = 0
    penalty: int = 0
    total: int = 0


class OverProgression(CamelModel):
    over: int
    runs: int = 0
    total_runs: int = 0
    wickets: int = 0
    total_wickets: int = 0
    run_rate: float = 0.0


class InningsProgression(CamelModel):
    team: str
    innings: int = 1
    progression: List[OverProgression] = []


class WicketTypeCount(CamelModel):
    name: str
    value: int = 0


class WicketsByOver(CamelModel):
    over: int
    wickets: int = 0


class WicketAnalysis(CamelModel):
    wicket_types: List[WicketTypeCount] = []
    wickets_by_over: List[WicketsByOver] = []


class OverBoundaries(CamelModel):
    over: int
    fours: int = 0
    sixes: int = 0


class TeamBoundaries(CamelModel):
    team: str
    innings: int = 1
    fours: int = 0
    sixes: int = 0
    total: int = 0
    over_boundaries: List[OverBoundaries] = []


class BoundaryAnalysis(CamelModel):
    by_team: List[TeamBoundaries] = []
    total_fours: int = 0
    total_sixes: int = 0
    boundary_run_percentage: float = 0.0


# ============================================
# PARTNERSHIPS / FALL OF WICKETS
# ============================================

class Partnership(CamelModel):
    """Scoring contribution of one uninterrupted pair of batters."""
    team: str
    innings: int = 1
    batters: List[Optional[str]] = []  # [batter1, batter2]; batter2 may be unresolved
    runs: int = 0
    balls: int = 0
    wicket_index: int = 0
    run_rate: float = 0.0
    boundaries: int = 0
    sixes: int = 0
    ended_by_wicket: bool = False


class FallOfWicket(CamelModel):
    wicket_number: int
    score_at_fall: int
    over_ball: str  # e.g. "14.3"
    player_out: Optional[str] = None
    kind: str = "unknown"
    partnership_runs: int = 0


class InningsFallOfWickets(CamelModel):
    team: str
    innings: int = 1
    wickets: List[FallOfWicket] = []


# ============================================
# MOMENTUM
# ============================================

class MomentumPoint(CamelModel):
    """Momentum contribution of one delivery."""
    innings: int
    team: str
    over: int
    ball: int
    event: MomentumEvent
    runs: int = 0  # total runs off the delivery
    delta: float = 0.0
    cumulative: float = 0.0
    is_wicket: bool = False
    boundary_type: BoundaryType = BoundaryType.NONE
    batter: Optional[str] = None
    bowler: Optional[str] = None
    extras: Optional[str] = None  # e.g. "+2"
    description: str = ""


class OverMomentum(CamelModel):
    innings: int
    team: str
    over_number: int
    start_momentum: float = 0.0
    total_momentum: float = 0.0  # cumulative at end of over
    net_momentum_change: float = 0.0
    key_event: Optional[MomentumEvent] = None
    points: List[MomentumPoint] = []


class KeyEvent(CamelModel):
    """A notable moment on the match timeline."""
    innings: int
    team: str
    over: int
    ball: int
    event: KeyEventType
    impact: int  # negative favours the bowling side
    description: str = ""
    runs: int = 0  # innings score at the time
    wickets: int = 0


# ============================================
# BOWLING SPELLS / PHASE WINDOWS
# ============================================

class SpellOver(CamelModel):
    over: int
    runs: int = 0
    wickets: int = 0
    balls: int = 0


class BowlingSpell(CamelModel):
    bowler: str
    team: str  # batting side faced
    innings: int = 1
    overs: float = 0.0  # X.Y notation, Y = balls past the last full over
    balls: int = 0
    runs: int = 0
    wickets: int = 0
    economy: float = 0.0
    start_over: int = 0
    end_over: int = 0
    phase: MatchPhase = MatchPhase.MIDDLE
    dot_balls: int = 0
    boundaries: int = 0
    maidens: int = 0
    over_figures: List[SpellOver] = []


class PhaseWindowStats(CamelModel):
    team: str
    innings: int = 1
    phase: MatchPhase
    overs: int = 0
    total_balls: int = 0
    runs: int = 0
    wickets: int = 0
    boundaries: int = 0
    sixes: int = 0
    dot_balls: int = 0
    run_rate: float = 0.0
    dot_ball_percentage: float = 0.0
    boundary_percentage: float = 0.0


# ============================================
# INSIGHTS / SUMMARY
# ============================================

class Insight(CamelModel):
    type: InsightType
    title: str
    description: str
    details: str = ""


class MatchSummary(CamelModel):
    teams: List[str] = []
    venue: Optional[str] = None
    date: Optional[str] = None
    match_type: str = "Unknown"
    result: str = ""
    player_of_match: Optional[str] = None
    team_stats: List[TeamStats] = []


class AnalyticsReport(CamelModel):
    """Every derived view of one match."""
    match_id: Optional[str] = None
    summary: MatchSummary
    top_batsmen: List[BattingStats] = []
    top_bowlers: List[BowlingStats] = []
    team_stats: List[TeamStats] = []
    extras: List[ExtrasBreakdown] = []
    partnerships: List[Partnership] = []
    fall_of_wickets: List[InningsFallOfWickets] = []
    wicket_analysis: WicketAnalysis
    boundary_analysis: BoundaryAnalysis
    progression: List[InningsProgression] = []
    momentum: Dict[str, List[MomentumPoint]] = {}  # keyed by preset name
    over_momentum: List[OverMomentum] = []
    key_events: List[KeyEvent] = []
    bowling_spells: List[BowlingSpell] = []
    phases: List[PhaseWindowStats] = []
    insights: List[Insight] = []
