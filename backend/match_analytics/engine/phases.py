"""Phase window analyzer: powerplay, middle and death over slices."""

from typing import List, Optional, Sequence, Tuple

from match_analytics.engine.accumulators import is_boundary_four, is_dot_ball, is_six, safe_ratio
from match_analytics.engine.params import AnalyticsParams, get_analytics_params
from match_analytics.schemas.common import MatchPhase
from match_analytics.schemas.record import Innings
from match_analytics.schemas.stats import PhaseWindowStats

PHASE_ORDER = (MatchPhase.POWERPLAY, MatchPhase.MIDDLE, MatchPhase.DEATH)
DEFAULT_POWERPLAY = (0, 6)
DEFAULT_DEATH_OVERS = 5
DEFAULT_INNINGS_OVERS = 20


class PhaseWindowAnalyzer:
    """Aggregate over windows of an innings.

    The powerplay is a leading slice and the death overs a trailing slice of
    the innings' scheduled length, with the middle overs between them. The
    scheduled length is the match's `overs` when known, otherwise the longer
    of the innings itself and a standard T20 innings, so a chase that ends
    early has an empty death window. Windows never overlap; a shortened
    innings yields fewer (or no) overs in a window.
    """

    def __init__(self, params: Optional[AnalyticsParams] = None):
        section = (params or get_analytics_params()).section("phase_windows")
        powerplay = section.get("powerplay") or {}
        self.powerplay_window: Tuple[int, int] = (
            powerplay.get("start", DEFAULT_POWERPLAY[0]),
            powerplay.get("end", DEFAULT_POWERPLAY[1]),
        )
        self.death_overs_count: int = section.get("death_overs", DEFAULT_DEATH_OVERS)
        self.default_innings_overs: int = section.get("default_innings_overs", DEFAULT_INNINGS_OVERS)

    def innings_length(self, innings: Innings, scheduled_overs: Optional[int] = None) -> int:
        if scheduled_overs:
            return scheduled_overs
        return max(len(innings.overs), self.default_innings_overs)

    def window(
        self,
        innings: Innings,
        phase: MatchPhase,
        scheduled_overs: Optional[int] = None,
    ) -> Tuple[int, int]:
        """0-based [start, end) over positions of a phase."""
        start, powerplay_end = self.powerplay_window
        if phase == MatchPhase.POWERPLAY:
            return start, powerplay_end

        length = self.innings_length(innings, scheduled_overs)
        death_start = max(powerplay_end, length - self.death_overs_count)
        if phase == MatchPhase.DEATH:
            return death_start, max(death_start, length)
        return powerplay_end, death_start

    def analyze_window(
        self,
        innings_number: int,
        innings: Innings,
        phase: MatchPhase,
        scheduled_overs: Optional[int] = None,
    ) -> PhaseWindowStats:
        phase = MatchPhase(phase)
        start, end = self.window(innings, phase, scheduled_overs)
        window = innings.overs[start:end]
        stats = PhaseWindowStats(team=innings.team, innings=innings_number, phase=phase, overs=len(window))

        for over in window:
            for delivery in over.deliveries:
                stats.runs += delivery.runs.total
                stats.total_balls += 1
                stats.wickets += len(delivery.wickets)
                if is_dot_ball(delivery):
                    stats.dot_balls += 1
                if is_boundary_four(delivery):
                    stats.boundaries += 1
                if is_six(delivery):
                    stats.sixes += 1

        stats.run_rate = safe_ratio(stats.runs, stats.total_balls, 6)
        stats.dot_ball_percentage = safe_ratio(stats.dot_balls, stats.total_balls, 100)
        stats.boundary_percentage = safe_ratio(stats.boundaries + stats.sixes, stats.total_balls, 100)
        return stats

    def analyze(
        self,
        innings: Sequence[Tuple[int, Innings]],
        phases: Optional[Sequence[MatchPhase]] = None,
        scheduled_overs: Optional[int] = None,
    ) -> List[PhaseWindowStats]:
        """One record per innings per phase, in innings then phase order."""
        phases = list(phases) if phases is not None else list(PHASE_ORDER)
        return [
            self.analyze_window(innings_number, inns, phase, scheduled_overs)
            for innings_number, inns in innings
            for phase in phases
        ]

    def powerplay(self, innings_number: int, innings: Innings) -> PhaseWindowStats:
        return self.analyze_window(innings_number, innings, MatchPhase.POWERPLAY)

    def death_overs(
        self,
        innings_number: int,
        innings: Innings,
        scheduled_overs: Optional[int] = None,
    ) -> PhaseWindowStats:
        return self.analyze_window(innings_number, innings, MatchPhase.DEATH, scheduled_overs)
