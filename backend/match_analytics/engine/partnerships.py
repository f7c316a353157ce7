"""
Partnership tracker.

A small state machine over one innings' deliveries that segments them into
batting partnerships:

- the first delivery seeds the pair from its batter and non-striker
- every delivery adds its total runs and one ball to the open partnership
- a striker outside the tracked pair (a wicket the data never recorded)
  closes the partnership, kept only if it is big enough, and re-seeds the pair
- a wicket always closes the partnership; the surviving batter opens the
  next one and the incoming batter is filled in from the next delivery
- at the end of the innings the open partnership is kept if big enough
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from match_analytics.engine.accumulators import is_boundary_four, is_six, iter_deliveries, safe_ratio
from match_analytics.engine.params import AnalyticsParams, get_analytics_params
from match_analytics.schemas.record import Delivery, Innings
from match_analytics.schemas.stats import Partnership


@dataclass
class _OpenPartnership:
    """Running state of the current pair."""
    batter1: Optional[str] = None
    batter2: Optional[str] = None
    runs: int = 0
    balls: int = 0
    boundaries: int = 0
    sixes: int = 0

    @property
    def pair(self) -> Tuple[Optional[str], Optional[str]]:
        return self.batter1, self.batter2


@dataclass
class _TrackerState:
    team: str
    innings: int
    current: _OpenPartnership = field(default_factory=_OpenPartnership)
    closed: int = 0
    emitted: List[Partnership] = field(default_factory=list)


class PartnershipTracker:
    """Split innings into partnerships."""

    def __init__(self, params: Optional[AnalyticsParams] = None):
        section = (params or get_analytics_params()).section("partnerships")
        self.min_runs_exclusive = section.get("min_runs_exclusive", 0)
        self.min_balls_exclusive = section.get("min_balls_exclusive", 5)

    def track(self, innings_number: int, innings: Innings) -> List[Partnership]:
        """Partnerships of one innings in the order they were formed."""
        state = _TrackerState(team=innings.team, innings=innings_number)

        for _, _, delivery in iter_deliveries(innings):
            self._seat_batters(state, delivery)

            current = state.current
            current.runs += delivery.runs.total
            current.balls += 1
            if is_boundary_four(delivery):
                current.boundaries += 1
            if is_six(delivery):
                current.sixes += 1

            if delivery.is_wicket:
                survivor = self._survivor(delivery)
                self._close(state, ended_by_wicket=True)
                state.current = _OpenPartnership(batter1=survivor)

        if self._is_substantial(state.current):
            self._close(state, ended_by_wicket=False)

        return state.emitted

    def track_all(self, innings: Sequence[Tuple[int, Innings]]) -> List[Partnership]:
        """Partnerships of several innings, largest first."""
        partnerships: List[Partnership] = []
        for innings_number, inns in innings:
            partnerships.extend(self.track(innings_number, inns))
        return sorted(partnerships, key=lambda p: p.runs, reverse=True)

    def _seat_batters(self, state: _TrackerState, delivery: Delivery) -> None:
        """Resolve the pair for this delivery before its runs are added."""
        current = state.current
        striker, non_striker = delivery.batter, delivery.non_striker

        if current.batter1 is None:
            current.batter1, current.batter2 = striker, non_striker
            return

        if current.batter2 is None:
            # Incoming batter after a wicket
            if striker == current.batter1:
                current.batter2 = non_striker
                return
            if non_striker == current.batter1:
                current.batter2 = striker
                return
            # Survivor not at the crease either: take the pair as given
            current.batter1, current.batter2 = striker, non_striker
            return

        if striker not in current.pair:
            if self._is_substantial(current):
                self._close(state, ended_by_wicket=False)
            else:
                state.closed += 1
            state.current = _OpenPartnership(batter1=striker, batter2=non_striker)

    def _survivor(self, delivery: Delivery) -> Optional[str]:
        """Batter left at the crease after the wicket(s) on this delivery."""
        out = {w.player_out for w in delivery.wickets}
        if delivery.non_striker is not None and delivery.non_striker not in out:
            return delivery.non_striker
        if delivery.batter not in out:
            return delivery.batter
        return delivery.non_striker

    def _is_substantial(self, current: _OpenPartnership) -> bool:
        return current.runs > self.min_runs_exclusive or current.balls > self.min_balls_exclusive

    def _close(self, state: _TrackerState, ended_by_wicket: bool) -> None:
        current = state.current
        state.closed += 1
        state.emitted.append(Partnership(
            team=state.team,
            innings=state.innings,
            batters=[current.batter1, current.batter2],
            runs=current.runs,
            balls=current.balls,
            wicket_index=state.closed,
            run_rate=safe_ratio(current.runs, current.balls, 6),
            boundaries=current.boundaries,
            sixes=current.sixes,
            ended_by_wicket=ended_by_wicket,
        ))
