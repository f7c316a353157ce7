"""Batting aggregator: per-player batting figures from the delivery stream."""

from typing import List, Optional, Sequence, Tuple

from match_analytics.engine.accumulators import (
    AccumulatorMap,
    is_boundary_four,
    is_six,
    iter_deliveries,
    safe_ratio,
    take,
)
from match_analytics.schemas.record import Innings
from match_analytics.schemas.stats import BattingStats


class BattingAggregator:
    """Fold deliveries into batting figures, ranked by runs."""

    def aggregate(
        self,
        innings: Sequence[Tuple[int, Innings]],
        limit: Optional[int] = None,
    ) -> List[BattingStats]:
        """
        Aggregate batting figures over the given innings.

        Every delivery a batter faces counts as a ball faced, wides included.
        A dismissal is credited to each wicket's `player_out`.

        Returns:
            Players sorted by runs descending (ties keep first-appearance order),
            truncated to `limit`
        """
        players: AccumulatorMap[BattingStats] = AccumulatorMap(lambda name: BattingStats(name=name))

        for _, inns in innings:
            for _, _, delivery in iter_deliveries(inns):
                stats = players.get_or_create(delivery.batter)
                stats.runs += delivery.runs.batter
                stats.balls += 1

                if is_boundary_four(delivery):
                    stats.boundaries += 1
                if is_six(delivery):
                    stats.sixes += 1

                for wicket in delivery.wickets:
                    if wicket.player_out:
                        players.get_or_create(wicket.player_out).dismissals += 1

        for stats in players.values():
            self._finalize(stats)

        ranked = sorted(players.values(), key=lambda s: s.runs, reverse=True)
        return take(ranked, limit)

    def _finalize(self, stats: BattingStats) -> None:
        stats.strike_rate = safe_ratio(stats.runs, stats.balls, 100)
        # Not-out players report their raw run total as the average
        stats.average = (
            stats.runs / stats.dismissals if stats.dismissals > 0 else float(stats.runs)
        )
