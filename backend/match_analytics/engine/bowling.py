"""Bowling aggregator: per-player bowling figures from the delivery stream."""

from typing import Dict, List, Optional, Sequence, Set, Tuple

from match_analytics.engine.accumulators import AccumulatorMap, iter_deliveries, safe_ratio, take
from match_analytics.schemas.record import Innings
from match_analytics.schemas.stats import BowlingStats


class BowlingAggregator:
    """Fold deliveries into bowling figures, ranked by wickets."""

    def aggregate(
        self,
        innings: Sequence[Tuple[int, Innings]],
        limit: Optional[int] = None,
    ) -> List[BowlingStats]:
        """
        Aggregate bowling figures over the given innings.

        Runs conceded are the delivery totals (extras included) and every
        wicket entry on a delivery counts for its bowler. Overs are the
        number of distinct overs the bowler delivered at least one ball in,
        so a bowler replaced mid-over is credited with that over too.

        Returns:
            Bowlers sorted by wickets descending (stable), truncated to `limit`
        """
        bowlers: AccumulatorMap[BowlingStats] = AccumulatorMap(lambda name: BowlingStats(name=name))
        overs_bowled: Dict[str, Set[Tuple[int, int]]] = {}

        for innings_number, inns in innings:
            for over, _, delivery in iter_deliveries(inns):
                stats = bowlers.get_or_create(delivery.bowler)
                stats.runs += delivery.runs.total
                stats.balls += 1
                stats.extras += delivery.runs.extras
                stats.wickets += len(delivery.wickets)

                overs_bowled.setdefault(delivery.bowler, set()).add((innings_number, over.over))

        for name, stats in bowlers.items():
            stats.overs = len(overs_bowled.get(name, ()))
            stats.economy = safe_ratio(stats.runs, stats.balls, 6)
            stats.average = safe_ratio(stats.runs, stats.wickets)

        ranked = sorted(bowlers.values(), key=lambda s: s.wickets, reverse=True)
        return take(ranked, limit)
