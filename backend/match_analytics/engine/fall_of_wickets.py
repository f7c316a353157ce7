"""Fall-of-wickets tracker."""

from typing import List

from match_analytics.engine.accumulators import iter_deliveries
from match_analytics.schemas.record import Innings
from match_analytics.schemas.stats import FallOfWicket, InningsFallOfWickets

BALLS_PER_OVER = 6


def over_ball_label(ball_count: int) -> str:
    """Label the n-th delivery (1-based) of an innings as "over.ball".

    Derived from the running delivery count, so overs with extra
    deliveries do not skew later labels.
    """
    over_number = (ball_count - 1) // BALLS_PER_OVER + 1
    ball_number = (ball_count - 1) % BALLS_PER_OVER + 1
    return f"{over_number}.{ball_number}"


class FallOfWicketsTracker:
    """Ordered wicket events with score and partnership context."""

    def track(self, innings_number: int, innings: Innings) -> InningsFallOfWickets:
        current_runs = 0
        ball_count = 0
        runs_at_last_wicket = 0
        wickets: List[FallOfWicket] = []

        for _, _, delivery in iter_deliveries(innings):
            current_runs += delivery.runs.total
            ball_count += 1

            for wicket in delivery.wickets:
                wickets.append(FallOfWicket(
                    wicket_number=len(wickets) + 1,
                    score_at_fall=current_runs,
                    over_ball=over_ball_label(ball_count),
                    player_out=wicket.player_out,
                    kind=wicket.kind,
                    partnership_runs=current_runs - runs_at_last_wicket,
                ))
                runs_at_last_wicket = current_runs

        return InningsFallOfWickets(team=innings.team, innings=innings_number, wickets=wickets)
