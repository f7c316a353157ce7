"""
Team-level aggregation.

Innings totals, extras breakdown, over-by-over progression and the
boundary and wicket analyses are all simple folds over one innings at a time.
"""

from typing import Dict, List, Sequence, Tuple

from match_analytics.engine.accumulators import is_boundary_four, is_six, iter_deliveries, safe_ratio
from match_analytics.schemas.record import Innings
from match_analytics.schemas.stats import (
    BoundaryAnalysis,
    ExtrasBreakdown,
    InningsProgression,
    OverBoundaries,
    OverProgression,
    TeamBoundaries,
    TeamStats,
    WicketAnalysis,
    WicketsByOver,
    WicketTypeCount,
)


class TeamAggregator:
    """Team totals and innings-shaped breakdowns."""

    def team_stats(self, innings_number: int, innings: Innings) -> TeamStats:
        """Fold one innings into team totals."""
        stats = TeamStats(team=innings.team, innings=innings_number)

        for _, _, delivery in iter_deliveries(innings):
            stats.total_runs += delivery.runs.total
            stats.total_wickets += len(delivery.wickets)
            stats.balls += 1
            if is_boundary_four(delivery):
                stats.boundaries += 1
            if is_six(delivery):
                stats.sixes += 1

        stats.total_overs = len(innings.overs)
        stats.run_rate = safe_ratio(stats.total_runs, stats.balls, 6)
        return stats

    def extras(self, innings_number: int, innings: Innings) -> ExtrasBreakdown:
        """Sum the per-delivery extras breakdown of one innings."""
        breakdown = ExtrasBreakdown(team=innings.team, innings=innings_number)

        for _, _, delivery in iter_deliveries(innings):
            if delivery.extras is None:
                continue
            breakdown.byes += delivery.extras.byes
            breakdown.leg_byes += delivery.extras.legbyes
            breakdown.wides += delivery.extras.wides
            breakdown.no_balls += delivery.extras.noballs
            breakdown.penalty += delivery.extras.penalty

        breakdown.total = (
            breakdown.byes
            + breakdown.leg_byes
            + breakdown.wides
            + breakdown.no_balls
            + breakdown.penalty
        )
        return breakdown

    def progression(self, innings_number: int, innings: Innings) -> InningsProgression:
        """Per-over runs and wickets with running totals."""
        total_runs = 0
        total_wickets = 0
        balls = 0
        overs: List[OverProgression] = []

        for over in innings.overs:
            over_runs = sum(d.runs.total for d in over.deliveries)
            over_wickets = sum(len(d.wickets) for d in over.deliveries)
            total_runs += over_runs
            total_wickets += over_wickets
            balls += len(over.deliveries)

            overs.append(OverProgression(
                over=over.display_number,
                runs=over_runs,
                total_runs=total_runs,
                wickets=over_wickets,
                total_wickets=total_wickets,
                run_rate=safe_ratio(total_runs, balls, 6),
            ))

        return InningsProgression(team=innings.team, innings=innings_number, progression=overs)

    def boundary_analysis(self, innings: Sequence[Tuple[int, Innings]]) -> BoundaryAnalysis:
        """Fours and sixes per innings and per over."""
        by_team: List[TeamBoundaries] = []
        total_runs = 0

        for innings_number, inns in innings:
            team = TeamBoundaries(team=inns.team, innings=innings_number)

            for over in inns.overs:
                fours = sum(1 for d in over.deliveries if is_boundary_four(d))
                sixes = sum(1 for d in over.deliveries if is_six(d))
                total_runs += sum(d.runs.total for d in over.deliveries)

                team.fours += fours
                team.sixes += sixes
                if fours or sixes:
                    team.over_boundaries.append(
                        OverBoundaries(over=over.display_number, fours=fours, sixes=sixes)
                    )

            team.total = team.fours + team.sixes
            by_team.append(team)

        total_fours = sum(t.fours for t in by_team)
        total_sixes = sum(t.sixes for t in by_team)
        return BoundaryAnalysis(
            by_team=by_team,
            total_fours=total_fours,
            total_sixes=total_sixes,
            boundary_run_percentage=safe_ratio(total_fours * 4 + total_sixes * 6, total_runs, 100),
        )

    def wicket_analysis(self, innings: Sequence[Tuple[int, Innings]]) -> WicketAnalysis:
        """Dismissal kinds and wickets per over number across the innings given."""
        kinds: Dict[str, int] = {}
        by_over: Dict[int, int] = {}

        for _, inns in innings:
            for over, _, delivery in iter_deliveries(inns):
                for wicket in delivery.wickets:
                    kinds[wicket.kind] = kinds.get(wicket.kind, 0) + 1
                    by_over[over.display_number] = by_over.get(over.display_number, 0) + 1

        return WicketAnalysis(
            wicket_types=[WicketTypeCount(name=k, value=v) for k, v in kinds.items()],
            wickets_by_over=[WicketsByOver(over=o, wickets=by_over[o]) for o in sorted(by_over)],
        )
