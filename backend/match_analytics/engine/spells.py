"""
Bowling spell analyzer.

Each over is attributed to its main bowler, the bowler of its first
delivery, and all of that over's figures are credited to them. A bowler's
attributed overs form their spell for the innings, classified into a match
phase by where it starts and ends.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from match_analytics.engine.accumulators import AccumulatorMap, is_boundary_four, is_dot_ball, is_six
from match_analytics.engine.params import AnalyticsParams, get_analytics_params
from match_analytics.schemas.common import MatchPhase
from match_analytics.schemas.record import Innings
from match_analytics.schemas.stats import BowlingSpell, SpellOver

BALLS_PER_OVER = 6


@dataclass
class _SpellFigures:
    runs: int = 0
    balls: int = 0
    wickets: int = 0
    dot_balls: int = 0
    boundaries: int = 0
    maidens: int = 0
    over_figures: List[SpellOver] = field(default_factory=list)


def cricket_overs(balls: int) -> float:
    """Balls as conventional X.Y overs, e.g. 14 balls -> 2.2."""
    return balls // BALLS_PER_OVER + (balls % BALLS_PER_OVER) / 10


class BowlingSpellAnalyzer:
    """Per-innings bowling spells, ranked by wickets then economy."""

    def __init__(self, params: Optional[AnalyticsParams] = None):
        section = (params or get_analytics_params()).section("spell_phases")
        self.powerplay_first_over_max = section.get("powerplay_first_over_max", 6)
        self.powerplay_last_over_max = section.get("powerplay_last_over_max", 10)
        self.death_over_min = section.get("death_over_min", 16)
        self.min_balls = section.get("min_balls", 6)

    def classify(self, first_over: int, last_over: int) -> MatchPhase:
        """Phase of a spell from its first and last attributed (1-based) overs."""
        if first_over <= self.powerplay_first_over_max and last_over <= self.powerplay_last_over_max:
            return MatchPhase.POWERPLAY
        if last_over >= self.death_over_min or first_over >= self.death_over_min:
            return MatchPhase.DEATH
        return MatchPhase.MIDDLE

    def analyze_innings(self, innings_number: int, innings: Innings) -> List[BowlingSpell]:
        """Spells of one innings, in order of each bowler's first over."""
        bowlers: AccumulatorMap[_SpellFigures] = AccumulatorMap(lambda _: _SpellFigures())

        for over in innings.overs:
            if not over.deliveries:
                continue

            figures = bowlers.get_or_create(over.deliveries[0].bowler)
            spell_over = SpellOver(over=over.display_number)

            for delivery in over.deliveries:
                spell_over.runs += delivery.runs.total
                spell_over.wickets += len(delivery.wickets)
                spell_over.balls += 1
                if is_dot_ball(delivery):
                    figures.dot_balls += 1
                if is_boundary_four(delivery) or is_six(delivery):
                    figures.boundaries += 1

            figures.runs += spell_over.runs
            figures.wickets += spell_over.wickets
            figures.balls += spell_over.balls
            if spell_over.runs == 0:
                figures.maidens += 1
            figures.over_figures.append(spell_over)

        spells = []
        for bowler, figures in bowlers.items():
            if figures.balls < self.min_balls:
                continue

            overs = cricket_overs(figures.balls)
            first_over = figures.over_figures[0].over
            last_over = figures.over_figures[-1].over
            spells.append(BowlingSpell(
                bowler=bowler,
                team=innings.team,
                innings=innings_number,
                overs=overs,
                balls=figures.balls,
                runs=figures.runs,
                wickets=figures.wickets,
                economy=figures.runs / overs if overs > 0 else 0.0,
                start_over=first_over,
                end_over=last_over,
                phase=self.classify(first_over, last_over),
                dot_balls=figures.dot_balls,
                boundaries=figures.boundaries,
                maidens=figures.maidens,
                over_figures=figures.over_figures,
            ))

        return spells

    def analyze(self, innings: Sequence[Tuple[int, Innings]]) -> List[BowlingSpell]:
        """Spells across the given innings: most wickets first, then cheapest."""
        spells: List[BowlingSpell] = []
        for innings_number, inns in innings:
            spells.extend(self.analyze_innings(innings_number, inns))
        return sorted(spells, key=lambda s: (-s.wickets, s.economy))
