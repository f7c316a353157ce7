"""
Insight summarizer.

Turns the outputs of the other aggregators into human-readable highlights.
Works purely on those outputs; nothing here walks deliveries.
"""

from typing import List, Optional

from match_analytics.engine.params import AnalyticsParams, get_analytics_params
from match_analytics.schemas.common import InsightType
from match_analytics.schemas.stats import (
    BattingStats,
    BoundaryAnalysis,
    BowlingSpell,
    BowlingStats,
    Insight,
    OverMomentum,
    Partnership,
    TeamStats,
)


def _names_with(players, value) -> str:
    return ", ".join(f"{p.name} ({value(p)})" for p in players)


class InsightSummarizer:
    """Select threshold-crossing facts and phrase them as insights."""

    def __init__(self, params: Optional[AnalyticsParams] = None):
        self.thresholds = (params or get_analytics_params()).section("insights")

    def _t(self, key: str, default: float) -> float:
        return self.thresholds.get(key, default)

    def summarize(
        self,
        batsmen: List[BattingStats],
        bowlers: List[BowlingStats],
        team_stats: List[TeamStats],
        partnerships: List[Partnership],
        spells: List[BowlingSpell],
        over_momentum: List[OverMomentum],
        boundaries: Optional[BoundaryAnalysis] = None,
    ) -> List[Insight]:
        """Build insights in a fixed order: batting, bowling, partnerships, momentum, match."""
        insights: List[Insight] = []
        insights.extend(self.batting_insights(batsmen))
        insights.extend(self.bowling_insights(bowlers, spells))
        insights.extend(self.partnership_insights(partnerships))
        insights.extend(self.momentum_insights(over_momentum))
        insights.extend(self.match_insights(team_stats, boundaries))
        return insights

    def batting_insights(self, batsmen: List[BattingStats]) -> List[Insight]:
        insights = []

        explosive = [b for b in batsmen if b.strike_rate > self._t("explosive_strike_rate", 150)]
        if explosive:
            fastest = max(explosive, key=lambda b: b.strike_rate)
            insights.append(Insight(
                type=InsightType.BATTING,
                title="Explosive Batting",
                description=(
                    f"{len(explosive)} player(s) maintained a strike rate above "
                    f"{self._t('explosive_strike_rate', 150):g}"
                ),
                details=f"Highest: {fastest.name} ({fastest.strike_rate:.1f})",
            ))

        ducks = [b for b in batsmen if b.runs == 0 and b.balls > 0 and b.dismissals > 0]
        if ducks:
            insights.append(Insight(
                type=InsightType.BATTING,
                title="Duck Alert",
                description=f"{len(ducks)} player(s) got out for a duck",
                details=", ".join(d.name for d in ducks),
            ))

        century = self._t("century", 100)
        half_century = self._t("half_century", 50)
        centuries = [b for b in batsmen if b.runs >= century]
        half_centuries = [b for b in batsmen if half_century <= b.runs < century]

        if centuries:
            insights.append(Insight(
                type=InsightType.BATTING,
                title="Century Makers",
                description=f"{len(centuries)} century(ies) scored in this match",
                details=_names_with(centuries, lambda b: b.runs),
            ))
        if half_centuries:
            insights.append(Insight(
                type=InsightType.BATTING,
                title="Half Century Club",
                description=f"{len(half_centuries)} half-century(ies) scored",
                details=_names_with(half_centuries, lambda b: b.runs),
            ))

        return insights

    def bowling_insights(self, bowlers: List[BowlingStats], spells: List[BowlingSpell]) -> List[Insight]:
        insights = []

        five_fors = [b for b in bowlers if b.wickets >= self._t("five_wicket_haul", 5)]
        if five_fors:
            insights.append(Insight(
                type=InsightType.BOWLING,
                title="Five-for Achieved",
                description=f"{len(five_fors)} bowler(s) took 5+ wickets",
                details=", ".join(f"{b.name} ({b.wickets}/{b.runs})" for b in five_fors),
            ))

        economical = [
            b for b in bowlers
            if b.economy < self._t("economical_economy", 4) and b.overs >= self._t("economical_min_overs", 3)
        ]
        if economical:
            best = min(economical, key=lambda b: b.economy)
            insights.append(Insight(
                type=InsightType.BOWLING,
                title="Economical Bowling",
                description=(
                    f"{len(economical)} bowler(s) with economy under "
                    f"{self._t('economical_economy', 4):.1f}"
                ),
                details=f"Best: {best.name} ({best.economy:.2f})",
            ))

        expensive = [
            b for b in bowlers
            if b.economy > self._t("expensive_economy", 10) and b.overs >= self._t("expensive_min_overs", 2)
        ]
        if expensive:
            worst = max(expensive, key=lambda b: b.economy)
            insights.append(Insight(
                type=InsightType.BOWLING,
                title="Expensive Spells",
                description=(
                    f"{len(expensive)} bowler(s) conceded "
                    f"{self._t('expensive_economy', 10):g}+ runs per over"
                ),
                details=f"Most expensive: {worst.name} ({worst.economy:.2f})",
            ))

        # Spells arrive ranked by wickets, then economy
        if spells and spells[0].wickets >= self._t("spell_min_wickets", 3):
            spell = spells[0]
            insights.append(Insight(
                type=InsightType.BOWLING,
                title="Spell of the Match",
                description=f"{spell.bowler} took {spell.wickets}/{spell.runs} in {spell.overs:g} overs",
                details=f"{spell.phase.value.capitalize()} spell, economy {spell.economy:.2f}",
            ))

        return insights

    def partnership_insights(self, partnerships: List[Partnership]) -> List[Insight]:
        insights = []
        century = self._t("partnership_century", 100)
        fifty = self._t("partnership_fifty", 50)

        def pair(p: Partnership) -> str:
            return " & ".join(name for name in p.batters if name)

        big = [p for p in partnerships if p.runs >= century]
        solid = [p for p in partnerships if fifty <= p.runs < century]

        if big:
            insights.append(Insight(
                type=InsightType.PARTNERSHIP,
                title="Century Stand",
                description=f"{len(big)} partnership(s) of {century:g}+ runs",
                details=", ".join(f"{pair(p)} ({p.runs} off {p.balls})" for p in big),
            ))
        if solid:
            insights.append(Insight(
                type=InsightType.PARTNERSHIP,
                title="Fifty Partnerships",
                description=f"{len(solid)} partnership(s) of {fifty:g}+ runs",
                details=", ".join(f"{pair(p)} ({p.runs} off {p.balls})" for p in solid),
            ))

        return insights

    def momentum_insights(self, over_momentum: List[OverMomentum]) -> List[Insight]:
        if not over_momentum:
            return []

        swing = max(over_momentum, key=lambda o: abs(o.net_momentum_change))
        if abs(swing.net_momentum_change) < self._t("momentum_swing", 15):
            return []

        direction = "batting" if swing.net_momentum_change > 0 else "bowling"
        return [Insight(
            type=InsightType.MOMENTUM,
            title="Biggest Momentum Swing",
            description=f"Over {swing.over_number} of {swing.team}'s innings swung {swing.net_momentum_change:+g}",
            details=f"Momentum shifted to the {direction} side",
        )]

    def match_insights(
        self,
        team_stats: List[TeamStats],
        boundaries: Optional[BoundaryAnalysis] = None,
    ) -> List[Insight]:
        insights = []

        if len(team_stats) >= 2:
            margin = abs(team_stats[0].total_runs - team_stats[1].total_runs)
            if margin < self._t("close_margin", 10):
                insights.append(Insight(
                    type=InsightType.MATCH,
                    title="Nail-biting Finish",
                    description=f"Innings totals separated by just {margin} runs",
                    details="One of the closest contests you'll ever see!",
                ))
            elif margin > self._t("dominant_margin", 100):
                insights.append(Insight(
                    type=InsightType.MATCH,
                    title="Dominant Performance",
                    description=f"Innings totals separated by {margin} runs",
                    details="A comprehensive victory!",
                ))

        if boundaries is not None:
            count = boundaries.total_fours + boundaries.total_sixes
            if count > self._t("boundary_bonanza", 20):
                insights.append(Insight(
                    type=InsightType.MATCH,
                    title="Boundary Bonanza",
                    description=(
                        f"{count} boundaries hit ({boundaries.total_fours} fours, "
                        f"{boundaries.total_sixes} sixes)"
                    ),
                    details=f"{boundaries.boundary_run_percentage:.1f}% of runs came from boundaries",
                ))

        return insights
