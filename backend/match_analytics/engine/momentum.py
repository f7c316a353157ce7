"""
Momentum scorer.

Assigns a signed weight to every delivery and keeps a running total across
the whole match (not reset between innings), so the curve of one innings
can be compared with the next.

Two weight tables are supported as named presets:
- weighted: wicket -10, six +7, four +5, two/three +3, single +1, dot -1,
  plus half the extras
- micro: same boundaries and wicket, two +3, single +1, dot 0, plus at
  least one for any extras

The first matching rule wins (wicket, six, four, two, three, single, dot);
the extras bonus is added on top of whichever base weight applied.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional, Tuple

from match_analytics.engine.params import AnalyticsParams, get_analytics_params
from match_analytics.schemas.common import (
    BoundaryType,
    ExtraType,
    KeyEventType,
    MomentumEvent,
    MomentumPreset,
)
from match_analytics.schemas.record import Delivery, Match
from match_analytics.schemas.stats import KeyEvent, MomentumPoint, OverMomentum


@dataclass(frozen=True)
class MomentumWeights:
    """One momentum weight table."""
    wicket: float = -10
    six: float = 7
    four: float = 5
    two: float = 3
    three: float = 3
    single: float = 1
    dot: float = -1
    other: float = 0
    extras_mode: str = "scaled"  # "scaled" or "at_least"
    extras_factor: float = 0.5
    extras_minimum: float = 1

    def with_overrides(self, values: Dict[str, Any]) -> "MomentumWeights":
        """Copy with any known keys from `values` replaced."""
        known = {f.name for f in fields(self)}
        return replace(self, **{k: v for k, v in values.items() if k in known})

    def base(self, delivery: Delivery) -> Tuple[MomentumEvent, float]:
        """Event label and base weight, first match wins."""
        runs = delivery.runs.batter

        if delivery.is_wicket:
            return MomentumEvent.WICKET, self.wicket
        if runs == 6:
            return MomentumEvent.SIX, self.six
        if runs == 4:
            return MomentumEvent.FOUR, self.four
        if runs == 2:
            return MomentumEvent.DOUBLE, self.two
        if runs == 3:
            return MomentumEvent.TRIPLE, self.three
        if runs == 1:
            return MomentumEvent.SINGLE, self.single
        if runs == 0:
            event = MomentumEvent.EXTRAS if delivery.runs.extras > 0 else MomentumEvent.DOT
            return event, self.dot
        return MomentumEvent.OTHER, self.other

    def extras_bonus(self, extras: int) -> float:
        if extras <= 0:
            return 0.0
        if self.extras_mode == "at_least":
            return max(self.extras_minimum, extras)
        return extras * self.extras_factor

    def score(self, delivery: Delivery) -> Tuple[MomentumEvent, float]:
        event, weight = self.base(delivery)
        return event, weight + self.extras_bonus(delivery.runs.extras)


DEFAULT_PRESETS: Dict[MomentumPreset, MomentumWeights] = {
    MomentumPreset.WEIGHTED: MomentumWeights(),
    MomentumPreset.MICRO: MomentumWeights(three=0, dot=0, extras_mode="at_least"),
}

EXTRA_LABELS = (
    (ExtraType.WIDE, "wide"),
    (ExtraType.BYE, "bye"),
    (ExtraType.LEGBYE, "leg-bye"),
    (ExtraType.NOBALL, "no-ball"),
    (ExtraType.PENALTY, "penalty"),
)


def describe_delivery(delivery: Delivery, event: MomentumEvent) -> str:
    """Short commentary line for a momentum point."""
    runs = delivery.runs.batter

    if event == MomentumEvent.WICKET:
        wicket = delivery.wickets[0]
        description = f"WICKET! {wicket.player_out} {wicket.kind}"
    elif event == MomentumEvent.SIX:
        description = f"SIX! {delivery.batter} clears the rope"
    elif event == MomentumEvent.FOUR:
        description = f"FOUR! {delivery.batter} finds the boundary"
    elif runs == 0:
        description = "Dot ball"
    else:
        description = f"{runs} run{'s' if runs > 1 else ''}"

    if delivery.runs.extras > 0 and delivery.extras is not None:
        kinds = [label for kind, label in EXTRA_LABELS if getattr(delivery.extras, kind.value)]
        if kinds:
            description += f" + {', '.join(kinds)}"

    return description


def boundary_type(delivery: Delivery) -> BoundaryType:
    if delivery.runs.batter == 6:
        return BoundaryType.SIX
    if delivery.runs.batter == 4:
        return BoundaryType.FOUR
    return BoundaryType.NONE


class MomentumScorer:
    """Ball-by-ball and per-over momentum for a whole match."""

    def __init__(self, params: Optional[AnalyticsParams] = None):
        self.params = params or get_analytics_params()

    def weights(self, preset: MomentumPreset) -> MomentumWeights:
        """Weight table for a preset, with any overrides from the parameter file."""
        preset = MomentumPreset(preset)
        overrides = self.params.section("momentum_presets").get(preset.value) or {}
        return DEFAULT_PRESETS[preset].with_overrides(overrides)

    def over_momentum(
        self,
        match: Match,
        preset: MomentumPreset = MomentumPreset.WEIGHTED,
    ) -> List[OverMomentum]:
        """Score every delivery and group the points by over."""
        weights = self.weights(preset)
        cumulative = 0.0
        overs: List[OverMomentum] = []

        for innings_number, innings in enumerate(match.innings, start=1):
            for over in innings.overs:
                start = cumulative
                points: List[MomentumPoint] = []

                for ball, delivery in enumerate(over.deliveries, start=1):
                    event, delta = weights.score(delivery)
                    cumulative += delta
                    points.append(MomentumPoint(
                        innings=innings_number,
                        team=innings.team,
                        over=over.display_number,
                        ball=ball,
                        event=event,
                        runs=delivery.runs.total,
                        delta=delta,
                        cumulative=cumulative,
                        is_wicket=delivery.is_wicket,
                        boundary_type=boundary_type(delivery),
                        batter=delivery.batter,
                        bowler=delivery.bowler,
                        extras=f"+{delivery.runs.extras}" if delivery.runs.extras > 0 else None,
                        description=describe_delivery(delivery, event),
                    ))

                # max() keeps the first of equal weights
                key_point = max(points, key=lambda p: abs(p.delta)) if points else None
                overs.append(OverMomentum(
                    innings=innings_number,
                    team=innings.team,
                    over_number=over.display_number,
                    start_momentum=start,
                    total_momentum=cumulative,
                    net_momentum_change=cumulative - start,
                    key_event=key_point.event if key_point else None,
                    points=points,
                ))

        return overs

    def curve(
        self,
        match: Match,
        preset: MomentumPreset = MomentumPreset.WEIGHTED,
    ) -> List[MomentumPoint]:
        """Flat list of momentum points in delivery order."""
        return [point for over in self.over_momentum(match, preset) for point in over.points]


class KeyEventDetector:
    """Timeline of notable moments: boundaries, wickets, big and maiden-wicket overs."""

    def __init__(self, params: Optional[AnalyticsParams] = None):
        section = (params or get_analytics_params()).section("key_events")
        self.six_impact = section.get("six_impact", 2)
        self.four_impact = section.get("four_impact", 1)
        self.big_over_runs = section.get("big_over_runs", 15)
        self.big_over_impact = section.get("big_over_impact", 2)
        self.maiden_wicket_impact = section.get("maiden_wicket_impact", -2)
        self.wicket_impact_bands = section.get("wicket_impact_bands") or [
            {"max_wickets": 3, "impact": -1},
            {"max_wickets": 6, "impact": -2},
        ]
        self.wicket_impact_default = section.get("wicket_impact_default", -3)

    def wicket_impact(self, wickets_down: int) -> int:
        for band in self.wicket_impact_bands:
            if wickets_down <= band["max_wickets"]:
                return band["impact"]
        return self.wicket_impact_default

    def detect(self, match: Match) -> List[KeyEvent]:
        events: List[KeyEvent] = []

        for innings_number, innings in enumerate(match.innings, start=1):
            runs = 0
            wickets = 0

            def add(over: int, ball: int, event: KeyEventType, impact: int, description: str) -> None:
                events.append(KeyEvent(
                    innings=innings_number,
                    team=innings.team,
                    over=over,
                    ball=ball,
                    event=event,
                    impact=impact,
                    description=description,
                    runs=runs,
                    wickets=wickets,
                ))

            for over in innings.overs:
                over_runs = 0
                over_wickets = 0

                for ball, delivery in enumerate(over.deliveries, start=1):
                    runs += delivery.runs.total
                    over_runs += delivery.runs.total

                    if delivery.runs.batter == 6:
                        add(over.display_number, ball, KeyEventType.SIX, self.six_impact,
                            f"{delivery.batter} hits a SIX!")
                    elif delivery.runs.batter == 4:
                        add(over.display_number, ball, KeyEventType.FOUR, self.four_impact,
                            f"{delivery.batter} hits a FOUR!")

                    for wicket in delivery.wickets:
                        wickets += 1
                        over_wickets += 1
                        add(over.display_number, ball, KeyEventType.WICKET, self.wicket_impact(wickets),
                            f"{wicket.player_out} out {wicket.kind}")

                last_ball = len(over.deliveries)
                if over_runs >= self.big_over_runs:
                    add(over.display_number, last_ball, KeyEventType.BIG_OVER, self.big_over_impact,
                        f"Massive over! {over_runs} runs scored")
                elif over_runs == 0 and over_wickets > 0:
                    add(over.display_number, last_ball, KeyEventType.MAIDEN_WICKET,
                        self.maiden_wicket_impact, "Maiden over with wicket!")

        return sorted(events, key=lambda e: (e.innings, e.over, e.ball))
