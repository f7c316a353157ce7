"""Ball-by-ball match record schemas.

Immutable representation of a completed match as supplied by the record
source: match info plus innings -> overs -> deliveries. Optional nested
fields (extras, wickets, overs, innings) parse to ``None`` or an empty list,
and deliveries without a batter or bowler are dropped with a warning so one
corrupt entry never blanks out the rest of the match.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from match_analytics.logging_config import get_logger

logger = get_logger("records")


class RecordModel(BaseModel):
    """Frozen base for every record type; unknown keys are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


# ============================================
# DELIVERY LEVEL
# ============================================

class Runs(RecordModel):
    """Runs off one delivery. `total` may exceed batter + extras (penalty runs)."""
    batter: int = 0
    extras: int = 0
    total: int = 0


class Extras(RecordModel):
    """Breakdown of extras on one delivery."""
    wides: int = 0
    noballs: int = 0
    legbyes: int = 0
    byes: int = 0
    penalty: int = 0


class Fielder(RecordModel):
    name: Optional[str] = None


class Wicket(RecordModel):
    """A dismissal on a delivery."""
    player_out: Optional[str] = None
    kind: str = "unknown"
    fielders: List[Fielder] = []

    @field_validator("fielders", mode="before")
    @classmethod
    def _fielders_or_empty(cls, value: Any) -> Any:
        return value or []


class Delivery(RecordModel):
    """One bowled ball and its full outcome."""
    batter: str
    bowler: str
    non_striker: Optional[str] = None
    runs: Runs = Field(default_factory=Runs)
    extras: Optional[Extras] = None
    wickets: List[Wicket] = []

    @field_validator("runs", mode="before")
    @classmethod
    def _runs_or_zero(cls, value: Any) -> Any:
        return value if value is not None else {}

    @field_validator("wickets", mode="before")
    @classmethod
    def _wickets_or_empty(cls, value: Any) -> Any:
        return value or []

    @property
    def is_wicket(self) -> bool:
        return len(self.wickets) > 0


def _delivery_problem(raw: Any) -> Optional[str]:
    """Describe why a raw delivery cannot be attributed, or None if it can."""
    if isinstance(raw, Delivery):
        return None
    if not isinstance(raw, dict):
        return "not an object"
    for key in ("batter", "bowler"):
        value = raw.get(key)
        if not isinstance(value, str) or not value:
            return f"missing {key}"
    return None


def _drop_malformed(deliveries: Any, over: Any, innings: Optional[int] = None) -> Any:
    """Filter out raw deliveries that cannot be attributed, logging each one."""
    if not deliveries:
        return []
    if not isinstance(deliveries, list):
        return deliveries

    kept = []
    for position, raw in enumerate(deliveries):
        problem = _delivery_problem(raw)
        if problem:
            context = {"over": over, "position": position + 1}
            if innings is not None:
                context["innings"] = innings
            logger.warning(f"Skipping malformed delivery: {problem}", extra=context)
            continue
        kept.append(raw)
    return kept


def _drop_malformed_in_innings(raw: Any, innings: int) -> Any:
    """Copy of a raw innings with unattributable deliveries removed."""
    if not isinstance(raw, dict) or not isinstance(raw.get("overs"), list):
        return raw

    overs = []
    for raw_over in raw["overs"]:
        if isinstance(raw_over, dict) and raw_over.get("deliveries"):
            raw_over = {
                **raw_over,
                "deliveries": _drop_malformed(raw_over["deliveries"], raw_over.get("over"), innings),
            }
        overs.append(raw_over)
    return {**raw, "overs": overs}


# ============================================
# OVER / INNINGS / MATCH
# ============================================

class Over(RecordModel):
    """Deliveries bowled in one over (not necessarily six)."""
    over: int = 0  # 0-based in source data
    deliveries: List[Delivery] = []

    @field_validator("deliveries", mode="before")
    @classmethod
    def _attributable_only(cls, value: Any, info: ValidationInfo) -> Any:
        return _drop_malformed(value, info.data.get("over"))

    @property
    def display_number(self) -> int:
        """1-based over number shown to consumers."""
        return self.over + 1


class Innings(RecordModel):
    """One team's batting turn."""
    team: str = ""
    overs: List[Over] = []

    @field_validator("overs", mode="before")
    @classmethod
    def _overs_or_empty(cls, value: Any) -> Any:
        return value or []


class MatchBy(RecordModel):
    runs: Optional[int] = None
    wickets: Optional[int] = None
    innings: Optional[int] = None


class MatchOutcome(RecordModel):
    winner: Optional[str] = None
    by: Optional[MatchBy] = None
    method: Optional[str] = None
    result: Optional[str] = None  # "tie", "no result", "draw"


class Toss(RecordModel):
    decision: Optional[str] = None
    winner: Optional[str] = None


class MatchEvent(RecordModel):
    name: Optional[str] = None
    match_number: Optional[int] = None
    group: Optional[str] = None
    stage: Optional[str] = None


class MatchInfo(RecordModel):
    """Match metadata."""
    teams: List[str] = []
    venue: Optional[str] = None
    city: Optional[str] = None
    dates: List[str] = []
    match_type: str = "Unknown"
    gender: Optional[str] = None
    season: Optional[str] = None
    event: Optional[MatchEvent] = None
    outcome: MatchOutcome = Field(default_factory=MatchOutcome)
    toss: Optional[Toss] = None
    player_of_match: List[str] = []
    overs: Optional[int] = None
    balls_per_over: int = 6
    players: Dict[str, List[str]] = {}

    @field_validator("season", mode="before")
    @classmethod
    def _season_as_text(cls, value: Any) -> Any:
        # Seasons appear both as 2023 and "2023/24"
        return str(value) if value is not None else None

    @field_validator("event", mode="before")
    @classmethod
    def _event_as_object(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"name": value}
        return value

    @field_validator("match_type", mode="before")
    @classmethod
    def _match_type_or_unknown(cls, value: Any) -> Any:
        return value or "Unknown"

    @field_validator("outcome", mode="before")
    @classmethod
    def _outcome_or_empty(cls, value: Any) -> Any:
        return value if value is not None else {}

    @field_validator("teams", "dates", "player_of_match", mode="before")
    @classmethod
    def _list_or_empty(cls, value: Any) -> Any:
        return value or []


class MatchMeta(RecordModel):
    data_version: Optional[str] = None
    created: Optional[str] = None
    revision: Optional[int] = None


class Match(RecordModel):
    """A complete match record: metadata plus 1..N innings."""
    match_id: Optional[str] = None
    meta: Optional[MatchMeta] = None
    info: MatchInfo = Field(default_factory=MatchInfo)
    innings: List[Innings] = []

    @field_validator("innings", mode="before")
    @classmethod
    def _innings_with_attributable_deliveries(cls, value: Any) -> Any:
        if not value:
            return []
        if not isinstance(value, list):
            return value
        return [_drop_malformed_in_innings(raw, number) for number, raw in enumerate(value, start=1)]

    @classmethod
    def from_json(cls, data: Union[str, bytes], match_id: Optional[str] = None) -> "Match":
        """Parse a raw ball-by-ball JSON document."""
        match = cls.model_validate_json(data)
        if match_id is not None:
            match = match.model_copy(update={"match_id": match_id})
        return match
