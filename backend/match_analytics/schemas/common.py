"""Common types and enums used across schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Match enums
class MatchPhase(str, Enum):
    POWERPLAY = "powerplay"
    MIDDLE = "middle"
    DEATH = "death"


class ExtraType(str, Enum):
    WIDE = "wides"
    NOBALL = "noballs"
    BYE = "byes"
    LEGBYE = "legbyes"
    PENALTY = "penalty"


class BoundaryType(str, Enum):
    NONE = "none"
    FOUR = "four"
    SIX = "six"


# Analytics enums
class MomentumPreset(str, Enum):
    """Named momentum weight tables."""
    WEIGHTED = "weighted"  # dot -1, extras add half their value
    MICRO = "micro"  # dot 0, extras add at least one


class MomentumEvent(str, Enum):
    WICKET = "wicket"
    SIX = "six"
    FOUR = "four"
    DOUBLE = "double"
    TRIPLE = "triple"
    SINGLE = "single"
    DOT = "dot"
    EXTRAS = "extras"
    OTHER = "other"


class KeyEventType(str, Enum):
    SIX = "six"
    FOUR = "four"
    WICKET = "wicket"
    BIG_OVER = "big_over"
    MAIDEN_WICKET = "maiden_wicket"


class InsightType(str, Enum):
    BATTING = "batting"
    BOWLING = "bowling"
    PARTNERSHIP = "partnership"
    MOMENTUM = "momentum"
    MATCH = "match"


class CamelModel(BaseModel):
    """Base for derived records: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
