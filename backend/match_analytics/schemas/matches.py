"""Match listing schemas for the record source."""

from typing import Any, Dict, List, Optional

from match_analytics.schemas.common import CamelModel


class MatchMetadata(CamelModel):
    """Index entry for one record file; built without running the engine."""
    match_id: str
    filename: str
    match_type: str = "Unknown"
    date: str = ""
    year: str = ""
    teams: List[str] = []
    venue: Optional[str] = None
    city: Optional[str] = None
    event: Optional[str] = None
    season: Optional[str] = None
    outcome: Optional[Dict[str, Any]] = None
    file_size: int = 0
    last_modified: float = 0.0  # epoch seconds


class MatchIndex(CamelModel):
    metadata: List[MatchMetadata] = []  # latest date first
    match_types: List[str] = []
    years: List[str] = []  # newest first
    total_count: int = 0
    last_updated: float = 0.0


class Pagination(CamelModel):
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False


class MatchListResponse(CamelModel):
    matches: List[MatchMetadata] = []
    pagination: Pagination
    available_match_types: List[str] = []
    available_years: List[str] = []
    current_filter: str = "all"
    current_year: str = "all"
