"""Match listing and per-match analytics endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from match_analytics.api.v1.dependencies import get_match_store, load_match_or_raise, run_analysis
from match_analytics.config import get_settings
from match_analytics.logging_config import api_logger, generate_request_id
from match_analytics.schemas.common import MomentumPreset
from match_analytics.schemas.matches import MatchListResponse
from match_analytics.schemas.record import Match
from match_analytics.schemas.stats import (
    AnalyticsReport,
    BattingStats,
    BoundaryAnalysis,
    BowlingSpell,
    BowlingStats,
    ExtrasBreakdown,
    InningsFallOfWickets,
    InningsProgression,
    Insight,
    KeyEvent,
    MatchSummary,
    MomentumPoint,
    OverMomentum,
    Partnership,
    PhaseWindowStats,
    TeamStats,
    WicketAnalysis,
)
from match_analytics.store.match_store import MatchStore

router = APIRouter()

INNINGS_QUERY = Query(None, ge=1, description="1-based innings number; all innings when omitted")
LIMIT_QUERY = Query(None, description="Maximum players to return")
PRESET_QUERY = Query(MomentumPreset.WEIGHTED.value, description="Momentum weight table: weighted or micro")


def _top_limit(limit: Optional[int]) -> int:
    return get_settings().default_top_limit if limit is None else limit


# ============================================
# LISTING
# ============================================

@router.get("", response_model=MatchListResponse)
async def list_matches(
    page: int = Query(1, description="1-based page number"),
    limit: Optional[int] = Query(None, description="Matches per page"),
    match_type: Optional[str] = Query(None, description="Filter by match type (case-insensitive)"),
    year: Optional[str] = Query(None, description="Filter by year of the first match date"),
    store: MatchStore = Depends(get_match_store),
):
    """
    List matches from the metadata index, latest first.

    The index is built from the data directory on first use and cached
    until it expires or is refreshed.
    """
    if limit is None:
        limit = get_settings().default_page_size

    try:
        return store.list_matches(page=page, limit=limit, match_type=match_type, year=year)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/refresh")
async def refresh_matches(store: MatchStore = Depends(get_match_store)):
    """Invalidate the cached index and records; the next request rebuilds them."""
    store.refresh()
    api_logger.log_analytics_event(
        event_type="match_cache_refreshed",
        data={"data_dir": str(store.data_dir)},
        request_id=generate_request_id(),
    )
    return {"status": "refreshed"}


@router.get("/{match_id}", response_model=Match)
async def get_match(match_id: str, store: MatchStore = Depends(get_match_store)):
    """The parsed ball-by-ball record."""
    return load_match_or_raise(store, match_id)


# ============================================
# ANALYTICS VIEWS
# ============================================

@router.get("/{match_id}/summary", response_model=MatchSummary)
async def get_summary(match_id: str, store: MatchStore = Depends(get_match_store)):
    match = load_match_or_raise(store, match_id)
    return run_analysis("match_summary", match, lambda a: a.get_match_summary())


@router.get("/{match_id}/batting", response_model=List[BattingStats])
async def get_batting(
    match_id: str,
    limit: Optional[int] = LIMIT_QUERY,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    """Top batters by runs."""
    match = load_match_or_raise(store, match_id)
    return run_analysis("batting", match, lambda a: a.get_top_batsmen(_top_limit(limit), innings))


@router.get("/{match_id}/bowling", response_model=List[BowlingStats])
async def get_bowling(
    match_id: str,
    limit: Optional[int] = LIMIT_QUERY,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    """Top bowlers by wickets."""
    match = load_match_or_raise(store, match_id)
    return run_analysis("bowling", match, lambda a: a.get_top_bowlers(_top_limit(limit), innings))


@router.get("/{match_id}/teams", response_model=List[TeamStats])
async def get_teams(
    match_id: str,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    match = load_match_or_raise(store, match_id)
    return run_analysis("team_stats", match, lambda a: a.get_team_stats(innings))


@router.get("/{match_id}/extras", response_model=List[ExtrasBreakdown])
async def get_extras(
    match_id: str,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    match = load_match_or_raise(store, match_id)
    return run_analysis("extras", match, lambda a: a.get_extras_breakdown(innings))


@router.get("/{match_id}/partnerships", response_model=List[Partnership])
async def get_partnerships(
    match_id: str,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    """Partnerships, largest first."""
    match = load_match_or_raise(store, match_id)
    return run_analysis("partnerships", match, lambda a: a.get_partnership_analysis(innings))


@router.get("/{match_id}/fall-of-wickets", response_model=List[InningsFallOfWickets])
async def get_fall_of_wickets(
    match_id: str,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    match = load_match_or_raise(store, match_id)
    return run_analysis("fall_of_wickets", match, lambda a: a.get_fall_of_wickets(innings))


@router.get("/{match_id}/wickets", response_model=WicketAnalysis)
async def get_wickets(
    match_id: str,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    match = load_match_or_raise(store, match_id)
    return run_analysis("wicket_analysis", match, lambda a: a.get_wicket_analysis(innings))


@router.get("/{match_id}/boundaries", response_model=BoundaryAnalysis)
async def get_boundaries(
    match_id: str,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    match = load_match_or_raise(store, match_id)
    return run_analysis("boundary_analysis", match, lambda a: a.get_boundary_analysis(innings))


@router.get("/{match_id}/progression", response_model=List[InningsProgression])
async def get_progression(
    match_id: str,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    """Over-by-over runs, wickets and run rate."""
    match = load_match_or_raise(store, match_id)
    return run_analysis("progression", match, lambda a: a.get_over_by_over_progression(innings))


@router.get("/{match_id}/momentum", response_model=List[MomentumPoint])
async def get_momentum(
    match_id: str,
    preset: str = PRESET_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    """Ball-by-ball momentum curve across the whole match."""
    match = load_match_or_raise(store, match_id)
    return run_analysis("momentum", match, lambda a: a.get_momentum_curve(MomentumPreset(preset)))


@router.get("/{match_id}/momentum/overs", response_model=List[OverMomentum])
async def get_over_momentum(
    match_id: str,
    preset: str = PRESET_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    """Momentum grouped by over with each over's key event."""
    match = load_match_or_raise(store, match_id)
    return run_analysis("over_momentum", match, lambda a: a.get_over_momentum(MomentumPreset(preset)))


@router.get("/{match_id}/key-events", response_model=List[KeyEvent])
async def get_key_events(match_id: str, store: MatchStore = Depends(get_match_store)):
    match = load_match_or_raise(store, match_id)
    return run_analysis("key_events", match, lambda a: a.get_key_events())


@router.get("/{match_id}/spells", response_model=List[BowlingSpell])
async def get_spells(
    match_id: str,
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    """Bowling spells, most wickets first then cheapest."""
    match = load_match_or_raise(store, match_id)
    return run_analysis("bowling_spells", match, lambda a: a.get_bowling_spells(innings))


@router.get("/{match_id}/phases", response_model=List[PhaseWindowStats])
async def get_phases(
    match_id: str,
    phase: Optional[str] = Query(None, description="powerplay, middle or death; all when omitted"),
    innings: Optional[int] = INNINGS_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    match = load_match_or_raise(store, match_id)
    return run_analysis("phases", match, lambda a: a.get_phase_analysis(phase, innings))


@router.get("/{match_id}/insights", response_model=List[Insight])
async def get_insights(match_id: str, store: MatchStore = Depends(get_match_store)):
    match = load_match_or_raise(store, match_id)
    return run_analysis("insights", match, lambda a: a.get_insights())


@router.get("/{match_id}/report", response_model=AnalyticsReport)
async def get_report(
    match_id: str,
    limit: Optional[int] = LIMIT_QUERY,
    store: MatchStore = Depends(get_match_store),
):
    """Every view of the match in one response."""
    match = load_match_or_raise(store, match_id)
    return run_analysis("report_built", match, lambda a: a.build_report(_top_limit(limit)))
