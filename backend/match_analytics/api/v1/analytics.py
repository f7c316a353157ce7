"""Analytics endpoints for records supplied by the caller."""

from typing import Optional

from fastapi import APIRouter, Query

from match_analytics.api.v1.dependencies import run_analysis
from match_analytics.config import get_settings
from match_analytics.logging_config import generate_request_id
from match_analytics.schemas.record import Match
from match_analytics.schemas.stats import AnalyticsReport

router = APIRouter()


@router.post("/report", response_model=AnalyticsReport)
async def analyze_record(
    record: Match,
    limit: Optional[int] = Query(None, description="Maximum players per leaderboard"),
):
    """
    Build the full analytics report for a ball-by-ball record in the body.

    The record is parsed the same way as files in the data directory:
    missing optional fields are treated as empty and deliveries without a
    batter or bowler are skipped.
    """
    if limit is None:
        limit = get_settings().default_top_limit

    return run_analysis(
        "report_built",
        record,
        lambda a: a.build_report(limit),
        request_id=generate_request_id(),
    )
