"""Shared request dependencies and helpers for the v1 endpoints."""

import time
from typing import Callable, Optional, TypeVar

from fastapi import HTTPException, Request

from match_analytics.engine.analyzer import MatchAnalyzer
from match_analytics.logging_config import api_logger, generate_request_id
from match_analytics.schemas.record import Match
from match_analytics.store.match_store import MatchNotFoundError, MatchRecordError, MatchStore

T = TypeVar("T")


def get_match_store(request: Request) -> MatchStore:
    """The store created at startup and kept on the application state."""
    return request.app.state.match_store


def load_match_or_raise(store: MatchStore, match_id: str) -> Match:
    """Load a record, mapping store errors to HTTP errors."""
    try:
        return store.load_match(match_id)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MatchRecordError as e:
        raise HTTPException(status_code=422, detail=str(e))


def run_analysis(
    view: str,
    match: Match,
    query: Callable[[MatchAnalyzer], T],
    request_id: Optional[str] = None,
) -> T:
    """
    Run one analyzer query and log it as an analytics event.

    Invalid arguments (bad innings, preset, phase or limit) become 400s;
    anything else unexpected is logged and becomes a 500.
    """
    request_id = request_id or generate_request_id()
    start_time = time.time()

    analyzer = MatchAnalyzer(match)

    try:
        result = query(analyzer)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        api_logger.log_analytics_event(
            event_type=f"{view}_error",
            data={"match_id": match.match_id, "error": str(e)},
            request_id=request_id,
        )
        raise HTTPException(status_code=500, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    api_logger.log_analytics_event(
        event_type=view,
        data={
            "match_id": match.match_id,
            "teams": match.info.teams,
            "innings_count": len(match.innings),
            "duration_ms": round(duration_ms, 2),
        },
        request_id=request_id,
    )
    return result
