"""Structured logging configuration for analytics and debugging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

# Extra attributes copied from a LogRecord into the JSON payload
EXTRA_FIELDS = (
    "request_id",
    "endpoint",
    "method",
    "status_code",
    "duration_ms",
    "payload",
    "response",
    "error",
    "match_id",
    "innings",
    "over",
    "position",
    "path",
)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging - easy to parse for analytics."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, default=str)


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a `cricket.<name>` logger writing structured JSON to stdout."""
    logger = logging.getLogger(f"cricket.{name}")
    logger.setLevel(level)

    # Only add handler if not already present
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

    return logger


class APILogger:
    """Dedicated logger for API request/response logging with analytics-ready format."""

    def __init__(self, name: str = "api"):
        self.logger = get_logger(name)

    def log_request(
        self,
        request_id: str,
        endpoint: str,
        method: str,
        payload: Optional[dict] = None,
    ) -> None:
        """Log incoming API request with payload."""
        extra = {
            "request_id": request_id,
            "endpoint": endpoint,
            "method": method,
            "payload": payload,
        }
        self.logger.info("API Request", extra=extra)

    def log_response(
        self,
        request_id: str,
        endpoint: str,
        status_code: int,
        duration_ms: float,
        response: Optional[dict] = None,
        error: Optional[str] = None,
    ) -> None:
        """Log API response with payload and timing."""
        extra = {
            "request_id": request_id,
            "endpoint": endpoint,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
        }

        # Include response summary for analytics (not full payload to avoid bloat)
        if response:
            extra["response"] = self._summarize_response(response)

        if error:
            extra["error"] = error
            self.logger.error("API Response", extra=extra)
        else:
            self.logger.info("API Response", extra=extra)

    def _summarize_response(self, response: dict) -> dict:
        """Create analytics-friendly summary of response."""
        summary = {}

        # Match listing
        if "pagination" in response:
            pagination = response["pagination"]
            summary["total"] = pagination.get("total")
            summary["page"] = pagination.get("page")
            summary["returned"] = len(response.get("matches", []))

        # Full analytics report
        if "summary" in response:
            match_summary = response["summary"] or {}
            summary["teams"] = match_summary.get("teams")
            summary["result"] = match_summary.get("result")

        if "teamStats" in response:
            summary["scores"] = [
                f"{team.get('totalRuns', 0)}/{team.get('totalWickets', 0)}"
                for team in response["teamStats"]
            ]

        if "insights" in response:
            summary["insight_count"] = len(response["insights"])

        return summary if summary else {"type": "other"}

    def log_analytics_event(
        self,
        event_type: str,
        data: dict,
        request_id: Optional[str] = None,
    ) -> None:
        """Log custom analytics event for future database storage."""
        extra = {
            "request_id": request_id or str(uuid4()),
            "endpoint": f"analytics/{event_type}",
            "method": "ANALYTICS",
            "payload": data,
        }
        self.logger.info(f"Analytics: {event_type}", extra=extra)


# Global logger instance
api_logger = APILogger()


def generate_request_id() -> str:
    """Generate unique request ID for tracing."""
    return str(uuid4())[:8]
