"""FastAPI application entry point."""

import json
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from match_analytics.api.v1.router import api_router
from match_analytics.config import Settings, get_settings
from match_analytics.logging_config import api_logger, generate_request_id
from match_analytics.store.cache import TTLCache
from match_analytics.store.match_store import MatchStore

VERSION = "0.1.0"

settings = get_settings()

app = FastAPI(
    title="Match Analytics API",
    description="Ball-by-ball cricket match analytics - batting, bowling, partnerships, momentum and spells",
    version=VERSION,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


def create_match_store(settings: Settings) -> MatchStore:
    """Record source over the configured data directory with its own cache."""
    return MatchStore(
        data_dir=settings.data_dir,
        cache=TTLCache(settings.match_cache_ttl_seconds),
        max_page_size=settings.max_page_size,
    )


app.state.match_store = create_match_store(settings)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all API requests and responses with payloads."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Skip logging for health checks and docs
        if request.url.path in ("/health", "/", "/docs", "/redoc", "/openapi.json"):
            return await call_next(request)

        request_id = generate_request_id()
        start_time = time.time()

        # Only log a small summary of posted records; they can be megabytes
        payload = None
        if request.method == "POST":
            try:
                body = await request.body()
                if body:
                    record = json.loads(body)
                    info = record.get("info") or {}
                    payload = {
                        "teams": info.get("teams"),
                        "innings": len(record.get("innings") or []),
                        "bytes": len(body),
                    }
            except (ValueError, AttributeError):
                payload = {"_error": "Could not parse request body"}

        api_logger.log_request(
            request_id=request_id,
            endpoint=request.url.path,
            method=request.method,
            payload=payload,
        )

        try:
            response = await call_next(request)
            duration_ms = (time.time() - start_time) * 1000

            api_logger.log_response(
                request_id=request_id,
                endpoint=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

            return response

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            api_logger.log_response(
                request_id=request_id,
                endpoint=request.url.path,
                status_code=500,
                duration_ms=duration_ms,
                error=str(e),
            )
            raise


# Add logging middleware first (outermost)
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Match Analytics API",
        "version": VERSION,
        "docs": "/docs" if settings.debug else "disabled",
    }
