"""API v1 router combining all endpoints."""

from fastapi import APIRouter

from match_analytics.api.v1 import analytics, matches

api_router = APIRouter()

api_router.include_router(matches.router, prefix="/matches", tags=["Matches"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
