"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MATCH_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # API
    api_v1_prefix: str = "/api/v1"
    debug: bool = True

    # CORS
    cors_origins: List[str] = [
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    config_dir: Path = base_dir / "config"
    analytics_params_path: Path = config_dir / "analytics_params.yaml"
    data_dir: Path = base_dir / "data"

    # Record source
    match_cache_ttl_seconds: float = 600.0  # 10 minutes
    default_page_size: int = 20
    max_page_size: int = 100

    # Analytics
    default_top_limit: int = 10
    insight_player_limit: int = 20


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
