"""
Analytics parameters.

Loads tunable thresholds and weight tables from YAML. Consumers read each key
with a default, so a missing section (or a missing file) falls back to the
standard values.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from match_analytics.config import get_settings
from match_analytics.logging_config import get_logger

logger = get_logger("params")


class AnalyticsParams:
    """Read-only view over the analytics parameter file."""

    def __init__(self, params_path: Optional[Path] = None, params: Optional[Dict[str, Any]] = None):
        if params is None:
            if params_path is None:
                params_path = get_settings().analytics_params_path
            params = self._load(Path(params_path))

        self.params = params

    @staticmethod
    def _load(params_path: Path) -> Dict[str, Any]:
        if not params_path.is_file():
            logger.warning(
                "Analytics parameter file not found, using built-in defaults",
                extra={"path": str(params_path)},
            )
            return {}

        with open(params_path) as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "AnalyticsParams":
        """Build parameters directly, bypassing the YAML file."""
        return cls(params=params)

    def section(self, name: str) -> Dict[str, Any]:
        """Get one top-level section, empty if absent."""
        return self.params.get(name) or {}


@lru_cache
def get_analytics_params() -> AnalyticsParams:
    """Get cached analytics parameters."""
    return AnalyticsParams()
