"""Shared fixtures for the analytics test suite."""

import json

import pytest
from factories import create_sample_record

from match_analytics.engine.analyzer import MatchAnalyzer
from match_analytics.engine.params import AnalyticsParams
from match_analytics.schemas.record import Match
from match_analytics.store.cache import TTLCache
from match_analytics.store.match_store import MatchStore


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def params() -> AnalyticsParams:
    """Parameters loaded from the shipped YAML file."""
    return AnalyticsParams()


@pytest.fixture
def sample_match() -> Match:
    return Match.model_validate({**create_sample_record(), "match_id": "sample"})


@pytest.fixture
def analyzer(sample_match, params) -> MatchAnalyzer:
    return MatchAnalyzer(sample_match, params)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with three records of different types and years."""
    record = create_sample_record()

    t20 = dict(record)
    (tmp_path / "1001.json").write_text(json.dumps(t20))

    odi = json.loads(json.dumps(record))
    odi["info"]["match_type"] = "ODI"
    odi["info"]["dates"] = ["2023-11-19"]
    (tmp_path / "1002.json").write_text(json.dumps(odi))

    later = json.loads(json.dumps(record))
    later["info"]["dates"] = ["2024-06-29", "2024-06-30"]
    later["info"]["outcome"] = {"result": "no result"}
    (tmp_path / "1003.json").write_text(json.dumps(later))

    return tmp_path


@pytest.fixture
def store(data_dir, clock) -> MatchStore:
    return MatchStore(data_dir, TTLCache(600, clock=clock), max_page_size=50)
