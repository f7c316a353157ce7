"""Tests for the HTTP endpoints."""

import pytest
from factories import create_sample_record
from fastapi.testclient import TestClient

from match_analytics.api.v1.dependencies import get_match_store
from match_analytics.main import app

API = "/api/v1"


@pytest.fixture
def client(store):
    """Test client serving the temporary data directory."""
    app.dependency_overrides[get_match_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestServiceEndpoints:
    """Tests for health and info endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Match Analytics API"


class TestMatchListing:
    """Tests for listing, filtering and refresh."""

    def test_list(self, client):
        """Test the paginated index with camelCase fields."""
        data = client.get(f"{API}/matches", params={"limit": 2}).json()

        assert [m["matchId"] for m in data["matches"]] == ["1003", "1001"]
        assert data["pagination"]["totalPages"] == 2
        assert data["pagination"]["hasNext"] is True
        assert data["availableMatchTypes"] == ["ODI", "T20"]

    def test_filter(self, client):
        data = client.get(f"{API}/matches", params={"match_type": "odi"}).json()

        assert [m["matchId"] for m in data["matches"]] == ["1002"]
        assert data["currentFilter"] == "odi"

    def test_bad_page(self, client):
        """Test that invalid paging is a client error."""
        assert client.get(f"{API}/matches", params={"page": 0}).status_code == 400
        assert client.get(f"{API}/matches", params={"limit": 500}).status_code == 400

    def test_refresh(self, client, data_dir):
        """Test that refresh picks up new files."""
        client.get(f"{API}/matches")
        (data_dir / "1004.json").write_text((data_dir / "1001.json").read_text())

        assert client.get(f"{API}/matches").json()["pagination"]["total"] == 3
        assert client.post(f"{API}/matches/refresh").json() == {"status": "refreshed"}
        assert client.get(f"{API}/matches").json()["pagination"]["total"] == 4


class TestMatchAnalytics:
    """Tests for per-match analytics views."""

    def test_record(self, client):
        data = client.get(f"{API}/matches/1001").json()

        assert data["match_id"] == "1001"
        assert data["info"]["teams"] == ["Lions", "Tigers"]

    def test_not_found(self, client):
        response = client.get(f"{API}/matches/9999/batting")

        assert response.status_code == 404
        assert "9999" in response.json()["detail"]

    def test_invalid_record(self, client, data_dir):
        (data_dir / "broken.json").write_text("{not json")

        assert client.get(f"{API}/matches/broken/summary").status_code == 422

    def test_summary(self, client):
        data = client.get(f"{API}/matches/1001/summary").json()

        assert data["result"] == "Lions won by 21 runs"
        assert data["playerOfMatch"] == "C"
        assert data["teamStats"][0]["totalRuns"] == 21

    def test_batting(self, client):
        """Test the leaderboard with limit and innings parameters."""
        data = client.get(f"{API}/matches/1001/batting", params={"limit": 2}).json()

        assert [b["name"] for b in data] == ["C", "A"]
        assert data[0]["strikeRate"] == pytest.approx(160.0)

        second = client.get(f"{API}/matches/1001/batting", params={"innings": 2}).json()
        assert [b["name"] for b in second] == ["D", "F"]

    def test_bad_arguments(self, client):
        """Test that engine argument errors become 400s."""
        assert client.get(f"{API}/matches/1001/batting", params={"innings": 3}).status_code == 400
        assert client.get(f"{API}/matches/1001/bowling", params={"limit": -1}).status_code == 400
        assert client.get(f"{API}/matches/1001/momentum", params={"preset": "wild"}).status_code == 400
        assert client.get(f"{API}/matches/1001/phases", params={"phase": "super_over"}).status_code == 400

    def test_momentum(self, client):
        weighted = client.get(f"{API}/matches/1001/momentum").json()
        micro = client.get(f"{API}/matches/1001/momentum", params={"preset": "micro"}).json()
        overs = client.get(f"{API}/matches/1001/momentum/overs").json()

        assert weighted[-1]["cumulative"] == pytest.approx(-4.5)
        assert micro[-1]["cumulative"] == pytest.approx(5)
        assert [o["netMomentumChange"] for o in overs] == pytest.approx([3, 7.5, -15])

    @pytest.mark.parametrize("view", [
        "bowling", "teams", "extras", "partnerships", "fall-of-wickets", "wickets",
        "boundaries", "progression", "key-events", "spells", "phases", "insights",
    ])
    def test_views(self, client, view):
        """Test every view responds for a valid record."""
        assert client.get(f"{API}/matches/1001/{view}").status_code == 200

    def test_report(self, client):
        data = client.get(f"{API}/matches/1001/report").json()

        assert data["matchId"] == "1001"
        assert set(data["momentum"]) == {"weighted", "micro"}
        assert len(data["bowlingSpells"]) == 3


class TestAnalyzeRecord:
    """Tests for analyzing a posted record."""

    def test_report_from_body(self, client):
        response = client.post(f"{API}/analytics/report", json=create_sample_record(), params={"limit": 1})

        assert response.status_code == 200
        data = response.json()
        assert len(data["topBatsmen"]) == 1
        assert data["summary"]["result"] == "Lions won by 21 runs"
        assert data["teamStats"][1]["totalWickets"] == 1

    def test_malformed_delivery_skipped(self, client):
        """Test that a delivery without a bowler is dropped rather than failing."""
        record = create_sample_record()
        del record["innings"][0]["overs"][0]["deliveries"][0]["bowler"]

        data = client.post(f"{API}/analytics/report", json=record).json()

        assert data["teamStats"][0]["totalRuns"] == 17
