"""
Tests for the HTTP API.
"""

import pytest
import httpx
from fastapi.testclient import TestClient

from toptwo.main import app
from toptwo.api.dependencies import get_cache, get_source
from toptwo.core.cache import ScenarioCache
from toptwo.sources import DirectorySource


DEMO = """Winner,WPts,Loser,LPts
Alpha,21,Beta,14
Gamma,28,Delta,7
Alpha,,Gamma,
Beta,,Delta,
"""

ALPHA_GAMMA = "demo-2-Alpha-Gamma"
BETA_DELTA = "demo-3-Beta-Delta"


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "demo.csv").write_text(DEMO)
    return tmp_path


@pytest.fixture
def client(data_dir):
    """Test client reading schedules from a temporary directory."""
    cache = ScenarioCache()
    app.dependency_overrides[get_source] = lambda: DirectorySource(str(data_dir))
    app.dependency_overrides[get_cache] = lambda: cache
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestConferenceRoutes:
    """Tests for conference listing and standings."""

    def test_health(self, client):
        """Test health check."""
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_conferences(self, client):
        """Test the conference list summary."""
        response = client.get("/api/conferences")

        assert response.status_code == 200
        [demo] = response.json()
        assert demo["key"] == "demo"
        assert demo["display_name"] == "demo"
        assert demo["num_teams"] == 4
        assert demo["num_games"] == 4
        assert demo["num_unplayed"] == 2
        assert demo["rule_chain"] == ["A", "B", "C", "D"]

    def test_standings(self, client):
        """Test current standings count only played games."""
        response = client.get("/api/conferences/DEMO/standings")

        assert response.status_code == 200
        data = response.json()
        assert data["conference"] == "demo"
        assert {r["team"] for r in data["standings"][:2]} == {"Alpha", "Gamma"}
        assert [r["record"] for r in data["standings"]] == ["1-0", "1-0", "0-1", "0-1"]
        assert [g["id"] for g in data["unplayed_games"]] == [ALPHA_GAMMA, BETA_DELTA]

    def test_known_conference_display_name(self, client, data_dir):
        """Test bundled conference keys get their display name and rule chain."""
        (data_dir / "Big12.csv").write_text("Winner,WPts,Loser,LPts\nBaylor,,TCU,\n")
        response = client.get("/api/conferences")

        big12 = next(c for c in response.json() if c["key"] == "big12")
        assert big12["display_name"] == "Big 12"
        assert big12["rule_chain"] == ["A", "C", "B", "D"]

    def test_unknown_conference(self, client):
        """Test an unknown conference is a 404."""
        response = client.get("/api/conferences/nope/standings")

        assert response.status_code == 404

    def test_bad_schedule(self, client, data_dir):
        """Test an unparseable schedule is a 422."""
        (data_dir / "broken.csv").write_text("Winner,WPts,Loser,LPts\nA,x,B,1\n")
        response = client.get("/api/conferences/broken/standings")

        assert response.status_code == 422
        assert "row 2" in response.json()["detail"]


class TestScenarioRoutes:
    """Tests for scenario enumeration routes."""

    def test_summary(self, client):
        """Test scenario counts and top-two tallies."""
        response = client.get("/api/conferences/demo/scenarios")

        assert response.status_code == 200
        data = response.json()
        assert data["total_scenarios"] == 4
        assert data["unplayed_count"] == 2
        assert data["skipped"] is False
        assert data["cached"] is False
        assert data["scenarios"] is None
        assert sum(data["top_two_counts"].values()) == 8

    def test_second_call_cached(self, client):
        """Test the second request reuses the cached scenarios."""
        client.get("/api/conferences/demo/scenarios")
        response = client.get("/api/conferences/demo/scenarios")

        assert response.json()["cached"] is True

    def test_include_scenarios_with_limit(self, client):
        """Test scenarios are returned on request, up to the limit."""
        response = client.get("/api/conferences/demo/scenarios?include_scenarios=true&limit=2")

        scenarios = response.json()["scenarios"]
        assert len(scenarios) == 2
        assert scenarios[0]["game_results"] == [False, False]
        assert scenarios[1]["game_results"] == [True, False]
        assert len(scenarios[0]["standings"]) == 4

    def test_skipped_over_cap(self, client, monkeypatch):
        """Test enumeration above the cap is reported as skipped."""
        monkeypatch.setattr("toptwo.core.config.MAX_UNPLAYED", 1)
        response = client.get("/api/conferences/demo/scenarios")

        data = response.json()
        assert data["skipped"] is True
        assert data["total_scenarios"] == 0

    def test_clear_cache(self, client):
        """Test dropping cached scenarios."""
        client.get("/api/conferences/demo/scenarios")

        assert client.delete("/api/conferences/demo/cache").json()["cleared"] is True
        assert client.delete("/api/conferences/demo/cache").json()["cleared"] is False


class TestRequirementRoutes:
    """Tests for requirements routes."""

    def test_all_teams(self, client):
        """Test requirements for every team."""
        response = client.get("/api/conferences/demo/requirements")

        assert response.status_code == 200
        data = response.json()
        assert data["total_scenarios"] == 4
        assert [t["team"] for t in data["teams"]] == ["Alpha", "Beta", "Delta", "Gamma"]

    def test_one_team(self, client):
        """Test a single team's conditions and status."""
        response = client.get("/api/conferences/demo/teams/Alpha/requirements")

        assert response.status_code == 200
        data = response.json()
        assert data["team"] == "Alpha"
        assert data["status"] in ("clinched", "contending")
        assert data["can_finish_top_two"] is True
        for condition in data["sufficient_conditions"]:
            assert condition["scenario_count"] >= 1
            assert condition["outcomes"]

    def test_unknown_team(self, client):
        """Test an unknown team is a 404."""
        response = client.get("/api/conferences/demo/teams/Omega/requirements")

        assert response.status_code == 404


class TestWhatIfRoute:
    """Tests for the what-if route."""

    def test_partial_picks(self, client):
        """Test one pick narrows the scenarios by half."""
        response = client.post(
            "/api/conferences/demo/what-if",
            json={"picks": {ALPHA_GAMMA: "Alpha"}}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["matching_scenarios"] == 2
        assert data["all_picked"] is False
        assert data["final_standings"] is None
        assert data["top_two_counts"]["Alpha"] == 2

    def test_all_picked(self, client):
        """Test final standings once every game is picked."""
        response = client.post(
            "/api/conferences/demo/what-if",
            json={"picks": {ALPHA_GAMMA: "Alpha", BETA_DELTA: "Delta"}}
        )

        data = response.json()
        assert data["matching_scenarios"] == 1
        assert data["all_picked"] is True
        assert data["top_two"][0] == "Alpha"
        assert data["final_standings"][0]["record"] == "2-0"

    def test_fill_random(self, client):
        """Test random fill picks every remaining game."""
        response = client.post(
            "/api/conferences/demo/what-if",
            json={"picks": {ALPHA_GAMMA: "Gamma"}, "fill_random": True, "seed": 3}
        )

        data = response.json()
        assert data["all_picked"] is True
        assert data["picks"][ALPHA_GAMMA] == "Gamma"
        assert data["picks"][BETA_DELTA] in ("Beta", "Delta")
        assert data["matching_scenarios"] == 1

    def test_unknown_game(self, client):
        """Test a pick on an unknown game is a 400."""
        response = client.post("/api/conferences/demo/what-if", json={"picks": {"x": "Alpha"}})

        assert response.status_code == 400

    def test_wrong_winner(self, client):
        """Test a winner who isn't in the game is a 400."""
        response = client.post("/api/conferences/demo/what-if", json={"picks": {ALPHA_GAMMA: "Beta"}})

        assert response.status_code == 400
        assert "does not play" in response.json()["detail"]


class TestAsyncClient:
    """Tests through an async HTTP client."""

    @pytest.mark.asyncio
    async def test_root_and_scenarios(self, data_dir):
        """Test the API over httpx's ASGI transport."""
        cache = ScenarioCache()
        app.dependency_overrides[get_source] = lambda: DirectorySource(str(data_dir))
        app.dependency_overrides[get_cache] = lambda: cache
        try:
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
                root = await ac.get("/")
                scenarios = await ac.get("/api/conferences/demo/scenarios")
        finally:
            app.dependency_overrides.clear()

        assert root.json()["health"] == "/api/health"
        assert scenarios.status_code == 200
        assert scenarios.json()["total_scenarios"] == 4
