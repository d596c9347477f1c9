import pytest

from football_insights import app as app_module
from football_insights.app import app
from football_insights.errors import ConfigurationError, NetworkError, TeamNotFound, UpstreamError


@pytest.fixture
def client():
    app.testing = True
    with app.test_client() as client:
        yield client


SAMPLE_INSIGHTS = {
    "team": {"id": 596, "name": "Zenit"},
    "venue": None,
    "fixtures": [],
    "record": {"wins": 0, "draws": 0, "losses": 0, "goals_for": 0, "goals_against": 0},
    "filters": {"mode": "season", "season": 2023, "requested_season": 2022,
                "season_overridden": True, "matches_count": 0},
    "available_seasons": [2023],
}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["message"] == "OK"
    data = payload["data"]
    assert data["ok"] is True
    assert "ts" in data


def test_insights_passes_validated_arguments(client, monkeypatch):
    calls = []

    def fake_get(team_name, mode, season):
        calls.append((team_name, mode, season))
        return SAMPLE_INSIGHTS

    monkeypatch.setattr(app_module, "get_team_insights", fake_get)

    response = client.get("/api/teams/insights?team=%20Zenit%20&mode=season&season=2022")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["data"]["filters"]["season_overridden"] is True
    assert "warnings" not in payload
    assert calls == [("Zenit", "season", 2022)]


def test_insights_reports_soft_warnings(client, monkeypatch):
    monkeypatch.setattr(app_module, "get_team_insights", lambda *a: SAMPLE_INSIGHTS)

    response = client.get("/api/teams/insights?team=Zenit&mode=weekly&season=abc")

    payload = response.get_json()
    assert payload["warnings"] == ["mode_unknown:weekly", "season_invalid"]


def test_insights_requires_team(client):
    response = client.get("/api/teams/insights")

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["status"] == "error"
    assert payload["error"]["field"] == "team"


@pytest.mark.parametrize(
    "error, status, code",
    [
        (TeamNotFound("Unknown FC XYZ"), 404, "NOT_FOUND"),
        (ConfigurationError("API key is missing."), 500, "CONFIG"),
        (NetworkError("Could not connect"), 503, "NETWORK"),
        (UpstreamError("Too many requests", status=429), 502, "429"),
    ],
)
def test_insights_error_statuses(client, monkeypatch, error, status, code):
    def fake_get(*_args):
        raise error

    monkeypatch.setattr(app_module, "get_team_insights", fake_get)

    response = client.get("/api/teams/insights?team=Unknown%20FC%20XYZ")

    assert response.status_code == status
    payload = response.get_json()
    assert payload["status"] == "error"
    assert payload["message"] == error.message
    assert payload["error"]["code"] == code


def test_top_teams_defaults(client, monkeypatch):
    calls = []

    def fake_top(leagues, season, limit):
        calls.append((leagues, season, limit))
        return [{"rank": 1, "team": {"id": 40, "name": "Liverpool"}, "points": 84}]

    monkeypatch.setattr(app_module, "get_top_teams", fake_top)

    response = client.get("/api/top-teams")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["count"] == 1
    assert calls == [((39, 140, 135, 78, 61), None, 6)]


def test_top_teams_parses_query(client, monkeypatch):
    calls = []
    monkeypatch.setattr(
        app_module, "get_top_teams", lambda *args: calls.append(args) or []
    )

    response = client.get("/api/top-teams?leagues=PL,235,bogus&season=2023&limit=3")

    assert response.status_code == 200
    assert calls == [((39, 235), 2023, 3)]
    assert response.get_json()["warnings"] == ["league_unknown:BOGUS"]


def test_top_teams_upstream_failure(client, monkeypatch):
    def fake_top(*_args):
        raise NetworkError("Could not connect")

    monkeypatch.setattr(app_module, "get_top_teams", fake_top)

    response = client.get("/api/top-teams")

    assert response.status_code == 503
