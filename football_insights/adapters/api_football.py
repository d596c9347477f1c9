from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from .. import settings
from ..config import API_MAX_RETRIES, API_TIMEOUT
from ..errors import ConfigurationError, NetworkError, UpstreamError
from ..logging_utils import warn_missing_api_key
from ..net_retry import get_with_retries
from ..ports.fixtures import Fixture, FixturesPort
from ..ports.standings import StandingEntry, StandingsPort
from ..ports.teams import Team, TeamMatch, TeamsPort, Venue

log = logging.getLogger(__name__)


def _safe_int(value: Any) -> Optional[int]:
    try:
        if value is None or isinstance(value, bool):
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _opt_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def flatten_errors(errors: Any) -> str:
    """Collapse API-Football's ``errors`` field into one readable message.

    Upstream sends a string, a list of strings, or an object whose values are
    strings or lists of strings. Empty containers mean "no error".
    """

    if not errors:
        return ""
    if isinstance(errors, str):
        return errors.strip()
    if isinstance(errors, dict):
        parts = []
        for field, value in errors.items():
            text = flatten_errors(value)
            if text:
                parts.append(f"{field}: {text}")
        return "; ".join(parts)
    if isinstance(errors, (list, tuple)):
        return "; ".join(text for text in (flatten_errors(item) for item in errors) if text)
    return str(errors)


def _map_team(raw: Dict[str, Any]) -> Team:
    return {
        "id": _safe_int(raw.get("id")),
        "name": raw.get("name") or "",
        "code": _opt_str(raw.get("code")),
        "country": _opt_str(raw.get("country")),
        "founded": _safe_int(raw.get("founded")),
        "national": bool(raw.get("national")),
        "logo": _opt_str(raw.get("logo")),
    }


def _map_venue(raw: Any) -> Optional[Venue]:
    if not isinstance(raw, dict) or not any(raw.get(k) is not None for k in ("id", "name", "city")):
        return None
    return {
        "id": _safe_int(raw.get("id")),
        "name": _opt_str(raw.get("name")),
        "address": _opt_str(raw.get("address")),
        "city": _opt_str(raw.get("city")),
        "capacity": _safe_int(raw.get("capacity")),
        "surface": _opt_str(raw.get("surface")),
        "image": _opt_str(raw.get("image")),
    }


def _map_side(raw: Dict[str, Any]) -> Dict[str, Any]:
    winner = raw.get("winner")
    return {
        "id": _safe_int(raw.get("id")),
        "name": raw.get("name") or "",
        "logo": _opt_str(raw.get("logo")),
        "winner": winner if isinstance(winner, bool) else None,
    }


def _map_fixture(row: Dict[str, Any]) -> Optional[Fixture]:
    fixture = _as_dict(row.get("fixture"))
    teams = _as_dict(row.get("teams"))
    home = _map_side(_as_dict(teams.get("home")))
    away = _map_side(_as_dict(teams.get("away")))
    fixture_id = _safe_int(fixture.get("id"))
    if fixture_id is None or home["id"] is None or away["id"] is None:
        return None

    status = _as_dict(fixture.get("status"))
    venue = _as_dict(fixture.get("venue"))
    league = _as_dict(row.get("league"))
    goals = _as_dict(row.get("goals"))

    return {
        "id": fixture_id,
        "date": fixture.get("date") or "",
        "timestamp": _safe_int(fixture.get("timestamp")),
        "status": {
            "long": _opt_str(status.get("long")),
            "short": _opt_str(status.get("short")),
            "elapsed": _safe_int(status.get("elapsed")),
        },
        "venue": {"name": _opt_str(venue.get("name")), "city": _opt_str(venue.get("city"))},
        "league": {
            "id": _safe_int(league.get("id")),
            "name": _opt_str(league.get("name")),
            "country": _opt_str(league.get("country")),
            "season": _safe_int(league.get("season")),
            "round": _opt_str(league.get("round")),
            "logo": _opt_str(league.get("logo")),
        },
        "home_team": home,
        "away_team": away,
        "home_goals": _safe_int(goals.get("home")),
        "away_goals": _safe_int(goals.get("away")),
    }


def _map_standing(row: Dict[str, Any], league: Dict[str, Any], season: int) -> Optional[StandingEntry]:
    team = _as_dict(row.get("team"))
    rank = _safe_int(row.get("rank"))
    team_id = _safe_int(team.get("id"))
    if rank is None or team_id is None:
        return None
    overall = _as_dict(row.get("all"))
    goals = _as_dict(overall.get("goals"))
    return {
        "rank": rank,
        "team": {"id": team_id, "name": team.get("name") or "", "logo": _opt_str(team.get("logo"))},
        "points": _safe_int(row.get("points")) or 0,
        "goals_diff": _safe_int(row.get("goalsDiff")) or 0,
        "form": _opt_str(row.get("form")),
        "description": _opt_str(row.get("description")),
        "group": _opt_str(row.get("group")),
        "played": _safe_int(overall.get("played")) or 0,
        "wins": _safe_int(overall.get("win")) or 0,
        "draws": _safe_int(overall.get("draw")) or 0,
        "losses": _safe_int(overall.get("lose")) or 0,
        "goals_for": _safe_int(goals.get("for")) or 0,
        "goals_against": _safe_int(goals.get("against")) or 0,
        "league": {
            "id": _safe_int(league.get("id")),
            "name": _opt_str(league.get("name")),
            "country": _opt_str(league.get("country")),
            "logo": _opt_str(league.get("logo")),
            "flag": _opt_str(league.get("flag")),
            "season": _safe_int(league.get("season")) or season,
        },
    }


class APIFootballAdapter(TeamsPort, FixturesPort, StandingsPort):
    """Thin client over API-Football v3 returning our typed records."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        host: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        session: Optional[Any] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.API_FOOTBALL_KEY
        self.base_url = (base_url or settings.API_FOOTBALL_URL).rstrip("/")
        self.host = host or settings.API_FOOTBALL_HOST
        self.timeout = float(timeout if timeout is not None else API_TIMEOUT)
        self.retries = int(retries if retries is not None else API_MAX_RETRIES)
        self.session = session

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            warn_missing_api_key(log)
            raise ConfigurationError(
                "API key is missing. Please set the API_FOOTBALL_KEY environment variable."
            )
        return {
            "x-apisports-key": self.api_key,
            "x-apisports-host": self.host,
        }

    def _get(self, path: str, params: Dict[str, Any], what: str) -> List[Any]:
        headers = self._headers()
        query = f"{path}?{urlencode(params)}"
        try:
            response = get_with_retries(
                f"{self.base_url}{path}",
                params=params,
                headers=headers,
                attempts=self.retries,
                timeout=self.timeout,
                session=self.session,
            )
        except requests.HTTPError as exc:
            raise self._upstream_error(exc.response, what, query) from exc
        except requests.RequestException as exc:
            log.warning("api_football_transport_err path=%s err=%s", path, type(exc).__name__)
            raise NetworkError(
                "Could not connect to the API. Check the internet connection and proxy settings.",
                details=type(exc).__name__,
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Failed to load {what}: malformed response", status=response.status_code
            ) from exc

        payload = _as_dict(payload)
        message = flatten_errors(payload.get("errors"))
        if message:
            log.warning("api_football_payload_errors query=%s errors=%s", query, message)
            raise UpstreamError(message, details=f"{what} ({query})")

        rows = payload.get("response")
        if not isinstance(rows, list):
            return []
        log.debug("api_football_ok path=%s rows=%d", path, len(rows))
        return rows

    @staticmethod
    def _upstream_error(response: Any, what: str, query: str) -> UpstreamError:
        status = getattr(response, "status_code", None)
        reason = getattr(response, "reason", None) or "error"
        message = ""
        try:
            body = response.json() if response is not None else None
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = flatten_errors(body.get("errors")) or _opt_str(body.get("message")) or ""
        log.warning("api_football_http_err what=%s status=%s", what, status)
        return UpstreamError(
            message or f"Failed to load {what}: {reason}",
            status=status,
            details=f"{what} ({query})",
        )

    # -------- TeamsPort --------
    def search_teams(self, query: str) -> List[TeamMatch]:
        rows = self._get("/teams", {"search": query}, "team search")
        matches: List[TeamMatch] = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            team = _map_team(_as_dict(row.get("team")))
            if team["id"] is None:
                continue
            matches.append({"team": team, "venue": _map_venue(row.get("venue"))})
        return matches

    def get_team_seasons(self, team_id: int) -> List[int]:
        rows = self._get("/teams/seasons", {"team": team_id}, "seasons")
        seasons = {season for season in (_safe_int(r) for r in rows) if season is not None}
        return sorted(seasons, reverse=True)

    # -------- FixturesPort --------
    def get_fixtures(
        self,
        team_id: int,
        *,
        season: Optional[int] = None,
        last: Optional[int] = None,
    ) -> List[Fixture]:
        if (season is None) == (last is None):
            raise ValueError("get_fixtures needs exactly one of season= or last=")
        params: Dict[str, Any] = {"team": team_id}
        if season is not None:
            params["season"] = season
            what = f"fixtures for season {season}"
        else:
            params["last"] = last
            what = "recent fixtures"
        rows = self._get("/fixtures", params, what)
        fixtures = [fx for fx in (_map_fixture(r) for r in rows if isinstance(r, dict)) if fx]
        if len(fixtures) != len(rows):
            log.info("api_football_fixtures_dropped team=%s kept=%d of=%d", team_id, len(fixtures), len(rows))
        return fixtures

    # -------- StandingsPort --------
    def get_standings(self, league_id: int, season: int) -> List[StandingEntry]:
        rows = self._get("/standings", {"league": league_id, "season": season}, "standings")
        if not rows or not isinstance(rows[0], dict):
            return []
        league = _as_dict(rows[0].get("league"))
        groups = league.get("standings") or []
        # Cup formats return several groups; the first one is the league table.
        table = groups[0] if groups and isinstance(groups[0], list) else []
        entries = [
            entry
            for entry in (_map_standing(r, league, season) for r in table if isinstance(r, dict))
            if entry
        ]
        return entries
