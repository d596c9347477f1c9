"""Team insights: resolve a team by name and derive its record for a filter."""
from __future__ import annotations

from dataclasses import dataclass
from itertools import chain
from typing import Dict, Iterable, List, Optional, TypedDict

from .. import settings
from ..config import RECENT_FIXTURES_LIMIT, setup_logger
from ..constants import DEFAULT_FILTER_MODE, FILTER_MODES
from ..errors import TeamNotFound, ValidationError
from ..ports.fixtures import Fixture
from ..ports.teams import Team, TeamMatch, Venue
from ..transliteration import contains_cyrillic, transliterate
from ..utils import collapse_whitespace, map_ordered, parse_iso_datetime

logger = setup_logger(__name__)


@dataclass(frozen=True)
class InsightsFilter:
    """Which fixtures feed the record: ``recent``, one ``season``, or ``all`` seasons."""

    mode: str = DEFAULT_FILTER_MODE
    season: Optional[int] = None

    def __post_init__(self) -> None:
        if self.mode not in FILTER_MODES:
            raise ValidationError("mode", f"Unknown filter mode: {self.mode}")


class Record(TypedDict):
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int


class AppliedFilter(TypedDict):
    mode: str
    season: Optional[int]            # season actually used, None for recent/all
    requested_season: Optional[int]
    season_overridden: bool
    matches_count: int


class TeamInsights(TypedDict):
    team: Team
    venue: Optional[Venue]
    fixtures: List[Fixture]
    record: Record
    filters: AppliedFilter
    available_seasons: List[int]


def derive_record(fixtures: Iterable[Fixture], team_id: int) -> Record:
    """Win/draw/loss and goal totals for ``team_id``; unplayed goals count as 0."""

    record: Record = {"wins": 0, "draws": 0, "losses": 0, "goals_for": 0, "goals_against": 0}
    for fixture in fixtures:
        home_goals = fixture["home_goals"] or 0
        away_goals = fixture["away_goals"] or 0
        if fixture["home_team"]["id"] == team_id:
            scored, conceded = home_goals, away_goals
        else:
            scored, conceded = away_goals, home_goals

        if scored > conceded:
            record["wins"] += 1
        elif scored == conceded:
            record["draws"] += 1
        else:
            record["losses"] += 1
        record["goals_for"] += scored
        record["goals_against"] += conceded
    return record


def sort_fixtures_desc(fixtures: Iterable[Fixture]) -> List[Fixture]:
    return sorted(fixtures, key=lambda fx: parse_iso_datetime(fx.get("date")), reverse=True)


class TeamInsightsResolver:
    def __init__(self, adapter, *, max_workers: Optional[int] = None) -> None:
        self.adapter = adapter
        self.max_workers = max_workers if max_workers is not None else settings.FETCH_MAX_WORKERS

    def find_team(self, team_name: str) -> TeamMatch:
        """First search hit for the name, retrying once with a Latin spelling of Cyrillic input."""

        query = collapse_whitespace(team_name)
        if not query:
            raise ValidationError("team", "Team name is required.")

        matches = self.adapter.search_teams(query)
        if not matches and contains_cyrillic(query):
            latin = transliterate(query)
            logger.info("team_search_transliterated query=%r latin=%r", query, latin)
            matches = self.adapter.search_teams(latin)

        if not matches:
            logger.info("team_not_found query=%r", query)
            raise TeamNotFound(query)
        return matches[0]

    def discover_seasons(self, team_id: int) -> Dict[int, List[Fixture]]:
        """Fixtures per season, newest season first, empty seasons dropped."""

        seasons = sorted(set(self.adapter.get_team_seasons(team_id)), reverse=True)
        per_season = map_ordered(
            lambda year: self.adapter.get_fixtures(team_id, season=year),
            seasons,
            self.max_workers,
        )
        by_season = {year: list(fixtures) for year, fixtures in zip(seasons, per_season) if fixtures}
        logger.info(
            "team_seasons_discovered team=%s seasons=%d non_empty=%d",
            team_id,
            len(seasons),
            len(by_season),
        )
        return by_season

    def _recent(self, team_id: int) -> List[Fixture]:
        return self.adapter.get_fixtures(team_id, last=RECENT_FIXTURES_LIMIT)

    def resolve(self, team_name: str, filters: Optional[InsightsFilter] = None) -> TeamInsights:
        filters = filters or InsightsFilter()
        match = self.find_team(team_name)
        team = match["team"]
        team_id = team["id"]

        by_season = self.discover_seasons(team_id)
        available = list(by_season)
        applied_season: Optional[int] = None

        if filters.mode == "season" and available:
            if filters.season in by_season:
                applied_season = filters.season
            else:
                applied_season = available[0]
            fixtures = by_season[applied_season]
        elif filters.mode == "all" and available:
            fixtures = sort_fixtures_desc(chain.from_iterable(by_season.values()))
        else:
            # "recent", or a season/all request for a team with no fixture history
            fixtures = self._recent(team_id)

        overridden = (
            filters.mode == "season"
            and filters.season is not None
            and applied_season != filters.season
        )
        if overridden:
            logger.info(
                "season_fallback team=%s requested=%s applied=%s",
                team_id,
                filters.season,
                applied_season,
            )

        return {
            "team": team,
            "venue": match.get("venue"),
            "fixtures": fixtures,
            "record": derive_record(fixtures, team_id),
            "filters": {
                "mode": filters.mode,
                "season": applied_season,
                "requested_season": filters.season,
                "season_overridden": overridden,
                "matches_count": len(fixtures),
            },
            "available_seasons": available,
        }
