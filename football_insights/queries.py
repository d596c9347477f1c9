"""Query layer: short-TTL result cache plus whole-query retry policy.

Results are memoized by their full input (team name + filter, or league set +
season + limit), so a superseded query can only ever fill its own cache slot.
Failures are never cached. The memoized functions need an app context;
routes get one per request, other callers use ``app.app_context()``.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Tuple, TypeVar

from flask_caching import Cache

from . import settings
from .composition.providers import football_adapter
from .config import DEFAULT_LIMIT_PER_LEAGUE, DEFAULT_TOP_TEAM_LEAGUES, setup_logger
from .errors import APIError
from .ports.standings import StandingEntry
from .services.team_insights import InsightsFilter, TeamInsights, TeamInsightsResolver
from .services.top_teams import TopTeamsAggregator

logger = setup_logger(__name__)

cache = Cache(
    config={
        "CACHE_TYPE": "SimpleCache",
        "CACHE_DEFAULT_TIMEOUT": settings.INSIGHTS_CACHE_SECONDS,
    }
)

_T = TypeVar("_T")


def run_with_retry(fn: Callable[[], _T], *, retries: int, context: str) -> _T:
    """Call ``fn``; re-run it up to ``retries`` times on retryable API errors."""

    attempt = 0
    while True:
        try:
            return fn()
        except APIError as exc:
            if not exc.retryable or attempt >= retries:
                raise
            attempt += 1
            logger.warning(
                "query_retry context=%s attempt=%d/%d code=%s msg=%s",
                context,
                attempt,
                retries,
                exc.code,
                exc.message,
            )


@cache.memoize(timeout=settings.INSIGHTS_CACHE_SECONDS)
def get_team_insights(team_name: str, mode: str = "recent", season: Optional[int] = None) -> TeamInsights:
    filters = InsightsFilter(mode=mode, season=season)
    resolver = TeamInsightsResolver(football_adapter())
    return run_with_retry(
        lambda: resolver.resolve(team_name, filters),
        retries=settings.INSIGHTS_QUERY_RETRIES,
        context=f"team_insights:{team_name}:{mode}:{season}",
    )


@cache.memoize(timeout=settings.TOP_TEAMS_CACHE_SECONDS)
def get_top_teams(
    league_ids: Tuple[int, ...] = tuple(DEFAULT_TOP_TEAM_LEAGUES),
    season: Optional[int] = None,
    limit_per_league: int = DEFAULT_LIMIT_PER_LEAGUE,
) -> List[StandingEntry]:
    aggregator = TopTeamsAggregator(football_adapter())
    return run_with_retry(
        lambda: aggregator.aggregate(tuple(league_ids), season, limit_per_league),
        retries=settings.TOP_TEAMS_QUERY_RETRIES,
        context=f"top_teams:{','.join(map(str, league_ids))}:{season}",
    )
