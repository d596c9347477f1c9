"""Cross-league "top teams" leaderboard built from per-league standings."""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from .. import settings
from ..config import DEFAULT_LIMIT_PER_LEAGUE, DEFAULT_TOP_TEAM_LEAGUES, setup_logger
from ..errors import APIError, ConfigurationError
from ..logging_utils import LeagueSkipLog
from ..ports.standings import StandingEntry
from ..utils import get_current_season, map_ordered

logger = setup_logger(__name__)
_skip_log = LeagueSkipLog(logger)


def ranking_key(entry: StandingEntry) -> Tuple[int, int, int]:
    # points desc, goal difference desc, in-league rank asc
    return (-entry["points"], -entry["goals_diff"], entry["rank"])


def rank_entries(entries: Iterable[StandingEntry]) -> List[StandingEntry]:
    return sorted(entries, key=ranking_key)


class TopTeamsAggregator:
    def __init__(self, adapter, *, max_workers: Optional[int] = None) -> None:
        self.adapter = adapter
        self.max_workers = max_workers if max_workers is not None else settings.FETCH_MAX_WORKERS

    def _league_top(
        self, league_id: int, season: int, limit: int
    ) -> Tuple[List[StandingEntry], Optional[APIError]]:
        try:
            entries = self.adapter.get_standings(league_id, season)
        except ConfigurationError:
            raise
        except APIError as exc:
            if not exc.retryable:
                raise
            _skip_log.failed(league_id, season, exc.code, exc.message)
            return [], exc

        if not entries:
            _skip_log.empty(league_id, season)
            return [], None
        return list(entries[:limit]), None

    def aggregate(
        self,
        league_ids: Sequence[int] = DEFAULT_TOP_TEAM_LEAGUES,
        season: Optional[int] = None,
        limit_per_league: int = DEFAULT_LIMIT_PER_LEAGUE,
        *,
        today: Optional[date] = None,
    ) -> List[StandingEntry]:
        """Top ``limit_per_league`` rows of every league, ranked across leagues.

        Leagues without standings are skipped. A league that fails with a
        retryable error is omitted too, unless every league failed, in which
        case the last failure is raised.
        """

        season = season if season is not None else get_current_season(today)
        leagues = list(dict.fromkeys(league_ids))
        limit = max(0, int(limit_per_league))

        results = map_ordered(
            lambda league_id: self._league_top(league_id, season, limit),
            leagues,
            self.max_workers,
        )

        collected: List[StandingEntry] = []
        failures: List[APIError] = []
        for entries, error in results:
            collected.extend(entries)
            if error is not None:
                failures.append(error)

        if leagues and len(failures) == len(leagues):
            raise failures[-1]

        ranked = rank_entries(collected)
        logger.info(
            "top_teams_built season=%s leagues=%d failed=%d entries=%d",
            season,
            len(leagues),
            len(failures),
            len(ranked),
        )
        return ranked
