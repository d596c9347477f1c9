"""Throttled log lines for conditions that repeat on every request."""
from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Tuple

_LeagueKey = Tuple[str, int, int]


class LeagueSkipLog:
    """Logs a league left out of the leaderboard at most once per window.

    The throttle key is ``(reason, league_id, season)``, so a league that keeps
    failing is reported once while a different season or reason still logs.
    """

    def __init__(self, logger: logging.Logger, window_seconds: float = 300.0) -> None:
        self._logger = logger
        self._window = max(float(window_seconds), 0.0)
        self._last: Dict[_LeagueKey, float] = {}
        self._lock = threading.Lock()

    def _due(self, key: _LeagueKey) -> bool:
        now = time.monotonic()
        with self._lock:
            last = self._last.get(key)
            if last is not None and now - last < self._window:
                return False
            self._last[key] = now
            return True

    def failed(self, league_id: int, season: int, code: str, message: str) -> bool:
        if not self._due(("failed", league_id, season)):
            return False
        self._logger.warning(
            "top_teams_league_failed league=%s season=%s code=%s msg=%s",
            league_id,
            season,
            code,
            message,
        )
        return True

    def empty(self, league_id: int, season: int) -> bool:
        if not self._due(("empty", league_id, season)):
            return False
        self._logger.info("top_teams_league_empty league=%s season=%s", league_id, season)
        return True


_missing_key_lock = threading.Lock()
_missing_key_warned = False


def warn_missing_api_key(logger: logging.Logger) -> bool:
    """Warn about an unset API-Football key once per process."""

    global _missing_key_warned
    with _missing_key_lock:
        if _missing_key_warned:
            return False
        _missing_key_warned = True
    logger.warning("api_football_key_missing: set API_FOOTBALL_KEY or API_FOOTBALL_KEY_FILE")
    return True


def reset_missing_key_warning() -> None:
    """Test helper so the missing-key warning can fire again."""

    global _missing_key_warned
    with _missing_key_lock:
        _missing_key_warned = False
