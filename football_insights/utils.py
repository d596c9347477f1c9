"""
Utility functions for Football Insights
Shared helper functions used across multiple modules
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, Optional

from .config import SEASON_START_MONTH


_MIN_DT = datetime.min.replace(tzinfo=timezone.utc)


def get_current_season(today: Optional[date] = None) -> int:
    """
    Determine current season START YEAR for API-Football.

    API-Football names a season by its start year (2025-2026 season = 2025).
    Seasons are treated as running July to June:
    - July-December: Return current year (e.g., Oct 2025 -> 2025)
    - January-June: Return previous year (e.g., Mar 2026 -> 2025)

    Args:
        today: Reference date (defaults to now)

    Returns:
        int: Current season START YEAR
    """
    now = today or datetime.now()
    return now.year if now.month >= SEASON_START_MONTH else now.year - 1


def parse_iso_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime; unparsable values sort last."""

    if not isinstance(value, str) or not value:
        return _MIN_DT
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _MIN_DT
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def collapse_whitespace(value: Optional[str]) -> str:
    return " ".join(str(value or "").split())


def map_ordered(fn: Callable[[Any], Any], items: Iterable[Any], max_workers: int = 1) -> list:
    """Apply ``fn`` to each item, optionally on a thread pool; results keep input order.

    The first exception (in input order) propagates.
    """

    values = list(items)
    if max_workers <= 1 or len(values) <= 1:
        return [fn(value) for value in values]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(values))) as pool:
        return list(pool.map(fn, values))
