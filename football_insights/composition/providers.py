from __future__ import annotations

from .. import settings
from ..adapters.api_football import APIFootballAdapter


def football_adapter() -> APIFootballAdapter:
    """
    Return the API-Football adapter wired from current settings.
    Built per query so a changed key/endpoint is picked up without a restart.
    """
    return APIFootballAdapter(
        api_key=settings.API_FOOTBALL_KEY,
        base_url=settings.API_FOOTBALL_URL,
        host=settings.API_FOOTBALL_HOST,
    )
