from typing import List, Optional, Tuple

from .config import DEFAULT_LIMIT_PER_LEAGUE, DEFAULT_TOP_TEAM_LEAGUES, setup_logger
from .constants import (
    DEFAULT_FILTER_MODE,
    FILTER_MODES,
    MAX_LIMIT_PER_LEAGUE,
    MAX_SEASON_YEAR,
    MIN_SEASON_YEAR,
    league_id_for,
)
from .errors import ValidationError
from .utils import collapse_whitespace

logger = setup_logger(__name__)


class ValidationWarning(str):
    """Lightweight tag for soft validation warnings."""
    pass


def validate_team_name(name: Optional[str]) -> str:
    """Trim/collapse spaces; the one hard failure since nothing can be searched without it."""
    n = collapse_whitespace(name)
    if not n:
        raise ValidationError("team", "Team name is required.")
    return n


def validate_filter_mode(raw: Optional[str]) -> Tuple[str, List[ValidationWarning]]:
    """Return (mode, warnings). Unknown modes soft-fail to the default."""
    if raw is None or not str(raw).strip():
        return DEFAULT_FILTER_MODE, []
    mode = str(raw).strip().lower()
    if mode in FILTER_MODES:
        return mode, []
    logger.warning("mode_unknown: %s", mode)
    return DEFAULT_FILTER_MODE, [ValidationWarning(f"mode_unknown:{mode}")]


def validate_season(raw: Optional[str]) -> Tuple[Optional[int], List[ValidationWarning]]:
    """Coerce to a season start year; None (caller decides) when missing or invalid."""
    if raw is None or not str(raw).strip():
        return None, []
    try:
        v = int(str(raw).strip())
    except ValueError:
        logger.warning("season_invalid: %s", raw)
        return None, [ValidationWarning("season_invalid")]
    if not MIN_SEASON_YEAR <= v <= MAX_SEASON_YEAR:
        logger.warning("season_out_of_range: %s", v)
        return None, [ValidationWarning("season_out_of_range")]
    return v, []


def validate_league_ids(raw: Optional[str]) -> Tuple[Tuple[int, ...], List[ValidationWarning]]:
    """Parse a comma list of league ids, codes or aliases. Soft-fails to the default leagues."""
    if raw is None or not str(raw).strip():
        return tuple(DEFAULT_TOP_TEAM_LEAGUES), []
    leagues: List[int] = []
    warnings: List[ValidationWarning] = []
    for tok in str(raw).split(","):
        tok = tok.strip()
        if not tok:
            continue
        league_id = league_id_for(tok)
        if league_id is None:
            logger.warning("league_unknown: %s", tok)
            warnings.append(ValidationWarning(f"league_unknown:{tok.upper()}"))
            continue
        if league_id not in leagues:
            leagues.append(league_id)
    if not leagues:
        warnings.append(ValidationWarning("leagues_defaulted"))
        return tuple(DEFAULT_TOP_TEAM_LEAGUES), warnings
    return tuple(leagues), warnings


def validate_limit(raw: Optional[str], default: int = DEFAULT_LIMIT_PER_LEAGUE, min_v: int = 1,
                   max_v: int = MAX_LIMIT_PER_LEAGUE):
    """Coerce to int and clamp to [min_v,max_v]. Return (value, warnings)."""
    if raw is None:
        return default, []
    try:
        v = int(raw)
    except (TypeError, ValueError):
        logger.warning("limit_invalid: %s", raw)
        return default, [ValidationWarning("limit_invalid")]
    if v < min_v:
        logger.warning("limit_floor: %s -> %s", v, min_v)
        return min_v, [ValidationWarning("limit_floor")]
    if v > max_v:
        logger.warning("limit_cap: %s -> %s", v, max_v)
        return max_v, [ValidationWarning("limit_cap")]
    return v, []
