"""Centralized configuration constants for the Football Insights service."""

# ---- API-Football league IDs ----
# Stable internal codes -> API-Football numeric league IDs.
LEAGUE_ID_MAP = {
    "PL": 39,      # Premier League
    "PD": 140,     # La Liga
    "SA": 135,     # Serie A
    "BL1": 78,     # Bundesliga
    "FL1": 61,     # Ligue 1
    "CL": 2,       # Champions League
    "EL": 3,       # Europa League
    "RPL": 235,    # Russian Premier League
}

LEAGUE_ALIAS_MAPPING = {
    "EPL": "PL",
    "PREMIER_LEAGUE": "PL",
    "ENGLISH_PREMIER_LEAGUE": "PL",
    "LA_LIGA": "PD",
    "LALIGA": "PD",
    "SERIE_A": "SA",
    "SERIEA": "SA",
    "BUNDESLIGA": "BL1",
    "LIGUE_1": "FL1",
    "LIGUE1": "FL1",
    "CHAMPIONS_LEAGUE": "CL",
    "UCL": "CL",
    "EUROPA_LEAGUE": "EL",
    "UEL": "EL",
    "RUSSIAN_PREMIER_LEAGUE": "RPL",
}

# Top-5 European leagues feed the default leaderboard
DEFAULT_TOP_TEAM_LEAGUES = (39, 140, 135, 78, 61)
DEFAULT_LIMIT_PER_LEAGUE = 6
MAX_LIMIT_PER_LEAGUE = 20

# Fixtures
RECENT_FIXTURES_LIMIT = 10  # "recent" filter = last N fixtures regardless of season

# Seasons run July -> June; a season is named by its start year
SEASON_START_MONTH = 7
MIN_SEASON_YEAR = 1900
MAX_SEASON_YEAR = 2100

# Filter modes
FILTER_MODES = ("recent", "season", "all")
DEFAULT_FILTER_MODE = "recent"


def league_id_for(token: str):
    """Return the API-Football league id for a code/alias/numeric token, or None."""

    value = (token or "").strip().upper()
    if not value:
        return None
    if value.isdigit():
        return int(value)
    code = LEAGUE_ALIAS_MAPPING.get(value.replace(" ", "_"), value)
    return LEAGUE_ID_MAP.get(code)
