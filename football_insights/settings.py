import os
from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()


def _get_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or not str(val).strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _read_secret_file(path: str | None) -> str | None:
    if not path:
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip() or None
    except OSError:
        return None


# --- API-Football credentials & endpoint ---
API_FOOTBALL_KEY = os.getenv("API_FOOTBALL_KEY") or _read_secret_file(os.getenv("API_FOOTBALL_KEY_FILE"))
API_FOOTBALL_URL = os.getenv("API_FOOTBALL_URL", "https://v3.football.api-sports.io").rstrip("/")
API_FOOTBALL_HOST = os.getenv("API_FOOTBALL_HOST", "v3.football.api-sports.io")

# --- Fan-out for per-season / per-league calls (1 = sequential) ---
FETCH_MAX_WORKERS = max(1, _get_int("FETCH_MAX_WORKERS", 4))

# --- Query layer: in-memory result cache and whole-query retries ---
INSIGHTS_CACHE_SECONDS = _get_int("INSIGHTS_CACHE_SECONDS", 300)
TOP_TEAMS_CACHE_SECONDS = _get_int("TOP_TEAMS_CACHE_SECONDS", 600)
INSIGHTS_QUERY_RETRIES = _get_int("INSIGHTS_QUERY_RETRIES", 2)
TOP_TEAMS_QUERY_RETRIES = _get_int("TOP_TEAMS_QUERY_RETRIES", 1)
