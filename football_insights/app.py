from datetime import datetime, timezone

from flask import Flask, request

from .app_utils import make_error, make_ok
from .config import setup_logger
from .errors import APIError, ValidationError
from .queries import cache, get_team_insights, get_top_teams
from .validators import (
    validate_filter_mode,
    validate_league_ids,
    validate_limit,
    validate_season,
    validate_team_name,
)

app = Flask(__name__)
cache.init_app(app)

logger = setup_logger(__name__)


def _api_error_response(exc: APIError, context: str):
    if exc.retryable:
        logger.warning("%s failed code=%s msg=%s", context, exc.code, exc.message)
    else:
        logger.info("%s rejected code=%s msg=%s", context, exc.code, exc.message)
    return make_error(exc, exc.message)


@app.route("/health", methods=["GET"])
def health():
    return make_ok(
        {"ok": True, "ts": datetime.now(timezone.utc).isoformat()},
        "OK",
        status_code=200,
    )


@app.route("/api/teams/insights", methods=["GET"])
def team_insights():
    """Team, venue, fixtures and record for ?team=&mode=recent|season|all&season=YYYY."""
    try:
        team_name = validate_team_name(request.args.get("team"))
    except ValidationError as exc:
        return make_error(exc, exc.message)
    mode, mode_warnings = validate_filter_mode(request.args.get("mode"))
    season, season_warnings = validate_season(request.args.get("season"))

    try:
        insights = get_team_insights(team_name, mode, season)
    except APIError as exc:
        return _api_error_response(exc, f"team_insights team={team_name!r}")

    logger.info(
        "team_insights team=%r mode=%s season=%s matches=%d",
        team_name,
        mode,
        insights["filters"]["season"],
        insights["filters"]["matches_count"],
    )
    return make_ok(insights, warnings=mode_warnings + season_warnings)


@app.route("/api/top-teams", methods=["GET"])
def top_teams():
    """Cross-league leaderboard for ?leagues=39,PL,...&season=YYYY&limit=N."""
    leagues, league_warnings = validate_league_ids(request.args.get("leagues"))
    season, season_warnings = validate_season(request.args.get("season"))
    limit, limit_warnings = validate_limit(request.args.get("limit"))

    try:
        entries = get_top_teams(leagues, season, limit)
    except APIError as exc:
        return _api_error_response(exc, f"top_teams leagues={leagues}")

    return make_ok(
        {"teams": entries, "count": len(entries)},
        warnings=league_warnings + season_warnings + limit_warnings,
    )


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=False)
