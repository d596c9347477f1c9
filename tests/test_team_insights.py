import pytest

from football_insights.errors import NetworkError, TeamNotFound, ValidationError
from football_insights.services.team_insights import (
    InsightsFilter,
    TeamInsightsResolver,
    derive_record,
    sort_fixtures_desc,
)

from tests.fakes import TEAM_ID, FakeAdapter, make_fixture, make_match


SEASON_FIXTURES = {
    2021: [
        make_fixture(1, "2021-08-01T16:00:00+00:00", TEAM_ID, 10, 3, 0, season=2021),
    ],
    2022: [],
    2023: [
        make_fixture(2, "2023-08-05T16:00:00+00:00", 11, TEAM_ID, 1, 1),
        make_fixture(3, "2024-03-02T16:00:00+00:00", TEAM_ID, 12, 0, 2),
    ],
}


def _resolver(adapter: FakeAdapter) -> TeamInsightsResolver:
    return TeamInsightsResolver(adapter, max_workers=1)


def test_record_combines_home_win_and_away_goalless_draw():
    fixtures = [
        make_fixture(1, "2024-01-01T00:00:00Z", TEAM_ID, 10, 2, 1),
        make_fixture(2, "2024-01-08T00:00:00Z", 11, TEAM_ID, 0, 0),
    ]

    record = derive_record(fixtures, TEAM_ID)

    assert record == {"wins": 1, "draws": 1, "losses": 0, "goals_for": 2, "goals_against": 1}


def test_record_treats_missing_goals_as_zero_draw():
    fixtures = [make_fixture(1, "2024-01-01T00:00:00Z", 10, TEAM_ID, None, None)]

    record = derive_record(fixtures, TEAM_ID)

    assert record["draws"] == 1
    assert record["goals_for"] == 0 and record["goals_against"] == 0


def test_record_attributes_away_goals():
    fixtures = [
        make_fixture(1, "2024-01-01T00:00:00Z", 10, TEAM_ID, 1, 3),
        make_fixture(2, "2024-01-02T00:00:00Z", 11, TEAM_ID, 2, 0),
    ]

    record = derive_record(fixtures, TEAM_ID)

    assert record == {"wins": 1, "draws": 0, "losses": 1, "goals_for": 3, "goals_against": 3}


@pytest.mark.parametrize(
    "scores",
    [
        [],
        [(0, 0)],
        [(1, 0), (0, 1), (2, 2), (None, 3), (4, None)],
        [(5, 5), (0, 0), (1, 1)],
    ],
)
def test_record_outcomes_cover_every_fixture(scores):
    fixtures = [
        make_fixture(i, "2024-01-01T00:00:00Z", TEAM_ID if i % 2 else 99, 99 if i % 2 else TEAM_ID, h, a)
        for i, (h, a) in enumerate(scores)
    ]

    record = derive_record(fixtures, TEAM_ID)

    assert record["wins"] + record["draws"] + record["losses"] == len(fixtures)
    expected_draws = sum(1 for h, a in scores if (h or 0) == (a or 0))
    assert record["draws"] == expected_draws


def test_sort_fixtures_desc_orders_by_date_and_mixed_offsets():
    fixtures = [
        make_fixture(1, "2024-01-01T12:00:00+00:00", TEAM_ID, 1, 0, 0),
        make_fixture(2, "2024-01-01T13:30:00+03:00", TEAM_ID, 1, 0, 0),  # 10:30 UTC
        make_fixture(3, "2024-02-01T00:00:00Z", TEAM_ID, 1, 0, 0),
    ]

    assert [fx["id"] for fx in sort_fixtures_desc(fixtures)] == [3, 1, 2]


def test_cyrillic_query_is_transliterated_after_empty_search():
    adapter = FakeAdapter(recent=[make_fixture(9, "2024-05-01T00:00:00Z", TEAM_ID, 1, 1, 0)])

    insights = _resolver(adapter).resolve("Зенит")

    assert adapter.search_calls == ["Зенит", "Zenit"]
    assert insights["team"]["name"] == "Zenit"
    assert insights["record"]["wins"] == 1


def test_cyrillic_query_with_direct_hit_is_not_transliterated():
    adapter = FakeAdapter(teams={"Зенит": [make_match()]})

    _resolver(adapter).resolve("Зенит")

    assert adapter.search_calls == ["Зенит"]


def test_unknown_latin_team_fails_without_second_search():
    adapter = FakeAdapter(teams={})

    with pytest.raises(TeamNotFound) as excinfo:
        _resolver(adapter).resolve("Unknown FC XYZ")

    assert adapter.search_calls == ["Unknown FC XYZ"]
    assert excinfo.value.retryable is False
    assert excinfo.value.code == "NOT_FOUND"


def test_unknown_cyrillic_team_searches_exactly_twice():
    adapter = FakeAdapter(teams={})

    with pytest.raises(TeamNotFound):
        _resolver(adapter).resolve("Неизвестный Клуб")

    assert adapter.search_calls == ["Неизвестный Клуб", "Neizvestnyy Klub"]


def test_first_search_result_wins():
    adapter = FakeAdapter(teams={"Zenit": [make_match(596, "Zenit"), make_match(7, "Zenit-2")]})

    insights = _resolver(adapter).resolve("Zenit")

    assert insights["team"]["id"] == 596
    assert insights["venue"]["name"] == "Gazprom Arena"


def test_blank_team_name_is_rejected():
    with pytest.raises(ValidationError):
        _resolver(FakeAdapter()).resolve("   ")


def test_search_term_whitespace_is_collapsed():
    adapter = FakeAdapter()

    _resolver(adapter).resolve("  Zenit  ")

    assert adapter.search_calls == ["Zenit"]


def test_empty_seasons_are_hidden_from_available_seasons():
    adapter = FakeAdapter(seasons=[2021, 2022, 2023], fixtures_by_season=SEASON_FIXTURES)

    insights = _resolver(adapter).resolve("Zenit")

    assert insights["available_seasons"] == [2023, 2021]


def test_recent_mode_uses_last_ten_call():
    recent = [make_fixture(i, f"2024-05-{i + 1:02d}T00:00:00Z", TEAM_ID, 1, 1, 0) for i in range(12)]
    adapter = FakeAdapter(seasons=[2023], fixtures_by_season=SEASON_FIXTURES, recent=recent)

    insights = _resolver(adapter).resolve("Zenit", InsightsFilter(mode="recent"))

    assert (None, 10) in adapter.fixture_calls
    assert insights["filters"]["matches_count"] == 10
    assert insights["filters"]["season"] is None
    assert insights["record"]["wins"] == 10


def test_season_mode_uses_requested_season():
    adapter = FakeAdapter(seasons=[2021, 2022, 2023], fixtures_by_season=SEASON_FIXTURES)

    insights = _resolver(adapter).resolve("Zenit", InsightsFilter(mode="season", season=2021))

    assert insights["filters"]["season"] == 2021
    assert insights["filters"]["season_overridden"] is False
    assert [fx["id"] for fx in insights["fixtures"]] == [1]
    assert insights["record"] == {"wins": 1, "draws": 0, "losses": 0, "goals_for": 3, "goals_against": 0}


@pytest.mark.parametrize("requested", [2022, 1999])
def test_season_mode_falls_back_to_latest_non_empty_season(requested):
    adapter = FakeAdapter(seasons=[2021, 2022, 2023], fixtures_by_season=SEASON_FIXTURES)

    insights = _resolver(adapter).resolve("Zenit", InsightsFilter(mode="season", season=requested))

    filters = insights["filters"]
    assert filters["season"] == 2023
    assert filters["requested_season"] == requested
    assert filters["season_overridden"] is True
    assert filters["matches_count"] == 2


def test_season_mode_without_season_picks_latest_without_override():
    adapter = FakeAdapter(seasons=[2021, 2023], fixtures_by_season=SEASON_FIXTURES)

    insights = _resolver(adapter).resolve("Zenit", InsightsFilter(mode="season"))

    assert insights["filters"]["season"] == 2023
    assert insights["filters"]["season_overridden"] is False


def test_season_mode_without_history_falls_back_to_recent():
    recent = [make_fixture(5, "2024-05-01T00:00:00Z", 3, TEAM_ID, 2, 0)]
    adapter = FakeAdapter(seasons=[2022], fixtures_by_season=SEASON_FIXTURES, recent=recent)

    insights = _resolver(adapter).resolve("Zenit", InsightsFilter(mode="season", season=2022))

    assert insights["filters"]["season"] is None
    assert insights["filters"]["season_overridden"] is True
    assert insights["available_seasons"] == []
    assert insights["record"]["losses"] == 1


def test_all_mode_unions_seasons_sorted_newest_first_without_extra_calls():
    adapter = FakeAdapter(seasons=[2021, 2022, 2023], fixtures_by_season=SEASON_FIXTURES)

    insights = _resolver(adapter).resolve("Zenit", InsightsFilter(mode="all"))

    ids = [fx["id"] for fx in insights["fixtures"]]
    assert ids == [3, 2, 1]
    dates = [fx["date"] for fx in insights["fixtures"]]
    assert dates == sorted(dates, reverse=True)
    assert all(last is None for _season, last in adapter.fixture_calls)
    assert len(adapter.fixture_calls) == 3
    assert insights["record"] == {"wins": 1, "draws": 1, "losses": 1, "goals_for": 4, "goals_against": 3}


def test_all_mode_without_history_falls_back_to_recent():
    recent = [make_fixture(5, "2024-05-01T00:00:00Z", TEAM_ID, 3, 1, 1)]
    adapter = FakeAdapter(seasons=[], recent=recent)

    insights = _resolver(adapter).resolve("Zenit", InsightsFilter(mode="all"))

    assert insights["filters"]["matches_count"] == 1
    assert (None, 10) in adapter.fixture_calls


def test_parallel_discovery_matches_sequential():
    adapter = FakeAdapter(seasons=[2021, 2022, 2023], fixtures_by_season=SEASON_FIXTURES)

    sequential = TeamInsightsResolver(adapter, max_workers=1).resolve("Zenit", InsightsFilter(mode="all"))
    parallel = TeamInsightsResolver(adapter, max_workers=4).resolve("Zenit", InsightsFilter(mode="all"))

    assert parallel == sequential


def test_season_fetch_failure_propagates():
    class FailingAdapter(FakeAdapter):
        def get_fixtures(self, team_id, *, season=None, last=None):
            raise NetworkError("down")

    adapter = FailingAdapter(seasons=[2023])

    with pytest.raises(NetworkError):
        _resolver(adapter).resolve("Zenit")


def test_unknown_filter_mode_is_rejected():
    with pytest.raises(ValidationError):
        InsightsFilter(mode="weekly")
