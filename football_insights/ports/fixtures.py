from typing import List, Optional, TypedDict


class FixtureSide(TypedDict):
    id: int
    name: str
    logo: Optional[str]
    winner: Optional[bool]


class FixtureStatus(TypedDict):
    long: Optional[str]
    short: Optional[str]         # "NS" | "1H" | "FT" | etc.
    elapsed: Optional[int]


class FixtureLeague(TypedDict):
    id: Optional[int]
    name: Optional[str]
    country: Optional[str]
    season: Optional[int]
    round: Optional[str]
    logo: Optional[str]


class FixtureVenue(TypedDict):
    name: Optional[str]
    city: Optional[str]


class Fixture(TypedDict):
    id: int
    date: str                    # ISO8601 as sent upstream
    timestamp: Optional[int]
    status: FixtureStatus
    venue: FixtureVenue
    league: FixtureLeague
    home_team: FixtureSide
    away_team: FixtureSide
    home_goals: Optional[int]    # None until played
    away_goals: Optional[int]


class FixturesPort:
    def get_fixtures(
        self,
        team_id: int,
        *,
        season: Optional[int] = None,
        last: Optional[int] = None,
    ) -> List[Fixture]: ...
