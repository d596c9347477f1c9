from typing import List, Optional, TypedDict


class StandingTeam(TypedDict):
    id: int
    name: str
    logo: Optional[str]


class StandingLeague(TypedDict):
    id: int
    name: Optional[str]
    country: Optional[str]
    logo: Optional[str]
    flag: Optional[str]
    season: int


class StandingEntry(TypedDict):
    rank: int
    team: StandingTeam
    points: int
    goals_diff: int
    form: Optional[str]
    description: Optional[str]
    group: Optional[str]
    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    league: StandingLeague


class StandingsPort:
    def get_standings(self, league_id: int, season: int) -> List[StandingEntry]: ...
