from typing import List, Optional, TypedDict


class Team(TypedDict):
    id: int
    name: str
    code: Optional[str]
    country: Optional[str]
    founded: Optional[int]
    national: bool
    logo: Optional[str]


class Venue(TypedDict):
    id: Optional[int]
    name: Optional[str]
    address: Optional[str]
    city: Optional[str]
    capacity: Optional[int]
    surface: Optional[str]
    image: Optional[str]


class TeamMatch(TypedDict):
    team: Team
    venue: Optional[Venue]


class TeamsPort:
    def search_teams(self, query: str) -> List[TeamMatch]: ...

    def get_team_seasons(self, team_id: int) -> List[int]: ...
