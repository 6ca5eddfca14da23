"""Derived data models produced by the tournament engine."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .schemas import Player, SeriesGame, SeriesMatch, Team


@dataclass
class DatasetIndexes:
    """Lookup maps built from one dataset snapshot."""
    teams_by_id: Dict[str, Team] = field(default_factory=dict)
    teams_by_slug: Dict[str, Team] = field(default_factory=dict)
    players_by_id: Dict[str, Player] = field(default_factory=dict)
    players_by_slug: Dict[str, Player] = field(default_factory=dict)
    players_by_team_id: Dict[str, List[Player]] = field(default_factory=dict)  # sorted by nick


@dataclass
class AggregationFilters:
    """Optional team and inclusive date-range restriction for aggregates."""
    team_id: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None


@dataclass
class SeriesScore:
    """Games won by each side of a series."""
    team_a_wins: int = 0
    team_b_wins: int = 0


@dataclass
class GameTeamKills:
    """Kill split of one game between the two series teams."""
    team_a_kills: int = 0
    team_b_kills: int = 0


@dataclass
class SeriesMvpResult:
    player_id: str
    game_mvp_count: int
    kda: float


@dataclass
class SeriesSummary:
    """A series with its derived score, winner and MVP."""
    series: SeriesMatch
    score: SeriesScore
    winner_team_id: Optional[str]
    is_complete: bool
    mvp: Optional[SeriesMvpResult]


@dataclass
class StandingsRow:
    """One team's line in the league table."""
    team_id: str
    team_name: str
    team_slug: str
    position: int = 0
    series_played: int = 0
    series_won: int = 0
    series_lost: int = 0
    points: int = 0
    games_won: int = 0
    games_lost: int = 0
    game_diff: int = 0
    series_win_rate: float = 0.0
    from_seed: bool = False


@dataclass
class Standings:
    source: str  # 'seed' or 'series'
    rows: List[StandingsRow] = field(default_factory=list)


@dataclass
class PlayerAggregate:
    """Cumulative stats for one player."""
    player_id: str
    player_nick: str
    player_slug: str
    team_id: str
    team_name: str
    team_slug: str
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    games_played: int = 0
    game_mvps: int = 0
    series_mvps: int = 0
    kda: float = 0.0


@dataclass
class TeamAggregate:
    """Cumulative stats for one team (sum of its players)."""
    team_id: str
    team_name: str
    team_slug: str
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    games_played: int = 0
    game_mvps: int = 0
    series_mvps: int = 0
    kda: float = 0.0
    game_diff: int = 0


@dataclass
class LeaderboardRow:
    position: int
    metric: str
    value: float
    player: PlayerAggregate


@dataclass
class StatLine:
    """A stat row resolved to its player's nick and current team."""
    player_id: str
    player_nick: str
    team_id: str
    kills: int
    deaths: int
    assists: int
    champion: Optional[str] = None


@dataclass
class GameBreakdown:
    """One game of a series split into each side's stat lines."""
    game: SeriesGame
    game_index: int  # 1-based
    team_a_rows: List[StatLine] = field(default_factory=list)
    team_b_rows: List[StatLine] = field(default_factory=list)


@dataclass
class PlayerGameHistoryRow:
    series_id: str
    date: str
    opponent_team_id: str
    opponent_team_name: str
    game_index: int  # 1-based
    kills: int
    deaths: int
    assists: int
    mvp: bool
    champion: Optional[str] = None


@dataclass
class DatasetOverview:
    """Every derived view of a dataset, computed together."""
    standings: Standings
    player_aggregates: List[PlayerAggregate]
    team_aggregates: List[TeamAggregate]
    leaderboards: Dict[str, List[LeaderboardRow]]
    series_summaries: List[SeriesSummary]
