"""Pydantic schemas for the tournament dataset and league settings."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from .constants import MAX_GAMES_PER_SERIES, MAX_STATS_ROWS_PER_GAME


class DatasetModel(BaseModel):
    """Base for dataset entities: immutable, camelCase on the wire."""

    class Config:
        frozen = True
        populate_by_name = True
        str_strip_whitespace = True
        extra = 'ignore'


class SeriesPointsRule(DatasetModel):
    """Points awarded per series result."""

    win: int = Field(..., ge=0)
    loss: int = Field(..., ge=0)


class TournamentInfo(DatasetModel):
    """Tournament metadata."""

    name: str = Field(..., min_length=1)
    last_updated_iso: str = Field(..., min_length=1, alias='lastUpdatedISO')
    series_points_rule: SeriesPointsRule = Field(..., alias='seriesPointsRule')
    format: Literal['BO3']


class Team(DatasetModel):
    """Team in the league."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)


class Player(DatasetModel):
    """Player on a team roster."""

    id: str = Field(..., min_length=1)
    nick: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    team_id: str = Field(..., min_length=1, alias='teamId')
    role1: str = Field(..., min_length=1)
    role2: Optional[str] = None
    elo: str = Field(..., min_length=1)


class PlayerGameStats(DatasetModel):
    """One player's stat line in one game."""

    player_id: str = Field(..., min_length=1, alias='playerId')
    champion: Optional[str] = None
    kills: int = Field(..., ge=0)
    deaths: int = Field(..., ge=0)
    assists: int = Field(..., ge=0)


class SeriesGame(DatasetModel):
    """A single game of a series.

    mvp_player_id is a stored hint; the engine recomputes the game MVP from
    stats_by_player and only falls back to this value when that fails.
    """

    winner_team_id: str = Field(..., min_length=1, alias='winnerTeamId')
    duration_min: Optional[int] = Field(None, gt=0, alias='durationMin')
    mvp_player_id: str = Field(..., min_length=1, alias='mvpPlayerId')
    stats_by_player: list[PlayerGameStats] = Field(
        default_factory=list, max_length=MAX_STATS_ROWS_PER_GAME, alias='statsByPlayer'
    )


class SeriesMatch(DatasetModel):
    """Best-of-three series between two teams."""

    id: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    team_a_id: str = Field(..., min_length=1, alias='teamAId')
    team_b_id: str = Field(..., min_length=1, alias='teamBId')
    games: list[SeriesGame] = Field(default_factory=list, max_length=MAX_GAMES_PER_SERIES)


class StandingsSeedRow(DatasetModel):
    """Baseline table entry used before any series is recorded."""

    team_id: str = Field(..., min_length=1, alias='teamId')
    played: int = Field(..., ge=0)
    points: int = Field(..., ge=0)


class TournamentDataset(DatasetModel):
    """Complete league dataset (leagueofbronze.json)."""

    tournament: TournamentInfo
    teams: list[Team]
    players: list[Player]
    series_matches: list[SeriesMatch] = Field(..., alias='seriesMatches')
    standings_seed: list[StandingsSeedRow] = Field(default_factory=list, alias='standingsSeed')


class LeagueConfig(BaseModel):
    """League tooling settings (data/league_config.json)."""

    dataset_path: str = Field(default='data/leagueofbronze.json', min_length=1)
    export_dir: str = Field(default='exports', min_length=1)
    latest_series_limit: int = Field(default=3, ge=1, le=50)
    leaderboard_size: int = Field(default=5, ge=1, le=100)
    log_dir: str = Field(default='logs', min_length=1)

    class Config:
        extra = 'forbid'
