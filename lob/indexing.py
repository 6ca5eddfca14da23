"""Lookup maps over a dataset snapshot."""

from typing import Optional

from .models import DatasetIndexes
from .schemas import Player, SeriesMatch, Team, TournamentDataset
from .utils import collation_key


def create_indexes(dataset: TournamentDataset) -> DatasetIndexes:
    """
    Build team and player lookup maps for a dataset.

    Rosters (players_by_team_id) are grouped on each player's current team
    and sorted by nick. Missing keys simply miss on lookup.

    Args:
        dataset: Tournament dataset

    Returns:
        DatasetIndexes with fresh dicts (safe to use per call)
    """
    indexes = DatasetIndexes(
        teams_by_id={team.id: team for team in dataset.teams},
        teams_by_slug={team.slug: team for team in dataset.teams},
        players_by_id={player.id: player for player in dataset.players},
        players_by_slug={player.slug: player for player in dataset.players},
    )

    for player in dataset.players:
        indexes.players_by_team_id.setdefault(player.team_id, []).append(player)

    for roster in indexes.players_by_team_id.values():
        roster.sort(key=lambda p: collation_key(p.nick))

    return indexes


def get_team_by_slug(dataset: TournamentDataset, slug: str) -> Optional[Team]:
    return create_indexes(dataset).teams_by_slug.get(slug)


def get_player_by_slug(dataset: TournamentDataset, slug: str) -> Optional[Player]:
    return create_indexes(dataset).players_by_slug.get(slug)


def get_series_by_id(dataset: TournamentDataset, series_id: str) -> Optional[SeriesMatch]:
    return next((s for s in dataset.series_matches if s.id == series_id), None)


def get_players_for_team(dataset: TournamentDataset, team_id: str) -> list[Player]:
    """Current roster of a team sorted by nick (empty for unknown teams)."""
    return list(create_indexes(dataset).players_by_team_id.get(team_id, []))
