"""Read views composed from the engine: series summaries, histories, overview."""

from typing import Optional

from .aggregates import compute_leaderboards, compute_player_aggregates, compute_team_aggregates
from .config import get_latest_series_limit
from .indexing import create_indexes
from .models import DatasetOverview, PlayerGameHistoryRow, SeriesSummary
from .mvp import compute_series_mvp
from .schemas import TournamentDataset
from .series import (
    get_game_mvp_player_id,
    get_series_score,
    get_series_winner_team_id,
    sort_series_by_date_desc,
)
from .standings import compute_standings
from .utils import date_sort_value


def compute_series_summaries(dataset: TournamentDataset) -> list[SeriesSummary]:
    """Every series with score, winner and MVP, newest first (id desc on same date)."""
    summaries = []
    for series in sort_series_by_date_desc(dataset.series_matches):
        winner_team_id = get_series_winner_team_id(series)
        summaries.append(
            SeriesSummary(
                series=series,
                score=get_series_score(series),
                winner_team_id=winner_team_id,
                is_complete=winner_team_id is not None,
                mvp=compute_series_mvp(series, dataset),
            )
        )
    return summaries


def get_latest_series(dataset: TournamentDataset, limit: Optional[int] = None) -> list[SeriesSummary]:
    """The most recent series summaries (default count from league config)."""
    if limit is None:
        limit = get_latest_series_limit()
    return compute_series_summaries(dataset)[:limit]


def get_team_series_history(dataset: TournamentDataset, team_id: str) -> list[SeriesSummary]:
    return [
        summary
        for summary in compute_series_summaries(dataset)
        if team_id in (summary.series.team_a_id, summary.series.team_b_id)
    ]


def get_player_game_history(
    dataset: TournamentDataset, player_id: str
) -> list[PlayerGameHistoryRow]:
    """
    Game-by-game stat lines of one player.

    Only series involving the player's current team are scanned. Rows are
    sorted by series date descending, then game index descending.

    Args:
        dataset: Tournament dataset
        player_id: Player to look up

    Returns:
        List of PlayerGameHistoryRow (empty for unknown players)
    """
    indexes = create_indexes(dataset)
    player = indexes.players_by_id.get(player_id)
    if player is None:
        return []

    rows = []
    for series in dataset.series_matches:
        if player.team_id not in (series.team_a_id, series.team_b_id):
            continue
        opponent_id = series.team_b_id if series.team_a_id == player.team_id else series.team_a_id
        opponent = indexes.teams_by_id.get(opponent_id)

        for game_index, game in enumerate(series.games, 1):
            stat = next((s for s in game.stats_by_player if s.player_id == player_id), None)
            if stat is None:
                continue
            rows.append(
                PlayerGameHistoryRow(
                    series_id=series.id,
                    date=series.date,
                    opponent_team_id=opponent_id,
                    opponent_team_name=opponent.name if opponent else opponent_id,
                    game_index=game_index,
                    champion=stat.champion,
                    kills=stat.kills,
                    deaths=stat.deaths,
                    assists=stat.assists,
                    mvp=get_game_mvp_player_id(game) == player_id,
                )
            )

    rows.sort(key=lambda r: (date_sort_value(r.date), r.game_index), reverse=True)
    return rows


def get_dataset_overview(dataset: TournamentDataset) -> DatasetOverview:
    """Standings, aggregates, leaderboards and series summaries of a dataset."""
    return DatasetOverview(
        standings=compute_standings(dataset),
        player_aggregates=compute_player_aggregates(dataset),
        team_aggregates=compute_team_aggregates(dataset),
        leaderboards=compute_leaderboards(dataset),
        series_summaries=compute_series_summaries(dataset),
    )
