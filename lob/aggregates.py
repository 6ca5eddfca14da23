"""Player and team aggregates and the leaderboards derived from them."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .constants import (
    LEADERBOARD_METRICS,
    METRIC_ASSISTS,
    METRIC_DEATHS_LEAST,
    METRIC_KDA,
    METRIC_KILLS,
    METRIC_MVPS,
)
from .indexing import create_indexes
from .models import AggregationFilters, LeaderboardRow, PlayerAggregate, TeamAggregate
from .mvp import compute_series_mvp
from .schemas import Player, SeriesMatch, TournamentDataset
from .series import get_game_mvp_player_id, get_kda
from .standings import compute_standings
from .utils import collation_key, parse_date, to_date_end, to_date_start

logger = logging.getLogger('lob.aggregates')


@dataclass
class _StatTotals:
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    games_played: int = 0
    game_mvps: int = 0
    series_mvps: int = 0


def series_in_range(series: SeriesMatch, filters: Optional[AggregationFilters]) -> bool:
    """
    Whether a series falls inside the inclusive [from_date, to_date] range.

    A series whose date cannot be parsed is always kept, as is every series
    when a bound is missing or unparseable.
    """
    if filters is None or (not filters.from_date and not filters.to_date):
        return True

    date = parse_date(series.date)
    if date is None:
        return True

    start = to_date_start(filters.from_date)
    end = to_date_end(filters.to_date)
    if start is not None and date < start:
        return False
    if end is not None and date > end:
        return False
    return True


def _matches_team(player: Player, filters: Optional[AggregationFilters]) -> bool:
    return not (filters and filters.team_id) or player.team_id == filters.team_id


def compute_player_aggregates(
    dataset: TournamentDataset,
    filters: Optional[AggregationFilters] = None,
) -> list[PlayerAggregate]:
    """
    Cumulative stats per player.

    Game MVPs use the recomputed game MVP and series MVPs use
    compute_series_mvp; both count for the player's current team. Players
    without games still appear with zeroed stats unless a team filter
    excludes them.

    Args:
        dataset: Tournament dataset
        filters: Optional team and date-range restriction

    Returns:
        One PlayerAggregate per (filtered) player, in dataset order
    """
    indexes = create_indexes(dataset)
    totals: dict[str, _StatTotals] = {}

    for series in dataset.series_matches:
        if not series_in_range(series, filters):
            continue

        for game in series.games:
            for stats in game.stats_by_player:
                player = indexes.players_by_id.get(stats.player_id)
                if player is None or not _matches_team(player, filters):
                    continue
                bucket = totals.setdefault(player.id, _StatTotals())
                bucket.kills += stats.kills
                bucket.deaths += stats.deaths
                bucket.assists += stats.assists
                bucket.games_played += 1

            mvp_player = indexes.players_by_id.get(get_game_mvp_player_id(game) or '')
            if mvp_player is not None and _matches_team(mvp_player, filters):
                totals.setdefault(mvp_player.id, _StatTotals()).game_mvps += 1

        series_mvp = compute_series_mvp(series, dataset)
        if series_mvp is not None:
            player = indexes.players_by_id.get(series_mvp.player_id)
            if player is not None and _matches_team(player, filters):
                totals.setdefault(player.id, _StatTotals()).series_mvps += 1

    aggregates = []
    for player in dataset.players:
        if not _matches_team(player, filters):
            continue
        bucket = totals.get(player.id, _StatTotals())
        team = indexes.teams_by_id.get(player.team_id)
        aggregates.append(
            PlayerAggregate(
                player_id=player.id,
                player_nick=player.nick,
                player_slug=player.slug,
                team_id=player.team_id,
                team_name=team.name if team else player.team_id,
                team_slug=team.slug if team else player.team_id,
                kills=bucket.kills,
                deaths=bucket.deaths,
                assists=bucket.assists,
                games_played=bucket.games_played,
                game_mvps=bucket.game_mvps,
                series_mvps=bucket.series_mvps,
                kda=get_kda(bucket.kills, bucket.deaths, bucket.assists),
            )
        )

    logger.debug(f'Aggregated {len(aggregates)} players ({len(totals)} with recorded stats)')
    return aggregates


def compute_team_aggregates(dataset: TournamentDataset) -> list[TeamAggregate]:
    """
    Cumulative stats per team, summed from its players' aggregates.

    game_diff comes from the standings table so both views agree.

    Returns:
        One TeamAggregate per team, sorted by team name
    """
    player_aggregates = compute_player_aggregates(dataset)
    game_diff_by_team = {row.team_id: row.game_diff for row in compute_standings(dataset).rows}

    totals: dict[str, _StatTotals] = {}
    for row in player_aggregates:
        bucket = totals.setdefault(row.team_id, _StatTotals())
        bucket.kills += row.kills
        bucket.deaths += row.deaths
        bucket.assists += row.assists
        bucket.games_played += row.games_played
        bucket.game_mvps += row.game_mvps
        bucket.series_mvps += row.series_mvps

    aggregates = []
    for team in dataset.teams:
        bucket = totals.get(team.id, _StatTotals())
        aggregates.append(
            TeamAggregate(
                team_id=team.id,
                team_name=team.name,
                team_slug=team.slug,
                kills=bucket.kills,
                deaths=bucket.deaths,
                assists=bucket.assists,
                games_played=bucket.games_played,
                game_mvps=bucket.game_mvps,
                series_mvps=bucket.series_mvps,
                kda=get_kda(bucket.kills, bucket.deaths, bucket.assists),
                game_diff=game_diff_by_team.get(team.id, 0),
            )
        )

    aggregates.sort(key=lambda t: collation_key(t.team_name))
    return aggregates


def _make_board(
    players: list[PlayerAggregate],
    metric: str,
    get_value: Callable[[PlayerAggregate], float],
    descending: bool = True,
) -> list[LeaderboardRow]:
    sign = -1 if descending else 1

    def rank(player: PlayerAggregate) -> tuple:
        games_tiebreak = -player.games_played if metric == METRIC_KDA else 0
        return (sign * get_value(player), games_tiebreak, collation_key(player.player_nick))

    ranked = sorted(players, key=rank)
    return [
        LeaderboardRow(position=position, metric=metric, value=get_value(player), player=player)
        for position, player in enumerate(ranked, 1)
    ]


def compute_leaderboards(
    dataset: TournamentDataset,
    filters: Optional[AggregationFilters] = None,
) -> dict[str, list[LeaderboardRow]]:
    """
    Build the five ranked leaderboards from players with at least one game.

    Boards: kills, kda (ties: more games, then nick), mvps (game MVPs),
    assists, deaths_least (ascending). Other ties go to nick order.

    Returns:
        Dict mapping metric name to its ranked rows
    """
    players = [p for p in compute_player_aggregates(dataset, filters) if p.games_played > 0]

    return {
        METRIC_KILLS: _make_board(players, METRIC_KILLS, lambda p: p.kills),
        METRIC_KDA: _make_board(players, METRIC_KDA, lambda p: p.kda),
        METRIC_MVPS: _make_board(players, METRIC_MVPS, lambda p: p.game_mvps),
        METRIC_ASSISTS: _make_board(players, METRIC_ASSISTS, lambda p: p.assists),
        METRIC_DEATHS_LEAST: _make_board(
            players, METRIC_DEATHS_LEAST, lambda p: p.deaths, descending=False
        ),
    }


def get_player_leaderboard_positions(
    dataset: TournamentDataset,
    player_id: str,
    filters: Optional[AggregationFilters] = None,
) -> dict[str, int]:
    """Position of a player on every leaderboard they appear on."""
    boards = compute_leaderboards(dataset, filters)
    positions = {}
    for metric in LEADERBOARD_METRICS:
        found = next((row for row in boards[metric] if row.player.player_id == player_id), None)
        if found is not None:
            positions[metric] = found.position
    return positions
