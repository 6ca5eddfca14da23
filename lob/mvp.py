"""Series MVP resolution."""

import logging
from dataclasses import dataclass
from typing import Optional

from .indexing import create_indexes
from .models import SeriesMvpResult
from .schemas import SeriesMatch, TournamentDataset
from .series import get_game_mvp_player_id, get_kda
from .utils import collation_key

logger = logging.getLogger('lob.mvp')


@dataclass
class _SeriesPlayerTotals:
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    game_mvps: int = 0


def _build_series_player_totals(
    series: SeriesMatch, roster_ids: set[str]
) -> dict[str, _SeriesPlayerTotals]:
    totals: dict[str, _SeriesPlayerTotals] = {}

    for game in series.games:
        mvp_id = get_game_mvp_player_id(game)
        if mvp_id in roster_ids:
            totals.setdefault(mvp_id, _SeriesPlayerTotals()).game_mvps += 1

        for stats in game.stats_by_player:
            if stats.player_id not in roster_ids:
                continue
            bucket = totals.setdefault(stats.player_id, _SeriesPlayerTotals())
            bucket.kills += stats.kills
            bucket.deaths += stats.deaths
            bucket.assists += stats.assists

    return totals


def compute_series_mvp(
    series: SeriesMatch, dataset: TournamentDataset
) -> Optional[SeriesMvpResult]:
    """
    Pick the MVP of a series.

    Only players currently on either of the two rosters are considered;
    team membership is looked up at call time, so a transferred player is
    attributed to the team they play for now.

    Selection: most game MVPs, then highest cumulative KDA over the series,
    then the alphabetically first nick.

    Args:
        series: Series to resolve
        dataset: Dataset the series belongs to

    Returns:
        SeriesMvpResult, or None if the series has no games or no
        attributable stats
    """
    if not series.games:
        return None

    indexes = create_indexes(dataset)
    roster_ids = {
        player.id
        for team_id in (series.team_a_id, series.team_b_id)
        for player in indexes.players_by_team_id.get(team_id, [])
    }

    totals = _build_series_player_totals(series, roster_ids)
    if not totals:
        return None

    candidates = [
        SeriesMvpResult(
            player_id=player_id,
            game_mvp_count=acc.game_mvps,
            kda=get_kda(acc.kills, acc.deaths, acc.assists),
        )
        for player_id, acc in totals.items()
    ]

    def nick_of(player_id: str) -> str:
        player = indexes.players_by_id.get(player_id)
        return player.nick if player else player_id

    best = min(
        candidates,
        key=lambda c: (-c.game_mvp_count, -c.kda, collation_key(nick_of(c.player_id))),
    )
    logger.debug(
        f'Series {series.id} MVP: {best.player_id} '
        f'({best.game_mvp_count} game MVPs, KDA {best.kda:.2f})'
    )
    return best
