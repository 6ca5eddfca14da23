"""Series arithmetic: scores, winners, game MVPs and kill splits.

A series is best-of-three: the first side to win two games takes it. The
game MVP is always recomputed from the stat rows; the stored mvpPlayerId
only counts when no stat row names a player.
"""

from typing import Optional

from .constants import SERIES_WINS_REQUIRED
from .indexing import create_indexes
from .models import GameBreakdown, GameTeamKills, SeriesScore, StatLine
from .schemas import PlayerGameStats, SeriesGame, SeriesMatch, TournamentDataset
from .utils import collation_key, date_sort_value


def get_kda(kills: int, deaths: int, assists: int) -> float:
    """(kills + assists) / deaths, with zero deaths counted as one."""
    return (kills + assists) / max(1, deaths)


def get_series_score(series: SeriesMatch) -> SeriesScore:
    """Count the games each side won."""
    score = SeriesScore()
    for game in series.games:
        if game.winner_team_id == series.team_a_id:
            score.team_a_wins += 1
        if game.winner_team_id == series.team_b_id:
            score.team_b_wins += 1
    return score


def get_series_winner_team_id(series: SeriesMatch) -> Optional[str]:
    """Team that reached two game wins, or None while the series is open."""
    score = get_series_score(series)
    if score.team_a_wins >= SERIES_WINS_REQUIRED:
        return series.team_a_id
    if score.team_b_wins >= SERIES_WINS_REQUIRED:
        return series.team_b_id
    return None


def is_series_complete(series: SeriesMatch) -> bool:
    return get_series_winner_team_id(series) is not None


def _game_mvp_rank(row: PlayerGameStats) -> tuple:
    return (
        -get_kda(row.kills, row.deaths, row.assists),
        -row.kills,
        -row.assists,
        row.deaths,
        collation_key(row.player_id),
    )


def infer_game_mvp_player_id(rows: list[PlayerGameStats]) -> Optional[str]:
    """
    Pick a game's MVP from its stat rows.

    Ranking: KDA desc, kills desc, assists desc, deaths asc, player id asc.
    The result does not depend on row order.

    Args:
        rows: Stat rows of one game

    Returns:
        Player id of the MVP, or None if no row names a player
    """
    eligible = [row for row in rows if row.player_id and row.player_id.strip()]
    if not eligible:
        return None
    return min(eligible, key=_game_mvp_rank).player_id


def get_game_mvp_player_id(game: SeriesGame) -> Optional[str]:
    """Computed game MVP, falling back to the stored hint."""
    return infer_game_mvp_player_id(game.stats_by_player) or game.mvp_player_id or None


def apply_auto_game_mvps_to_dataset(dataset: TournamentDataset) -> TournamentDataset:
    """Copy of the dataset with every stored game MVP replaced by the computed one."""
    series_matches = []
    for series in dataset.series_matches:
        games = [
            game.model_copy(update={'mvp_player_id': get_game_mvp_player_id(game)})
            for game in series.games
        ]
        series_matches.append(series.model_copy(update={'games': games}))
    return dataset.model_copy(update={'series_matches': series_matches})


def sort_series_by_date_desc(series_matches: list[SeriesMatch]) -> list[SeriesMatch]:
    """Newest first; same-date series ordered by id descending."""
    by_id = sorted(series_matches, key=lambda s: collation_key(s.id), reverse=True)
    return sorted(by_id, key=lambda s: date_sort_value(s.date), reverse=True)


def get_series_team_kill_totals(series: SeriesMatch, dataset: TournamentDataset) -> dict[str, int]:
    """
    Total kills per side across every game of a series.

    Kills are attributed by each stat owner's current team; rows whose
    player cannot be resolved are skipped.

    Returns:
        Dict mapping team_a_id and team_b_id to their kill totals
    """
    indexes = create_indexes(dataset)
    team_a_kills = 0
    team_b_kills = 0

    for game in series.games:
        for stats in game.stats_by_player:
            player = indexes.players_by_id.get(stats.player_id)
            if player is None:
                continue
            if player.team_id == series.team_a_id:
                team_a_kills += stats.kills
            if player.team_id == series.team_b_id:
                team_b_kills += stats.kills

    return {series.team_a_id: team_a_kills, series.team_b_id: team_b_kills}


def get_game_team_kills(
    game: SeriesGame, series: SeriesMatch, dataset: TournamentDataset
) -> GameTeamKills:
    """Kill split of a single game between the two series teams."""
    indexes = create_indexes(dataset)
    kills = GameTeamKills()

    for stats in game.stats_by_player:
        player = indexes.players_by_id.get(stats.player_id)
        if player is None:
            continue
        if player.team_id == series.team_a_id:
            kills.team_a_kills += stats.kills
        if player.team_id == series.team_b_id:
            kills.team_b_kills += stats.kills

    return kills


def _side_rows(rows: list[StatLine], team_id: str) -> list[StatLine]:
    side = [row for row in rows if row.team_id == team_id]
    side.sort(key=lambda row: (-row.kills, collation_key(row.player_nick)))
    return side


def get_series_games_with_team_rows(
    series: SeriesMatch, dataset: TournamentDataset
) -> list[GameBreakdown]:
    """
    Split each game's stat rows into the two sides of the series.

    Each side is sorted by kills desc, then nick. Rows for unknown players
    are dropped.
    """
    indexes = create_indexes(dataset)
    breakdowns = []

    for game_index, game in enumerate(series.games, 1):
        rows = []
        for stats in game.stats_by_player:
            player = indexes.players_by_id.get(stats.player_id)
            if player is None:
                continue
            rows.append(
                StatLine(
                    player_id=stats.player_id,
                    player_nick=player.nick,
                    team_id=player.team_id,
                    kills=stats.kills,
                    deaths=stats.deaths,
                    assists=stats.assists,
                    champion=stats.champion,
                )
            )

        breakdowns.append(
            GameBreakdown(
                game=game,
                game_index=game_index,
                team_a_rows=_side_rows(rows, series.team_a_id),
                team_b_rows=_side_rows(rows, series.team_b_id),
            )
        )

    return breakdowns
