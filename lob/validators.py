"""Integrity checks for a tournament dataset.

The engine assumes a dataset that passes these checks; they run in the
dataset store before anything is computed or saved.
"""

from .schemas import SeriesGame, SeriesMatch, TournamentDataset


def _duplicates(values: list[str]) -> list[str]:
    seen = set()
    duplicates = set()
    for value in values:
        if value in seen:
            duplicates.add(value)
        seen.add(value)
    return sorted(duplicates)


def validate_uniqueness(dataset: TournamentDataset) -> list[str]:
    """
    Check that ids and slugs are unique within their collection.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    checks = [
        ('teams', 'team ids', [t.id for t in dataset.teams]),
        ('teams', 'team slugs', [t.slug for t in dataset.teams]),
        ('players', 'player ids', [p.id for p in dataset.players]),
        ('players', 'player slugs', [p.slug for p in dataset.players]),
        ('seriesMatches', 'series ids', [s.id for s in dataset.series_matches]),
    ]
    for path, label, values in checks:
        duplicates = _duplicates(values)
        if duplicates:
            errors.append(f'{path}: duplicate {label}: {", ".join(duplicates)}')
    return errors


def validate_player_teams(dataset: TournamentDataset, team_ids: set[str]) -> list[str]:
    errors = []
    for index, player in enumerate(dataset.players):
        if player.team_id not in team_ids:
            errors.append(
                f'players.{index}.teamId: player {player.nick} references unknown team '
                f'({player.team_id})'
            )
    return errors


def validate_standings_seed(dataset: TournamentDataset, team_ids: set[str]) -> list[str]:
    errors = []
    for index, seed in enumerate(dataset.standings_seed):
        if seed.team_id not in team_ids:
            errors.append(
                f'standingsSeed.{index}.teamId: seed row references unknown team ({seed.team_id})'
            )
    return errors


def validate_game(
    game: SeriesGame,
    series: SeriesMatch,
    series_index: int,
    game_index: int,
    player_ids: set[str],
) -> list[str]:
    """
    Check one game of a series.

    Checks:
    - Winner is one of the two series teams
    - Stored MVP is a known player
    - Every stat row references a known player, at most once per game
    """
    errors = []
    path = f'seriesMatches.{series_index}.games.{game_index}'
    label = f'game {game_index + 1} of series {series.id}'

    if game.winner_team_id not in (series.team_a_id, series.team_b_id):
        errors.append(f'{path}.winnerTeamId: {label} has an invalid winner ({game.winner_team_id})')

    if game.mvp_player_id not in player_ids:
        errors.append(f'{path}.mvpPlayerId: {label} has an invalid MVP ({game.mvp_player_id})')

    seen = set()
    for stat_index, stats in enumerate(game.stats_by_player):
        stat_path = f'{path}.statsByPlayer.{stat_index}.playerId'
        if stats.player_id not in player_ids:
            errors.append(f'{stat_path}: stat row with unknown player ({stats.player_id}) in {label}')
        if stats.player_id in seen:
            errors.append(f'{stat_path}: player {stats.player_id} repeated in the stats of {label}')
            continue
        seen.add(stats.player_id)

    return errors


def validate_series(
    dataset: TournamentDataset, team_ids: set[str], player_ids: set[str]
) -> list[str]:
    errors = []
    for series_index, series in enumerate(dataset.series_matches):
        path = f'seriesMatches.{series_index}'
        if series.team_a_id not in team_ids or series.team_b_id not in team_ids:
            errors.append(f'{path}: series {series.id} references an unknown team')
        if series.team_a_id == series.team_b_id:
            errors.append(f'{path}: series {series.id} uses the same team on both sides')

        for game_index, game in enumerate(series.games):
            errors.extend(validate_game(game, series, series_index, game_index, player_ids))
    return errors


def validate_dataset(dataset: TournamentDataset) -> list[str]:
    """
    Run every integrity check on a dataset.

    Args:
        dataset: Schema-valid TournamentDataset

    Returns:
        List of validation error messages (empty if valid)
    """
    team_ids = {team.id for team in dataset.teams}
    player_ids = {player.id for player in dataset.players}

    errors: list[str] = []
    errors.extend(validate_uniqueness(dataset))
    errors.extend(validate_player_teams(dataset, team_ids))
    errors.extend(validate_standings_seed(dataset, team_ids))
    errors.extend(validate_series(dataset, team_ids, player_ids))
    return errors
