"""League table computation with tie-break resolution.

The table comes from exactly one source per call:
- seed: no series recorded yet, rows built from standingsSeed
- series: at least one series exists, rows rebuilt from completed series
  (the seed is ignored entirely)

Ordering is points, series won, game differential, then team name. Teams
still level on the first three keys form a tied group: a pair is split by
head-to-head record, three or more teams fall back to name order.
"""

import logging
from dataclasses import replace
from functools import cmp_to_key
from typing import Callable

from .constants import SOURCE_SEED, SOURCE_SERIES
from .models import Standings, StandingsRow
from .schemas import TournamentDataset
from .series import get_series_score, get_series_winner_team_id
from .utils import collation_key

logger = logging.getLogger('lob.standings')

RowComparator = Callable[[StandingsRow, StandingsRow], int]


def _by_points(a: StandingsRow, b: StandingsRow) -> int:
    return b.points - a.points


def _by_series_won(a: StandingsRow, b: StandingsRow) -> int:
    return b.series_won - a.series_won


def _by_game_diff(a: StandingsRow, b: StandingsRow) -> int:
    return b.game_diff - a.game_diff


def _by_team_name(a: StandingsRow, b: StandingsRow) -> int:
    ka, kb = collation_key(a.team_name), collation_key(b.team_name)
    return (ka > kb) - (ka < kb)


# Keys that define a tied group; team name only orders within it
BASE_COMPARATORS: tuple[RowComparator, ...] = (_by_points, _by_series_won, _by_game_diff)


def compare_standings_base(a: StandingsRow, b: StandingsRow) -> int:
    for comparator in BASE_COMPARATORS:
        result = comparator(a, b)
        if result != 0:
            return result
    return 0


def compare_head_to_head(team_a_id: str, team_b_id: str, dataset: TournamentDataset) -> int:
    """
    Compare two teams on their mutual completed series.

    Every completed meeting counts: series wins first, then the game
    differential summed across all meetings.

    Returns:
        Negative if team_a ranks higher, positive if team_b does, 0 if level
    """
    a_series_wins = 0
    b_series_wins = 0
    a_games_won = 0
    b_games_won = 0

    for series in dataset.series_matches:
        if {series.team_a_id, series.team_b_id} != {team_a_id, team_b_id}:
            continue

        winner = get_series_winner_team_id(series)
        if winner is None:
            continue

        if winner == team_a_id:
            a_series_wins += 1
        elif winner == team_b_id:
            b_series_wins += 1

        score = get_series_score(series)
        if series.team_a_id == team_a_id:
            a_games_won += score.team_a_wins
            b_games_won += score.team_b_wins
        else:
            a_games_won += score.team_b_wins
            b_games_won += score.team_a_wins

    if a_series_wins != b_series_wins:
        return b_series_wins - a_series_wins

    a_game_diff = a_games_won - b_games_won
    b_game_diff = b_games_won - a_games_won
    return b_game_diff - a_game_diff


def _resolve_tied_group(group: list[StandingsRow], dataset: TournamentDataset) -> list[StandingsRow]:
    if len(group) == 2:
        def by_head_to_head(a: StandingsRow, b: StandingsRow) -> int:
            return compare_head_to_head(a.team_id, b.team_id, dataset) or _by_team_name(a, b)

        logger.debug(f'Head-to-head tie-break: {group[0].team_name} vs {group[1].team_name}')
        return sorted(group, key=cmp_to_key(by_head_to_head))

    if len(group) > 2:
        logger.debug(f'{len(group)}-way tie resolved by name: {[r.team_name for r in group]}')
        return sorted(group, key=cmp_to_key(_by_team_name))

    return group


def sort_standings_rows(rows: list[StandingsRow], dataset: TournamentDataset) -> list[StandingsRow]:
    """
    Order standings rows and assign 1-based positions.

    Args:
        rows: Unordered rows (not modified)
        dataset: Dataset consulted for head-to-head records

    Returns:
        New list of rows with position set
    """
    prelim = sorted(
        rows, key=cmp_to_key(lambda a, b: compare_standings_base(a, b) or _by_team_name(a, b))
    )

    resolved: list[StandingsRow] = []
    i = 0
    while i < len(prelim):
        anchor = prelim[i]
        group = [anchor]
        i += 1
        while i < len(prelim) and compare_standings_base(anchor, prelim[i]) == 0:
            group.append(prelim[i])
            i += 1
        resolved.extend(_resolve_tied_group(group, dataset))

    return [replace(row, position=position) for position, row in enumerate(resolved, 1)]


def _win_rate(series_won: int, series_played: int) -> float:
    return series_won / series_played * 100 if series_played > 0 else 0.0


def build_seed_standings_rows(dataset: TournamentDataset) -> list[StandingsRow]:
    """
    Table built from the standings seed, one row per team.

    Series won is back-inferred from points only under a pure win/loss rule
    (win > 0, loss == 0). Game counts are always zero.
    """
    rule = dataset.tournament.series_points_rule
    infer_wins = rule.win > 0 and rule.loss == 0
    seed_by_team_id = {row.team_id: row for row in dataset.standings_seed}

    rows = []
    for team in dataset.teams:
        seed = seed_by_team_id.get(team.id)
        played = seed.played if seed else 0
        points = seed.points if seed else 0
        series_won = min(played, points // rule.win) if infer_wins else 0

        rows.append(
            StandingsRow(
                team_id=team.id,
                team_name=team.name,
                team_slug=team.slug,
                series_played=played,
                series_won=series_won,
                series_lost=max(0, played - series_won),
                points=points,
                series_win_rate=_win_rate(series_won, played),
                from_seed=True,
            )
        )

    return sort_standings_rows(rows, dataset)


def build_series_standings_rows(dataset: TournamentDataset) -> list[StandingsRow]:
    """Table rebuilt from completed series; open series contribute nothing."""
    rule = dataset.tournament.series_points_rule
    rows_by_team_id = {
        team.id: StandingsRow(team_id=team.id, team_name=team.name, team_slug=team.slug)
        for team in dataset.teams
    }

    for series in dataset.series_matches:
        winner_id = get_series_winner_team_id(series)
        if winner_id is None:
            continue
        loser_id = series.team_b_id if winner_id == series.team_a_id else series.team_a_id

        row_a = rows_by_team_id.get(series.team_a_id)
        row_b = rows_by_team_id.get(series.team_b_id)
        if row_a is None or row_b is None:
            continue

        score = get_series_score(series)
        row_a.series_played += 1
        row_b.series_played += 1
        row_a.games_won += score.team_a_wins
        row_a.games_lost += score.team_b_wins
        row_b.games_won += score.team_b_wins
        row_b.games_lost += score.team_a_wins

        winner = rows_by_team_id[winner_id]
        winner.series_won += 1
        winner.points += rule.win

        loser = rows_by_team_id[loser_id]
        loser.series_lost += 1
        loser.points += rule.loss

    for row in rows_by_team_id.values():
        row.game_diff = row.games_won - row.games_lost
        row.series_win_rate = _win_rate(row.series_won, row.series_played)

    return sort_standings_rows(list(rows_by_team_id.values()), dataset)


def compute_standings(dataset: TournamentDataset) -> Standings:
    """
    Compute the league table.

    Args:
        dataset: Tournament dataset

    Returns:
        Standings with source 'seed' when no series exist, 'series' otherwise
    """
    if not dataset.series_matches:
        logger.debug('No series recorded, standings from seed')
        return Standings(source=SOURCE_SEED, rows=build_seed_standings_rows(dataset))

    logger.debug(f'Standings from {len(dataset.series_matches)} series')
    return Standings(source=SOURCE_SERIES, rows=build_series_standings_rows(dataset))
