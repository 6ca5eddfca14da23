"""Shared fixtures for tournament engine tests."""

import copy
import logging

import pytest

from lob.schemas import TournamentDataset


def stat(player_id, kills, deaths, assists, champion=None):
    row = {'playerId': player_id, 'kills': kills, 'deaths': deaths, 'assists': assists}
    if champion:
        row['champion'] = champion
    return row


def game(winner_team_id, mvp_player_id, rows=None, duration_min=30):
    return {
        'winnerTeamId': winner_team_id,
        'mvpPlayerId': mvp_player_id,
        'durationMin': duration_min,
        'statsByPlayer': rows or [],
    }


def series(series_id, date, team_a_id, team_b_id, games):
    return {
        'id': series_id,
        'date': date,
        'teamAId': team_a_id,
        'teamBId': team_b_id,
        'games': games,
    }


BASE_DATA = {
    'tournament': {
        'name': 'Test Cup',
        'lastUpdatedISO': '2026-02-23T00:00:00.000Z',
        'seriesPointsRule': {'win': 3, 'loss': 0},
        'format': 'BO3',
    },
    'teams': [
        {'id': 'a', 'name': 'Alpha', 'slug': 'alpha'},
        {'id': 'b', 'name': 'Beta', 'slug': 'beta'},
        {'id': 'c', 'name': 'Charlie', 'slug': 'charlie'},
    ],
    'players': [
        {'id': 'a1', 'nick': 'A1', 'slug': 'a1', 'teamId': 'a', 'role1': 'TOP', 'role2': 'MID', 'elo': 'GOLD'},
        {'id': 'a2', 'nick': 'A2', 'slug': 'a2', 'teamId': 'a', 'role1': 'JUNGLE', 'role2': 'SUPPORT', 'elo': 'GOLD'},
        {'id': 'b1', 'nick': 'B1', 'slug': 'b1', 'teamId': 'b', 'role1': 'TOP', 'role2': 'MID', 'elo': 'GOLD'},
        {'id': 'b2', 'nick': 'B2', 'slug': 'b2', 'teamId': 'b', 'role1': 'JUNGLE', 'role2': 'SUPPORT', 'elo': 'GOLD'},
        {'id': 'c1', 'nick': 'C1', 'slug': 'c1', 'teamId': 'c', 'role1': 'TOP', 'role2': 'MID', 'elo': 'GOLD'},
        {'id': 'c2', 'nick': 'C2', 'slug': 'c2', 'teamId': 'c', 'role1': 'JUNGLE', 'role2': 'SUPPORT', 'elo': 'GOLD'},
    ],
    'seriesMatches': [],
    'standingsSeed': [
        {'teamId': 'a', 'played': 3, 'points': 9},
        {'teamId': 'b', 'played': 3, 'points': 6},
        {'teamId': 'c', 'played': 3, 'points': 0},
    ],
}

# Alpha beats Beta 2-0; a1 is game 1 MVP, a2 is game 2 MVP
TWO_GAME_SERIES = series('s1', '2026-02-23', 'a', 'b', [
    game('a', 'a1', [
        stat('a1', 10, 1, 5),
        stat('a2', 2, 3, 8),
        stat('b1', 4, 6, 2),
        stat('b2', 1, 7, 3),
    ]),
    game('a', 'a2', [
        stat('a1', 3, 2, 4),
        stat('a2', 8, 1, 9),
        stat('b1', 5, 5, 2),
        stat('b2', 2, 6, 4),
    ]),
])


@pytest.fixture(autouse=True)
def reset_lob_logger():
    """Drop handlers installed by setup_logging so they never outlive a test."""
    yield
    logger = logging.getLogger('lob')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def base_data():
    """Raw dataset dict: three teams, two players each, seeded table."""
    return copy.deepcopy(BASE_DATA)


@pytest.fixture
def make_dataset(base_data):
    """Factory building a TournamentDataset from the base data plus overrides."""

    def _make(series_matches=None, **overrides):
        data = copy.deepcopy(base_data)
        if series_matches is not None:
            data['seriesMatches'] = copy.deepcopy(series_matches)
        for key, value in overrides.items():
            if key == 'points_rule':
                data['tournament']['seriesPointsRule'] = value
            else:
                data[key] = copy.deepcopy(value)
        return TournamentDataset.model_validate(data)

    return _make


@pytest.fixture
def stats_dataset(make_dataset):
    """Dataset with the single two-game series Alpha vs Beta."""
    return make_dataset([TWO_GAME_SERIES])
