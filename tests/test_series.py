"""Unit tests for series scores, winners and game MVP inference."""

import pytest
from conftest import TWO_GAME_SERIES, game, series, stat

from lob.schemas import PlayerGameStats, SeriesGame, SeriesMatch
from lob.series import (
    apply_auto_game_mvps_to_dataset,
    get_game_mvp_player_id,
    get_game_team_kills,
    get_kda,
    get_series_games_with_team_rows,
    get_series_score,
    get_series_team_kill_totals,
    get_series_winner_team_id,
    infer_game_mvp_player_id,
    is_series_complete,
    sort_series_by_date_desc,
)


def make_series(winners):
    return SeriesMatch.model_validate(
        series('s1', '2026-02-23', 'a', 'b', [game(w, 'a1') for w in winners])
    )


def rows(*stats):
    return [PlayerGameStats.model_validate(s) for s in stats]


class TestKda:
    """Tests for the KDA formula."""

    def test_kda(self):
        assert get_kda(10, 2, 4) == 7.0

    def test_zero_deaths_counts_as_one(self):
        assert get_kda(3, 0, 5) == 8.0

    def test_no_stats(self):
        assert get_kda(0, 0, 0) == 0.0


class TestSeriesScore:
    """Tests for series score, winner and completion."""

    @pytest.mark.parametrize(
        'winners,expected_score,expected_winner',
        [
            ([], (0, 0), None),
            (['a'], (1, 0), None),
            (['a', 'b'], (1, 1), None),
            (['a', 'a'], (2, 0), 'a'),
            (['b', 'a', 'b'], (1, 2), 'b'),
            (['a', 'b', 'a'], (2, 1), 'a'),
        ],
    )
    def test_score_and_winner(self, winners, expected_score, expected_winner):
        s = make_series(winners)
        score = get_series_score(s)
        assert (score.team_a_wins, score.team_b_wins) == expected_score
        assert get_series_winner_team_id(s) == expected_winner
        assert is_series_complete(s) == (expected_winner is not None)

    def test_unknown_winner_counts_for_nobody(self):
        """A game won by a third team adds nothing to either side."""
        s = make_series(['a', 'c'])
        score = get_series_score(s)
        assert (score.team_a_wins, score.team_b_wins) == (1, 0)

    def test_team_a_checked_first(self):
        """Four games bypass the schema limit; team A reaching two wins takes it."""
        games = [SeriesGame.model_validate(game(w, 'a1')) for w in ['b', 'b', 'a', 'a']]
        s = SeriesMatch.model_construct(
            id='s1', date='2026-02-23', team_a_id='a', team_b_id='b', games=games
        )
        assert get_series_winner_team_id(s) == 'a'


class TestGameMvpInference:
    """Tests for recomputing the MVP of a game from its stat rows."""

    def test_highest_kda_wins(self):
        assert infer_game_mvp_player_id(rows(stat('p1', 10, 1, 5), stat('p2', 2, 1, 1))) == 'p1'

    def test_row_order_does_not_matter(self):
        stats = [stat('p1', 4, 2, 6), stat('p2', 7, 1, 0), stat('p3', 1, 0, 6)]
        assert infer_game_mvp_player_id(rows(*stats)) == 'p2'
        assert infer_game_mvp_player_id(rows(*reversed(stats))) == 'p2'

    def test_kda_tie_broken_by_kills(self):
        assert infer_game_mvp_player_id(rows(stat('p2', 2, 1, 2), stat('p1', 4, 1, 0))) == 'p1'

    def test_kills_tie_broken_by_assists(self):
        assert infer_game_mvp_player_id(rows(stat('p2', 2, 1, 1), stat('p1', 2, 2, 4))) == 'p1'

    def test_assists_tie_broken_by_fewer_deaths(self):
        assert infer_game_mvp_player_id(rows(stat('p2', 2, 1, 2), stat('p1', 2, 0, 2))) == 'p1'

    def test_full_tie_broken_by_player_id(self):
        assert infer_game_mvp_player_id(rows(stat('p-b', 3, 1, 3), stat('p-a', 3, 1, 3))) == 'p-a'

    def test_no_rows(self):
        assert infer_game_mvp_player_id([]) is None

    def test_blank_player_ids_ignored(self):
        stats = [
            PlayerGameStats.model_construct(player_id='  ', kills=20, deaths=0, assists=20),
            PlayerGameStats.model_construct(player_id='p1', kills=1, deaths=5, assists=0),
        ]
        assert infer_game_mvp_player_id(stats) == 'p1'
        assert infer_game_mvp_player_id(stats[:1]) is None

    def test_stored_mvp_overridden_by_stats(self):
        """A stale stored MVP never wins over the computed one."""
        g = SeriesGame.model_validate(game('a', 'p2', [stat('p1', 10, 1, 5), stat('p2', 2, 1, 1)]))
        assert get_game_mvp_player_id(g) == 'p1'

    def test_stored_mvp_used_without_stats(self):
        g = SeriesGame.model_validate(game('a', 'p2'))
        assert get_game_mvp_player_id(g) == 'p2'

    def test_apply_auto_mvps_returns_copy(self, make_dataset):
        stale = series('s1', '2026-02-23', 'a', 'b', [
            game('a', 'b1', [stat('a1', 10, 1, 5), stat('b1', 2, 1, 1)]),
            game('b', 'a1'),
        ])
        dataset = make_dataset([stale])

        updated = apply_auto_game_mvps_to_dataset(dataset)

        assert [g.mvp_player_id for g in updated.series_matches[0].games] == ['a1', 'a1']
        assert dataset.series_matches[0].games[0].mvp_player_id == 'b1'


class TestSeriesOrdering:
    """Tests for newest-first series ordering."""

    def test_sort_by_date_desc(self):
        matches = [
            SeriesMatch.model_validate(series('s-old', '2026-01-01', 'a', 'b', [])),
            SeriesMatch.model_validate(series('s-bad', 'not-a-date', 'a', 'b', [])),
            SeriesMatch.model_validate(series('s-a', '2026-02-01', 'a', 'b', [])),
            SeriesMatch.model_validate(series('s-new', '2026-03-01T18:00:00Z', 'a', 'b', [])),
            SeriesMatch.model_validate(series('s-b', '2026-02-01', 'a', 'b', [])),
        ]
        ordered = [s.id for s in sort_series_by_date_desc(matches)]
        assert ordered == ['s-new', 's-b', 's-a', 's-old', 's-bad']


class TestTeamKills:
    """Tests for splitting kills between the two sides of a series."""

    def test_series_kill_totals(self, stats_dataset):
        s = stats_dataset.series_matches[0]
        assert get_series_team_kill_totals(s, stats_dataset) == {'a': 23, 'b': 12}

    def test_game_team_kills(self, stats_dataset):
        s = stats_dataset.series_matches[0]
        kills = get_game_team_kills(s.games[0], s, stats_dataset)
        assert (kills.team_a_kills, kills.team_b_kills) == (12, 5)

    def test_unknown_and_third_team_players_skipped(self, make_dataset):
        s = series('s1', '2026-02-23', 'a', 'b', [
            game('a', 'a1', [stat('a1', 3, 0, 0), stat('c1', 9, 0, 0), stat('ghost', 7, 0, 0)]),
        ])
        dataset = make_dataset([s])
        assert get_series_team_kill_totals(dataset.series_matches[0], dataset) == {'a': 3, 'b': 0}

    def test_games_with_team_rows(self, stats_dataset):
        s = stats_dataset.series_matches[0]
        breakdowns = get_series_games_with_team_rows(s, stats_dataset)

        assert [b.game_index for b in breakdowns] == [1, 2]
        first = breakdowns[0]
        assert [r.player_id for r in first.team_a_rows] == ['a1', 'a2']
        assert [r.player_id for r in first.team_b_rows] == ['b1', 'b2']
        second = breakdowns[1]
        assert [r.player_id for r in second.team_a_rows] == ['a2', 'a1']
        assert second.team_a_rows[0].player_nick == 'A2'


def test_fixture_series_is_complete():
    assert is_series_complete(SeriesMatch.model_validate(TWO_GAME_SERIES))
