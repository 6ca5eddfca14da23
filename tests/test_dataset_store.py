"""Tests for loading, validating and saving the dataset file."""

import json
from datetime import datetime, timezone

import pytest
from conftest import TWO_GAME_SERIES

from lob.config import CONFIG_PATH, clear_config_cache, get_config, get_dataset_path
from lob.constants import PROJECT_DIR
from lob.dataset_store import load_dataset, normalize_dataset_for_save, parse_dataset, save_dataset
from lob.standings import compute_standings


@pytest.fixture
def dataset_file(tmp_path, base_data):
    base_data['seriesMatches'] = [TWO_GAME_SERIES]
    path = tmp_path / 'leagueofbronze.json'
    path.write_text(json.dumps(base_data), encoding='utf-8')
    return path


class TestLoadDataset:
    """Tests for load_dataset and parse_dataset."""

    def test_load(self, dataset_file):
        dataset = load_dataset(dataset_file)

        assert dataset.tournament.name == 'Test Cup'
        assert dataset.series_matches[0].games[1].stats_by_player[1].player_id == 'a2'

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / 'missing.json')

    def test_malformed_json(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{"teams": [', encoding='utf-8')
        with pytest.raises(json.JSONDecodeError):
            load_dataset(path)

    def test_schema_error(self, base_data):
        base_data['seriesMatches'] = [json.loads(json.dumps(TWO_GAME_SERIES))]
        base_data['seriesMatches'][0]['games'][0]['statsByPlayer'][0]['kills'] = -1

        with pytest.raises(ValueError, match='Invalid tournament dataset: seriesMatches.0.games.0'):
            parse_dataset(base_data)

    @pytest.mark.parametrize('key', ['teams', 'players', 'seriesMatches'])
    def test_missing_collection_rejected(self, base_data, key):
        """A truncated file does not load as an empty league."""
        del base_data[key]
        with pytest.raises(ValueError, match=f'{key}: Field required'):
            parse_dataset(base_data)

    def test_missing_format_rejected(self, base_data):
        del base_data['tournament']['format']
        with pytest.raises(ValueError, match='tournament.format: Field required'):
            parse_dataset(base_data)

    def test_missing_seed_defaults_to_empty(self, base_data):
        del base_data['standingsSeed']
        assert parse_dataset(base_data).standings_seed == []

    def test_too_many_games(self, base_data):
        s = json.loads(json.dumps(TWO_GAME_SERIES))
        s['games'] = s['games'] * 2
        base_data['seriesMatches'] = [s]

        with pytest.raises(ValueError, match='seriesMatches.0.games'):
            parse_dataset(base_data)

    def test_integrity_error_names_file(self, tmp_path, base_data):
        base_data['standingsSeed'].append({'teamId': 'zz', 'played': 0, 'points': 0})
        path = tmp_path / 'bad.json'
        path.write_text(json.dumps(base_data), encoding='utf-8')

        with pytest.raises(ValueError, match='standingsSeed.3.teamId') as exc_info:
            load_dataset(path)
        assert str(path) in str(exc_info.value)

    def test_issue_list_capped(self, base_data):
        base_data['standingsSeed'] = [
            {'teamId': f'zz{i}', 'played': 0, 'points': 0} for i in range(30)
        ]
        with pytest.raises(ValueError) as exc_info:
            parse_dataset(base_data)
        assert str(exc_info.value).count(' | ') == 19

    def test_shipped_sample(self):
        dataset = load_dataset(PROJECT_DIR / 'data' / 'leagueofbronze.json')
        standings = compute_standings(dataset)

        assert standings.source == 'series'
        assert [r.team_id for r in standings.rows] == ['t-lobos', 't-corvos', 't-aguias']
        assert standings.rows[0].points == 3


class TestSaveDataset:
    """Tests for save_dataset and normalize_dataset_for_save."""

    def test_normalize_sets_timestamp(self, stats_dataset):
        now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        normalized = normalize_dataset_for_save(stats_dataset, now=now)

        assert normalized.tournament.last_updated_iso == '2026-03-01T12:00:00.000Z'
        assert stats_dataset.tournament.last_updated_iso == '2026-02-23T00:00:00.000Z'

    def test_round_trip(self, dataset_file, tmp_path):
        dataset = load_dataset(dataset_file)
        out = tmp_path / 'out' / 'saved.json'

        written = save_dataset(dataset, out)

        text = out.read_text(encoding='utf-8')
        assert text.endswith('\n')
        raw = json.loads(text)
        assert 'seriesMatches' in raw
        assert raw['tournament']['lastUpdatedISO'].endswith('Z')
        assert load_dataset(out) == written

    def test_save_rewrites_stale_mvps(self, make_dataset, tmp_path):
        s = json.loads(json.dumps(TWO_GAME_SERIES))
        s['games'][0]['mvpPlayerId'] = 'b2'
        dataset = make_dataset([s])
        out = tmp_path / 'saved.json'

        save_dataset(dataset, out)
        raw = json.loads(out.read_text(encoding='utf-8'))
        assert raw['seriesMatches'][0]['games'][0]['mvpPlayerId'] == 'a1'

        save_dataset(dataset, out, apply_auto_mvps=False)
        raw = json.loads(out.read_text(encoding='utf-8'))
        assert raw['seriesMatches'][0]['games'][0]['mvpPlayerId'] == 'b2'

    def test_refuses_invalid_dataset(self, make_dataset, tmp_path):
        dataset = make_dataset([], standingsSeed=[{'teamId': 'zz', 'played': 0, 'points': 0}])
        out = tmp_path / 'saved.json'

        with pytest.raises(ValueError, match='unknown team'):
            save_dataset(dataset, out)
        assert not out.exists()


class TestConfig:
    """Tests for league configuration."""

    def test_shipped_config(self):
        clear_config_cache()
        config = get_config()

        assert CONFIG_PATH.exists()
        assert config.latest_series_limit == 3
        assert config.leaderboard_size == 5

    def test_dataset_path_default(self, monkeypatch):
        monkeypatch.delenv('LOB_DATASET_PATH', raising=False)
        assert get_dataset_path() == PROJECT_DIR / 'data' / 'leagueofbronze.json'

    def test_dataset_path_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv('LOB_DATASET_PATH', str(tmp_path / 'other.json'))
        assert get_dataset_path() == tmp_path / 'other.json'

    def test_default_dataset_path_used(self, monkeypatch, dataset_file):
        monkeypatch.setenv('LOB_DATASET_PATH', str(dataset_file))
        assert load_dataset().tournament.name == 'Test Cup'
