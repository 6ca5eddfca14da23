"""Export derived league views for the web site and for spreadsheets."""

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import openpyxl
from openpyxl.styles import Font

from .config import get_export_dir
from .constants import LEADERBOARD_METRICS, LEADERBOARD_TITLES
from .models import DatasetOverview, LeaderboardRow, SeriesSummary
from .overview import get_dataset_overview
from .schemas import TournamentDataset
from .utils import save_json

logger = logging.getLogger('lob.export')

JSON_EXPORT_FILENAME = 'overview.json'
EXCEL_EXPORT_FILENAME = 'league.xlsx'

STANDINGS_COLUMNS = [
    ('Pos', 'position'),
    ('Team', 'team_name'),
    ('Played', 'series_played'),
    ('Won', 'series_won'),
    ('Lost', 'series_lost'),
    ('Points', 'points'),
    ('Games Won', 'games_won'),
    ('Games Lost', 'games_lost'),
    ('Game Diff', 'game_diff'),
    ('Win %', 'series_win_rate'),
]

PLAYER_COLUMNS = [
    ('Player', 'player_nick'),
    ('Team', 'team_name'),
    ('Games', 'games_played'),
    ('Kills', 'kills'),
    ('Deaths', 'deaths'),
    ('Assists', 'assists'),
    ('KDA', 'kda'),
    ('Game MVPs', 'game_mvps'),
    ('Series MVPs', 'series_mvps'),
]

TEAM_COLUMNS = [
    ('Team', 'team_name'),
    ('Games', 'games_played'),
    ('Kills', 'kills'),
    ('Deaths', 'deaths'),
    ('Assists', 'assists'),
    ('KDA', 'kda'),
    ('Game MVPs', 'game_mvps'),
    ('Series MVPs', 'series_mvps'),
    ('Game Diff', 'game_diff'),
]

ROUNDED_FIELDS = ('kda', 'series_win_rate', 'value')


def _rounded(row: dict[str, Any]) -> dict[str, Any]:
    for key in ROUNDED_FIELDS:
        if isinstance(row.get(key), float):
            row[key] = round(row[key], 2)
    return row


def _summary_to_dict(summary: SeriesSummary) -> dict[str, Any]:
    return {
        'series': summary.series.model_dump(mode='json', by_alias=True, exclude_none=True),
        'score': asdict(summary.score),
        'winner_team_id': summary.winner_team_id,
        'is_complete': summary.is_complete,
        'mvp': _rounded(asdict(summary.mvp)) if summary.mvp else None,
    }


def _board_to_list(rows: list[LeaderboardRow]) -> list[dict[str, Any]]:
    return [
        _rounded(
            {
                'position': row.position,
                'metric': row.metric,
                'value': row.value,
                'player': _rounded(asdict(row.player)),
            }
        )
        for row in rows
    ]


def overview_to_dict(overview: DatasetOverview) -> dict[str, Any]:
    """
    Convert an overview into JSON-ready data.

    Series keep the dataset's camelCase keys; derived values use snake_case.
    KDA, win rates and leaderboard values are rounded to 2 decimals.
    """
    return {
        'standings': {
            'source': overview.standings.source,
            'rows': [_rounded(asdict(row)) for row in overview.standings.rows],
        },
        'player_aggregates': [_rounded(asdict(p)) for p in overview.player_aggregates],
        'team_aggregates': [_rounded(asdict(t)) for t in overview.team_aggregates],
        'leaderboards': {
            metric: _board_to_list(rows) for metric, rows in overview.leaderboards.items()
        },
        'series_summaries': [_summary_to_dict(s) for s in overview.series_summaries],
    }


def export_overview_json(
    dataset: TournamentDataset, output_path: Optional[Path | str] = None
) -> dict[str, Any]:
    """
    Write the dataset overview as JSON for the web site.

    Args:
        dataset: Tournament dataset
        output_path: File to write (default: overview.json in the export dir)

    Returns:
        The exported data
    """
    output_path = Path(output_path) if output_path else get_export_dir() / JSON_EXPORT_FILENAME
    data = {
        'tournament': dataset.tournament.name,
        'last_updated': dataset.tournament.last_updated_iso,
        'generated_at': datetime.now(timezone.utc).isoformat(),
        **overview_to_dict(get_dataset_overview(dataset)),
    }
    save_json(output_path, data)
    logger.info(f'Overview exported to {output_path}')
    return data


def _write_sheet(ws, columns: list[tuple[str, str]], rows: list[dict[str, Any]]) -> None:
    ws.append([header for header, _ in columns])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append([row.get(key) for _, key in columns])


def export_overview_excel(
    dataset: TournamentDataset, output_path: Optional[Path | str] = None
) -> Path:
    """
    Write standings, aggregates, series and leaderboards to an Excel workbook.

    Sheets: Standings, Players, Teams, Series, then one per leaderboard.

    Args:
        dataset: Tournament dataset
        output_path: .xlsx file to write (default: league.xlsx in the export dir)

    Returns:
        Path of the written workbook
    """
    output_path = Path(output_path) if output_path else get_export_dir() / EXCEL_EXPORT_FILENAME
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = overview_to_dict(get_dataset_overview(dataset))
    team_names = {team.id: team.name for team in dataset.teams}
    player_nicks = {player.id: player.nick for player in dataset.players}

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Standings'
    _write_sheet(ws, STANDINGS_COLUMNS, data['standings']['rows'])

    _write_sheet(wb.create_sheet('Players'), PLAYER_COLUMNS, data['player_aggregates'])
    _write_sheet(wb.create_sheet('Teams'), TEAM_COLUMNS, data['team_aggregates'])

    series_rows = []
    for summary in data['series_summaries']:
        series = summary['series']
        mvp = summary['mvp']
        series_rows.append(
            {
                'id': series['id'],
                'date': series['date'],
                'team_a': team_names.get(series['teamAId'], series['teamAId']),
                'team_b': team_names.get(series['teamBId'], series['teamBId']),
                'score': f"{summary['score']['team_a_wins']}-{summary['score']['team_b_wins']}",
                'winner': team_names.get(summary['winner_team_id'], '') if summary['is_complete'] else '',
                'mvp': player_nicks.get(mvp['player_id'], mvp['player_id']) if mvp else '',
            }
        )
    _write_sheet(
        wb.create_sheet('Series'),
        [('Series', 'id'), ('Date', 'date'), ('Team A', 'team_a'), ('Team B', 'team_b'),
         ('Score', 'score'), ('Winner', 'winner'), ('MVP', 'mvp')],
        series_rows,
    )

    for metric in LEADERBOARD_METRICS:
        board = [
            {'position': row['position'], 'player': row['player']['player_nick'],
             'team': row['player']['team_name'], 'value': row['value']}
            for row in data['leaderboards'][metric]
        ]
        _write_sheet(
            wb.create_sheet(LEADERBOARD_TITLES[metric]),
            [('Pos', 'position'), ('Player', 'player'), ('Team', 'team'), ('Value', 'value')],
            board,
        )

    wb.save(output_path)
    wb.close()
    logger.info(f'Workbook exported to {output_path}')
    return output_path
