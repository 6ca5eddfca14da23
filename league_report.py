#!/usr/bin/env python3
"""
League of Bronze report CLI

Prints the standings table, the latest series and the leaderboards for a
tournament dataset, and optionally exports them.

Usage:
    python league_report.py
    python league_report.py --dataset data/leagueofbronze.json --top 10
    python league_report.py --team t-alpha --from 2026-02-01 --to 2026-02-28
    python league_report.py --export-json web/overview.json --export-excel exports/league.xlsx
    python league_report.py --export-excel
    python league_report.py --apply-auto-mvps
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from lob import (
    AggregationFilters,
    compute_leaderboards,
    compute_standings,
    create_indexes,
    get_latest_series,
    load_dataset,
    save_dataset,
)
from lob.config import get_export_dir, get_leaderboard_size, get_log_dir
from lob.constants import LEADERBOARD_METRICS, LEADERBOARD_TITLES, METRIC_KDA
from lob.export import JSON_EXPORT_FILENAME, export_overview_excel, export_overview_json
from lob.logging_config import setup_logging


def print_standings(dataset, quiet: bool = False) -> None:
    standings = compute_standings(dataset)

    print("\n" + "=" * 72)
    print(f"STANDINGS - {dataset.tournament.name} (source: {standings.source})")
    print("=" * 72)
    print(f"  {'Pos':>3}  {'Team':<24} {'P':>3} {'W':>3} {'L':>3} {'Pts':>4} {'GW':>3} {'GL':>3} {'GD':>4} {'Win%':>6}")
    print("  " + "-" * 68)
    for row in standings.rows:
        print(
            f"  {row.position:>3}  {row.team_name[:24]:<24} {row.series_played:>3} {row.series_won:>3} "
            f"{row.series_lost:>3} {row.points:>4} {row.games_won:>3} {row.games_lost:>3} "
            f"{row.game_diff:>+4} {row.series_win_rate:>5.1f}%"
        )

    if quiet:
        return

    indexes = create_indexes(dataset)
    latest = get_latest_series(dataset)
    if latest:
        print("\nLatest series:")
    for summary in latest:
        series = summary.series
        team_a = indexes.teams_by_id.get(series.team_a_id)
        team_b = indexes.teams_by_id.get(series.team_b_id)
        status = "final" if summary.is_complete else "in progress"
        mvp = ""
        if summary.mvp:
            player = indexes.players_by_id.get(summary.mvp.player_id)
            mvp = f" - MVP {player.nick if player else summary.mvp.player_id}"
        print(
            f"  {series.date}  {team_a.name if team_a else series.team_a_id} "
            f"{summary.score.team_a_wins}-{summary.score.team_b_wins} "
            f"{team_b.name if team_b else series.team_b_id} ({status}){mvp}"
        )


def print_leaderboards(dataset, filters: AggregationFilters, top: int) -> None:
    boards = compute_leaderboards(dataset, filters)

    print("\n" + "=" * 72)
    print("LEADERBOARDS")
    print("=" * 72)
    for metric in LEADERBOARD_METRICS:
        rows = boards[metric][:top]
        print(f"\n  {LEADERBOARD_TITLES[metric]}:")
        if not rows:
            print("    (no games recorded)")
            continue
        for row in rows:
            value = f"{row.value:.2f}" if metric == METRIC_KDA else f"{int(row.value)}"
            print(f"    {row.position:>2}. {row.player.player_nick:<20} {row.player.team_name[:20]:<20} {value:>7}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="League of Bronze standings and leaderboards")
    parser.add_argument(
        "--dataset", "-d",
        default=None,
        help="Path to the tournament dataset JSON (defaults to the configured dataset)",
    )
    parser.add_argument("--team", default=None, help="Restrict leaderboards to one team id")
    parser.add_argument("--from", dest="from_date", default=None, help="First series date (YYYY-MM-DD)")
    parser.add_argument("--to", dest="to_date", default=None, help="Last series date (YYYY-MM-DD)")
    parser.add_argument(
        "--top", "-n",
        type=int,
        default=None,
        help="Rows per leaderboard (defaults to league config)",
    )
    parser.add_argument(
        "--export-json",
        nargs="?",
        const="",
        default=None,
        help="Write the overview JSON (to this path, or the configured export dir)",
    )
    parser.add_argument(
        "--export-excel",
        nargs="?",
        const="",
        default=None,
        help="Write an Excel workbook (to this path, or the configured export dir)",
    )
    parser.add_argument(
        "--apply-auto-mvps",
        action="store_true",
        help="Rewrite every game's stored MVP with the computed one and save the dataset",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print the standings table")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    setup_logging(
        log_dir=get_log_dir(),
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=args.verbose,
    )

    try:
        dataset = load_dataset(args.dataset)
    except (FileNotFoundError, json.JSONDecodeError, ValueError) as e:
        print(f"❌ Could not load dataset: {e}")
        sys.exit(1)

    if args.apply_auto_mvps:
        try:
            dataset = save_dataset(dataset, args.dataset, apply_auto_mvps=True)
        except (ValueError, OSError) as e:
            print(f"❌ Could not save dataset: {e}")
            sys.exit(1)
        print("Stored game MVPs updated from stats.")

    print_standings(dataset, quiet=args.quiet)

    if not args.quiet:
        filters = AggregationFilters(team_id=args.team, from_date=args.from_date, to_date=args.to_date)
        print_leaderboards(dataset, filters, args.top or get_leaderboard_size())

    if args.export_json is not None:
        output_path = Path(args.export_json or get_export_dir() / JSON_EXPORT_FILENAME)
        export_overview_json(dataset, output_path)
        print(f"\nOverview saved to {output_path}")

    if args.export_excel is not None:
        output_path = export_overview_excel(dataset, args.export_excel or None)
        print(f"Workbook saved to {output_path}")


if __name__ == "__main__":
    main()
