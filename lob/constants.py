"""Constants for the League of Bronze tournament engine."""

from pathlib import Path

# Project layout
PROJECT_DIR = Path(__file__).parent.parent
DATA_DIR = PROJECT_DIR / 'data'

# Best-of-three series
SERIES_WINS_REQUIRED = 2
MAX_GAMES_PER_SERIES = 3
MAX_STATS_ROWS_PER_GAME = 20

# Standings sources
SOURCE_SEED = 'seed'
SOURCE_SERIES = 'series'

# Leaderboard metrics, in display order
METRIC_KILLS = 'kills'
METRIC_KDA = 'kda'
METRIC_MVPS = 'mvps'
METRIC_ASSISTS = 'assists'
METRIC_DEATHS_LEAST = 'deaths_least'

LEADERBOARD_METRICS = (
    METRIC_KILLS,
    METRIC_KDA,
    METRIC_MVPS,
    METRIC_ASSISTS,
    METRIC_DEATHS_LEAST,
)

LEADERBOARD_TITLES = {
    METRIC_KILLS: 'Most Kills',
    METRIC_KDA: 'Best KDA',
    METRIC_MVPS: 'Most Game MVPs',
    METRIC_ASSISTS: 'Most Assists',
    METRIC_DEATHS_LEAST: 'Fewest Deaths',
}

# Unparseable dates sort as the Unix epoch
EPOCH_ISO = '1970-01-01T00:00:00'

# Error listing cap when a dataset fails validation
MAX_REPORTED_ISSUES = 20
