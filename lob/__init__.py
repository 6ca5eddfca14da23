from .schemas import (
    Player,
    PlayerGameStats,
    SeriesGame,
    SeriesMatch,
    StandingsSeedRow,
    Team,
    TournamentDataset,
)
from .models import (
    AggregationFilters,
    DatasetOverview,
    LeaderboardRow,
    PlayerAggregate,
    SeriesMvpResult,
    SeriesSummary,
    Standings,
    StandingsRow,
    TeamAggregate,
)
from .indexing import (
    create_indexes,
    get_team_by_slug,
    get_player_by_slug,
    get_players_for_team,
    get_series_by_id,
)
from .series import (
    get_kda,
    get_series_score,
    get_series_winner_team_id,
    is_series_complete,
    infer_game_mvp_player_id,
    get_game_mvp_player_id,
    get_series_team_kill_totals,
    get_game_team_kills,
    get_series_games_with_team_rows,
    apply_auto_game_mvps_to_dataset,
)
from .mvp import compute_series_mvp
from .standings import compute_standings
from .aggregates import (
    compute_player_aggregates,
    compute_team_aggregates,
    compute_leaderboards,
    get_player_leaderboard_positions,
)
from .overview import (
    compute_series_summaries,
    get_latest_series,
    get_team_series_history,
    get_player_game_history,
    get_dataset_overview,
)
from .validators import validate_dataset
from .dataset_store import load_dataset, save_dataset, parse_dataset

__all__ = [
    # Dataset schemas
    'Player',
    'PlayerGameStats',
    'SeriesGame',
    'SeriesMatch',
    'StandingsSeedRow',
    'Team',
    'TournamentDataset',
    # Derived models
    'AggregationFilters',
    'DatasetOverview',
    'LeaderboardRow',
    'PlayerAggregate',
    'SeriesMvpResult',
    'SeriesSummary',
    'Standings',
    'StandingsRow',
    'TeamAggregate',
    # Indexing
    'create_indexes',
    'get_team_by_slug',
    'get_player_by_slug',
    'get_players_for_team',
    'get_series_by_id',
    # Series arithmetic
    'get_kda',
    'get_series_score',
    'get_series_winner_team_id',
    'is_series_complete',
    'infer_game_mvp_player_id',
    'get_game_mvp_player_id',
    'get_series_team_kill_totals',
    'get_game_team_kills',
    'get_series_games_with_team_rows',
    'apply_auto_game_mvps_to_dataset',
    # MVP
    'compute_series_mvp',
    # Standings
    'compute_standings',
    # Aggregates and leaderboards
    'compute_player_aggregates',
    'compute_team_aggregates',
    'compute_leaderboards',
    'get_player_leaderboard_positions',
    # Read views
    'compute_series_summaries',
    'get_latest_series',
    'get_team_series_history',
    'get_player_game_history',
    'get_dataset_overview',
    # Storage
    'validate_dataset',
    'load_dataset',
    'save_dataset',
    'parse_dataset',
]
