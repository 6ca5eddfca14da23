"""Local JSON storage for the tournament dataset.

Reads and writes leagueofbronze.json. Everything that comes in is schema
validated and integrity checked; the engine never sees an invalid dataset.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from .config import get_dataset_path
from .constants import MAX_REPORTED_ISSUES
from .schemas import TournamentDataset
from .series import apply_auto_game_mvps_to_dataset
from .utils import load_json, save_json, utc_now_iso
from .validators import validate_dataset

logger = logging.getLogger('lob.dataset_store')


def _format_issues(issues: list[str]) -> str:
    return ' | '.join(issues[:MAX_REPORTED_ISSUES])


def parse_dataset(data: Any) -> TournamentDataset:
    """
    Validate raw JSON data into a TournamentDataset.

    Args:
        data: Parsed JSON (dict)

    Returns:
        Validated TournamentDataset

    Raises:
        ValueError: If the structure or the cross references are invalid
    """
    try:
        dataset = TournamentDataset.model_validate(data)
    except ValidationError as e:
        issues = [
            f'{".".join(str(p) for p in err["loc"]) or "root"}: {err["msg"]}' for err in e.errors()
        ]
        raise ValueError(f'Invalid tournament dataset: {_format_issues(issues)}') from e

    errors = validate_dataset(dataset)
    if errors:
        raise ValueError(f'Invalid tournament dataset: {_format_issues(errors)}')

    return dataset


def load_dataset(path: Optional[Path | str] = None) -> TournamentDataset:
    """
    Load and validate the dataset file.

    Args:
        path: Dataset JSON path (default: configured dataset path)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If the dataset is invalid
    """
    path = Path(path) if path else get_dataset_path()
    data = load_json(path)
    try:
        dataset = parse_dataset(data)
    except ValueError as e:
        logger.error(f'{path}: {e}')
        raise ValueError(f'{path}: {e}') from e

    logger.debug(
        f'Loaded {dataset.tournament.name}: {len(dataset.teams)} teams, '
        f'{len(dataset.players)} players, {len(dataset.series_matches)} series'
    )
    return dataset


def normalize_dataset_for_save(
    dataset: TournamentDataset, now: Optional[datetime] = None
) -> TournamentDataset:
    """Copy of the dataset with tournament.lastUpdatedISO set to now (UTC)."""
    if now is None:
        stamp = utc_now_iso()
    else:
        stamp = now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
    tournament = dataset.tournament.model_copy(update={'last_updated_iso': stamp})
    return dataset.model_copy(update={'tournament': tournament})


def save_dataset(
    dataset: TournamentDataset,
    path: Optional[Path | str] = None,
    apply_auto_mvps: bool = True,
) -> TournamentDataset:
    """
    Validate and write the dataset file.

    Args:
        dataset: Dataset to save
        path: Output path (default: configured dataset path)
        apply_auto_mvps: Rewrite each game's stored MVP with the computed one

    Returns:
        The dataset exactly as written

    Raises:
        ValueError: If the dataset fails integrity checks
        OSError: If the file cannot be written
    """
    path = Path(path) if path else get_dataset_path()

    if apply_auto_mvps:
        dataset = apply_auto_game_mvps_to_dataset(dataset)
    dataset = normalize_dataset_for_save(dataset)

    errors = validate_dataset(dataset)
    if errors:
        logger.error(f'Refusing to save invalid dataset to {path}: {len(errors)} problems')
        raise ValueError(f'Invalid tournament dataset: {_format_issues(errors)}')

    save_json(path, dataset)
    logger.info(f'Dataset saved to {path}')
    return dataset
