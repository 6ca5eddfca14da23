"""Utility functions for file I/O, text collation and date handling."""

import json
import logging
import unicodedata
from datetime import datetime, time, timezone
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from .constants import EPOCH_ISO

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('lob.utils')

EPOCH = datetime.fromisoformat(EPOCH_ISO)


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with optional schema validation.

    Args:
        path: Path to JSON file (str or Path object)
        schema: Optional Pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        data = load_json('data/leagueofbronze.json')

        from lob.schemas import LeagueConfig
        config = load_json('data/league_config.json', schema=LeagueConfig)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
        logger.debug(f'Successfully loaded JSON from: {path}')
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        try:
            validated = schema.model_validate(data)
            logger.debug(f'Schema validation passed for: {path}')
            return validated
        except ValidationError as e:
            logger.error(f'Schema validation failed for {path}: {e}')
            raise ValueError(f'Schema validation failed for {path}:\n{e}') from e

    return data


def save_json(
    path: Path | str,
    data: Any,
    indent: int = 2,
    create_dirs: bool = True,
) -> None:
    """
    Save data as JSON file.

    Pydantic models are dumped with their JSON aliases so a saved dataset
    keeps the camelCase keys it was loaded with.

    Args:
        path: Path to write to (str or Path object)
        data: Data to serialize (must be JSON-serializable or Pydantic model)
        indent: Indentation level (default: 2 spaces)
        create_dirs: Create parent directories if they don't exist (default: True)

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)

    logger.debug(f'Saving JSON to: {path}')

    if create_dirs:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f'Failed to create directory {path.parent}: {e}')
            raise

    if isinstance(data, BaseModel):
        json_data = data.model_dump(mode='json', by_alias=True, exclude_none=True)
    else:
        json_data = data

    try:
        text = json.dumps(json_data, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e

    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text + '\n')
        logger.debug(f'Successfully saved JSON to: {path}')
    except OSError as e:
        logger.error(f'Failed to write file {path}: {e}')
        raise


def _strip_accents(text: str) -> str:
    normalized = unicodedata.normalize('NFKD', text)
    return ''.join(ch for ch in normalized if not unicodedata.combining(ch))


def collation_key(text: str) -> tuple[str, str, str]:
    """
    Sort key approximating locale-aware (pt-BR) string ordering.

    Letters compare first ignoring accents and case, then accents break
    ties, then case (lowercase first).

    Examples:
        sorted(['beta', 'Álvaro', 'alpha'], key=collation_key)
        -> ['alpha', 'Álvaro', 'beta']
    """
    text = text or ''
    return (_strip_accents(text).casefold(), text.casefold(), text.swapcase())


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string.

    Timezone-aware values are converted to naive UTC so every parsed value
    compares with every other one.

    Returns:
        datetime, or None if the value is empty or unparseable
    """
    if not value or not value.strip():
        return None

    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_date_start(value: Optional[str]) -> Optional[datetime]:
    """Start of the day (00:00:00) for a date filter bound, or None."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return datetime.combine(parsed.date(), time.min)


def to_date_end(value: Optional[str]) -> Optional[datetime]:
    """End of the day (23:59:59.999999) for a date filter bound, or None."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return datetime.combine(parsed.date(), time.max)


def date_sort_value(value: Optional[str]) -> datetime:
    """Parsed date for ordering purposes; unparseable dates sort as the epoch."""
    return parse_date(value) or EPOCH


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f'{now.microsecond // 1000:03d}Z'
