#!/usr/bin/env python3
"""
Dataset Validation Script

Checks tournament dataset files against the schema and the cross-reference
rules (unique ids/slugs, known teams and players, valid game winners).
Prints every problem found.

Usage:
    python scripts/validate_dataset.py
    python scripts/validate_dataset.py data/leagueofbronze.json backups/*.json
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from lob.config import get_dataset_path
from lob.schemas import TournamentDataset
from lob.utils import load_json
from lob.validators import validate_dataset


def check_file(path: Path) -> list[str]:
    """
    Validate a single dataset file.

    Returns:
        List of problems (empty if the file is valid)
    """
    try:
        data = load_json(path)
    except FileNotFoundError:
        return [f'File not found: {path}']
    except json.JSONDecodeError as e:
        return [f'Invalid JSON: {e.msg} at position {e.pos}']

    try:
        dataset = TournamentDataset.model_validate(data)
    except ValidationError as e:
        return [
            f'{".".join(str(p) for p in err["loc"]) or "root"}: {err["msg"]}'
            for err in e.errors()
        ]

    return validate_dataset(dataset)


def main():
    parser = argparse.ArgumentParser(description="Validate tournament dataset files")
    parser.add_argument(
        "paths",
        nargs="*",
        help="Dataset files to check (defaults to the configured dataset)",
    )
    args = parser.parse_args()

    paths = [Path(p) for p in args.paths] or [get_dataset_path()]
    failed = 0

    for path in paths:
        problems = check_file(path)
        if not problems:
            print(f"✓ {path}")
            continue

        failed += 1
        print(f"✗ {path} ({len(problems)} problems)")
        for problem in problems:
            print(f"    - {problem}")

    if failed:
        print(f"\n{failed} of {len(paths)} files invalid")
        sys.exit(1)


if __name__ == "__main__":
    main()
