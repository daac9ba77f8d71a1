"""Persistence for the screenshot ledger (project name -> ISO-8601 commit time)."""

import json
import logging
from pathlib import Path

log = logging.getLogger(__name__)


def load_timestamps(path: Path) -> dict:
    """Read the ledger, starting fresh if the file is missing or unreadable."""
    path = Path(path)
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning(f"Could not parse {path.name} ({e}); starting fresh.")
        return {}

    if not isinstance(data, dict):
        log.warning(f"{path.name} does not hold a JSON object; starting fresh.")
        return {}

    return data


def save_timestamps(path: Path, timestamps: dict):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(json.dumps(timestamps, indent=2) + "\n")
