"""
Runtime configuration for the showcase refresher.

Everything is read once from environment variables (or a .env file) into a
frozen Settings value that the rest of the code receives explicitly.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_REPO_OWNER = "tanay-787"
DEFAULT_TIMESTAMPS_FILE = Path(".github") / "data" / "screenshot-timestamps.json"


class ConfigError(Exception):
    """Raised when a required setting is missing."""


@dataclass(frozen=True)
class Settings:
    github_token: str
    repo_owner: str = DEFAULT_REPO_OWNER
    content_root: Path = Path(".")
    timestamps_file: Path = DEFAULT_TIMESTAMPS_FILE
    dry_run: bool = False
    log_level: str = "INFO"


def _env_flag(value: Optional[str]) -> bool:
    return (value or "false").strip().lower() == "true"


def load_settings(env: Optional[dict] = None) -> Settings:
    """
    Build Settings from the process environment.

    Pass ``env`` to read from a plain mapping instead (the .env file is only
    loaded when reading the real environment).
    """
    if env is None:
        load_dotenv()
        env = os.environ

    token = env.get("GITHUB_TOKEN", "").strip()
    if not token:
        raise ConfigError("GITHUB_TOKEN environment variable is required.")

    root = Path(env.get("CONTENT_ROOT") or Path.cwd()).resolve()
    timestamps = env.get("TIMESTAMPS_FILE")
    timestamps_file = Path(timestamps) if timestamps else root / DEFAULT_TIMESTAMPS_FILE
    if not timestamps_file.is_absolute():
        timestamps_file = root / timestamps_file

    return Settings(
        github_token=token,
        repo_owner=env.get("REPO_OWNER") or DEFAULT_REPO_OWNER,
        content_root=root,
        timestamps_file=timestamps_file,
        dry_run=_env_flag(env.get("DRY_RUN")),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )
