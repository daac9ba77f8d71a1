#!/usr/bin/env python3
"""
Showcase Refresher
==================
Scans every project folder under the content root and, for each one that has
assets/Showcase.png (or .webp), checks whether the matching GitHub repository
has new commits since the last screenshot. If it does, the project's homepage
is captured in headless Chromium and the Showcase image is overwritten.

The commit time behind each screenshot is kept in a small JSON ledger
(.github/data/screenshot-timestamps.json by default) so that only changed
projects are re-captured.

Usage:
    python refresh_showcases.py

Configuration via environment variables or .env file (see settings.py).
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from functools import partial
from typing import Callable, Optional

from capture import take_screenshot
from github_graphql import GitHubClient
from projects import Project, discover_projects
from settings import ConfigError, Settings, load_settings
from timestamps import load_timestamps, save_timestamps

log = logging.getLogger("refresh_showcases")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(
                open(sys.stdout.fileno(), mode="w", encoding="utf-8", closefd=False)
            ),
        ],
    )


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class Outcome(str, Enum):
    SKIPPED = "skipped"
    UP_TO_DATE = "up-to-date"
    TIMESTAMP_ONLY = "timestamp-only"
    SCREENSHOT = "screenshot"
    FAILED = "failed"


@dataclass
class RunSummary:
    processed: int = 0
    screenshots: int = 0
    timestamp_only: int = 0
    up_to_date: int = 0
    skipped: int = 0
    failed: int = 0

    def record(self, outcome: Outcome):
        self.processed += 1
        if outcome == Outcome.SCREENSHOT:
            self.screenshots += 1
        elif outcome == Outcome.TIMESTAMP_ONLY:
            self.timestamp_only += 1
        elif outcome == Outcome.UP_TO_DATE:
            self.up_to_date += 1
        elif outcome == Outcome.SKIPPED:
            self.skipped += 1
        elif outcome == Outcome.FAILED:
            self.failed += 1

    @property
    def updated(self) -> bool:
        return self.screenshots > 0 or self.timestamp_only > 0


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    GitHub returns UTC times with a trailing 'Z'; naive values are taken as
    UTC. Raises ValueError for anything that is not ISO-8601.
    """
    if not isinstance(value, str):
        raise ValueError(f"Not a timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_newer(committed_date: str, last_screenshot: Optional[str]) -> bool:
    """True when the commit is strictly later than the recorded timestamp."""
    committed = parse_timestamp(committed_date)
    if not last_screenshot:
        return True
    try:
        recorded = parse_timestamp(last_screenshot)
    except ValueError:
        log.warning(f"  Ignoring unreadable ledger entry {last_screenshot!r}.")
        return True
    return committed > recorded


# ---------------------------------------------------------------------------
# Per-project refresh
# ---------------------------------------------------------------------------

def refresh_project(project: Project, timestamps: dict, client, owner: str,
                    capture: Callable, dry_run: bool = False) -> Outcome:
    """
    Decide whether ``project`` needs a new screenshot and act on it.

    Mutates ``timestamps`` in place. Errors from the API or the browser are
    raised; ``run`` turns them into a FAILED outcome.
    """
    info = client.fetch_repo_info(owner, project.name)

    if not info.committed_date:
        log.info(f"  Skipping: could not determine latest commit date for '{owner}/{project.name}'.")
        return Outcome.SKIPPED

    last_screenshot = timestamps.get(project.name)
    if not is_newer(info.committed_date, last_screenshot):
        log.info(f"  Up to date (last commit: {info.committed_date}, "
                 f"last screenshot: {last_screenshot}).")
        return Outcome.UP_TO_DATE

    if not info.homepage_url:
        log.info(f"  No homepage URL configured for '{owner}/{project.name}'; skipping screenshot.")
        # Record the commit so the project is not rechecked every run.
        timestamps[project.name] = info.committed_date
        return Outcome.TIMESTAMP_ONLY

    log.info(f"  New commits detected. Screenshotting: {info.homepage_url}")
    if dry_run:
        log.info("  DRY RUN — skipping capture")
    else:
        capture(info.homepage_url, project.showcase_path)

    timestamps[project.name] = info.committed_date
    log.info("  Done.")
    return Outcome.SCREENSHOT


# ---------------------------------------------------------------------------
# Main Loop
# ---------------------------------------------------------------------------

def run(settings: Settings, client=None, capture: Optional[Callable] = None) -> RunSummary:
    """Process every discovered project once, then write the ledger."""
    owns_client = client is None
    if client is None:
        client = GitHubClient(settings.github_token)
    if capture is None:
        capture = partial(take_screenshot, root=settings.content_root)

    timestamps = load_timestamps(settings.timestamps_file)
    summary = RunSummary()

    try:
        projects = discover_projects(settings.content_root)
        log.info(f"Found {len(projects)} project(s): {', '.join(p.name for p in projects)}")

        for project in projects:
            log.info(f"Processing: {project.name}")
            try:
                outcome = refresh_project(
                    project, timestamps, client, settings.repo_owner, capture,
                    dry_run=settings.dry_run,
                )
            except Exception as e:
                log.error(f"  Error processing '{project.name}': {e}")
                outcome = Outcome.FAILED
            summary.record(outcome)
    finally:
        if owns_client:
            client.close()

    if settings.dry_run:
        log.info(f"DRY RUN — not writing {settings.timestamps_file}")
    else:
        save_timestamps(settings.timestamps_file, timestamps)

    if summary.updated:
        log.info(f"Finished. Screenshots taken: {summary.screenshots}. "
                 f"Timestamp-only updates: {summary.timestamp_only}. Timestamps written.")
    else:
        log.info("Finished. No updates were necessary.")
    if summary.failed:
        log.warning(f"{summary.failed} project(s) failed; they will be retried next run.")

    return summary


def main():
    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging()
        log.error(f"Error: {e}")
        sys.exit(1)

    setup_logging(settings.log_level)
    log.info("=" * 60)
    log.info("SHOWCASE REFRESHER")
    log.info(f"Owner: {settings.repo_owner} | Root: {settings.content_root}")
    log.info(f"Dry Run: {settings.dry_run}")
    log.info("=" * 60)

    try:
        run(settings)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
