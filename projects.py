"""Discovery of project folders that carry a showcase image."""

from dataclasses import dataclass
from pathlib import Path

SHOWCASE_NAMES = ("Showcase.png", "Showcase.webp")


@dataclass
class Project:
    name: str
    path: Path

    @property
    def assets_dir(self) -> Path:
        return self.path / "assets"

    @property
    def showcase_path(self) -> Path:
        """The image to overwrite. Prefers .png; falls back to .webp."""
        png = self.assets_dir / "Showcase.png"
        return png if png.exists() else self.assets_dir / "Showcase.webp"


def has_showcase(project_dir: Path) -> bool:
    assets = project_dir / "assets"
    if not assets.is_dir():
        return False
    # Exact, case-sensitive names only.
    files = {entry.name for entry in assets.iterdir()}
    return any(name in files for name in SHOWCASE_NAMES)


def discover_projects(root_dir: Path) -> list[Project]:
    """
    List project folders directly under ``root_dir``.

    Hidden directories (starting with '.') and plain files are skipped, and
    only folders containing assets/Showcase.png or assets/Showcase.webp are
    returned.
    """
    root_dir = Path(root_dir)
    projects = []
    for entry in root_dir.iterdir():
        if not entry.is_dir() or entry.name.startswith("."):
            continue
        if has_showcase(entry):
            projects.append(Project(name=entry.name, path=entry))
    return projects
