"""Headless-browser screenshots of project homepages."""

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image
from playwright.sync_api import sync_playwright

log = logging.getLogger(__name__)

VIEWPORT = {"width": 1280, "height": 800}
NAVIGATION_TIMEOUT_MS = 30_000
CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


def image_format_for(output_path: Path) -> str:
    return "WEBP" if Path(output_path).suffix == ".webp" else "PNG"


def write_image(png_bytes: bytes, output_path: Path):
    """Write a PNG capture to disk, re-encoding to WebP when the path asks for it."""
    output_path = Path(output_path)
    if image_format_for(output_path) == "WEBP":
        with Image.open(io.BytesIO(png_bytes)) as img:
            img.save(output_path, format="WEBP")
    else:
        output_path.write_bytes(png_bytes)


def _display_path(path: Path, root: Optional[Path]) -> str:
    if root is None:
        return str(path)
    try:
        return str(Path(path).resolve().relative_to(Path(root).resolve()))
    except ValueError:
        return str(path)


def take_screenshot(url: str, output_path: Path, root: Optional[Path] = None):
    """
    Capture the viewport of ``url`` into ``output_path``.

    A fresh browser is launched for every call and always closed afterwards,
    so a hung page cannot leak into the next project. Navigation waits for
    the load event and gives up after 30 seconds (the Playwright error is
    raised to the caller).
    """
    with sync_playwright() as p:
        browser = p.chromium.launch(args=CHROMIUM_ARGS)
        try:
            page = browser.new_page(viewport=VIEWPORT)
            page.goto(url, wait_until="load", timeout=NAVIGATION_TIMEOUT_MS)
            png_bytes = page.screenshot(type="png")
            write_image(png_bytes, output_path)
            log.info(f"  Screenshot saved to: {_display_path(output_path, root)}")
        finally:
            browser.close()
