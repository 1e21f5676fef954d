"""Best-effort completeness checks against what the generator meant to produce."""

from collections.abc import Iterable
from pathlib import Path

from common.constants import PAGES_DIR, SOURCE_DIR

PAGE_EXTENSIONS = (".jsx", ".tsx")


def _page_file_stems(page_id: str) -> list[str]:
    """File stems a page identifier may have been written as ("about-us" -> AboutUsPage, AboutUs)."""
    words = page_id.replace("_", "-").replace(" ", "-").split("-")
    name = "".join(w[:1].upper() + w[1:] for w in words if w)
    if name.endswith("Page"):
        return [name, name[: -len("Page")]]
    return [f"{name}Page", name]


def find_missing_pages(frontend: Path, expected_pages: Iterable[str]) -> list[str]:
    """
    List expected pages that have no file under src/pages.

    Args:
        frontend: Root of the frontend tree
        expected_pages: Page identifiers the generator intended to produce

    Returns:
        Identifiers with no matching page file, in the given order
    """
    pages_dir = frontend / SOURCE_DIR / PAGES_DIR
    existing = (
        {p.stem for p in pages_dir.iterdir() if p.suffix in PAGE_EXTENSIONS}
        if pages_dir.is_dir()
        else set()
    )

    missing = []
    for page_id in expected_pages:
        if not any(stem in existing for stem in _page_file_stems(page_id)):
            missing.append(page_id)
    return missing
