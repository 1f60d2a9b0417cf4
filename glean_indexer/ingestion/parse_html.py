"""HTML parsing and extraction for TechDocs pages."""

import logging
from datetime import datetime
from typing import Optional

from bs4 import BeautifulSoup

from glean_indexer.core.constants import LAST_REVISED_FORMATS, LAST_REVISED_SELECTOR

logger = logging.getLogger(__name__)

# Artifacts mkdocs leaves in heading text
TITLE_REPLACEMENTS = [
    ("&amp;", "&"),
    ("&para;", ""),
    ("¶", ""),
    ("#", ""),
    ('"', ""),
]


def parse_date(text: str) -> Optional[datetime]:
    """Parse a last-revised date as rendered by the git revision plugin."""
    text = text.strip()
    for fmt in LAST_REVISED_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def extract_updated_at(html: str) -> datetime:
    """Extract the last-revised date, falling back to now."""
    soup = BeautifulSoup(html, "lxml")
    badge = soup.select_one(LAST_REVISED_SELECTOR)
    if badge:
        updated_at = parse_date(badge.get_text())
        if updated_at:
            return updated_at
        logger.debug(f"Unrecognised last-revised date: {badge.get_text()!r}")
    return datetime.now()


def extract_title(html: str) -> Optional[str]:
    """Extract the first h1 as a page title."""
    soup = BeautifulSoup(html, "lxml")
    h1 = soup.find("h1")
    if h1 is None:
        return None

    title = h1.get_text()
    for old, new in TITLE_REPLACEMENTS:
        title = title.replace(old, new)
    return title.strip()


def remove_navigation(html: str) -> str:
    """Remove every nav element and return the remaining markup.

    Uses html.parser so fragments are not wrapped in html/body elements.
    """
    soup = BeautifulSoup(html, "html.parser")
    for nav in soup.find_all("nav"):
        nav.decompose()
    return str(soup)
