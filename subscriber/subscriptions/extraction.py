"""Field extraction from listing and detail pages.

Page layouts vary, so text fields are read through an ordered chain of
strategies: the first one that yields non-blank text wins.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from urllib.parse import urljoin

from bs4 import Tag

# Leading thumbnail host label such as "t3." after the scheme separator
_THUMBNAIL_HOST = re.compile(r"^((?:[a-zA-Z][a-zA-Z0-9+.-]*:)?//)t\d+\.")


@dataclass(frozen=True)
class ExtractionStrategy:
    """Read the text of the first element matching a CSS selector."""

    selector: str

    def extract(self, node: Tag) -> str | None:
        element = node.select_one(self.selector)
        if element is None:
            return None
        text = element.get_text(strip=True)
        return text or None


def first_match(node: Tag, strategies: Iterable[ExtractionStrategy]) -> str | None:
    """Return the first non-blank value any strategy yields, else None."""
    for strategy in strategies:
        value = strategy.extract(node)
        if value is not None:
            return value
    return None


def strategies_for(selectors: Sequence[str]) -> tuple[ExtractionStrategy, ...]:
    """Build a strategy chain from selectors, in order."""
    return tuple(ExtractionStrategy(selector) for selector in selectors)


def _tags_of(element: Tag, attribute: str) -> list[str]:
    value = element.get(attribute)
    if value is None:
        return []
    if isinstance(value, list):
        value = " ".join(value)
    return value.split()


def find_candidate(
    document: Tag,
    candidate_selector: str,
    tags_attribute: str,
    tag: str,
) -> Tag | None:
    """
    Find the first candidate, in source order, carrying ``tag``.

    Args:
        document: Parsed listing page
        candidate_selector: CSS selector for candidate elements
        tags_attribute: Attribute holding space-separated tag ids
        tag: Required tag id

    Returns:
        The matching element, or None when no candidate carries the tag
    """
    for candidate in document.select(candidate_selector):
        if tag in _tags_of(candidate, tags_attribute):
            return candidate
    return None


def resolve_item_url(candidate: Tag, base_url: str) -> str:
    """
    Resolve the detail page URL of a candidate.

    Raises:
        ValueError: If the candidate has no anchor with an href
    """
    anchor = candidate.find("a")
    href = anchor.get("href") if anchor is not None else None
    if not href:
        raise ValueError("Candidate has no anchor with an href")
    return urljoin(base_url, href)


def extract_thumbnail(candidate: Tag, selector: str, attribute: str) -> str | None:
    """Return the candidate's thumbnail URL attribute, if present."""
    image = candidate.select_one(selector)
    if image is None:
        return None
    return image.get(attribute) or None


def normalize_thumbnail_url(url: str, canonical_subdomain: str) -> str:
    """
    Rewrite a numbered thumbnail host to the canonical one.

    ``https://t3.example.com/a/b.jpg`` becomes ``https://t1.example.com/a/b.jpg``
    for ``canonical_subdomain="t1"``. URLs on any other host are returned
    unchanged.
    """
    return _THUMBNAIL_HOST.sub(lambda m: f"{m.group(1)}{canonical_subdomain}.", url, count=1)
