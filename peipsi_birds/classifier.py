"""Link classification for the bird guide's listing page.

The listing page mixes three kinds of links, told apart by URL path:

- species pages, three segments deep outside ``/reference/``
  (``/poganki/chomga/bolshaya/``);
- order and family headings under ``/reference/``
  (``/reference/poganki/``, ``/reference/poganki/chomga/``), whose
  anchor text names the taxon;
- everything else (navigation, language switch, external links).

Headings are then split by the case of their text: an all-uppercase
label is an order, a capitalized one is a family.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from peipsi_birds.common.exceptions import AmbiguousLinkShapeException
from peipsi_birds.common.page_element import Link, PageElement
from peipsi_birds.data_types import (
    FamilyMarker,
    LeafLink,
    LinkClass,
    OrderMarker,
)

logger = logging.getLogger(__name__)

LEAF_SHAPE = "leaf"
SECTION_SHAPE = "reference-section"
SUBSECTION_SHAPE = "reference-subsection"

# Matched against the URL path; \w is ASCII-only like the site's slugs.
URL_SHAPES: dict[str, re.Pattern[str]] = {
    LEAF_SHAPE: re.compile(
        r"/(?!(?:reference|en)/)[a-z]+/\w+/[a-z0-9-]+/$", re.ASCII
    ),
    SECTION_SHAPE: re.compile(r"(?:^|/)reference/\w+/$", re.ASCII),
    SUBSECTION_SHAPE: re.compile(
        r"(?:^|/)reference/\w+/[a-z-]+/$", re.ASCII
    ),
}


def match_shapes(url: str) -> list[str]:
    """Names of the URL shapes the URL's path matches."""
    path = urlsplit(url).path
    return [
        name for name, pattern in URL_SHAPES.items() if pattern.search(path)
    ]


def is_candidate(url: str) -> bool:
    return bool(match_shapes(url))


def classify_heading(token: str) -> OrderMarker | FamilyMarker | None:
    """Decide whether a heading label names an order or a family.

    Args:
        token: The heading's visible text.

    Returns:
        OrderMarker for an all-uppercase label, FamilyMarker for a label
        starting with an uppercase letter, None for anything else
        (including an empty label).
    """
    if token.isupper():
        return OrderMarker(token)
    if token[:1].isupper():
        return FamilyMarker(token)
    return None


def classify(url: str, text: str) -> LinkClass:
    """Classify a candidate link.

    Args:
        url: Absolute URL of the link.
        text: Visible text of the link (may be empty).

    Returns:
        LeafLink, OrderMarker, FamilyMarker, or None if the link should
        be discarded.

    Raises:
        AmbiguousLinkShapeException: If the URL has both the species
            shape and a heading shape.
    """
    shapes = match_shapes(url)
    if not shapes:
        return None

    if LEAF_SHAPE in shapes:
        if len(shapes) > 1:
            raise AmbiguousLinkShapeException(url, text, shapes)
        return LeafLink(url)

    result = classify_heading(text)
    if result is None:
        logger.debug(f"Discarding heading with unrecognized label {text!r}")
    return result


def discover_candidates(listing: PageElement) -> list[Link]:
    """Collect the listing page's links that have one of the known shapes.

    Args:
        listing: Snapshot of the listing page, hidden sections expanded.

    Returns:
        Candidate links in document order.
    """
    candidates = [link for link in listing.links() if is_candidate(link.url)]
    logger.info(
        f"Found {len(candidates)} candidate links on {listing.url}"
    )
    return candidates
