"""Field extraction for species pages.

A species page has a single article whose heading carries both names
("Чомга Podiceps cristatus") and whose first two paragraphs are the
identification signs and the habitat, each led by a fixed label.
"""

from __future__ import annotations

import re

from peipsi_birds.common.data_models import LeafFields
from peipsi_birds.common.exceptions import PatternMismatchException
from peipsi_birds.common.page_element import PageElement

HEADING_SELECTOR = "article h1"
SIGNS_SELECTOR = "article p:nth-of-type(1)"
HABITAT_SELECTOR = "article p:nth-of-type(2)"

SIGNS_LABEL = "Признаки. "
HABITAT_LABEL = "Местообитание. "

RUS_NAME_PATTERN = re.compile(
    r"[А-Яа-яё-]+\s*[А-Яа-яё\s]*(\((?:[А-Яа-яё\s]+)\))?"
)
LAT_NAME_PATTERN = re.compile(r"[a-zA-Z]+\s?[a-zA-Z]+")


def _first_match(
    pattern: re.Pattern[str], field: str, text: str, url: str
) -> str:
    match = pattern.search(text)
    if match is None:
        raise PatternMismatchException(field, pattern.pattern, text, url)
    return match.group(0).strip()


def parse_rus_name(heading: str, url: str = "") -> str:
    """Russian name: the leading Cyrillic words, with an optional
    parenthesized Cyrillic clause ("Гагара чернозобая (полярная)").

    Raises:
        PatternMismatchException: If the heading has no Cyrillic name.
    """
    return _first_match(RUS_NAME_PATTERN, "rusName", heading, url)


def parse_lat_name(heading: str, url: str = "") -> str:
    """Latin name: the first one or two runs of Latin letters.

    Raises:
        PatternMismatchException: If the heading has no Latin name.
    """
    return _first_match(LAT_NAME_PATTERN, "latName", heading, url)


def strip_label(text: str, label: str) -> str:
    """Remove the first occurrence of a paragraph label, keeping the rest
    of the text exactly as it was."""
    return text.replace(label, "", 1)


def _first_text(page: PageElement, selector: str, description: str) -> str:
    elements = page.query_css(selector, description, min_count=1)
    return elements[0].text_content()


def extract(page: PageElement) -> LeafFields:
    """Extract the species fields from a species page snapshot.

    Args:
        page: Snapshot of a species detail page.

    Returns:
        The Russian and Latin names, signs and habitat.

    Raises:
        HTMLStructuralAssumptionException: If the heading or either
            paragraph is missing.
        PatternMismatchException: If a name cannot be found in the heading.
    """
    heading = page.query_css(
        HEADING_SELECTOR, "species heading", min_count=1, max_count=1
    )[0].text_content()
    signs = _first_text(page, SIGNS_SELECTOR, "signs paragraph")
    habitat = _first_text(page, HABITAT_SELECTOR, "habitat paragraph")

    return LeafFields(
        rus_name=parse_rus_name(heading, page.url),
        lat_name=parse_lat_name(heading, page.url),
        signs=strip_label(signs, SIGNS_LABEL),
        habitat=strip_label(habitat, HABITAT_LABEL),
    )
