"""Traversal of the bird guide.

The listing page lists every order, family and species in taxonomic
order. collect() walks its links once, front to back: headings update
the classification context, species links are visited and turned into
BirdRecords tagged with the context current at that point.

Visits are strictly sequential. Any navigation or extraction failure
aborts the whole traversal; nothing is retried and no partial record is
produced for the failing page.
"""

from __future__ import annotations

import logging

from peipsi_birds.classifier import classify, discover_candidates
from peipsi_birds.common.data_models import BirdRecord
from peipsi_birds.common.page_element import Page
from peipsi_birds.data_types import (
    ClassificationContext,
    FamilyMarker,
    LeafLink,
    OrderMarker,
)
from peipsi_birds.extractor import extract

logger = logging.getLogger(__name__)

START_URL = "https://birds.peipsi.org/"
# Collapsed sections on the listing page are toggled by these elements.
EXPAND_CLASS = "sym"


async def visit_leaf(
    page: Page, link: LeafLink, context: ClassificationContext
) -> BirdRecord:
    """Navigate to a species page and build its record."""
    await page.goto(link.url)
    fields = extract(await page.snapshot())
    return BirdRecord(
        order=context.order,
        family=context.family,
        rus_name=fields.rus_name,
        lat_name=fields.lat_name,
        signs=fields.signs,
        habitat=fields.habitat,
    )


async def collect(page: Page) -> list[BirdRecord]:
    """Collect a record for every species linked from the current page.

    The page must be showing the listing with its hidden sections already
    expanded. Candidate links are read from a single snapshot taken before
    the first navigation away.

    Args:
        page: Browser page positioned on the listing.

    Returns:
        Bird records in visiting order.

    Raises:
        NavigationFailure: If a species page cannot be reached.
        ScraperAssumptionException: If a species page is malformed or a
            link has an ambiguous shape.
    """
    candidates = discover_candidates(await page.snapshot())

    records: list[BirdRecord] = []
    context = ClassificationContext()

    for link in candidates:
        result = classify(link.url, link.text)

        if isinstance(result, OrderMarker):
            logger.debug(f"Order: {result.token}")
            context = context.with_order(result.token)
        elif isinstance(result, FamilyMarker):
            logger.debug(f"Family: {result.token}")
            context = context.with_family(result.token)
        elif isinstance(result, LeafLink):
            logger.info(f"Visiting {result.url}")
            records.append(await visit_leaf(page, result, context))
        else:
            logger.debug(f"Skipping {link.url} ({link.text!r})")

    logger.info(f"Collected {len(records)} bird records")
    return records


async def crawl(
    page: Page,
    start_url: str = START_URL,
    expand_class: str = EXPAND_CLASS,
) -> list[BirdRecord]:
    """Open the listing page, reveal collapsed sections and collect.

    Args:
        page: Browser page to drive.
        start_url: URL of the listing page.
        expand_class: Class of the elements that toggle hidden sections.

    Returns:
        Bird records in visiting order.
    """
    logger.info(f"Opening listing {start_url}")
    await page.goto(start_url)
    await page.expand(expand_class)
    return await collect(page)
