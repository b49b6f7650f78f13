"""peipsi-birds CLI — crawl the bird guide and inspect link rules.

Usage:
    peipsi-birds crawl                          # Crawl and write peipsi-birds.json
    peipsi-birds crawl --output birds --no-headless
    peipsi-birds classify URL [TEXT]            # Show how one link is classified
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click
from pyrate_limiter import Duration, InMemoryBucket, Limiter, Rate

from peipsi_birds.classifier import classify as classify_link
from peipsi_birds.classifier import match_shapes
from peipsi_birds.common.data_models import BirdRecord
from peipsi_birds.common.exceptions import (
    NavigationFailure,
    ScraperAssumptionException,
    SinkWriteFailure,
)
from peipsi_birds.data_types import FamilyMarker, LeafLink, OrderMarker
from peipsi_birds.sink import DEFAULT_OUTPUT_NAME, JsonFileSink
from peipsi_birds.traversal import EXPAND_CLASS, START_URL, crawl


@click.group()
@click.version_option(package_name="peipsi-birds")
def cli() -> None:
    """peipsi-birds — species records from birds.peipsi.org."""


@cli.command("crawl")
@click.option(
    "--url",
    "start_url",
    default=START_URL,
    show_default=True,
    help="Listing page to start from.",
)
@click.option(
    "--output",
    "output_name",
    default=DEFAULT_OUTPUT_NAME,
    show_default=True,
    help="Output file name, without the .json extension.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory to write the output file into.",
)
@click.option(
    "--browser",
    "browser_type",
    type=click.Choice(["chromium", "firefox", "webkit"]),
    default="chromium",
    show_default=True,
    help="Browser engine to use.",
)
@click.option(
    "--headless/--no-headless",
    default=True,
    show_default=True,
    help="Run the browser without a window.",
)
@click.option(
    "--expand-class",
    default=EXPAND_CLASS,
    show_default=True,
    help="Class of the elements that reveal collapsed sections.",
)
@click.option(
    "--rate",
    type=int,
    default=None,
    help="Maximum page navigations per second (default: unlimited).",
)
@click.option(
    "--timeout",
    "timeout_ms",
    type=int,
    default=30_000,
    show_default=True,
    help="Navigation timeout in milliseconds.",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def crawl_command(
    start_url: str,
    output_name: str,
    output_dir: Path,
    browser_type: str,
    headless: bool,
    expand_class: str,
    rate: int | None,
    timeout_ms: int,
    verbose: bool,
) -> None:
    """Crawl the guide and write every species record as JSON."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rate_limiter = None
    if rate:
        rate_limiter = Limiter(InMemoryBucket([Rate(rate, Duration.SECOND)]))

    click.echo(f"Start URL: {start_url}")
    click.echo(f"Browser:   {browser_type}")

    try:
        records = asyncio.run(
            _crawl(
                start_url,
                expand_class,
                browser_type,
                headless,
                timeout_ms,
                rate_limiter,
            )
        )
    except NavigationFailure as e:
        raise click.ClickException(e.message) from e
    except ScraperAssumptionException as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Collected {len(records)} records.")

    sink = JsonFileSink(output_name, output_dir)
    try:
        path = sink.write(records)
    except SinkWriteFailure as e:
        raise click.ClickException(e.message) from e

    click.echo(f"Data written to {path}")


async def _crawl(
    start_url: str,
    expand_class: str,
    browser_type: str,
    headless: bool,
    timeout_ms: int,
    rate_limiter: Limiter | None,
) -> list[BirdRecord]:
    from peipsi_birds.driver.playwright_page import PlaywrightPage

    async with PlaywrightPage.open(
        browser_type=browser_type,
        headless=headless,
        timeout_ms=timeout_ms,
        rate_limiter=rate_limiter,
    ) as page:
        return await crawl(page, start_url, expand_class)


@cli.command("classify")
@click.argument("url")
@click.argument("text", default="")
def classify_command(url: str, text: str) -> None:
    """Show how the crawler would classify a link.

    URL is the absolute link URL; TEXT is the link's visible text.

    \b
    Examples:
        peipsi-birds classify https://birds.peipsi.org/reference/poganki/ ПОГАНКООБРАЗНЫЕ
        peipsi-birds classify https://birds.peipsi.org/poganki/chomga/bolshaya/
    """
    try:
        result = classify_link(url, text)
    except ScraperAssumptionException as e:
        raise click.ClickException(str(e)) from e

    shapes = match_shapes(url)
    click.echo(f"Shapes: {', '.join(shapes) if shapes else '-'}")
    if isinstance(result, LeafLink):
        click.echo("Leaf")
    elif isinstance(result, OrderMarker):
        click.echo(f"Order: {result.token}")
    elif isinstance(result, FamilyMarker):
        click.echo(f"Family: {result.token}")
    else:
        click.echo("Discard")


def main() -> None:
    """Entry point for the ``peipsi-birds`` console script."""
    cli()
