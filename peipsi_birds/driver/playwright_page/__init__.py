"""Playwright-backed page for rendering the bird guide in a real browser."""

from peipsi_birds.driver.playwright_page.playwright_page import (
    PlaywrightPage,
)

__all__ = ["PlaywrightPage"]
