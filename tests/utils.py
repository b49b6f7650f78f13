"""Test utilities for the traversal tests.

FakePage is an in-memory stand-in for the browser page: documents are
looked up by URL, navigation and expansion are recorded, and snapshots
are parsed with the same LxmlPageElement the real page uses.
"""

from peipsi_birds.common.exceptions import NavigationFailure
from peipsi_birds.common.lxml_page_element import LxmlPageElement


class FakePage:
    """Page implementation backed by a dict of URL -> HTML.

    Args:
        pages: Documents keyed by absolute URL.
        revealed: Documents that replace a page's content once
            expand() is called on it.

    Attributes:
        visited: URLs passed to goto(), in order.
        expanded: Marker classes passed to expand(), in order.
        snapshots: URLs snapshotted, in order.
    """

    def __init__(
        self,
        pages: dict[str, str],
        revealed: dict[str, str] | None = None,
    ) -> None:
        self.pages = dict(pages)
        self.revealed = revealed or {}
        self._url = "about:blank"
        self.visited: list[str] = []
        self.expanded: list[str] = []
        self.snapshots: list[str] = []

    @property
    def url(self) -> str:
        return self._url

    async def goto(self, url: str) -> None:
        if url not in self.pages:
            raise NavigationFailure(url, "Not Found", status_code=404)
        self.visited.append(url)
        self._url = url

    async def expand(self, marker_class: str) -> None:
        self.expanded.append(marker_class)
        if self._url in self.revealed:
            self.pages[self._url] = self.revealed[self._url]

    async def snapshot(self) -> LxmlPageElement:
        self.snapshots.append(self._url)
        return LxmlPageElement.from_html(self.pages[self._url], self._url)


def listing_page(links: list[tuple[str, str]]) -> str:
    """Minimal listing document with the given (href, text) anchors."""
    anchors = "\n".join(
        f'<li><a href="{href}">{text}</a></li>' for href, text in links
    )
    return (
        '<html><head><meta charset="utf-8"></head><body>'
        f"<ul>{anchors}</ul></body></html>"
    )
