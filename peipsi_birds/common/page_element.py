"""Page and PageElement protocols.

PageElement is the read side: a static, lxml-parsed snapshot of a
rendered document that the classifier and extractor query. Page is the
navigation side: the live browser tab the traversal moves around and
snapshots. Keeping the two apart means nothing downstream of a snapshot
ever touches the browser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Link:
    """Represents an HTML <a> element with its resolved URL and text.

    Link is a pure value object; it performs no I/O.

    Attributes:
        url: Resolved absolute URL from the href attribute.
        text: Visible text content of the link, whitespace-stripped.
        selector: The selector that found this link.
    """

    url: str
    text: str
    selector: str


class PageElement(Protocol):
    """Protocol for data extraction from a parsed document snapshot.

    All query methods support count validation and raise
    HTMLStructuralAssumptionException if the actual count doesn't match
    expectations.
    """

    @property
    def url(self) -> str:
        """URL of the document the element belongs to."""
        ...

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by XPath selector.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        ...

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by CSS selector.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        ...

    def text_content(self) -> str:
        """Text content of the element and its descendants, unmodified."""
        ...

    def get_attribute(self, name: str) -> str | None:
        """Attribute value, or None if it doesn't exist."""
        ...

    def links(self) -> list[Link]:
        """All <a> elements with an href, in document order."""
        ...


class Page(Protocol):
    """Protocol for the browser tab a traversal drives.

    Implementations own navigation and in-page scripting. Reads go
    through snapshot(), which returns a PageElement for the document as
    currently rendered.
    """

    @property
    def url(self) -> str:
        """URL of the current document."""
        ...

    async def goto(self, url: str) -> None:
        """Navigate to a URL.

        Raises:
            NavigationFailure: If the URL cannot be reached.
        """
        ...

    async def expand(self, marker_class: str) -> None:
        """Click every element with the given class to reveal hidden sections."""
        ...

    async def snapshot(self) -> PageElement:
        """Parse the current rendered document."""
        ...
