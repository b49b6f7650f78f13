"""LxmlPageElement implementation wrapping CheckedHtmlElement.

This is the PageElement used for every snapshot, whether the HTML came
from a live Playwright tab or from a test fixture.
"""

from __future__ import annotations

from urllib.parse import urljoin

from lxml import html

from peipsi_birds.common.checked_html import CheckedHtmlElement
from peipsi_birds.common.page_element import Link


class LxmlPageElement:
    """Implementation of PageElement protocol wrapping CheckedHtmlElement.

    Attributes:
        _element: The underlying CheckedHtmlElement.
        _url: The base URL for resolving relative URLs.
    """

    def __init__(self, element: CheckedHtmlElement, url: str = ""):
        self._element = element
        self._url = url

    @classmethod
    def from_html(cls, content: str, url: str) -> LxmlPageElement:
        """Parse an HTML document into a page element rooted at <html>.

        Args:
            content: Serialized HTML document.
            url: URL the document was loaded from.
        """
        root = html.document_fromstring(content)
        return cls(CheckedHtmlElement(root, url), url)

    @property
    def url(self) -> str:
        return self._url

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by XPath selector.

        Args:
            selector: XPath expression to execute.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        checked_elements = self._element.checked_xpath(
            selector, description, min_count, max_count
        )
        return [LxmlPageElement(elem, self._url) for elem in checked_elements]

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by CSS selector.

        Args:
            selector: CSS selector expression.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        checked_elements = self._element.checked_css(
            selector, description, min_count, max_count
        )
        return [LxmlPageElement(elem, self._url) for elem in checked_elements]

    def text_content(self) -> str:
        return self._element.text_content()

    def get_attribute(self, name: str) -> str | None:
        return self._element.get(name)

    def links(self) -> list[Link]:
        """Discover all links in the element.

        Hrefs are resolved against the document URL and link text is
        stripped of surrounding whitespace. Anchors with an empty href are
        skipped.

        Returns:
            Link value objects in document order.
        """
        selector = ".//a[@href]"
        link_elements = self.query_xpath(selector, "all links", min_count=0)

        links: list[Link] = []
        for i, elem in enumerate(link_elements):
            href = elem.get_attribute("href")
            if not href:
                continue

            links.append(
                Link(
                    url=urljoin(self._url, href),
                    text=elem.text_content().strip(),
                    selector=f"({selector})[{i + 1}]",
                )
            )

        return links
