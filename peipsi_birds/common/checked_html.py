"""Checked HTML element wrapper for safe XPath/CSS querying.

CheckedHtmlElement wraps an lxml HtmlElement and validates selector
results against expected counts, so that a page which lost its heading or
a paragraph fails with a clear HTMLStructuralAssumptionException instead
of an IndexError somewhere in the extractor.
"""

from __future__ import annotations

from cssselect import SelectorError
from lxml.html import HtmlElement

from peipsi_birds.common.exceptions import (
    HTMLStructuralAssumptionException,
)


def _check_count(
    selector: str,
    selector_type: str,
    description: str,
    min_count: int,
    max_count: int | None,
    actual_count: int,
    request_url: str,
) -> None:
    if actual_count < min_count or (
        max_count is not None and actual_count > max_count
    ):
        raise HTMLStructuralAssumptionException(
            selector=selector,
            selector_type=selector_type,
            description=description,
            expected_min=min_count,
            expected_max=max_count,
            actual_count=actual_count,
            request_url=request_url,
        )


class CheckedHtmlElement:
    """Wrapper around HtmlElement with validated selectors.

    checked_xpath() and checked_css() raise
    HTMLStructuralAssumptionException when the number of matched elements
    falls outside [min_count, max_count]. Everything else is delegated to
    the wrapped element.
    """

    def __init__(self, element: HtmlElement, request_url: str = "") -> None:
        """Initialize the checked element wrapper.

        Args:
            element: The lxml HtmlElement to wrap.
            request_url: Optional URL for error context.
        """
        self._element = element
        self._request_url = request_url

    def checked_xpath(
        self,
        xpath: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[CheckedHtmlElement]:
        """Execute XPath query with count validation.

        Only element results are kept; text nodes and attribute values
        returned by the expression are ignored.

        Args:
            xpath: XPath expression to execute.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching elements, each wrapped for nested queries.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.

        Example::

            tree = CheckedHtmlElement(lxml.html.fromstring(html))
            anchors = tree.checked_xpath("//a[@href]", "links", min_count=0)
        """
        wrapped = [
            CheckedHtmlElement(result, self._request_url)
            for result in self._element.xpath(xpath)
            if isinstance(result, HtmlElement)
        ]
        _check_count(
            xpath,
            "xpath",
            description,
            min_count,
            max_count,
            len(wrapped),
            self._request_url,
        )
        return wrapped

    def checked_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[CheckedHtmlElement]:
        """Execute CSS selector query with count validation.

        Args:
            selector: CSS selector expression.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching elements, each wrapped for nested queries.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match
                expectations, or if the selector cannot be parsed.

        Example::

            tree = CheckedHtmlElement(lxml.html.fromstring(html))
            # Expect exactly 1 species heading
            title = tree.checked_css("article h1", "species heading", 1, 1)
        """
        try:
            results = self._element.cssselect(selector)
        except SelectorError as e:
            # Invalid selector syntax surfaces as a structural error
            raise HTMLStructuralAssumptionException(
                selector=selector,
                selector_type="css",
                description=description,
                expected_min=min_count,
                expected_max=max_count,
                actual_count=0,
                request_url=self._request_url,
            ) from e

        _check_count(
            selector,
            "css",
            description,
            min_count,
            max_count,
            len(results),
            self._request_url,
        )
        return [
            CheckedHtmlElement(result, self._request_url) for result in results
        ]

    def __getattr__(self, name: str):
        """Delegate all other attributes to the wrapped element."""
        return getattr(self._element, name)
