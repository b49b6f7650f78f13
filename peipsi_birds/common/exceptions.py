"""Exception types for crawl errors.

Scraper assumption exceptions mean the site no longer looks the way the
crawler expects (a selector found nothing, a name pattern did not match,
a link has an unexpected shape). Transient exceptions mean the browser
could not get us to a page at all. Both abort the traversal.
"""

from typing import Any


class ScraperAssumptionException(Exception):
    """Base class for scraper assumption violations.

    The crawler makes assumptions about the guide's URL layout, page
    structure and text formats. When one of them is violated it raises a
    subclass of this exception carrying the page URL and whatever context
    helps diagnose the change.
    """

    def __init__(
        self,
        message: str,
        request_url: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the assumption violation.
            request_url: The URL of the page that triggered this error.
            context: Optional dict of additional context (selector, counts, etc).
        """
        self.message = message
        self.request_url = request_url
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        parts.append(f"URL: {self.request_url}")

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


class HTMLStructuralAssumptionException(ScraperAssumptionException):
    """Raised when HTML structure doesn't match expectations.

    Raised when an XPath or CSS selector returns a different number of
    elements than expected, e.g. a species page without its habitat
    paragraph.

    Attributes:
        selector: The XPath or CSS selector that was used.
        selector_type: Type of selector ("xpath" or "css").
    """

    def __init__(
        self,
        selector: str,
        selector_type: str,
        description: str,
        expected_min: int,
        expected_max: int | None,
        actual_count: int,
        request_url: str,
    ) -> None:
        """Initialize the exception.

        Args:
            selector: The XPath or CSS selector that was used.
            selector_type: Type of selector ("xpath" or "css").
            description: Human-readable description of what was being selected.
            expected_min: Minimum number of elements expected.
            expected_max: Maximum number of elements expected (None = unlimited).
            actual_count: Actual number of elements found.
            request_url: The URL of the page that triggered this error.
        """
        self.selector = selector
        self.selector_type = selector_type
        self.description = description
        self.expected_min = expected_min
        self.expected_max = expected_max
        self.actual_count = actual_count

        if expected_max is None:
            expected_str = f"at least {expected_min}"
        elif expected_min == expected_max:
            expected_str = f"exactly {expected_min}"
        else:
            expected_str = f"between {expected_min} and {expected_max}"

        message = (
            f"HTML structure mismatch: Expected {expected_str} "
            f"elements for '{description}', but found {actual_count}"
        )

        context = {
            "selector": selector,
            "selector_type": selector_type,
            "expected_min": expected_min,
            "expected_max": expected_max
            if expected_max is not None
            else "unlimited",
            "actual_count": actual_count,
        }

        super().__init__(message, request_url, context)


class PatternMismatchException(ScraperAssumptionException):
    """Raised when a field pattern finds nothing in the page text.

    Attributes:
        field: Name of the field being extracted (e.g. "rusName").
        pattern: The regular expression that failed to match.
        text: The text the pattern was applied to.
    """

    def __init__(
        self,
        field: str,
        pattern: str,
        text: str,
        request_url: str,
    ) -> None:
        self.field = field
        self.pattern = pattern
        self.text = text

        message = f"No match for '{field}' in {text!r}"
        context = {"field": field, "pattern": pattern, "text": text}

        super().__init__(message, request_url, context)


class AmbiguousLinkShapeException(ScraperAssumptionException):
    """Raised when a link matches both the species and heading URL shapes.

    The guide's URL layout keeps species pages and reference headings
    apart. A URL satisfying both means the layout changed and the link
    cannot be classified safely.

    Attributes:
        text: Visible text of the offending link.
        matched_shapes: Names of the shapes the URL matched.
    """

    def __init__(
        self,
        url: str,
        text: str,
        matched_shapes: list[str],
    ) -> None:
        self.text = text
        self.matched_shapes = matched_shapes

        message = (
            "Link matches both species and heading URL shapes: "
            + ", ".join(matched_shapes)
        )
        context = {"text": text, "matched_shapes": matched_shapes}

        super().__init__(message, url, context)


class TransientException(Exception):
    """Base class for errors outside the scraper's assumptions.

    Transient exceptions represent failures like network issues, server
    errors or browser timeouts. The crawler does not retry them; they end
    the traversal and retrying is left to whoever started it.
    """

    pass


class NavigationFailure(TransientException):
    """Raised when the browser cannot reach a URL.

    Attributes:
        url: The URL that could not be reached.
        reason: Description of the underlying failure.
        status_code: HTTP status of the response, if one arrived.
        message: Human-readable error message.
    """

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code

        if status_code is not None:
            self.message = f"Navigation to {url} failed: HTTP {status_code}"
        else:
            self.message = f"Navigation to {url} failed: {reason}"
        super().__init__(self.message)


class SinkWriteFailure(Exception):
    """Raised when the crawl results cannot be persisted.

    Attributes:
        destination: Where the results were being written.
        reason: Description of the underlying failure.
    """

    def __init__(self, destination: str, reason: str) -> None:
        self.destination = destination
        self.reason = reason
        self.message = f"Could not write results to {destination}: {reason}"
        super().__init__(self.message)
