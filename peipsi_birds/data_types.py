"""Core value types for the traversal.

Classification results for candidate links, and the classification
context carried across the walk over the listing page.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class LeafLink:
    """A link to a species detail page.

    Attributes:
        url: Absolute URL of the species page.
    """

    url: str


@dataclass(frozen=True)
class OrderMarker:
    """A heading that starts a new taxonomic order.

    Attributes:
        token: The heading's visible text, e.g. "ПОГАНКООБРАЗНЫЕ".
    """

    token: str


@dataclass(frozen=True)
class FamilyMarker:
    """A heading that starts a new taxonomic family.

    Attributes:
        token: The heading's visible text, e.g. "Поганковые".
    """

    token: str


# None stands for a discarded link.
LinkClass = LeafLink | OrderMarker | FamilyMarker | None


@dataclass(frozen=True)
class ClassificationContext:
    """The order and family under which species are currently being found.

    Each field holds the most recent marker of its kind, or None when no
    such marker has been seen yet. Updating one field never touches the
    other; updates return a new context.

    Example::

        context = ClassificationContext()
        context = context.with_order("ПОГАНКООБРАЗНЫЕ")
        context = context.with_family("Поганковые")
    """

    order: str | None = None
    family: str | None = None

    def with_order(self, token: str) -> ClassificationContext:
        return replace(self, order=token)

    def with_family(self, token: str) -> ClassificationContext:
        return replace(self, family=token)
