# Path: core/comparators/base.py
# Purpose: Define the comparator contract and the default descriptor comparator.
# Layer: core/comparators.
# Details: Comparators are plain callables over two descriptors of the same concrete type.

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

from core.models.domain import MAX_DISTANCE

if TYPE_CHECKING:
    from core.descriptors.prompt import PromptDescriptor

T = TypeVar("T", bound="PromptDescriptor", contravariant=True)


class Comparator(Protocol[T]):
    """Map a pair of same-typed descriptors to a dissimilarity score."""

    def __call__(self, a: T, b: T) -> float:
        """Return a non-negative distance or :data:`MAX_DISTANCE` when incomparable."""


class DefaultComparator:
    """Compare two prompt descriptors by their composite descriptors.

    When either side failed to generate an image the result is :data:`MAX_DISTANCE`.
    That sentinel means "unrankable" as much as "fully dissimilar", so callers
    that rank should test for it with :func:`core.models.is_max_distance`.
    """

    def __call__(self, a: "PromptDescriptor", b: "PromptDescriptor") -> float:
        first = a.get_descriptors()
        second = b.get_descriptors()
        if first is None or second is None:
            return MAX_DISTANCE
        return first.distance_to(second)
