# Path: core/descriptors/composite.py
# Purpose: Hold the ordered sub-descriptors computed over one image and compare containers.
# Layer: core/descriptors.
# Details: Distances are order-aligned; mismatched shapes raise instead of truncating.

from __future__ import annotations

from typing import Iterable, Iterator, List

from PIL import Image

from .base import Extractor, ShapeMismatchError, SubDescriptor

AGGREGATES = {"sum", "mean"}


class CompositeDescriptor:
    """Ordered collection of sub-descriptors extracted from a single source image."""

    def __init__(
        self,
        image: Image.Image,
        extractors: Iterable[Extractor] = (),
        aggregate: str = "sum",
    ) -> None:
        if aggregate not in AGGREGATES:
            raise ValueError(f"Unknown aggregate policy: {aggregate}")
        self.image = image
        self.aggregate = aggregate
        self._items: List[SubDescriptor] = []
        self._sealed = False
        for extractor in extractors:
            self.add(extractor(image))

    def add(self, item: SubDescriptor) -> None:
        """Append a sub-descriptor; only allowed until the container is sealed."""

        if self._sealed:
            raise RuntimeError("CompositeDescriptor is sealed; sub-descriptors can no longer be added.")
        self._items.append(item)

    def seal(self) -> None:
        """Freeze the item list before the container is shared or compared."""

        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def distance_to(self, other: "CompositeDescriptor") -> float:
        """
        Combine the pairwise distances of positionally corresponding items.

        Raises:
            ShapeMismatchError: if the containers differ in aggregate policy or length, or in the class of any item.
        """

        if self.aggregate != other.aggregate:
            raise ShapeMismatchError(
                f"Composite descriptors differ in aggregate policy: {self.aggregate} != {other.aggregate}."
            )
        if len(self._items) != len(other._items):
            raise ShapeMismatchError(
                f"Composite descriptors differ in length: {len(self._items)} != {len(other._items)}."
            )
        distances: List[float] = []
        for position, (mine, theirs) in enumerate(zip(self._items, other._items)):
            if type(mine) is not type(theirs):
                raise ShapeMismatchError(
                    f"Item {position} differs in type: {type(mine).__name__} != {type(theirs).__name__}."
                )
            distances.append(mine.distance(theirs))

        if not distances:
            return 0.0
        total = sum(distances)
        if self.aggregate == "mean":
            return total / len(distances)
        return total

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[SubDescriptor]:
        return iter(self._items)

    def __getitem__(self, index: int) -> SubDescriptor:
        return self._items[index]

    def __str__(self) -> str:
        if not self._items:
            return "CompositeDescriptor: []"
        return "\n".join(str(item) for item in self._items)
