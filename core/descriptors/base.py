# Path: core/descriptors/base.py
# Purpose: Define the SubDescriptor interface for single visual features computed over an image.
# Layer: core/descriptors.
# Details: Provides the abstract distance contract and the shape-mismatch error shared by containers.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

import numpy as np
from PIL import Image


class ShapeMismatchError(ValueError):
    """Raised when two descriptors do not line up item by item."""


class SubDescriptor(ABC):
    """Abstract base class for a single visual feature extracted from one image.

    Subclasses compute their feature once in ``__init__`` from the source image.
    """

    name: str

    @abstractmethod
    def distance(self, other: "SubDescriptor") -> float:
        """Return a non-negative dissimilarity score against a descriptor of the same class."""

    def _check_same_type(self, other: "SubDescriptor") -> None:
        if type(other) is not type(self):
            raise ShapeMismatchError(
                f"Cannot compare {type(self).__name__} with {type(other).__name__}."
            )

    @staticmethod
    def _l2(a: np.ndarray, b: np.ndarray) -> float:
        """Euclidean distance between two feature vectors of equal shape."""

        if a.shape != b.shape:
            raise ShapeMismatchError(f"Feature shapes {a.shape} and {b.shape} differ.")
        return float(np.linalg.norm(a - b))


# Anything that turns an image into a sub-descriptor; descriptor classes themselves qualify.
Extractor = Callable[[Image.Image], SubDescriptor]
