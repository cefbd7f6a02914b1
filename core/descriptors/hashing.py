# Path: core/descriptors/hashing.py
# Purpose: Provide a perceptual-hash sub-descriptor.
# Layer: core/descriptors.
# Details: Wraps imagehash.phash and compares hashes by Hamming distance.

from __future__ import annotations

import imagehash
from PIL import Image

from .base import ShapeMismatchError, SubDescriptor


class PerceptualHashDescriptor(SubDescriptor):
    """DCT-based perceptual hash of the image luminance.

    The default ``hash_size`` of 12 yields a 144-bit hash.
    """

    name = "phash"

    def __init__(self, image: Image.Image, hash_size: int = 12) -> None:
        self.hash_size = hash_size
        self.hash = imagehash.phash(image.convert("RGB"), hash_size=hash_size)

    def distance(self, other: SubDescriptor) -> float:
        self._check_same_type(other)
        # imagehash subtraction is the Hamming distance.
        if other.hash_size != self.hash_size:  # type: ignore[attr-defined]
            raise ShapeMismatchError(
                f"Hash sizes {self.hash_size} and {other.hash_size} differ."  # type: ignore[attr-defined]
            )
        return float(self.hash - other.hash)  # type: ignore[attr-defined]

    def __str__(self) -> str:
        return f"PerceptualHashDescriptor: [{self.hash}]"
