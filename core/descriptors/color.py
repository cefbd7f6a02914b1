# Path: core/descriptors/color.py
# Purpose: Provide colour-statistic sub-descriptors.
# Layer: core/descriptors.
# Details: Mean colour and normalized RGB histogram features computed with Pillow and numpy.

from __future__ import annotations

import numpy as np
from PIL import Image

from .base import SubDescriptor


class SingleColorDescriptor(SubDescriptor):
    """Representative colour of an image, taken as the mean RGB value."""

    name = "single_color"

    def __init__(self, image: Image.Image) -> None:
        pixels = np.asarray(image.convert("RGB"), dtype=np.float64).reshape(-1, 3)
        self.color = pixels.mean(axis=0) if pixels.size else np.zeros(3)

    def distance(self, other: SubDescriptor) -> float:
        self._check_same_type(other)
        return self._l2(self.color, other.color)  # type: ignore[attr-defined]

    def __str__(self) -> str:
        r, g, b = (int(round(c)) for c in self.color)
        return f"SingleColorDescriptor: [{r}, {g}, {b}]"


class ColorHistogramDescriptor(SubDescriptor):
    """L2-normalized 768-bin RGB histogram."""

    name = "color_histogram"

    def __init__(self, image: Image.Image) -> None:
        hist = np.asarray(image.convert("RGB").histogram(), dtype=np.float64)
        norm = np.linalg.norm(hist)
        self.histogram = hist / norm if norm else hist

    def distance(self, other: SubDescriptor) -> float:
        self._check_same_type(other)
        return self._l2(self.histogram, other.histogram)  # type: ignore[attr-defined]

    def __str__(self) -> str:
        peak = int(np.argmax(self.histogram))
        channel = "RGB"[peak // 256]
        return f"ColorHistogramDescriptor: [bins={self.histogram.size}, peak={channel}{peak % 256}]"
