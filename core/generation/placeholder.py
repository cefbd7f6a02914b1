# Path: core/generation/placeholder.py
# Purpose: Offline generation backend that renders the prompt as an image.
# Layer: core/generation.
# Details: Deterministic per prompt; useful for dry runs of the API and scripts without a model server.

from __future__ import annotations

import hashlib
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .base import GenerationStrategy


class PlaceholderStrategy(GenerationStrategy):
    """Render the prompt text over a background colour derived from its hash."""

    name = "placeholder"

    def __init__(self, size: int = 256) -> None:
        self.size = size

    def generate_image(self, prompt: str) -> Optional[Image.Image]:
        img = Image.new("RGB", (self.size, self.size), color=self._background(prompt))
        draw = ImageDraw.Draw(img)
        font = ImageFont.load_default()
        draw.text((8, 8), (prompt or "Generated")[:200], fill=(0, 0, 0), font=font)
        return img

    @staticmethod
    def _background(prompt: str) -> Tuple[int, int, int]:
        digest = hashlib.sha256(prompt.encode("utf-8")).digest()
        # Keep the background light so the text stays readable.
        return (128 + digest[0] // 2, 128 + digest[1] // 2, 128 + digest[2] // 2)
