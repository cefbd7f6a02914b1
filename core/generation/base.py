# Path: core/generation/base.py
# Purpose: Define the GenerationStrategy interface for prompt-to-image backends.
# Layer: core/generation.
# Details: Shared helpers cover session handling, timeouts, and tolerant image decoding.

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple

import requests
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


class GenerationStrategy(ABC):
    """Abstract base class for backends that turn a prompt into a decoded image.

    Implementations never raise for ordinary failures: transport errors,
    non-success statuses and malformed payloads all resolve to ``None``.
    """

    name: str

    @abstractmethod
    def generate_image(self, prompt: str) -> Optional[Image.Image]:
        """Return the generated image, or None if generation failed."""


class HTTPGenerationStrategy(GenerationStrategy):
    """Base for backends that talk to an HTTP service through ``requests``.

    A fresh session is opened for every call and closed afterwards, so one
    strategy instance may be shared by several threads.
    """

    def __init__(
        self,
        connect_timeout: float = 30.0,
        read_timeout: Optional[float] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self._session_factory: SessionFactory = session_factory or requests.Session

    @property
    def timeout(self) -> Tuple[float, Optional[float]]:
        return (self.connect_timeout, self.read_timeout)

    @staticmethod
    def _decode_image(content: bytes) -> Optional[Image.Image]:
        """Decode raw bytes into a fully loaded image, returning None if decoding fails."""

        try:
            image = Image.open(io.BytesIO(content))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            logger.error("Could not decode generated image (%d bytes): %s", len(content), exc)
            return None
        return image
