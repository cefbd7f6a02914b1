# Path: core/generation/remote.py
# Purpose: Generate images through a hosted inference endpoint in a single request.
# Layer: core/generation.
# Details: POSTs {"inputs": prompt} with a bearer token and decodes the binary response.

from __future__ import annotations

import logging
from typing import Optional

import requests
from PIL import Image

from .base import HTTPGenerationStrategy, SessionFactory

logger = logging.getLogger(__name__)


class RemoteAPIStrategy(HTTPGenerationStrategy):
    """Single-phase backend for Hugging Face style inference APIs."""

    name = "remote"

    def __init__(
        self,
        api_url: str,
        api_token: str = "",
        connect_timeout: float = 30.0,
        read_timeout: Optional[float] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        super().__init__(connect_timeout, read_timeout, session_factory)
        self.api_url = api_url
        self.api_token = api_token

    def generate_image(self, prompt: str) -> Optional[Image.Image]:
        """
        Send the prompt to the inference endpoint and decode the returned image.

        The prompt travels through ``requests``' JSON encoder, so quotes and
        control characters are escaped.
        """

        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }
        try:
            with self._session_factory() as session:
                response = session.post(
                    self.api_url,
                    json={"inputs": prompt},
                    headers=headers,
                    timeout=self.timeout,
                )
        except requests.RequestException as exc:
            logger.error("Remote generation request failed: %s", exc)
            return None

        if response.status_code != 200:
            logger.error("API error: %s", response.status_code)
            return None

        return self._decode_image(response.content)
