# Path: core/generation/local.py
# Purpose: Generate images through a self-hosted service using a submit-then-download protocol.
# Layer: core/generation.
# Details: Phase 1 POSTs the generation job, phase 2 GETs the produced file by name.

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from PIL import Image

from .base import HTTPGenerationStrategy, SessionFactory

logger = logging.getLogger(__name__)

_PATH_SEPARATORS = re.compile(r"[\\/]")


class LocalAPIStrategy(HTTPGenerationStrategy):
    """Two-phase backend for a local diffusion server.

    Both phases share one session; a failed submission never triggers a download.
    """

    name = "local"

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        model_name: str = "stable",
        num_inference_steps: int = 50,
        guidance_scale: float = 7.5,
        connect_timeout: float = 30.0,
        read_timeout: Optional[float] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        super().__init__(connect_timeout, read_timeout, session_factory)
        self.base_url = base_url.rstrip("/")
        self.model_name = model_name
        self.num_inference_steps = num_inference_steps
        self.guidance_scale = guidance_scale

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        """Return the JSON body submitted in phase 1."""

        return {
            "model_name": self.model_name,
            "prompt": prompt,
            "num_inference_steps": self.num_inference_steps,
            "guidance_scale": self.guidance_scale,
        }

    def generate_image(self, prompt: str) -> Optional[Image.Image]:
        try:
            with self._session_factory() as session:
                return self._generate(session, prompt)
        except requests.RequestException as exc:
            logger.error("Local generation request failed: %s", exc)
            return None

    def _generate(self, session: requests.Session, prompt: str) -> Optional[Image.Image]:
        submit = session.post(
            f"{self.base_url}/images/generate/",
            json=self.build_payload(prompt),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        if submit.status_code != 200:
            logger.error("Error generating image: %s", submit.status_code)
            return None

        filename = self._image_filename(submit)
        if filename is None:
            return None

        download = session.get(
            f"{self.base_url}/images/download/{quote(filename)}",
            timeout=self.timeout,
        )
        if download.status_code != 200:
            logger.error("Error downloading image: %s", download.status_code)
            return None

        return self._decode_image(download.content)

    @staticmethod
    def _image_filename(response: requests.Response) -> Optional[str]:
        """Extract the bare file name from the ``image_path`` field of the submit response."""

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Generation response is not valid JSON: %s", exc)
            return None

        image_path = data.get("image_path") if isinstance(data, dict) else None
        if not isinstance(image_path, str):
            logger.error("Generation response has no image_path field.")
            return None

        filename = _PATH_SEPARATORS.split(image_path)[-1]
        if not filename:
            logger.error("image_path %r does not name a file.", image_path)
            return None
        return filename
