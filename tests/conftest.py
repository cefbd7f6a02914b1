"""Shared test fixtures."""

from __future__ import annotations

import io
import struct
import zlib
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
import requests
from PIL import Image

from core.generation.base import GenerationStrategy


def make_png(color: Tuple[int, int, int] = (200, 30, 30), size: int = 16) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (size, size), color=color).save(buffer, format="PNG")
    return buffer.getvalue()


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data) & 0xFFFFFFFF)


def make_oversized_png(width: int = 30000, height: int = 30000) -> bytes:
    """A tiny PNG whose header declares an image far beyond Pillow's pixel limit."""

    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b""))
        + _png_chunk(b"IEND", b"")
    )


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`."""

    def __init__(self, status_code: int = 200, content: bytes = b"", json_data: Any = None) -> None:
        self.status_code = status_code
        self.content = content
        self._json = json_data

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


Reply = Union[FakeResponse, Exception]


class FakeSession:
    """Records requests and answers them from a (method, url) routing table."""

    def __init__(self, routes: Optional[Dict[Tuple[str, str], Reply]] = None) -> None:
        self.routes = routes or {}
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.closed = True

    def _send(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        reply = self.routes.get((method, url))
        if reply is None:
            return FakeResponse(status_code=404)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._send("POST", url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._send("GET", url, **kwargs)

    def calls_to(self, method: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["method"] == method]


class StaticStrategy(GenerationStrategy):
    """Generation strategy returning a solid image per prompt, or None for unknown prompts."""

    name = "static"

    def __init__(self, colors: Optional[Dict[str, Tuple[int, int, int]]] = None, default: Any = "solid") -> None:
        self.colors = colors or {}
        self.default = default
        self.calls: List[str] = []

    def generate_image(self, prompt: str) -> Optional[Image.Image]:
        self.calls.append(prompt)
        color = self.colors.get(prompt)
        if color is None:
            if self.default is None:
                return None
            color = (90, 90, 90)
        return Image.new("RGB", (16, 16), color=color)


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def connection_error() -> Exception:
    return requests.ConnectionError("connection refused")
