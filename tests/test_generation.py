"""Tests for generation backends (HTTP traffic goes through fake sessions)."""

from __future__ import annotations

import io
import json
import logging

import numpy as np
import pytest
import requests
from PIL import Image

from config.settings import GenerationSettings
from core.generation import (
    LocalAPIStrategy,
    PlaceholderStrategy,
    RemoteAPIStrategy,
    create_strategy,
)
from tests.conftest import FakeResponse, FakeSession, make_oversized_png, make_png

REMOTE_URL = "https://inference.example/models/sdxl"
BASE_URL = "http://localhost:8000"
GENERATE_URL = f"{BASE_URL}/images/generate/"


def _same_pixels(image: Image.Image, png: bytes) -> bool:
    expected = Image.open(io.BytesIO(png))
    return np.array_equal(np.asarray(image.convert("RGB")), np.asarray(expected.convert("RGB")))


def _remote(session: FakeSession) -> RemoteAPIStrategy:
    return RemoteAPIStrategy(api_url=REMOTE_URL, api_token="secret", session_factory=lambda: session)


def _local(session: FakeSession) -> LocalAPIStrategy:
    return LocalAPIStrategy(base_url=BASE_URL, session_factory=lambda: session)


# --- remote ---------------------------------------------------------------


def test_remote_success_decodes_image(png_bytes):
    session = FakeSession({("POST", REMOTE_URL): FakeResponse(200, content=png_bytes)})
    image = _remote(session).generate_image("a red square")
    assert image is not None
    assert _same_pixels(image, png_bytes)

    call = session.calls[0]
    assert call["json"] == {"inputs": "a red square"}
    assert call["headers"]["Authorization"] == "Bearer secret"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["timeout"] == (30.0, None)
    assert session.closed


def test_remote_non_200_returns_none_and_logs_status(caplog):
    session = FakeSession({("POST", REMOTE_URL): FakeResponse(503)})
    with caplog.at_level(logging.ERROR):
        assert _remote(session).generate_image("anything") is None
    assert "503" in caplog.text
    assert len(session.calls) == 1


def test_remote_transport_error_returns_none(connection_error):
    session = FakeSession({("POST", REMOTE_URL): connection_error})
    assert _remote(session).generate_image("anything") is None


def test_remote_timeout_returns_none():
    session = FakeSession({("POST", REMOTE_URL): requests.Timeout("connect timed out")})
    assert _remote(session).generate_image("anything") is None


def test_remote_undecodable_body_returns_none():
    session = FakeSession({("POST", REMOTE_URL): FakeResponse(200, content=b"not an image")})
    assert _remote(session).generate_image("anything") is None


def test_remote_oversized_image_returns_none(caplog):
    session = FakeSession({("POST", REMOTE_URL): FakeResponse(200, content=make_oversized_png())})
    with caplog.at_level(logging.ERROR):
        assert _remote(session).generate_image("anything") is None
    assert "Could not decode" in caplog.text


def test_local_oversized_download_returns_none():
    session = FakeSession({
        ("POST", GENERATE_URL): FakeResponse(200, json_data={"image_path": "huge.png"}),
        ("GET", f"{BASE_URL}/images/download/huge.png"): FakeResponse(200, content=make_oversized_png()),
    })
    assert _local(session).generate_image("anything") is None


def test_remote_prompt_with_quotes_is_valid_json():
    prompt = 'a sign that says "hello" \\ goodbye'
    session = FakeSession({("POST", REMOTE_URL): FakeResponse(200, content=make_png())})
    _remote(session).generate_image(prompt)

    call = session.calls[0]
    prepared = requests.Request("POST", REMOTE_URL, json=call["json"]).prepare()
    assert json.loads(prepared.body) == {"inputs": prompt}


# --- local ----------------------------------------------------------------


def test_local_two_phase_success(png_bytes):
    session = FakeSession({
        ("POST", GENERATE_URL): FakeResponse(200, json_data={"image_path": "/tmp/out/abc123.png"}),
        ("GET", f"{BASE_URL}/images/download/abc123.png"): FakeResponse(200, content=png_bytes),
    })
    image = _local(session).generate_image("a red square")

    assert image is not None
    assert _same_pixels(image, png_bytes)
    assert [call["method"] for call in session.calls] == ["POST", "GET"]
    assert session.calls[0]["json"] == {
        "model_name": "stable",
        "prompt": "a red square",
        "num_inference_steps": 50,
        "guidance_scale": 7.5,
    }
    assert session.calls[1]["timeout"] == (30.0, None)


def test_local_download_404_is_attempted_once():
    session = FakeSession({
        ("POST", GENERATE_URL): FakeResponse(200, json_data={"image_path": "/tmp/out/abc123.png"}),
        ("GET", f"{BASE_URL}/images/download/abc123.png"): FakeResponse(404),
    })
    assert _local(session).generate_image("anything") is None
    assert len(session.calls_to("GET")) == 1


def test_local_submit_failure_skips_download(caplog):
    session = FakeSession({("POST", GENERATE_URL): FakeResponse(500)})
    with caplog.at_level(logging.ERROR):
        assert _local(session).generate_image("anything") is None
    assert session.calls_to("GET") == []
    assert "500" in caplog.text


@pytest.mark.parametrize("json_data", [None, {"status": "done"}, {"image_path": 42}, {"image_path": "/tmp/out/"}])
def test_local_malformed_submit_response_returns_none(json_data):
    session = FakeSession({("POST", GENERATE_URL): FakeResponse(200, json_data=json_data)})
    assert _local(session).generate_image("anything") is None
    assert session.calls_to("GET") == []


def test_local_windows_style_path_uses_last_component(png_bytes):
    session = FakeSession({
        ("POST", GENERATE_URL): FakeResponse(200, json_data={"image_path": "C:\\out\\img 1.png"}),
        ("GET", f"{BASE_URL}/images/download/img%201.png"): FakeResponse(200, content=png_bytes),
    })
    assert _local(session).generate_image("anything") is not None


def test_local_transport_error_in_download_returns_none(connection_error):
    session = FakeSession({
        ("POST", GENERATE_URL): FakeResponse(200, json_data={"image_path": "abc123.png"}),
        ("GET", f"{BASE_URL}/images/download/abc123.png"): connection_error,
    })
    assert _local(session).generate_image("anything") is None
    assert session.closed


def test_local_prompt_with_quotes_is_valid_json():
    prompt = 'the word "stop" in red'
    session = FakeSession({("POST", GENERATE_URL): FakeResponse(500)})
    _local(session).generate_image(prompt)

    prepared = requests.Request("POST", GENERATE_URL, json=session.calls[0]["json"]).prepare()
    assert json.loads(prepared.body)["prompt"] == prompt


# --- placeholder and factory ---------------------------------------------


def test_placeholder_is_deterministic_per_prompt():
    strategy = PlaceholderStrategy(size=64)
    first = strategy.generate_image("a lighthouse")
    second = strategy.generate_image("a lighthouse")
    other = strategy.generate_image("a forest")

    assert first.size == (64, 64)
    assert np.array_equal(np.asarray(first), np.asarray(second))
    assert not np.array_equal(np.asarray(first), np.asarray(other))


def test_create_strategy_uses_settings():
    settings = GenerationSettings(api_token="tok", local_base_url="http://gen:9000/", connect_timeout=5.0)

    remote = create_strategy("remote", settings)
    assert isinstance(remote, RemoteAPIStrategy)
    assert remote.api_token == "tok"
    assert remote.timeout == (5.0, None)

    local = create_strategy("local", settings)
    assert isinstance(local, LocalAPIStrategy)
    assert local.base_url == "http://gen:9000"

    assert isinstance(create_strategy("placeholder"), PlaceholderStrategy)


def test_create_strategy_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unknown generation backend"):
        create_strategy("dall-e")
