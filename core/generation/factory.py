# Path: core/generation/factory.py
# Purpose: Build generation strategies by name from application settings.
# Layer: core/generation.
# Details: Used by the HTTP API and scripts to honour the configured backend.

from __future__ import annotations

from typing import Callable, Dict, Optional

from config.settings import GenerationSettings
from .base import GenerationStrategy, SessionFactory
from .local import LocalAPIStrategy
from .placeholder import PlaceholderStrategy
from .remote import RemoteAPIStrategy


def _remote(settings: GenerationSettings, session_factory: Optional[SessionFactory]) -> GenerationStrategy:
    return RemoteAPIStrategy(
        api_url=settings.remote_url,
        api_token=settings.api_token,
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        session_factory=session_factory,
    )


def _local(settings: GenerationSettings, session_factory: Optional[SessionFactory]) -> GenerationStrategy:
    return LocalAPIStrategy(
        base_url=settings.local_base_url,
        model_name=settings.local_model_name,
        num_inference_steps=settings.num_inference_steps,
        guidance_scale=settings.guidance_scale,
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        session_factory=session_factory,
    )


def _placeholder(settings: GenerationSettings, session_factory: Optional[SessionFactory]) -> GenerationStrategy:
    return PlaceholderStrategy(size=settings.placeholder_size)


BACKENDS: Dict[str, Callable[[GenerationSettings, Optional[SessionFactory]], GenerationStrategy]] = {
    RemoteAPIStrategy.name: _remote,
    LocalAPIStrategy.name: _local,
    PlaceholderStrategy.name: _placeholder,
}


def create_strategy(
    name: str,
    settings: Optional[GenerationSettings] = None,
    session_factory: Optional[SessionFactory] = None,
) -> GenerationStrategy:
    """Return the generation strategy registered under ``name``."""

    builder = BACKENDS.get(name)
    if builder is None:
        raise ValueError(f"Unknown generation backend: {name}")
    return builder(settings or GenerationSettings(), session_factory)
