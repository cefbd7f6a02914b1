# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for generation backends, descriptor aggregation, and concurrency.

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "PROMPTPRINT_"


class GenerationSettings(BaseSettings):
    """Settings describing how generation backends are reached.

    Every field can be overridden with a ``PROMPTPRINT_<FIELD>`` environment
    variable; the remote token is also read from ``HF_API_TOKEN``.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True, populate_by_name=True)

    remote_url: str = Field(
        default="https://api-inference.huggingface.co/models/stabilityai/stable-diffusion-xl-base-1.0",
        description="Inference endpoint used by the remote backend.",
    )
    api_token: str = Field(
        default="",
        validation_alias=AliasChoices("HF_API_TOKEN", f"{ENV_PREFIX}API_TOKEN"),
        description="Bearer token sent to the remote inference endpoint.",
    )
    local_base_url: str = Field(default="http://localhost:8000", description="Base URL of the local generation service.")
    local_model_name: str = Field(default="stable", description="Model identifier requested from the local service.")
    num_inference_steps: int = Field(default=50, description="Sampling steps requested from the local service.")
    guidance_scale: float = Field(default=7.5, description="Classifier-free guidance scale for the local service.")
    connect_timeout: float = Field(default=30.0, description="Connect timeout in seconds for every backend request.")
    read_timeout: Optional[float] = Field(default=None, description="Read timeout in seconds; None waits indefinitely.")
    placeholder_size: int = Field(default=256, description="Edge length of images rendered by the placeholder backend.")


class AppSettings(BaseSettings):
    """Top-level application settings shared across services and interfaces.

    Nested generation fields may also be set as ``PROMPTPRINT_GENERATION__<FIELD>``.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_nested_delimiter="__", env_ignore_empty=True)

    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    backend: str = Field(default="remote", description="Identifier of the generation backend.")
    aggregate: str = Field(default="sum", description="How composite descriptors combine per-item distances.")
    max_workers: int = Field(default=4, description="Thread pool size used when initializing many descriptors.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings from ``PROMPTPRINT_*`` environment variables.

        Raises:
            pydantic.ValidationError: if a variable does not parse as its field's type.
        """

        return cls()


__all__ = ["AppSettings", "GenerationSettings"]
