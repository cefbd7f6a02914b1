# Path: core/generation/__init__.py
# Purpose: Package initializer for prompt-to-image generation backends.
# Layer: core/generation.
# Details: Exposes the strategy interface, concrete backends, and the name-based factory.

from .base import GenerationStrategy, HTTPGenerationStrategy
from .factory import BACKENDS, create_strategy
from .local import LocalAPIStrategy
from .placeholder import PlaceholderStrategy
from .remote import RemoteAPIStrategy

__all__ = [
    "BACKENDS",
    "GenerationStrategy",
    "HTTPGenerationStrategy",
    "LocalAPIStrategy",
    "PlaceholderStrategy",
    "RemoteAPIStrategy",
    "create_strategy",
]
