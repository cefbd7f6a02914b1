# Path: core/descriptors/__init__.py
# Purpose: Package initializer for visual descriptors.
# Layer: core/descriptors.
# Details: Exposes sub-descriptors, the composite container, and prompt descriptors.

from .base import Extractor, ShapeMismatchError, SubDescriptor
from .color import ColorHistogramDescriptor, SingleColorDescriptor
from .composite import CompositeDescriptor
from .hashing import PerceptualHashDescriptor
from .prompt import LocalPromptDescriptor, PromptDescriptor, RemotePromptDescriptor

__all__ = [
    "ColorHistogramDescriptor",
    "CompositeDescriptor",
    "Extractor",
    "LocalPromptDescriptor",
    "PerceptualHashDescriptor",
    "PromptDescriptor",
    "RemotePromptDescriptor",
    "ShapeMismatchError",
    "SingleColorDescriptor",
    "SubDescriptor",
]
