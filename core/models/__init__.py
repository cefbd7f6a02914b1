# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes the distance sentinel, lifecycle states, and ranking results.

from .domain import MAX_DISTANCE, DescriptorState, RankedPrompt, is_max_distance

__all__ = ["MAX_DISTANCE", "DescriptorState", "RankedPrompt", "is_max_distance"]
