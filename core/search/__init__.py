# Path: core/search/__init__.py
# Purpose: Package initializer for prompt ranking.
# Layer: core/search.
# Details: Exposes ranking helpers and the pipeline entrypoint.

from .pipeline import DEFAULT_EXTRACTORS, PromptRankingPipeline
from .ranking import DescriptorFactory, descriptor_factory, initialize_descriptors, rank_descriptors

__all__ = [
    "DEFAULT_EXTRACTORS",
    "DescriptorFactory",
    "PromptRankingPipeline",
    "descriptor_factory",
    "initialize_descriptors",
    "rank_descriptors",
]
