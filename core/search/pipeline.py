# Path: core/search/pipeline.py
# Purpose: Orchestrate prompt ranking by combining descriptor construction and comparison.
# Layer: core/search.
# Details: Generates the query and candidate descriptors in one batch, then ranks the candidates.

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from config.settings import AppSettings
from core.descriptors.color import ColorHistogramDescriptor, SingleColorDescriptor
from core.descriptors.hashing import PerceptualHashDescriptor
from core.descriptors.prompt import PromptDescriptor
from core.generation.factory import create_strategy
from core.models.domain import RankedPrompt
from .ranking import DescriptorFactory, descriptor_factory, initialize_descriptors, rank_descriptors

DEFAULT_EXTRACTORS = (SingleColorDescriptor, ColorHistogramDescriptor, PerceptualHashDescriptor)

logger = logging.getLogger(__name__)


class PromptRankingPipeline:
    """High-level service bridging API and script layers with prompt descriptors."""

    def __init__(self, factory: DescriptorFactory, max_workers: int = 4, progress: bool = False) -> None:
        self.factory = factory
        self.max_workers = max_workers
        self.progress = progress

    @classmethod
    def from_settings(cls, settings: AppSettings, progress: bool = False) -> "PromptRankingPipeline":
        """Wire the configured backend with the default extractor set."""

        strategy = create_strategy(settings.backend, settings.generation)
        factory = descriptor_factory(strategy, DEFAULT_EXTRACTORS, aggregate=settings.aggregate)
        return cls(factory, max_workers=settings.max_workers, progress=progress)

    def describe(self, prompt: str) -> PromptDescriptor:
        """Build a single descriptor for ``prompt``."""

        return self.factory(prompt)

    def rank(self, query: str, candidates: Sequence[str], k: Optional[int] = None) -> List[RankedPrompt]:
        """
        Rank candidate prompts by the visual distance of their images to the query's image.

        External calls:
        - core/search/ranking.py::initialize_descriptors - generates every image concurrently.
        - core/search/ranking.py::rank_descriptors - compares and orders the candidates.
        """

        descriptors = initialize_descriptors(
            [query, *candidates], self.factory, max_workers=self.max_workers, progress=self.progress
        )
        query_descriptor, candidate_descriptors = descriptors[0], descriptors[1:]
        if not query_descriptor.is_ready:
            logger.warning("Query prompt %r produced no image; every candidate is incomparable.", query)
        return rank_descriptors(query_descriptor, candidate_descriptors, k=k)
