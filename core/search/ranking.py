# Path: core/search/ranking.py
# Purpose: Build many prompt descriptors and order candidates by distance to a query.
# Layer: core/search.
# Details: Initialization fans out on a thread pool; incomparable candidates always rank last.

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Sequence

from tqdm import tqdm

from core.descriptors.base import Extractor
from core.descriptors.prompt import PromptDescriptor
from core.generation.base import GenerationStrategy
from core.models.domain import RankedPrompt, is_max_distance

logger = logging.getLogger(__name__)

DescriptorFactory = Callable[[str], PromptDescriptor]


def descriptor_factory(
    strategy: GenerationStrategy,
    extractors: Iterable[Extractor] = (),
    aggregate: str = "sum",
) -> DescriptorFactory:
    """Return a factory producing :class:`PromptDescriptor` objects that share one strategy."""

    extractors = tuple(extractors)

    def build(prompt: str) -> PromptDescriptor:
        return PromptDescriptor(prompt, strategy, extractors=extractors, aggregate=aggregate)

    return build


def initialize_descriptors(
    prompts: Sequence[str],
    factory: DescriptorFactory,
    max_workers: int = 4,
    progress: bool = True,
) -> List[PromptDescriptor]:
    """Build one descriptor per prompt concurrently, preserving input order."""

    if not prompts:
        return []
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        results = pool.map(factory, prompts)
        descriptors = list(tqdm(results, total=len(prompts), desc="Generating", unit="prompt", disable=not progress))

    ready = sum(1 for descriptor in descriptors if descriptor.is_ready)
    logger.info("Initialized %d descriptors, %d with images.", len(descriptors), ready)
    return descriptors


def rank_descriptors(
    query: PromptDescriptor,
    candidates: Iterable[PromptDescriptor],
    k: Optional[int] = None,
) -> List[RankedPrompt]:
    """Order candidates by ascending distance to ``query``.

    Candidates at the sentinel distance are flagged ``comparable=False`` and
    placed after every measured distance; ties keep their input order.
    """

    ranked: List[RankedPrompt] = []
    for candidate in candidates:
        distance = query.compare_to(candidate)
        ranked.append(
            RankedPrompt(
                prompt=candidate.prompt,
                distance=distance,
                comparable=not is_max_distance(distance),
                descriptor=candidate,
            )
        )

    ranked.sort(key=lambda item: (not item.comparable, item.distance))
    if k is not None:
        ranked = ranked[:k]
    return ranked
