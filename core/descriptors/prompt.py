# Path: core/descriptors/prompt.py
# Purpose: Turn a prompt into a comparable visual fingerprint.
# Layer: core/descriptors.
# Details: Template pipeline generate -> extract -> extend -> seal, plus the remote and local concrete descriptors.

from __future__ import annotations

import logging
from typing import Iterable, Optional

from PIL import Image

from config.settings import GenerationSettings
from core.comparators.base import Comparator, DefaultComparator
from core.generation.base import GenerationStrategy, SessionFactory
from core.generation.local import LocalAPIStrategy
from core.generation.remote import RemoteAPIStrategy
from core.models.domain import DescriptorState
from .base import Extractor
from .color import SingleColorDescriptor
from .composite import CompositeDescriptor

logger = logging.getLogger(__name__)

NO_DESCRIPTORS = "No descriptors generated."


class PromptDescriptor:
    """Descriptor of the image a generation backend produces for a prompt.

    Construction runs :meth:`initialize` once. Afterwards the descriptor is
    either READY (image and composite descriptor both present) or FAILED
    (both absent); the two fields are never populated independently.

    Extension happens in two ways: ``extractors`` are run in order over the
    generated image, then the :meth:`_extend_descriptors` hook lets
    subclasses append further sub-descriptors before the container is sealed.
    """

    def __init__(
        self,
        prompt: str,
        strategy: GenerationStrategy,
        comparator: Optional[Comparator["PromptDescriptor"]] = None,
        extractors: Iterable[Extractor] = (),
        aggregate: str = "sum",
    ) -> None:
        self._prompt = prompt
        self.strategy = strategy
        self.comparator: Comparator["PromptDescriptor"] = comparator or DefaultComparator()
        self._extractors = tuple(extractors)
        self._aggregate = aggregate
        self._generated_image: Optional[Image.Image] = None
        self._descriptors: Optional[CompositeDescriptor] = None
        self._state = DescriptorState.UNINITIALIZED
        self.initialize()

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def state(self) -> DescriptorState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is DescriptorState.READY

    def initialize(self) -> None:
        """Generate the image and build its descriptors; later calls are no-ops."""

        if self._state is not DescriptorState.UNINITIALIZED:
            return

        try:
            image = self.strategy.generate_image(self._prompt)
            if image is None:
                logger.warning("No image generated for prompt %r via %s.", self._prompt, self.strategy.name)
                self._state = DescriptorState.FAILED
                return

            descriptors = CompositeDescriptor(image, self._extractors, aggregate=self._aggregate)
            self._extend_descriptors(image, descriptors)
            descriptors.seal()
        except Exception:
            self._state = DescriptorState.FAILED
            raise

        self._generated_image = image
        self._descriptors = descriptors
        self._state = DescriptorState.READY
        logger.debug("Built %d sub-descriptors for prompt %r.", len(descriptors), self._prompt)

    def _extend_descriptors(self, image: Image.Image, descriptors: CompositeDescriptor) -> None:
        """Hook for subclasses to append sub-descriptors after the base extraction."""

    def get_generated_image(self) -> Optional[Image.Image]:
        return self._generated_image

    def get_descriptors(self) -> Optional[CompositeDescriptor]:
        return self._descriptors

    generated_image = property(get_generated_image)
    descriptors = property(get_descriptors)

    def compare_to(self, other: "PromptDescriptor") -> float:
        """Return the comparator's distance between this descriptor and ``other``."""

        if type(other) is not type(self):
            raise TypeError(f"Cannot compare {type(self).__name__} with {type(other).__name__}.")
        return self.comparator(self, other)

    def describe(self) -> str:
        body = str(self._descriptors) if self._descriptors is not None else NO_DESCRIPTORS
        return f"{type(self).__name__}: [{self._prompt}]\n{body}"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(prompt={self._prompt!r}, state={self._state.value})"


class RemotePromptDescriptor(PromptDescriptor):
    """Prompt descriptor backed by the hosted inference API, described by its mean colour."""

    def __init__(
        self,
        prompt: str,
        api_token: Optional[str] = None,
        settings: Optional[GenerationSettings] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        settings = settings or GenerationSettings()
        strategy = RemoteAPIStrategy(
            api_url=settings.remote_url,
            api_token=api_token if api_token is not None else settings.api_token,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            session_factory=session_factory,
        )
        super().__init__(prompt, strategy, DefaultComparator())

    def _extend_descriptors(self, image: Image.Image, descriptors: CompositeDescriptor) -> None:
        descriptors.add(SingleColorDescriptor(image))


class LocalPromptDescriptor(PromptDescriptor):
    """Prompt descriptor backed by the local generation service, described by its mean colour."""

    def __init__(
        self,
        prompt: str,
        settings: Optional[GenerationSettings] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        settings = settings or GenerationSettings()
        strategy = LocalAPIStrategy(
            base_url=settings.local_base_url,
            model_name=settings.local_model_name,
            num_inference_steps=settings.num_inference_steps,
            guidance_scale=settings.guidance_scale,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            session_factory=session_factory,
        )
        super().__init__(prompt, strategy, DefaultComparator())

    def _extend_descriptors(self, image: Image.Image, descriptors: CompositeDescriptor) -> None:
        descriptors.add(SingleColorDescriptor(image))
