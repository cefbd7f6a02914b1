# Path: core/models/domain.py
# Purpose: Define domain models shared across generation, descriptor, and ranking workflows.
# Layer: core/models.
# Details: Lightweight dataclasses and constants shared between API, scripts, and core services.

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Largest finite double; returned when two descriptors cannot be compared.
MAX_DISTANCE: float = sys.float_info.max


def is_max_distance(value: float) -> bool:
    """Return True if ``value`` is the incomparable sentinel rather than a measured distance."""

    return value >= MAX_DISTANCE


class DescriptorState(enum.Enum):
    """Lifecycle of a prompt descriptor."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


@dataclass
class RankedPrompt:
    """Ranking result pairing a candidate prompt with its distance to the query."""

    prompt: str
    distance: float
    comparable: bool = True
    descriptor: Optional[Any] = None

    def to_payload(self) -> Dict[str, Any]:
        """Return a JSON-friendly view; the sentinel distance is rendered as None."""

        return {
            "prompt": self.prompt,
            "distance": self.distance if self.comparable else None,
            "comparable": self.comparable,
        }
