# Path: core/comparators/__init__.py
# Purpose: Package initializer for comparator strategies.
# Layer: core/comparators.
# Details: Exposes the comparator protocol and the default implementation.

from .base import Comparator, DefaultComparator

__all__ = ["Comparator", "DefaultComparator"]
