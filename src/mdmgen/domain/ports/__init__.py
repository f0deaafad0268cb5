"""Domain port definitions for adapters."""

from __future__ import annotations

from .descriptors import DescriptorSource
from .documentation import DocumentationProvider

__all__ = [
    "DescriptorSource",
    "DocumentationProvider",
]
