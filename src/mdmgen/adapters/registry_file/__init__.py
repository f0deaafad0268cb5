"""Public interface for the registry file adapter."""

from __future__ import annotations

from .loader import RegistryFileError, load_registry, read_registry_document
from .schema import EntityPayload, FieldPayload, RegistryDocument
from .translator import LoadedRegistry, translate_registry

__all__ = [
    "EntityPayload",
    "FieldPayload",
    "LoadedRegistry",
    "RegistryDocument",
    "RegistryFileError",
    "load_registry",
    "read_registry_document",
    "translate_registry",
]
