"""Read registry documents from disk."""

from __future__ import annotations

import json
import tomllib
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from .schema import RegistryDocument
from .translator import LoadedRegistry, translate_registry

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

SUPPORTED_SUFFIXES: Final[tuple[str, ...]] = (".json", ".toml")


class RegistryFileError(ValueError):
    """Raised when a registry document cannot be read or validated."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid registry file {path}: {reason}")


def read_registry_document(path: Path) -> RegistryDocument:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise RegistryFileError(
            path, f"unsupported suffix {suffix!r} (expected {', '.join(SUPPORTED_SUFFIXES)})"
        )

    try:
        with path.open("rb") as handle:
            raw: object = tomllib.load(handle) if suffix == ".toml" else json.load(handle)
    except OSError as exc:
        raise RegistryFileError(path, str(exc)) from exc
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise RegistryFileError(path, f"cannot decode document: {exc}") from exc

    try:
        return RegistryDocument.model_validate(raw)
    except ValidationError as exc:
        raise RegistryFileError(path, str(exc)) from exc


def load_registry(path: Path) -> LoadedRegistry:
    """Read, validate and translate the registry document at ``path``."""

    document = read_registry_document(path)
    log.info("Loaded registry %s with %s entity declarations", path, len(document.entities))
    return translate_registry(document)
