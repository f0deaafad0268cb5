"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ScalarKind(StrEnum):
    """Data kind of a value field."""

    BOOL = "bool"
    STR = "str"
    DATE = "date"
    DBL = "dbl"
    NUM32 = "num32"
    NUM64 = "num64"
    GEO = "geo"
    ENUM = "enum"
    SUGGESTION = "suggestion"


class EntityRefKind(StrEnum):
    """Data kind of a field pointing at another entity."""

    REFERENCE = "reference"
    LOCAL_REFERENCE = "local_reference"


type FieldKind = ScalarKind | EntityRefKind


class EntityKind(StrEnum):
    ENTITY = "entity"
    CUSTOM_ENTITY = "custom_entity"
    PROCESS = "process"


class DeviceKind(StrEnum):
    ALL = "all"
    WEB = "web"
    PHONE = "phone"
    TABLET = "tablet"


class SynthesisMatch(StrEnum):
    """How input-only fields are detected during reconciliation."""

    # (field index, is entity reference), same as the model/input join
    KEY = "key"
    # legacy behaviour: by field name
    NAME = "name"


def parse_field_kind(value: str) -> FieldKind:
    """Return the scalar or reference kind named by ``value``."""

    normalized = value.strip().lower()
    try:
        return ScalarKind(normalized)
    except ValueError:
        pass
    try:
        return EntityRefKind(normalized)
    except ValueError as exc:
        raise ValueError(f"Unknown field kind: {value}") from exc
