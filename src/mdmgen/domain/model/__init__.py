"""Public domain model surface."""

from __future__ import annotations

from mdmgen.domain.model.descriptors import (
    DisplayInfo,
    EntityAnnotation,
    EntityDeclaration,
    FieldDescriptor,
    FieldGroup,
    GroupMenu,
)
from mdmgen.domain.model.enums import (
    DeviceKind,
    EntityKind,
    EntityRefKind,
    FieldKind,
    ScalarKind,
    SynthesisMatch,
    parse_field_kind,
)
from mdmgen.domain.model.metadata import (
    EntityMetadata,
    EnumPropertiesByIndex,
    ModelMetaData,
    PropertiesByIndex,
    PropertyMetadata,
    PropertyMetadataEnum,
)

__all__ = [
    "DeviceKind",
    "DisplayInfo",
    "EntityAnnotation",
    "EntityDeclaration",
    "EntityKind",
    "EntityMetadata",
    "EntityRefKind",
    "EnumPropertiesByIndex",
    "FieldDescriptor",
    "FieldGroup",
    "FieldKind",
    "GroupMenu",
    "ModelMetaData",
    "PropertiesByIndex",
    "PropertyMetadata",
    "PropertyMetadataEnum",
    "ScalarKind",
    "SynthesisMatch",
    "parse_field_kind",
]
