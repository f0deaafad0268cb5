"""Pydantic models describing a registry document (JSON or TOML)."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mdmgen.domain.model import DeviceKind, EntityKind, EntityRefKind, ScalarKind


def _lower(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class FieldGroupPayload(RegistryBaseModel):
    name: str
    column_proportion: int | None = None
    order_index: int | None = None
    device: DeviceKind | None = None

    _normalize_device = field_validator("device", mode="before")(_lower)


class GroupMenuPayload(RegistryBaseModel):
    title: str
    icon: str | None = None
    parent: str | None = None

    _normalize_optional = field_validator("icon", "parent", mode="before")(_blank_to_none)


class FieldPayload(RegistryBaseModel):
    name: str = Field(min_length=1)
    index: int
    kind: ScalarKind | EntityRefKind
    is_array: bool = False
    required: bool = False
    unique: bool = False
    visible: bool = True
    auto_numeric: bool = False
    enum_labels: dict[int, str] = Field(default_factory=dict)
    groups: list[FieldGroupPayload] = Field(default_factory=list)

    _normalize_kind = field_validator("kind", mode="before")(_lower)


class EntityPayload(RegistryBaseModel):
    class_name: str = Field(min_length=1)
    # types without an index are declared but never exported
    index: int | None = None
    visible: bool = True
    path_name: str = ""
    kind: EntityKind = EntityKind.ENTITY
    menus: list[GroupMenuPayload] = Field(default_factory=list)
    title: str = ""
    short_name: str = ""
    description: str = ""
    persisted: list[FieldPayload] = Field(default_factory=list, alias="model")
    inputs: list[FieldPayload] | None = Field(default=None, alias="input")

    _normalize_kind = field_validator("kind", mode="before")(_lower)


class PropertyDocPayload(RegistryBaseModel):
    kind: ScalarKind | EntityRefKind
    index: int
    title: str = ""
    short_name: str = ""
    description: str = ""

    _normalize_kind = field_validator("kind", mode="before")(_lower)


class RegistryDocument(RegistryBaseModel):
    entities: list[EntityPayload] = Field(default_factory=list)
    properties: list[PropertyDocPayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_indexes(self) -> Self:
        seen_entities: dict[int, str] = {}
        for entity in self.entities:
            if entity.index is None:
                continue
            previous = seen_entities.get(entity.index)
            if previous is not None:
                raise ValueError(
                    f"Entity index {entity.index} is declared by both "
                    f"{previous} and {entity.class_name}"
                )
            seen_entities[entity.index] = entity.class_name

        seen_docs: set[tuple[str, int]] = set()
        for doc in self.properties:
            key = (doc.kind.value, doc.index)
            if key in seen_docs:
                raise ValueError(f"Duplicate documentation for {doc.kind} field {doc.index}")
            seen_docs.add(key)
        return self
