"""Exported metadata document handed to serializers and emitters."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from mdmgen.domain.model.descriptors import DisplayInfo
from mdmgen.domain.model.enums import EntityKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mdmgen.domain.model.descriptors import GroupMenu


def _empty_mapping[V]() -> Mapping[int, V]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertyMetadata:
    name_prop: str
    visible: bool
    auto_numeric: bool
    is_array: bool
    info: DisplayInfo
    required: bool
    unique: bool
    has_input: bool


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertyMetadataEnum:
    name_prop: str
    is_array: bool
    info: DisplayInfo
    enum_labels: Mapping[int, str] = field(default_factory=_empty_mapping)


type PropertiesByIndex = Mapping[int, PropertyMetadata]
type EnumPropertiesByIndex = Mapping[int, PropertyMetadataEnum]


@dataclass(frozen=True, slots=True, kw_only=True)
class EntityMetadata:
    """Per-entity metadata; kind mappings are keyed by field index."""

    index: int
    title: str = ""
    short_name: str = ""
    description: str = ""
    visible: bool = True
    path_name: str = ""
    entity_kind: EntityKind = EntityKind.ENTITY
    class_name: str = ""
    auto_numeric: bool = False
    menus: tuple[GroupMenu, ...] = ()
    bool_data: PropertiesByIndex = field(default_factory=_empty_mapping)
    string_data: PropertiesByIndex = field(default_factory=_empty_mapping)
    date_data: PropertiesByIndex = field(default_factory=_empty_mapping)
    double_data: PropertiesByIndex = field(default_factory=_empty_mapping)
    enum_data: EnumPropertiesByIndex = field(default_factory=_empty_mapping)
    geo_data: PropertiesByIndex = field(default_factory=_empty_mapping)
    num_data: PropertiesByIndex = field(default_factory=_empty_mapping)
    rel_data: PropertiesByIndex = field(default_factory=_empty_mapping)

    def field_count(self) -> int:
        return sum(
            len(mapping)
            for mapping in (
                self.bool_data,
                self.string_data,
                self.date_data,
                self.double_data,
                self.enum_data,
                self.geo_data,
                self.num_data,
                self.rel_data,
            )
        )


@dataclass(frozen=True, slots=True)
class ModelMetaData:
    """Whole-document output of a generation run, in declaration order."""

    indexes: tuple[EntityMetadata, ...] = ()

    def entity(self, index: int) -> EntityMetadata | None:
        for entity in self.indexes:
            if entity.index == index:
                return entity
        return None
