"""Serialise ``ModelMetaData`` for client packages.

Contract kept by every function here:
- member names are camelCase
- per-kind mappings use the field index, stringified, as key
- ``nameProp`` is emitted exactly as computed by classification
- output order follows declaration order, so identical input gives identical text
"""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from mdmgen.domain.model import (
        DisplayInfo,
        EntityMetadata,
        GroupMenu,
        ModelMetaData,
        PropertyMetadata,
        PropertyMetadataEnum,
    )

log = getLogger(__name__)

type JsonObject = dict[str, object]


def model_metadata_to_dict(metadata: ModelMetaData) -> JsonObject:
    return {"indexes": [entity_metadata_to_dict(entity) for entity in metadata.indexes]}


def entity_metadata_to_dict(entity: EntityMetadata) -> JsonObject:
    return {
        "index": entity.index,
        "title": entity.title,
        "shortName": entity.short_name,
        "description": entity.description,
        "visible": entity.visible,
        "pathName": entity.path_name,
        "entityKind": entity.entity_kind.value,
        "className": entity.class_name,
        "autoNumeric": entity.auto_numeric,
        "menus": [_menu_to_dict(menu) for menu in entity.menus],
        "boolData": _properties_to_dict(entity.bool_data),
        "stringData": _properties_to_dict(entity.string_data),
        "dateData": _properties_to_dict(entity.date_data),
        "doubleData": _properties_to_dict(entity.double_data),
        "enumData": {
            str(index): _enum_property_to_dict(prop) for index, prop in entity.enum_data.items()
        },
        "geoData": _properties_to_dict(entity.geo_data),
        "numData": _properties_to_dict(entity.num_data),
        "relData": _properties_to_dict(entity.rel_data),
    }


def dumps_model_metadata(metadata: ModelMetaData, *, indent: int | None = 2) -> str:
    return json.dumps(
        model_metadata_to_dict(metadata),
        indent=indent or None,
        ensure_ascii=False,
    )


def write_model_metadata(metadata: ModelMetaData, path: Path, *, indent: int | None = 2) -> Path:
    """Write ``metadata`` as JSON to ``path``, creating parent directories."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_model_metadata(metadata, indent=indent) + "\n", encoding="utf-8")
    log.info("Wrote metadata for %s entities to %s", len(metadata.indexes), path)
    return path


def _properties_to_dict(properties: Mapping[int, PropertyMetadata]) -> JsonObject:
    return {str(index): _property_to_dict(prop) for index, prop in properties.items()}


def _property_to_dict(prop: PropertyMetadata) -> JsonObject:
    return {
        "nameProp": prop.name_prop,
        "visible": prop.visible,
        "autoNumeric": prop.auto_numeric,
        "isArray": prop.is_array,
        "info": _info_to_dict(prop.info),
        "required": prop.required,
        "unique": prop.unique,
        "hasInput": prop.has_input,
    }


def _enum_property_to_dict(prop: PropertyMetadataEnum) -> JsonObject:
    return {
        "nameProp": prop.name_prop,
        "isArray": prop.is_array,
        "info": _info_to_dict(prop.info),
        "enumLabels": {str(value): label for value, label in prop.enum_labels.items()},
    }


def _info_to_dict(info: DisplayInfo) -> JsonObject:
    return {
        "title": info.title,
        "shortName": info.short_name,
        "description": info.description,
    }


def _menu_to_dict(menu: GroupMenu) -> JsonObject:
    return {"title": menu.title, "icon": menu.icon, "parent": menu.parent}
