from __future__ import annotations

import json
from types import MappingProxyType
from typing import TYPE_CHECKING

from mdmgen.adapters.json_export import (
    dumps_model_metadata,
    entity_metadata_to_dict,
    model_metadata_to_dict,
    write_model_metadata,
)
from mdmgen.adapters.registry_file import translate_registry
from mdmgen.domain.metadata import build_model_metadata
from mdmgen.domain.model import (
    DisplayInfo,
    EntityKind,
    EntityMetadata,
    GroupMenu,
    ModelMetaData,
    PropertyMetadata,
    PropertyMetadataEnum,
)

if TYPE_CHECKING:
    from pathlib import Path


def _entity() -> EntityMetadata:
    return EntityMetadata(
        index=1,
        title="Barrack",
        short_name="brk",
        path_name="barracks",
        entity_kind=EntityKind.PROCESS,
        class_name="Barrack",
        auto_numeric=True,
        menus=(GroupMenu(title="Fields", icon="map"),),
        string_data=MappingProxyType(
            {
                2: PropertyMetadata(
                    name_prop="name",
                    visible=True,
                    auto_numeric=False,
                    is_array=False,
                    info=DisplayInfo(title="Name"),
                    required=True,
                    unique=True,
                    has_input=True,
                )
            }
        ),
        enum_data=MappingProxyType(
            {
                4: PropertyMetadataEnum(
                    name_prop="status",
                    is_array=False,
                    info=DisplayInfo(title="Status"),
                    enum_labels=MappingProxyType({1: "Open", 2: "Año"}),
                )
            }
        ),
    )


def test_entity_members_are_camel_case() -> None:
    payload = entity_metadata_to_dict(_entity())

    assert list(payload) == [
        "index",
        "title",
        "shortName",
        "description",
        "visible",
        "pathName",
        "entityKind",
        "className",
        "autoNumeric",
        "menus",
        "boolData",
        "stringData",
        "dateData",
        "doubleData",
        "enumData",
        "geoData",
        "numData",
        "relData",
    ]
    assert payload["entityKind"] == "process"
    assert payload["menus"] == [{"title": "Fields", "icon": "map", "parent": None}]


def test_property_records_are_keyed_by_stringified_index() -> None:
    payload = entity_metadata_to_dict(_entity())

    assert payload["stringData"] == {
        "2": {
            "nameProp": "name",
            "visible": True,
            "autoNumeric": False,
            "isArray": False,
            "info": {"title": "Name", "shortName": "", "description": ""},
            "required": True,
            "unique": True,
            "hasInput": True,
        }
    }
    assert payload["enumData"] == {
        "4": {
            "nameProp": "status",
            "isArray": False,
            "info": {"title": "Status", "shortName": "", "description": ""},
            "enumLabels": {"1": "Open", "2": "Año"},
        }
    }


def test_dumps_is_valid_json_in_declaration_order() -> None:
    metadata = ModelMetaData(indexes=(EntityMetadata(index=5), EntityMetadata(index=2)))

    document = json.loads(dumps_model_metadata(metadata))

    assert [entity["index"] for entity in document["indexes"]] == [5, 2]


def test_zero_indent_gives_compact_output() -> None:
    metadata = ModelMetaData(indexes=(_entity(),))

    assert "\n" not in dumps_model_metadata(metadata, indent=0)
    assert "\n" in dumps_model_metadata(metadata, indent=2)


def test_non_ascii_labels_are_kept() -> None:
    text = dumps_model_metadata(ModelMetaData(indexes=(_entity(),)))

    assert "Año" in text


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "out" / "nested" / "metadata.json"
    metadata = ModelMetaData(indexes=(_entity(),))

    written = write_model_metadata(metadata, target)

    assert written == target
    assert json.loads(target.read_text(encoding="utf-8")) == model_metadata_to_dict(metadata)


def test_export_is_deterministic(registry_payload: dict[str, object]) -> None:
    loaded = translate_registry(registry_payload)

    first = dumps_model_metadata(
        build_model_metadata(loaded.registry, documentation=loaded.documentation)
    )
    second = dumps_model_metadata(
        build_model_metadata(loaded.registry, documentation=loaded.documentation)
    )

    assert first == second
