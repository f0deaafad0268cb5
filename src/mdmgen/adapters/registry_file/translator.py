"""Translate registry payloads into domain declarations and documentation."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from mdmgen.domain.model import (
    DisplayInfo,
    EntityAnnotation,
    EntityDeclaration,
    FieldDescriptor,
    FieldGroup,
    GroupMenu,
    ScalarKind,
)
from mdmgen.domain.registry import SchemaRegistry, StaticDocumentation

from .schema import RegistryDocument

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .schema import EntityPayload, FieldPayload

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedRegistry:
    """Everything a generation run needs from one registry document."""

    registry: SchemaRegistry
    documentation: StaticDocumentation


def translate_registry(document: RegistryDocument | Mapping[str, object]) -> LoadedRegistry:
    if not isinstance(document, RegistryDocument):
        document = RegistryDocument.model_validate(document)

    registry = SchemaRegistry.from_declarations(
        _build_declaration(entity) for entity in document.entities
    )
    entity_docs = {
        entity.index: DisplayInfo(
            title=entity.title,
            short_name=entity.short_name,
            description=entity.description,
        )
        for entity in document.entities
        if entity.index is not None
    }
    property_docs = {
        (doc.kind, doc.index): DisplayInfo(
            title=doc.title,
            short_name=doc.short_name,
            description=doc.description,
        )
        for doc in document.properties
    }
    log.debug(
        "Translated registry: %s declarations, %s property docs",
        len(registry),
        len(property_docs),
    )
    return LoadedRegistry(
        registry=registry,
        documentation=StaticDocumentation(entities=entity_docs, properties=property_docs),
    )


def _build_declaration(entity: EntityPayload) -> EntityDeclaration:
    annotation = None
    if entity.index is not None:
        annotation = EntityAnnotation(
            index=entity.index,
            visible=entity.visible,
            path_name=entity.path_name,
            kind=entity.kind,
            menus=tuple(
                GroupMenu(title=menu.title, icon=menu.icon, parent=menu.parent)
                for menu in entity.menus
            ),
        )
    return EntityDeclaration(
        class_name=entity.class_name,
        annotation=annotation,
        model_fields=_build_fields(entity.class_name, entity.persisted),
        input_fields=(
            _build_fields(entity.class_name, entity.inputs) if entity.inputs is not None else None
        ),
    )


def _build_fields(class_name: str, fields: Iterable[FieldPayload]) -> tuple[FieldDescriptor, ...]:
    return tuple(_build_field(class_name, payload) for payload in fields)


def _build_field(class_name: str, payload: FieldPayload) -> FieldDescriptor:
    if payload.enum_labels and payload.kind is not ScalarKind.ENUM:
        log.warning(
            "Ignoring enum labels on %s.%s: field kind is %s",
            class_name,
            payload.name,
            payload.kind,
        )
    return FieldDescriptor(
        name=payload.name,
        field_index=payload.index,
        kind=payload.kind,
        is_enumerable=payload.is_array,
        is_required=payload.required,
        is_unique=payload.unique,
        is_visible=payload.visible,
        is_auto_numeric=payload.auto_numeric,
        enum_labels=dict(payload.enum_labels) if payload.kind is ScalarKind.ENUM else {},
        groups=tuple(
            FieldGroup(
                name=group.name,
                column_proportion=group.column_proportion,
                order_index=group.order_index,
                device=group.device,
            )
            for group in payload.groups
        ),
    )
