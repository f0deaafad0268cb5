"""Entity metadata assembly stage (pure, no I/O)."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from mdmgen.domain.model import EntityMetadata

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mdmgen.domain.model import EntityAnnotation
    from mdmgen.domain.ports import DocumentationProvider

    from .contracts import PropertySearchInfo
    from .fold import FoldedProperties


class AssembleEntity(Protocol):
    """Combine folded mappings with entity-level attributes."""

    def __call__(
        self,
        annotation: EntityAnnotation,
        *,
        class_name: str,
        properties: Iterable[PropertySearchInfo],
        folded: FoldedProperties,
        documentation: DocumentationProvider,
    ) -> EntityMetadata: ...


def assemble_entity(
    annotation: EntityAnnotation,
    *,
    class_name: str,
    properties: Iterable[PropertySearchInfo],
    folded: FoldedProperties,
    documentation: DocumentationProvider,
) -> EntityMetadata:
    info = documentation.entity_info(annotation.index)
    return EntityMetadata(
        index=annotation.index,
        title=info.title,
        short_name=info.short_name,
        description=info.description,
        visible=annotation.visible,
        path_name=annotation.path_name,
        entity_kind=annotation.kind,
        class_name=class_name,
        auto_numeric=any(record.is_auto_numeric for record in properties),
        menus=tuple(annotation.menus),
        bool_data=MappingProxyType(dict(folded.bool_data)),
        string_data=MappingProxyType(dict(folded.string_data)),
        date_data=MappingProxyType(dict(folded.date_data)),
        double_data=MappingProxyType(dict(folded.double_data)),
        enum_data=MappingProxyType(dict(folded.enum_data)),
        geo_data=MappingProxyType(dict(folded.geo_data)),
        num_data=MappingProxyType(dict(folded.num_data)),
        rel_data=MappingProxyType(dict(folded.rel_data)),
    )
