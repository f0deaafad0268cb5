"""Kind classification stage.

Routes every reconciled record into exactly one per-kind mapping keyed by field
index. Value fields land in one of the ``ScalarKind`` mappings, reference fields in
one of the ``EntityRefKind`` mappings. ENUM values keep their labels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from mdmgen.domain.model import (
    EntityRefKind,
    PropertyMetadata,
    PropertyMetadataEnum,
    ScalarKind,
)

from .contracts import CollisionStage, IndexCollision

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mdmgen.domain.model import FieldKind

    from .contracts import PropertySearchInfo

log = logging.getLogger(__name__)


def project_name(name: str) -> str:
    """Lower-case the first character of ``name``; the rest is kept as is."""

    return name[:1].lower() + name[1:]


def _new_kind_index() -> dict[FieldKind, dict[int, PropertyMetadata]]:
    kinds: list[FieldKind] = [kind for kind in ScalarKind if kind is not ScalarKind.ENUM]
    kinds.extend(EntityRefKind)
    return {kind: {} for kind in kinds}


@dataclass(slots=True)
class KindPartition:
    """Per-kind mappings of one entity before folding.

    ``reconcile_properties`` already drops records repeating a
    ``(field index, kind)`` pair, so under the default engine ``add`` never
    collides. The check stays for custom reconcile stages and direct callers.
    """

    entity_index: int
    properties: dict[FieldKind, dict[int, PropertyMetadata]] = field(
        default_factory=_new_kind_index
    )
    enums: dict[int, PropertyMetadataEnum] = field(default_factory=dict[int, PropertyMetadataEnum])
    collisions: list[IndexCollision] = field(default_factory=list[IndexCollision])
    _names: dict[tuple[FieldKind, int], str] = field(
        default_factory=dict[tuple["FieldKind", int], str], repr=False
    )

    def mapping_for(self, kind: FieldKind) -> dict[int, PropertyMetadata]:
        if kind is ScalarKind.ENUM:
            raise KeyError("ENUM fields are held in KindPartition.enums")
        return self.properties[kind]

    def source_name(self, kind: FieldKind, index: int) -> str | None:
        """Field name that produced the entry at ``(kind, index)``."""
        return self._names.get((kind, index))

    def add(self, record: PropertySearchInfo) -> bool:
        """Route ``record``; return ``False`` if its index was already taken."""

        kind = record.kind
        existing_name = self._names.get((kind, record.field_index))
        if existing_name is not None:
            self._record_collision(record, kept=existing_name)
            return False

        self._names[(kind, record.field_index)] = record.name
        if kind is ScalarKind.ENUM:
            self.enums[record.field_index] = PropertyMetadataEnum(
                name_prop=project_name(record.name),
                is_array=record.is_enumerable,
                info=record.info,
                enum_labels=MappingProxyType(dict(record.enum_labels)),
            )
        else:
            self.properties[kind][record.field_index] = _property_metadata(record)
        return True

    def __len__(self) -> int:
        return len(self.enums) + sum(len(mapping) for mapping in self.properties.values())

    def _record_collision(self, record: PropertySearchInfo, *, kept: str) -> None:
        log.warning(
            "Field %s of entity %s reuses %s index %s already taken by %s; dropping it",
            record.name,
            self.entity_index,
            record.kind,
            record.field_index,
            kept,
        )
        self.collisions.append(
            IndexCollision(
                entity_index=self.entity_index,
                field_index=record.field_index,
                kind=record.kind,
                kept=kept,
                dropped=record.name,
                stage=CollisionStage.CLASSIFY,
            )
        )


class ClassifyProperties(Protocol):
    """Partition reconciled records by kind."""

    def __call__(
        self,
        properties: Iterable[PropertySearchInfo],
        *,
        entity_index: int,
    ) -> KindPartition: ...


def classify_properties(
    properties: Iterable[PropertySearchInfo],
    *,
    entity_index: int,
) -> KindPartition:
    """Build the per-kind mappings for one entity's reconciled records."""

    partition = KindPartition(entity_index=entity_index)
    for record in properties:
        partition.add(record)
    return partition


def _property_metadata(record: PropertySearchInfo) -> PropertyMetadata:
    return PropertyMetadata(
        name_prop=project_name(record.name),
        visible=record.is_visible,
        auto_numeric=record.is_auto_numeric,
        is_array=record.is_enumerable,
        info=record.info,
        required=record.is_required,
        unique=record.is_unique,
        has_input=record.has_input,
    )
