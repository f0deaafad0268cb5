"""Kind folding stage.

Classification keeps narrow kinds in separate key spaces; clients only see one
mapping per broad kind. This stage merges each narrow kind into its broad sibling:

- SUGGESTION -> STR
- NUM64 -> NUM32
- LOCAL_REFERENCE -> REFERENCE

The destination kind has priority: a source entry whose index already exists in
the destination is dropped (logged and recorded as a collision).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, Protocol

from mdmgen.domain.model import EntityRefKind, ScalarKind

from .contracts import CollisionStage, IndexCollision

if TYPE_CHECKING:
    from mdmgen.domain.model import FieldKind, PropertyMetadata, PropertyMetadataEnum

    from .classify import KindPartition

log = logging.getLogger(__name__)

FOLDS: Final[tuple[tuple[FieldKind, FieldKind], ...]] = (
    (ScalarKind.SUGGESTION, ScalarKind.STR),
    (ScalarKind.NUM64, ScalarKind.NUM32),
    (EntityRefKind.LOCAL_REFERENCE, EntityRefKind.REFERENCE),
)


@dataclass(frozen=True, slots=True, kw_only=True)
class FoldedProperties:
    """Per-kind mappings of one entity after folding."""

    bool_data: dict[int, PropertyMetadata] = field(default_factory=dict[int, "PropertyMetadata"])
    string_data: dict[int, PropertyMetadata] = field(default_factory=dict[int, "PropertyMetadata"])
    date_data: dict[int, PropertyMetadata] = field(default_factory=dict[int, "PropertyMetadata"])
    double_data: dict[int, PropertyMetadata] = field(default_factory=dict[int, "PropertyMetadata"])
    enum_data: dict[int, PropertyMetadataEnum] = field(
        default_factory=dict[int, "PropertyMetadataEnum"]
    )
    geo_data: dict[int, PropertyMetadata] = field(default_factory=dict[int, "PropertyMetadata"])
    num_data: dict[int, PropertyMetadata] = field(default_factory=dict[int, "PropertyMetadata"])
    rel_data: dict[int, PropertyMetadata] = field(default_factory=dict[int, "PropertyMetadata"])
    collisions: tuple[IndexCollision, ...] = ()


class FoldPartition(Protocol):
    """Merge narrow kinds into their broad siblings."""

    def __call__(self, partition: KindPartition) -> FoldedProperties: ...


def fold_partition(partition: KindPartition) -> FoldedProperties:
    """Return folded copies of ``partition``'s mappings; ``partition`` is not mutated."""

    merged: dict[FieldKind, dict[int, PropertyMetadata]] = {
        kind: dict(mapping) for kind, mapping in partition.properties.items()
    }
    collisions: list[IndexCollision] = []

    for source_kind, destination_kind in FOLDS:
        destination = merged[destination_kind]
        for index, metadata in partition.mapping_for(source_kind).items():
            if index not in destination:
                destination[index] = metadata
                continue
            collisions.append(
                _fold_collision(
                    partition,
                    index=index,
                    source_kind=source_kind,
                    destination_kind=destination_kind,
                )
            )

    return FoldedProperties(
        bool_data=merged[ScalarKind.BOOL],
        string_data=merged[ScalarKind.STR],
        date_data=merged[ScalarKind.DATE],
        double_data=merged[ScalarKind.DBL],
        enum_data=dict(partition.enums),
        geo_data=merged[ScalarKind.GEO],
        num_data=merged[ScalarKind.NUM32],
        rel_data=merged[EntityRefKind.REFERENCE],
        collisions=tuple(collisions),
    )


def _fold_collision(
    partition: KindPartition,
    *,
    index: int,
    source_kind: FieldKind,
    destination_kind: FieldKind,
) -> IndexCollision:
    kept = partition.source_name(destination_kind, index) or ""
    dropped = partition.source_name(source_kind, index) or ""
    log.warning(
        "Folding %s into %s on entity %s: index %s already taken by %s, dropping %s",
        source_kind,
        destination_kind,
        partition.entity_index,
        index,
        kept,
        dropped,
    )
    return IndexCollision(
        entity_index=partition.entity_index,
        field_index=index,
        kind=destination_kind,
        kept=kept,
        dropped=dropped,
        stage=CollisionStage.FOLD,
        source_kind=source_kind,
    )
