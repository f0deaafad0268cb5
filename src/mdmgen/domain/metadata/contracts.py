"""Shared metadata-engine contract components.

This module holds only:
- the reconciled per-field record passed between stages
- collision and skip records surfaced to callers
- mapping aliases used inside stage signatures
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from mdmgen.domain.model import DisplayInfo, EntityRefKind

if TYPE_CHECKING:
    from mdmgen.domain.model import FieldGroup, FieldKind


type FieldKey = tuple[int, bool]


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertySearchInfo:
    """Reconciled view of one field of one entity."""

    entity_index: int
    field_index: int
    name: str
    kind: FieldKind
    is_enumerable: bool = False
    info: DisplayInfo = field(default_factory=DisplayInfo)
    is_required: bool = False
    is_unique: bool = False
    is_visible: bool = False
    is_auto_numeric: bool = False
    has_input: bool = False
    enum_labels: dict[int, str] = field(default_factory=dict[int, str])
    groups: tuple[FieldGroup, ...] = ()

    @property
    def is_entity_ref(self) -> bool:
        return isinstance(self.kind, EntityRefKind)

    @property
    def key(self) -> FieldKey:
        return (self.field_index, self.is_entity_ref)


class CollisionStage(StrEnum):
    """Where a duplicate field index was detected."""

    RECONCILE = "reconcile"
    CLASSIFY = "classify"
    FOLD = "fold"


@dataclass(frozen=True, slots=True, kw_only=True)
class IndexCollision:
    """A field dropped because another field already claimed its index.

    ``kept`` and ``dropped`` are source field names; ``kind`` is the mapping the
    collision happened in (the destination kind for folds).
    """

    entity_index: int
    field_index: int
    kind: FieldKind
    kept: str
    dropped: str
    stage: CollisionStage
    source_kind: FieldKind | None = None


class SkipReason(StrEnum):
    NO_ANNOTATION = "no_annotation"
    NO_INPUT = "no_input"


@dataclass(frozen=True, slots=True, kw_only=True)
class SkippedEntity:
    class_name: str
    reason: SkipReason
    index: int | None = None
