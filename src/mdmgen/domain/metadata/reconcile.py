"""Property reconciliation stage.

Responsibilities of this stage:
- join model-side and input-side descriptors of one entity on
  ``(field index, is entity reference)``, preferring an input field of the same kind
- take required/unique marks from the input side only
- attach documentation texts and enum labels
- synthesize records for input-side fields no model field was joined to

Out of scope for this stage:
- kind routing (``classify``)
- merging sibling kinds (``fold``)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from mdmgen.domain.model import ScalarKind, SynthesisMatch

from .contracts import CollisionStage, IndexCollision, PropertySearchInfo

if TYPE_CHECKING:
    from mdmgen.domain.model import DisplayInfo, EntityDeclaration, FieldDescriptor, FieldKind
    from mdmgen.domain.ports import DocumentationProvider

    from .contracts import FieldKey

log = logging.getLogger(__name__)

type _RecordKey = tuple[int, bool, FieldKind]


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Reconciled records of one entity, in declaration order."""

    properties: tuple[PropertySearchInfo, ...] = ()
    collisions: tuple[IndexCollision, ...] = ()


class ReconcileProperties(Protocol):
    """Join model and input declarations of one entity."""

    def __call__(
        self,
        declaration: EntityDeclaration,
        *,
        documentation: DocumentationProvider,
        synthesis_match: SynthesisMatch = SynthesisMatch.KEY,
    ) -> ReconciliationResult: ...


def reconcile_properties(
    declaration: EntityDeclaration,
    *,
    documentation: DocumentationProvider,
    synthesis_match: SynthesisMatch = SynthesisMatch.KEY,
) -> ReconciliationResult:
    """Return reconciled records for ``declaration``.

    An entity without annotation or without an input counterpart yields an empty
    result; callers treat that as "skip this entity". Empty descriptor sets on an
    otherwise complete declaration yield an empty result as well.
    """

    annotation = declaration.annotation
    input_fields = declaration.input_fields
    if annotation is None or input_fields is None:
        return ReconciliationResult()

    entity_index = annotation.index
    input_by_key: dict[FieldKey, int] = {}
    input_by_kind: dict[_RecordKey, int] = {}
    for position, descriptor in enumerate(input_fields):
        input_by_key.setdefault(descriptor.key, position)
        input_by_kind.setdefault((*descriptor.key, descriptor.kind), position)
    joined: set[int] = set()

    properties: list[PropertySearchInfo] = []
    collisions: list[IndexCollision] = []
    produced: dict[_RecordKey, PropertySearchInfo] = {}

    def _append(record: PropertySearchInfo) -> None:
        record_key = (record.field_index, record.is_entity_ref, record.kind)
        existing = produced.get(record_key)
        if existing is not None:
            collisions.append(_collision(entity_index, kept=existing, dropped=record))
            return
        produced[record_key] = record
        properties.append(record)

    for descriptor in declaration.model_fields:
        # same-kind input field first, then the first one sharing the key
        position = input_by_kind.get((*descriptor.key, descriptor.kind))
        if position is None:
            position = input_by_key.get(descriptor.key)
        counterpart = None
        if position is not None:
            joined.add(position)
            counterpart = input_fields[position]
        _append(
            PropertySearchInfo(
                entity_index=entity_index,
                field_index=descriptor.field_index,
                name=descriptor.name,
                kind=descriptor.kind,
                is_enumerable=descriptor.is_enumerable,
                info=_info_for(descriptor, documentation, entity_index=entity_index),
                is_required=counterpart is not None and counterpart.is_required,
                is_unique=counterpart is not None and counterpart.is_unique,
                is_visible=descriptor.is_visible,
                is_auto_numeric=descriptor.is_auto_numeric,
                has_input=counterpart is not None,
                enum_labels=_enum_labels_for(descriptor),
                groups=descriptor.groups,
            )
        )

    for descriptor in _input_only(declaration, joined=joined, synthesis_match=synthesis_match):
        _append(
            PropertySearchInfo(
                entity_index=entity_index,
                field_index=descriptor.field_index,
                name=descriptor.name,
                kind=descriptor.kind,
                is_enumerable=descriptor.is_enumerable,
                info=_info_for(descriptor, documentation),
                is_required=descriptor.is_required,
                is_unique=descriptor.is_unique,
                has_input=True,
                enum_labels=_enum_labels_for(descriptor),
            )
        )

    return ReconciliationResult(properties=tuple(properties), collisions=tuple(collisions))


def _input_only(
    declaration: EntityDeclaration,
    *,
    joined: set[int],
    synthesis_match: SynthesisMatch,
) -> tuple[FieldDescriptor, ...]:
    """Input descriptors to synthesize, in input declaration order.

    ``KEY`` returns every input descriptor no model field was joined to, so an
    input field sharing its index with a model field of another kind is kept.
    Same-kind leftovers are passed on and recorded as collisions by the caller.
    """

    input_fields = declaration.input_fields or ()
    if synthesis_match is SynthesisMatch.NAME:
        model_names = {descriptor.name for descriptor in declaration.model_fields}
        return tuple(descriptor for descriptor in input_fields if descriptor.name not in model_names)
    return tuple(
        descriptor for position, descriptor in enumerate(input_fields) if position not in joined
    )


def _info_for(
    descriptor: FieldDescriptor,
    documentation: DocumentationProvider,
    *,
    entity_index: int | None = None,
) -> DisplayInfo:
    # model-side references use the owning entity's text, synthesized ones the referenced entity's
    if descriptor.is_entity_ref:
        target = entity_index if entity_index is not None else descriptor.field_index
        return documentation.entity_info(target)
    return documentation.property_info(descriptor.kind, descriptor.field_index)


def _enum_labels_for(descriptor: FieldDescriptor) -> dict[int, str]:
    if descriptor.kind is ScalarKind.ENUM:
        return dict(descriptor.enum_labels)
    return {}


def _collision(
    entity_index: int,
    *,
    kept: PropertySearchInfo,
    dropped: PropertySearchInfo,
) -> IndexCollision:
    log.warning(
        "Duplicate %s field index %s on entity %s: keeping %s, dropping %s",
        dropped.kind,
        dropped.field_index,
        entity_index,
        kept.name,
        dropped.name,
    )
    return IndexCollision(
        entity_index=entity_index,
        field_index=dropped.field_index,
        kind=dropped.kind,
        kept=kept.name,
        dropped=dropped.name,
        stage=CollisionStage.RECONCILE,
    )
