"""Declared inputs of a generation run: field descriptors and entity declarations.

These replace attribute discovery on compiled types. Each entity is declared as
plain data by the caller (see ``mdmgen.domain.registry``).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdmgen.domain.model.enums import DeviceKind, EntityKind, EntityRefKind, FieldKind


@dataclass(frozen=True, slots=True)
class DisplayInfo:
    """Human-readable documentation for an entity or a field."""

    title: str = ""
    short_name: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class FieldGroup:
    """Form grouping hint attached to a field."""

    name: str
    column_proportion: int | None = None
    order_index: int | None = None
    device: DeviceKind | None = None


@dataclass(frozen=True, slots=True)
class GroupMenu:
    """Menu placement of an entity in generated clients."""

    title: str
    icon: str | None = None
    parent: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldDescriptor:
    """One indexed field of a model or input declaration."""

    name: str
    field_index: int
    kind: FieldKind
    is_enumerable: bool = False
    is_required: bool = False
    is_unique: bool = False
    is_visible: bool = True
    is_auto_numeric: bool = False
    enum_labels: dict[int, str] = field(default_factory=dict[int, str])
    groups: tuple[FieldGroup, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field descriptor requires a non-empty name")

    @property
    def is_entity_ref(self) -> bool:
        return isinstance(self.kind, EntityRefKind)

    @property
    def key(self) -> tuple[int, bool]:
        """Join key shared by model and input declarations."""
        return (self.field_index, self.is_entity_ref)


@dataclass(frozen=True, slots=True, kw_only=True)
class EntityAnnotation:
    """Entity-level annotation: stable index plus client presentation hints."""

    index: int
    visible: bool = True
    path_name: str = ""
    kind: EntityKind = EntityKind.ENTITY
    menus: tuple[GroupMenu, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class EntityDeclaration:
    """One entity as seen by the generator.

    ``annotation`` is ``None`` for types that carry no entity index; such types are
    excluded from the output. ``input_fields`` is ``None`` when no input type is paired
    with the entity.
    """

    class_name: str
    annotation: EntityAnnotation | None
    model_fields: tuple[FieldDescriptor, ...] = ()
    input_fields: tuple[FieldDescriptor, ...] | None = ()

    @property
    def index(self) -> int | None:
        return self.annotation.index if self.annotation is not None else None
