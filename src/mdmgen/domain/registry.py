"""Statically declared schema registry.

The registry is the explicit table ``entity index -> declaration`` that a
generation run works from:
- adapters append declarations in the order the caller wants them exported
- declarations without an entity annotation are kept (they are filtered later),
  but two annotated declarations may not claim the same entity index
- documentation texts live next to the declarations in ``StaticDocumentation``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mdmgen.domain.model import DisplayInfo

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from mdmgen.domain.model import EntityDeclaration, FieldKind


class DuplicateEntityIndexError(ValueError):
    """Raised when two declarations claim the same entity index."""

    def __init__(self, *, index: int, existing: str, duplicate: str) -> None:
        self.index = index
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Entity index {index} is declared by both {existing} and {duplicate}"
        )


@dataclass(slots=True)
class SchemaRegistry:
    """Ordered container of entity declarations for one generation run."""

    _declarations: list[EntityDeclaration] = field(
        default_factory=list["EntityDeclaration"], repr=False
    )
    _declarations_by_index: dict[int, EntityDeclaration] = field(
        default_factory=dict[int, "EntityDeclaration"], repr=False
    )

    @classmethod
    def from_declarations(cls, declarations: Iterable[EntityDeclaration]) -> SchemaRegistry:
        registry = cls()
        for declaration in declarations:
            registry.add(declaration)
        return registry

    def add(self, declaration: EntityDeclaration) -> None:
        index = declaration.index
        if index is not None:
            existing = self._declarations_by_index.get(index)
            if existing is not None:
                raise DuplicateEntityIndexError(
                    index=index,
                    existing=existing.class_name,
                    duplicate=declaration.class_name,
                )
            self._declarations_by_index[index] = declaration
        self._declarations.append(declaration)

    def declarations(self) -> tuple[EntityDeclaration, ...]:
        return tuple(self._declarations)

    def declaration_for(self, index: int) -> EntityDeclaration | None:
        return self._declarations_by_index.get(index)

    def __len__(self) -> int:
        return len(self._declarations)


type PropertyDocKey = tuple[FieldKind, int]


@dataclass(frozen=True, slots=True)
class StaticDocumentation:
    """Documentation provider backed by in-memory mappings.

    Missing entries resolve to an empty ``DisplayInfo``.
    """

    entities: Mapping[int, DisplayInfo] = field(default_factory=dict[int, DisplayInfo])
    properties: Mapping[PropertyDocKey, DisplayInfo] = field(
        default_factory=dict["PropertyDocKey", DisplayInfo]
    )

    def entity_info(self, index: int) -> DisplayInfo:
        return self.entities.get(index) or DisplayInfo()

    def property_info(self, kind: FieldKind, index: int) -> DisplayInfo:
        return self.properties.get((kind, index)) or DisplayInfo()
