"""Port for documentation texts shown alongside generated metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mdmgen.domain.model import DisplayInfo, FieldKind


@runtime_checkable
class DocumentationProvider(Protocol):
    """Lookup of entity and field documentation by index."""

    def entity_info(self, index: int) -> DisplayInfo: ...

    def property_info(self, kind: FieldKind, index: int) -> DisplayInfo: ...


__all__ = ["DocumentationProvider"]
