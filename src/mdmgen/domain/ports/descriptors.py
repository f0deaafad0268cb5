"""Port for the source of entity declarations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mdmgen.domain.model import EntityDeclaration


@runtime_checkable
class DescriptorSource(Protocol):
    """Ordered entity declarations for one generation run.

    The order returned here is the order of ``ModelMetaData.indexes``.
    """

    def declarations(self) -> Sequence[EntityDeclaration]: ...


__all__ = ["DescriptorSource"]
