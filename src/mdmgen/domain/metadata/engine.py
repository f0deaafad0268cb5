"""Model collection builder.

The engine composes the stage functions and drives them over every declared
entity. Each entity's pipeline is independent, so an optional executor may run
them concurrently; results are always collected in declaration order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mdmgen.domain.model import ModelMetaData, SynthesisMatch

from .assemble import assemble_entity
from .classify import classify_properties
from .contracts import SkippedEntity, SkipReason
from .fold import fold_partition
from .reconcile import reconcile_properties

if TYPE_CHECKING:
    from concurrent.futures import Executor

    from mdmgen.domain.model import EntityDeclaration, EntityMetadata
    from mdmgen.domain.ports import DescriptorSource, DocumentationProvider

    from .assemble import AssembleEntity
    from .classify import ClassifyProperties
    from .contracts import IndexCollision
    from .fold import FoldPartition
    from .reconcile import ReconcileProperties

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EntityBuild:
    """Outcome of one entity's pipeline."""

    metadata: EntityMetadata
    collisions: tuple[IndexCollision, ...] = ()


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Output of a full run plus diagnostics for callers that want them."""

    metadata: ModelMetaData
    collisions: tuple[IndexCollision, ...] = ()
    skipped: tuple[SkippedEntity, ...] = ()


@dataclass(slots=True, kw_only=True)
class MetadataEngine:
    """Run reconcile -> classify -> fold -> assemble for every declared entity."""

    documentation: DocumentationProvider
    synthesis_match: SynthesisMatch = SynthesisMatch.KEY
    executor: Executor | None = None
    reconcile: ReconcileProperties = field(default=reconcile_properties)
    classify: ClassifyProperties = field(default=classify_properties)
    fold: FoldPartition = field(default=fold_partition)
    assemble: AssembleEntity = field(default=assemble_entity)

    def build(self, source: DescriptorSource) -> GenerationResult:
        """Build the metadata document for every entity ``source`` declares."""

        included: list[EntityDeclaration] = []
        skipped: list[SkippedEntity] = []
        for declaration in source.declarations():
            reason = _skip_reason(declaration)
            if reason is None:
                included.append(declaration)
                continue
            skipped.append(
                SkippedEntity(
                    class_name=declaration.class_name,
                    reason=reason,
                    index=declaration.index,
                )
            )

        if self.executor is None:
            builds = [self.build_entity(declaration) for declaration in included]
        else:
            builds = list(self.executor.map(self.build_entity, included))

        collisions = tuple(collision for build in builds for collision in build.collisions)
        log.info(
            "Built metadata for %s entities (skipped=%s, collisions=%s)",
            len(builds),
            len(skipped),
            len(collisions),
        )
        return GenerationResult(
            metadata=ModelMetaData(indexes=tuple(build.metadata for build in builds)),
            collisions=collisions,
            skipped=tuple(skipped),
        )

    def build_entity(self, declaration: EntityDeclaration) -> EntityBuild:
        """Run the per-entity pipeline for an annotated declaration."""

        annotation = declaration.annotation
        if annotation is None:
            raise ValueError(f"Declaration {declaration.class_name} has no entity annotation")

        reconciled = self.reconcile(
            declaration,
            documentation=self.documentation,
            synthesis_match=self.synthesis_match,
        )
        partition = self.classify(reconciled.properties, entity_index=annotation.index)
        folded = self.fold(partition)
        metadata = self.assemble(
            annotation,
            class_name=declaration.class_name,
            properties=reconciled.properties,
            folded=folded,
            documentation=self.documentation,
        )
        log.debug(
            "Entity %s (%s): %s fields reconciled, %s exported",
            annotation.index,
            declaration.class_name,
            len(reconciled.properties),
            metadata.field_count(),
        )
        return EntityBuild(
            metadata=metadata,
            collisions=(*reconciled.collisions, *partition.collisions, *folded.collisions),
        )


def build_model_metadata(
    source: DescriptorSource,
    *,
    documentation: DocumentationProvider,
    synthesis_match: SynthesisMatch = SynthesisMatch.KEY,
    executor: Executor | None = None,
) -> ModelMetaData:
    """Return the ``ModelMetaData`` document for ``source``."""

    engine = MetadataEngine(
        documentation=documentation,
        synthesis_match=synthesis_match,
        executor=executor,
    )
    return engine.build(source).metadata


def _skip_reason(declaration: EntityDeclaration) -> SkipReason | None:
    if declaration.annotation is None:
        log.debug("Excluding %s: no entity index annotation", declaration.class_name)
        return SkipReason.NO_ANNOTATION
    if declaration.input_fields is None:
        log.info(
            "Skipping entity %s (%s): no input type declared",
            declaration.annotation.index,
            declaration.class_name,
        )
        return SkipReason.NO_INPUT
    return None
