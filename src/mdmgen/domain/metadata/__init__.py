"""Metadata reconciliation and classification engine.

Layered flow, per entity:
1) reconcile model-side and input-side descriptors on (field index, is reference)
2) classify reconciled records into per-kind mappings keyed by field index
3) fold narrow kinds into broad ones (suggestion, num64, local reference)
4) assemble the entity record with its annotation and documentation

The engine runs these for every declared entity and collects the results in
declaration order into one ``ModelMetaData`` document.
"""

from __future__ import annotations

from .assemble import assemble_entity
from .classify import KindPartition, classify_properties, project_name
from .contracts import (
    CollisionStage,
    IndexCollision,
    PropertySearchInfo,
    SkippedEntity,
    SkipReason,
)
from .engine import EntityBuild, GenerationResult, MetadataEngine, build_model_metadata
from .fold import FOLDS, FoldedProperties, fold_partition
from .reconcile import ReconciliationResult, reconcile_properties

__all__ = [
    "FOLDS",
    "CollisionStage",
    "EntityBuild",
    "FoldedProperties",
    "GenerationResult",
    "IndexCollision",
    "KindPartition",
    "MetadataEngine",
    "PropertySearchInfo",
    "ReconciliationResult",
    "SkipReason",
    "SkippedEntity",
    "assemble_entity",
    "build_model_metadata",
    "classify_properties",
    "fold_partition",
    "project_name",
    "reconcile_properties",
]
