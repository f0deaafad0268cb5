"""Application orchestration entry points."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from mdmgen.adapters.json_export import dumps_model_metadata, write_model_metadata
from mdmgen.adapters.registry_file import load_registry
from mdmgen.config import GenerationConfig, get_generation_config
from mdmgen.domain.metadata import MetadataEngine

if TYPE_CHECKING:
    from pathlib import Path

    from mdmgen.domain.metadata import GenerationResult


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationSummary:
    """Outcome of a generation run."""

    result: GenerationResult
    document: str
    output_path: Path | None = None

    @property
    def entities(self) -> int:
        return len(self.result.metadata.indexes)


def generate_model_metadata(
    registry_path: Path,
    *,
    output_path: Path | None = None,
    config: GenerationConfig | None = None,
) -> GenerationSummary:
    """Build the metadata document for ``registry_path``.

    The JSON text is always returned; it is also written to ``output_path`` when given.
    """

    effective_config = config or get_generation_config()
    loaded = load_registry(registry_path)
    log.info(
        "Starting generation: registry=%s, synthesis_match=%s, workers=%s",
        registry_path,
        effective_config.synthesis_match,
        effective_config.workers,
    )

    with ExitStack() as stack:
        executor = None
        if effective_config.workers > 0:
            executor = stack.enter_context(
                ThreadPoolExecutor(max_workers=effective_config.workers)
            )
        engine = MetadataEngine(
            documentation=loaded.documentation,
            synthesis_match=effective_config.synthesis_match,
            executor=executor,
        )
        result = engine.build(loaded.registry)

    for collision in result.collisions:
        log.debug("Collision: %s", collision)

    document = dumps_model_metadata(result.metadata, indent=effective_config.indent)
    written = None
    if output_path is not None:
        written = write_model_metadata(
            result.metadata, output_path, indent=effective_config.indent
        )

    log.info(
        "Finished generation: entities=%s, skipped=%s, collisions=%s",
        len(result.metadata.indexes),
        len(result.skipped),
        len(result.collisions),
    )
    return GenerationSummary(result=result, document=document, output_path=written)
