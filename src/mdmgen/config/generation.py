"""Generation run defaults and environment overrides."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

from mdmgen.domain.model import SynthesisMatch

from .env import env_non_negative_int, optional_env_var
from .errors import InvalidConfigurationError

DEFAULT_WORKERS: Final[int] = 0
DEFAULT_JSON_INDENT: Final[int] = 2

SYNTHESIS_MATCH_ENV: Final[str] = "MDMGEN_SYNTHESIS_MATCH"
WORKERS_ENV: Final[str] = "MDMGEN_WORKERS"
INDENT_ENV: Final[str] = "MDMGEN_INDENT"


@dataclass(frozen=True, slots=True)
class GenerationConfig:
    synthesis_match: SynthesisMatch = SynthesisMatch.KEY
    # 0 runs entity pipelines sequentially
    workers: int = DEFAULT_WORKERS
    indent: int = DEFAULT_JSON_INDENT

    def with_overrides(
        self,
        *,
        synthesis_match: SynthesisMatch | None = None,
        workers: int | None = None,
        indent: int | None = None,
    ) -> GenerationConfig:
        return replace(
            self,
            synthesis_match=synthesis_match if synthesis_match is not None else self.synthesis_match,
            workers=workers if workers is not None else self.workers,
            indent=indent if indent is not None else self.indent,
        )


def get_generation_config() -> GenerationConfig:
    raw_match = optional_env_var(SYNTHESIS_MATCH_ENV)
    synthesis_match = SynthesisMatch.KEY
    if raw_match is not None:
        try:
            synthesis_match = SynthesisMatch(raw_match.lower())
        except ValueError as exc:
            expected = " or ".join(member.value for member in SynthesisMatch)
            raise InvalidConfigurationError(SYNTHESIS_MATCH_ENV, raw_match, expected) from exc

    return GenerationConfig(
        synthesis_match=synthesis_match,
        workers=env_non_negative_int(WORKERS_ENV, DEFAULT_WORKERS),
        indent=env_non_negative_int(INDENT_ENV, DEFAULT_JSON_INDENT),
    )
