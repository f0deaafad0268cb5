from __future__ import annotations

import pytest

from mdmgen.config import (
    ConfigurationError,
    GenerationConfig,
    InvalidConfigurationError,
    env_non_negative_int,
    get_generation_config,
    optional_env_var,
)
from mdmgen.domain.model import SynthesisMatch


def test_defaults_without_environment() -> None:
    config = get_generation_config()

    assert config == GenerationConfig()
    assert config.synthesis_match is SynthesisMatch.KEY
    assert config.workers == 0
    assert config.indent == 2


def test_environment_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MDMGEN_SYNTHESIS_MATCH", "Name")
    monkeypatch.setenv("MDMGEN_WORKERS", "4")
    monkeypatch.setenv("MDMGEN_INDENT", "0")

    config = get_generation_config()

    assert config.synthesis_match is SynthesisMatch.NAME
    assert config.workers == 4
    assert config.indent == 0


def test_invalid_synthesis_match(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MDMGEN_SYNTHESIS_MATCH", "fuzzy")

    with pytest.raises(InvalidConfigurationError) as exc:
        get_generation_config()

    assert exc.value.name == "MDMGEN_SYNTHESIS_MATCH"
    assert exc.value.value == "fuzzy"
    assert "key or name" in str(exc.value)


@pytest.mark.parametrize("raw", ["many", "-1", "1.5"])
def test_invalid_worker_count(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("MDMGEN_WORKERS", raw)

    with pytest.raises(ConfigurationError, match="MDMGEN_WORKERS"):
        get_generation_config()


def test_blank_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    assert optional_env_var("EXAMPLE_VAR") is None
    assert env_non_negative_int("EXAMPLE_VAR", 7) == 7


def test_with_overrides_keeps_unset_values() -> None:
    base = GenerationConfig(synthesis_match=SynthesisMatch.NAME, workers=2, indent=4)

    updated = base.with_overrides(workers=0)

    assert updated == GenerationConfig(synthesis_match=SynthesisMatch.NAME, workers=0, indent=4)
    assert base.workers == 2
