from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from mdmgen.app import generate_model_metadata
from mdmgen.config import GenerationConfig
from mdmgen.domain.metadata import CollisionStage
from mdmgen.domain.model import SynthesisMatch

if TYPE_CHECKING:
    from pathlib import Path


def test_generate_returns_document(registry_file: Path) -> None:
    summary = generate_model_metadata(registry_file, config=GenerationConfig())

    document = json.loads(summary.document)
    assert [entity["className"] for entity in document["indexes"]] == ["Barrack", "Plot"]
    assert summary.entities == 2
    assert summary.output_path is None

    barrack = document["indexes"][0]
    assert barrack["autoNumeric"] is True
    assert sorted(barrack["stringData"]) == ["1", "2", "9"]
    assert barrack["stringData"]["9"]["hasInput"] is True
    assert barrack["stringData"]["2"]["info"]["title"] == "Name"
    assert barrack["relData"]["2"]["info"]["title"] == "Barrack"
    assert barrack["enumData"]["4"]["enumLabels"] == {"1": "Open", "2": "Closed"}

    (collision,) = summary.result.collisions
    assert collision.stage is CollisionStage.FOLD
    assert [skip.class_name for skip in summary.result.skipped] == ["AuditLog", "Helper"]


def test_generate_writes_output(registry_file: Path, tmp_path: Path) -> None:
    target = tmp_path / "out" / "metadata.json"

    summary = generate_model_metadata(
        registry_file,
        output_path=target,
        config=GenerationConfig(indent=0),
    )

    assert summary.output_path == target
    assert target.read_text(encoding="utf-8") == summary.document + "\n"
    assert "\n" not in summary.document


def test_generate_with_workers_matches_sequential(registry_file: Path) -> None:
    sequential = generate_model_metadata(registry_file, config=GenerationConfig())
    parallel = generate_model_metadata(registry_file, config=GenerationConfig(workers=3))

    assert parallel.document == sequential.document


def _renamed_input_registry(tmp_path: Path) -> Path:
    path = tmp_path / "renamed.json"
    payload = {
        "entities": [
            {
                "class_name": "Barrack",
                "index": 1,
                "model": [{"name": "Name", "index": 1, "kind": "str"}],
                "input": [{"name": "DisplayName", "index": 1, "kind": "str", "required": True}],
            }
        ]
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_key_matching_joins_renamed_input(tmp_path: Path) -> None:
    summary = generate_model_metadata(_renamed_input_registry(tmp_path))

    (entity,) = summary.result.metadata.indexes
    assert entity.string_data[1].required is True
    assert summary.result.collisions == ()


def test_synthesis_match_is_read_from_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MDMGEN_SYNTHESIS_MATCH", "name")

    summary = generate_model_metadata(_renamed_input_registry(tmp_path))

    (collision,) = summary.result.collisions
    assert collision.stage is CollisionStage.RECONCILE
    assert collision.dropped == "DisplayName"


def test_explicit_config_wins_over_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MDMGEN_SYNTHESIS_MATCH", "name")

    summary = generate_model_metadata(
        _renamed_input_registry(tmp_path),
        config=GenerationConfig(synthesis_match=SynthesisMatch.KEY),
    )

    assert summary.result.collisions == ()
