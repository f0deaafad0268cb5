from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from mdmgen.ui import cli

if TYPE_CHECKING:
    from pathlib import Path


def test_data_prints_document_to_stdout(
    registry_file: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    cli.main(["data", str(registry_file)])

    document = json.loads(capsys.readouterr().out)
    assert [entity["index"] for entity in document["indexes"]] == [1, 2]


def test_data_writes_output_file(registry_file: Path, tmp_path: Path) -> None:
    target = tmp_path / "metadata.json"

    cli.main(["data", str(registry_file), "-o", str(target), "--indent", "0"])

    text = target.read_text(encoding="utf-8")
    assert text.count("\n") == 1
    assert json.loads(text)["indexes"][1]["className"] == "Plot"


def test_flags_override_environment(
    registry_file: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    captured: dict[str, object] = {}

    def fake_generate(registry_path: Path, **kwargs: object) -> object:
        captured["registry_path"] = registry_path
        captured.update(kwargs)
        raise SystemExit(0)

    monkeypatch.setenv("MDMGEN_WORKERS", "8")
    monkeypatch.setattr(cli, "generate_model_metadata", fake_generate)

    with pytest.raises(SystemExit):
        cli.main(["data", str(registry_file), "--workers", "2", "--synthesis-match", "name"])

    config = captured["config"]
    assert config.workers == 2  # type: ignore[attr-defined]
    assert config.synthesis_match == "name"  # type: ignore[attr-defined]
    assert captured["registry_path"] == registry_file


def test_check_passes_without_strict(registry_file: Path) -> None:
    cli.main(["check", str(registry_file)])


def test_check_strict_fails_on_collisions(registry_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["check", str(registry_file), "--strict"])

    assert excinfo.value.code == 1


def test_invalid_environment_exits_with_usage_code(
    registry_file: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MDMGEN_INDENT", "wide")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["data", str(registry_file)])

    assert excinfo.value.code == 2


def test_invalid_flag_exits_with_usage_code(registry_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["data", str(registry_file), "--workers", "-3"])

    assert excinfo.value.code == 2


def test_missing_registry_exits_with_usage_code(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["data", str(tmp_path / "absent.json")])

    assert excinfo.value.code == 2


def test_malformed_registry_exits_with_usage_code(tmp_path: Path) -> None:
    path = tmp_path / "registry.json"
    path.write_text('{"entities": [{"class_name": "Barrack", "index": "one"}]}', encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["check", str(path)])

    assert excinfo.value.code == 2


def test_generation_failure_exits_with_failure(
    registry_file: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def failing_generate(*_: object, **__: object) -> object:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "generate_model_metadata", failing_generate)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["data", str(registry_file)])

    assert excinfo.value.code == 1
