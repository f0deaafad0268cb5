from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from mdmgen.domain.model import DisplayInfo, ScalarKind
from mdmgen.domain.registry import StaticDocumentation

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clean_generation_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MDMGEN_SYNTHESIS_MATCH", "MDMGEN_WORKERS", "MDMGEN_INDENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def documentation() -> StaticDocumentation:
    return StaticDocumentation(
        entities={
            1: DisplayInfo(title="Barrack", short_name="brk", description="Field section"),
            2: DisplayInfo(title="Plot", short_name="plt", description="Plot of land"),
        },
        properties={
            (ScalarKind.STR, 1): DisplayInfo(title="Name", short_name="nm"),
            (ScalarKind.ENUM, 4): DisplayInfo(title="Status"),
        },
    )


@pytest.fixture
def registry_payload() -> dict[str, object]:
    return {
        "entities": [
            {
                "class_name": "Barrack",
                "index": 1,
                "path_name": "barracks",
                "kind": "entity",
                "title": "Barrack",
                "short_name": "brk",
                "description": "Field section",
                "menus": [{"title": "Fields", "icon": "map"}],
                "model": [
                    {"name": "Id", "index": 1, "kind": "str", "visible": False},
                    {"name": "Name", "index": 2, "kind": "str"},
                    {"name": "Alias", "index": 2, "kind": "suggestion"},
                    {"name": "Correlative", "index": 3, "kind": "num32", "auto_numeric": True},
                    {
                        "name": "Status",
                        "index": 4,
                        "kind": "enum",
                        "enum_labels": {"1": "Open", "2": "Closed"},
                    },
                    {"name": "IdPlot", "index": 2, "kind": "reference"},
                ],
                "input": [
                    {"name": "Name", "index": 2, "kind": "str", "required": True, "unique": True},
                    {"name": "IdPlot", "index": 2, "kind": "reference", "required": True},
                    {"name": "Notes", "index": 9, "kind": "str", "required": True},
                ],
            },
            {
                "class_name": "Plot",
                "index": 2,
                "title": "Plot",
                "model": [{"name": "Area", "index": 1, "kind": "dbl"}],
                "input": [{"name": "Area", "index": 1, "kind": "dbl"}],
            },
            {
                "class_name": "AuditLog",
                "index": 3,
                "model": [{"name": "When", "index": 1, "kind": "date"}],
            },
            {"class_name": "Helper"},
        ],
        "properties": [
            {"kind": "str", "index": 2, "title": "Name"},
            {"kind": "enum", "index": 4, "title": "Status"},
        ],
    }


@pytest.fixture
def registry_file(tmp_path: Path, registry_payload: dict[str, object]) -> Path:
    path = tmp_path / "registry.json"
    path.write_text(json.dumps(registry_payload), encoding="utf-8")
    return path
