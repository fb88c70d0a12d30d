from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

ComposerWriter = Callable[[Path, Dict[str, Any]], Path]


def _write_composer(root: Path, payload: Dict[str, Any]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / "composer.json"
    path.write_text(json.dumps(payload, indent=4) + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def write_composer() -> ComposerWriter:
    return _write_composer


@pytest.fixture()
def projects(tmp_path: Path) -> tuple[Path, Path]:
    source = tmp_path / "source"
    target = tmp_path / "target"
    source.mkdir()
    target.mkdir()
    return source, target
