from __future__ import annotations

import os
from pathlib import Path

import pytest

from composer_sync.errors import SubpackageManifestMissingError, SubpackageNotDeclaredError
from composer_sync.manifest import load_manifest
from composer_sync.schemas.manifest import Manifest
from composer_sync.subpackage import expand_subpackage, fold_subpackage, subpackage_manifest_path


def test_subpackage_manifest_path_uses_platform_separator(tmp_path: Path) -> None:
    path = subpackage_manifest_path("acme/toolkit", tmp_path)
    assert path == tmp_path / "vendor" / "acme" / "toolkit" / "composer.json"
    assert str(path).endswith(os.sep.join(["vendor", "acme", "toolkit", "composer.json"]))


def test_expand_subpackage_loads_installed_manifest(tmp_path: Path, write_composer) -> None:
    source_path = write_composer(tmp_path, {"require": {"acme/toolkit": "^1.0"}})
    write_composer(tmp_path / "vendor" / "acme" / "toolkit", {"require": {"psr/log": "^3.0"}})

    subpackage = expand_subpackage("acme/toolkit", load_manifest(source_path), tmp_path)

    assert subpackage.requirements == {"psr/log": "^3.0"}


def test_expand_subpackage_honours_vendor_dir(tmp_path: Path, write_composer) -> None:
    source_path = write_composer(
        tmp_path,
        {"require": {"acme/toolkit": "^1.0"}, "config": {"vendor-dir": "lib"}},
    )
    write_composer(tmp_path / "lib" / "acme" / "toolkit", {"require": {"psr/log": "^3.0"}})

    subpackage = expand_subpackage("acme/toolkit", load_manifest(source_path), tmp_path)

    assert subpackage.requirements == {"psr/log": "^3.0"}


def test_expand_subpackage_requires_declared_dependency(tmp_path: Path) -> None:
    source = Manifest(document={"require": {"acme/other": "^1.0"}})
    with pytest.raises(SubpackageNotDeclaredError) as excinfo:
        expand_subpackage("acme/toolkit", source, tmp_path)
    assert "acme/toolkit" in str(excinfo.value)


def test_expand_subpackage_missing_manifest(tmp_path: Path) -> None:
    source = Manifest(document={"require": {"acme/toolkit": "^1.0"}})
    with pytest.raises(SubpackageManifestMissingError) as excinfo:
        expand_subpackage("acme/toolkit", source, tmp_path)
    assert excinfo.value.path == tmp_path / "vendor" / "acme" / "toolkit" / "composer.json"


def test_expand_subpackage_unparseable_manifest_is_empty(tmp_path: Path) -> None:
    manifest_dir = tmp_path / "vendor" / "acme" / "toolkit"
    manifest_dir.mkdir(parents=True)
    (manifest_dir / "composer.json").write_text("{broken", encoding="utf-8")
    source = Manifest(document={"require": {"acme/toolkit": "^1.0"}})

    subpackage = expand_subpackage("acme/toolkit", source, tmp_path)

    assert subpackage.is_empty
    assert fold_subpackage(source, subpackage) == source


def test_fold_subpackage_overrides_requirements_and_concatenates_repositories() -> None:
    source = Manifest(
        document={
            "require": {"acme/toolkit": "^1.0", "psr/log": "^1.0"},
            "repositories": [{"type": "vcs", "url": "X"}],
        }
    )
    subpackage = Manifest(
        document={
            "require": {"psr/log": "^3.0", "guzzlehttp/guzzle": "^7.0"},
            "repositories": [{"type": "vcs", "url": "X"}, {"type": "vcs", "url": "Y"}],
        }
    )

    folded = fold_subpackage(source, subpackage)

    assert folded.document["require"] == {
        "acme/toolkit": "^1.0",
        "psr/log": "^3.0",
        "guzzlehttp/guzzle": "^7.0",
    }
    assert folded.document["repositories"] == [
        {"type": "vcs", "url": "X"},
        {"type": "vcs", "url": "X"},
        {"type": "vcs", "url": "Y"},
    ]
    assert source.document["require"]["psr/log"] == "^1.0"
