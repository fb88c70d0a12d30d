"""Fold an installed dependency's own manifest into the source manifest."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import SubpackageManifestMissingError, SubpackageNotDeclaredError
from .manifest import MANIFEST_FILENAME, load_manifest_or_empty
from .schemas.manifest import DEFAULT_VENDOR_DIR, Manifest


def subpackage_manifest_path(name: str, source_root: Path, vendor_dir: str = DEFAULT_VENDOR_DIR) -> Path:
    """Return ``<source_root>/<vendor_dir>/<vendor>/<package>/composer.json``."""

    return Path(source_root) / vendor_dir / name.replace("/", os.sep) / MANIFEST_FILENAME


def expand_subpackage(name: str, source: Manifest, source_root: Path) -> Manifest:
    """Load the manifest of ``name``, which must be required by ``source``."""

    if name not in source.requirements:
        raise SubpackageNotDeclaredError(name)

    path = subpackage_manifest_path(name, source_root, source.vendor_dir)
    if not path.is_file():
        raise SubpackageManifestMissingError(name, path)
    return load_manifest_or_empty(path)


def fold_subpackage(source: Manifest, subpackage: Manifest) -> Manifest:
    """Merge subpackage requirements (subpackage wins) and append its repositories."""

    merged = source
    extra_requirements = subpackage.document.get("require")
    if isinstance(extra_requirements, dict) and extra_requirements:
        require = source.section("require")
        require.update(extra_requirements)
        merged = merged.with_section("require", require)

    repositories = subpackage.repositories
    if repositories:
        merged = merged.append_repositories(repositories)
    return merged


__all__ = ["expand_subpackage", "fold_subpackage", "subpackage_manifest_path"]
