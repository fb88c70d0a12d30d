"""Loading and persisting composer.json manifests."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

from .errors import ManifestNotFoundError, ManifestParseError, ManifestWriteError
from .schemas.manifest import Manifest

MANIFEST_FILENAME = "composer.json"

logger = logging.getLogger(__name__)


def manifest_path(root: Path) -> Path:
    """Return ``<root>/composer.json``; a ``.json`` path is used as-is."""

    root = Path(root)
    if root.suffix == ".json":
        return root
    return root / MANIFEST_FILENAME


def load_manifest(path: Path) -> Manifest:
    """Load a required manifest, failing when it is missing or unreadable."""

    path = Path(path)
    if not path.is_file():
        raise ManifestNotFoundError(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestParseError(path, exc.strerror or str(exc)) from exc
    except ValueError as exc:
        raise ManifestParseError(path, str(exc)) from exc
    if not isinstance(payload, dict):
        raise ManifestParseError(path, "top-level JSON value is not an object")
    return Manifest(path=path, document=payload)


def load_manifest_or_empty(path: Path) -> Manifest:
    """Load an optional manifest, returning an empty one on any failure."""

    try:
        return load_manifest(path)
    except (ManifestNotFoundError, ManifestParseError) as exc:
        logger.warning("Using empty manifest for %s: %s", path, exc)
        return Manifest(path=Path(path))


def dump_manifest(manifest: Manifest) -> str:
    """Render a manifest the way Composer writes it: 4-space indent, literal slashes."""

    return json.dumps(manifest.document, indent=4, ensure_ascii=False) + "\n"


def write_manifest(manifest: Manifest, path: Optional[Path] = None) -> Path:
    """Replace the manifest file with the serialized document."""

    destination = Path(path) if path is not None else manifest.path
    if destination is None:
        raise ValueError("Manifest has no path; pass an explicit destination.")

    payload = dump_manifest(manifest)
    try:
        _replace_file(destination, payload)
    except OSError as exc:
        raise ManifestWriteError(destination, exc.strerror or str(exc)) from exc

    logger.debug("Wrote %s (%d bytes)", destination, len(payload))
    return destination


def _replace_file(destination: Path, payload: str) -> None:
    mode = stat.S_IMODE(destination.stat().st_mode) if destination.exists() else None

    fd, temp_name = tempfile.mkstemp(prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(payload)
        if mode is not None:
            os.chmod(temp_name, mode)
        os.replace(temp_name, destination)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(temp_name)
        raise


__all__ = [
    "MANIFEST_FILENAME",
    "dump_manifest",
    "load_manifest",
    "load_manifest_or_empty",
    "manifest_path",
    "write_manifest",
]
