"""Error types raised while synchronising Composer manifests."""

from __future__ import annotations

from pathlib import Path


class SyncError(RuntimeError):
    """Base class for failures that abort or degrade a sync run."""


class ManifestNotFoundError(SyncError):
    """Raised when a required composer.json does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"composer.json not found at {path}")
        self.path = path


class ManifestParseError(SyncError):
    """Raised when a required composer.json cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to read {path}: {reason}")
        self.path = path
        self.reason = reason


class ManifestWriteError(SyncError):
    """Raised when the target composer.json cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to write {path}: {reason}")
        self.path = path
        self.reason = reason


class SubpackageError(SyncError):
    """Non-fatal failure while folding a subpackage into the source manifest."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


class SubpackageNotDeclaredError(SubpackageError):
    def __init__(self, name: str) -> None:
        super().__init__(name, f"Subpackage {name} not found in the source project.")


class SubpackageManifestMissingError(SubpackageError):
    def __init__(self, name: str, path: Path) -> None:
        super().__init__(name, f"composer.json for subpackage {name} not found at {path}.")
        self.path = path


__all__ = [
    "ManifestNotFoundError",
    "ManifestParseError",
    "ManifestWriteError",
    "SubpackageError",
    "SubpackageManifestMissingError",
    "SubpackageNotDeclaredError",
    "SyncError",
]
