from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .schemas.manifest import Manifest

PACKAGE_ADDED = "package-added"
PACKAGE_UPDATED = "package-updated"
PACKAGE_SKIPPED = "package-skipped"
REPOSITORY_ADDED = "repository-added"
PATCH_ADDED = "patch-added"
PATCH_REPLACED = "patch-replaced"


@dataclass(slots=True)
class MergeEvent:
    kind: str
    subject: str
    message: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "subject": self.subject,
            "message": self.message,
        }


@dataclass(slots=True)
class MergeResult:
    """Outcome of one merge pass: the updated target and what changed."""

    manifest: Manifest
    changed: bool = False
    events: List[MergeEvent] = field(default_factory=list)


@dataclass(slots=True)
class SyncResult:
    source_path: Path
    target_path: Path
    subpackage: Optional[str] = None
    dry_run: bool = False
    changes: Dict[str, bool] = field(default_factory=dict)
    events: List[MergeEvent] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    written: bool = False

    @property
    def changed(self) -> bool:
        return any(self.changes.values())

    def to_dict(self) -> Dict[str, object]:
        return {
            "source_path": str(self.source_path),
            "target_path": str(self.target_path),
            "subpackage": self.subpackage,
            "dry_run": self.dry_run,
            "changed": self.changed,
            "changes": dict(self.changes),
            "written": self.written,
            "events": [event.to_dict() for event in self.events],
            "errors": list(self.errors),
        }


__all__ = [
    "MergeEvent",
    "MergeResult",
    "PACKAGE_ADDED",
    "PACKAGE_SKIPPED",
    "PACKAGE_UPDATED",
    "PATCH_ADDED",
    "PATCH_REPLACED",
    "REPOSITORY_ADDED",
    "SyncResult",
]
