"""Sync Composer requirements, repositories and patches between projects."""

__version__ = "1.0.0"
from .errors import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestWriteError,
    SubpackageError,
    SubpackageManifestMissingError,
    SubpackageNotDeclaredError,
    SyncError,
)
from .manifest import dump_manifest, load_manifest, load_manifest_or_empty, write_manifest
from .merge import merge_packages, merge_patches, merge_repositories
from .models import MergeEvent, MergeResult, SyncResult
from .pipeline import SyncOptions, run_sync
from .reporting import Reporter
from .schemas.manifest import Dependency, Manifest, Patch, Repository
from .subpackage import expand_subpackage, fold_subpackage

__all__ = [
    "__version__",
    "Dependency",
    "Manifest",
    "ManifestNotFoundError",
    "ManifestParseError",
    "ManifestWriteError",
    "MergeEvent",
    "MergeResult",
    "Patch",
    "Repository",
    "Reporter",
    "SubpackageError",
    "SubpackageManifestMissingError",
    "SubpackageNotDeclaredError",
    "SyncError",
    "SyncOptions",
    "SyncResult",
    "dump_manifest",
    "expand_subpackage",
    "fold_subpackage",
    "load_manifest",
    "load_manifest_or_empty",
    "merge_packages",
    "merge_patches",
    "merge_repositories",
    "run_sync",
    "write_manifest",
]
