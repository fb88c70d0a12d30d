"""Schema definitions for Composer manifests."""

from .manifest import DEFAULT_VENDOR_DIR, Dependency, Manifest, Patch, Repository

__all__ = [
    "DEFAULT_VENDOR_DIR",
    "Dependency",
    "Manifest",
    "Patch",
    "Repository",
]
