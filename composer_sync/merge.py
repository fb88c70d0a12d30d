"""Merge passes that fold source manifest entries into a target manifest.

Each pass is a pure function of ``(source, target)``: the inputs are left
untouched and the returned ``MergeResult`` carries the updated target.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import List

from .models import (
    PACKAGE_ADDED,
    PACKAGE_SKIPPED,
    PACKAGE_UPDATED,
    PATCH_ADDED,
    PATCH_REPLACED,
    REPOSITORY_ADDED,
    MergeEvent,
    MergeResult,
)
from .schemas.manifest import Manifest, Repository
from .versioning import compare_constraints, is_lower

logger = logging.getLogger(__name__)


def merge_packages(source: Manifest, target: Manifest) -> MergeResult:
    """Add missing requirements and raise constraints lower than the source's."""

    require = target.section("require")
    events: List[MergeEvent] = []

    for dependency in source.dependencies:
        package, source_version = dependency.name, dependency.constraint
        if package not in require:
            require[package] = source_version
            events.append(
                MergeEvent(
                    kind=PACKAGE_ADDED,
                    subject=package,
                    message=f"Adding package: {package}, version: {source_version}",
                )
            )
            continue

        current = require[package]
        if not isinstance(current, str):
            logger.debug("Ignoring non-string constraint for %s in target: %r", package, current)
            continue
        if compare_constraints(current, source_version) is None:
            events.append(
                MergeEvent(
                    kind=PACKAGE_SKIPPED,
                    subject=package,
                    message=f"Skipping package: {package}, cannot compare version {current} with {source_version}",
                )
            )
        elif is_lower(current, source_version):
            require[package] = source_version
            events.append(
                MergeEvent(
                    kind=PACKAGE_UPDATED,
                    subject=package,
                    message=f"Updating package: {package} from version {current} to {source_version}",
                )
            )

    changed = any(event.kind != PACKAGE_SKIPPED for event in events)
    if not changed:
        return MergeResult(manifest=target, events=events)

    ordered = {name: require[name] for name in sorted(require)}
    return MergeResult(manifest=target.with_requirements(ordered), changed=True, events=events)


def merge_repositories(source: Manifest, target: Manifest) -> MergeResult:
    """Append source repositories that have no structurally equal target entry."""

    known = [repository.root for repository in target.repositories]
    additions: List[Repository] = []
    events: List[MergeEvent] = []

    for repository in source.repositories:
        if repository.root in known:
            continue
        known.append(repository.root)
        additions.append(repository)
        description = repository.describe()
        events.append(
            MergeEvent(kind=REPOSITORY_ADDED, subject=description, message=f"Adding repository: {description}")
        )

    if not additions:
        return MergeResult(manifest=target)
    return MergeResult(manifest=target.append_repositories(additions), changed=True, events=events)


def merge_patches(source: Manifest, target: Manifest) -> MergeResult:
    """Add source patches whose location does not already appear in the target.

    Locations are the identity of a patch: one already listed under any package
    or description is never added again. A new location whose description is
    already used for that package replaces the old location.
    """

    incoming = source.patches
    if not incoming:
        return MergeResult(manifest=target)

    extra = target.document.get("extra")
    if extra is not None and not isinstance(extra, dict):
        logger.warning("Target extra section is not an object; skipping patch merge.")
        return MergeResult(manifest=target)
    if isinstance(extra, dict) and "patches" in extra and not isinstance(extra["patches"], dict):
        logger.warning("Target extra.patches is not an object; skipping patch merge.")
        return MergeResult(manifest=target)

    section = target.patch_section()
    # location -> number of (package, description) slots holding it
    present: Counter[str] = Counter(patch.location for patch in target.patches)
    events: List[MergeEvent] = []

    for patch in incoming:
        if present[patch.location] > 0:
            logger.debug("Patch %s already present in target", patch.location)
            continue

        package_patches = section.setdefault(patch.package, {})
        if not isinstance(package_patches, dict):
            logger.warning("Skipping patch %s: target patches for %s are not an object.", patch.location, patch.package)
            continue

        previous = package_patches.get(patch.description)
        package_patches[patch.description] = patch.location
        present[patch.location] += 1

        if previous is None:
            events.append(
                MergeEvent(
                    kind=PATCH_ADDED,
                    subject=patch.package,
                    message=f"Adding patch: {patch.package}, {patch.description}: {patch.location}",
                )
            )
        else:
            if isinstance(previous, str):
                present[previous] -= 1
            events.append(
                MergeEvent(
                    kind=PATCH_REPLACED,
                    subject=patch.package,
                    message=f"Replacing patch: {patch.package}, {patch.description}: {previous} with {patch.location}",
                )
            )

    if not events:
        return MergeResult(manifest=target)
    return MergeResult(manifest=target.with_patches(section), changed=True, events=events)


__all__ = ["merge_packages", "merge_patches", "merge_repositories"]
