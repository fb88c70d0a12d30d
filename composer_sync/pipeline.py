"""The sync-packages run: load, expand, merge, persist, report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .errors import SubpackageError
from .manifest import load_manifest, manifest_path, write_manifest
from .merge import merge_packages, merge_patches, merge_repositories
from .models import MergeResult, SyncResult
from .reporting import Reporter
from .schemas.manifest import Manifest
from .subpackage import expand_subpackage, fold_subpackage

logger = logging.getLogger(__name__)

Merger = Callable[[Manifest, Manifest], MergeResult]


@dataclass(slots=True)
class SyncOptions:
    source_root: Path
    target_root: Path = field(default_factory=Path.cwd)
    include_subpackage: Optional[str] = None
    merge_patches: bool = True
    dry_run: bool = False

    @property
    def source_manifest_path(self) -> Path:
        return manifest_path(self.source_root)

    @property
    def target_manifest_path(self) -> Path:
        return manifest_path(self.target_root)

    def merge_passes(self) -> List[Tuple[str, Merger]]:
        passes: List[Tuple[str, Merger]] = [
            ("packages", merge_packages),
            ("repositories", merge_repositories),
        ]
        if self.merge_patches:
            passes.append(("patches", merge_patches))
        return passes


def run_sync(options: SyncOptions, reporter: Optional[Reporter] = None) -> SyncResult:
    """Merge the source manifest into the target and write it when changed.

    Raises ``ManifestNotFoundError`` or ``ManifestParseError`` before anything
    is written when either required manifest is unusable. Subpackage failures
    are reported and the run continues with the unexpanded source.
    """

    reporter = reporter or Reporter()
    source = load_manifest(options.source_manifest_path)
    target = load_manifest(options.target_manifest_path)

    result = SyncResult(
        source_path=options.source_manifest_path,
        target_path=options.target_manifest_path,
        subpackage=options.include_subpackage,
        dry_run=options.dry_run,
    )

    if options.include_subpackage:
        source = _include_subpackage(options, source, reporter, result)

    for name, merger in options.merge_passes():
        outcome = merger(source, target)
        target = outcome.manifest
        result.changes[name] = outcome.changed
        result.events.extend(outcome.events)
        for event in outcome.events:
            reporter.event(event)
        logger.debug("Merge pass %s changed=%s", name, outcome.changed)

    if result.changed and not options.dry_run:
        write_manifest(target, options.target_manifest_path)
        result.written = True

    reporter.summary(result.changed, dry_run=options.dry_run)
    return result


def _include_subpackage(
    options: SyncOptions,
    source: Manifest,
    reporter: Reporter,
    result: SyncResult,
) -> Manifest:
    name = options.include_subpackage or ""
    try:
        subpackage = expand_subpackage(name, source, options.source_root)
    except SubpackageError as exc:
        reporter.error(str(exc))
        result.errors.append(str(exc))
        return source

    reporter.info(f"Loading dependencies from subpackage: {name}")
    return fold_subpackage(source, subpackage)


__all__ = ["SyncOptions", "run_sync"]
