"""Command-line entry point for composer-sync-packages."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence

from . import __version__
from .errors import SyncError
from .pipeline import SyncOptions, run_sync
from .reporting import Reporter, print_line


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    workspace = Path.cwd()
    options = SyncOptions(
        source_root=_resolve_path(args.source, workspace),
        target_root=_resolve_path(args.target, workspace) if args.target else workspace,
        include_subpackage=args.include_subpackage,
        merge_patches=args.patches,
        dry_run=args.dry_run,
    )
    reporter = Reporter(sink=None if args.json else print_line)

    try:
        result = run_sync(options, reporter)
    except SyncError as exc:
        reporter.error(str(exc))
        if args.json:
            _print_json(
                {
                    "status": "error",
                    "error": str(exc),
                    "lines": [line.to_dict() for line in reporter.lines],
                }
            )
        return 1

    if args.json:
        payload = {"status": "ok", **result.to_dict()}
        payload["lines"] = [line.to_dict() for line in reporter.lines]
        _print_json(payload)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="composer-sync-packages",
        description="Sync packages and repositories from a source Composer project to the target project.",
    )
    parser.add_argument("source", help="Path to the source Composer project.")
    parser.add_argument(
        "--include-subpackage",
        metavar="NAME",
        help="Include dependencies from the specified subpackage (vendor/package).",
    )
    parser.add_argument("--target", help="Target Composer project (default: current directory).")
    parser.add_argument(
        "--patches",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Merge extra.patches entries.",
    )
    parser.add_argument("--dry-run", action=argparse.BooleanOptionalAction, default=False)
    parser.add_argument("--json", action="store_true", help="Print a JSON result payload.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_path(value: str, workspace: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = workspace / path
    return path.resolve()


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))
