"""Line-oriented status output for sync runs."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, List, Optional

from .models import MergeEvent

INFO = "info"
ERROR = "error"

SUMMARY_CHANGED = "Composer update may be required to apply changes."
SUMMARY_UNCHANGED = "No updates or repository changes necessary."
SUMMARY_DRY_RUN = "Dry run: composer.json was not modified."
ADVISORY = "Review the changes to composer.json before running composer update."

LineSink = Callable[[str, str], None]


@dataclass(slots=True)
class ReportLine:
    level: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"level": self.level, "message": self.message}


def print_line(level: str, message: str) -> None:
    if level == ERROR:
        print(f"Error: {message}", file=sys.stderr)
    else:
        print(message)


class Reporter:
    """Collects report lines and forwards each one to ``sink`` when given."""

    def __init__(self, sink: Optional[LineSink] = print_line) -> None:
        self.sink = sink
        self.lines: List[ReportLine] = []

    def info(self, message: str) -> None:
        self._emit(INFO, message)

    def error(self, message: str) -> None:
        self._emit(ERROR, message)

    def event(self, event: MergeEvent) -> None:
        self.info(event.message)

    def summary(self, changed: bool, *, dry_run: bool = False) -> None:
        if changed and dry_run:
            self.info(SUMMARY_DRY_RUN)
        self.info(SUMMARY_CHANGED if changed else SUMMARY_UNCHANGED)
        if changed:
            self.info(ADVISORY)

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [line.message for line in self.lines if level is None or line.level == level]

    def _emit(self, level: str, message: str) -> None:
        self.lines.append(ReportLine(level=level, message=message))
        if self.sink is not None:
            self.sink(level, message)


__all__ = [
    "ADVISORY",
    "ERROR",
    "INFO",
    "LineSink",
    "ReportLine",
    "Reporter",
    "SUMMARY_CHANGED",
    "SUMMARY_DRY_RUN",
    "SUMMARY_UNCHANGED",
    "print_line",
]
