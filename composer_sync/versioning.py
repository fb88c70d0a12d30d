"""Ordering for Composer version strings and constraints.

Constraints are compared by the lowest version they admit: ``^1.2``, ``~1.2``,
``>=1.2``, ``1.2.*`` and ``1.2`` all start at 1.2.0.0-stable. Constraints
without a usable lower bound (``*``, ``dev-main``, ``<2.0``) are incomparable
and never win a comparison.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

STABILITY_RANKS = {
    "dev": 0,
    "alpha": 1,
    "beta": 2,
    "rc": 3,
    "stable": 4,
    "patch": 5,
}

_STABILITY_ALIASES = {
    "a": "alpha",
    "b": "beta",
    "pl": "patch",
    "p": "patch",
}

_VERSION_RE = re.compile(
    r"^v?(?P<release>\d+(?:\.\d+){0,3})"
    r"(?:[._-]?(?P<stability>stable|beta|b|rc|alpha|a|patch|pl|p|dev)(?:[._-]?(?P<number>\d+))?)?$",
    re.IGNORECASE,
)
_WILDCARD_RE = re.compile(r"(?:\.[x*])+(?=$|[-@])", re.IGNORECASE)
_ALTERNATIVES_RE = re.compile(r"\s*\|\|?\s*")
_HYPHEN_RANGE_RE = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")
_OPERATOR_SPACING_RE = re.compile(r"(>=|<=|==|!=|<>|\^|~|>|<|=)\s+")
_CONJUNCTION_RE = re.compile(r"\s*,\s*|\s+")
_COMPARATOR_RE = re.compile(r"^(?P<op>>=|<=|==|!=|<>|\^|~|>|<|=)?(?P<version>.+)$")
_UPPER_BOUND_OPERATORS = {"<", "<=", "!=", "<>"}


@dataclass(frozen=True, order=True)
class Version:
    release: Tuple[int, int, int, int]
    stability_rank: int = STABILITY_RANKS["stable"]
    stability_number: int = 0

    @property
    def stability(self) -> str:
        for name, rank in STABILITY_RANKS.items():
            if rank == self.stability_rank:
                return name
        return "stable"

    def __str__(self) -> str:
        text = ".".join(str(part) for part in self.release)
        if self.stability != "stable":
            text += f"-{self.stability}"
            if self.stability_number:
                text += str(self.stability_number)
        return text


def parse_version(text: str) -> Optional[Version]:
    """Parse a single version (``v1.2``, ``1.0.0-beta2``, ``2.x-dev``)."""

    candidate = _WILDCARD_RE.sub("", text.strip())
    match = _VERSION_RE.match(candidate)
    if match is None:
        return None

    parts = [int(part) for part in match.group("release").split(".")]
    parts.extend([0] * (4 - len(parts)))
    release = (parts[0], parts[1], parts[2], parts[3])

    stability = (match.group("stability") or "stable").lower()
    stability = _STABILITY_ALIASES.get(stability, stability)
    number = int(match.group("number") or 0)
    return Version(release=release, stability_rank=STABILITY_RANKS[stability], stability_number=number)


def constraint_floor(constraint: str) -> Optional[Version]:
    """Return the lowest version admitted by ``constraint`` or ``None``."""

    text = constraint.strip()
    if not text:
        return None

    floors: List[Version] = []
    for alternative in _ALTERNATIVES_RE.split(text):
        floor = _alternative_floor(alternative)
        if floor is None:
            return None
        floors.append(floor)
    return min(floors) if floors else None


def compare_constraints(left: str, right: str) -> Optional[int]:
    """Compare two constraints; ``None`` when either has no lower bound."""

    if left.strip() == right.strip():
        return 0
    left_floor = constraint_floor(left)
    right_floor = constraint_floor(right)
    if left_floor is None or right_floor is None:
        return None
    return (left_floor > right_floor) - (left_floor < right_floor)


def is_lower(current: str, candidate: str) -> bool:
    result = compare_constraints(current, candidate)
    return result is not None and result < 0


def _alternative_floor(alternative: str) -> Optional[Version]:
    text = alternative.strip()
    if not text:
        return None

    hyphen = _HYPHEN_RANGE_RE.match(text)
    if hyphen:
        return parse_version(_strip_flag(hyphen.group("low")))

    text = _OPERATOR_SPACING_RE.sub(r"\1", text)
    for token in _CONJUNCTION_RE.split(text):
        match = _COMPARATOR_RE.match(token)
        if match is None:
            continue
        if match.group("op") in _UPPER_BOUND_OPERATORS:
            continue
        version = _strip_flag(match.group("version"))
        if not version:
            continue
        return parse_version(version)
    return None


def _strip_flag(token: str) -> str:
    # "1.0@beta" and bare "@dev" carry a stability flag, not a bound.
    return token.split("@", 1)[0].strip()


__all__ = [
    "STABILITY_RANKS",
    "Version",
    "compare_constraints",
    "constraint_floor",
    "is_lower",
    "parse_version",
]
