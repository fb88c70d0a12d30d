"""Pydantic models describing Composer manifests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel

DEFAULT_VENDOR_DIR = "vendor"


class Dependency(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    constraint: str


class Repository(RootModel[Dict[str, Any]]):
    """Repository descriptor (type, url, options...) compared by value."""

    def describe(self) -> str:
        return json.dumps(self.root, separators=(",", ":"), ensure_ascii=False)


class Patch(BaseModel):
    model_config = ConfigDict(frozen=True)

    package: str
    description: str
    location: str = Field(..., description="Patch file path or URL.")


class Manifest(BaseModel):
    """A composer.json document plus the path it was read from.

    ``document`` keeps the decoded JSON in file order. The typed accessors read
    from it without mutating it; the ``with_*`` helpers return a new manifest
    holding a modified deep copy, leaving existing top-level keys in place.
    """

    model_config = ConfigDict(extra="forbid")

    path: Optional[Path] = None
    document: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.document

    @property
    def requirements(self) -> Dict[str, str]:
        section = self.document.get("require")
        if not isinstance(section, dict):
            return {}
        return {name: version for name, version in section.items() if isinstance(version, str)}

    @property
    def dependencies(self) -> List[Dependency]:
        return [Dependency(name=name, constraint=version) for name, version in self.requirements.items()]

    @property
    def repositories(self) -> List[Repository]:
        return [Repository(entry) for entry in _repository_entries(self.document.get("repositories"))]

    @property
    def patches(self) -> List[Patch]:
        section = self.patch_section()
        found: List[Patch] = []
        for package, entries in section.items():
            if not isinstance(entries, dict):
                continue
            for description, location in entries.items():
                if isinstance(location, str):
                    found.append(Patch(package=package, description=description, location=location))
        return found

    @property
    def vendor_dir(self) -> str:
        config = self.document.get("config")
        if isinstance(config, dict):
            value = config.get("vendor-dir")
            if isinstance(value, str) and value.strip():
                return value.strip()
        return DEFAULT_VENDOR_DIR

    def section(self, key: str) -> Dict[str, Any]:
        """Return a copy of a top-level object section, or an empty dict."""

        value = self.document.get(key)
        if isinstance(value, dict):
            return copy.deepcopy(value)
        return {}

    def patch_section(self) -> Dict[str, Any]:
        extra = self.document.get("extra")
        if not isinstance(extra, dict):
            return {}
        patches = extra.get("patches")
        if not isinstance(patches, dict):
            return {}
        return copy.deepcopy(patches)

    def with_section(self, key: str, value: Any) -> "Manifest":
        document = copy.deepcopy(self.document)
        document[key] = value
        return self.model_copy(update={"document": document})

    def with_requirements(self, requirements: Mapping[str, str]) -> "Manifest":
        return self.with_section("require", dict(requirements))

    def with_patches(self, patches: Mapping[str, Any]) -> "Manifest":
        extra = self.section("extra")
        extra["patches"] = copy.deepcopy(dict(patches))
        return self.with_section("extra", extra)

    def append_repositories(self, repositories: Iterable[Repository]) -> "Manifest":
        """Append descriptors, keeping the list or keyed-object shape in use."""

        additions = [copy.deepcopy(repository.root) for repository in repositories]
        current = self.document.get("repositories")
        if isinstance(current, dict):
            updated: Any = copy.deepcopy(current)
            for entry in additions:
                updated[_next_repository_key(updated)] = entry
        elif isinstance(current, list):
            updated = copy.deepcopy(current) + additions
        else:
            updated = additions
        return self.with_section("repositories", updated)


def _repository_entries(section: Any) -> List[Dict[str, Any]]:
    if isinstance(section, dict):
        values: Iterable[Any] = section.values()
    elif isinstance(section, list):
        values = section
    else:
        return []
    return [entry for entry in values if isinstance(entry, dict)]


def _next_repository_key(section: Mapping[str, Any]) -> str:
    index = len(section)
    while str(index) in section:
        index += 1
    return str(index)


__all__ = ["DEFAULT_VENDOR_DIR", "Dependency", "Manifest", "Patch", "Repository"]
