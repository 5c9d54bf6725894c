"""Typed model for the subset of ``package-lock.json`` that identifies a tree."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class LockedPackage:
    name: str
    version: str
    integrity: Any = None
    resolved: Any = None

    @classmethod
    def from_entry(cls, entry: Any) -> LockedPackage | None:
        """Project a raw ``packages`` entry, or None for non-package metadata nodes."""
        if not isinstance(entry, Mapping):
            return None
        name = entry.get("name")
        version = entry.get("version")
        if not isinstance(name, str) or not name:
            return None
        if not isinstance(version, str) or not version:
            return None
        return cls(
            name=name,
            version=version,
            integrity=_or_null(entry.get("integrity")),
            resolved=_or_null(entry.get("resolved")),
        )

    def to_payload(self) -> dict[str, Any]:
        # Absent integrity/resolved stay as explicit nulls.
        return {
            "name": self.name,
            "version": self.version,
            "integrity": self.integrity,
            "resolved": self.resolved,
        }


@dataclass(frozen=True, slots=True)
class LockManifest:
    lockfile_version: int | None
    packages: dict[str, Any] = field(default_factory=dict)
    dependencies: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CanonicalTree:
    lockfile_version: int | None
    packages: tuple[tuple[str, LockedPackage], ...] = ()
    dependencies: dict[str, Any] = field(default_factory=dict)

    @property
    def package_paths(self) -> tuple[str, ...]:
        return tuple(path for path, _ in self.packages)

    def package_at(self, path: str) -> LockedPackage | None:
        for candidate, package in self.packages:
            if candidate == path:
                return package
        return None

    def to_payload(self) -> dict[str, Any]:
        return {
            "lockfileVersion": self.lockfile_version,
            "packages": {path: package.to_payload() for path, package in self.packages},
            "dependencies": self.dependencies,
        }


def _or_null(value: Any) -> Any:
    """Map empty values (None, "", false, 0) to None; keep everything else as written."""
    if value is None or value == "":
        return None
    if isinstance(value, (bool, int, float)) and not value:
        return None
    return value
