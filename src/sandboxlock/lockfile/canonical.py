"""Canonical projection of a resolved dependency tree.

npm documents the key order of ``packages`` as unspecified, so the projection
sorts install paths by code point before anything is hashed. Only the fields
that identify a package (name, version, integrity, resolved) survive; scripts,
licenses, engines and other metadata are not part of the identity.

Entries without both a name and a version are treated as metadata nodes and
dropped. This keeps lock manifests with a bare root ``""`` entry hashable.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sandboxlock.lockfile.io import lock_manifest_from_payload
from sandboxlock.lockfile.model import CanonicalTree, LockedPackage, LockManifest


def canonicalize(lock: LockManifest | Mapping[str, Any]) -> CanonicalTree:
    if not isinstance(lock, LockManifest):
        lock = lock_manifest_from_payload(dict(lock))

    retained: dict[str, LockedPackage] = {}
    for path, entry in lock.packages.items():
        package = LockedPackage.from_entry(entry)
        if package is not None:
            retained[path] = package

    return CanonicalTree(
        lockfile_version=lock.lockfile_version,
        packages=tuple((path, retained[path]) for path in sorted(retained)),
        dependencies=dict(lock.dependencies),
    )
