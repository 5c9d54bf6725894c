"""Lock manifest parser and reader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sandboxlock.errors import LockfileError, MissingManifestError
from sandboxlock.lockfile.model import LockManifest


def parse_lock_manifest(raw: str) -> LockManifest:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LockfileError("Invalid lock manifest JSON.", hint=str(exc)) from exc
    return lock_manifest_from_payload(payload)


def lock_manifest_from_payload(payload: Any) -> LockManifest:
    """Keep only the keys that identify a dependency tree; everything else is dropped."""
    if not isinstance(payload, dict):
        raise LockfileError("Invalid lock manifest payload type.")
    return LockManifest(
        lockfile_version=_optional_int(payload, "lockfileVersion"),
        packages=_optional_dict(payload, "packages"),
        dependencies=_optional_dict(payload, "dependencies"),
    )


def read_lock_manifest(path: str | Path) -> LockManifest:
    lock_path = Path(path)
    try:
        raw = lock_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingManifestError(
            "package-lock.json not found.",
            hint="Run install() successfully before requesting a checksum.",
            context={"path": str(lock_path)},
        ) from exc
    except OSError as exc:
        raise LockfileError(
            "Unable to read lock manifest.",
            context={"path": str(lock_path), "error": str(exc)},
        ) from exc
    return parse_lock_manifest(raw)


def _optional_int(payload: dict[str, Any], key: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise LockfileError(f"Invalid lock manifest `{key}` value.")
    return value


def _optional_dict(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise LockfileError(f"Invalid lock manifest `{key}` value.")
    return value
