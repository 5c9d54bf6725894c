"""Package descriptor (``package.json``) construction."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sandboxlock.models import PackageRequest


def build_manifest(request: PackageRequest, *, node_engine: str = ">=18.0.0") -> dict[str, Any]:
    """Return a private descriptor that depends on exactly ``request``."""
    return {
        "name": f"sandbox-{request.name}",
        "version": "1.0.0",
        "description": f"Sandbox installation of {request.name}",
        "private": True,
        "dependencies": {request.name: request.version},
        "engines": {"node": node_engine},
    }


def write_manifest(
    request: PackageRequest,
    path: str | Path,
    *,
    node_engine: str = ">=18.0.0",
) -> Path:
    manifest_path = Path(path)
    payload = build_manifest(request, node_engine=node_engine)
    manifest_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return manifest_path
