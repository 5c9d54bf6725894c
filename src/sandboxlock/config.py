"""Installer configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

PACKAGE_JSON = "package.json"
PACKAGE_LOCK_JSON = "package-lock.json"


@dataclass(frozen=True, slots=True)
class SandboxConfig:
    sandbox_dir: Path
    npm_executable: str = "npm"
    node_engine: str = ">=18.0.0"
    # None blocks until npm exits; a hung npm then hangs install().
    resolver_timeout: float | None = None
    extra_env: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sandbox_dir", Path(self.sandbox_dir))

    @property
    def package_json_path(self) -> Path:
        return self.sandbox_dir / PACKAGE_JSON

    @property
    def lockfile_path(self) -> Path:
        return self.sandbox_dir / PACKAGE_LOCK_JSON
