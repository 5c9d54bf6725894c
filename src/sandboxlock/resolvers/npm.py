"""Lockfile-only dependency resolution via the npm CLI.

npm runs with ``--package-lock-only`` so no tarballs are fetched or
extracted, and with audit and funding output disabled. The same switches are
exported as ``NPM_CONFIG_*`` variables so an ``.npmrc`` cannot re-enable them.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from sandboxlock.config import PACKAGE_LOCK_JSON
from sandboxlock.errors import ResolutionError
from sandboxlock.models import PackageRequest
from sandboxlock.resolvers.base import CommandRunner
from sandboxlock.resolvers.process import SubprocessRunner

NPM_FLAGS = ("--package-lock-only", "--no-audit", "--no-fund")

NPM_ENV = {
    "NPM_CONFIG_PACKAGE_LOCK_ONLY": "true",
    "NPM_CONFIG_AUDIT": "false",
    "NPM_CONFIG_FUND": "false",
}

MAX_DIAGNOSTIC_CHARS = 2000


@dataclass(slots=True)
class NpmResolver:
    runner: CommandRunner = field(default_factory=SubprocessRunner)
    executable: str = "npm"
    timeout: float | None = None
    extra_env: Mapping[str, str] = field(default_factory=dict)
    name: str = "npm"

    def command(self, request: PackageRequest) -> list[str]:
        return [self.executable, "install", request.spec, *NPM_FLAGS]

    def environment(self) -> dict[str, str]:
        env = dict(os.environ)
        env.update(self.extra_env)
        env.update(NPM_ENV)
        return env

    def resolve(self, request: PackageRequest, sandbox_dir: Path) -> Path:
        argv = self.command(request)
        result = self.runner.run(
            argv,
            cwd=sandbox_dir,
            env=self.environment(),
            timeout=self.timeout,
        )
        if not result.ok:
            raise ResolutionError(
                f"npm install exited with status {result.returncode}.",
                context={
                    "resolver": self.name,
                    "package": request.spec,
                    "command": " ".join(argv),
                    "output": result.diagnostics()[:MAX_DIAGNOSTIC_CHARS],
                },
            )

        lock_path = sandbox_dir / PACKAGE_LOCK_JSON
        if not lock_path.is_file():
            raise ResolutionError(
                "package-lock.json was not created.",
                hint="npm exited successfully but wrote no lock manifest.",
                context={
                    "resolver": self.name,
                    "package": request.spec,
                    "command": " ".join(argv),
                    "output": result.diagnostics()[:MAX_DIAGNOSTIC_CHARS],
                },
            )
        return lock_path
