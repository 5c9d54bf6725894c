"""Command runner backed by :mod:`subprocess`."""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from sandboxlock.errors import ResolutionError
from sandboxlock.resolvers.base import ProcessResult


@dataclass(slots=True)
class SubprocessRunner:
    name: str = "subprocess"

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str],
        timeout: float | None = None,
    ) -> ProcessResult:
        command = list(argv)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                env=dict(env),
                capture_output=True,
                text=True,
                check=False,
                timeout=timeout,
            )
        except FileNotFoundError as exc:
            raise ResolutionError(
                f"Executable `{command[0]}` was not found.",
                hint="Install Node.js/npm and ensure it is available in PATH.",
                context={"runner": self.name, "command": " ".join(command)},
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ResolutionError(
                "Resolver command timed out.",
                hint="Raise SandboxConfig.resolver_timeout or check network access.",
                context={
                    "runner": self.name,
                    "command": " ".join(command),
                    "timeout": str(timeout),
                },
            ) from exc
        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
