"""Protocols for external command execution and dependency resolvers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from sandboxlock.models import PackageRequest


@dataclass(frozen=True, slots=True)
class ProcessResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def diagnostics(self) -> str:
        """Tool output best suited for an error message, stderr first."""
        return self.stderr.strip() or self.stdout.strip()


class CommandRunner(Protocol):
    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str],
        timeout: float | None = None,
    ) -> ProcessResult:
        """Run ``argv`` to completion and capture its output."""


class Resolver(Protocol):
    name: str

    def resolve(self, request: PackageRequest, sandbox_dir: Path) -> Path:
        """Resolve ``request`` inside ``sandbox_dir`` and return the lock manifest path."""
