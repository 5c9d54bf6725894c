"""In-process command runner for testing and development.

Stands in for npm without spawning a process: every call is recorded and,
when configured to succeed, a fixed lock payload is written into the working
directory. This makes it suitable for:
- Unit tests that drive the full install pipeline
- Development environments without Node.js installed
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sandboxlock.config import PACKAGE_LOCK_JSON
from sandboxlock.resolvers.base import ProcessResult


@dataclass(frozen=True, slots=True)
class RecordedCall:
    argv: tuple[str, ...]
    cwd: Path
    env: Mapping[str, str]
    timeout: float | None


@dataclass(slots=True)
class InProcessRunner:
    lock_payload: dict[str, Any] | None = None
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    calls: list[RecordedCall] = field(default_factory=list)
    name: str = "inprocess"

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str],
        timeout: float | None = None,
    ) -> ProcessResult:
        self.calls.append(
            RecordedCall(argv=tuple(argv), cwd=Path(cwd), env=dict(env), timeout=timeout),
        )
        if self.returncode == 0 and self.lock_payload is not None:
            lock_path = Path(cwd) / PACKAGE_LOCK_JSON
            lock_path.write_text(json.dumps(self.lock_payload, indent=2) + "\n", encoding="utf-8")
        return ProcessResult(returncode=self.returncode, stdout=self.stdout, stderr=self.stderr)
