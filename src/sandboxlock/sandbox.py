"""Sandbox directory lifecycle."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from sandboxlock.errors import SetupError


@dataclass(frozen=True, slots=True)
class Sandbox:
    root: Path

    def reset(self) -> Path:
        """Destroy and recreate the sandbox; a missing directory is not an error."""
        self.destroy()
        try:
            self.root.mkdir(parents=True, exist_ok=False)
        except OSError as exc:
            raise SetupError(
                "Unable to create sandbox directory.",
                hint="Check permissions on the sandbox parent directory.",
                context={"operation": "reset", "path": str(self.root), "error": str(exc)},
            ) from exc
        return self.root

    def destroy(self) -> None:
        if not self.root.exists() and not self.root.is_symlink():
            return
        try:
            if self.root.is_dir() and not self.root.is_symlink():
                shutil.rmtree(self.root)
            else:
                self.root.unlink()
        except OSError as exc:
            raise SetupError(
                "Unable to remove existing sandbox directory.",
                hint="Close any process holding files inside the sandbox and retry.",
                context={"operation": "destroy", "path": str(self.root), "error": str(exc)},
            ) from exc

    def is_empty(self) -> bool:
        return self.root.is_dir() and not any(self.root.iterdir())
