"""Error types raised by the installer and its collaborators.

Every error carries a stable ``code`` taken from its class, an optional
``hint`` telling the user what to change, and a ``context`` mapping with the
values that identify the failing package, path or command.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar


class ErrorCode(StrEnum):
    VALIDATION = "E_VALIDATION"
    SETUP = "E_SETUP"
    RESOLUTION = "E_RESOLUTION"
    LOCKFILE = "E_LOCKFILE"
    MISSING_MANIFEST = "E_MISSING_MANIFEST"


class SandboxLockError(Exception):
    error_code: ClassVar[ErrorCode]

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = self.error_code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        lines = [self.message]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        lines.extend(f"  {key}: {value}" for key, value in self.context.items() if value)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(SandboxLockError):
    """The requested package name or version is unusable."""

    error_code = ErrorCode.VALIDATION


class SetupError(SandboxLockError):
    """The sandbox directory could not be removed or recreated."""

    error_code = ErrorCode.SETUP


class ResolutionError(SandboxLockError):
    """npm failed, timed out, or left no lock manifest behind."""

    error_code = ErrorCode.RESOLUTION


class LockfileError(SandboxLockError):
    error_code = ErrorCode.LOCKFILE


class MissingManifestError(SandboxLockError):
    error_code = ErrorCode.MISSING_MANIFEST


__all__ = [
    "ErrorCode",
    "LockfileError",
    "MissingManifestError",
    "ResolutionError",
    "SandboxLockError",
    "SetupError",
    "ValidationError",
]
