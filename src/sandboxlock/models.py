"""Core typed dataclasses for install requests and results."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

import cbor2

from sandboxlock.errors import ValidationError

EXACT_VERSION_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)

# npm name rules: optional @scope/, URL-safe characters, no leading "-", "." or "_".
# Uppercase stays allowed for legacy registry names.
PACKAGE_NAME_PATTERN = re.compile(
    r"^(?:@[A-Za-z0-9~][A-Za-z0-9._~-]*/)?[A-Za-z0-9~][A-Za-z0-9._~-]*$"
)
MAX_PACKAGE_NAME_LENGTH = 214


class InstallStage(StrEnum):
    IDLE = "idle"
    SANDBOX_READY = "sandbox_ready"
    MANIFEST_WRITTEN = "manifest_written"
    RESOLVED = "resolved"
    CANONICALIZED = "canonicalized"
    DIGESTED = "digested"
    REPORTED = "reported"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PackageRequest:
    name: str
    version: str

    def __post_init__(self) -> None:
        if len(self.name) > MAX_PACKAGE_NAME_LENGTH or not PACKAGE_NAME_PATTERN.fullmatch(
            self.name,
        ):
            raise ValidationError(
                "Package name is not a valid npm package name.",
                hint="Use `name` or `@scope/name` made of URL-safe characters.",
                context={"name": repr(self.name)},
            )
        if not EXACT_VERSION_PATTERN.fullmatch(self.version):
            raise ValidationError(
                "Package version must be an exact version, not a range.",
                hint="Pin the request to a concrete version such as `4.17.21`.",
                context={"name": self.name, "version": self.version},
            )

    @property
    def spec(self) -> str:
        return f"{self.name}@{self.version}"

    @classmethod
    def parse(cls, spec: str) -> PackageRequest:
        """Parse ``name@version``; scoped names keep their leading ``@``."""
        name, sep, version = spec.rpartition("@")
        if not sep or not name:
            raise ValidationError(
                "Package spec must have the form `name@version`.",
                context={"spec": spec},
            )
        return cls(name=name, version=version)


@dataclass(frozen=True, slots=True)
class PackageInfo:
    lockfile_version: int | None
    total_packages: int
    dependencies: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lockfile_version": self.lockfile_version,
            "total_packages": self.total_packages,
            "dependencies": self.dependencies,
        }


@dataclass(frozen=True, slots=True)
class InstallResult:
    success: bool
    package_name: str
    version: str
    stage: InstallStage
    checksum: str | None = None
    package_info: PackageInfo | None = None
    sandbox_dir: Path | None = None
    error: str | None = None

    @classmethod
    def succeeded(
        cls,
        *,
        request: PackageRequest,
        checksum: str,
        package_info: PackageInfo,
        sandbox_dir: Path,
    ) -> InstallResult:
        return cls(
            success=True,
            package_name=request.name,
            version=request.version,
            stage=InstallStage.REPORTED,
            checksum=checksum,
            package_info=package_info,
            sandbox_dir=sandbox_dir,
        )

    @classmethod
    def failed(
        cls,
        *,
        package_name: str,
        version: str,
        stage: InstallStage,
        error: str,
    ) -> InstallResult:
        return cls(
            success=False,
            package_name=package_name,
            version=version,
            stage=stage,
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            "package_name": self.package_name,
            "version": self.version,
            "stage": self.stage.value,
        }
        if self.success:
            payload["checksum"] = self.checksum
            payload["package_info"] = self.package_info.to_dict() if self.package_info else None
            payload["sandbox_dir"] = str(self.sandbox_dir) if self.sandbox_dir else None
        else:
            payload["error"] = self.error
        return payload

    def to_json(self, path: str | Path | None = None) -> str:
        encoded = json.dumps(self.to_dict(), indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        encoded = cbor2.dumps(self.to_dict(), canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded
