"""Public package entrypoint for sandboxed lock-tree fingerprinting."""

from .checksum import canonical_bytes, checksum_file, digest, verify, verify_file
from .config import SandboxConfig
from .errors import (
    ErrorCode,
    LockfileError,
    MissingManifestError,
    ResolutionError,
    SandboxLockError,
    SetupError,
    ValidationError,
)
from .installer import SandboxInstaller
from .lockfile import CanonicalTree, LockedPackage, LockManifest, canonicalize
from .models import InstallResult, InstallStage, PackageInfo, PackageRequest

__all__ = [
    "CanonicalTree",
    "ErrorCode",
    "InstallResult",
    "InstallStage",
    "LockManifest",
    "LockedPackage",
    "LockfileError",
    "MissingManifestError",
    "PackageInfo",
    "PackageRequest",
    "ResolutionError",
    "SandboxConfig",
    "SandboxInstaller",
    "SandboxLockError",
    "SetupError",
    "ValidationError",
    "canonical_bytes",
    "canonicalize",
    "checksum_file",
    "digest",
    "verify",
    "verify_file",
]
