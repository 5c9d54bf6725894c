"""Sandboxed install orchestration.

``SandboxInstaller.install`` walks a strict stage sequence::

    idle -> sandbox_ready -> manifest_written -> resolved
         -> canonicalized -> digested -> reported

Any error moves the installer to ``failed`` and is returned as a failed
``InstallResult``; nothing raised inside ``install`` reaches the caller.
A retry is a fresh ``install`` call and always starts from a rebuilt sandbox.

The standalone operations (``generate_checksum``, ``verify_checksum``,
``get_package_info``) read the lock manifest fresh from disk on every call
and let errors propagate.

Installs into one sandbox must not overlap: the reset step deletes the
directory without any locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sandboxlock.checksum import digest, verify
from sandboxlock.config import SandboxConfig
from sandboxlock.errors import MissingManifestError
from sandboxlock.lockfile import CanonicalTree, LockManifest, canonicalize, read_lock_manifest
from sandboxlock.manifest import write_manifest
from sandboxlock.models import InstallResult, InstallStage, PackageInfo, PackageRequest
from sandboxlock.observability import LogLevel, StructuredLogger
from sandboxlock.resolvers import NpmResolver, Resolver
from sandboxlock.sandbox import Sandbox


@dataclass(slots=True)
class SandboxInstaller:
    config: SandboxConfig
    resolver: Resolver | None = None
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    stage: InstallStage = field(default=InstallStage.IDLE, init=False)
    last_result: InstallResult | None = field(default=None, init=False)
    sandbox: Sandbox = field(init=False)
    _resolved: bool = field(default=True, init=False, repr=False)

    def __post_init__(self) -> None:
        self.sandbox = Sandbox(self.config.sandbox_dir)
        if self.resolver is None:
            self.resolver = self._default_resolver()

    def install(self, name: str, version: str) -> InstallResult:
        spec = f"{name}@{version}"
        self.stage = InstallStage.IDLE
        self._log("install_start", spec, "Starting sandbox installation.")
        try:
            request = PackageRequest(name=name, version=version)

            self._resolved = False
            self.sandbox.reset()
            self._advance(InstallStage.SANDBOX_READY, spec, extra={"path": str(self.sandbox.root)})

            write_manifest(
                request,
                self.config.package_json_path,
                node_engine=self.config.node_engine,
            )
            self._advance(InstallStage.MANIFEST_WRITTEN, spec)

            resolver = self.resolver
            assert resolver is not None
            self._log("resolve", spec, "Invoking resolver.", extra={"resolver": resolver.name})
            lock_path = resolver.resolve(request, self.sandbox.root)
            self._resolved = True
            self._advance(InstallStage.RESOLVED, spec, extra={"lockfile": str(lock_path)})

            lock = read_lock_manifest(lock_path)
            tree = canonicalize(lock)
            self._advance(InstallStage.CANONICALIZED, spec, extra={"packages": len(tree.packages)})

            checksum = digest(tree)
            self._advance(InstallStage.DIGESTED, spec, extra={"checksum": checksum})

            result = InstallResult.succeeded(
                request=request,
                checksum=checksum,
                package_info=_package_info(lock),
                sandbox_dir=self.sandbox.root,
            )
            self._advance(InstallStage.REPORTED, spec, extra=result.to_dict())
        except Exception as exc:  # noqa: BLE001
            reached = self.stage
            self.stage = InstallStage.FAILED
            self._log(
                "install_failed",
                spec,
                "Installation failed.",
                level="error",
                extra={"reached": reached.value, "error": str(exc)},
            )
            result = InstallResult.failed(
                package_name=name,
                version=version,
                stage=reached,
                error=str(exc),
            )
        self.last_result = result
        return result

    def generate_checksum(self) -> str:
        checksum = digest(self._load_tree())
        self._log(
            "generate_checksum",
            None,
            "Tree checksum generated.",
            extra={"checksum": checksum},
        )
        return checksum

    def verify_checksum(self, expected: str) -> bool:
        tree = self._load_tree()
        if verify(tree, expected):
            self._log("verify_checksum", None, "Tree checksum verification passed.")
            return True
        self._log(
            "verify_checksum",
            None,
            "Tree checksum verification failed.",
            level="warning",
            extra={"expected": expected, "actual": digest(tree)},
        )
        return False

    def get_package_info(self) -> PackageInfo:
        return _package_info(self._load_lock())

    def _default_resolver(self) -> Resolver:
        return NpmResolver(
            executable=self.config.npm_executable,
            timeout=self.config.resolver_timeout,
            extra_env=dict(self.config.extra_env),
        )

    def _load_lock(self) -> LockManifest:
        if not self._resolved:
            raise MissingManifestError(
                "No successful resolution in this sandbox.",
                hint="Run install() successfully before requesting a checksum.",
                context={"path": str(self.config.lockfile_path)},
            )
        return read_lock_manifest(self.config.lockfile_path)

    def _load_tree(self) -> CanonicalTree:
        return canonicalize(self._load_lock())

    def _advance(
        self,
        stage: InstallStage,
        spec: str,
        *,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.stage = stage
        self._log("stage", spec, f"Reached stage {stage.value}.", extra=extra)

    def _log(
        self,
        operation: str,
        package: str | None,
        message: str,
        *,
        level: LogLevel = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.logger.log(
            operation,
            message,
            package=package,
            stage=self.stage.value,
            level=level,
            extra=extra,
        )


def _package_info(lock: LockManifest) -> PackageInfo:
    # Counts raw entries, the root "" node included.
    return PackageInfo(
        lockfile_version=lock.lockfile_version,
        total_packages=len(lock.packages),
        dependencies=dict(lock.dependencies),
    )
