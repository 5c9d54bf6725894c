"""Command-line demonstration of sandboxed installs.

Usage:
    python -m sandboxlock
    python -m sandboxlock lodash@4.17.21 --sandbox-root ./sandbox

Exit status is 0 when every install and verification passes, 1 when any
fails, and 2 when a NAME@VERSION argument is malformed.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from sandboxlock.config import SandboxConfig
from sandboxlock.errors import SandboxLockError
from sandboxlock.installer import SandboxInstaller
from sandboxlock.models import InstallResult, PackageRequest
from sandboxlock.resolvers import Resolver

DEMO_PACKAGES = (
    PackageRequest(name="lodash", version="4.17.21"),
    PackageRequest(name="express", version="4.18.2"),
    PackageRequest(name="axios", version="1.6.0"),
)

RULE = "=" * 60


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sandboxlock",
        description="Resolve packages in a throwaway sandbox and fingerprint the lock tree.",
        epilog="Exit status: 0 all passed, 1 an install or verification failed, 2 bad spec.",
    )
    parser.add_argument(
        "packages",
        nargs="*",
        metavar="NAME@VERSION",
        help="Exact package specs to install (default: demonstration set)",
    )
    parser.add_argument(
        "--sandbox-root",
        type=Path,
        default=Path("sandbox"),
        help="Sandbox directory; deleted and recreated for every install",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write structured log records as JSON lines",
    )
    return parser


def main(argv: Sequence[str] | None = None, *, resolver: Resolver | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        requests = [PackageRequest.parse(spec) for spec in args.packages] or list(DEMO_PACKAGES)
    except SandboxLockError as exc:
        print(f"Error: {exc}")
        return 2

    installer = SandboxInstaller(
        config=SandboxConfig(sandbox_dir=args.sandbox_root.resolve()),
        resolver=resolver,
    )
    failures = 0
    for request in requests:
        print(RULE)
        print(f"Testing: {request.spec}")
        print(RULE)
        result = installer.install(request.name, request.version)
        _print_result(result)
        if not result.success or result.checksum is None:
            failures += 1
            continue
        verified = installer.verify_checksum(result.checksum)
        print(f"Verification: {'PASSED' if verified else 'FAILED'}")
        if not verified:
            failures += 1

    if args.log_file is not None:
        installer.logger.to_json_lines(args.log_file)
    return 1 if failures else 0


def _print_result(result: InstallResult) -> None:
    if not result.success:
        print(f"Failed to install {result.package_name}@{result.version}")
        print(f"Error: {result.error}")
        return
    info = result.package_info
    print(f"Package: {result.package_name}@{result.version}")
    if info is not None:
        print(f"Lockfile Version: {info.lockfile_version}")
        print(f"Total Packages: {info.total_packages}")
    print(f"Tree Checksum: {result.checksum}")
    print(f"Sandbox Location: {result.sandbox_dir}")
