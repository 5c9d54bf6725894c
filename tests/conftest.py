"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from sandboxlock.config import SandboxConfig
from sandboxlock.installer import SandboxInstaller
from sandboxlock.resolvers import InProcessRunner, NpmResolver


@pytest.fixture
def lock_payload() -> dict[str, Any]:
    """A small npm v3 lock manifest with a root node and two packages."""
    return {
        "name": "sandbox-left-pad",
        "lockfileVersion": 3,
        "requires": True,
        "packages": {
            "": {
                "dependencies": {"left-pad": "1.3.0"},
                "engines": {"node": ">=18.0.0"},
            },
            "node_modules/left-pad": {
                "name": "left-pad",
                "version": "1.3.0",
                "resolved": "https://registry.npmjs.org/left-pad/-/left-pad-1.3.0.tgz",
                "integrity": "sha512-XI5MPzVNApjAyhQzphX8BkmKsKUxD4LdyK24iZeQtOHbYKo==",
                "license": "WTFPL",
            },
            "node_modules/pad-util": {
                "name": "pad-util",
                "version": "0.1.0",
                "resolved": "https://registry.npmjs.org/pad-util/-/pad-util-0.1.0.tgz",
                "integrity": "sha512-AAAA",
            },
        },
    }


@pytest.fixture
def inprocess_runner(lock_payload: dict[str, Any]) -> InProcessRunner:
    """Provide a runner that writes ``lock_payload`` instead of invoking npm."""
    return InProcessRunner(lock_payload=lock_payload)


@pytest.fixture
def installer(tmp_path: Path, inprocess_runner: InProcessRunner) -> SandboxInstaller:
    return SandboxInstaller(
        config=SandboxConfig(sandbox_dir=tmp_path / "sandbox"),
        resolver=NpmResolver(runner=inprocess_runner),
    )
