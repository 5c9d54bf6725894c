import json
from pathlib import Path

import cbor2
import pytest

from sandboxlock.errors import (
    ErrorCode,
    LockfileError,
    MissingManifestError,
    ResolutionError,
    SandboxLockError,
    SetupError,
    ValidationError,
)
from sandboxlock.models import InstallResult, InstallStage, PackageInfo, PackageRequest


@pytest.mark.parametrize("version", ["1.0.0", "4.17.21", "1.0.0-beta.1", "2.0.0+build.7", "0.0.0"])
def test_package_request_accepts_exact_versions(version: str) -> None:
    assert PackageRequest(name="a", version=version).version == version


@pytest.mark.parametrize(
    "version",
    ["^1.0.0", "~1.2.3", ">=2.0.0", "1.x", "*", "latest", "", "1.0", "01.0.0", "1.0.0 || 2.0.0"],
)
def test_package_request_rejects_ranges(version: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        PackageRequest(name="a", version=version)

    assert excinfo.value.hint is not None


@pytest.mark.parametrize(
    "name",
    [
        "",
        " lodash",
        "lodash ",
        "--prefix=/tmp/evil",
        "-g",
        ".hidden",
        "_private",
        "foo bar",
        "@scope/",
        "@/name",
        "a/b",
        "../escape",
        "x" * 215,
    ],
)
def test_package_request_rejects_bad_names(name: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        PackageRequest(name=name, version="1.0.0")

    assert excinfo.value.hint is not None


@pytest.mark.parametrize(
    "name",
    ["a", "left-pad", "lodash.merge", "@types/node", "@babel/core", "JSONStream", "x" * 214],
)
def test_package_request_accepts_npm_names(name: str) -> None:
    assert PackageRequest(name=name, version="1.0.0").name == name


def test_option_like_spec_never_becomes_a_request() -> None:
    with pytest.raises(ValidationError):
        PackageRequest.parse("--prefix=/tmp/evil@1.0.0")


def test_package_request_parse_handles_scoped_names() -> None:
    expected = PackageRequest(name="lodash", version="4.17.21")
    assert PackageRequest.parse("lodash@4.17.21") == expected
    assert PackageRequest.parse("@types/node@20.1.0").name == "@types/node"
    assert PackageRequest.parse("@types/node@20.1.0").spec == "@types/node@20.1.0"


@pytest.mark.parametrize("spec", ["lodash", "@types/node", "@1.0.0"])
def test_package_request_parse_requires_version(spec: str) -> None:
    with pytest.raises(ValidationError):
        PackageRequest.parse(spec)


def test_install_result_exports_success_shape(tmp_path: Path) -> None:
    result = InstallResult.succeeded(
        request=PackageRequest(name="a", version="1.0.0"),
        checksum="ab" * 32,
        package_info=PackageInfo(lockfile_version=3, total_packages=2),
        sandbox_dir=tmp_path,
    )

    payload = json.loads(result.to_json(tmp_path / "result.json"))

    assert payload == {
        "success": True,
        "package_name": "a",
        "version": "1.0.0",
        "stage": "reported",
        "checksum": "ab" * 32,
        "package_info": {"lockfile_version": 3, "total_packages": 2, "dependencies": {}},
        "sandbox_dir": str(tmp_path),
    }
    assert (tmp_path / "result.json").read_text(encoding="utf-8") == result.to_json()
    assert cbor2.loads(result.to_cbor()) == payload


def test_install_result_exports_failure_shape() -> None:
    result = InstallResult.failed(
        package_name="a",
        version="1.0.0",
        stage=InstallStage.MANIFEST_WRITTEN,
        error="npm install exited with status 1.",
    )

    assert result.to_dict() == {
        "success": False,
        "package_name": "a",
        "version": "1.0.0",
        "stage": "manifest_written",
        "error": "npm install exited with status 1.",
    }


def test_error_codes_are_stable_and_machine_readable() -> None:
    errors = [
        ValidationError("bad input"),
        SetupError("sandbox busy"),
        ResolutionError("npm failed"),
        LockfileError("bad lock"),
        MissingManifestError("no lock"),
    ]
    assert [error.code for error in errors] == [
        ErrorCode.VALIDATION.value,
        ErrorCode.SETUP.value,
        ErrorCode.RESOLUTION.value,
        ErrorCode.LOCKFILE.value,
        ErrorCode.MISSING_MANIFEST.value,
    ]


def test_error_renders_hint_and_context() -> None:
    error = ResolutionError(
        "npm install exited with status 1.",
        hint="Check registry access.",
        context={"output": "npm ERR! network", "empty": ""},
    )

    assert str(error).splitlines() == [
        "npm install exited with status 1.",
        "Hint: Check registry access.",
        "  output: npm ERR! network",
    ]
    assert error.to_dict()["hint"] == "Check registry access."
    assert error.to_dict()["code"] == "E_RESOLUTION"


def test_error_code_comes_from_error_class() -> None:
    error = LockfileError("bad lock", context={"path": "package-lock.json"})

    assert LockfileError.error_code is ErrorCode.LOCKFILE
    assert error.code == "E_LOCKFILE"
    assert error.message == "bad lock"
    assert isinstance(error, SandboxLockError)
    assert error.to_dict() == {
        "code": "E_LOCKFILE",
        "message": "bad lock\n  path: package-lock.json",
        "context": {"path": "package-lock.json"},
    }
