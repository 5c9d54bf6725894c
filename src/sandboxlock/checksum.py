"""Checksum engine for canonical dependency trees."""

from __future__ import annotations

import hashlib
import hmac
import json
import re
from pathlib import Path

from sandboxlock.lockfile.canonical import canonicalize
from sandboxlock.lockfile.io import read_lock_manifest
from sandboxlock.lockfile.model import CanonicalTree

# json.loads pairs valid surrogates, so anything left here is a lone half.
LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def canonical_bytes(tree: CanonicalTree) -> bytes:
    # No sort_keys: key order is fixed by CanonicalTree.to_payload().
    encoded = json.dumps(tree.to_payload(), separators=(",", ":"), ensure_ascii=False)
    return LONE_SURROGATE.sub("\ufffd", encoded).encode("utf-8")


def digest(tree: CanonicalTree) -> str:
    return hashlib.sha256(canonical_bytes(tree)).hexdigest()


def verify(tree: CanonicalTree, expected: str) -> bool:
    return hmac.compare_digest(
        digest(tree).encode("ascii"),
        expected.encode("utf-8", errors="surrogatepass"),
    )


def checksum_file(path: str | Path) -> str:
    """Read, canonicalize and digest a lock manifest from disk."""
    return digest(canonicalize(read_lock_manifest(path)))


def verify_file(path: str | Path, expected: str) -> bool:
    return verify(canonicalize(read_lock_manifest(path)), expected)
