"""Lock manifest schema, reader, and canonicalizer."""

from .canonical import canonicalize
from .io import lock_manifest_from_payload, parse_lock_manifest, read_lock_manifest
from .model import CanonicalTree, LockedPackage, LockManifest

__all__ = [
    "CanonicalTree",
    "LockManifest",
    "LockedPackage",
    "canonicalize",
    "lock_manifest_from_payload",
    "parse_lock_manifest",
    "read_lock_manifest",
]
