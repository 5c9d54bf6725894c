"""Dependency resolver interfaces and implementations."""

from .base import CommandRunner, ProcessResult, Resolver
from .inprocess import InProcessRunner, RecordedCall
from .npm import NPM_ENV, NPM_FLAGS, NpmResolver
from .process import SubprocessRunner

__all__ = [
    "CommandRunner",
    "InProcessRunner",
    "NPM_ENV",
    "NPM_FLAGS",
    "NpmResolver",
    "ProcessResult",
    "RecordedCall",
    "Resolver",
    "SubprocessRunner",
]
