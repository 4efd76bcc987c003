"""
Mock implementations for testing InterpKit components.

This package provides in-memory replacements for interpreter subprocesses
and privileged filesystem operations to enable isolated, deterministic
testing.
"""

from .inspector import FakeInspector
from .filesystem import failing_symlink, recording_symlink

__all__ = [
    "FakeInspector",
    "failing_symlink",
    "recording_symlink",
]
