"""
Core infrastructure for InterpKit.

This package contains the foundational components shared by the toolchain
subsystem and the command-line interface:
- Exception hierarchy
- Managed directory layout
- Platform detection
- Filesystem helpers
"""

from interpkit.core.exceptions import (
    InterpKitError,
    ConfigurationError,
    ToolchainError,
    ExecutionError,
    ParseError,
    ValidationError,
    ConflictError,
    LinkError,
    ToolchainIOError,
)
from interpkit.core.platform import PlatformInfo, detect_platform

__all__ = [
    "InterpKitError",
    "ConfigurationError",
    "ToolchainError",
    "ExecutionError",
    "ParseError",
    "ValidationError",
    "ConflictError",
    "LinkError",
    "ToolchainIOError",
    "PlatformInfo",
    "detect_platform",
]
