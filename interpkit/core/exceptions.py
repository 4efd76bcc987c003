"""
Centralized exception hierarchy for InterpKit.

Every error raised by the toolchain subsystem derives from ToolchainError so
the command layer has a single catch point for descriptive failures.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class InterpKitError(Exception):
    """Base exception for all InterpKit errors."""

    pass


class ConfigurationError(InterpKitError):
    """Raised when a configuration or catalog file cannot be loaded."""

    pass


# ============================================================================
# Toolchain-related Exceptions
# ============================================================================


class ToolchainError(InterpKitError):
    """Base exception for toolchain-related errors."""

    pass


class ExecutionError(ToolchainError):
    """Raised when a candidate interpreter cannot be run or exits non-zero."""

    pass


class ParseError(ToolchainError):
    """Raised for malformed introspection output or version key strings."""

    pass


class ValidationError(ToolchainError):
    """Raised when a validation callback rejects a derived version key."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"{key} is not a valid toolchain")


class ConflictError(ToolchainError):
    """Raised when the canonical path of a toolchain is already occupied."""

    def __init__(self, target):
        self.target = target
        super().__init__(f"target Python path {target} is already in use")


class LinkError(ToolchainError):
    """Raised when neither a symlink nor a shim could be created."""

    pass


class ToolchainIOError(ToolchainError):
    """Raised when an ancillary filesystem operation fails."""

    pass


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
]
