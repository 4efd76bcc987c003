"""
Directory layout management for InterpKit.

This module resolves the managed home directory and the canonical toolchain
root that downstream tooling consumes by name.

Directory Structure:
    Home (~/.interpkit/ or %USERPROFILE%\\.interpkit\\, or $INTERPKIT_HOME):
        - toolchains/   : One entry per toolchain, named by its version key
            - cpython@3.12.1/        : Installed toolchain (directory)
            - custom@3.11.4          : Registered interpreter (symlink or shim)
        - config.yaml   : Optional user configuration
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from interpkit.core.exceptions import InterpKitError

HOME_ENV_VAR = "INTERPKIT_HOME"
TOOLCHAINS_DIR_NAME = "toolchains"
CONFIG_FILE_NAME = "config.yaml"


class DirectoryError(InterpKitError):
    """Raised when the managed home directory cannot be determined."""

    pass


def get_home_dir() -> Path:
    """
    Get the managed home directory path.

    Returns:
        Path: The home directory.
            - $INTERPKIT_HOME if set
            - Windows: %USERPROFILE%\\.interpkit
            - Linux/macOS: ~/.interpkit

    Raises:
        DirectoryError: If USERPROFILE is not set on Windows.

    Example:
        >>> get_home_dir()
        PosixPath('/home/user/.interpkit')
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()

    if os.name == "nt":
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine InterpKit home directory."
            )
        return Path(user_profile) / ".interpkit"
    return Path.home() / ".interpkit"


def get_default_config_file(home: Optional[Path] = None) -> Path:
    """Get the default configuration file path inside the home directory."""
    return (home or get_home_dir()) / CONFIG_FILE_NAME


def get_toolchains_dir(
    home: Optional[Path] = None, config: Optional[Dict[str, Any]] = None
) -> Path:
    """
    Get the canonical toolchain root.

    Args:
        home: Home directory (auto-detected if None)
        config: Loaded configuration; ``toolchains_dir`` overrides the default
            and is resolved against the home directory when relative.

    Returns:
        Path to the directory holding one entry per toolchain.
    """
    home = home or get_home_dir()
    override = (config or {}).get("toolchains_dir")
    if override:
        path = Path(str(override)).expanduser()
        return path if path.is_absolute() else home / path
    return home / TOOLCHAINS_DIR_NAME


__all__ = [
    "DirectoryError",
    "HOME_ENV_VAR",
    "get_home_dir",
    "get_default_config_file",
    "get_toolchains_dir",
]
