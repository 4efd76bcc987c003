"""
Cross-platform file system utilities for InterpKit.

Provides the small set of filesystem primitives the toolchain registry needs:
occupancy checks that see dangling links, safe recursive deletion and
best-effort directory creation.
"""

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Optional, Union

from interpkit.core.exceptions import ToolchainIOError

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to parent.

    Example:
        >>> is_relative_to(Path('/home/user/file'), Path('/home'))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def is_occupied(path: Path) -> bool:
    """
    Check whether anything exists at path, including a dangling symlink.

    ``Path.exists()`` follows links, so a broken symlink would otherwise look
    like free space.
    """
    return path.is_symlink() or path.exists()


def ensure_parent_directory(path: Path) -> bool:
    """
    Best-effort creation of the parent directory of path.

    Returns:
        True if the parent exists afterwards, False if creation failed.
        Failures are logged and never raised.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        logger.debug(f"Could not create parent directory {path.parent}: {e}")
        return False


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ToolchainIOError: If path is not under require_prefix, is not a
            directory, or deletion fails

    Example:
        >>> root = Path.home() / ".interpkit" / "toolchains"
        >>> safe_rmtree(root / "cpython@3.12.1", require_prefix=root)
    """
    path = Path(path)

    if require_prefix is not None:
        resolved_prefix = Path(require_prefix).resolve()
        resolved = path.resolve()
        inside = is_relative_to(resolved, resolved_prefix)
        if resolved == resolved_prefix or not inside:
            raise ToolchainIOError(
                f"Refusing to delete '{path}': "
                f"not under required prefix '{resolved_prefix}'"
            )

    if not path.exists():
        return  # Already gone, nothing to do

    if path.is_symlink() or not path.is_dir():
        raise ToolchainIOError(f"Path is not a directory: {path}")

    def handle_remove_readonly(func, failed_path, _exc):
        """Error handler for Windows read-only files."""
        if IS_WINDOWS and not os.access(failed_path, os.W_OK):
            os.chmod(failed_path, 0o777)
            func(failed_path)
        else:
            raise

    try:
        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=handle_remove_readonly)
        else:
            shutil.rmtree(path, onerror=handle_remove_readonly)
    except OSError as e:
        raise ToolchainIOError(f"Failed to remove directory '{path}': {e}") from e


__all__ = [
    "is_relative_to",
    "is_occupied",
    "ensure_parent_directory",
    "safe_rmtree",
]
