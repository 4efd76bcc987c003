"""
Link management for registered interpreters.

A registered interpreter is a file at its canonical path that refers to the
real binary. On Unix-like systems this is always a symlink. On Windows,
creating symlinks requires elevated privileges, so a failed symlink falls
back to a plain-text shim whose sole content is the interpreter path.
Consumers resolve both forms with ``resolve_link``.
"""

import logging
import os
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from interpkit.core.exceptions import LinkError
from interpkit.core.platform import PlatformInfo, detect_platform

logger = logging.getLogger(__name__)

SymlinkFunc = Callable[[Path, Path], None]


class LinkType(Enum):
    """Types of interpreter references."""

    SYMLINK = "symlink"  # Symbolic link to the interpreter
    SHIM = "shim"  # Text file containing the interpreter path


def _os_symlink(source: Path, target: Path) -> None:
    os.symlink(source, target)


class Linker(ABC):
    """Creates the reference at a canonical path to a candidate interpreter."""

    def __init__(self, symlink: Optional[SymlinkFunc] = None):
        """
        Args:
            symlink: Primitive creating a symlink at its second argument that
                points to its first (defaults to ``os.symlink``)
        """
        self._symlink = symlink or _os_symlink

    @abstractmethod
    def link(self, source: Path, target: Path) -> LinkType:
        """
        Make target refer to source.

        Raises:
            LinkError: If no reference could be created
        """
        ...


class SymlinkLinker(Linker):
    """Always creates a symlink."""

    def link(self, source: Path, target: Path) -> LinkType:
        try:
            self._symlink(source, target)
        except OSError as e:
            raise LinkError(f"could not symlink interpreter: {e}") from e
        logger.info(f"Created symlink: {target} -> {source}")
        return LinkType.SYMLINK


class ShimFallbackLinker(Linker):
    """Tries a symlink first and writes a plain-text shim if that fails."""

    def link(self, source: Path, target: Path) -> LinkType:
        try:
            self._symlink(source, target)
            logger.info(f"Created symlink: {target} -> {source}")
            return LinkType.SYMLINK
        except OSError as e:
            logger.debug(f"Symlink creation failed ({e}), writing shim instead")

        try:
            target.write_text(str(source), encoding="utf-8")
        except UnicodeEncodeError as e:
            raise LinkError("non unicode path to interpreter") from e
        except OSError as e:
            raise LinkError(f"could not register interpreter: {e}") from e

        logger.info(f"Created shim: {target} -> {source}")
        return LinkType.SHIM


def get_linker(
    platform: Optional[PlatformInfo] = None, symlink: Optional[SymlinkFunc] = None
) -> Linker:
    """
    Select the linking strategy for a platform.

    Args:
        platform: PlatformInfo instance (auto-detected if None)
        symlink: Optional symlink primitive override
    """
    platform = platform or detect_platform()
    if platform.is_windows:
        return ShimFallbackLinker(symlink)
    return SymlinkLinker(symlink)


def resolve_link(link_path: Path) -> Optional[Path]:
    """
    Resolve a registered interpreter reference to the real interpreter.

    Args:
        link_path: Symlink or shim file at a canonical path

    Returns:
        The interpreter path, or None if link_path is not a file reference
    """
    if link_path.is_symlink():
        target_str = os.readlink(link_path)
        if target_str.startswith("\\\\?\\"):
            target_str = target_str[4:]
        target = Path(target_str)
        if not target.is_absolute():
            target = link_path.parent / target
        return target

    if link_path.is_file():
        try:
            contents = link_path.read_text(encoding="utf-8").strip()
        except UnicodeDecodeError:
            logger.debug(f"Not a shim file: {link_path}")
            return None
        return Path(contents) if contents else None

    return None


__all__ = [
    "LinkType",
    "Linker",
    "SymlinkLinker",
    "ShimFallbackLinker",
    "get_linker",
    "resolve_link",
]
