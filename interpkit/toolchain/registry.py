"""
Toolchain registry.

The registry owns the canonical toolchain root. Each entry under it is named
by its version key and is either:

- a directory: a full installation placed there by a fetch pipeline, or
- a file: a symlink or plain-text shim created by ``register_toolchain``.

Example:
    >>> registry = ToolchainRegistry(Path("~/.interpkit/toolchains").expanduser())
    >>> for entry in registry.list_toolchains(include_obtainable=True):
    ...     print(entry.key, entry.path or "(downloadable)")
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from interpkit.core.exceptions import ParseError, ToolchainError, ToolchainIOError
from interpkit.core.filesystem import safe_rmtree
from interpkit.core.platform import PlatformInfo, detect_platform
from interpkit.toolchain.catalog import ToolchainCatalog, default_catalog
from interpkit.toolchain.linking import resolve_link
from interpkit.toolchain.version_key import VersionKey

logger = logging.getLogger(__name__)

PathResolver = Callable[[VersionKey], Path]


class RemoveOutcome(Enum):
    """Result of removing a toolchain."""

    LINK_REMOVED = "link_removed"
    INSTALLATION_REMOVED = "installation_removed"
    NOT_INSTALLED = "not_installed"


@dataclass(frozen=True)
class ToolchainEntry:
    """A toolchain as presented in listings."""

    key: VersionKey
    path: Optional[Path] = None

    @property
    def installed(self) -> bool:
        return self.path is not None

    def to_dict(self) -> dict:
        """
        Machine-readable form.

        ``path`` is present only for installed entries and ``downloadable``
        only for obtainable ones.
        """
        data = {"name": str(self.key)}
        if self.path is not None:
            data["path"] = str(self.path)
        else:
            data["downloadable"] = True
        return data


def find_interpreter_in_installation(install_dir: Path) -> Optional[Path]:
    """
    Find the interpreter binary inside an installation directory.

    Args:
        install_dir: Toolchain directory created by a fetch pipeline

    Returns:
        Path to the interpreter, or None if no candidate exists
    """
    if os.name == "nt":
        candidates = [
            install_dir / "install" / "python.exe",
            install_dir / "python.exe",
        ]
    else:
        candidates = [
            install_dir / "install" / "bin" / "python3",
            install_dir / "bin" / "python3",
            install_dir / "install" / "bin" / "python",
            install_dir / "bin" / "python",
        ]

    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def resolve_interpreter(path: Path) -> Optional[Path]:
    """
    Resolve a canonical toolchain entry to its real interpreter.

    A plain-text shim names the interpreter; it is not the interpreter.
    """
    if path.is_symlink() or path.is_file():
        return resolve_link(path)
    if path.is_dir():
        return find_interpreter_in_installation(path)
    return None


class ToolchainRegistry:
    """Resolves, lists and removes toolchains under a canonical root."""

    def __init__(
        self,
        toolchains_dir: Path,
        catalog: Optional[ToolchainCatalog] = None,
        platform: Optional[PlatformInfo] = None,
        path_resolver: Optional[PathResolver] = None,
    ):
        """
        Initialize the registry.

        Args:
            toolchains_dir: Canonical toolchain root
            catalog: Obtainable catalog (built-in catalog if None)
            platform: Platform used to filter the catalog (auto-detected if None)
            path_resolver: Override for the key to canonical path mapping
        """
        self.toolchains_dir = Path(toolchains_dir)
        self.catalog = catalog if catalog is not None else default_catalog()
        self._platform = platform
        self._path_resolver = path_resolver

    @property
    def platform(self) -> PlatformInfo:
        if self._platform is None:
            self._platform = detect_platform()
        return self._platform

    def canonical_path(self, key: VersionKey) -> Path:
        """Get the unique location of a toolchain under the managed root."""
        if self._path_resolver is not None:
            return self._path_resolver(key)
        return self.toolchains_dir / str(key)

    def list_installed(self) -> Dict[VersionKey, Path]:
        """
        Enumerate installed toolchains.

        Returns:
            Mapping of key to interpreter path (or to the entry itself when
            no interpreter can be resolved)
        """
        installed: Dict[VersionKey, Path] = {}
        if not self.toolchains_dir.is_dir():
            return installed

        for entry in sorted(self.toolchains_dir.iterdir()):
            if entry.name.startswith("."):
                continue
            try:
                key = VersionKey.parse(entry.name)
            except ParseError as e:
                logger.debug(f"Skipping {entry}: {e}")
                continue
            installed[key] = resolve_interpreter(entry) or entry

        return installed

    def list_obtainable(self) -> List[VersionKey]:
        """Get catalog keys obtainable for the registry's platform."""
        platform = self.platform
        return list(self.catalog.iter_obtainable(platform.os, platform.arch))

    def list_toolchains(
        self, include_obtainable: bool = False
    ) -> List[ToolchainEntry]:
        """
        List toolchains in presentation order.

        Installed entries always win over catalog entries for the same key.
        Installed entries come first; within each group entries are ordered
        by name ascending, then version descending.

        Args:
            include_obtainable: Also include catalog entries not installed
        """
        toolchains: Dict[VersionKey, Optional[Path]] = dict(self.list_installed())

        if include_obtainable:
            for key in self.list_obtainable():
                toolchains.setdefault(key, None)

        entries = [ToolchainEntry(key, path) for key, path in toolchains.items()]
        entries.sort(key=lambda e: (e.path is None, e.key))
        return entries

    def interpreter_path(self, key: VersionKey) -> Path:
        """
        Get the real interpreter of a registered toolchain.

        Raises:
            ToolchainError: If the toolchain is not installed or has no
                resolvable interpreter
        """
        path = self.canonical_path(key)
        interpreter = resolve_interpreter(path)
        if interpreter is None:
            raise ToolchainError(f"Toolchain {key} is not installed")
        return interpreter

    def remove(self, key: VersionKey) -> RemoveOutcome:
        """
        Remove a toolchain.

        Removing a toolchain that is not installed is not an error. Only
        directories strictly inside the toolchain root are deleted recursively.

        Raises:
            ToolchainIOError: If deletion fails or the installation lies
                outside the toolchain root
        """
        path = self.canonical_path(key)

        if path.is_symlink() or path.is_file():
            try:
                path.unlink()
            except OSError as e:
                raise ToolchainIOError(f"Failed to remove {path}: {e}") from e
            logger.debug(f"Removed toolchain link {path}")
            return RemoveOutcome.LINK_REMOVED

        if path.is_dir():
            safe_rmtree(path, require_prefix=self.toolchains_dir)
            logger.debug(f"Removed installed toolchain {path}")
            return RemoveOutcome.INSTALLATION_REMOVED

        logger.debug(f"Nothing to remove at {path}")
        return RemoveOutcome.NOT_INSTALLED


__all__ = [
    "RemoveOutcome",
    "ToolchainEntry",
    "ToolchainRegistry",
    "find_interpreter_in_installation",
    "resolve_interpreter",
]
