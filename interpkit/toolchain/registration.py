"""
Registration of locally available interpreters.

Toolchains are normally fetched from the internet, but an interpreter that
already exists on the machine (for instance a self-compiled Python) can be
registered under the canonical toolchain root. Registration never overwrites
an occupied canonical path.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from interpkit.core.exceptions import ConflictError, ValidationError
from interpkit.core.filesystem import ensure_parent_directory, is_occupied
from interpkit.toolchain.inspector import Inspector, SubprocessInspector
from interpkit.toolchain.linking import Linker, get_linker
from interpkit.toolchain.registry import ToolchainRegistry
from interpkit.toolchain.version_key import VersionKey

logger = logging.getLogger(__name__)

ValidateFunc = Callable[[VersionKey], None]


def register_toolchain(
    path: Path,
    registry: ToolchainRegistry,
    name: Optional[str] = None,
    validate: Optional[ValidateFunc] = None,
    inspector: Optional[Inspector] = None,
    linker: Optional[Linker] = None,
) -> VersionKey:
    """
    Register an interpreter binary as a toolchain.

    The interpreter is inspected before anything is written, so a binary that
    is not a working interpreter leaves the toolchain root untouched.

    Args:
        path: Path to the candidate interpreter
        registry: Registry owning the canonical toolchain root
        name: Optional label replacing the reported implementation name
        validate: Optional callback that rejects a derived key by raising
        inspector: Interpreter inspector (subprocess-based if None)
        linker: Linking strategy (selected for the current platform if None)

    Returns:
        The key the interpreter was registered as

    Raises:
        ExecutionError: If the interpreter cannot be run
        ParseError: If its output or the derived key is malformed
        ValidationError: If ``validate`` rejects the key
        ConflictError: If the canonical path is already occupied
        LinkError: If neither a symlink nor a shim could be created
    """
    inspector = inspector or SubprocessInspector()
    info = inspector.inspect(path)

    if name is not None:
        key = VersionKey.parse(f"{name}@{info.python_version}")
    else:
        key = VersionKey.derive(
            info.python_implementation, info.python_version, info.python_debug
        )
    logger.debug(f"Interpreter {path} identifies as {key}")

    if validate is not None:
        try:
            validate(key)
        except Exception as e:
            raise ValidationError(key) from e

    target = registry.canonical_path(key)
    if is_occupied(target):
        raise ConflictError(target)

    # The toolchain root normally exists already; the link step reports
    # the real failure if it does not.
    ensure_parent_directory(target)

    linker = linker or get_linker()
    linker.link(path, target)
    return key


__all__ = ["register_toolchain", "ValidateFunc"]
