"""
Toolchain management module for InterpKit.

This module provides functionality for:
- Canonical version keys
- Interpreter introspection
- Symlink/shim creation for registered interpreters
- Listing and removing installed toolchains
- The catalog of obtainable toolchains
"""

from interpkit.toolchain.version_key import VersionKey, compare
from interpkit.toolchain.inspector import (
    INSPECT_SCRIPT,
    InspectInfo,
    Inspector,
    SubprocessInspector,
    parse_inspect_output,
)
from interpkit.toolchain.linking import (
    LinkType,
    Linker,
    ShimFallbackLinker,
    SymlinkLinker,
    get_linker,
    resolve_link,
)
from interpkit.toolchain.catalog import (
    CatalogEntry,
    StaticCatalog,
    ToolchainCatalog,
    default_catalog,
    load_catalog_file,
)
from interpkit.toolchain.registry import (
    RemoveOutcome,
    ToolchainEntry,
    ToolchainRegistry,
    resolve_interpreter,
)
from interpkit.toolchain.registration import register_toolchain

__all__ = [
    "VersionKey",
    "compare",
    "INSPECT_SCRIPT",
    "InspectInfo",
    "Inspector",
    "SubprocessInspector",
    "parse_inspect_output",
    "LinkType",
    "Linker",
    "ShimFallbackLinker",
    "SymlinkLinker",
    "get_linker",
    "resolve_link",
    "CatalogEntry",
    "StaticCatalog",
    "ToolchainCatalog",
    "default_catalog",
    "load_catalog_file",
    "RemoveOutcome",
    "ToolchainEntry",
    "ToolchainRegistry",
    "resolve_interpreter",
    "register_toolchain",
]
