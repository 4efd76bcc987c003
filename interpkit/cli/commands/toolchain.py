"""
Toolchain management commands.

This module implements the CLI commands for managing interpreter toolchains:
- register: Register a local interpreter binary
- list: Show installed (and optionally downloadable) toolchains
- remove: Remove a registered or installed toolchain
"""

import json
import logging
from pathlib import Path

from interpkit.cli.utils import build_registry, print_error, print_info, safe_print
from interpkit.core.exceptions import InterpKitError
from interpkit.toolchain.registration import register_toolchain
from interpkit.toolchain.registry import RemoveOutcome
from interpkit.toolchain.version_key import VersionKey

logger = logging.getLogger(__name__)


def _report_failure(action: str, error: InterpKitError) -> int:
    logger.debug(f"Failed to {action}", exc_info=True)
    message = str(error)
    cause = str(error.__cause__) if error.__cause__ is not None else None
    if cause and cause in message:
        cause = None
    print_error(message, cause)
    return 1


def run_register(args) -> int:
    """
    Register a Python binary.

    Args:
        args: Parsed command-line arguments with:
            - path: Path to the interpreter binary
            - name: Optional toolchain name (auto-detected if None)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    path = Path(args.path).absolute()
    try:
        registry = build_registry(args)
        key = register_toolchain(path, registry, name=args.name)
    except InterpKitError as e:
        return _report_failure("register toolchain", e)

    safe_print(f"Registered {path} as {key}")
    return 0


def run_list(args) -> int:
    """
    List registered toolchains.

    Args:
        args: Parsed command-line arguments with:
            - include_downloadable: Also list toolchains that can be fetched
            - format: Output format ('json') or None for text

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        registry = build_registry(args)
        entries = registry.list_toolchains(include_obtainable=args.include_downloadable)
    except InterpKitError as e:
        return _report_failure("list toolchains", e)

    if args.format == "json":
        safe_print(json.dumps([entry.to_dict() for entry in entries], indent=2))
        return 0

    for entry in entries:
        if entry.installed:
            safe_print(f"{entry.key} ({entry.path})")
        else:
            safe_print(f"{entry.key} (downloadable)")
    return 0


def run_remove(args) -> int:
    """
    Remove a toolchain.

    Removing a toolchain that is not installed succeeds with a notice.

    Args:
        args: Parsed command-line arguments with:
            - version: Name and version of the toolchain (e.g. cpython@3.12.1)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        key = VersionKey.parse(args.version)
        registry = build_registry(args)
        outcome = registry.remove(key)
    except InterpKitError as e:
        return _report_failure("remove toolchain", e)

    if outcome is RemoveOutcome.LINK_REMOVED:
        print_info(f"Removed toolchain link {key}")
    elif outcome is RemoveOutcome.INSTALLATION_REMOVED:
        print_info(f"Removed installed toolchain {key}")
    else:
        print_info("Toolchain is not installed")
    return 0
