"""
Shared utilities for CLI commands.

Provides configuration loading, registry construction and consistent
output formatting for the command modules.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from interpkit.core.directory import (
    get_default_config_file,
    get_home_dir,
    get_toolchains_dir,
)
from interpkit.core.exceptions import ConfigurationError
from interpkit.toolchain.catalog import catalog_from_config
from interpkit.toolchain.registry import ToolchainRegistry

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is required but missing, or YAML
            parsing fails

    Example:
        >>> config = load_yaml_config(Path("~/.interpkit/config.yaml").expanduser())
        >>> config.get("toolchains_dir")
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration in {config_file} must be a mapping")
    return config


def build_registry(args) -> ToolchainRegistry:
    """
    Build the toolchain registry described by the command-line arguments.

    An explicit ``--config`` file must exist; the default one is optional.

    Args:
        args: Parsed arguments with an optional ``config`` attribute
    """
    home = get_home_dir()
    config_path = getattr(args, "config", None)
    if config_path:
        config_file = Path(config_path)
        config = load_yaml_config(config_file, required=True)
    else:
        config_file = get_default_config_file(home)
        config = load_yaml_config(config_file)

    toolchains_dir = get_toolchains_dir(home, config)
    catalog = catalog_from_config(config, base_dir=config_file.parent)
    logger.debug(f"Using toolchain root {toolchains_dir}")
    return ToolchainRegistry(toolchains_dir, catalog=catalog)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_info(message: str):
    """Print an informational message to stderr."""
    print(message, file=sys.stderr)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to replacing characters the console cannot encode.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        stream = file or sys.stdout
        encoding = getattr(stream, "encoding", None) or "ascii"
        print(message.encode(encoding, errors="replace").decode(encoding), file=file)
