"""
InterpKit CLI argument parser.

This module implements the command-line interface for InterpKit using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from interpkit import __version__

logger = logging.getLogger(__name__)


class CLI:
    """InterpKit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="interpkit",
            description="InterpKit - Local registry of Python interpreter toolchains",
            epilog='Use "interpkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"InterpKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ~/.interpkit/config.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_toolchain_command(subparsers)

        return parser

    def _add_toolchain_command(self, subparsers):
        """Add 'toolchain' subcommand with its sub-commands."""
        parser = subparsers.add_parser(
            "toolchain",
            help="Manage Python toolchains",
            description="Register, list and remove Python toolchains",
        )
        toolchain_subparsers = parser.add_subparsers(
            dest="toolchain_command",
            help="Toolchain commands",
            metavar="SUBCOMMAND",
        )

        register_parser = toolchain_subparsers.add_parser(
            "register",
            help="Register a Python binary",
            description=(
                "Register an already available local Python installation, "
                "such as a self-compiled interpreter."
            ),
        )
        register_parser.add_argument(
            "path", type=Path, metavar="PATH", help="Path to the Python binary"
        )
        register_parser.add_argument(
            "--name",
            "-n",
            metavar="NAME",
            help="Name of the toolchain (auto-detected if not provided)",
        )

        list_parser = toolchain_subparsers.add_parser(
            "list",
            help="List registered toolchains",
            description="List all registered toolchains",
        )
        list_parser.add_argument(
            "--include-downloadable",
            action="store_true",
            help="Also include non installed, but downloadable toolchains",
        )
        list_parser.add_argument(
            "--format",
            choices=["json"],
            metavar="FORMAT",
            help="Request parseable output format (json)",
        )

        remove_parser = toolchain_subparsers.add_parser(
            "remove",
            help="Remove a toolchain",
            description="Remove a registered or installed toolchain",
        )
        remove_parser.add_argument(
            "version",
            metavar="VERSION",
            help="Name and version of the toolchain (e.g., cpython@3.12.1)",
        )

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (None = sys.argv)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with arguments.

        Args:
            args: Command-line arguments (None = sys.argv)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        if args.command == "toolchain":
            return self._dispatch_toolchain_command(args)

        logger.error(f"Unknown command: {args.command}")
        return 1

    def _dispatch_toolchain_command(self, args) -> int:
        """
        Dispatch toolchain sub-commands.

        Args:
            args: Parsed arguments with toolchain_command field

        Returns:
            Exit code from command handler
        """
        if not getattr(args, "toolchain_command", None):
            logger.error("No toolchain sub-command specified")
            self.parser.parse_args(["toolchain", "--help"])
            return 1

        from interpkit.cli.commands import toolchain

        toolchain_command_map = {
            "register": toolchain.run_register,
            "list": toolchain.run_list,
            "remove": toolchain.run_remove,
        }

        handler = toolchain_command_map.get(args.toolchain_command)
        if not handler:
            logger.error(f"Unknown toolchain command: {args.toolchain_command}")
            return 1

        return handler(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
