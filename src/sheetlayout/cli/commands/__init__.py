"""CLI command implementations for the sheetlayout application.

This package contains subcommands for the sheetlayout CLI, including:
- validate: Validate a canvas snapshot file
"""

from sheetlayout.cli.commands.validate import validate_command

__all__ = ["validate_command"]
