"""CLI command implementations for the profilecut application.

This package contains subcommands for the profilecut CLI, including:
- validate: Validate a job file
"""

from profilecut.cli.commands.validate import validate_command

__all__ = ["validate_command"]
