"""CLI command implementations for panelnest.

- validate: Validate a job file
"""

from panelnest.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
