"""CLI commands for clir.

This package contains all subcommand implementations.
"""

from clir.cli.commands import clean, config, listing, rules

__all__ = ["clean", "config", "listing", "rules"]
