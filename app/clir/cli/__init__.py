"""CLI package for clir.

This package contains the Typer application and all subcommands.
"""

from clir.cli.main import app

__all__ = ["app"]
