"""Settings commands.

Shows the effective settings and writes a default settings file.
"""

from typing import Annotated

import typer
from rich.table import Table

from clir.core.config import ClirConfig, ConfigError, require_config, save_config
from clir.core.paths import get_config_path, get_rules_path
from clir.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    config_path = get_config_path()
    config = require_config(config_path)

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold", no_wrap=True)
    table.add_column("Value")

    table.add_row("config file", str(config_path) + ("" if config_path.exists() else " (missing)"))
    table.add_row("rules_file", str(config.rules_file or get_rules_path()))
    table.add_row("workers", str(config.workers))
    table.add_row("absolute_paths", str(config.absolute_paths).lower())
    table.add_row("protected_paths", ", ".join(config.protected_paths) or "-")

    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        print_info(f"Settings file already exists: {config_path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        save_config(ClirConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {config_path}")
