"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from clir import __version__
from clir.cli.commands import clean, config, listing, rules
from clir.cli.types import CliState
from clir.core.config import require_config
from clir.core.logging import setup_logging
from clir.core.paths import get_rules_path

logger = logging.getLogger(__name__)

# Create main Typer app
app = typer.Typer(
    name="clir",
    help="Register paths and globs, see the space they take, and clean them.",
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"clir version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    rules_file: Annotated[
        Path | None,
        typer.Option(
            "--rules",
            "-c",
            help="Rules file to use instead of the configured one.",
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase log output (-v warnings, -vv info, -vvv debug).",
        ),
    ] = 0,
    absolute: Annotated[
        bool,
        typer.Option(
            "--absolute",
            "-a",
            help="Show absolute patterns.",
        ),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            max=64,
            help="Number of worker threads.",
        ),
    ] = None,
) -> None:
    """clir - keep track of disk space you can reclaim.

    Register build directories, caches and other disposable paths once,
    then list how much space they take and clean them in one go.
    Without a command, the rules are listed.
    """
    setup_logging(verbose)

    # settings commands load the file themselves so a broken one can be replaced
    if ctx.invoked_subcommand == "config":
        return

    settings = require_config()
    rules_path = rules_file or settings.rules_file or get_rules_path()
    logger.debug("Using rules file %s", rules_path)

    # Store resolved options in context for subcommands
    ctx.obj = CliState(
        config=settings,
        rules_path=rules_path.expanduser(),
        workers=workers or settings.workers,
        absolute=absolute or settings.absolute_paths,
        verbosity=verbose,
    )

    if ctx.invoked_subcommand is None:
        listing.show_listing(ctx.obj)


# Register commands
app.command(name="add")(rules.add)
app.command(name="remove")(rules.remove)
app.command(name="list")(listing.list_rules)
app.command(name="clean")(clean.clean)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
