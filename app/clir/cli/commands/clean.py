"""Clean command: delete everything the registered rules match."""

from pathlib import Path
from typing import Annotated

import typer

from clir.cli.display import create_results_table, print_report, print_results_summary
from clir.cli.types import get_state
from clir.filesystem.local import LocalFilesystem
from clir.filesystem.operator import FilesystemOperator
from clir.models.report import build_report
from clir.rules.ruleset import RuleSet, require_rules
from clir.utils.formatting import console, print_info


def clean(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
) -> None:
    """Delete every path matched by the registered rules."""
    state = get_state(ctx)
    rules = require_rules(state.rules_path)

    fs = LocalFilesystem()
    listed = rules.list(fs, state.workers)
    report = build_report(listed)

    print_report(report, Path.cwd(), state.absolute)
    if report.is_empty:
        return

    # Confirm unless --yes or --dry-run
    if not dry_run and not yes:
        confirmed = typer.confirm("Clean all selected paths?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    operator = FilesystemOperator(
        fs,
        dry_run=dry_run,
        protected=state.config.protected_paths,
    )
    results = RuleSet.clean(listed, operator, state.workers)

    console.print(create_results_table(results))
    print_results_summary(results)
