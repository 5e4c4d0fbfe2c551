"""List command: show how much space every rule would free."""

import json
from pathlib import Path
from typing import Annotated

import typer

from clir.cli.display import print_report
from clir.cli.types import CliState, OutputFormat, get_state
from clir.filesystem.local import LocalFilesystem
from clir.models.report import build_report
from clir.rules.ruleset import require_rules
from clir.utils.formatting import console


def list_rules(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List registered rules with the space they would free."""
    show_listing(get_state(ctx), output_format)


def show_listing(state: CliState, output_format: OutputFormat = OutputFormat.TABLE) -> None:
    """Resolve every rule and print the resulting report."""
    rules = require_rules(state.rules_path)
    report = build_report(rules.list(LocalFilesystem(), state.workers))

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
        return

    print_report(report, Path.cwd(), state.absolute)
