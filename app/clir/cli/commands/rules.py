"""Add and remove commands.

Patterns are taken relative to the current working directory.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from clir.cli.types import get_state
from clir.rules.ruleset import RulesError, require_rules
from clir.utils.formatting import print_error, print_info, print_success


def add(
    ctx: typer.Context,
    patterns: Annotated[
        list[str],
        typer.Argument(help="Paths or glob patterns to register.", show_default=False),
    ],
) -> None:
    """Register paths or glob patterns for cleaning."""
    state = get_state(ctx)
    rules = require_rules(state.rules_path)

    try:
        updated = rules.add(patterns, Path.cwd())
    except RulesError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    added = sorted(set(updated.patterns) - set(rules.patterns))
    for pattern in added:
        print_success(f"Added {escape(pattern)}")
    if not added:
        print_info("No new rules added.")


def remove(
    ctx: typer.Context,
    patterns: Annotated[
        list[str],
        typer.Argument(help="Paths or glob patterns to unregister.", show_default=False),
    ],
) -> None:
    """Unregister previously added paths or glob patterns."""
    state = get_state(ctx)
    rules = require_rules(state.rules_path)

    try:
        updated = rules.remove(patterns, Path.cwd())
    except RulesError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    removed = sorted(set(rules.patterns) - set(updated.patterns))
    for pattern in removed:
        print_success(f"Removed {escape(pattern)}")
    if not removed:
        print_info("No matching rules found.")
