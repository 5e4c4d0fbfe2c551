"""Shared types and helpers for CLI commands."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import typer

from clir.core.config import ClirConfig


class OutputFormat(str, Enum):
    """Output format options for the listing."""

    TABLE = "table"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class CliState:
    """Options resolved by the main callback and handed to subcommands.

    Attributes:
        config: Loaded settings.
        rules_path: Rules file to operate on.
        workers: Worker threads for every phase.
        absolute: Display absolute patterns.
        verbosity: How often ``--verbose`` was given.
    """

    config: ClirConfig
    rules_path: Path
    workers: int
    absolute: bool = False
    verbosity: int = 0


def get_state(ctx: typer.Context) -> CliState:
    """Return the state stored by the main callback.

    Raises:
        RuntimeError: If the command runs without the main callback.
    """
    state = ctx.find_object(CliState)
    if state is None:
        msg = "CLI state is not initialized"
        raise RuntimeError(msg)
    return state
