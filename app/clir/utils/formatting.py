"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.theme import Theme

CLIR_THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "bar": "#69B9A1",
    }
)

# Decimal units, like `du --si`
_UNITS: tuple[str, ...] = ("K", "M", "G", "T")


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=CLIR_THEME, color_system=_detect_color_system())
err_console = Console(theme=CLIR_THEME, stderr=True, color_system=_detect_color_system())


def format_size(size_bytes: int | None) -> str:
    """Format a byte count with decimal units.

    Values below 10 get two decimals and values below 100 get one.

    Args:
        size_bytes: Number of bytes. None is treated as 0.

    Returns:
        Human-readable size such as ``"512B"``, ``"2.05K"`` or ``"13.4M"``.
    """
    if not size_bytes or size_bytes < 1000:
        return f"{size_bytes or 0}B"

    value = float(size_bytes)
    unit = _UNITS[0]
    for unit in _UNITS:
        value /= 1000
        if value < 1000:
            break

    if value < 10:
        return f"{value:.2f}{unit}"
    if value < 100:
        return f"{value:.1f}{unit}"
    return f"{value:.0f}{unit}"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
