"""Shared Rich display functions for listings and deletion results.

Provides the table builders and summary printers used by the list and
clean commands.
"""

from pathlib import PurePath

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from clir.filesystem.operator import FilesystemActionResult
from clir.models.report import Report, ReportTotals
from clir.utils.formatting import console, format_size, print_info, print_success, print_warning

BAR_SCALE = 8

# Patterns further up than this are shown as absolute paths
MAX_DIRS_UP = 2

NOTHING_TO_DO = "There is nothing to do :)"


def format_pattern(pattern: str, workdir: PurePath | str, absolute: bool = False) -> str:
    """Format a normalized pattern for display.

    Patterns are shown relative to ``workdir`` when they are at most two
    levels above it, and absolute otherwise.

    Args:
        pattern: Normalized absolute pattern.
        workdir: Absolute working directory.
        absolute: Always show the absolute pattern.

    Returns:
        The display form of the pattern.

    Example:
        >>> format_pattern("/home/me/src/target", "/home/me/src/app")
        '../target'
    """
    if absolute:
        return pattern

    parts = [p for p in pattern.split("/") if p]
    base = [p for p in str(workdir).split("/") if p]

    common = 0
    for a, b in zip(base, parts, strict=False):
        if a != b:
            break
        common += 1

    dirs_up = len(base) - common
    if dirs_up > MAX_DIRS_UP:
        return pattern

    relative = "/".join([".."] * dirs_up + parts[common:])
    return relative or "."


def usage_bar(size: int, total: int, scale: int = BAR_SCALE) -> str:
    """Render a pattern's share of the total as a fixed-width bar.

    Every non-empty share gets at least one tick.

    Example:
        >>> usage_bar(1, 2)
        '[|||||   ]'
    """
    quota = int(size / total * scale) if total else 0
    quota = min(scale, quota + 1)
    return "[" + "|" * quota + " " * (scale - quota) + "]"


def summary_text(totals: ReportTotals) -> str:
    """Describe what a clean run would free."""
    if totals.file_count == 0:
        what = f"{totals.dir_count} directory(ies)"
    elif totals.dir_count == 0:
        what = f"{totals.file_count} file(s)"
    else:
        what = f"{totals.file_count} file(s) and {totals.dir_count} directory(ies)"
    return f"{format_size(totals.size)} in {what} to be freed"


def print_boxed(text: str) -> None:
    """Print a single line inside a heavy box."""
    console.print(Panel.fit(escape(text), box=box.HEAVY, border_style="border"))


def create_report_table(report: Report, workdir: PurePath | str, absolute: bool = False) -> Table:
    """Create a Rich table displaying a listing.

    Args:
        report: Report to display, rows ascending by size.
        workdir: Directory patterns are shown relative to.
        absolute: Show absolute patterns.

    Returns:
        Rich Table configured for report display.
    """
    table = Table(
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Share", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Pattern", no_wrap=True)
    table.add_column("Files", justify="right")
    table.add_column("Dirs", justify="right")

    total = report.totals.size
    for entry in report.entries:
        table.add_row(
            f"[bar]{escape(usage_bar(entry.size, total))}[/bar]",
            format_size(entry.size),
            escape(format_pattern(entry.pattern, workdir, absolute)),
            str(entry.file_count),
            str(entry.dir_count),
        )

    return table


def print_report(report: Report, workdir: PurePath | str, absolute: bool = False) -> None:
    """Print a listing followed by its summary.

    Prints a single boxed notice instead when no rule matches anything.
    """
    if report.is_empty:
        print_boxed(NOTHING_TO_DO)
        return

    console.print(create_report_table(report, workdir, absolute))
    print_boxed(summary_text(report.totals))


def create_results_table(results: list[FilesystemActionResult]) -> Table:
    """Create a Rich table displaying deletion results.

    Args:
        results: Deletion results, one per path.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Deletion Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Details")

    for r in results:
        if r.dry_run:
            status = "[info]dry-run[/info]"
            detail = "Would delete"
        elif r.success:
            status = "[success]deleted[/success]"
            detail = ""
        else:
            status = "[error]failed[/error]"
            detail = r.error or "Unknown error"
        table.add_row(status, escape(r.path), f"[muted]{escape(detail)}[/muted]")

    return table


def print_results_summary(results: list[FilesystemActionResult]) -> None:
    """Print a summary of deletion results.

    Args:
        results: Deletion results, one per path.
    """
    success_count = sum(1 for r in results if r.success and not r.dry_run)
    fail_count = sum(1 for r in results if not r.success)
    dry_count = sum(1 for r in results if r.dry_run)

    if dry_count:
        print_info(f"Dry-run: {dry_count} path(s) would be deleted.")
    elif fail_count:
        print_warning(f"{success_count} succeeded, {fail_count} failed")
    else:
        print_success(f"All {success_count} path(s) deleted successfully.")
