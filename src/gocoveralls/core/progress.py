"""User-facing console feedback for CLI runs.

Design principles:
- Status lines go to stderr so stdout stays clean for the JSON payload
- Spinner only on a TTY; plain line otherwise (CI, pipes)
- Suppress structlog console output during spinners to avoid line collision

Usage::

    from gocoveralls.core.progress import status, spinner

    status("Parsed 3 profiles")
    status("Job submitted", style="success")  # ✓ Job submitted

    with spinner("Running go test"):
        run_tests()
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

_suppress_console_logs = threading.local()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return getattr(_suppress_console_logs, "active", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output; file handlers still receive logs."""
    _suppress_console_logs.active = True
    try:
        yield
    finally:
        _suppress_console_logs.active = False


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from gocoveralls.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)

    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "file")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 file" or "3 files"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


@contextmanager
def spinner(message: str, *, indent: int = 0) -> Iterator[None]:
    """Context manager for a spinner with log suppression.

    Usage::

        with spinner("Running go test"):
            do_work()
    """
    padding = " " * indent
    if _is_tty():
        with (
            suppress_console_logs(),
            _console.status(f"{padding}[cyan]{message}[/cyan]", spinner="dots"),
        ):
            yield
    else:
        _console.print(f"{padding}{message}...")
        yield


def make_coverage_table(files: list[dict[str, object]]) -> Table:
    """Render per-file stats from ``build_summary`` as a Rich table."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("File")
    table.add_column("Lines", justify="right")
    table.add_column("Covered", justify="right")
    table.add_column("%", justify="right")

    for entry in files:
        percent = float(entry["coverage_percent"])  # type: ignore[arg-type]
        color = "green" if percent >= 80 else "yellow" if percent >= 50 else "red"
        table.add_row(
            str(entry["name"]),
            str(entry["relevant_lines"]),
            str(entry["covered_lines"]),
            f"[{color}]{percent:.1f}[/{color}]",
        )
    return table
