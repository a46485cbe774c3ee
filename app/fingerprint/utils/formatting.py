"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich. Status
messages go to stderr so stdout carries only manifest text.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from fingerprint.scanner.models import ScanCounters

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "#69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "bold_header": "bold #69B9A1",
        "dim": "#b2bec3",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stderr.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def configure_logging(debug: bool = False) -> None:
    """Route library logging to stderr through Rich.

    Args:
        debug: If True, log at DEBUG level; otherwise only warnings.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def create_settings_table(title: str = "Scan Settings") -> Table:
    """Create a pre-configured two-column table for settings display.

    Args:
        title: Table title.

    Returns:
        Rich Table with Setting and Value columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="text", no_wrap=True)
    table.add_column("Value", style="info")
    return table


def format_summary(counters: ScanCounters) -> str:
    """Format scan counters as a one-line summary with Rich markup."""
    return (
        f"[success]Scanned[/] {counters.directories} directories, "
        f"{counters.files} files "
        f"[muted]({counters.excluded} excluded)[/]"
    )


def print_info(message: str) -> None:
    """Print an info message."""
    err_console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    err_console.print(f"[success]{escape(message)}[/]")
