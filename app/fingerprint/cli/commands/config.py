"""Settings commands.

Provides commands to show the effective scan settings and to write a
default settings file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from fingerprint.core.paths import get_settings_path
from fingerprint.core.settings import (
    ScanSettings,
    SettingsError,
    load_settings,
    load_settings_or_default,
    save_settings,
    settings_exists,
)
from fingerprint.scanner.exclusion import DEFAULT_EXCLUDES
from fingerprint.utils.formatting import (
    console,
    create_settings_table,
    print_error,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Show or create scan settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Settings file (default: XDG config)."),
]


@app.command()
def show(config: ConfigOption = None) -> None:
    """Show the effective scan settings."""
    path = config or get_settings_path()
    try:
        settings = load_settings(config) if config is not None else load_settings_or_default()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = create_settings_table()
    source = str(path) if settings_exists(path) else f"{path} (not found, using defaults)"
    table.add_row("File", escape(source))
    table.add_row("Algorithm", settings.algorithm)
    table.add_row("Verbose", str(settings.verbose).lower())
    table.add_row("Chunk size", f"{settings.chunk_size} bytes")
    if settings.excludes is None:
        table.add_row("Excludes", escape("\n".join(DEFAULT_EXCLUDES)) + "\n[muted](defaults)[/]")
    elif not settings.excludes:
        table.add_row("Excludes", "[muted](none)[/]")
    else:
        table.add_row("Excludes", escape("\n".join(settings.excludes)))

    console.print(table)


@app.command()
def init(
    config: ConfigOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the default options."""
    path = config or get_settings_path()
    if settings_exists(path) and not force:
        print_warning(f"Settings already exist: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    defaults = ScanSettings(excludes=list(DEFAULT_EXCLUDES))
    try:
        saved = save_settings(defaults, path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
