"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from fingerprint import __version__
from fingerprint.cli.commands import config, scan
from fingerprint.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="fingerprint",
    help="Checksum manifests for directory trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"fingerprint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
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
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Log scan progress to stderr.",
        ),
    ] = False,
) -> None:
    """fingerprint - Checksum manifests for directory trees.

    Walk directory trees, digest every included file and write a
    manifest that can be diffed against later runs.
    """
    configure_logging(debug)


# Register commands
app.command(name="scan")(scan.scan)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
