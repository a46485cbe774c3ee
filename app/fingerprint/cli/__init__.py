"""CLI package for fingerprint.

This package contains the Typer application and all subcommands.
"""

from fingerprint.cli.main import app

__all__ = ["app"]
