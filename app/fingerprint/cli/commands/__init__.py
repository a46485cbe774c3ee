"""CLI commands for fingerprint.

This package contains all subcommand implementations.
"""

from fingerprint.cli.commands import config, scan

__all__ = ["config", "scan"]
