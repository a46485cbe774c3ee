"""Utility modules for fingerprint.

This module exports commonly used utility functions.
"""

from fingerprint.utils.formatting import (
    configure_logging,
    console,
    create_settings_table,
    err_console,
    format_summary,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "configure_logging",
    "console",
    "create_settings_table",
    "err_console",
    "format_summary",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
