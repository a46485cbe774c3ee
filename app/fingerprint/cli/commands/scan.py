"""Scan command implementation.

Writes a checksum manifest for one or more directory trees to stdout
or to a file.
"""

import io
import os
import sys
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from fingerprint.core.errors import FingerprintError
from fingerprint.core.settings import ScanSettings, load_settings, load_settings_or_default
from fingerprint.scanner.scanner import Scanner
from fingerprint.utils.formatting import err_console, format_summary, print_error, print_info

# Undecodable file names come back from os.scandir as lone surrogates;
# this handler writes their original bytes back out unchanged.
MANIFEST_ENCODING_ERRORS = "surrogateescape"


def scan(
    roots: Annotated[
        list[Path],
        typer.Argument(help="Root directories to scan, in order."),
    ],
    excludes: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Exclusion pattern (regex, or glob:/suffix: prefixed). Replaces the defaults.",
        ),
    ] = None,
    no_excludes: Annotated[
        bool,
        typer.Option("--no-excludes", help="Disable all exclusion rules."),
    ] = False,
    verbose: Annotated[
        bool | None,
        typer.Option(
            "--verbose/--quiet",
            "-v/-q",
            help="List or omit excluded paths in the manifest (default: from settings).",
        ),
    ] = None,
    algorithm: Annotated[
        str | None,
        typer.Option("--algorithm", "-a", help="Checksum algorithm (default: md5)."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the manifest to a file instead of stdout."),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Settings file (default: XDG config)."),
    ] = None,
) -> None:
    """Generate a checksum manifest for directory trees."""
    if excludes and no_excludes:
        print_error("--exclude and --no-excludes cannot be combined.")
        raise typer.Exit(code=1)

    overrides: dict[str, Any] = {}
    if excludes:
        overrides["excludes"] = excludes
    elif no_excludes:
        overrides["excludes"] = []
    if verbose is not None:
        overrides["verbose"] = verbose
    if algorithm is not None:
        overrides["algorithm"] = algorithm

    try:
        settings = _resolve_settings(config, overrides)
        if output is None:
            if isinstance(sys.stdout, io.TextIOWrapper):
                sys.stdout.reconfigure(errors=MANIFEST_ENCODING_ERRORS)
            scanner = Scanner.from_settings(roots, settings, output=sys.stdout)
            scanner.scan()
        else:
            scanner = _scan_to_file(roots, settings, output)
    except ValidationError as e:
        print_error(f"Invalid options: {e}")
        raise typer.Exit(code=1) from e
    except (FingerprintError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    err_console.print(format_summary(scanner.counters))
    if output is not None:
        print_info(f"Manifest written to {output}")


def _resolve_settings(config: Path | None, overrides: dict[str, Any]) -> ScanSettings:
    """Load settings and apply command-line overrides.

    An explicit --config path must exist; the default path may be absent.
    """
    settings = load_settings(config) if config is not None else load_settings_or_default()
    if not overrides:
        return settings
    return ScanSettings.model_validate({**settings.model_dump(), **overrides})


def _scan_to_file(roots: list[Path], settings: ScanSettings, output: Path) -> Scanner:
    """Scan into a temporary file and move it into place on success.

    A failed scan removes the temporary file, so a truncated manifest
    never replaces an existing one.
    """
    output = output.resolve()
    if output.is_dir():
        msg = f"Output path is a directory: {output}"
        raise FingerprintError(msg)
    output.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            errors=MANIFEST_ENCODING_ERRORS,
            dir=output.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            scanner = Scanner.from_settings(roots, settings, output=f)
            scanner.scan()
        os.replace(tmp_path, output)
    except BaseException:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise

    return scanner
