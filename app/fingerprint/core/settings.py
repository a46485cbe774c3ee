"""Scan settings file I/O.

Settings live in a TOML file with a single ``[scan]`` table:

    [scan]
    excludes = ['/\\.[^/]+$', '~$', 'glob:*.pyc']
    verbose = false
    algorithm = "md5"
    chunk_size = 10485760

A missing ``excludes`` key keeps the default exclusion rules; an
empty list excludes nothing.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fingerprint.core.errors import ConfigurationError, FingerprintError
from fingerprint.core.paths import get_settings_path
from fingerprint.scanner.digest import DEFAULT_ALGORITHM, DEFAULT_CHUNK_SIZE, validate_algorithm
from fingerprint.scanner.exclusion import parse_rule

logger = logging.getLogger(__name__)


class SettingsError(FingerprintError):
    """Base exception for settings-related errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when settings content is invalid."""


class ScanSettings(BaseModel):
    """Options controlling a scan.

    Attributes:
        excludes: Exclusion patterns replacing the defaults (None keeps them).
        verbose: List excluded paths in the manifest.
        algorithm: hashlib algorithm for file digests.
        chunk_size: Bytes read per call while digesting.
    """

    model_config = ConfigDict(extra="forbid")

    excludes: Annotated[
        list[str] | None,
        Field(description="Exclusion patterns replacing the defaults"),
    ] = None
    verbose: Annotated[bool, Field(description="List excluded paths")] = False
    algorithm: Annotated[str, Field(description="Checksum algorithm")] = DEFAULT_ALGORITHM
    chunk_size: Annotated[
        int,
        Field(gt=0, description="Bytes read per call while digesting"),
    ] = DEFAULT_CHUNK_SIZE

    @field_validator("excludes")
    @classmethod
    def validate_excludes(cls, v: list[str] | None) -> list[str] | None:
        """Compile every pattern so malformed ones fail at load time."""
        if v is None:
            return v
        for pattern in v:
            try:
                parse_rule(pattern)
            except ConfigurationError as e:
                raise ValueError(str(e)) from None
        return v

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm_name(cls, v: str) -> str:
        """Normalize the algorithm name and check hashlib supports it."""
        try:
            return validate_algorithm(v)
        except ConfigurationError as e:
            raise ValueError(str(e)) from None


def load_settings(path: Path | None = None) -> ScanSettings:
    """Load and validate settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated ScanSettings.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    unknown = set(data) - {"scan"}
    if unknown:
        raise SettingsValidationError(f"Unknown settings sections: {sorted(unknown)}")

    try:
        return ScanSettings.model_validate(data.get("scan", {}))
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> ScanSettings:
    """Load settings, falling back to defaults when the file is missing.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Loaded settings, or defaults if no file exists.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        logger.debug("No settings file at %s, using defaults", path or get_settings_path())
        return ScanSettings()


def save_settings(settings: ScanSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace(). The temporary file is removed
    on failure.

    Args:
        settings: The settings to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(tmp_path, settings_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def settings_exists(path: Path | None = None) -> bool:
    """Check if a settings file exists."""
    return (path or get_settings_path()).exists()


def _settings_to_dict(settings: ScanSettings) -> dict[str, Any]:
    """Convert settings to a dictionary suitable for TOML serialization.

    TOML has no null, so excludes is omitted when it is None.
    """
    scan: dict[str, Any] = {
        "verbose": settings.verbose,
        "algorithm": settings.algorithm,
        "chunk_size": settings.chunk_size,
    }
    if settings.excludes is not None:
        scan["excludes"] = list(settings.excludes)
    return {"scan": scan}
