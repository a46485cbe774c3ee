"""Exception hierarchy for fingerprint.

Configuration errors are raised at construction time, before any
filesystem I/O. Scanner errors abort a running scan; nothing is
retried and no partial result is reported as complete.
"""


class FingerprintError(Exception):
    """Base exception for all fingerprint errors."""


class ConfigurationError(FingerprintError):
    """Raised when a scanner is constructed with invalid options."""


class ExclusionPatternError(ConfigurationError):
    """Raised when an exclusion pattern cannot be compiled."""


class UnsupportedAlgorithmError(ConfigurationError):
    """Raised when the requested checksum algorithm is not available."""


class ScannerError(FingerprintError):
    """Base exception for failures during a scan."""


class RootAccessError(ScannerError):
    """Raised when a root (or a directory below it) cannot be entered."""


class DigestError(ScannerError, OSError):
    """Raised when a file cannot be opened or read while digesting."""


class ManifestWriteError(ScannerError):
    """Raised when the output sink rejects a write."""
