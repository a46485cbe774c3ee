"""Fingerprint - deterministic checksum manifests for directory trees."""

__version__ = "1.0.0"

__all__ = ["__version__"]
