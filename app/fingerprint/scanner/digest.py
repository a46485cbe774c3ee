"""File digest computation.

Files are streamed through hashlib in bounded chunks so memory use
does not depend on file size.
"""

import hashlib
import logging
import os

from fingerprint.core.errors import DigestError, UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "md5"

# 10 MiB per read
DEFAULT_CHUNK_SIZE = 10 * 1024 * 1024


def validate_algorithm(algorithm: str) -> str:
    """Check that hashlib provides the algorithm.

    Args:
        algorithm: Algorithm name (e.g., "md5", "sha256").

    Returns:
        The normalized (lower-case) algorithm name.

    Raises:
        UnsupportedAlgorithmError: If hashlib cannot construct it, or it
            has a variable-length digest (shake_*).
    """
    name = algorithm.strip().lower()
    try:
        hasher = hashlib.new(name)
    except (ValueError, TypeError) as e:
        msg = f"Unsupported checksum algorithm: {algorithm!r}"
        raise UnsupportedAlgorithmError(msg) from e
    if hasher.digest_size == 0:
        msg = f"Checksum algorithm has no fixed digest size: {algorithm!r}"
        raise UnsupportedAlgorithmError(msg)
    return name


def digest_width(algorithm: str = DEFAULT_ALGORITHM) -> int:
    """Return the number of hex characters in a digest."""
    return hashlib.new(algorithm).digest_size * 2


def compute_digest(
    path: str | os.PathLike[str],
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Compute the hex digest of a file's content.

    Args:
        path: File to digest.
        algorithm: hashlib algorithm name.
        chunk_size: Maximum number of bytes read per call.

    Returns:
        Lower-case hex digest.

    Raises:
        DigestError: If the file cannot be opened or a read fails.
    """
    hasher = hashlib.new(algorithm)
    try:
        with open(path, "rb") as f:
            for block in iter(lambda: f.read(chunk_size), b""):
                hasher.update(block)
    except OSError as e:
        msg = f"Cannot read {os.fspath(path)}: {e.strerror or e}"
        raise DigestError(msg) from e

    return hasher.hexdigest()
