"""Checksum scanner for directory trees.

Walks each root in order, classifies every visited path with the
exclusion rules, digests included files and writes the manifest.
Counters are aggregated across all roots and written once at the end.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from fingerprint.core.errors import ConfigurationError, ScannerError
from fingerprint.scanner.digest import (
    DEFAULT_ALGORITHM,
    DEFAULT_CHUNK_SIZE,
    compute_digest,
    validate_algorithm,
)
from fingerprint.scanner.emitter import ManifestEmitter, TextSink
from fingerprint.scanner.exclusion import ExclusionMatcher, ExclusionRule
from fingerprint.scanner.models import ScanCounters, TraversalEntry
from fingerprint.scanner.traversal import check_root, walk

if TYPE_CHECKING:
    from fingerprint.core.settings import ScanSettings

logger = logging.getLogger(__name__)


class Scanner:
    """Scans a set of root directories and writes a checksum manifest.

    A scanner is single-use: construct a fresh one for every scan.

    Args:
        roots: Non-empty sequence of root directories, scanned in order.
        excludes: Exclusion rules replacing the defaults (dotfiles and
            paths ending with "~"). None keeps the defaults.
        output: Sink receiving the manifest text. Defaults to an
            in-memory io.StringIO buffer.
        verbose: If True, excluded paths are listed in the manifest.
        algorithm: hashlib algorithm used for file digests.
        chunk_size: Maximum bytes read per call while digesting.
        clock: Callable returning header timestamps (local time by default).

    Raises:
        ConfigurationError: If roots is empty or chunk_size is not positive.
        ExclusionPatternError: If an exclusion rule is malformed.
        UnsupportedAlgorithmError: If the algorithm is unavailable.
    """

    def __init__(
        self,
        roots: Sequence[str | os.PathLike[str]],
        *,
        excludes: Iterable[ExclusionRule] | None = None,
        output: TextSink | None = None,
        verbose: bool = False,
        algorithm: str = DEFAULT_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if isinstance(roots, (str, os.PathLike)):
            msg = "roots must be a sequence of paths, not a single path"
            raise ConfigurationError(msg)
        if not roots:
            msg = "At least one root directory is required"
            raise ConfigurationError(msg)
        if chunk_size <= 0:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ConfigurationError(msg)

        self._roots: tuple[str, ...] = tuple(os.fspath(r) for r in roots)
        self._matcher = ExclusionMatcher(excludes)
        self._algorithm = validate_algorithm(algorithm)
        self._chunk_size = chunk_size
        self._output: TextSink = output if output is not None else io.StringIO()
        self._emitter = ManifestEmitter(
            self._output,
            algorithm=self._algorithm,
            verbose=verbose,
            clock=clock,
        )
        self._counters = ScanCounters()
        self._scanned = False

    @classmethod
    def from_settings(
        cls,
        roots: Sequence[str | os.PathLike[str]],
        settings: ScanSettings,
        *,
        output: TextSink | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> Scanner:
        """Build a scanner from validated settings."""
        return cls(
            roots,
            excludes=settings.excludes,
            output=output,
            verbose=settings.verbose,
            algorithm=settings.algorithm,
            chunk_size=settings.chunk_size,
            clock=clock,
        )

    @property
    def roots(self) -> tuple[str, ...]:
        return self._roots

    @property
    def output(self) -> TextSink:
        """The sink the manifest is written to."""
        return self._output

    @property
    def counters(self) -> ScanCounters:
        return self._counters

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def excluded(self, path: str) -> bool:
        """Return True if the root-relative path matches an exclusion rule."""
        return self._matcher.excluded(path)

    def scan(self) -> TextSink:
        """Scan all roots and write the manifest.

        Every root is checked before anything is written, so a missing
        root never produces a partial manifest. Any failure afterwards
        aborts the whole scan.

        Returns:
            The output sink holding the manifest.

        Raises:
            ScannerError: If the scanner was already used.
            RootAccessError: If a root, or a directory below it, cannot
                be entered.
            DigestError: If a file cannot be read.
            ManifestWriteError: If the sink rejects a write.
        """
        if self._scanned:
            msg = "Scanner has already been run; create a new Scanner"
            raise ScannerError(msg)
        self._scanned = True

        for root in self._roots:
            check_root(root)

        for root in self._roots:
            logger.info("Scanning root %s", root)
            self._emitter.header(root)
            for entry in walk(root, self._matcher):
                self._dispatch(root, entry)

        self._emitter.summary(self._counters)
        logger.info(
            "Scan complete: %d directories, %d files, %d excluded",
            self._counters.directories,
            self._counters.files,
            self._counters.excluded,
        )
        return self._output

    def _dispatch(self, root: str, entry: TraversalEntry) -> None:
        """Count one visited path and emit its manifest line."""
        self._counters.record(entry)

        if entry.excluded:
            logger.debug("Excluded %s", entry.path)
            self._emitter.excluded(entry.path)
        elif entry.is_directory:
            self._emitter.directory(entry.path)
        else:
            digest = compute_digest(
                os.path.join(root, entry.path),
                self._algorithm,
                self._chunk_size,
            )
            self._emitter.file(entry.path, digest)

    @staticmethod
    def scan_paths(
        roots: Sequence[str | os.PathLike[str]],
        **options: object,
    ) -> Scanner:
        """Scan a set of roots and return the scanner for inspection.

        Args:
            roots: Root directories, scanned in order.
            **options: Keyword arguments accepted by Scanner.

        Returns:
            The Scanner after its scan has completed.
        """
        scanner = Scanner(roots, **options)  # type: ignore[arg-type]
        scanner.scan()
        return scanner
