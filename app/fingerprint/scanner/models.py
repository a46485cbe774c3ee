"""Scanner domain models.

This module defines the data structures passed between traversal,
dispatch and manifest emission: traversal entries, manifest entries
and the per-scan counters.
"""

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Kind of a manifest line.

    Attributes:
        HEADER: Per-root header (tool version, timestamp, root path).
        DIRECTORY: A directory that was entered.
        FILE: A file digest and its path.
        EXCLUDED: A path skipped by an exclusion rule (verbose only).
    """

    HEADER = "header"
    DIRECTORY = "directory"
    FILE = "file"
    EXCLUDED = "excluded"


@dataclass(frozen=True, slots=True)
class TraversalEntry:
    """A path visited while walking a root.

    Attributes:
        path: Path relative to the root, "/"-separated, prefixed with "./".
        is_directory: True if the path is a directory (symlinks followed).
        excluded: True if an exclusion rule matched the path.
    """

    path: str
    is_directory: bool
    excluded: bool


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """A single line of the manifest.

    Attributes:
        kind: Which kind of line this entry renders to.
        path: Root path for headers, relative path otherwise.
        digest: Hex digest, only set for FILE entries.
    """

    kind: EntryKind
    path: str
    digest: str | None = None

    def __post_init__(self) -> None:
        """Validate that only file entries carry a digest."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if (self.kind == EntryKind.FILE) != (self.digest is not None):
            msg = f"Digest must be set exactly for file entries, got kind={self.kind.value}"
            raise ValueError(msg)


@dataclass(slots=True)
class ScanCounters:
    """Counters accumulated over one multi-root scan.

    Attributes:
        directories: Included directories entered.
        files: Included files digested.
        excluded: Excluded directories and files (descendants of an
            excluded directory are never visited, so never counted).
    """

    directories: int = 0
    files: int = 0
    excluded: int = 0

    @property
    def total(self) -> int:
        """Total number of paths visited."""
        return self.directories + self.files + self.excluded

    def record(self, entry: TraversalEntry) -> None:
        """Increment exactly one counter for a visited path."""
        if entry.excluded:
            self.excluded += 1
        elif entry.is_directory:
            self.directories += 1
        else:
            self.files += 1
