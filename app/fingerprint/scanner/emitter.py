"""Manifest emission.

Writes the line-oriented manifest to an injected text sink:

    # Checksum generated by Fingerprint (<version>) at <timestamp>
    # Root: <root-path>
    # Algorithm: <name>                      (only when not md5)

    <width spaces>  <dir-path>
    <hex-digest>: <file-path>
    #<width-1 spaces>: <excluded-path>       (verbose only)
    # Directories: <n> Files: <n> Excluded: <n>

The column width is the hex width of the digest algorithm (32 for md5),
so directory markers and exclusion markers line up with digest lines.

Paths are written as the str values os.scandir returns. On POSIX a name
that is not valid in the file system encoding carries lone surrogates,
so a sink that encodes to bytes should use errors="surrogateescape" to
write the original name bytes; the CLI opens its outputs that way.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from fingerprint import __version__
from fingerprint.core.errors import ManifestWriteError
from fingerprint.scanner.digest import DEFAULT_ALGORITHM, digest_width
from fingerprint.scanner.models import EntryKind, ManifestEntry, ScanCounters

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


class TextSink(Protocol):
    """Destination accepting sequential text writes."""

    def write(self, text: str, /) -> object: ...


class NullSink:
    """Sink that discards everything written to it."""

    def write(self, text: str, /) -> int:
        return len(text)


def local_now() -> datetime:
    """Current local time with timezone information."""
    return datetime.now().astimezone()


def format_timestamp(moment: datetime) -> str:
    """Format a timestamp as "YYYY-MM-DD HH:MM:SS +ZZZZ"."""
    return moment.strftime(TIMESTAMP_FORMAT).rstrip()


class ManifestEmitter:
    """Renders manifest entries and writes them to a sink.

    Args:
        sink: Destination for manifest text.
        algorithm: Digest algorithm, recorded in headers when not md5.
        verbose: If True, exclusion markers are written.
        clock: Callable returning the header timestamp.
    """

    def __init__(
        self,
        sink: TextSink,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        verbose: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._sink = sink
        self._algorithm = algorithm
        self._verbose = verbose
        self._clock = clock or local_now
        self._width = digest_width(algorithm)

    @property
    def width(self) -> int:
        return self._width

    def render(self, entry: ManifestEntry) -> list[str]:
        """Render an entry to its manifest lines (without newlines)."""
        if entry.kind == EntryKind.HEADER:
            lines = [
                f"# Checksum generated by Fingerprint ({__version__}) "
                f"at {format_timestamp(self._clock())}",
                f"# Root: {entry.path}",
            ]
            if self._algorithm != DEFAULT_ALGORITHM:
                lines.append(f"# Algorithm: {self._algorithm}")
            return lines

        if entry.kind == EntryKind.DIRECTORY:
            return ["", " " * self._width + f"  {entry.path}"]

        if entry.kind == EntryKind.FILE:
            return [f"{entry.digest}: {entry.path}"]

        return ["#".ljust(self._width) + f": {entry.path}"]

    def emit(self, entry: ManifestEntry) -> None:
        """Write an entry. Exclusion markers are dropped unless verbose."""
        if entry.kind == EntryKind.EXCLUDED and not self._verbose:
            return
        self._write_lines(self.render(entry))

    def header(self, root: str) -> None:
        self.emit(ManifestEntry(EntryKind.HEADER, root))

    def directory(self, path: str) -> None:
        self.emit(ManifestEntry(EntryKind.DIRECTORY, path))

    def file(self, path: str, digest: str) -> None:
        self.emit(ManifestEntry(EntryKind.FILE, path, digest))

    def excluded(self, path: str) -> None:
        self.emit(ManifestEntry(EntryKind.EXCLUDED, path))

    def summary(self, counters: ScanCounters) -> None:
        """Write the aggregated summary line."""
        self._write_lines(
            [
                f"# Directories: {counters.directories} "
                f"Files: {counters.files} "
                f"Excluded: {counters.excluded}"
            ]
        )

    def _write_lines(self, lines: list[str]) -> None:
        text = "".join(f"{line}\n" for line in lines)
        try:
            self._sink.write(text)
        except (OSError, ValueError, TypeError) as e:
            msg = f"Failed to write manifest: {e}"
            raise ManifestWriteError(msg) from e
