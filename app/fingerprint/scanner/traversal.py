"""Pre-order traversal of a root directory with pruning.

Walks a root depth-first using an explicit stack of pending paths.
A directory is yielded before any of its descendants, siblings are
yielded in sorted name order, and excluded directories are yielded
but never listed.
"""

import logging
import os
from collections.abc import Iterator

from fingerprint.core.errors import RootAccessError
from fingerprint.scanner.exclusion import ExclusionMatcher
from fingerprint.scanner.models import TraversalEntry

logger = logging.getLogger(__name__)

ROOT_PATH = "./"


def check_root(root: str | os.PathLike[str]) -> None:
    """Verify that a root exists, is a directory and can be listed.

    Raises:
        RootAccessError: If the root is missing, not a directory, or
            cannot be entered.
    """
    root_str = os.fspath(root)
    if not os.path.exists(root_str):
        msg = f"Root does not exist: {root_str}"
        raise RootAccessError(msg)
    if not os.path.isdir(root_str):
        msg = f"Root is not a directory: {root_str}"
        raise RootAccessError(msg)
    try:
        with os.scandir(root_str):
            pass
    except OSError as e:
        msg = f"Cannot enter root {root_str}: {e.strerror or e}"
        raise RootAccessError(msg) from e


def join_relative(parent: str, name: str) -> str:
    """Join a child name onto a "./"-prefixed relative path."""
    if parent == ROOT_PATH:
        return ROOT_PATH + name
    return f"{parent}/{name}"


def _list_children(directory: str) -> list[tuple[str, bool]]:
    """List (name, is_directory) pairs of a directory, sorted by name.

    Raises:
        RootAccessError: If the directory cannot be listed.
    """
    try:
        with os.scandir(directory) as it:
            children = [(entry.name, entry.is_dir()) for entry in it]
    except OSError as e:
        msg = f"Cannot list directory {directory}: {e.strerror or e}"
        raise RootAccessError(msg) from e

    children.sort()
    return children


def walk(root: str | os.PathLike[str], matcher: ExclusionMatcher) -> Iterator[TraversalEntry]:
    """Yield every reachable path under a root in pre-order.

    Args:
        root: Directory to walk.
        matcher: Exclusion rules; excluded directories are pruned.

    Yields:
        TraversalEntry for each visited path, starting with the root
        itself as "./".

    Raises:
        RootAccessError: If the root, or a directory below it, cannot
            be entered.
    """
    check_root(root)
    root_str = os.fspath(root)

    # Pending (relative path, is_directory) pairs; last item is visited next.
    stack: list[tuple[str, bool]] = [(ROOT_PATH, True)]

    while stack:
        rel_path, is_directory = stack.pop()
        excluded = matcher.excluded(rel_path)

        yield TraversalEntry(path=rel_path, is_directory=is_directory, excluded=excluded)

        if not is_directory or excluded:
            continue

        children = _list_children(os.path.join(root_str, rel_path))
        logger.debug("Entering %s (%d entries)", rel_path, len(children))
        for name, child_is_dir in reversed(children):
            stack.append((join_relative(rel_path, name), child_is_dir))
