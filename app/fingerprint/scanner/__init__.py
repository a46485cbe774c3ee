"""Directory scanning and manifest generation.

This module provides the traversal, exclusion matching, digest
computation and manifest emission that make up a scan.
"""

from fingerprint.scanner.digest import DEFAULT_ALGORITHM, DEFAULT_CHUNK_SIZE, compute_digest
from fingerprint.scanner.emitter import ManifestEmitter, NullSink, TextSink
from fingerprint.scanner.exclusion import (
    DEFAULT_EXCLUDES,
    ExclusionMatcher,
    GlobPredicate,
    PathPredicate,
    RegexPredicate,
    SuffixPredicate,
    parse_rule,
)
from fingerprint.scanner.models import EntryKind, ManifestEntry, ScanCounters, TraversalEntry
from fingerprint.scanner.scanner import Scanner
from fingerprint.scanner.traversal import walk

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_EXCLUDES",
    "EntryKind",
    "ExclusionMatcher",
    "GlobPredicate",
    "ManifestEmitter",
    "ManifestEntry",
    "NullSink",
    "PathPredicate",
    "RegexPredicate",
    "ScanCounters",
    "Scanner",
    "SuffixPredicate",
    "TextSink",
    "TraversalEntry",
    "compute_digest",
    "parse_rule",
    "walk",
]
