"""Tests for exclusion rules and the exclusion matcher."""

import itertools
import re

import pytest
from fingerprint.core.errors import ExclusionPatternError
from fingerprint.scanner.exclusion import (
    DEFAULT_EXCLUDES,
    ExclusionMatcher,
    GlobPredicate,
    PathPredicate,
    RegexPredicate,
    SuffixPredicate,
    parse_rule,
)


class TestDefaultExcludes:
    """Tests for the default rule set."""

    def test_dotfile_excluded(self) -> None:
        """Files whose name starts with a dot are excluded."""
        matcher = ExclusionMatcher()
        assert matcher.excluded("./.hidden") is True

    def test_dot_directory_excluded(self) -> None:
        """Nested dot-directories are excluded."""
        matcher = ExclusionMatcher()
        assert matcher.excluded("./sub/.git") is True

    def test_backup_file_excluded(self) -> None:
        """Editor backup files ending with ~ are excluded."""
        matcher = ExclusionMatcher()
        assert matcher.excluded("./notes.txt~") is True

    def test_regular_paths_included(self) -> None:
        """Ordinary files and directories are not excluded."""
        matcher = ExclusionMatcher()
        assert matcher.excluded("./a.txt") is False
        assert matcher.excluded("./sub") is False
        assert matcher.excluded("./sub/b.txt") is False

    def test_root_not_excluded(self) -> None:
        """The root itself ("./") never matches the defaults."""
        matcher = ExclusionMatcher()
        assert matcher.excluded("./") is False

    def test_dot_inside_name_not_excluded(self) -> None:
        """Only a leading dot in the final segment triggers exclusion."""
        matcher = ExclusionMatcher()
        assert matcher.excluded("./archive.tar.gz") is False
        assert matcher.excluded("./.config/settings") is False

    def test_none_selects_defaults(self) -> None:
        """Passing None uses DEFAULT_EXCLUDES."""
        assert len(ExclusionMatcher(None)) == len(DEFAULT_EXCLUDES)


class TestCustomRules:
    """Tests for caller-supplied rule sets."""

    def test_empty_rules_exclude_nothing(self) -> None:
        """An empty rule set excludes nothing, not even dotfiles."""
        matcher = ExclusionMatcher([])
        assert matcher.excluded("./.hidden") is False

    def test_override_replaces_defaults(self) -> None:
        """Custom rules replace the defaults entirely."""
        matcher = ExclusionMatcher([r"\.log$"])
        assert matcher.excluded("./app.log") is True
        assert matcher.excluded("./.hidden") is False

    def test_compiled_regex_accepted(self) -> None:
        """Compiled patterns are used as-is."""
        matcher = ExclusionMatcher([re.compile(r"^\./build")])
        assert matcher.excluded("./build") is True
        assert matcher.excluded("./src/build") is False

    def test_predicate_object_accepted(self) -> None:
        """Any object with matches(path) is accepted as a rule."""

        class NameIs:
            def matches(self, path: str) -> bool:
                return path.endswith("/skip")

        matcher = ExclusionMatcher([NameIs()])
        assert matcher.excluded("./a/skip") is True
        assert matcher.excluded("./a/keep") is False

    def test_rule_order_does_not_change_verdict(self) -> None:
        """Every permutation of a rule set yields the same verdicts."""
        rules = [r"\.log$", "glob:tmp*", "suffix:.bak", r"/\.[^/]+$"]
        paths = ["./a.log", "./tmpdir", "./x.bak", "./.env", "./keep.txt", "./sub/tmp1"]
        expected = [ExclusionMatcher(rules).excluded(p) for p in paths]

        for perm in itertools.permutations(rules):
            matcher = ExclusionMatcher(perm)
            assert [matcher.excluded(p) for p in paths] == expected

    def test_excluded_iff_any_rule_matches(self) -> None:
        """A path is excluded exactly when at least one predicate matches."""
        rules = ["suffix:.a", "suffix:.b"]
        matcher = ExclusionMatcher(rules)
        for path in ["./x.a", "./x.b", "./x.c"]:
            any_match = any(parse_rule(r).matches(path) for r in rules)
            assert matcher.excluded(path) is any_match


class TestParseRule:
    """Tests for parse_rule prefixes."""

    def test_plain_string_is_regex(self) -> None:
        """Unprefixed strings become regex predicates."""
        assert isinstance(parse_rule(r"~$"), RegexPredicate)

    def test_re_prefix(self) -> None:
        """re: prefix selects a regex predicate."""
        predicate = parse_rule("re:^\\./tmp")
        assert isinstance(predicate, RegexPredicate)
        assert predicate.matches("./tmp/x") is True

    def test_glob_prefix(self) -> None:
        """glob: prefix selects a glob predicate."""
        assert isinstance(parse_rule("glob:*.pyc"), GlobPredicate)

    def test_suffix_prefix(self) -> None:
        """suffix: prefix selects a suffix predicate."""
        assert isinstance(parse_rule("suffix:.swp"), SuffixPredicate)

    def test_predicates_satisfy_protocol(self) -> None:
        """All built-in predicates satisfy PathPredicate."""
        for rule in ["x", "glob:x", "suffix:x"]:
            assert isinstance(parse_rule(rule), PathPredicate)


class TestGlobPredicate:
    """Tests for glob matching."""

    def test_matches_final_segment(self) -> None:
        """Globs match the final path segment at any depth."""
        predicate = GlobPredicate("*.pyc")
        assert predicate.matches("./pkg/mod.pyc") is True
        assert predicate.matches("./pkg/mod.py") is False

    def test_matches_full_path(self) -> None:
        """Globs also match the full relative path."""
        predicate = GlobPredicate("./build/*")
        assert predicate.matches("./build/out.bin") is True

    def test_case_sensitive(self) -> None:
        """Glob matching is case-sensitive on every platform."""
        assert GlobPredicate("*.TXT").matches("./a.txt") is False


class TestMalformedPatterns:
    """Malformed patterns fail at construction."""

    def test_invalid_regex_raises(self) -> None:
        """An unbalanced regex raises ExclusionPatternError."""
        with pytest.raises(ExclusionPatternError, match="Invalid exclusion pattern"):
            ExclusionMatcher(["(unclosed"])

    def test_empty_glob_raises(self) -> None:
        """An empty glob raises ExclusionPatternError."""
        with pytest.raises(ExclusionPatternError):
            parse_rule("glob:")

    def test_empty_suffix_raises(self) -> None:
        """An empty suffix raises ExclusionPatternError."""
        with pytest.raises(ExclusionPatternError):
            parse_rule("suffix:")

    def test_unsupported_rule_type_raises(self) -> None:
        """Objects without matches() are rejected."""
        with pytest.raises(ExclusionPatternError, match="Unsupported exclusion rule"):
            parse_rule(42)  # type: ignore[arg-type]
