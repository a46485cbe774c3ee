"""Tests for Rich formatting helpers."""

import logging

import pytest
from fingerprint.scanner.models import ScanCounters
from fingerprint.utils.formatting import (
    configure_logging,
    create_settings_table,
    format_summary,
    print_error,
)


class TestFormatSummary:
    """Tests for format_summary."""

    def test_contains_counts(self) -> None:
        """Summary mentions every counter."""
        text = format_summary(ScanCounters(directories=3, files=7, excluded=2))
        assert "3 directories" in text
        assert "7 files" in text
        assert "2 excluded" in text


class TestSettingsTable:
    """Tests for create_settings_table."""

    def test_columns(self) -> None:
        """Table has Setting and Value columns."""
        table = create_settings_table()
        assert [c.header for c in table.columns] == ["Setting", "Value"]
        assert table.title == "Scan Settings"


class TestPrintError:
    """Tests for print_error."""

    def test_markup_in_message_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Brackets in messages are printed literally."""
        print_error("Invalid exclusion pattern '[a-': bad range [bold]")

        captured = capsys.readouterr()
        assert "[a-'" in captured.err
        assert "[bold]" in captured.err


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_debug_level(self) -> None:
        """debug=True logs at DEBUG."""
        configure_logging(debug=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_default_level(self) -> None:
        """Default logging shows warnings only."""
        configure_logging()
        assert logging.getLogger().level == logging.WARNING
