#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for ISO-8601 duration handling."""

import pytest

from newsformat.utils.durations import format_duration, parse_iso_duration, readable_duration


@pytest.mark.unit
class TestParseIsoDuration:
    """Tests for parse_iso_duration."""

    @pytest.mark.parametrize(
        "value,seconds",
        [
            ("PT30M", 1800),
            ("PT1H30M", 5400),
            ("PT45S", 45),
            ("P1D", 86400),
            ("P1DT2H", 93600),
            ("PT0.5H", 1800),
            ("pt10m", 600),
        ],
    )
    def test_valid(self, value, seconds):
        """Test valid durations."""
        assert parse_iso_duration(value) == seconds

    @pytest.mark.parametrize("value", ["", "P", "PT", "30 minutes", "T1H", "P1H"])
    def test_invalid(self, value):
        """Test invalid durations return None."""
        assert parse_iso_duration(value) is None

    def test_non_string(self):
        """Test non-strings are invalid."""
        assert parse_iso_duration(30) is None  # type: ignore[arg-type]


@pytest.mark.unit
class TestFormatDuration:
    """Tests for format_duration and readable_duration."""

    @pytest.mark.parametrize(
        "seconds,text",
        [
            (5400, "1 hr 30 mins"),
            (3600, "1 hr"),
            (900, "15 mins"),
            (7260, "2 hr 1 mins"),
            (0, ""),
        ],
    )
    def test_format(self, seconds, text):
        """Test hours and minutes formatting."""
        assert format_duration(seconds) == text

    def test_readable_duration(self):
        """Test parse then format."""
        assert readable_duration("PT1H15M") == "1 hr 15 mins"
        assert readable_duration("soon") is None
