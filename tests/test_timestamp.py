"""
Tests for Timestamp module.
"""

import time

import pytest
from gp2osp.timestamp import (
    InvalidWindow,
    MalformedTimestamp,
    TimeWindow,
    build_window,
    parse_timestamp,
)


def local(year, month, day, hour=0, minute=0, second=0):
    """Local time instant."""
    return time.mktime((year, month, day, hour, minute, second, 0, 0, -1))


class TestParseTimestamp:
    """Tests for parse_timestamp function."""

    def test_parse_date_time(self):
        """Test parsing a plain date and time."""
        assert parse_timestamp("29/10/2014 20:31:08") == local(2014, 10, 29, 20, 31, 8)

    def test_sub_seconds_ignored(self):
        """Test milliseconds after the seconds are ignored."""
        assert parse_timestamp("29/10/2014 20:31:08.942") == parse_timestamp("29/10/2014 20:31:08")

    def test_trailing_text_ignored(self):
        """Test text after the time tag is ignored."""
        instant = parse_timestamp("29/10/2014 20:31:08.942 (0) A0 A2 00 12")
        assert instant == local(2014, 10, 29, 20, 31, 8)

    def test_single_digit_fields(self):
        """Test fields without leading zeros."""
        assert parse_timestamp("1/2/2015 3:04:05") == local(2015, 2, 1, 3, 4, 5)

    def test_month_overflow_normalized(self):
        """Test month 13 rolls over to the next year."""
        assert parse_timestamp("01/13/2014 00:00:00") == local(2015, 1, 1)

    def test_space_before_fields(self):
        """Test blanks are skipped before every numeric field."""
        instant = parse_timestamp("29/ 10/ 2014 20: 31: 08")
        assert instant == local(2014, 10, 29, 20, 31, 8)

    @pytest.mark.parametrize("text", [
        "",
        "not a date",
        "29/10/2014",
        "29/10/2014 20:31",
        "29-10-2014 20:31:08",
        "(0) A0 A2 00 12 33 06",
        "\u0662\u0669/10/2014 20:31:08",
        "29/10/201420:31:08",
    ])
    def test_malformed(self, text):
        """Test strings without six scannable fields."""
        with pytest.raises(MalformedTimestamp):
            parse_timestamp(text)

    def test_malformed_is_value_error(self):
        """Test MalformedTimestamp is a ValueError."""
        assert issubclass(MalformedTimestamp, ValueError)


class TestTimeWindow:
    """Tests for TimeWindow class."""

    @pytest.fixture
    def window(self):
        """Window covering 29/10/2014 from 20:00:00 to 21:00:00."""
        return TimeWindow(local(2014, 10, 29, 20), local(2014, 10, 29, 21))

    def test_inside(self, window):
        """Test instant strictly inside the window."""
        assert window.contains(local(2014, 10, 29, 20, 30))

    def test_boundaries_inclusive(self, window):
        """Test both boundaries are accepted."""
        assert window.contains(window.start)
        assert window.contains(window.end)

    def test_outside(self, window):
        """Test one second outside either end is rejected."""
        assert not window.contains(window.start - 1)
        assert not window.contains(window.end + 1)

    def test_contains_tag(self, window):
        """Test checking a line time tag."""
        assert window.contains_tag("29/10/2014 20:31:08.942")
        assert window.contains_tag("29/10/2014 20:00:00.000")
        assert window.contains_tag("29/10/2014 21:00:00.999")
        assert not window.contains_tag("29/10/2014 19:59:59.999")
        assert not window.contains_tag("29/10/2014 21:00:01.000")

    def test_unparsable_tag_never_matches(self, window):
        """Test an unparsable time tag is excluded."""
        assert not window.contains_tag("garbage line without a date")


class TestBuildWindow:
    """Tests for build_window function."""

    def test_default_window(self):
        """Test the default 2014-2020 window."""
        window = build_window("01/01/2014", "00:00:00", "31/12/2020", "23:59:59")

        assert window.start == local(2014, 1, 1)
        assert window.end == local(2020, 12, 31, 23, 59, 59)

    def test_single_instant(self):
        """Test a window where start equals end."""
        window = build_window("29/10/2014", "20:31:08", "29/10/2014", "20:31:08")

        assert window.contains_tag("29/10/2014 20:31:08.942")
        assert not window.contains_tag("29/10/2014 20:31:09.000")

    def test_reversed_window(self):
        """Test start after end is rejected."""
        with pytest.raises(InvalidWindow):
            build_window("31/12/2020", "00:00:00", "01/01/2014", "00:00:00")

    def test_bad_from(self):
        """Test unparsable start date."""
        with pytest.raises(InvalidWindow):
            build_window("2014-01-01", "00:00:00", "31/12/2020", "23:59:59")

    def test_bad_to(self):
        """Test unparsable end time."""
        with pytest.raises(InvalidWindow):
            build_window("01/01/2014", "00:00:00", "31/12/2020", "noon")
