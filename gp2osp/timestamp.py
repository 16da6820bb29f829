"""
Time tag parsing and time window filtering for GP2 log lines.

GP2 time tags have the layout ``dd/mm/yyyy hh:mm:ss.mmm``. Instants are
seconds since the epoch, computed in the local system timezone for both
log time tags and the operator supplied window boundaries.
"""

import re
import time
from dataclasses import dataclass

# Length of the time tag at the start of each GP2 line
TIME_TAG_LENGTH = 23

# Six integer fields, sub-second text after the seconds is ignored
_FIELD = r"\s*([+-]?[0-9]+)(?![0-9])"
_DATE_TIME_RE = re.compile(
    _FIELD + "/" + _FIELD + "/" + _FIELD + _FIELD + ":" + _FIELD + ":" + _FIELD
)


class MalformedTimestamp(ValueError):
    """Date and time fields could not be scanned from a string."""


class InvalidWindow(ValueError):
    """Time window boundaries are unparsable or reversed."""


def parse_timestamp(date_and_time: str) -> float:
    """
    Convert a ``dd/mm/yyyy hh:mm:ss`` string to an instant.

    Out of range fields (month 13, day 32, ...) are normalized the way
    the local calendar conversion does it, not rejected.

    Args:
        date_and_time: String starting with the date and time fields

    Returns:
        Seconds since the epoch, local timezone

    Raises:
        MalformedTimestamp: If the six fields cannot all be scanned
    """
    match = _DATE_TIME_RE.match(date_and_time)
    if match is None:
        raise MalformedTimestamp(f"Cannot scan date and time from {date_and_time!r}")

    day, month, year, hour, minute, second = (int(g) for g in match.groups())
    try:
        return time.mktime((year, month, day, hour, minute, second, 0, 0, -1))
    except (OverflowError, ValueError) as e:
        raise MalformedTimestamp(f"Date and time out of range: {date_and_time!r}") from e


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive interval ``[start, end]`` of instants."""
    start: float
    end: float

    def contains(self, instant: float) -> bool:
        """Check if an instant lies within the window, both ends included."""
        return self.start <= instant <= self.end

    def contains_tag(self, time_tag: str) -> bool:
        """
        Check if a line time tag lies within the window.

        An unparsable time tag never matches.
        """
        try:
            instant = parse_timestamp(time_tag)
        except MalformedTimestamp:
            return False
        return self.contains(instant)


def build_window(from_date: str, from_time: str, to_date: str, to_time: str) -> TimeWindow:
    """
    Build a time window from separate date and time options.

    Raises:
        InvalidWindow: If a boundary fails to parse or start is after end
    """
    try:
        start = parse_timestamp(f"{from_date} {from_time}")
        end = parse_timestamp(f"{to_date} {to_time}")
    except MalformedTimestamp as e:
        raise InvalidWindow(f"Incorrect From or To date or time option: {e}") from e

    if start > end:
        raise InvalidWindow(
            f"From {from_date} {from_time} is after To {to_date} {to_time}"
        )
    return TimeWindow(start, end)
