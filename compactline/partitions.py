"""Partition-path date reasoning for day-aware compaction strategies.

Partition paths are opaque strings to the data model, but the day-aware
strategies read a calendar date out of them. Supported layouts::

    2017/01/31
    2017-01-31
    year=2017/month=01/day=31
    dt=2017-01-31

Anything else is a hard error: ranking an unparsable partition could admit
actively-written data into a compaction plan.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from functools import cmp_to_key

PARTITION_DATE_FORMAT = "%Y/%m/%d"
_ACCEPTED_FORMATS = (PARTITION_DATE_FORMAT, "%Y-%m-%d")


class PartitionDateError(ValueError):
    """Raised when a partition path does not carry a recognizable date."""


def strip_partition_keys(partition_path: str) -> str:
    """Drop hive-style ``key=`` prefixes from every path segment."""
    segments = [segment.split("=", 1)[-1] for segment in partition_path.strip("/").split("/")]
    return "/".join(segments)


def parse_partition_date(partition_path: str) -> date:
    stripped = strip_partition_keys(partition_path)
    for fmt in _ACCEPTED_FORMATS:
        try:
            return datetime.strptime(stripped, fmt).date()
        except ValueError:
            continue
    raise PartitionDateError(
        f"Invalid partition date format: '{partition_path}'. "
        "Expected yyyy/MM/dd, yyyy-MM-dd or hive-style year=/month=/day= segments."
    )


def format_partition_date(value: date) -> str:
    return value.strftime(PARTITION_DATE_FORMAT)


def date_at_offset_from_today(offset_days: int, *, today: date | None = None) -> date:
    """Return today's date shifted by ``offset_days`` (negative = past)."""
    anchor = today if today is not None else date.today()
    return anchor + timedelta(days=offset_days)


def compare_partitions_asc(left: str, right: str) -> int:
    return (left > right) - (left < right)


def compare_partitions_desc(left: str, right: str) -> int:
    """Order partitions by date, most recent first.

    Returns a negative number when ``left`` is dated after ``right``. Paths
    with equal dates fall back to ascending string comparison so the order
    stays total.
    """
    left_date = parse_partition_date(left)
    right_date = parse_partition_date(right)
    if left_date > right_date:
        return -1
    if right_date > left_date:
        return 1
    return compare_partitions_asc(left, right)


partition_sort_key = cmp_to_key(compare_partitions_desc)


__all__ = [
    "PARTITION_DATE_FORMAT",
    "PartitionDateError",
    "compare_partitions_asc",
    "compare_partitions_desc",
    "date_at_offset_from_today",
    "format_partition_date",
    "parse_partition_date",
    "partition_sort_key",
    "strip_partition_keys",
]
