"""Day-partition windowing shared by the day-aware strategies.

Candidates are grouped by partition path, the distinct paths are ranked with
the strategy's comparator, and a partition policy decides which ranked paths
survive. Each variant only differs in the policy it supplies.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date
from functools import cmp_to_key

from compactline.models import CompactionOperation
from compactline.partitions import date_at_offset_from_today, parse_partition_date

Comparator = Callable[[str, str], int]
PartitionPolicy = Callable[[list[str]], list[str]]


def rank_partitions(partition_paths: Sequence[str], comparator: Comparator) -> list[str]:
    """Dedupe and sort partition paths. Every path must carry a parsable date.

    Raises:
        PartitionDateError: If any path has no recognizable date, even when
            there is only one path and the comparator is never consulted
    """
    distinct = list(dict.fromkeys(partition_paths))
    for path in distinct:
        parse_partition_date(path)
    return sorted(distinct, key=cmp_to_key(comparator))


def window_partitions(
    operations: Sequence[CompactionOperation],
    comparator: Comparator,
    policy: PartitionPolicy,
) -> list[CompactionOperation]:
    """Return the operations of the partitions ``policy`` keeps.

    Partitions come out in comparator order; operations inside one partition
    keep their input order.
    """
    grouped: dict[str, list[CompactionOperation]] = {}
    for op in operations:
        grouped.setdefault(op.partition_path, []).append(op)

    ranked = rank_partitions(list(grouped), comparator)
    kept = set(policy(ranked))
    return [op for path in ranked if path in kept for op in grouped[path]]


def top_partitions(limit: int | None) -> PartitionPolicy:
    """Keep the first ``limit`` ranked partitions (all of them when None)."""

    def policy(ranked: list[str]) -> list[str]:
        return list(ranked) if limit is None else ranked[:limit]

    return policy


def earliest_partition_date(window_days: int | None, today: date) -> date | None:
    """First calendar day still inside a window of ``window_days`` back from today."""
    if window_days is None:
        return None
    return date_at_offset_from_today(-window_days, today=today)


def within_recent_window(window_days: int | None, today: date) -> PartitionPolicy:
    """Keep partitions dated on or after ``today - window_days``, future dates included."""
    earliest = earliest_partition_date(window_days, today)

    def policy(ranked: list[str]) -> list[str]:
        if earliest is None:
            return list(ranked)
        return [path for path in ranked if parse_partition_date(path) >= earliest]

    return policy


def older_than_recent_window(window_days: int | None, today: date) -> PartitionPolicy:
    """Keep only partitions dated strictly before ``today - window_days``."""
    recent = within_recent_window(window_days, today)

    def policy(ranked: list[str]) -> list[str]:
        if window_days is None:
            return []
        excluded = set(recent(ranked))
        return [path for path in ranked if path not in excluded]

    return policy
