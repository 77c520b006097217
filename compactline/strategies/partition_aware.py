"""Calendar-window compaction strategies.

Both strategies anchor a window of ``target_partitions_per_day_based_compaction``
days on today's date:

- bounded: compact partitions dated inside the window (and any future-dated
  partitions), i.e. on or after ``today - N``
- unbounded: compact everything older than the window and nothing inside it,
  leaving actively-written recent days alone

Together the two partition any candidate set exactly.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from datetime import date
from typing import TYPE_CHECKING

from compactline.models import CompactionOperation
from compactline.partitions import compare_partitions_desc
from compactline.strategies.base import StrategyDefaults
from compactline.strategies.windowing import (
    PartitionPolicy,
    older_than_recent_window,
    rank_partitions,
    window_partitions,
    within_recent_window,
)

if TYPE_CHECKING:
    from compactline.config import CompactionConfig

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


class _CalendarWindowStrategy(StrategyDefaults, ABC):
    """Ranks partitions newest first and keeps those the subclass policy selects."""

    def __init__(self, *, clock: Clock = date.today) -> None:
        self.clock = clock

    def comparator(self, left: str, right: str) -> int:
        return compare_partitions_desc(left, right)

    @abstractmethod
    def policy(self, config: CompactionConfig) -> PartitionPolicy:
        """Build the calendar policy for this run."""

    def order_and_filter(
        self,
        config: CompactionConfig,
        operations: Sequence[CompactionOperation],
        pending_operations: Sequence[CompactionOperation],
    ) -> list[CompactionOperation]:
        del pending_operations
        selected = window_partitions(operations, self.comparator, self.policy(config))
        logger.debug(f"{self.name}: kept {len(selected)} of {len(operations)} candidates")
        return selected

    def filter_partition_paths(
        self, config: CompactionConfig, partition_paths: Sequence[str]
    ) -> list[str]:
        return self.policy(config)(rank_partitions(partition_paths, self.comparator))


class BoundedPartitionAwareCompactionStrategy(_CalendarWindowStrategy):
    """Compact partitions dated on or after ``today - N`` days."""

    name = "bounded_partition_aware"

    def policy(self, config: CompactionConfig) -> PartitionPolicy:
        return within_recent_window(
            config.target_partitions_per_day_based_compaction, self.clock()
        )


class UnBoundedPartitionAwareCompactionStrategy(_CalendarWindowStrategy):
    """Compact every partition older than the bounded window, with no cap on count."""

    name = "unbounded_partition_aware"

    def policy(self, config: CompactionConfig) -> PartitionPolicy:
        return older_than_recent_window(
            config.target_partitions_per_day_based_compaction, self.clock()
        )
