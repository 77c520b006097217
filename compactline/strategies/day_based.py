"""Most-recent-days-first compaction strategy."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from compactline.models import CompactionOperation
from compactline.partitions import compare_partitions_desc
from compactline.strategies.base import StrategyDefaults
from compactline.strategies.windowing import rank_partitions, top_partitions, window_partitions

if TYPE_CHECKING:
    from compactline.config import CompactionConfig


class DayBasedCompactionStrategy(StrategyDefaults):
    """Compact the ``target_partitions_per_day_based_compaction`` latest day partitions.

    Useful when updates concentrate on recent days: each run sweeps the newest
    partitions first and leaves older ones for later runs.
    """

    name = "day_based"

    def comparator(self, left: str, right: str) -> int:
        return compare_partitions_desc(left, right)

    def order_and_filter(
        self,
        config: CompactionConfig,
        operations: Sequence[CompactionOperation],
        pending_operations: Sequence[CompactionOperation],
    ) -> list[CompactionOperation]:
        del pending_operations
        policy = top_partitions(config.target_partitions_per_day_based_compaction)
        return window_partitions(operations, self.comparator, policy)

    def filter_partition_paths(
        self, config: CompactionConfig, partition_paths: Sequence[str]
    ) -> list[str]:
        policy = top_partitions(config.target_partitions_per_day_based_compaction)
        return policy(rank_partitions(partition_paths, self.comparator))
