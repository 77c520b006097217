"""Pluggable compaction selection strategies."""

from compactline.strategies.admission import admit_within_budget
from compactline.strategies.base import CompactionStrategy, StrategyDefaults
from compactline.strategies.bounded_io import BoundedIOCompactionStrategy
from compactline.strategies.day_based import DayBasedCompactionStrategy
from compactline.strategies.log_file_size import LogFileSizeBasedCompactionStrategy
from compactline.strategies.partition_aware import (
    BoundedPartitionAwareCompactionStrategy,
    UnBoundedPartitionAwareCompactionStrategy,
)
from compactline.strategies.registry import (
    get_strategy,
    list_strategies,
    register_strategy,
    resolve_strategy,
)
from compactline.strategies.unbounded import UnBoundedCompactionStrategy
from compactline.strategies.windowing import window_partitions

__all__ = [
    "BoundedIOCompactionStrategy",
    "BoundedPartitionAwareCompactionStrategy",
    "CompactionStrategy",
    "DayBasedCompactionStrategy",
    "LogFileSizeBasedCompactionStrategy",
    "StrategyDefaults",
    "UnBoundedCompactionStrategy",
    "UnBoundedPartitionAwareCompactionStrategy",
    "admit_within_budget",
    "get_strategy",
    "list_strategies",
    "register_strategy",
    "resolve_strategy",
    "window_partitions",
]
