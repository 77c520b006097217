"""Base protocol for compaction strategies.

A strategy is a pure decision policy over already-discovered candidates:

- ``capture_metrics`` computes the cost metrics of one file group
- ``order_and_filter`` selects and reorders candidates for one plan
- ``comparator`` is the total order over partition paths the strategy ranks by
- ``filter_partition_paths`` lets the caller prune partitions before discovery

Contract:
- No I/O and no mutation of inputs
- ``order_and_filter`` returns a subset of its ``operations`` argument
- Empty input yields empty output
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from compactline.metrics import capture_metrics
from compactline.models import BaseFile, CompactionOperation, LogFile
from compactline.partitions import compare_partitions_asc

if TYPE_CHECKING:
    from compactline.config import CompactionConfig


@runtime_checkable
class CompactionStrategy(Protocol):
    """Protocol for pluggable compaction selection policies."""

    @property
    def name(self) -> str:
        """Unique registry name (e.g. 'bounded_io')."""
        ...

    def capture_metrics(
        self,
        config: CompactionConfig,
        base_file: BaseFile | None,
        partition_path: str,
        log_files: Sequence[LogFile],
    ) -> dict[str, float]:
        """Compute the metric vocabulary for one candidate file group."""
        ...

    def order_and_filter(
        self,
        config: CompactionConfig,
        operations: Sequence[CompactionOperation],
        pending_operations: Sequence[CompactionOperation],
    ) -> list[CompactionOperation]:
        """Select and order the candidates that make up one compaction plan."""
        ...

    def comparator(self, left: str, right: str) -> int:
        """Compare two partition paths (negative when ``left`` ranks first)."""
        ...

    def filter_partition_paths(
        self, config: CompactionConfig, partition_paths: Sequence[str]
    ) -> list[str]:
        """Prune partition paths before file groups are discovered."""
        ...


class StrategyDefaults:
    """Default implementations shared by the built-in strategies."""

    name = "default"

    def capture_metrics(
        self,
        config: CompactionConfig,
        base_file: BaseFile | None,
        partition_path: str,
        log_files: Sequence[LogFile],
    ) -> dict[str, float]:
        del config
        del partition_path
        return capture_metrics(base_file, log_files)

    def comparator(self, left: str, right: str) -> int:
        return compare_partitions_asc(left, right)

    def filter_partition_paths(
        self, config: CompactionConfig, partition_paths: Sequence[str]
    ) -> list[str]:
        del config
        return list(partition_paths)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
