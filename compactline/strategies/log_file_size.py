"""Largest-log-first compaction strategy."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from compactline.metrics import Metric
from compactline.models import CompactionOperation
from compactline.strategies.admission import admit_within_budget
from compactline.strategies.base import StrategyDefaults

if TYPE_CHECKING:
    from compactline.config import CompactionConfig

logger = logging.getLogger(__name__)


class LogFileSizeBasedCompactionStrategy(StrategyDefaults):
    """Compact the file groups with the most unmerged log data first.

    Candidates whose total log size is below ``log_file_size_threshold_mb`` are
    dropped, the rest are sorted by TOTAL_LOG_FILE_SIZE descending (stable for
    ties) and admitted against the I/O budget.
    """

    name = "log_file_size"

    def rank(
        self, config: CompactionConfig, operations: Sequence[CompactionOperation]
    ) -> list[CompactionOperation]:
        threshold = config.log_file_size_threshold_mb
        eligible = [
            op for op in operations if op.metric(Metric.TOTAL_LOG_FILE_SIZE) >= threshold
        ]
        return sorted(eligible, key=lambda op: op.metric(Metric.TOTAL_LOG_FILE_SIZE), reverse=True)

    def order_and_filter(
        self,
        config: CompactionConfig,
        operations: Sequence[CompactionOperation],
        pending_operations: Sequence[CompactionOperation],
    ) -> list[CompactionOperation]:
        del pending_operations
        ranked = self.rank(config, operations)
        if len(ranked) < len(operations):
            logger.debug(
                f"{self.name}: {len(operations) - len(ranked)} candidate(s) below "
                f"{config.log_file_size_threshold_mb} MB of log data"
            )
        return admit_within_budget(ranked, config.target_io_per_compaction_mb)
