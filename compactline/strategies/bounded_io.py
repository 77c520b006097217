"""I/O-bounded compaction strategy."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from compactline.models import CompactionOperation
from compactline.strategies.admission import admit_within_budget
from compactline.strategies.base import StrategyDefaults

if TYPE_CHECKING:
    from compactline.config import CompactionConfig

logger = logging.getLogger(__name__)


class BoundedIOCompactionStrategy(StrategyDefaults):
    """Admit candidates in caller order until the per-plan I/O budget is reached."""

    name = "bounded_io"

    def rank(
        self, config: CompactionConfig, operations: Sequence[CompactionOperation]
    ) -> list[CompactionOperation]:
        del config
        return list(operations)

    def order_and_filter(
        self,
        config: CompactionConfig,
        operations: Sequence[CompactionOperation],
        pending_operations: Sequence[CompactionOperation],
    ) -> list[CompactionOperation]:
        del pending_operations
        admitted = admit_within_budget(
            self.rank(config, operations), config.target_io_per_compaction_mb
        )
        logger.debug(f"{self.name}: admitted {len(admitted)} of {len(operations)} candidates")
        return admitted
