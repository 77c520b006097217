"""Identity compaction strategy."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from compactline.models import CompactionOperation
from compactline.strategies.base import StrategyDefaults

if TYPE_CHECKING:
    from compactline.config import CompactionConfig


class UnBoundedCompactionStrategy(StrategyDefaults):
    """Compact every candidate, in the order the caller supplied."""

    name = "unbounded"

    def order_and_filter(
        self,
        config: CompactionConfig,
        operations: Sequence[CompactionOperation],
        pending_operations: Sequence[CompactionOperation],
    ) -> list[CompactionOperation]:
        del config
        del pending_operations
        return list(operations)
