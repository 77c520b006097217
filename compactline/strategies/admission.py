"""Budget-bounded admission of ranked compaction candidates."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from compactline.metrics import Metric
from compactline.models import CompactionOperation

logger = logging.getLogger(__name__)


def admit_within_budget(
    ranked: Iterable[CompactionOperation], budget_mb: int | float | None
) -> list[CompactionOperation]:
    """Admit a prefix of ``ranked`` whose summed TOTAL_IO_MB first reaches the budget.

    The candidate whose cost makes the running sum reach or exceed the budget
    is still admitted and is the last one. This keeps a plan non-empty even
    when a single file group already costs more than the whole budget.

    Args:
        ranked: Candidates in admission order
        budget_mb: I/O budget in MB; None admits every candidate

    Returns:
        Admitted candidates, in admission order
    """
    if budget_mb is None:
        return list(ranked)

    admitted: list[CompactionOperation] = []
    running_io_mb = 0.0
    for op in ranked:
        running_io_mb += op.metric(Metric.TOTAL_IO_MB)
        admitted.append(op)
        if running_io_mb >= budget_mb:
            logger.debug(
                f"I/O budget of {budget_mb} MB reached at {running_io_mb:.1f} MB "
                f"after {len(admitted)} operation(s)"
            )
            break
    return admitted
