"""Tabular summaries of compaction plans."""

from __future__ import annotations

import polars as pl

from compactline.metrics import Metric
from compactline.models import CompactionPlan

PLAN_SCHEMA = {
    "rank": pl.Int64,
    "partition_path": pl.Utf8,
    "file_id": pl.Utf8,
    "base_instant_time": pl.Utf8,
    "log_files": pl.Int64,
    "total_log_file_size_mb": pl.Float64,
    "total_io_mb": pl.Float64,
}


def plan_to_frame(plan: CompactionPlan) -> pl.DataFrame:
    """One row per admitted operation, in execution order, with a running I/O total."""
    rows = [
        {
            "rank": rank,
            "partition_path": op.partition_path,
            "file_id": op.file_id,
            "base_instant_time": op.base_instant_time,
            "log_files": len(op.log_file_paths),
            "total_log_file_size_mb": op.metric(Metric.TOTAL_LOG_FILE_SIZE),
            "total_io_mb": op.metric(Metric.TOTAL_IO_MB),
        }
        for rank, op in enumerate(plan.operations, start=1)
    ]
    return pl.DataFrame(rows, schema=PLAN_SCHEMA).with_columns(
        pl.col("total_io_mb").cum_sum().alias("cumulative_io_mb")
    )


def partition_summary(plan: CompactionPlan) -> pl.DataFrame:
    """Per-partition operation counts and I/O, in plan order."""
    return (
        plan_to_frame(plan)
        .group_by("partition_path", maintain_order=True)
        .agg(
            pl.len().alias("operations"),
            pl.col("total_io_mb").sum().alias("total_io_mb"),
        )
    )
