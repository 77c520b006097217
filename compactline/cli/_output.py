"""Rendering of compaction plans and strategy listings for the CLI."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

import polars as pl

from compactline.models import CompactionPlan
from compactline.report import partition_summary, plan_to_frame

FORMATS = ("table", "csv", "json")


@contextmanager
def _open_sink(output: str | Path | None) -> Iterator[IO[str]]:
    if output is None:
        yield sys.stdout
        return
    with open(output, "w", encoding="utf-8") as handle:
        yield handle


def render_frame(df: pl.DataFrame, fmt: str, sink: IO[str]) -> None:
    if fmt == "table":
        with pl.Config(tbl_rows=-1, tbl_cols=-1, fmt_str_lengths=120, tbl_hide_dataframe_shape=True):
            print(df, file=sink)
    elif fmt == "csv":
        sink.write(df.write_csv())
    elif fmt == "json":
        json.dump(df.to_dicts(), sink, indent=2)
        sink.write("\n")
    else:
        raise ValueError(f"unknown output format '{fmt}', expected one of {', '.join(FORMATS)}")


def write_plan(plan: CompactionPlan, *, fmt: str = "table", output: str | Path | None = None) -> None:
    """Write a plan as rows of operations.

    The table format wraps the rows with a plan summary header and a
    per-partition footer. csv and json carry the operation rows only.
    """
    with _open_sink(output) as sink:
        if fmt != "table":
            render_frame(plan_to_frame(plan), fmt, sink)
            return

        print(f"Strategy:   {plan.strategy}", file=sink)
        print(f"Candidates: {plan.candidate_count}", file=sink)
        print(f"Pending:    {plan.excluded_pending}", file=sink)
        print(f"Selected:   {len(plan)}", file=sink)
        print(f"Total I/O:  {plan.total_io_mb:.1f} MB", file=sink)
        if not plan.operations:
            return
        render_frame(plan_to_frame(plan), fmt, sink)
        print("By partition:", file=sink)
        render_frame(partition_summary(plan), fmt, sink)
