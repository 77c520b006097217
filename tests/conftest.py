from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date

import pytest

from compactline.config import CompactionConfig
from compactline.models import BaseFile, CompactionOperation, LogFile
from compactline.partitions import date_at_offset_from_today, format_partition_date
from compactline.strategies.base import CompactionStrategy

MB = 1024 * 1024

FIXED_TODAY = date(2024, 3, 15)

# (base file size MB, log file sizes MB), ordered by base size descending.
SIZES: list[tuple[int, list[int]]] = [
    (120, [60, 10, 80]),
    (110, []),
    (100, [1]),
    (90, [1024]),
]

OperationFactory = Callable[..., list[CompactionOperation]]


def base_file(size_mb: int, *, file_id: str) -> BaseFile:
    return BaseFile(
        path=f"/tmp/table/{file_id}_1-0-1_100.parquet",
        file_id=file_id,
        commit_time="100",
        file_size_bytes=size_mb * MB,
    )


def log_files(sizes_mb: Sequence[int], *, file_id: str) -> list[LogFile]:
    return [
        LogFile(path=f"/tmp/table/.{file_id}_100.log.{i}", file_size_bytes=size * MB)
        for i, size in enumerate(sizes_mb, start=1)
    ]


@pytest.fixture
def make_operations() -> OperationFactory:
    """Build one CompactionOperation per (base, logs) entry, metrics captured by ``strategy``."""

    def _make(
        strategy: CompactionStrategy,
        config: CompactionConfig,
        sizes: Sequence[tuple[int, list[int]]] = SIZES,
        partitions: Sequence[str] | None = None,
    ) -> list[CompactionOperation]:
        operations = []
        for idx, (base_mb, logs_mb) in enumerate(sizes):
            file_id = f"fg-{base_mb}"
            partition_path = partitions[idx] if partitions is not None else "2017/01/01"
            base = base_file(base_mb, file_id=file_id)
            logs = log_files(logs_mb, file_id=file_id)
            operations.append(
                CompactionOperation.from_file_group(
                    partition_path=partition_path,
                    file_id=file_id,
                    base_instant_time=base.commit_time,
                    base_file=base,
                    log_files=logs,
                    metrics=strategy.capture_metrics(config, base, partition_path, logs),
                )
            )
        return operations

    return _make


@pytest.fixture
def fixed_today() -> date:
    return FIXED_TODAY


@pytest.fixture
def day_partition() -> Callable[[int], str]:
    """Format the partition path ``offset`` days away from FIXED_TODAY."""

    def _partition(offset: int) -> str:
        return format_partition_date(date_at_offset_from_today(offset, today=FIXED_TODAY))

    return _partition
