"""Metric vocabulary attached to every compaction candidate.

Keys and MB semantics are a stable contract: monitoring and cost estimation
read them off returned operations regardless of the strategy that produced
the plan.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from compactline.models import BaseFile, LogFile

BYTES_PER_MB = 1024 * 1024


class Metric(str, Enum):
    TOTAL_LOG_FILES = "TOTAL_LOG_FILES"
    TOTAL_LOG_FILE_SIZE = "TOTAL_LOG_FILE_SIZE"
    TOTAL_IO_MB = "TOTAL_IO_MB"
    TOTAL_IO_READ_MB = "TOTAL_IO_READ_MB"
    TOTAL_IO_WRITE_MB = "TOTAL_IO_WRITE_MB"


def size_in_mb(size_bytes: int) -> float:
    """Normalize a byte count to megabytes (1 MB = 1024 * 1024 bytes)."""
    return size_bytes / BYTES_PER_MB


def total_log_file_size_bytes(log_files: Sequence[LogFile]) -> int:
    # Negative sizes mark files whose length is not known yet.
    return sum(log.file_size_bytes for log in log_files if log.file_size_bytes >= 0)


def capture_metrics(base_file: BaseFile | None, log_files: Sequence[LogFile]) -> dict[str, float]:
    """Compute the cost metrics of compacting one file group.

    Reading costs the base file plus every log file; writing costs roughly one
    base file, so the total I/O is ``2 * base + sum(logs)``. A file group
    without a base file (log-only) counts its base size as zero.

    Args:
        base_file: Current base file of the group, if any
        log_files: Log files written since the base file

    Returns:
        Mapping of ``Metric`` value -> numeric value
    """
    base_bytes = base_file.file_size_bytes if base_file is not None else 0
    log_bytes = total_log_file_size_bytes(log_files)

    io_read_mb = size_in_mb(base_bytes + log_bytes)
    io_write_mb = size_in_mb(base_bytes)

    return {
        Metric.TOTAL_IO_READ_MB.value: io_read_mb,
        Metric.TOTAL_IO_WRITE_MB.value: io_write_mb,
        Metric.TOTAL_IO_MB.value: io_read_mb + io_write_mb,
        Metric.TOTAL_LOG_FILE_SIZE.value: size_in_mb(log_bytes),
        Metric.TOTAL_LOG_FILES.value: float(len(log_files)),
    }


__all__ = [
    "BYTES_PER_MB",
    "Metric",
    "capture_metrics",
    "size_in_mb",
    "total_log_file_size_bytes",
]
