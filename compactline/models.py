"""File group and compaction plan models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from compactline.metrics import Metric


class MetricsView(dict):
    """Read-only metrics mapping that pickles, copies and ``asdict``s as a dict."""

    def _read_only(self, *args, **kwargs):
        raise TypeError("compaction metrics are read-only")

    __setitem__ = __delitem__ = __ior__ = _read_only
    clear = pop = popitem = setdefault = update = _read_only

    def __reduce__(self):
        return (type(self), (dict(self),))


@dataclass(frozen=True)
class BaseFile:
    path: str
    file_id: str
    commit_time: str
    file_size_bytes: int


@dataclass(frozen=True)
class LogFile:
    path: str
    file_size_bytes: int


@dataclass(frozen=True)
class CompactionOperation:
    """Planning-time descriptor of one file group considered for compaction.

    ``metrics`` is computed once by a strategy's ``capture_metrics`` and is
    exposed as a read-only mapping. ``base_file_path`` is ``None`` for
    log-only file groups.
    """

    partition_path: str
    file_id: str
    base_instant_time: str
    log_file_paths: tuple[str, ...] = ()
    base_file_path: str | None = None
    metrics: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_file_paths", tuple(self.log_file_paths))
        object.__setattr__(self, "metrics", MetricsView(self.metrics))

    @classmethod
    def from_file_group(
        cls,
        *,
        partition_path: str,
        file_id: str,
        base_instant_time: str,
        base_file: BaseFile | None,
        log_files: Sequence[LogFile],
        metrics: Mapping[str, float],
    ) -> CompactionOperation:
        return cls(
            partition_path=partition_path,
            file_id=file_id,
            base_instant_time=base_instant_time,
            log_file_paths=tuple(log.path for log in log_files),
            base_file_path=base_file.path if base_file is not None else None,
            metrics=metrics,
        )

    @property
    def file_group(self) -> tuple[str, str]:
        return (self.partition_path, self.file_id)

    def metric(self, key: str) -> float:
        """Return a metric value, treating an absent key as zero."""
        return float(self.metrics.get(key, 0.0))


@dataclass(frozen=True)
class CompactionPlan:
    strategy: str
    operations: tuple[CompactionOperation, ...]
    candidate_count: int
    excluded_pending: int = 0

    @property
    def total_io_mb(self) -> float:
        return sum(op.metric(Metric.TOTAL_IO_MB) for op in self.operations)

    @property
    def file_ids(self) -> tuple[str, ...]:
        return tuple(op.file_id for op in self.operations)

    def __len__(self) -> int:
        return len(self.operations)
