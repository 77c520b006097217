"""Scheduler-side wiring: turn discovered file groups into a compaction plan."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from compactline.config import CompactionConfig
from compactline.models import BaseFile, CompactionOperation, CompactionPlan, LogFile
from compactline.strategies.base import CompactionStrategy
from compactline.strategies.registry import resolve_strategy

logger = logging.getLogger(__name__)


class PlanningError(ValueError):
    """Raised when candidates are malformed or a strategy breaks its contract."""


@dataclass(frozen=True)
class FileGroupCandidate:
    """A discovered file group, before metrics are captured."""

    partition_path: str
    file_id: str
    base_instant_time: str
    base_file: BaseFile | None = None
    log_files: tuple[LogFile, ...] = ()


@dataclass(frozen=True)
class PendingFileGroup:
    partition_path: str
    file_id: str


def build_operation(
    strategy: CompactionStrategy,
    config: CompactionConfig,
    *,
    partition_path: str,
    file_id: str,
    base_instant_time: str,
    base_file: BaseFile | None,
    log_files: Sequence[LogFile],
) -> CompactionOperation:
    """Capture metrics once and freeze them into a CompactionOperation."""
    metrics = strategy.capture_metrics(config, base_file, partition_path, log_files)
    return CompactionOperation.from_file_group(
        partition_path=partition_path,
        file_id=file_id,
        base_instant_time=base_instant_time,
        base_file=base_file,
        log_files=log_files,
        metrics=metrics,
    )


def build_operations(
    strategy: CompactionStrategy,
    config: CompactionConfig,
    candidates: Sequence[FileGroupCandidate],
) -> list[CompactionOperation]:
    return [
        build_operation(
            strategy,
            config,
            partition_path=candidate.partition_path,
            file_id=candidate.file_id,
            base_instant_time=candidate.base_instant_time,
            base_file=candidate.base_file,
            log_files=candidate.log_files,
        )
        for candidate in candidates
    ]


def exclude_pending(
    operations: Sequence[CompactionOperation],
    pending: Sequence[CompactionOperation | PendingFileGroup],
) -> list[CompactionOperation]:
    """Drop candidates whose file group is already part of an in-flight compaction."""
    busy = {(p.partition_path, p.file_id) for p in pending}
    return [op for op in operations if op.file_group not in busy]


def generate_plan(
    config: CompactionConfig,
    operations: Sequence[CompactionOperation],
    pending: Sequence[CompactionOperation] = (),
    *,
    strategy: CompactionStrategy | None = None,
) -> CompactionPlan:
    """Run the configured strategy over candidates not already being compacted.

    Raises:
        PlanningError: If the strategy returns operations it was not given
    """
    strategy = strategy or resolve_strategy(config)
    eligible = exclude_pending(operations, pending)
    excluded = len(operations) - len(eligible)
    if excluded:
        logger.info(f"Skipping {excluded} file group(s) with pending compactions")

    selected = strategy.order_and_filter(config, list(eligible), list(pending))

    unexpected = [op for op in selected if op not in eligible]
    if unexpected or len(selected) > len(eligible):
        raise PlanningError(
            f"Strategy '{strategy.name}' returned operations outside its candidate set: "
            f"{[op.file_id for op in unexpected]}"
        )

    plan = CompactionPlan(
        strategy=strategy.name,
        operations=tuple(selected),
        candidate_count=len(operations),
        excluded_pending=excluded,
    )
    logger.info(
        f"Compaction plan ({strategy.name}): {len(plan)} of {len(operations)} operation(s), "
        f"total I/O {plan.total_io_mb:.1f} MB"
    )
    return plan


def _require(record: Any, key: str, where: str) -> Any:
    if not isinstance(record, dict):
        raise PlanningError(f"{where}: expected an object, got {type(record).__name__}")
    if key not in record:
        raise PlanningError(f"{where}: missing required field '{key}'")
    return record[key]


def _optional_list(record: dict[str, Any], key: str, where: str) -> list[Any]:
    value = record.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise PlanningError(f"{where}: '{key}' must be an array, got {type(value).__name__}")
    return value


def _size_bytes(record: Any, where: str) -> int:
    value = _require(record, "file_size_bytes", where)
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise PlanningError(f"{where}: file_size_bytes must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise PlanningError(f"{where}: file_size_bytes must be an integer, got {value!r}") from exc


def _parse_base_file(record: dict[str, Any] | None, *, file_id: str, where: str) -> BaseFile | None:
    if record is None:
        return None
    return BaseFile(
        path=str(_require(record, "path", where)),
        file_id=str(record.get("file_id", file_id)),
        commit_time=str(record.get("commit_time", "")),
        file_size_bytes=_size_bytes(record, where),
    )


def _parse_candidate(record: Any, index: int) -> FileGroupCandidate:
    where = f"candidates[{index}]"
    file_id = str(_require(record, "file_id", where))
    base_file = _parse_base_file(
        record.get("base_file"), file_id=file_id, where=f"{where}.base_file"
    )
    log_files = tuple(
        LogFile(
            path=str(_require(log, "path", f"{where}.log_files[{i}]")),
            file_size_bytes=_size_bytes(log, f"{where}.log_files[{i}]"),
        )
        for i, log in enumerate(_optional_list(record, "log_files", where))
    )
    base_instant_time = record.get("base_instant_time")
    if base_instant_time is None:
        base_instant_time = base_file.commit_time if base_file is not None else ""
    return FileGroupCandidate(
        partition_path=str(_require(record, "partition_path", where)),
        file_id=file_id,
        base_instant_time=str(base_instant_time),
        base_file=base_file,
        log_files=log_files,
    )


def load_candidates(path: str | Path) -> tuple[list[FileGroupCandidate], list[PendingFileGroup]]:
    """Read discovered file groups and pending file groups from a JSON document.

    Expected shape::

        {
          "candidates": [
            {"partition_path": "2024/01/02", "file_id": "fg-1", "base_instant_time": "100",
             "base_file": {"path": "...", "file_size_bytes": 1048576} | null,
             "log_files": [{"path": "...", "file_size_bytes": 2048}]}
          ],
          "pending": [{"partition_path": "2024/01/01", "file_id": "fg-0"}]
        }

    Raises:
        PlanningError: If the document is not valid JSON or has the wrong shape
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PlanningError(f"Invalid candidates JSON in {path}: {exc}") from exc

    if isinstance(payload, list):
        payload = {"candidates": payload}
    if not isinstance(payload, dict) or not isinstance(payload.get("candidates"), list):
        raise PlanningError("Candidates document must be an object with a 'candidates' array")

    candidates = [_parse_candidate(record, i) for i, record in enumerate(payload["candidates"])]
    pending = [
        PendingFileGroup(
            partition_path=str(_require(record, "partition_path", f"pending[{i}]")),
            file_id=str(_require(record, "file_id", f"pending[{i}]")),
        )
        for i, record in enumerate(_optional_list(payload, "pending", "pending"))
    ]
    return candidates, pending


def plan_file_groups(
    config: CompactionConfig,
    candidates: Sequence[FileGroupCandidate],
    pending: Sequence[PendingFileGroup] = (),
) -> CompactionPlan:
    """Capture metrics for discovered file groups and plan them in one call."""
    strategy = resolve_strategy(config)
    operations = build_operations(strategy, config, candidates)
    pending_ops = [
        CompactionOperation(
            partition_path=p.partition_path, file_id=p.file_id, base_instant_time=""
        )
        for p in pending
    ]
    return generate_plan(config, operations, pending_ops, strategy=strategy)
