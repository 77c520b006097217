from __future__ import annotations

import copy
import dataclasses
import pickle

import pytest

from compactline.metrics import Metric
from compactline.models import BaseFile, CompactionOperation, CompactionPlan, LogFile


def _operation(file_id: str = "fg-1", io_mb: float = 10.0) -> CompactionOperation:
    return CompactionOperation.from_file_group(
        partition_path="2024/01/02",
        file_id=file_id,
        base_instant_time="100",
        base_file=BaseFile(path="/t/base.parquet", file_id=file_id, commit_time="100", file_size_bytes=1),
        log_files=[LogFile(path="/t/.log.1", file_size_bytes=1), LogFile(path="/t/.log.2", file_size_bytes=1)],
        metrics={Metric.TOTAL_IO_MB.value: io_mb},
    )


def test_from_file_group_keeps_log_order_and_base_path() -> None:
    op = _operation()

    assert op.log_file_paths == ("/t/.log.1", "/t/.log.2")
    assert op.base_file_path == "/t/base.parquet"
    assert op.file_group == ("2024/01/02", "fg-1")


def test_log_only_file_group_is_valid() -> None:
    op = CompactionOperation.from_file_group(
        partition_path="2024/01/02",
        file_id="fg-logs",
        base_instant_time="100",
        base_file=None,
        log_files=[LogFile(path="/t/.log.1", file_size_bytes=10)],
        metrics={},
    )

    assert op.base_file_path is None
    assert op.metric(Metric.TOTAL_IO_MB) == 0.0


def test_operation_is_immutable() -> None:
    op = _operation()

    with pytest.raises(dataclasses.FrozenInstanceError):
        op.file_id = "other"  # type: ignore[misc]
    with pytest.raises(TypeError):
        op.metrics[Metric.TOTAL_IO_MB.value] = 0.0  # type: ignore[index]


def test_metrics_are_copied_on_construction() -> None:
    source = {Metric.TOTAL_IO_MB.value: 5.0}
    op = CompactionOperation(partition_path="p", file_id="f", base_instant_time="1", metrics=source)

    source[Metric.TOTAL_IO_MB.value] = 99.0

    assert op.metric(Metric.TOTAL_IO_MB) == 5.0


def test_operation_survives_pickle_and_deepcopy() -> None:
    op = _operation(io_mb=42.0)

    for clone in (pickle.loads(pickle.dumps(op)), copy.deepcopy(op)):
        assert clone == op
        assert clone.metric(Metric.TOTAL_IO_MB) == 42.0
        with pytest.raises(TypeError):
            clone.metrics[Metric.TOTAL_IO_MB.value] = 0.0  # type: ignore[index]


def test_operation_asdict_exposes_metrics() -> None:
    payload = dataclasses.asdict(_operation(io_mb=7.5))

    assert payload["metrics"] == {Metric.TOTAL_IO_MB.value: 7.5}
    assert payload["log_file_paths"] == ("/t/.log.1", "/t/.log.2")


def test_operations_compare_and_hash_by_value() -> None:
    assert _operation() == _operation()
    assert hash(_operation()) == hash(_operation())
    assert _operation(io_mb=1.0) != _operation(io_mb=2.0)


def test_plan_totals() -> None:
    plan = CompactionPlan(
        strategy="bounded_io",
        operations=(_operation("a", 390.0), _operation("b", 220.0)),
        candidate_count=4,
    )

    assert len(plan) == 2
    assert plan.total_io_mb == 610.0
    assert plan.file_ids == ("a", "b")
    assert plan.excluded_pending == 0
