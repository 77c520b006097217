from __future__ import annotations

import json

import pytest

from compactline.cli import main

MB = 1024 * 1024


def _write_candidates(tmp_path, partitions=None, pending=None):
    sizes = [(120, [60, 10, 80]), (110, []), (100, [1]), (90, [1024])]
    partitions = partitions or ["2024/01/02"] * len(sizes)
    candidates = [
        {
            "partition_path": partitions[i],
            "file_id": f"fg-{base}",
            "base_instant_time": "100",
            "base_file": {"path": f"/t/fg-{base}.parquet", "file_size_bytes": base * MB},
            "log_files": [
                {"path": f"/t/.fg-{base}.log.{n}", "file_size_bytes": size * MB}
                for n, size in enumerate(logs)
            ],
        }
        for i, (base, logs) in enumerate(sizes)
    ]
    path = tmp_path / "candidates.json"
    path.write_text(json.dumps({"candidates": candidates, "pending": pending or []}), encoding="utf-8")
    return path


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "missing-config.toml")


def test_strategies_lists_registered_names(capsys, config_path):
    exit_code = main(["--config", config_path, "strategies"])

    assert exit_code == 0
    out = capsys.readouterr().out
    for name in ("unbounded", "bounded_io", "log_file_size", "day_based", "bounded_partition_aware"):
        assert name in out
    assert "BoundedIOCompactionStrategy" in out


def test_plan_bounded_io_json_output(tmp_path, capsys, config_path):
    path = _write_candidates(tmp_path)

    exit_code = main(
        [
            "--config",
            config_path,
            "plan",
            str(path),
            "--strategy",
            "bounded_io",
            "--target-io-mb",
            "400",
            "--format",
            "json",
        ]
    )

    assert exit_code == 0
    rows = json.loads(capsys.readouterr().out)
    assert [row["file_id"] for row in rows] == ["fg-120", "fg-110"]
    assert rows[-1]["cumulative_io_mb"] == 610.0


def test_plan_table_output_reports_summary(tmp_path, capsys, config_path):
    path = _write_candidates(
        tmp_path, pending=[{"partition_path": "2024/01/02", "file_id": "fg-120"}]
    )

    exit_code = main(["--config", config_path, "plan", str(path), "--strategy", "unbounded"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Strategy:   unbounded" in out
    assert "Candidates: 4" in out
    assert "Pending:    1" in out
    assert "Selected:   3" in out
    assert "By partition:" in out


def test_plan_reads_strategy_from_config_file(tmp_path, capsys):
    config = tmp_path / "config.toml"
    config.write_text(
        '[compaction]\ncompaction_strategy = "log_file_size"\ntarget_io_per_compaction_mb = 400\n',
        encoding="utf-8",
    )
    path = _write_candidates(tmp_path)

    exit_code = main(["--config", str(config), "plan", str(path), "--format", "csv"])

    assert exit_code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("rank,partition_path,file_id")
    assert len(lines) == 2
    assert "fg-90" in lines[1]


def test_plan_writes_output_file(tmp_path, config_path):
    path = _write_candidates(tmp_path)
    output = tmp_path / "plan.json"

    exit_code = main(
        ["--config", config_path, "plan", str(path), "--strategy", "unbounded", "--format", "json", "--output", str(output)]
    )

    assert exit_code == 0
    assert len(json.loads(output.read_text(encoding="utf-8"))) == 4


def test_plan_unknown_strategy_is_user_error(tmp_path, capsys, config_path):
    path = _write_candidates(tmp_path)

    exit_code = main(["--config", config_path, "plan", str(path), "--strategy", "bounded_ioo"])

    assert exit_code == 1
    assert "Did you mean" in capsys.readouterr().out


def test_plan_negative_budget_is_user_error(tmp_path, capsys, config_path):
    path = _write_candidates(tmp_path)

    exit_code = main(
        ["--config", config_path, "plan", str(path), "--strategy", "bounded_io", "--target-io-mb", "-1"]
    )

    assert exit_code == 1
    assert "must be >= 0" in capsys.readouterr().out


def test_plan_missing_candidates_file(tmp_path, capsys, config_path):
    exit_code = main(["--config", config_path, "plan", str(tmp_path / "nope.json")])

    assert exit_code == 1
    assert "candidates file not found" in capsys.readouterr().out


def test_plan_unparsable_partition_date_is_data_error(tmp_path, capsys, config_path):
    path = _write_candidates(tmp_path, partitions=["2024/01/02", "region=us", "2024/01/01", "2024/01/01"])

    exit_code = main(
        ["--config", config_path, "plan", str(path), "--strategy", "day_based", "--target-partitions", "1"]
    )

    assert exit_code == 2
    assert "Invalid partition date format" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_plan_accepts_null_pending(tmp_path, capsys, config_path):
    path = tmp_path / "candidates.json"
    path.write_text(
        json.dumps(
            {
                "candidates": [{"partition_path": "2024/01/02", "file_id": "fg-1", "log_files": None}],
                "pending": None,
            }
        ),
        encoding="utf-8",
    )

    exit_code = main(["--config", config_path, "plan", str(path), "--strategy", "unbounded", "--format", "json"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)[0]["file_id"] == "fg-1"


def test_plan_malformed_pending_is_data_error(tmp_path, capsys, config_path):
    path = tmp_path / "candidates.json"
    path.write_text(json.dumps({"candidates": [], "pending": {"file_id": "fg-0"}}), encoding="utf-8")

    exit_code = main(["--config", config_path, "plan", str(path)])

    assert exit_code == 2
    assert "'pending' must be an array" in capsys.readouterr().out


def test_strategies_json_output(capsys, config_path):
    exit_code = main(["--config", config_path, "strategies", "--format", "json"])

    assert exit_code == 0
    rows = {row["name"]: row for row in json.loads(capsys.readouterr().out)}
    assert rows["day_based"]["class"] == "DayBasedCompactionStrategy"
    assert rows["unbounded_partition_aware"]["description"]


def test_plan_table_output_with_empty_selection(tmp_path, capsys, config_path):
    path = _write_candidates(tmp_path)

    exit_code = main(
        [
            "--config", config_path, "plan", str(path),
            "--strategy", "log_file_size", "--log-size-threshold-mb", "100000",
        ]
    )

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Selected:   0" in out
    assert "By partition:" not in out
