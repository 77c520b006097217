"""``compactline plan``: select and order compaction operations."""

from __future__ import annotations

import argparse


def register(subparsers: argparse._SubParsersAction) -> None:
    from compactline.cli._output import FORMATS

    p = subparsers.add_parser("plan", help="Build a compaction plan from discovered file groups")
    p.add_argument("candidates", help="JSON file with 'candidates' (and optional 'pending')")
    p.add_argument("--strategy", default=None, help="Strategy name (see `compactline strategies`)")
    p.add_argument("--target-io-mb", type=int, default=None, help="I/O budget per plan in MB")
    p.add_argument(
        "--target-partitions",
        type=int,
        default=None,
        help="Partition/day window for day-based strategies",
    )
    p.add_argument(
        "--log-size-threshold-mb",
        type=float,
        default=None,
        help="Minimum total log size for the log_file_size strategy",
    )
    p.add_argument("--format", choices=FORMATS, default="table", help="Output format (default: table)")
    p.add_argument("--output", default=None, help="Write the plan to a file instead of stdout")
    p.set_defaults(handler=_handle)


def _handle(args: argparse.Namespace) -> int:
    from compactline.cli._output import write_plan
    from compactline.config import load_compaction_config
    from compactline.planner import load_candidates, plan_file_groups

    config = load_compaction_config(
        args.config,
        compaction_strategy=args.strategy,
        target_io_per_compaction_mb=args.target_io_mb,
        target_partitions_per_day_based_compaction=args.target_partitions,
        log_file_size_threshold_mb=args.log_size_threshold_mb,
    )
    try:
        candidates, pending = load_candidates(args.candidates)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"candidates file not found: {args.candidates}") from exc

    plan = plan_file_groups(config, candidates, pending)
    write_plan(plan, fmt=args.format, output=args.output)
    return 0
