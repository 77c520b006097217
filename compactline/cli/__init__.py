"""compactline CLI: plan compactions from the command line.

Entry point: ``compactline`` console script via ``cli()``.
"""

from __future__ import annotations

import argparse
import logging
import sys


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compactline",
        description="Compaction planning for merge-on-read tables",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the TOML config file. Env: COMPACTLINE_CONFIG",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    from compactline.cli import plan, strategies

    plan.register(sub)
    strategies.register(sub)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _exit_code_for(exc: Exception) -> int | None:
    """Map planning failures to exit codes: 1 for bad input, 2 for bad data."""
    from compactline.config import ConfigError
    from compactline.partitions import PartitionDateError
    from compactline.planner import PlanningError

    if isinstance(exc, (ConfigError, FileNotFoundError)):
        return 1
    if isinstance(exc, (PlanningError, PartitionDateError)):
        return 2
    return None


def main(argv: list[str] | None = None) -> int:
    """Run a ``compactline`` command and return its exit code.

    0 on success, 1 for usage and configuration errors, 2 when the
    candidates document or its partition paths cannot be planned.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "handler", None) is None:
        parser.print_help()
        return 1

    _configure_logging(args.verbose)
    try:
        return args.handler(args)
    except Exception as exc:
        code = _exit_code_for(exc)
        if code is None:
            raise
        print(f"error: {exc}")
        return code


def cli() -> None:  # pragma: no cover
    sys.exit(main())
