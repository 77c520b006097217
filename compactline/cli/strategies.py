"""``compactline strategies``: list registered compaction strategies."""

from __future__ import annotations

import argparse


def register(subparsers: argparse._SubParsersAction) -> None:
    from compactline.cli._output import FORMATS

    p = subparsers.add_parser("strategies", help="List available compaction strategies")
    p.add_argument("--format", choices=FORMATS, default="table", help="Output format (default: table)")
    p.set_defaults(handler=_handle)


def _handle(args: argparse.Namespace) -> int:
    import sys

    import polars as pl

    from compactline.cli._output import render_frame
    from compactline.strategies.registry import get_strategy, list_strategies

    strategies = [get_strategy(name) for name in list_strategies()]
    frame = pl.DataFrame(
        {
            "name": [s.name for s in strategies],
            "class": [type(s).__name__ for s in strategies],
            "description": [((type(s).__doc__ or "").strip().splitlines() or [""])[0] for s in strategies],
        },
        schema={"name": pl.Utf8, "class": pl.Utf8, "description": pl.Utf8},
    )
    render_frame(frame, args.format, sys.stdout)
    return 0
