"""Main orchestration script for the steward tracker."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import Config
from .models import RunReport
from .pipeline import PipelineOrchestrator, Variant

STATUS_MARKERS = {
    "record_written": "***",
    "snapshot_only": " - ",
    "unchanged": "   ",
    "failed": "ERR",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="steward-tracker",
        description="Check tracked AI platform and government policy pages for changes.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        choices=["platforms", "policies", "all"],
        default="all",
        help="Which source list to check (default: all)",
    )
    parser.add_argument("--work-dir", type=Path, help="Directory holding data/ and snapshots/")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_report(report: RunReport) -> None:
    """Print a per-URL outcome summary."""
    print("\n" + "=" * 60)
    print(f"SUMMARY ({report.kind})")
    print("=" * 60)
    print(f"URLs checked: {len(report.outcomes)}")
    print(f"Updates recorded: {report.records_written}")
    print(f"Changed but not reported: {report.count('snapshot_only')}")
    print(f"Unchanged: {report.count('unchanged')}")
    print(f"Failed: {len(report.failures)}")

    print("\nAll URLs:")
    for outcome in report.outcomes:
        marker = STATUS_MARKERS[outcome.status]
        line = f"  {marker} {outcome.source_name[:30]:<30} | {outcome.url}"
        if outcome.error:
            line += f" ({outcome.error})"
        print(line)


async def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the steward tracker. Returns a process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("AI STEWARD TRACKER")
    print(f"Started at: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}")
    print("=" * 60)

    config = Config.from_env()
    if args.work_dir:
        config = dataclasses.replace(config, work_dir=args.work_dir)

    for warning in config.validate():
        print(f"WARNING: {warning}")

    variants = []
    if args.target in ("platforms", "all"):
        variants.append(Variant.platforms(config))
    if args.target in ("policies", "all"):
        variants.append(Variant.policies(config))

    config.data_dir.mkdir(parents=True, exist_ok=True)

    for variant in variants:
        print(f"\nStarting {variant.category} check...")
        orchestrator = PipelineOrchestrator.from_config(config, variant)
        try:
            report = await orchestrator.run()
        finally:
            await orchestrator.aclose()
        print_report(report)

    print("\n" + "=" * 60)
    print(f"Completed at: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}")
    print("=" * 60)
    return 0


def cli() -> None:
    try:
        code = asyncio.run(main())
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    cli()
