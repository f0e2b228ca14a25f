#!/usr/bin/env python3
"""Snapshot NuGet download counts for a package family.

Usage:
    python nuget_trends.py                          # Discover "cerbi*" packages
    python nuget_trends.py --query acme --prefix acme.
    python nuget_trends.py --strategy exact --packages packages.json
    python nuget_trends.py --data-dir out --max-offset 4000
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional

# Add scripts directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from collectors.base import BaseCollector
from collectors.nuget import NuGetClient, NuGetError
from collectors.nuget_exact import NuGetExactCollector
from collectors.nuget_search import NuGetSearchCollector
from storage import append_history, load_id_list, write_daily_snapshot

STRATEGIES = ["search", "exact"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Snapshot NuGet download counts for a package family",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s                                  # Bulk discovery via search
    %(prog)s --strategy exact                 # Look up ids from packages.json
    %(prog)s --blocklist skip.json            # Use a different blocklist
        """,
    )
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default="search",
        help="Discovery strategy (default: search)",
    )
    parser.add_argument(
        "--query",
        default="cerbi",
        help="Search term used for discovery (default: cerbi)",
    )
    parser.add_argument(
        "--prefix",
        default="cerbi",
        help="Package id prefix that defines the family (default: cerbi)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("data"),
        help="Output directory (default: data)",
    )
    parser.add_argument(
        "--history-name",
        default="nuget_daily_totals",
        help="Name of the rolling history CSV, without extension",
    )
    parser.add_argument(
        "--overrides",
        type=Path,
        default=Path("packages.override.json"),
        help="JSON array of ids to always track",
    )
    parser.add_argument(
        "--blocklist",
        type=Path,
        default=Path("packages.blocklist.json"),
        help="JSON array of ids to never track",
    )
    parser.add_argument(
        "--packages",
        type=Path,
        default=Path("packages.json"),
        help="JSON array of ids for the exact strategy",
    )
    parser.add_argument(
        "--service-index",
        default=NuGetClient.SERVICE_INDEX_URL,
        help="NuGet v3 service index URL",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=NuGetClient.PAGE_SIZE,
        help=f"Search page size (default: {NuGetClient.PAGE_SIZE})",
    )
    parser.add_argument(
        "--max-offset",
        type=int,
        default=NuGetClient.MAX_OFFSET,
        help=f"Stop paging past this offset (default: {NuGetClient.MAX_OFFSET})",
    )
    return parser


def make_collector(args: argparse.Namespace) -> BaseCollector:
    """Build the collector selected on the command line."""
    overrides = load_id_list(args.overrides)
    blocklist = load_id_list(args.blocklist)

    if args.strategy == "exact":
        return NuGetExactCollector(
            load_id_list(args.packages),
            overrides=overrides,
            blocklist=blocklist,
            service_index_url=args.service_index,
        )

    return NuGetSearchCollector(
        query=args.query,
        prefix=args.prefix,
        overrides=overrides,
        blocklist=blocklist,
        service_index_url=args.service_index,
        page_size=args.page_size,
        max_offset=args.max_offset,
    )


def main(argv: Optional[list[str]] = None, today: Optional[date] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        collector = make_collector(args)
        snapshot = collector.run(today=today)
    except (NuGetError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    daily_path = write_daily_snapshot(snapshot, args.data_dir)
    csv_path = args.data_dir / f"{args.history_name}.csv"
    rows = append_history(snapshot, csv_path)

    if isinstance(collector, NuGetSearchCollector):
        print(f"Discovered {collector.discovered_count} {args.prefix} packages")
    print(f"Tracking {len(snapshot.packages)} packages after merge/blocklist")
    print(f"Wrote {daily_path}")
    print(f"Appended {rows} rows to {csv_path}")

    if collector.warnings or collector.errors:
        print(f"\n{'='*60}")
        print("SUMMARY")
        print(f"{'='*60}")
        for warning in collector.warnings:
            print(f"  WARNING: {warning}")
        for error in collector.errors:
            print(f"  ERROR: {error}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
