"""CLI entrypoint for re-reporting a saved sweep."""

from __future__ import annotations

import argparse
from pathlib import Path

from scaling_lab.common.console import ok
from scaling_lab.evaluator.charts import render_all
from scaling_lab.evaluator.report import load_results, print_summary


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Print the scaling summary for a saved results file.",
        epilog="Example: %(prog)s results/20260101_120000/unified_intelligence_scaling_*.json --charts graphs",
    )
    parser.add_argument("results_file", help="JSON file written by run_sweep.py")
    parser.add_argument(
        "--charts",
        metavar="DIR",
        default=None,
        help="Also render PNG scaling charts into DIR",
    )
    args = parser.parse_args()

    path = Path(args.results_file)
    if not path.is_file():
        parser.error(f"results file not found: {path}")

    data = load_results(path)
    results = data.get("results", [])
    print(f"\n  Source:     {path}")
    print(f"  Timestamp:  {data.get('timestamp', '?')}")
    print(f"  Test time:  {data.get('test_time', 0.0):.1f}s")
    print_summary(results, data.get("faults", []))

    if args.charts:
        for chart in render_all(results, Path(args.charts)):
            ok(f"Chart written: {chart}")
