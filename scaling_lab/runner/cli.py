"""CLI entrypoint for the adaptive scaling sweep.

Architecture:
  1. Create a fresh HarnessState (no state survives between invocations)
  2. Run the fixed size catalogue sequentially, one engine per size
  3. Persist every record collected, even after a fatal fault
  4. Print the per-run summary and scaling table
"""

from __future__ import annotations

import argparse
import sys
import textwrap
from datetime import datetime
from pathlib import Path

from scaling_lab.common.console import C, banner, info, ok, warn
from scaling_lab.common.constants import (
    BASE_CYCLES,
    MEMORY_CEILING_MB,
    RESULTS_DIR,
    SWEEP_SIZES,
)
from scaling_lab.common.logging import EventLog, configure_structlog
from scaling_lab.evaluator.report import print_summary, save_results
from scaling_lab.runner.engine import EngineFactory, PhaseNetwork
from scaling_lab.runner.memory import MemoryMonitor
from scaling_lab.runner.planner import plan_cycles
from scaling_lab.runner.state import HarnessState
from scaling_lab.runner.sweep import run_sweep


def run(
    results_dir: Path,
    *,
    sizes=SWEEP_SIZES,
    engine_factory: EngineFactory = PhaseNetwork,
    monitor: MemoryMonitor | None = None,
) -> int:
    """Run the sweep, persist, and report.  Returns the process exit code."""
    state = HarnessState()
    try:
        log = EventLog("sweep", results_dir / "sweep.jsonl")
    except OSError as exc:
        warn(f"Event log unavailable ({exc}); logging to console only")
        log = EventLog("sweep")

    exit_code = 0
    try:
        run_sweep(state, sizes=sizes, engine_factory=engine_factory, monitor=monitor, log=log)
    except Exception as exc:  # noqa: BLE001
        exit_code = 1
        log.error(
            "harness_crashed",
            error=f"{type(exc).__name__}: {exc}",
            runs=len(state.records),
            elapsed_seconds=round(state.elapsed, 2),
            exc_info=True,
        )
        warn(f"Harness crashed: {exc}; saving {len(state.records)} collected run(s)")
    finally:
        saved = save_results(state, results_dir)
        log.close()

    if saved.ok:
        ok(f"Results saved to {saved.value}")
    else:
        exit_code = 1
        warn(f"Could not save results: {saved.error}")
    if state.faults:
        exit_code = 1

    print_summary(
        [r.to_dict() for r in state.records],
        [f.to_dict() for f in state.faults],
    )
    info(f"Total time: {state.elapsed:.1f}s")
    return exit_code


def main() -> None:
    argparse.ArgumentParser(
        description="Adaptive scaling sweep over the unified phase network.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              python3 run_sweep.py           # default sweep, no options
        """),
    ).parse_args()

    configure_structlog()

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_dir = RESULTS_DIR / timestamp

    # ── Banner ───────────────────────────────────────────────────────────
    banner("Unified Intelligence — Adaptive Scaling Sweep")
    plan = ", ".join(f"{s}→{plan_cycles(s, BASE_CYCLES)}" for s in SWEEP_SIZES)
    info(f"Sizes (entities→cycles): {plan}")
    info(f"Memory ceiling: {MEMORY_CEILING_MB:,.0f} MB")
    info(f"Results: {results_dir}")
    print()

    exit_code = run(results_dir)

    print()
    print(f"{C.BOLD}All done.{C.NC}")
    print(f"  Event log:  {results_dir}/sweep.jsonl")
    sys.exit(exit_code)
