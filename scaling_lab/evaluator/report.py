"""Result persistence and the console scaling summary."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import structlog

from scaling_lab.common.console import header, section
from scaling_lab.common.constants import RESULTS_PREFIX
from scaling_lab.evaluator.stats import fmt_stat
from scaling_lab.runner.sanitize import sanitize
from scaling_lab.runner.state import HarnessState, Outcome

_log = structlog.get_logger("report")


# ═══════════════════════════════════════════════════════════════════════════════
#  Persistence
# ═══════════════════════════════════════════════════════════════════════════════


def build_payload(state: HarnessState) -> dict:
    """Serialisable view of everything the harness holds right now."""
    return {
        "results": [sanitize(r.to_dict()) for r in state.records],
        "faults": [f.to_dict() for f in state.faults],
        "test_time": round(state.elapsed, 3),
        "timestamp": datetime.now().isoformat(),
    }


def save_results(state: HarnessState, results_dir: Path) -> Outcome[Path]:
    """Write the record sequence to a timestamp-named JSON file.

    A write failure is logged and returned as a failed outcome; the
    in-memory state is left as it was.
    """
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = results_dir / f"{RESULTS_PREFIX}_{stamp}.json"
    try:
        payload = build_payload(state)
        results_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, allow_nan=False))
    except (OSError, TypeError, ValueError) as exc:
        _log.error(
            "results_save_failed",
            path=str(path),
            runs=len(state.records),
            error=str(exc),
            elapsed_seconds=round(state.elapsed, 2),
        )
        return Outcome.failure(str(exc))
    _log.info("results_saved", path=str(path), runs=len(state.records))
    return Outcome.success(path)


def load_results(path: Path) -> dict:
    """Read a results file written by :func:`save_results`."""
    return json.loads(Path(path).read_text())


# ═══════════════════════════════════════════════════════════════════════════════
#  Console summary
# ═══════════════════════════════════════════════════════════════════════════════


def print_summary(results: list[dict], faults: list[dict] | None = None) -> None:
    """Print one block per run, then the cross-run scaling table.

    Takes serialised records (``RunRecord.to_dict()`` shape) so the same
    report renders a live sweep and a results file from disk.
    """
    print(header("UNIFIED INTELLIGENCE SCALING SUMMARY"))
    if not results:
        print("\n  No results to display")
        _print_faults(faults or [])
        return

    for r in results:
        _print_run(r)
    _print_scaling_table(results)
    _print_aggregates(results)
    _print_faults(faults or [])
    print(f"\n{'=' * 70}\n")


def _print_run(r: dict) -> None:
    c = r.get("consciousness", {})
    frameworks = ", ".join(c.get("confirming_frameworks", [])) or "none"
    print(section(r.get("test_name", "?")))
    print(f"  Entities:          {r.get('entity_count', '?')}")
    print(
        f"  Cycles:            {r.get('cycles_completed', 'N/A')}"
        f" / {r.get('planned_cycles', 'N/A')}  ({r.get('status', '?')})"
    )
    print("  Consciousness")
    print(f"    Status:          {'YES' if c.get('is_conscious') else 'NO'}")
    print(f"    Max Φ:           {c.get('max_phi', 0.0):.4f}")
    print(f"    Effective info:  {r.get('effective_information', 0.0):.4f}")
    print(f"    Frameworks:      {frameworks}")
    print(f"  Reasoning acc.:    {r.get('reasoning_accuracy', 0.0):.4f}")
    print(f"  Awareness level:   {r.get('awareness_level', 0.0):.4f}")
    print(f"  Unified score:     {r.get('unified_intelligence_score', 0.0):.4f}")
    print(f"  Patterns:          {r.get('pattern_discoveries', 0)}")
    print(
        f"  Memory (MB):       avg {r.get('avg_memory_mb', 0.0):,.1f}"
        f"  peak {r.get('peak_memory_mb', 0.0):,.1f}"
    )
    if "intelligence_scaling" in r:
        print("  Scaling")
        print(f"    Scale factor:    {r['scale_factor']}x")
        print(f"    Intelligence:    {r['intelligence_scaling']}x")
        print(f"    Memory eff.:     {r['memory_efficiency']}%")
        print(f"    Consciousness:   {r['consciousness_scaling']}x")
        print(f"    Reasoning:       {r['reasoning_scaling']}x")
        print(f"    Awareness:       {r['awareness_scaling']}x")


def _print_scaling_table(results: list[dict]) -> None:
    print(header("SCALING VS BASELINE"))
    print(
        f"\n  {'Entities':>9} {'Cycles':>7} {'UIS':>8} {'Intel×':>8} "
        f"{'MemEff%':>8} {'Φ×':>7} {'Reas×':>7} {'Aware×':>7}"
    )
    print(f"  {'─' * 9} {'─' * 7} {'─' * 8} {'─' * 8} {'─' * 8} {'─' * 7} {'─' * 7} {'─' * 7}")
    for r in results:
        if "intelligence_scaling" in r:
            tail = (
                f"{r['intelligence_scaling']:>8} {r['memory_efficiency']:>8} "
                f"{r['consciousness_scaling']:>7} {r['reasoning_scaling']:>7} "
                f"{r['awareness_scaling']:>7}"
            )
        else:
            tail = f"{'base' if r.get('status') == 'completed' else '—':>8}"
        print(
            f"  {r.get('entity_count', 0):>9} {r.get('cycles_completed', 0):>7} "
            f"{r.get('unified_intelligence_score', 0.0):>8.3f} {tail}"
        )


def _print_aggregates(results: list[dict]) -> None:
    scaled = [r for r in results if "intelligence_scaling" in r]
    if not scaled:
        return
    print(section("Across scaled runs (mean ± σ)"))
    for label, key in (
        ("Intelligence ×", "intelligence_scaling"),
        ("Memory eff. %", "memory_efficiency"),
        ("Consciousness ×", "consciousness_scaling"),
    ):
        print(f"  {label:<18} {fmt_stat([r[key] for r in scaled])}")


def _print_faults(faults: list[dict]) -> None:
    if not faults:
        return
    print(section("Faults"))
    for f in faults:
        print(
            f"  {f.get('entity_count', '?'):>6} entities  "
            f"after {f.get('elapsed_seconds', 0.0)}s: {f.get('error', '?')}"
        )
