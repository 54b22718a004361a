"""Scaling sweep controller.

Architecture:
  1. For each size in the ascending catalogue:
     a. Plan a cycle budget from the fixed base budget
     b. Execute one isolated run (fresh engine)
     c. Stop on the first run that is not ``completed`` or that faults
     d. Offer a reclamation point before the next size
  2. Annotate every later completed record relative to the first one
"""

from __future__ import annotations

import gc
from collections.abc import Sequence

from scaling_lab.common.constants import BASE_CYCLES, SWEEP_SIZES
from scaling_lab.common.logging import EventLog
from scaling_lab.evaluator.stats import safe_div
from scaling_lab.runner.engine import EngineFactory, PhaseNetwork
from scaling_lab.runner.executor import execute_run
from scaling_lab.runner.memory import MemoryMonitor
from scaling_lab.runner.planner import plan_cycles
from scaling_lab.runner.state import Fault, HarnessState, Outcome, RunRecord

RATIO_FLOOR = 0.01


def attempt_run(
    state: HarnessState,
    size: int,
    budget: int,
    *,
    engine_factory: EngineFactory,
    monitor: MemoryMonitor,
    log: EventLog,
) -> Outcome[RunRecord]:
    """Execute one run, turning an engine fault into a failed outcome."""
    try:
        record = execute_run(
            state, size, budget,
            engine_factory=engine_factory, monitor=monitor, log=log,
        )
    except Exception as exc:  # noqa: BLE001
        fault = Fault(
            entity_count=size,
            error=f"{type(exc).__name__}: {exc}",
            elapsed_seconds=round(state.elapsed, 2),
        )
        state.faults.append(fault)
        log.error(
            "run_failed",
            entities=size,
            error=fault.error,
            elapsed_seconds=fault.elapsed_seconds,
            exc_info=True,
        )
        return Outcome.failure(fault.error)
    return Outcome.success(record)


def run_sweep(
    state: HarnessState,
    *,
    sizes: Sequence[int] = SWEEP_SIZES,
    base_cycles: int = BASE_CYCLES,
    engine_factory: EngineFactory = PhaseNetwork,
    monitor: MemoryMonitor | None = None,
    log: EventLog | None = None,
) -> list[RunRecord]:
    """Run the ascending size catalogue and return this sweep's records.

    The list ends with whatever record stopped the sweep (unannotated);
    a faulting run leaves no record, only an entry in ``state.faults``.
    """
    if any(b <= a for a, b in zip(sizes, sizes[1:])):
        raise ValueError(f"sweep sizes must be strictly increasing: {list(sizes)}")

    monitor = monitor or MemoryMonitor()
    log = log or EventLog("sweep")
    log.info("sweep_started", sizes=list(sizes), base_cycles=base_cycles)

    records: list[RunRecord] = []
    for size in sizes:
        budget = plan_cycles(size, base_cycles)
        outcome = attempt_run(
            state, size, budget,
            engine_factory=engine_factory, monitor=monitor, log=log,
        )
        if not outcome.ok:
            log.warning("sweep_stopped", entities=size, reason="engine_fault")
            break

        record = outcome.value
        records.append(record)
        if not record.completed:
            log.warning("sweep_stopped", entities=size, reason=record.status.value)
            break

        gc.collect()

    annotate_scaling(records)
    log.info(
        "sweep_finished",
        runs=len(records),
        faults=len(state.faults),
        elapsed_seconds=round(state.elapsed, 2),
    )
    return records


def annotate_scaling(records: list[RunRecord]) -> None:
    """Attach baseline-relative scaling fields to every later completed run.

    The first completed record is the baseline and is left untouched, as
    is any record that did not complete.
    """
    completed = [r for r in records if r.completed]
    if len(completed) < 2:
        return

    baseline = completed[0]
    for record in completed[1:]:
        scale_factor = record.entity_count / baseline.entity_count
        uis_ratio = safe_div(record.unified_intelligence_score, baseline.unified_intelligence_score)
        expected_memory = baseline.avg_memory_mb * scale_factor
        efficiency = safe_div(expected_memory - record.avg_memory_mb, expected_memory) * 100

        record.scaling = {
            "scale_factor": round(scale_factor, 3),
            "intelligence_scaling": round(safe_div(uis_ratio, scale_factor), 3),
            "memory_efficiency": round(efficiency, 1),
            "consciousness_scaling": round(
                safe_div(
                    record.consciousness.max_phi,
                    max(baseline.consciousness.max_phi, RATIO_FLOOR),
                ),
                3,
            ),
            "reasoning_scaling": round(
                safe_div(record.reasoning_accuracy, max(baseline.reasoning_accuracy, RATIO_FLOOR)),
                3,
            ),
            "awareness_scaling": round(
                safe_div(record.awareness_level, max(baseline.awareness_level, RATIO_FLOOR)),
                3,
            ),
        }
