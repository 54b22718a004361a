"""Single-run executor: populate, drive, snapshot, finalise."""

from __future__ import annotations

import time

from scaling_lab.common.constants import (
    BASE_FREQUENCY,
    DOMAINS,
    FREQUENCY_STEP,
    LARGE_WORKLOAD,
    SNAPSHOT_EVERY,
    SNAPSHOT_EVERY_LARGE,
)
from scaling_lab.common.logging import EventLog
from scaling_lab.runner.engine import EngineFactory, PhaseNetwork, SimulationEngine
from scaling_lab.runner.memory import MemoryMonitor
from scaling_lab.runner.sanitize import sanitize
from scaling_lab.runner.state import (
    Consciousness,
    HarnessState,
    MetricsSnapshot,
    RunRecord,
    RunStatus,
)

PRIMARY_METRICS = (
    "unified_intelligence_score",
    "reasoning_accuracy",
    "awareness_level",
    "effective_information",
    "pattern_discoveries",
    "consciousness",
)


def snapshot_every(size: int) -> int:
    return SNAPSHOT_EVERY_LARGE if size > LARGE_WORKLOAD else SNAPSHOT_EVERY


def workload(size: int) -> list[tuple[str, str, float]]:
    """Deterministic ``(entity_id, domain, frequency)`` rows for *size* entities.

    Domains are assigned round-robin; ids are the domain abbreviation plus
    the zero-padded 1-based index, e.g. ``"PHY-001"``.
    """
    rows = []
    for i in range(1, size + 1):
        domain = DOMAINS[(i - 1) % len(DOMAINS)]
        frequency = BASE_FREQUENCY + i * FREQUENCY_STEP
        rows.append((f"{domain[:3].upper()}-{i:03d}", domain, frequency))
    return rows


def populate(engine: SimulationEngine, size: int) -> None:
    for entity_id, domain, frequency in workload(size):
        engine.add_entity(entity_id, domain, frequency)


def execute_run(
    state: HarnessState,
    size: int,
    budget: int,
    *,
    engine_factory: EngineFactory = PhaseNetwork,
    monitor: MemoryMonitor | None = None,
    log: EventLog | None = None,
) -> RunRecord:
    """Run one workload size for up to *budget* cycles and record it.

    The finished record is appended to *state* and returned.  Exceptions
    raised by the engine propagate to the caller untouched.
    """
    monitor = monitor or MemoryMonitor()
    log = log or EventLog("executor")
    started = time.monotonic()
    every = snapshot_every(size)

    engine = engine_factory()
    populate(engine, size)
    log.info("run_started", entities=size, budget=budget, snapshot_every=every)

    snapshots: list[dict] = []
    status = RunStatus.COMPLETED
    for cycle in range(1, budget + 1):
        step = engine.step()
        if cycle % every != 0:
            continue

        memory_mb = monitor.sample()
        snap = MetricsSnapshot(
            cycle=cycle,
            metrics=engine.metrics(),
            step_insights=int(step.get("insights", 0)),
            new_patterns=int(step.get("new_patterns", 0)),
            memory_mb=memory_mb,
        )
        snapshots.append(sanitize(snap.to_dict()))

        if monitor.is_over_ceiling(memory_mb):
            status = RunStatus.MEMORY_LIMITED
            log.warning(
                "memory_ceiling_reached",
                entities=size,
                cycle=cycle,
                memory_mb=round(memory_mb, 1),
                ceiling_mb=monitor.ceiling_mb,
                elapsed_seconds=round(time.monotonic() - started, 2),
            )
            break

    final = sanitize(engine.metrics())
    memory = [s["memory_mb"] for s in snapshots]

    record = RunRecord(
        test_name=f"unified_{size}_entities",
        entity_count=size,
        planned_cycles=budget,
        cycles_completed=snapshots[-1]["cycle"] if snapshots else 0,
        unified_intelligence_score=float(final.get("unified_intelligence_score", 0.0)),
        reasoning_accuracy=float(final.get("reasoning_accuracy", 0.0)),
        awareness_level=float(final.get("awareness_level", 0.0)),
        effective_information=float(final.get("effective_information", 0.0)),
        pattern_discoveries=int(final.get("pattern_discoveries", 0)),
        consciousness=Consciousness.from_dict(final.get("consciousness", {})),
        avg_memory_mb=sum(memory) / len(memory) if memory else 0.0,
        peak_memory_mb=max(memory) if memory else 0.0,
        status=status,
        elapsed_seconds=round(time.monotonic() - started, 3),
        snapshots=snapshots,
        extra={k: v for k, v in final.items() if k not in PRIMARY_METRICS},
    )
    state.add(record)

    log.info(
        "run_finished",
        entities=size,
        status=record.status.value,
        cycles_completed=record.cycles_completed,
        uis=round(record.unified_intelligence_score, 3),
        reasoning=round(record.reasoning_accuracy, 3),
        max_phi=round(record.consciousness.max_phi, 3),
        elapsed_seconds=record.elapsed_seconds,
    )
    return record
