"""Run records, snapshots, and the per-invocation harness state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

SCALING_FIELDS = (
    "scale_factor",
    "intelligence_scaling",
    "memory_efficiency",
    "consciousness_scaling",
    "reasoning_scaling",
    "awareness_scaling",
)


class RunStatus(str, Enum):
    COMPLETED = "completed"
    MEMORY_LIMITED = "memory_limited"


@dataclass
class Consciousness:
    """Nested consciousness sub-record reported by the engine."""

    is_conscious: bool = False
    max_phi: float = 0.0
    confirming_frameworks: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Consciousness:
        return cls(
            is_conscious=bool(data.get("is_conscious", False)),
            max_phi=float(data.get("max_phi", 0.0)),
            confirming_frameworks=[str(f) for f in data.get("confirming_frameworks", [])],
        )

    def to_dict(self) -> dict:
        return {
            "is_conscious": self.is_conscious,
            "max_phi": self.max_phi,
            "confirming_frameworks": list(self.confirming_frameworks),
        }


@dataclass
class MetricsSnapshot:
    """Point-in-time capture taken every Nth cycle of a run."""

    cycle: int
    metrics: dict[str, Any]
    step_insights: int
    new_patterns: int
    memory_mb: float

    def to_dict(self) -> dict:
        return {
            **self.metrics,
            "cycle": self.cycle,
            "step_insights": self.step_insights,
            "new_patterns": self.new_patterns,
            "memory_mb": self.memory_mb,
        }


@dataclass
class RunRecord:
    """Finalised result of one workload size.

    Built once at the end of a run.  Only the sweep controller touches it
    afterwards, to attach the baseline-relative scaling fields.
    """

    test_name: str                 # e.g. "unified_256_entities"
    entity_count: int
    planned_cycles: int
    cycles_completed: int
    unified_intelligence_score: float
    reasoning_accuracy: float
    awareness_level: float
    effective_information: float
    pattern_discoveries: int
    consciousness: Consciousness
    avg_memory_mb: float
    peak_memory_mb: float
    status: RunStatus = RunStatus.COMPLETED
    elapsed_seconds: float = 0.0
    snapshots: list[dict] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    scaling: dict[str, float] = field(default_factory=dict)

    @property
    def completed(self) -> bool:
        return self.status == RunStatus.COMPLETED

    def to_dict(self) -> dict:
        return {
            **self.extra,
            "test_name": self.test_name,
            "entity_count": self.entity_count,
            "planned_cycles": self.planned_cycles,
            "cycles_completed": self.cycles_completed,
            "unified_intelligence_score": self.unified_intelligence_score,
            "reasoning_accuracy": self.reasoning_accuracy,
            "awareness_level": self.awareness_level,
            "effective_information": self.effective_information,
            "pattern_discoveries": self.pattern_discoveries,
            "consciousness": self.consciousness.to_dict(),
            "avg_memory_mb": self.avg_memory_mb,
            "peak_memory_mb": self.peak_memory_mb,
            "status": self.status.value,
            "elapsed_seconds": self.elapsed_seconds,
            "snapshots": list(self.snapshots),
            **self.scaling,
        }


@dataclass
class Fault:
    """An engine fault that ended the sweep."""

    entity_count: int
    error: str
    elapsed_seconds: float

    def to_dict(self) -> dict:
        return {
            "entity_count": self.entity_count,
            "error": self.error,
            "elapsed_seconds": self.elapsed_seconds,
        }


@dataclass
class HarnessState:
    """Everything one invocation accumulates.

    Created once per invocation, appended to by the executor, and
    serialised at the end of the run (or on a fatal fault).
    """

    records: list[RunRecord] = field(default_factory=list)
    faults: list[Fault] = field(default_factory=list)
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time

    def add(self, record: RunRecord) -> None:
        self.records.append(record)


@dataclass
class Outcome(Generic[T]):
    """Success/failure result handed back by a guarded stage."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> Outcome[T]:
        return cls(error=error)
