"""Shared fakes for harness tests."""

from __future__ import annotations

import pytest

from scaling_lab.common.logging import EventLog
from scaling_lab.runner.state import HarnessState


class FakeEngine:
    """Deterministic engine: metrics grow with population and steps."""

    def __init__(self, score_per_entity: float = 0.01) -> None:
        self.entities: list[tuple[str, str, float]] = []
        self.steps = 0
        self.score_per_entity = score_per_entity

    def add_entity(self, entity_id: str, domain: str, frequency: float) -> None:
        self.entities.append((entity_id, domain, frequency))

    def step(self) -> dict:
        self.steps += 1
        return {"insights": 2, "new_patterns": 1}

    def metrics(self) -> dict:
        n = len(self.entities)
        return {
            "unified_intelligence_score": n * self.score_per_entity,
            "reasoning_accuracy": 0.5,
            "awareness_level": 0.4,
            "effective_information": 1.25,
            "pattern_discoveries": self.steps,
            "consciousness": {
                "is_conscious": n >= 64,
                "max_phi": 0.2,
                "confirming_frameworks": ["IIT"] if n >= 64 else [],
            },
            "coherence": float("nan"),
        }


class FaultyEngine(FakeEngine):
    def __init__(self, fail_after: int = 3) -> None:
        super().__init__()
        self.fail_after = fail_after

    def step(self) -> dict:
        if self.steps >= self.fail_after:
            raise RuntimeError("engine diverged")
        return super().step()


class FakeMonitor:
    """Replays a fixed list of memory samples (last one repeats)."""

    def __init__(self, samples: list[float] | None = None, ceiling_mb: float = 16000.0) -> None:
        self.samples = list(samples or [100.0])
        self.ceiling_mb = ceiling_mb
        self.calls = 0

    def sample(self) -> float:
        value = self.samples[min(self.calls, len(self.samples) - 1)]
        self.calls += 1
        return value

    def is_over_ceiling(self, sample_mb: float) -> bool:
        return sample_mb > self.ceiling_mb


@pytest.fixture
def state() -> HarnessState:
    return HarnessState()


@pytest.fixture
def log() -> EventLog:
    return EventLog("test")
