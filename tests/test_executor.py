"""Tests for the single-run executor."""

import pytest

from conftest import FakeEngine, FaultyEngine, FakeMonitor
from scaling_lab.common.constants import DOMAINS
from scaling_lab.runner.executor import execute_run, snapshot_every, workload
from scaling_lab.runner.state import RunStatus


def _factory(engines):
    def make():
        engine = FakeEngine()
        engines.append(engine)
        return engine
    return make


class TestWorkload:
    def test_round_robin_domains_and_ids(self):
        rows = workload(10)
        assert [r[0] for r in rows[:3]] == ["PHY-001", "TEM-002", "SEM-003"]
        assert rows[8][0] == "PHY-009"
        assert [r[1] for r in rows[:8]] == list(DOMAINS)

    def test_frequency_increases_with_position(self):
        freqs = [r[2] for r in workload(20)]
        assert freqs == sorted(freqs)
        assert freqs[0] == pytest.approx(0.0205)

    def test_deterministic(self):
        assert workload(64) == workload(64)
        assert len(workload(1500)) == 1500
        assert workload(1500)[-1][0] == "NET-1500"

    def test_snapshot_cadence(self):
        assert snapshot_every(1000) == 10
        assert snapshot_every(1001) == 5


class TestExecuteRun:
    def test_full_run(self, state, log):
        engines = []
        record = execute_run(
            state, 32, 50, engine_factory=_factory(engines), monitor=FakeMonitor(), log=log,
        )
        assert record.status is RunStatus.COMPLETED
        assert record.cycles_completed == 50
        assert record.planned_cycles == 50
        assert record.test_name == "unified_32_entities"
        assert len(record.snapshots) == 5
        assert [s["cycle"] for s in record.snapshots] == [10, 20, 30, 40, 50]
        assert engines[0].steps == 50
        assert len(engines[0].entities) == 32
        assert state.records == [record]

    def test_final_metrics_populate_primary_fields(self, state, log):
        record = execute_run(
            state, 64, 20, engine_factory=FakeEngine, monitor=FakeMonitor(), log=log,
        )
        assert record.unified_intelligence_score == pytest.approx(0.64)
        assert record.pattern_discoveries == 20
        assert record.consciousness.is_conscious is True
        assert record.consciousness.confirming_frameworks == ["IIT"]

    def test_non_finite_metrics_are_sanitized(self, state, log):
        record = execute_run(
            state, 8, 10, engine_factory=FakeEngine, monitor=FakeMonitor(), log=log,
        )
        assert record.extra["coherence"] == 0.0
        assert record.snapshots[0]["coherence"] == 0.0

    def test_memory_average_and_peak(self, state, log):
        monitor = FakeMonitor([100.0, 300.0, 200.0])
        record = execute_run(state, 16, 30, engine_factory=FakeEngine, monitor=monitor, log=log)
        assert record.avg_memory_mb == pytest.approx(200.0)
        assert record.peak_memory_mb == 300.0

    def test_large_workload_snapshots_every_five(self, state, log):
        record = execute_run(
            state, 1200, 20, engine_factory=FakeEngine, monitor=FakeMonitor(), log=log,
        )
        assert [s["cycle"] for s in record.snapshots] == [5, 10, 15, 20]

    def test_ceiling_on_third_snapshot_truncates_run(self, state, log):
        engines = []
        monitor = FakeMonitor([100.0, 200.0, 20000.0, 100.0])
        record = execute_run(
            state, 32, 50, engine_factory=_factory(engines), monitor=monitor, log=log,
        )
        assert record.cycles_completed == 30
        assert record.cycles_completed < record.planned_cycles
        assert record.status is RunStatus.MEMORY_LIMITED
        assert engines[0].steps == 30
        assert monitor.calls == 3
        assert record.peak_memory_mb == 20000.0

    def test_no_snapshots(self, state, log):
        record = execute_run(
            state, 32, 5, engine_factory=FakeEngine, monitor=FakeMonitor(), log=log,
        )
        assert record.cycles_completed == 0
        assert record.avg_memory_mb == 0.0
        assert record.peak_memory_mb == 0.0
        assert record.snapshots == []

    def test_engine_fault_propagates(self, state, log):
        with pytest.raises(RuntimeError, match="diverged"):
            execute_run(state, 32, 50, engine_factory=FaultyEngine, monitor=FakeMonitor(), log=log)
        assert state.records == []
