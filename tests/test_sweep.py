"""Tests for the scaling sweep controller and baseline annotation."""

import pytest

from conftest import FakeEngine, FaultyEngine, FakeMonitor
from scaling_lab.runner.state import (
    SCALING_FIELDS,
    Consciousness,
    RunRecord,
    RunStatus,
)
from scaling_lab.runner.sweep import annotate_scaling, run_sweep


def _record(size, *, score=1.0, memory=100.0, phi=0.5, reasoning=0.5,
            awareness=0.5, status=RunStatus.COMPLETED):
    return RunRecord(
        test_name=f"unified_{size}_entities",
        entity_count=size,
        planned_cycles=50,
        cycles_completed=50,
        unified_intelligence_score=score,
        reasoning_accuracy=reasoning,
        awareness_level=awareness,
        effective_information=1.0,
        pattern_discoveries=3,
        consciousness=Consciousness(is_conscious=True, max_phi=phi),
        avg_memory_mb=memory,
        peak_memory_mb=memory,
        status=status,
    )


class TestRunSweep:
    def test_two_size_sweep(self, state, log):
        records = run_sweep(
            state, sizes=(32, 64), engine_factory=FakeEngine, monitor=FakeMonitor(), log=log,
        )
        assert len(records) == 2
        assert state.records == records
        base, second = records
        assert base.scaling == {}
        assert set(second.scaling) == set(SCALING_FIELDS)
        assert second.scaling["scale_factor"] == 2.0
        assert second.scaling["intelligence_scaling"] == pytest.approx(1.0)
        assert second.scaling["memory_efficiency"] == pytest.approx(50.0)
        assert second.scaling["consciousness_scaling"] == pytest.approx(1.0)
        assert second.scaling["reasoning_scaling"] == pytest.approx(1.0)
        assert second.scaling["awareness_scaling"] == pytest.approx(1.0)

    def test_every_later_completed_record_is_annotated(self, state, log):
        records = run_sweep(
            state, sizes=(32, 64, 256), engine_factory=FakeEngine, monitor=FakeMonitor(), log=log,
        )
        assert [r.entity_count for r in records] == [32, 64, 256]
        assert records[0].scaling == {}
        assert all(r.scaling for r in records[1:])
        assert records[2].scaling["scale_factor"] == 8.0

    def test_linear_memory_gives_zero_efficiency(self, state, log):
        monitor = FakeMonitor([100.0] * 5 + [200.0] * 5)
        records = run_sweep(
            state, sizes=(32, 64), engine_factory=FakeEngine, monitor=monitor, log=log,
        )
        assert records[1].scaling["memory_efficiency"] == 0.0

    def test_engine_fault_stops_sweep_and_keeps_prior_records(self, state, log):
        made = []

        def factory():
            engine = FaultyEngine() if len(made) == 2 else FakeEngine()
            made.append(engine)
            return engine

        records = run_sweep(
            state, sizes=(32, 64, 256, 1024), engine_factory=factory,
            monitor=FakeMonitor(), log=log,
        )
        assert [r.entity_count for r in records] == [32, 64]
        assert len(made) == 3
        assert len(state.faults) == 1
        assert state.faults[0].entity_count == 256
        assert "engine diverged" in state.faults[0].error
        assert records[1].scaling

    def test_memory_limited_run_ends_sweep_unannotated(self, state, log):
        monitor = FakeMonitor([100.0] * 5 + [20000.0])
        records = run_sweep(
            state, sizes=(32, 64, 256), engine_factory=FakeEngine, monitor=monitor, log=log,
        )
        assert [r.entity_count for r in records] == [32, 64]
        assert records[1].status is RunStatus.MEMORY_LIMITED
        assert records[1].cycles_completed == 10
        assert records[1].scaling == {}

    def test_sizes_must_increase(self, state, log):
        with pytest.raises(ValueError):
            run_sweep(state, sizes=(64, 32), engine_factory=FakeEngine,
                      monitor=FakeMonitor(), log=log)


class TestAnnotateScaling:
    def test_single_record_untouched(self):
        records = [_record(32)]
        annotate_scaling(records)
        assert records[0].scaling == {}

    def test_super_linear_intelligence(self):
        records = [_record(32, score=1.0), _record(64, score=3.0)]
        annotate_scaling(records)
        assert records[1].scaling["intelligence_scaling"] == 1.5

    def test_zero_baseline_score_degrades_to_zero(self):
        records = [_record(32, score=0.0), _record(64, score=1.0)]
        annotate_scaling(records)
        assert records[1].scaling["intelligence_scaling"] == 0.0

    def test_zero_baseline_memory_degrades_to_zero(self):
        records = [_record(32, memory=0.0), _record(64, memory=50.0)]
        annotate_scaling(records)
        assert records[1].scaling["memory_efficiency"] == 0.0

    def test_ratio_baselines_floored(self):
        records = [
            _record(32, phi=0.0, reasoning=0.0, awareness=0.001),
            _record(64, phi=0.2, reasoning=0.05, awareness=0.1),
        ]
        annotate_scaling(records)
        scaling = records[1].scaling
        assert scaling["consciousness_scaling"] == 20.0
        assert scaling["reasoning_scaling"] == 5.0
        assert scaling["awareness_scaling"] == 10.0

    def test_failed_record_not_annotated(self):
        records = [
            _record(32),
            _record(64),
            _record(256, status=RunStatus.MEMORY_LIMITED),
        ]
        annotate_scaling(records)
        assert records[1].scaling
        assert records[2].scaling == {}

    def test_serialised_record_carries_scaling_fields(self):
        records = [_record(32), _record(64, memory=150.0)]
        annotate_scaling(records)
        data = records[1].to_dict()
        for key in SCALING_FIELDS:
            assert key in data
        assert data["memory_efficiency"] == 25.0
        assert "intelligence_scaling" not in records[0].to_dict()
