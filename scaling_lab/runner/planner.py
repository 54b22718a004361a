"""Adaptive cycle budgets per workload size."""

from __future__ import annotations

import math

MIN_MID_CYCLES = 30
MID_SCALE_BOOST = 2.0
LARGE_CYCLES = 20
HUGE_CYCLES = 10


def plan_cycles(size: int, base_cycles: int) -> int:
    """Return how many cycles a run of *size* entities gets.

    Small workloads keep the full *base_cycles*.  Up to 2048 entities the
    budget shrinks roughly inverse to size but never below 30; beyond
    that it is a flat smoke-level budget.
    """
    if size <= 64:
        return base_cycles
    if size <= 2048:
        return max(MIN_MID_CYCLES, math.floor(base_cycles * (64 / size) * MID_SCALE_BOOST))
    if size <= 100_000:
        return LARGE_CYCLES
    return HUGE_CYCLES
