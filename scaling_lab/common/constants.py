"""Shared constants for the scaling harness."""

from pathlib import Path

# Project root = scaling-lab/
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Output paths
RESULTS_DIR = PROJECT_ROOT / "results"
RESULTS_PREFIX = "unified_intelligence_scaling"

# ── Sweep (single source of truth) ───────────────────────────────────────────
SWEEP_SIZES = (32, 64, 256, 1024, 2048)   # strictly increasing
BASE_CYCLES = 50                          # anchors every planner call

# Snapshot cadence: every N cycles, tighter for large workloads
SNAPSHOT_EVERY = 10
SNAPSHOT_EVERY_LARGE = 5
LARGE_WORKLOAD = 1000

# Single-machine default, independent of workload size
MEMORY_CEILING_MB = 16000.0

# ── Workload population ──────────────────────────────────────────────────────
DOMAINS = (
    "physical",
    "temporal",
    "semantic",
    "network",
    "spatial",
    "emotional",
    "social",
    "creative",
)
BASE_FREQUENCY = 0.02
FREQUENCY_STEP = 0.0005
