"""Scaling charts rendered from a results file (matplotlib)."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import matplotlib.ticker as ticker  # noqa: E402
import numpy as np  # noqa: E402

COLOR_SCORE = "#2980b9"
COLOR_PHI = "#8e44ad"
COLOR_MEM = "#e74c3c"
COLOR_LINEAR = "#7f8c8d"

RATIO_KEYS = [
    ("intelligence_scaling", "Intelligence"),
    ("consciousness_scaling", "Consciousness (Φ)"),
    ("reasoning_scaling", "Reasoning"),
    ("awareness_scaling", "Awareness"),
]


def _sizes(results: list[dict]) -> np.ndarray:
    return np.array([r["entity_count"] for r in results], dtype=float)


def _log2_axis(ax) -> None:
    ax.set_xscale("log", base=2)
    ax.xaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: f"{x:,.0f}"))
    ax.grid(True, alpha=0.3)


def plot_quality(results: list[dict], out_path: Path) -> Path:
    """Unified score and max Φ against workload size."""
    x = _sizes(results)
    fig, ax = plt.subplots(figsize=(9, 4.5))
    ax.plot(x, [r["unified_intelligence_score"] for r in results],
            marker="o", color=COLOR_SCORE, linewidth=2, label="Unified score")
    ax.plot(x, [r["consciousness"]["max_phi"] for r in results],
            marker="s", color=COLOR_PHI, linewidth=2, label="Max Φ")
    _log2_axis(ax)
    ax.set_xlabel("Entities", fontsize=11)
    ax.set_ylabel("Value", fontsize=11)
    ax.set_title("Outcome quality vs workload size", fontsize=13)
    ax.legend(fontsize=10)
    fig.tight_layout()
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def plot_memory(results: list[dict], out_path: Path) -> Path:
    """Average/peak memory with the naive linear projection from the baseline."""
    x = _sizes(results)
    avg = np.array([r["avg_memory_mb"] for r in results], dtype=float)
    peak = np.array([r["peak_memory_mb"] for r in results], dtype=float)

    fig, ax = plt.subplots(figsize=(9, 4.5))
    ax.plot(x, avg, marker="o", color=COLOR_MEM, linewidth=2, label="Average")
    ax.fill_between(x, avg, peak, color=COLOR_MEM, alpha=0.15, label="Average → peak")
    if len(x):
        ax.plot(x, avg[0] * x / x[0], linestyle="--", color=COLOR_LINEAR,
                linewidth=1.2, label="Linear from baseline")
    _log2_axis(ax)
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda y, _: f"{y:,.0f}"))
    ax.set_xlabel("Entities", fontsize=11)
    ax.set_ylabel("Memory (MB)", fontsize=11)
    ax.set_title("Memory cost vs workload size", fontsize=13)
    ax.legend(fontsize=10)
    fig.tight_layout()
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def plot_ratios(results: list[dict], out_path: Path) -> Path:
    """Grouped bars of each scaling ratio per annotated run."""
    scaled = [r for r in results if "intelligence_scaling" in r]
    fig, ax = plt.subplots(figsize=(10, 4.5))
    idx = np.arange(len(scaled))
    width = 0.8 / len(RATIO_KEYS)
    for i, (key, label) in enumerate(RATIO_KEYS):
        ax.bar(idx + i * width, [r[key] for r in scaled], width,
               label=label, edgecolor="black", linewidth=0.5)
    ax.axhline(1.0, color=COLOR_LINEAR, linewidth=1, linestyle="--")
    ax.set_xticks(idx + width * (len(RATIO_KEYS) - 1) / 2)
    ax.set_xticklabels([f"{r['entity_count']:,}" for r in scaled])
    ax.set_xlabel("Entities", fontsize=11)
    ax.set_ylabel("Ratio to baseline", fontsize=11)
    ax.set_title("Scaling relative to baseline", fontsize=13)
    ax.grid(True, axis="y", alpha=0.3)
    ax.legend(fontsize=9, ncol=2)
    fig.tight_layout()
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def render_all(results: list[dict], out_dir: Path) -> list[Path]:
    """Write every chart the results support into *out_dir*."""
    out_dir.mkdir(parents=True, exist_ok=True)
    if not results:
        return []
    written = [
        plot_quality(results, out_dir / "quality.png"),
        plot_memory(results, out_dir / "memory.png"),
    ]
    if any("intelligence_scaling" in r for r in results):
        written.append(plot_ratios(results, out_dir / "scaling_ratios.png"))
    return written
