"""Basic numeric helpers for scaling metrics (stdlib only)."""

from __future__ import annotations

import math


def safe_div(a: float, b: float) -> float:
    """``a / b``, or ``0.0`` when *b* is zero.

    Scaling ratios are diagnostic, so a zero baseline degrades silently.
    """
    return 0.0 if b == 0 else a / b


def mean(v: list[float | int]) -> float:
    return sum(v) / len(v) if v else 0.0


def stdev(v: list[float | int]) -> float:
    if len(v) < 2:
        return 0.0
    m = mean(v)
    return math.sqrt(sum((x - m) ** 2 for x in v) / (len(v) - 1))


def fmt_stat(v: list[float | int]) -> str:
    """Compact stats: mean +/- sigma  [min, max]  (n=...)."""
    if not v:
        return "—"
    return (
        f"{mean(v):,.3f} ± {stdev(v):,.3f}"
        f"  [min={min(v):,.3f}, max={max(v):,.3f}]"
        f"  (n={len(v)})"
    )
