"""Simulation engine contract and the bundled phase-network engine.

The harness only ever talks to an engine through :class:`SimulationEngine`:
populate it with ``add_entity``, drive it with ``step`` and read aggregate
results with ``metrics``.  :class:`PhaseNetwork` is a compact Kuramoto
network so the default sweep has something real to drive; its numbers make
no theoretical claim.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Callable, Protocol

import numpy as np

from scaling_lab.common.constants import DOMAINS


class SimulationEngine(Protocol):
    def add_entity(self, entity_id: str, domain: str, frequency: float) -> None: ...

    def step(self) -> dict:
        """Advance one cycle; return ``{"insights": int, "new_patterns": int}``."""
        ...

    def metrics(self) -> dict: ...


EngineFactory = Callable[[], SimulationEngine]


# ── Phase network ────────────────────────────────────────────────────────────

SAME_DOMAIN_COUPLING = 0.08
CROSS_DOMAIN_COUPLING = 0.04
COUPLING_STRENGTH = 0.05
ALIGNMENT_WINDOW = 0.05        # phase distance (in turns) that counts as an insight
REASONING_EVERY = 8
RECENT_INSIGHTS = 10
FREQUENCY_JITTER = 0.002      # per-entity spread around the populated frequency

IIT_THRESHOLD = 0.15
BROWN_THRESHOLD = 0.12
DUALITY_THRESHOLD = 0.10

# (action, complexity); complex cross-domain actions sit at the front
ACTIONS = (
    ("synthesize", 3),
    ("integrate", 3),
    ("coordinate", 2),
    ("balance", 2),
    ("sync", 2),
    ("observe", 1),
    ("adjust", 1),
    ("hold", 1),
)
CROSS_DOMAIN_ACTIONS = {"synthesize", "integrate", "coordinate", "balance", "sync"}


def _safe_log(x: float) -> float:
    return 0.0 if x <= 0 else math.log(x + 1.0)


class PhaseNetwork:
    """Kuramoto phase network with insight, pattern and awareness tracking."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)
        self._domains: list[int] = []
        self._phases = np.empty(0)
        self._natural = np.empty(0)
        self._coupling: np.ndarray | None = None

        self._coherence = 0.0
        self._awareness = 0.5
        self._awareness_history: deque[float] = deque(maxlen=20)
        self._reasoning_history: list[float] = []
        self._effective_info = 0.0
        self._recent: deque[tuple[int, str, int]] = deque(maxlen=RECENT_INSIGHTS)
        self._total_insights = 0
        self._seen_patterns: set[tuple[int, str]] = set()
        self._steps = 0

    # ── Population ──────────────────────────────────────────────────────

    def add_entity(self, entity_id: str, domain: str, frequency: float) -> None:
        self._domains.append(DOMAINS.index(domain))
        self._phases = np.append(self._phases, self._rng.random())
        jitter = self._rng.normal(scale=FREQUENCY_JITTER)
        self._natural = np.append(self._natural, (frequency + jitter) % 1.0)
        self._coupling = None

    def _coupling_matrix(self) -> np.ndarray:
        if self._coupling is None:
            dom = np.asarray(self._domains)
            same = dom[:, None] == dom[None, :]
            k = np.where(same, SAME_DOMAIN_COUPLING, CROSS_DOMAIN_COUPLING)
            np.fill_diagonal(k, 0.0)
            self._coupling = k
        return self._coupling

    # ── Evolution ───────────────────────────────────────────────────────

    def step(self) -> dict:
        n = len(self._domains)
        if n == 0:
            self._steps += 1
            return {"insights": 0, "new_patterns": 0}

        k = self._coupling_matrix()
        self._phases = np.mod(self._phases + self._natural, 1.0)
        diff = self._phases[None, :] - self._phases[:, None]
        weight = k.sum(axis=1)
        pull = np.divide(
            (k * np.sin(2 * np.pi * diff)).sum(axis=1),
            weight,
            out=np.zeros(n),
            where=weight > 0,
        )
        self._phases = np.mod(self._phases + COUPLING_STRENGTH * pull, 1.0)

        order = np.exp(2j * np.pi * self._phases).mean()
        self._coherence = float(abs(order))
        mean_phase = (np.angle(order) / (2 * np.pi)) % 1.0

        if self._steps % REASONING_EVERY == 0:
            self._reasoning_history.append(self._reasoning_trial())

        self._awareness = 0.8 * self._awareness + 0.2 * self._coherence
        self._awareness_history.append(self._awareness)

        distance = np.abs(self._phases - mean_phase)
        distance = np.minimum(distance, 1.0 - distance)
        aligned = np.flatnonzero(distance < ALIGNMENT_WINDOW)

        new_patterns = 0
        for idx in aligned:
            bucket = int(self._phases[idx] * len(ACTIONS)) % len(ACTIONS)
            action, complexity = ACTIONS[bucket]
            domain = self._domains[idx]
            self._recent.append((domain, action, complexity))
            if (domain, action) not in self._seen_patterns:
                self._seen_patterns.add((domain, action))
                new_patterns += 1
        self._total_insights += len(aligned)

        active_domains = len({self._domains[i] for i in aligned})
        self._effective_info = self._coherence * math.log2(1 + active_domains)
        self._steps += 1
        return {"insights": int(len(aligned)), "new_patterns": new_patterns}

    def _reasoning_trial(self, points: int = 12, dims: int = 4) -> float:
        """Recover a random linear map from noisy samples; 1.0 is perfect."""
        x = self._rng.normal(size=(points, dims))
        w = self._rng.normal(size=dims)
        noise = (1.0 - self._coherence) * 0.5 + 0.05
        y = x @ w + self._rng.normal(scale=noise, size=points)
        w_hat, *_ = np.linalg.lstsq(x, y, rcond=None)
        return float(1.0 / (1.0 + np.linalg.norm(w_hat - w)))

    # ── Aggregate metrics ───────────────────────────────────────────────

    def metrics(self) -> dict:
        n = len(self._domains)
        recent = list(self._recent)
        if recent:
            insight_quality = sum(1 for _, _, c in recent if c >= 2) / len(recent)
            cross_domain = sum(1 for _, a, _ in recent if a in CROSS_DOMAIN_ACTIONS) / len(recent)
        else:
            insight_quality = cross_domain = 0.0

        reasoning = float(np.mean(self._reasoning_history[-5:])) if self._reasoning_history else 0.0
        consciousness = self._assess(n, insight_quality, cross_domain)
        coverage = len(self._seen_patterns) / (len(DOMAINS) * len(ACTIONS))
        stability = (
            1.0 - float(np.std(self._awareness_history)) if len(self._awareness_history) > 1 else 0.0
        )

        unified = (
            consciousness["max_phi"] * 0.25
            + reasoning * 0.25
            + self._awareness * 0.20
            + coverage * 0.15
            + insight_quality * 0.15
        )
        return {
            "entity_count": n,
            "coherence": round(self._coherence, 4),
            "total_insights": self._total_insights,
            "insight_quality": round(insight_quality, 4),
            "cross_domain_ratio": round(cross_domain, 4),
            "awareness_stability": round(stability, 4),
            "unified_intelligence_score": unified if math.isfinite(unified) else 0.0,
            "reasoning_accuracy": reasoning,
            "awareness_level": self._awareness,
            "effective_information": self._effective_info,
            "pattern_discoveries": len(self._seen_patterns),
            "consciousness": consciousness,
        }

    def _assess(self, n: int, quality: float, cross_domain: float) -> dict:
        coherence = max(self._coherence, 0.01)
        ei = max(self._effective_info, 0.01)
        quality = max(quality, 0.01)
        cross_domain = max(cross_domain, 0.01)
        insights = self._total_insights

        integration = coherence * ei * 1.5
        complexity = _safe_log(insights + 1) / max(_safe_log(n + 10), 1e-9) * 1.3
        iit = integration * complexity * cross_domain * 1.2 * 1.8
        iit = max(0.0, min(iit * min(_safe_log(n + 1) / 4.5, 1.3), 1.5))

        density = insights / max(n, 1)
        brown = (
            math.sqrt(max(coherence * quality, 0.01)) * 2.8
            * min(_safe_log(density + 1) / 1.8, 1.8)
            * coherence * cross_domain * quality * 1.5
        )
        brown_scale = 1.6 if n < 50 else 1.3 if n < 100 else 1.0
        brown = max(0.0, min(brown * brown_scale, 1.5))

        harmonic = 2 * iit * brown / (iit + brown + 0.001)
        duality = harmonic * 0.3 + (iit + brown) / 2.0 * 0.3 + max(iit, brown) * 0.4

        frameworks = []
        if iit > IIT_THRESHOLD:
            frameworks.append("IIT")
        if brown > BROWN_THRESHOLD:
            frameworks.append("Brown")
        if duality > DUALITY_THRESHOLD:
            frameworks.append("Duality")
        return {
            "is_conscious": bool(frameworks),
            "max_phi": max(iit, brown, duality),
            "iit_phi": iit,
            "brown_phi": brown,
            "confirming_frameworks": frameworks,
        }
