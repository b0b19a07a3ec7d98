"""
src/data/degradation.py
───────────────────────
Fault signature models superimposed on synthetic vibration records.

Modes implemented:
  bearing      — periodic impacts at a bearing defect frequency, exciting a
                 damped structural resonance
  misalignment — strong 2× running-speed component

Amplitude of each signature scales with the degradation stage.
"""
from __future__ import annotations

from enum import Enum

import numpy as np


class DegradationStage(str, Enum):
    HEALTHY = "healthy"
    INCIPIENT = "incipient"
    MODERATE = "moderate"
    SEVERE = "severe"
    CRITICAL = "critical"


STAGE_SEVERITY: dict[DegradationStage, float] = {
    DegradationStage.HEALTHY: 0.0,
    DegradationStage.INCIPIENT: 0.15,
    DegradationStage.MODERATE: 0.35,
    DegradationStage.SEVERE: 0.65,
    DegradationStage.CRITICAL: 0.9,
}


# ── Bearing defect ────────────────────────────────────────────────────────────

def bearing_defect_signature(
    t: np.ndarray,
    defect_freq: float,
    severity: float,
    resonance_hz: float = 0.0,
    damping: float = 400.0,
) -> np.ndarray:
    """
    Impact train at `defect_freq` Hz.

    Each impact rings a decaying resonance; with resonance_hz = 0 the
    signature is a plain sinusoid at the defect frequency, which is what a
    linear spectrum of a fully developed defect shows.

    Args:
        t: Time axis in seconds
        defect_freq: Bearing defect frequency (Hz), e.g. BPFO
        severity: Degradation severity in [0, 1]
        resonance_hz: Structural resonance excited by each impact
        damping: Exponential decay rate of each ring-down (1/s)
    """
    if severity <= 0.0 or defect_freq <= 0.0:
        return np.zeros_like(t)

    amplitude = 2.5 * severity
    if resonance_hz <= 0.0:
        return amplitude * np.sin(2.0 * np.pi * defect_freq * t)

    period = 1.0 / defect_freq
    time_since_impact = np.mod(t, period)
    ring = np.exp(-damping * time_since_impact) * np.sin(2.0 * np.pi * resonance_hz * time_since_impact)
    return amplitude * ring


# ── Misalignment ──────────────────────────────────────────────────────────────

def misalignment_signature(t: np.ndarray, shaft_freq: float, severity: float) -> np.ndarray:
    """Shaft misalignment raises the 2× running-speed component."""
    if severity <= 0.0:
        return np.zeros_like(t)
    return (0.5 + 1.5 * severity) * np.sin(2.0 * np.pi * 2.0 * shaft_freq * t)
