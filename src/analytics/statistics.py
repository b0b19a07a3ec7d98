"""
src/analytics/statistics.py
───────────────────────────
Descriptive statistics over numeric sequences.

All helpers return 0.0 on degenerate input instead of raising, so a short or
flat reading still produces a feature set.
"""
from __future__ import annotations

from collections.abc import Sequence

import numpy as np

MIN_KURTOSIS_SAMPLES = 4


def mean(values: Sequence[float] | np.ndarray) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def standard_deviation(values: Sequence[float] | np.ndarray) -> float:
    """Population standard deviation (ddof=0); 0.0 for an empty sequence."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.std())


def kurtosis(values: Sequence[float] | np.ndarray) -> float:
    """
    Population kurtosis, the fourth standardized moment.

    No excess correction: a normal distribution gives 3.0. Returns 0.0 when
    there are fewer than four samples or the signal is constant.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size < MIN_KURTOSIS_SAMPLES:
        return 0.0
    sigma = standard_deviation(arr)
    if sigma == 0.0:
        return 0.0
    normalized = (arr - mean(arr)) / sigma
    return float(np.mean(normalized ** 4))


def rms(values: Sequence[float] | np.ndarray) -> float:
    """Root mean square; 0.0 for an empty sequence."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(arr * arr)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (scores are reported as ints)."""
    return int(np.floor(value + 0.5))


def clamp_score(value: float) -> float:
    return float(np.clip(value, 0.0, 100.0))
