"""
src/analytics/trend.py
──────────────────────
Condition trend over successive assessments.

Least-squares line through the overall condition scores (one point per
assessment, oldest first):
  |slope| < 0.5 points / assessment → stable
  slope > 0                         → improving
  slope < 0                         → degrading
Confidence is the R² of the fit.
"""
from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from config.scoring import (
    DEFAULT_TREND_CONFIDENCE,
    TREND_CRITICAL_SCORE,
    TREND_MIN_POINTS,
    TREND_STABLE_SLOPE,
)
from src.data.models import Trend


def _as_series(scores: Sequence[float] | pd.Series) -> pd.Series:
    series = scores if isinstance(scores, pd.Series) else pd.Series(list(scores), dtype=float)
    return series.dropna().astype(float)


def _fit(series: pd.Series) -> tuple[float, float]:
    """(slope, r²) of a linear fit against the assessment index."""
    x = np.arange(len(series), dtype=float)
    y = series.to_numpy(dtype=float)
    slope, intercept = np.polyfit(x, y, 1)
    ss_tot = float(np.sum((y - y.mean()) ** 2))
    if ss_tot == 0.0:
        return 0.0, 1.0
    ss_res = float(np.sum((y - (slope * x + intercept)) ** 2))
    return float(slope), float(np.clip(1.0 - ss_res / ss_tot, 0.0, 1.0))


def classify_trend(scores: Sequence[float] | pd.Series) -> tuple[Trend, float]:
    """Trend label and confidence for a chronological score series."""
    series = _as_series(scores)
    if len(series) < TREND_MIN_POINTS:
        return Trend.STABLE, DEFAULT_TREND_CONFIDENCE

    slope, r_squared = _fit(series)
    if abs(slope) < TREND_STABLE_SLOPE:
        return Trend.STABLE, round(r_squared, 3)
    if slope > 0:
        return Trend.IMPROVING, round(r_squared, 3)
    return Trend.DEGRADING, round(r_squared, 3)


def estimate_days_to_threshold(
    scores: Sequence[float] | pd.Series,
    interval_days: float,
    threshold: float = TREND_CRITICAL_SCORE,
) -> float | None:
    """
    Days until the score line crosses `threshold`, assessments being
    `interval_days` apart. None if the trend is stable or improving.
    """
    series = _as_series(scores)
    if len(series) < TREND_MIN_POINTS:
        return None

    slope, _ = _fit(series)
    if slope >= -1e-6:
        return None

    current = float(series.iloc[-1])
    if current <= threshold:
        return 0.0
    assessments_to_threshold = (current - threshold) / abs(slope)
    return round(assessments_to_threshold * interval_days, 1)
