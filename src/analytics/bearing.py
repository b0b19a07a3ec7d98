"""
src/analytics/bearing.py
────────────────────────
Rolling-element bearing defect frequencies and spectral screening.

Standard bearing kinematics, with Pd = (ID + OD) / 2 and α the contact angle:
    FTF  = f_shaft / 2 · (1 − Bd/Pd · cos α)
    BPFO = f_shaft · N/2 · (1 − Bd/Pd · cos α)
    BPFI = f_shaft · N/2 · (1 + Bd/Pd · cos α)
    BSF  = f_shaft · Pd/(2·Bd) · (1 − (Bd/Pd · cos α)²)

Detection is a best-effort screening heuristic, not a certified diagnostic:
a defect is flagged when the largest spectral amplitude within ±tolerance of
its frequency exceeds NOISE_FLOOR_MULTIPLIER × the amplitude noise floor.
"""
from __future__ import annotations

import logging
import math

import numpy as np

from config.settings import settings
from src.analytics.spectral import Spectrum, noise_floor
from src.data.models import BearingFaultFrequencies, BearingGeometry, FaultDetection

logger = logging.getLogger(__name__)


def fault_frequencies(geometry: BearingGeometry, rpm: float) -> BearingFaultFrequencies:
    f_shaft = rpm / 60.0
    ratio = geometry.ball_diameter / geometry.pitch_diameter
    cos_term = ratio * math.cos(math.radians(geometry.contact_angle))
    n_balls = geometry.number_of_balls

    return BearingFaultFrequencies(
        bpfo=f_shaft * (n_balls / 2.0) * (1.0 - cos_term),
        bpfi=f_shaft * (n_balls / 2.0) * (1.0 + cos_term),
        ftf=f_shaft * 0.5 * (1.0 - cos_term),
        bsf=f_shaft * (geometry.pitch_diameter / (2.0 * geometry.ball_diameter)) * (1.0 - cos_term ** 2),
        rpm=rpm,
        geometry=geometry,
    )


def _peak_amplitude(frequencies: np.ndarray, amplitude: np.ndarray, target: float, tolerance: float) -> float:
    half_width = abs(target) * tolerance
    mask = (frequencies >= target - half_width) & (frequencies <= target + half_width)
    if not np.any(mask):
        return 0.0
    return float(np.max(amplitude[mask]))


def detect_faults(
    frequencies: np.ndarray,
    power: np.ndarray,
    faults: BearingFaultFrequencies,
    tolerance: float | None = None,
) -> tuple[FaultDetection, ...]:
    """Screen a one-sided power spectrum around each defect frequency."""
    spectrum = Spectrum(np.asarray(frequencies, dtype=float), np.asarray(power, dtype=float))
    tol = settings.BEARING_TOLERANCE if tolerance is None else tolerance
    threshold = settings.NOISE_FLOOR_MULTIPLIER * math.sqrt(noise_floor(spectrum))
    amplitude = spectrum.amplitude

    detections = []
    for fault, target in faults.as_dict().items():
        peak = _peak_amplitude(spectrum.frequencies, amplitude, target, tol)
        detections.append(FaultDetection(
            fault=fault,
            target_frequency=target,
            amplitude=peak,
            threshold=threshold,
            detected=peak > threshold,
        ))

    flagged = [d.fault.value for d in detections if d.detected]
    if flagged:
        logger.debug("Bearing screening flagged %s at %.0f rpm", ", ".join(flagged), faults.rpm)
    return tuple(detections)
