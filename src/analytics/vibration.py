"""
src/analytics/vibration.py
──────────────────────────
Vibration feature extraction.

analyze() turns one time-domain record into a VibrationFeatureSet:
  - RMS, crest factor and kurtosis of the DC-removed signal
  - peak frequency, total power, noise floor and spectral centroid
  - 1×–4× order band powers (only with a positive RPM)
  - ISO 10816 assessment (only with a machine class and a non-zero peak)
  - bearing defect frequencies + screening (only with geometry and RPM)

Records shorter than MIN_SAMPLES short-circuit to an all-zero feature set.
Everything here is a pure function of its arguments, so analyze_batch() may
fan work out to a thread pool.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pandas as pd

from config.equipment import MachineClass
from config.settings import settings
from src.analytics import bearing, iso10816, spectral
from src.analytics.statistics import kurtosis, rms
from src.data.models import (
    BatchVibrationResult,
    BearingGeometry,
    SpectralMetadata,
    VibrationFeatureSet,
    VibrationSignal,
)

logger = logging.getLogger(__name__)

# Text columns of the batch frame, kept as object dtype
LABEL_COLUMNS = ("equipment_id", "iso_zone", "bearing_faults")


def _zero_features(sample_count: int, sample_rate: float) -> VibrationFeatureSet:
    return VibrationFeatureSet(
        rms=0.0,
        crest_factor=0.0,
        kurtosis=0.0,
        peak_frequency=0.0,
        bands=(0.0, 0.0, 0.0, 0.0),
        sample_count=sample_count,
        sample_rate=sample_rate,
    )


def analyze(
    samples: Sequence[float] | np.ndarray,
    sample_rate: float,
    rpm: float | None = None,
    machine_class: MachineClass | str | None = None,
    bearing_geometry: BearingGeometry | None = None,
) -> VibrationFeatureSet:
    """Extract the feature set for one vibration record."""
    values = np.asarray(samples, dtype=float)
    n = values.size

    if n < settings.MIN_SAMPLES or sample_rate <= 0:
        logger.debug("Short-circuit: %d samples at %.1f Hz", n, sample_rate)
        return _zero_features(n, sample_rate)

    ac = values - values.mean()
    signal_rms = rms(ac)
    peak_value = float(np.max(np.abs(ac)))
    crest = peak_value / signal_rms if signal_rms > 0 else 0.0

    spectrum = spectral.compute_spectrum(values, sample_rate)
    peak_freq = spectral.peak_frequency(spectrum)

    metadata = SpectralMetadata(
        noise_floor=spectral.noise_floor(spectrum),
        spectral_centroid=spectral.spectral_centroid(spectrum),
        total_power=spectral.total_power(spectrum),
    )

    iso_assessment = None
    if machine_class is not None and peak_freq > 0:
        velocity = iso10816.acceleration_to_velocity(signal_rms, peak_freq)
        iso_assessment = iso10816.assess(velocity, machine_class)

    faults = None
    detections = None
    if bearing_geometry is not None and rpm is not None and rpm > 0:
        faults = bearing.fault_frequencies(bearing_geometry, rpm)
        detections = bearing.detect_faults(spectrum.frequencies, spectrum.power, faults)

    return VibrationFeatureSet(
        rms=signal_rms,
        crest_factor=crest,
        kurtosis=kurtosis(ac),
        peak_frequency=peak_freq,
        bands=spectral.order_band_powers(spectrum, rpm),
        sample_count=n,
        sample_rate=sample_rate,
        metadata=metadata,
        iso_assessment=iso_assessment,
        bearing_faults=faults,
        bearing_detections=detections,
    )


def score_features(features: VibrationFeatureSet) -> float | None:
    """0–100 vibration health score from the ISO assessment, if one was made."""
    if features.iso_assessment is None:
        return None
    iso = features.iso_assessment
    return round(iso10816.vibration_score(iso.velocity_rms, iso.machine_class), 2)


# ── Batch ─────────────────────────────────────────────────────────────────────


def _analyze_signal(index: int, signal: VibrationSignal) -> BatchVibrationResult:
    features = analyze(
        signal.values,
        signal.sample_rate,
        rpm=signal.rpm,
        machine_class=signal.machine_class,
        bearing_geometry=signal.bearing_geometry,
    )
    return BatchVibrationResult(
        index=index,
        equipment_id=signal.equipment_id,
        timestamp=signal.timestamp,
        features=features,
    )


def analyze_batch(
    signals: Iterable[VibrationSignal],
    max_workers: int | None = None,
) -> list[BatchVibrationResult]:
    """
    Analyze each signal independently.

    Results carry their input index and equipment id and are returned in
    input order regardless of completion order.
    """
    indexed = list(enumerate(signals))
    workers = settings.BATCH_MAX_WORKERS if max_workers is None else max_workers

    if workers <= 1 or len(indexed) <= 1:
        results = [_analyze_signal(i, s) for i, s in indexed]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_analyze_signal, i, s) for i, s in indexed]
            results = [f.result() for f in futures]

    results.sort(key=lambda r: r.index)
    logger.info("Analyzed %d vibration signals (%d workers)", len(results), max(1, workers))
    return results


def batch_to_frame(results: Iterable[BatchVibrationResult]) -> pd.DataFrame:
    """Flatten batch results to one row per signal.

    Label columns keep None for layers that were not computed; numeric
    columns carry NaN.
    """
    rows = []
    for r in results:
        f = r.features
        row = {
            "index": r.index,
            "equipment_id": r.equipment_id,
            "timestamp": r.timestamp,
            "rms": f.rms,
            "crest_factor": f.crest_factor,
            "kurtosis": f.kurtosis,
            "peak_frequency": f.peak_frequency,
            "band_1x": f.bands[0],
            "band_2x": f.bands[1],
            "band_3x": f.bands[2],
            "band_4x": f.bands[3],
            "sample_count": f.sample_count,
            "iso_zone": f.iso_assessment.zone.value if f.iso_assessment else None,
            "velocity_rms": f.iso_assessment.velocity_rms if f.iso_assessment else None,
            "vibration_score": score_features(f),
            "bearing_faults": (
                ",".join(d.fault.value for d in f.bearing_detections if d.detected)
                if f.bearing_detections else ""
            ),
        }
        rows.append(row)

    frame = pd.DataFrame(rows)
    for column in LABEL_COLUMNS:
        frame[column] = pd.Series([row[column] for row in rows], index=frame.index, dtype=object)
    return frame
