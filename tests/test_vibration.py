"""
tests/test_vibration.py
───────────────────────
Tests for the vibration analyzer and its batch variant.
"""
import numpy as np
import pandas as pd
import pytest

from src.analytics.vibration import analyze, analyze_batch, batch_to_frame, score_features
from src.data.models import IsoZone, VibrationFeatureSet, VibrationSignal


class TestShortCircuit:
    @pytest.mark.parametrize("n", [0, 1, 4, 7])
    def test_short_records_are_all_zero(self, n):
        features = analyze(np.arange(n, dtype=float) * 3.0, 1000.0, rpm=1800.0, machine_class="II")
        assert features.rms == 0.0
        assert features.crest_factor == 0.0
        assert features.kurtosis == 0.0
        assert features.peak_frequency == 0.0
        assert features.bands == (0.0, 0.0, 0.0, 0.0)
        assert features.sample_count == n
        assert features.metadata is None
        assert features.iso_assessment is None

    def test_non_positive_sample_rate_short_circuits(self, sine_50hz):
        values, _ = sine_50hz
        features = analyze(values, 0.0)
        assert features.rms == 0.0
        assert features.metadata is None


class TestTimeDomainFeatures:
    def test_sine_rms_and_crest(self, sine_50hz):
        values, sr = sine_50hz
        features = analyze(values, sr)
        assert features.rms == pytest.approx(1 / np.sqrt(2), rel=1e-6)
        assert features.crest_factor == pytest.approx(np.sqrt(2), rel=1e-3)
        assert features.kurtosis == pytest.approx(1.5, abs=1e-6)

    def test_dc_offset_does_not_change_features(self, sine_50hz):
        values, sr = sine_50hz
        a = analyze(values, sr)
        b = analyze(values + 10.0, sr)
        assert b.rms == pytest.approx(a.rms)
        assert b.peak_frequency == a.peak_frequency

    def test_constant_signal_is_neutral(self):
        features = analyze([2.0] * 64, 64.0, machine_class="II")
        assert features.rms == 0.0
        assert features.crest_factor == 0.0
        assert features.kurtosis == 0.0
        assert features.peak_frequency == 0.0
        assert features.iso_assessment is None

    def test_bounds_hold_for_random_signals(self, rng):
        for n in (8, 9, 33, 256, 1000):
            features = analyze(rng.normal(0.0, 2.0, n), 500.0)
            assert features.rms >= 0.0
            assert features.crest_factor >= 0.0


class TestSpectralFeatures:
    @pytest.mark.parametrize("freq, sample_rate, n", [(50.0, 1000.0, 1000), (123.0, 1024.0, 600), (7.3, 100.0, 257)])
    def test_pure_sinusoid_peak_within_one_bin(self, freq, sample_rate, n):
        t = np.arange(n) / sample_rate
        features = analyze(np.sin(2 * np.pi * freq * t), sample_rate)
        assert abs(features.peak_frequency - freq) <= sample_rate / n

    def test_metadata_present(self, sine_50hz):
        values, sr = sine_50hz
        meta = analyze(values, sr).metadata
        assert meta is not None
        assert meta.total_power > 0.0
        assert meta.spectral_centroid == pytest.approx(50.0, abs=0.01)
        assert meta.noise_floor >= 0.0

    def test_bands_zero_without_rpm(self, sine_50hz):
        values, sr = sine_50hz
        assert analyze(values, sr).bands == (0.0, 0.0, 0.0, 0.0)

    def test_band_closure(self, rng):
        from src.data.simulator import generate_test_vibration
        values = generate_test_vibration(2.0, 1000.0, 1800.0, rng=rng)
        features = analyze(values, 1000.0, rpm=1800.0)
        assert all(b >= 0.0 for b in features.bands)
        assert sum(features.bands) <= features.metadata.total_power
        # 1× order carries the largest component
        assert features.bands[0] == max(features.bands)


class TestOptionalLayers:
    def test_iso_assessment_attached_with_class(self, sine_50hz):
        values, sr = sine_50hz
        features = analyze(values, sr, machine_class="II")
        iso = features.iso_assessment
        assert iso is not None
        # v = (1/√2) / (2π·50) · 1000 ≈ 2.25 mm/s → class II zone B
        assert iso.velocity_rms == pytest.approx(2.2508, abs=1e-3)
        assert iso.zone == IsoZone.B

    def test_no_iso_without_class(self, sine_50hz):
        values, sr = sine_50hz
        assert analyze(values, sr).iso_assessment is None

    def test_bearing_layer_requires_geometry_and_rpm(self, sine_50hz, bearing_geometry):
        values, sr = sine_50hz
        assert analyze(values, sr, bearing_geometry=bearing_geometry).bearing_faults is None
        assert analyze(values, sr, rpm=0.0, bearing_geometry=bearing_geometry).bearing_faults is None
        features = analyze(values, sr, rpm=1800.0, bearing_geometry=bearing_geometry)
        assert features.bearing_faults is not None
        assert len(features.bearing_detections) == 4

    def test_score_features(self, sine_50hz):
        values, sr = sine_50hz
        assert score_features(analyze(values, sr)) is None
        score = score_features(analyze(values, sr, machine_class="II"))
        assert 65.0 <= score <= 85.0  # zone B


class TestDeterminism:
    def test_repeated_calls_identical(self, rng, bearing_geometry):
        values = rng.normal(0.0, 1.0, 777)
        a = analyze(values, 2048.0, rpm=1750.0, machine_class="III", bearing_geometry=bearing_geometry)
        b = analyze(values, 2048.0, rpm=1750.0, machine_class="III", bearing_geometry=bearing_geometry)
        assert a == b
        assert a.model_dump() == b.model_dump()

    def test_result_is_frozen(self, sine_50hz):
        values, sr = sine_50hz
        features = analyze(values, sr)
        with pytest.raises(Exception):
            features.rms = 5.0


class TestBatch:
    def _signals(self, rng):
        return [
            VibrationSignal(equipment_id="A", values=tuple(rng.normal(0, 1, 256)), sample_rate=256.0, rpm=1200.0),
            VibrationSignal(equipment_id="B", values=(1.0, 2.0, 3.0), sample_rate=256.0),
            VibrationSignal(equipment_id="C", values=tuple(rng.normal(0, 3, 512)), sample_rate=512.0,
                            machine_class="IV"),
        ]

    def test_batch_matches_single_analysis(self, rng):
        signals = self._signals(rng)
        results = analyze_batch(signals, max_workers=1)
        assert [r.equipment_id for r in results] == ["A", "B", "C"]
        for signal, result in zip(signals, results, strict=True):
            expected = analyze(signal.values, signal.sample_rate, rpm=signal.rpm,
                               machine_class=signal.machine_class)
            assert result.features == expected

    def test_parallel_batch_keeps_input_order(self, rng):
        signals = self._signals(rng)
        sequential = analyze_batch(signals, max_workers=1)
        parallel = analyze_batch(signals, max_workers=3)
        assert [r.index for r in parallel] == [0, 1, 2]
        assert sequential == parallel

    def test_short_signal_in_batch_is_zeroed(self, rng):
        results = analyze_batch(self._signals(rng))
        assert results[1].features.rms == 0.0

    def test_empty_batch(self):
        assert analyze_batch([]) == []

    def test_batch_to_frame(self, rng):
        frame = batch_to_frame(analyze_batch(self._signals(rng)))
        assert isinstance(frame, pd.DataFrame)
        assert len(frame) == 3
        assert list(frame["equipment_id"]) == ["A", "B", "C"]
        assert frame.loc[2, "iso_zone"] in {"A", "B", "C", "D"}
        assert frame.loc[0, "iso_zone"] is None

    def test_frame_keeps_none_for_missing_labels(self):
        signals = [VibrationSignal(equipment_id=f"S{i}", values=(1.0, 2.0), sample_rate=100.0) for i in range(2)]
        frame = batch_to_frame(analyze_batch(signals))
        assert frame["iso_zone"].dtype == object
        assert frame["iso_zone"].tolist() == [None, None]
        assert frame["vibration_score"].isna().all()

    def test_empty_frame(self):
        assert batch_to_frame([]).empty

    def test_returns_feature_sets(self, rng):
        for result in analyze_batch(self._signals(rng)):
            assert isinstance(result.features, VibrationFeatureSet)
