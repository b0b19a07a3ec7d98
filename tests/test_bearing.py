"""
tests/test_bearing.py
─────────────────────
Tests for bearing defect frequencies and spectral screening.
"""
import math

import numpy as np
import pytest

from src.analytics.bearing import detect_faults, fault_frequencies
from src.analytics.spectral import compute_spectrum
from src.data.models import BearingFault, BearingGeometry


class TestFaultFrequencies:
    """Geometry ID 40 / OD 90 / Bd 16 / 9 balls / 0° at 1800 rpm (30 Hz shaft)."""

    def test_bpfo(self, bearing_geometry):
        result = fault_frequencies(bearing_geometry, 1800.0)
        expected = 30.0 * 9 / 2 * (1 - 16.0 / 65.0)
        assert result.bpfo == pytest.approx(expected, rel=1e-12)
        assert result.bpfo == pytest.approx(101.769, abs=1e-3)

    def test_bpfi(self, bearing_geometry):
        result = fault_frequencies(bearing_geometry, 1800.0)
        expected = 30.0 * 9 / 2 * (1 + 16.0 / 65.0)
        assert result.bpfi == pytest.approx(expected, rel=1e-12)
        assert result.bpfi == pytest.approx(168.231, abs=1e-3)

    def test_ftf_and_bsf(self, bearing_geometry):
        result = fault_frequencies(bearing_geometry, 1800.0)
        ratio = 16.0 / 65.0
        assert result.ftf == pytest.approx(15.0 * (1 - ratio))
        assert result.bsf == pytest.approx(30.0 * 65.0 / 32.0 * (1 - ratio ** 2))

    def test_bpfo_plus_bpfi_is_n_times_shaft(self, bearing_geometry):
        result = fault_frequencies(bearing_geometry, 1800.0)
        assert result.bpfo + result.bpfi == pytest.approx(9 * 30.0)

    def test_contact_angle_reduces_spread(self):
        radial = BearingGeometry(inner_race_diameter=30, outer_race_diameter=62, ball_diameter=9.5,
                                 number_of_balls=12, contact_angle=0.0)
        angular = radial.model_copy(update={"contact_angle": 40.0})
        r, a = fault_frequencies(radial, 1500.0), fault_frequencies(angular, 1500.0)
        assert a.bpfo > r.bpfo
        assert a.bpfi < r.bpfi
        assert a.bpfo == pytest.approx(25.0 * 6 * (1 - 9.5 / 46.0 * math.cos(math.radians(40.0))))

    def test_carries_inputs(self, bearing_geometry):
        result = fault_frequencies(bearing_geometry, 1200.0)
        assert result.rpm == 1200.0
        assert result.shaft_frequency == pytest.approx(20.0)
        assert result.geometry == bearing_geometry


class TestDetectFaults:
    def test_threshold_is_three_times_noise_floor(self, bearing_geometry):
        faults = fault_frequencies(bearing_geometry, 1800.0)
        freqs = np.arange(0.0, 301.0)
        power = np.ones_like(freqs)
        power[102] = 100.0  # amplitude 10 near BPFO
        detections = {d.fault: d for d in detect_faults(freqs, power, faults)}

        assert detections[BearingFault.BPFO].threshold == pytest.approx(3.0)
        assert detections[BearingFault.BPFO].amplitude == pytest.approx(10.0)
        assert detections[BearingFault.BPFO].detected
        assert not detections[BearingFault.BPFI].detected
        assert not detections[BearingFault.FTF].detected
        assert not detections[BearingFault.BSF].detected

    def test_tolerance_window(self, bearing_geometry):
        faults = fault_frequencies(bearing_geometry, 1800.0)
        freqs = np.arange(0.0, 301.0)
        power = np.ones_like(freqs)
        power[110] = 100.0  # 8% above BPFO
        default = {d.fault: d for d in detect_faults(freqs, power, faults)}
        wide = {d.fault: d for d in detect_faults(freqs, power, faults, tolerance=0.10)}
        assert not default[BearingFault.BPFO].detected
        assert wide[BearingFault.BPFO].detected

    def test_window_outside_spectrum_gives_zero_amplitude(self, bearing_geometry):
        faults = fault_frequencies(bearing_geometry, 1800.0)
        freqs = np.arange(0.0, 50.0)
        detections = {d.fault: d for d in detect_faults(freqs, np.ones_like(freqs), faults)}
        assert detections[BearingFault.BPFI].amplitude == 0.0
        assert not detections[BearingFault.BPFI].detected

    def test_detects_tone_at_bpfo(self, bearing_geometry, rng):
        faults = fault_frequencies(bearing_geometry, 1800.0)
        sr = 1024.0
        t = np.arange(2048) / sr
        signal = np.sin(2 * np.pi * faults.bpfo * t) + rng.normal(0.0, 0.05, t.size)
        spectrum = compute_spectrum(signal, sr)
        detections = {d.fault: d for d in detect_faults(spectrum.frequencies, spectrum.power, faults)}
        assert detections[BearingFault.BPFO].detected
        assert detections[BearingFault.BPFO].amplitude > 10 * detections[BearingFault.BPFI].amplitude
