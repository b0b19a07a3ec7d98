"""
src/analytics/spectral.py
─────────────────────────
One-sided power spectrum and band-power integration.

The transform is applied to the full record as captured: the DC component
is removed first, but no window and no zero padding are applied. numpy's
FFT accepts any length, so non power-of-two records are transformed as-is.

  frequencies[k] = k · fs / n,          k = 0 … n//2
  power[k]       = |X[k]|² / n
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

# Order bands around 1×–4× shaft speed as (low, high) multipliers
ORDER_BAND_FACTORS: tuple[tuple[float, float], ...] = (
    (0.8, 1.2),   # 1× ±20%
    (1.8, 2.2),   # 2× ±10%
    (2.8, 3.2),   # 3× ±7%
    (3.8, 4.2),   # 4× ±5%
)


@dataclass(frozen=True)
class Spectrum:
    frequencies: np.ndarray
    power: np.ndarray

    @property
    def resolution_hz(self) -> float:
        if len(self.frequencies) < 2:
            return 0.0
        return float(self.frequencies[1] - self.frequencies[0])

    @property
    def amplitude(self) -> np.ndarray:
        return np.sqrt(self.power)


def frequency_axis(n: int, sample_rate: float) -> np.ndarray:
    """n//2 + 1 bins from DC to Nyquist, spaced Nyquist / (n/2)."""
    if n <= 0:
        return np.zeros(0)
    nyquist = sample_rate / 2.0
    step = nyquist / (n / 2.0)
    return np.arange(n // 2 + 1, dtype=float) * step


def power_spectrum(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """(re² + im²) / n for the first n//2 + 1 bins of the DC-removed record."""
    arr = np.asarray(values, dtype=float)
    n = arr.size
    if n == 0:
        return np.zeros(0)
    ac = arr - arr.mean()
    coeffs = np.fft.rfft(ac)
    return (coeffs.real ** 2 + coeffs.imag ** 2) / n


def compute_spectrum(values: Sequence[float] | np.ndarray, sample_rate: float) -> Spectrum:
    arr = np.asarray(values, dtype=float)
    return Spectrum(
        frequencies=frequency_axis(arr.size, sample_rate),
        power=power_spectrum(arr),
    )


def band_power(
    frequencies: np.ndarray,
    power: np.ndarray,
    low_hz: float,
    high_hz: float,
) -> float:
    """
    Trapezoidal integral of power over bins with low_hz ≤ f ≤ high_hz.

    Returns 0.0 when no bin falls in the band (a single bin also integrates
    to 0.0).
    """
    freqs = np.asarray(frequencies, dtype=float)
    pwr = np.asarray(power, dtype=float)
    mask = (freqs >= low_hz) & (freqs <= high_hz)
    if not np.any(mask):
        return 0.0
    return float(np.trapezoid(pwr[mask], freqs[mask]))


def order_bands(rpm: float) -> list[tuple[float, float]]:
    """Frequency windows (Hz) around the 1×–4× running-speed orders."""
    base = rpm / 60.0
    return [(lo * base, hi * base) for lo, hi in ORDER_BAND_FACTORS]


def order_band_powers(spectrum: Spectrum, rpm: float | None) -> tuple[float, float, float, float]:
    """Band powers for the four orders; all zero without a positive RPM."""
    if rpm is None or rpm <= 0:
        return (0.0, 0.0, 0.0, 0.0)
    b1, b2, b3, b4 = (
        band_power(spectrum.frequencies, spectrum.power, lo, hi) for lo, hi in order_bands(rpm)
    )
    return (b1, b2, b3, b4)


def peak_frequency(spectrum: Spectrum) -> float:
    """Frequency of the maximum-power bin (first one on ties)."""
    if spectrum.power.size == 0:
        return 0.0
    return float(spectrum.frequencies[int(np.argmax(spectrum.power))])


def total_power(spectrum: Spectrum) -> float:
    return float(np.sum(spectrum.power))


def noise_floor(spectrum: Spectrum) -> float:
    """Minimum power over the non-DC bins; 0.0 if there are none."""
    if spectrum.power.size < 2:
        return 0.0
    return float(np.min(spectrum.power[1:]))


def spectral_centroid(spectrum: Spectrum) -> float:
    """Power-weighted mean frequency; 0.0 for a spectrum with no power."""
    power_sum = float(np.sum(spectrum.power))
    if power_sum <= 0.0:
        return 0.0
    return float(np.sum(spectrum.frequencies * spectrum.power) / power_sum)
