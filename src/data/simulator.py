"""
src/data/simulator.py
─────────────────────
Synthetic vibration records and lab samples for demos and tests.

Generates:
  - Order-harmonic vibration signals (1×–4× running speed) with uniform noise
  - Optional bearing-defect or misalignment signatures on top
  - Oil analysis records whose chemistry drifts with a degradation stage
  - A fleet batch of VibrationSignal inputs for the batch analyzer

Design:
  - Reproducible with SIMULATION_SEED for consistent demos
  - Each equipment unit draws from its own generator so batches do not
    depend on ordering
"""
from __future__ import annotations

import zlib
from collections.abc import Sequence
from datetime import UTC, datetime

import numpy as np

from config.equipment import MachineClass
from config.settings import settings
from src.analytics.bearing import fault_frequencies
from src.data.degradation import (
    STAGE_SEVERITY,
    DegradationStage,
    bearing_defect_signature,
    misalignment_signature,
)
from src.data.models import BearingGeometry, OilAnalysis, VibrationSignal

DEFAULT_AMPLITUDES: tuple[float, float, float, float] = (1.0, 0.5, 0.3, 0.2)

# Deep-groove bearing used by the demo fleet
DEMO_BEARING = BearingGeometry(
    inner_race_diameter=40.0,
    outer_race_diameter=90.0,
    ball_diameter=16.0,
    number_of_balls=9,
    contact_angle=0.0,
)

# Demo fleet: equipment id → (rpm, machine class, fault mode, stage)
DEMO_FLEET: dict[str, dict] = {
    "ME-PORT": {"rpm": 1800.0, "machine_class": MachineClass.II, "mode": None,
                "stage": DegradationStage.HEALTHY},
    "ME-STBD": {"rpm": 1800.0, "machine_class": MachineClass.II, "mode": "bearing",
                "stage": DegradationStage.SEVERE},
    "GEN-01": {"rpm": 1500.0, "machine_class": MachineClass.I, "mode": "misalignment",
               "stage": DegradationStage.MODERATE},
}


def _rng_for(equipment_id: str, seed: int) -> np.random.Generator:
    return np.random.default_rng([seed, zlib.crc32(equipment_id.encode())])


def generate_test_vibration(
    duration: float,
    sample_rate: float,
    rpm: float,
    amplitudes: Sequence[float] = DEFAULT_AMPLITUDES,
    noise_level: float = 0.1,
    seed: int = settings.SIMULATION_SEED,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """
    Sum of 1×–4× order sinusoids plus uniform noise in [−noise, +noise].
    """
    rng = rng if rng is not None else np.random.default_rng(seed)
    n = int(np.floor(duration * sample_rate))
    t = np.arange(n, dtype=float) / sample_rate
    base_freq = rpm / 60.0

    signal = np.zeros(n)
    for order, amplitude in enumerate(amplitudes[:4], start=1):
        signal += amplitude * np.sin(2.0 * np.pi * base_freq * order * t)

    if noise_level > 0:
        signal += noise_level * rng.uniform(-1.0, 1.0, n)
    return signal


def generate_faulty_vibration(
    duration: float,
    sample_rate: float,
    rpm: float,
    mode: str | None,
    stage: DegradationStage,
    geometry: BearingGeometry = DEMO_BEARING,
    noise_level: float = 0.1,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Healthy order signal with a fault signature for `mode` at `stage`."""
    rng = rng if rng is not None else np.random.default_rng(settings.SIMULATION_SEED)
    signal = generate_test_vibration(duration, sample_rate, rpm, noise_level=noise_level, rng=rng)
    t = np.arange(signal.size, dtype=float) / sample_rate
    severity = STAGE_SEVERITY[stage]

    if mode == "bearing":
        bpfo = fault_frequencies(geometry, rpm).bpfo
        signal = signal + bearing_defect_signature(t, bpfo, severity)
    elif mode == "misalignment":
        signal = signal + misalignment_signature(t, rpm / 60.0, severity)
    return signal


def generate_fleet_signals(
    fleet: dict[str, dict] | None = None,
    sample_rate: float = settings.DEMO_SAMPLE_RATE,
    duration: float = settings.DEMO_DURATION_S,
    seed: int = settings.SIMULATION_SEED,
    timestamp: datetime | None = None,
) -> list[VibrationSignal]:
    """One VibrationSignal per fleet unit, ready for analyze_batch()."""
    fleet = fleet or DEMO_FLEET
    ts = timestamp or datetime.now(tz=UTC).replace(second=0, microsecond=0)
    signals = []
    for equipment_id, cfg in fleet.items():
        values = generate_faulty_vibration(
            duration,
            sample_rate,
            cfg["rpm"],
            cfg.get("mode"),
            cfg.get("stage", DegradationStage.HEALTHY),
            rng=_rng_for(equipment_id, seed),
        )
        signals.append(VibrationSignal(
            equipment_id=equipment_id,
            values=tuple(float(v) for v in values),
            sample_rate=sample_rate,
            rpm=cfg["rpm"],
            machine_class=cfg.get("machine_class"),
            bearing_geometry=DEMO_BEARING,
            timestamp=ts,
        ))
    return signals


def generate_oil_analysis(
    equipment_id: str,
    stage: DegradationStage = DegradationStage.HEALTHY,
    sample_date: datetime | None = None,
    seed: int = settings.SIMULATION_SEED,
) -> OilAnalysis:
    """
    Lab sample whose contamination, wear metals and oxidation grow with the
    degradation stage while additives deplete.
    """
    rng = _rng_for(equipment_id, seed)
    s = STAGE_SEVERITY[stage]
    date = sample_date or datetime.now(tz=UTC).replace(hour=0, minute=0, second=0, microsecond=0)

    def jitter(value: float, rel: float = 0.05) -> float:
        return round(float(max(0.0, value * (1.0 + rng.normal(0.0, rel)))), 3)

    return OilAnalysis(
        id=f"OA-{equipment_id}-{date:%Y%m%d}",
        equipment_id=equipment_id,
        sample_date=date,
        viscosity_40c=jitter(100.0 * (1.0 - 0.2 * s)),
        viscosity_index=jitter(100.0 - 40.0 * s, 0.01),
        water_content=jitter(0.02 + 0.2 * s),
        fuel_dilution=jitter(0.5 + 6.0 * s),
        iron=jitter(20.0 + 200.0 * s),
        chromium=jitter(2.0 + 30.0 * s),
        aluminum=jitter(3.0 + 30.0 * s),
        copper=jitter(5.0 + 40.0 * s),
        lead=jitter(2.0 + 30.0 * s),
        tin=jitter(1.0 + 20.0 * s),
        calcium=jitter(1000.0 * (1.0 - 0.6 * s)),
        zinc=jitter(800.0 * (1.0 - 0.6 * s)),
        oxidation=jitter(8.0 + 60.0 * s),
        acid_number=jitter(1.0 + 4.0 * s),
        service_hours=jitter(200.0 + 700.0 * s),
    )

