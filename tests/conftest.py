"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the condition-monitoring test suite.
"""
import os
from datetime import datetime, timezone

import numpy as np
import pytest

os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("BATCH_MAX_WORKERS", "1")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def bearing_geometry():
    from src.data.models import BearingGeometry
    return BearingGeometry(
        inner_race_diameter=40.0,
        outer_race_diameter=90.0,
        ball_diameter=16.0,
        number_of_balls=9,
        contact_angle=0.0,
    )


@pytest.fixture
def sine_50hz() -> tuple[np.ndarray, float]:
    """One second of a unit 50 Hz sine sampled at 1 kHz (1 Hz bins)."""
    sample_rate = 1000.0
    t = np.arange(1000) / sample_rate
    return np.sin(2 * np.pi * 50.0 * t), sample_rate


@pytest.fixture
def clean_oil(now):
    from src.data.models import OilAnalysis
    return OilAnalysis(
        id="OA-001",
        equipment_id="ME-PORT",
        org_id="org-1",
        sample_date=now,
        viscosity_40c=100.0,
        viscosity_index=100.0,
        water_content=0.0,
        fuel_dilution=0.0,
        iron=0.0,
        chromium=0.0,
        aluminum=0.0,
        copper=0.0,
        lead=0.0,
        tin=0.0,
        calcium=1000.0,
        zinc=800.0,
        oxidation=0.0,
        acid_number=0.0,
    )


@pytest.fixture
def degraded_oil(now):
    """Viscosity drift, water ingress and elevated iron: critical condition."""
    from src.data.models import OilAnalysis
    return OilAnalysis(
        id="OA-002",
        equipment_id="ME-STBD",
        sample_date=now,
        viscosity_40c=80.0,
        viscosity_index=50.0,    # deviation 50 → viscosity score 0
        water_content=0.2,       # penalty capped at 50, change recommended
        iron=300.0,              # excess ratio 2.0 → wear metals score 60
        calcium=1000.0,
        zinc=800.0,
    )


@pytest.fixture
def clean_wear(now):
    from src.data.models import WearParticleAnalysis
    return WearParticleAnalysis(
        id="WP-001",
        equipment_id="ME-PORT",
        sample_date=now,
        pq_index=10.0,
        cutting_particles=5.0,
        fatigue_particles=2.0,
        sliding_particles=8.0,
        bearing_wear=3.0,
        gear_wear=4.0,
        pump_wear=1.0,
        cylinder_wear=5.0,
    )


@pytest.fixture
def fatigue_wear(now):
    """Fatigue-dominated wear with bearing damage indicators."""
    from src.data.models import WearParticleAnalysis
    return WearParticleAnalysis(
        id="WP-002",
        equipment_id="ME-STBD",
        sample_date=now,
        pq_index=60.0,           # severity score 80
        cutting_particles=40.0,
        fatigue_particles=30.0,
        sliding_particles=35.0,  # mode score 100 − 20 − 30 − 20 = 30
        bearing_wear=20.0,
    )
