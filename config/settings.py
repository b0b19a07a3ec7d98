"""
config/settings.py
──────────────────
Engine configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # ISO 10816 fallback class when a caller passes an unknown class
    DEFAULT_MACHINE_CLASS: str = os.getenv("DEFAULT_MACHINE_CLASS", "III")

    # Bearing fault screening
    BEARING_TOLERANCE: float = float(os.getenv("BEARING_TOLERANCE", "0.05"))
    NOISE_FLOOR_MULTIPLIER: float = float(os.getenv("NOISE_FLOOR_MULTIPLIER", "3.0"))

    # Signals shorter than this are not transformed
    MIN_SAMPLES: int = int(os.getenv("MIN_SAMPLES", "8"))

    # Batch analyzer worker threads (1 = sequential map)
    BATCH_MAX_WORKERS: int = int(os.getenv("BATCH_MAX_WORKERS", "1"))

    # Simulation / demo
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    DEMO_SAMPLE_RATE: float = float(os.getenv("DEMO_SAMPLE_RATE", "2048"))
    DEMO_DURATION_S: float = float(os.getenv("DEMO_DURATION_S", "1.0"))


settings = Settings()
