"""
src/analytics/iso10816.py
─────────────────────────
ISO 10816-1 vibration severity classification.

  velocity ≤ zone_a → A (good)
  velocity ≤ zone_b → B (satisfactory)
  velocity ≤ zone_c → C (unsatisfactory)
  otherwise         → D (unacceptable)

Boundaries belong to the lower zone. Unknown machine classes fall back to
the configured default class (III).
"""
from __future__ import annotations

import logging
import math

from config.equipment import ISO_10816_ZONES, ZONE_VERDICTS, MachineClass, VibrationZones
from config.settings import settings
from src.data.models import IsoAssessment, IsoZone

logger = logging.getLogger(__name__)

MM_PER_M = 1000.0


def resolve_machine_class(machine_class: MachineClass | str | None) -> MachineClass:
    """Map a class label to MachineClass, falling back to the default class."""
    if isinstance(machine_class, MachineClass):
        return machine_class
    label = str(machine_class or "").strip().upper()
    if label.startswith("CLASS"):
        label = label[len("CLASS"):].strip(" _-")
    try:
        return MachineClass(label)
    except ValueError:
        logger.debug("Unknown machine class %r, using class %s", machine_class, settings.DEFAULT_MACHINE_CLASS)
        return MachineClass(settings.DEFAULT_MACHINE_CLASS)


def get_zones(machine_class: MachineClass | str | None) -> VibrationZones:
    return ISO_10816_ZONES[resolve_machine_class(machine_class)]


def classify_zone(velocity_rms: float, zones: VibrationZones) -> IsoZone:
    if velocity_rms <= zones.zone_a:
        return IsoZone.A
    if velocity_rms <= zones.zone_b:
        return IsoZone.B
    if velocity_rms <= zones.zone_c:
        return IsoZone.C
    return IsoZone.D


def assess(velocity_rms: float, machine_class: MachineClass | str | None) -> IsoAssessment:
    """Classify an RMS velocity (mm/s) for the given machine class."""
    resolved = resolve_machine_class(machine_class)
    zones = ISO_10816_ZONES[resolved]
    zone = classify_zone(velocity_rms, zones)
    return IsoAssessment(
        zone=zone,
        velocity_rms=max(0.0, velocity_rms),
        machine_class=resolved,
        thresholds=zones.as_tuple(),
        verdict=ZONE_VERDICTS[zone.value],
    )


def acceleration_to_velocity(acceleration_rms: float, frequency_hz: float) -> float:
    """
    Convert acceleration RMS (m/s²) at a dominant frequency to velocity RMS
    in mm/s: v = a / (2πf). Returns 0.0 for a non-positive frequency.
    """
    if frequency_hz <= 0:
        return 0.0
    return acceleration_rms / (2.0 * math.pi * frequency_hz) * MM_PER_M


def vibration_score(velocity_rms: float, machine_class: MachineClass | str | None) -> float:
    """
    Map ISO velocity onto a 0–100 health score.
    Zone A → 100..85, Zone B → 85..65, Zone C → 65..30, Zone D → 30..0
    (reaching 0 at 2× zone_c). Linear interpolation inside each zone.
    """
    zones = get_zones(machine_class)
    za, zb, zc = zones.as_tuple()
    vib = max(0.0, velocity_rms)
    if vib <= za:
        return float(100.0 - (vib / za) * 15.0)
    if vib <= zb:
        t = (vib - za) / (zb - za)
        return float(85.0 - t * 20.0)
    if vib <= zc:
        t = (vib - zb) / (zc - zb)
        return float(65.0 - t * 35.0)
    t = min((vib - zc) / zc, 1.0)
    return float(30.0 - t * 30.0)
