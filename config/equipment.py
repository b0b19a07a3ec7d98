"""
config/equipment.py
───────────────────
ISO 10816-1 machine classes and vibration severity zones.

Zone limits are velocity RMS in mm/s (10–1000 Hz):
  Zone A: ≤ zone_a  → Good (newly commissioned)
  Zone B: ≤ zone_b  → Satisfactory (unrestricted long-term operation)
  Zone C: ≤ zone_c  → Unsatisfactory (limited period only)
  Zone D: > zone_c  → Unacceptable (damage risk)
"""
from dataclasses import dataclass
from enum import Enum


class MachineClass(str, Enum):
    I = "I"        # small machines, < 15 kW
    II = "II"      # medium machines, 15–75 kW
    III = "III"    # large machines, rigid foundations
    IV = "IV"      # large machines, flexible foundations


@dataclass(frozen=True)
class VibrationZones:
    """ISO 10816 vibration zone boundaries in mm/s RMS."""
    zone_a: float  # ≤ zone_a → A
    zone_b: float  # ≤ zone_b → B
    zone_c: float  # ≤ zone_c → C
    # > zone_c → D

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.zone_a, self.zone_b, self.zone_c)


ISO_10816_ZONES: dict[MachineClass, VibrationZones] = {
    MachineClass.I: VibrationZones(zone_a=0.71, zone_b=1.8, zone_c=4.5),
    MachineClass.II: VibrationZones(zone_a=1.12, zone_b=2.8, zone_c=7.1),
    MachineClass.III: VibrationZones(zone_a=1.8, zone_b=4.5, zone_c=11.2),
    MachineClass.IV: VibrationZones(zone_a=2.8, zone_b=7.1, zone_c=18.0),
}

ZONE_VERDICTS: dict[str, str] = {
    "A": "Good - vibration typical of newly commissioned machines",
    "B": "Satisfactory - unrestricted long-term operation",
    "C": "Unsatisfactory - operate only for a limited period, plan corrective action",
    "D": "Unacceptable - vibration severe enough to cause damage",
}
