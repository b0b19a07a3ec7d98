"""
config/scoring.py
─────────────────
Declarative rule tables for the condition scoring engines.

Every threshold, scale factor and weight used by the oil, wear, DTC and
fusion scorers lives here so the rules can be reviewed and tuned without
touching control flow.
"""
from dataclasses import dataclass

# ── Oil analysis ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class OilRules:
    # Viscosity index: nominal 100, tolerated deviation ±15
    viscosity_index_nominal: float = 100.0
    viscosity_index_tolerance: float = 15.0
    viscosity_penalty_factor: float = 2.0
    viscosity_concern_score: float = 70.0

    # Contamination (water in %, fuel dilution in %)
    water_trigger_pct: float = 0.05
    water_scale: float = 1000.0
    water_penalty_cap: float = 50.0
    water_change_pct: float = 0.1
    fuel_trigger_pct: float = 2.0
    fuel_scale: float = 5.0
    fuel_penalty_cap: float = 30.0
    fuel_change_pct: float = 5.0

    # Wear metals: accumulated excess ratio over limit
    wear_metal_scale: float = 20.0
    wear_metal_concern_ratio: float = 0.5
    wear_metal_change_ratio: float = 2.0

    # Additive reference levels (ppm) for marine lubricants
    calcium_reference_ppm: float = 1000.0
    zinc_reference_ppm: float = 800.0
    additive_scale: float = 50.0
    additive_concern_penalty: float = 20.0

    # Oxidation (abs/cm) and total acid number (mg KOH/g)
    oxidation_trigger: float = 20.0
    oxidation_divisor: float = 2.0
    oxidation_penalty_cap: float = 40.0
    oxidation_change: float = 50.0
    acid_trigger: float = 2.5
    acid_scale: float = 10.0
    acid_penalty_cap: float = 30.0
    acid_change: float = 4.0

    # Condition classes on the overall score
    normal_min_score: float = 80.0
    marginal_min_score: float = 60.0

    # Remaining life estimation (days)
    default_life_days: float = 365.0
    marginal_life_days: float = 90.0
    critical_life_days: float = 30.0
    service_hours_trigger: float = 500.0
    change_interval_hours: float = 1000.0
    days_per_hour: float = 0.5


OIL_RULES = OilRules()

# Typical engine limits in ppm, in reporting order
WEAR_METAL_LIMITS_PPM: dict[str, float] = {
    "iron": 100.0,
    "chromium": 20.0,
    "aluminum": 30.0,
    "copper": 30.0,
    "lead": 30.0,
    "tin": 20.0,
}

OIL_WEIGHTS: dict[str, float] = {
    "viscosity": 0.25,
    "contamination": 0.25,
    "wear_metals": 0.25,
    "additive": 0.15,
    "oxidation": 0.10,
}

# ── Wear particle analysis ────────────────────────────────────────────────────


@dataclass(frozen=True)
class ParticleRule:
    field: str
    threshold_pct: float
    penalty_scale: float
    wear_mode: str
    priority: int  # higher wins when several modes trigger
    recommendation: str
    forces_inspection: bool = False


@dataclass(frozen=True)
class ComponentRule:
    field: str
    threshold: float
    component: str
    recommendation: str
    forces_inspection: bool = False


@dataclass(frozen=True)
class WearRules:
    pq_trigger: float = 50.0
    pq_scale: float = 2.0
    pq_inspection: float = 100.0
    pq_recommendation: str = "High wear particle concentration - immediate investigation required"


WEAR_RULES = WearRules()

PARTICLE_RULES: tuple[ParticleRule, ...] = (
    ParticleRule(
        field="cutting_particles",
        threshold_pct=30.0,
        penalty_scale=2.0,
        wear_mode="abrasive",
        priority=2,
        recommendation="High cutting particles indicate abrasive wear - check filtration",
    ),
    ParticleRule(
        field="fatigue_particles",
        threshold_pct=20.0,
        penalty_scale=3.0,
        wear_mode="fatigue",
        priority=3,
        recommendation="Fatigue particles detected - examine bearing and gear surfaces",
        forces_inspection=True,
    ),
    ParticleRule(
        field="sliding_particles",
        threshold_pct=25.0,
        penalty_scale=2.0,
        wear_mode="adhesive",
        priority=1,
        recommendation="High sliding particles - check lubrication adequacy",
    ),
)

COMPONENT_RULES: tuple[ComponentRule, ...] = (
    ComponentRule("bearing_wear", 15.0, "Bearings", "Elevated bearing wear indicators", True),
    ComponentRule("gear_wear", 20.0, "Gears", "Gear wear particles detected - inspect gear teeth", True),
    ComponentRule("pump_wear", 10.0, "Pump components", "Pump wear detected - check impeller and casing"),
    ComponentRule("cylinder_wear", 25.0, "Engine cylinders", "Cylinder wear particles - monitor engine condition"),
)

# (minimum overall score, severity class, estimated component life in days)
WEAR_SEVERITY_BANDS: tuple[tuple[float, str, int], ...] = (
    (85.0, "normal", 5 * 365),
    (70.0, "moderate", 2 * 365),
    (50.0, "high", 365),
    (0.0, "severe", 180),
)

# ── DTC (fault code) scoring ──────────────────────────────────────────────────

DTC_SEVERITY_PENALTY: dict[int, float] = {1: 30.0, 2: 20.0, 3: 10.0, 4: 5.0}
DTC_DEFAULT_SEVERITY = 4
DTC_OCCURRENCE_DIVISOR = 10.0
DTC_OCCURRENCE_CAP = 2.0
DTC_PENALTY_CAP = 100.0

# ── Condition fusion ──────────────────────────────────────────────────────────

# Keyed by (has_wear, has_vibration, has_dtc); values are
# (oil, wear, vibration, dtc) weights summing to 1.0.
FUSION_WEIGHTS: dict[tuple[bool, bool, bool], tuple[float, float, float, float]] = {
    (True, True, True): (0.40, 0.30, 0.15, 0.15),
    (True, False, True): (0.50, 0.35, 0.0, 0.15),
    (True, False, False): (0.60, 0.40, 0.0, 0.0),
    (False, False, True): (0.70, 0.0, 0.0, 0.30),
    (False, False, False): (1.0, 0.0, 0.0, 0.0),
}

# Oil/wear blend, then vibration re-blend when no DTC score is supplied
LEGACY_OIL_WEAR_WEIGHTS: tuple[float, float] = (0.60, 0.40)
LEGACY_VIBRATION_BLEND: tuple[float, float] = (0.80, 0.20)

# (minimum overall score, failure risk)
FAILURE_RISK_BANDS: tuple[tuple[float, str], ...] = (
    (85.0, "low"),
    (70.0, "medium"),
    (50.0, "high"),
    (0.0, "critical"),
)

DTC_CRITICAL_SCORE = 30.0
DTC_SERVICE_SCORE = 50.0
DTC_CRITICAL_TTF_DAYS = 7.0
DTC_SERVICE_TTF_DAYS = 30.0
DEFAULT_COMPONENT_LIFE_DAYS = 5 * 365
MAINTENANCE_WINDOW_FRACTION = 0.8
DEFAULT_TREND_CONFIDENCE = 0.8
CONFIDENCE_INTERVAL = 0.2

# ── Maintenance planning ──────────────────────────────────────────────────────

# failure risk → (priority, estimated cost, timeframe)
MAINTENANCE_PLAN: dict[str, tuple[str, float, str]] = {
    "critical": ("critical", 5000.0, "immediate"),
    "high": ("high", 3000.0, "1 week"),
    "medium": ("medium", 2000.0, "2 weeks"),
    "low": ("low", 1000.0, "30 days"),
}

# ── Trend classification ──────────────────────────────────────────────────────

TREND_MIN_POINTS = 3
TREND_STABLE_SLOPE = 0.5      # score points per assessment
TREND_CRITICAL_SCORE = 50.0
