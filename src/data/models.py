"""
src/data/models.py
──────────────────
Pydantic v2 data models for sensor signals, laboratory records, and the
derived diagnostics produced by the analysis engine.

Input records (signals, lab analyses, fault codes) are validated at the
boundary. Derived records are frozen: every assessment is recomputed from
its inputs, never patched in place.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from config.equipment import MachineClass

_FROZEN = ConfigDict(frozen=True)


class IsoZone(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class BearingFault(str, Enum):
    BPFO = "bpfo"
    BPFI = "bpfi"
    FTF = "ftf"
    BSF = "bsf"


class OilCondition(str, Enum):
    NORMAL = "normal"
    MARGINAL = "marginal"
    CRITICAL = "critical"


class WearSeverity(str, Enum):
    NORMAL = "normal"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"


class WearMode(str, Enum):
    ADHESIVE = "adhesive"
    ABRASIVE = "abrasive"
    FATIGUE = "fatigue"
    CORROSIVE = "corrosive"
    NORMAL = "normal"


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DEGRADING = "degrading"


class FailureRisk(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MaintenanceAction(str, Enum):
    MONITOR = "monitor"
    SERVICE = "service"
    REPAIR = "repair"


class MaintenanceUrgency(str, Enum):
    ROUTINE = "routine"
    URGENT = "urgent"
    IMMEDIATE = "immediate"


# ── Vibration ─────────────────────────────────────────────────────────────────


class BearingGeometry(BaseModel):
    """Rolling-element bearing dimensions (mm); contact angle in degrees."""
    model_config = _FROZEN

    inner_race_diameter: float = Field(gt=0.0)
    outer_race_diameter: float = Field(gt=0.0)
    ball_diameter: float = Field(gt=0.0)
    number_of_balls: int = Field(ge=1)
    contact_angle: float = Field(default=0.0, ge=0.0, lt=90.0)

    @property
    def pitch_diameter(self) -> float:
        return (self.inner_race_diameter + self.outer_race_diameter) / 2.0


class IsoAssessment(BaseModel):
    model_config = _FROZEN

    zone: IsoZone
    velocity_rms: float = Field(ge=0.0)   # mm/s
    machine_class: MachineClass
    thresholds: tuple[float, float, float]
    verdict: str


class BearingFaultFrequencies(BaseModel):
    model_config = _FROZEN

    bpfo: float
    bpfi: float
    ftf: float
    bsf: float
    rpm: float
    geometry: BearingGeometry

    @property
    def shaft_frequency(self) -> float:
        return self.rpm / 60.0

    def as_dict(self) -> dict[BearingFault, float]:
        return {
            BearingFault.BPFO: self.bpfo,
            BearingFault.BPFI: self.bpfi,
            BearingFault.FTF: self.ftf,
            BearingFault.BSF: self.bsf,
        }


class FaultDetection(BaseModel):
    model_config = _FROZEN

    fault: BearingFault
    target_frequency: float
    amplitude: float = Field(ge=0.0)
    threshold: float = Field(ge=0.0)
    detected: bool


class SpectralMetadata(BaseModel):
    model_config = _FROZEN

    noise_floor: float = Field(ge=0.0)
    spectral_centroid: float = Field(ge=0.0)
    total_power: float = Field(ge=0.0)


class VibrationFeatureSet(BaseModel):
    model_config = _FROZEN

    rms: float = Field(ge=0.0)
    crest_factor: float = Field(ge=0.0)
    kurtosis: float = Field(ge=0.0)
    peak_frequency: float = Field(ge=0.0)
    bands: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    sample_count: int = Field(ge=0)
    sample_rate: float
    metadata: SpectralMetadata | None = None
    iso_assessment: IsoAssessment | None = None
    bearing_faults: BearingFaultFrequencies | None = None
    bearing_detections: tuple[FaultDetection, ...] | None = None


class VibrationSignal(BaseModel):
    """One captured vibration record queued for batch analysis."""
    model_config = _FROZEN

    equipment_id: str
    values: tuple[float, ...]
    sample_rate: float = Field(gt=0.0)
    rpm: float | None = Field(default=None, ge=0.0)
    machine_class: MachineClass | None = None
    bearing_geometry: BearingGeometry | None = None
    timestamp: datetime | None = None


class BatchVibrationResult(BaseModel):
    model_config = _FROZEN

    index: int
    equipment_id: str
    timestamp: datetime | None = None
    features: VibrationFeatureSet


# ── Oil analysis ──────────────────────────────────────────────────────────────


class OilAnalysis(BaseModel):
    id: str
    equipment_id: str
    org_id: str | None = None
    sample_date: datetime
    viscosity_40c: float | None = Field(default=None, ge=0.0)      # cSt
    viscosity_100c: float | None = Field(default=None, ge=0.0)     # cSt
    viscosity_index: float | None = Field(default=None, ge=0.0)
    water_content: float | None = Field(default=None, ge=0.0, le=100.0)  # %
    fuel_dilution: float | None = Field(default=None, ge=0.0, le=100.0)  # %
    iron: float | None = Field(default=None, ge=0.0)       # ppm
    chromium: float | None = Field(default=None, ge=0.0)
    aluminum: float | None = Field(default=None, ge=0.0)
    copper: float | None = Field(default=None, ge=0.0)
    lead: float | None = Field(default=None, ge=0.0)
    tin: float | None = Field(default=None, ge=0.0)
    calcium: float | None = Field(default=None, ge=0.0)
    zinc: float | None = Field(default=None, ge=0.0)
    oxidation: float | None = Field(default=None, ge=0.0)   # abs/cm
    acid_number: float | None = Field(default=None, ge=0.0)  # mg KOH/g
    service_hours: float | None = Field(default=None, ge=0.0)


class OilConditionAssessment(BaseModel):
    model_config = _FROZEN

    overall_score: int = Field(ge=0, le=100)
    viscosity_score: int = Field(ge=0, le=100)
    contamination_score: int = Field(ge=0, le=100)
    wear_metals_score: int = Field(ge=0, le=100)
    additive_score: int = Field(ge=0, le=100)
    oxidation_score: int = Field(ge=0, le=100)
    condition: OilCondition
    primary_concerns: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    change_recommended: bool = False
    estimated_remaining_life: int = Field(ge=0)  # days


# ── Wear particle analysis ────────────────────────────────────────────────────


class WearParticleAnalysis(BaseModel):
    id: str
    equipment_id: str
    org_id: str | None = None
    sample_date: datetime
    pq_index: float | None = Field(default=None, ge=0.0)
    cutting_particles: float | None = Field(default=None, ge=0.0, le=100.0)   # %
    fatigue_particles: float | None = Field(default=None, ge=0.0, le=100.0)
    sliding_particles: float | None = Field(default=None, ge=0.0, le=100.0)
    bearing_wear: float | None = Field(default=None, ge=0.0)
    gear_wear: float | None = Field(default=None, ge=0.0)
    pump_wear: float | None = Field(default=None, ge=0.0)
    cylinder_wear: float | None = Field(default=None, ge=0.0)


class WearAssessment(BaseModel):
    model_config = _FROZEN

    overall_score: int = Field(ge=0, le=100)
    severity_score: int = Field(ge=0, le=100)
    wear_mode_score: int = Field(ge=0, le=100)
    wear_severity: WearSeverity
    dominant_wear_mode: WearMode
    affected_components: tuple[str, ...] = ()
    wear_trend: Trend = Trend.STABLE
    recommendations: tuple[str, ...] = ()
    inspection_required: bool = False
    estimated_component_life: int = Field(ge=0)  # days


# ── Fault codes ───────────────────────────────────────────────────────────────


class DtcFault(BaseModel):
    """An active J1939-style diagnostic trouble code."""
    spn: int = Field(ge=0)
    fmi: int = Field(ge=0)
    severity: int | None = Field(default=None, ge=1, le=4)  # 1 = critical
    occurrence_count: int = Field(default=1, ge=0)
    description: str = "Unknown fault"


class DtcSummary(BaseModel):
    model_config = _FROZEN

    active_count: int = 0
    critical_count: int = 0
    high_count: int = 0
    moderate_count: int = 0
    low_count: int = 0
    top_faults: tuple[DtcFault, ...] = ()


# ── Fused condition ───────────────────────────────────────────────────────────


class ConditionMonitoringRecord(BaseModel):
    model_config = _FROZEN

    equipment_id: str
    org_id: str | None = None
    assessed_at: datetime
    oil_condition_score: int = Field(ge=0, le=100)
    wear_condition_score: int | None = Field(default=None, ge=0, le=100)
    vibration_score: float | None = Field(default=None, ge=0.0, le=100.0)
    dtc_score: float | None = Field(default=None, ge=0.0, le=100.0)
    thermal_score: float | None = None
    overall_condition_score: int = Field(ge=0, le=100)
    trend: Trend = Trend.STABLE
    trend_confidence: float = Field(default=0.8, ge=0.0, le=1.0)
    failure_risk: FailureRisk
    estimated_ttf: float = Field(ge=0.0)           # days
    confidence_interval: float = 0.2
    maintenance_action: MaintenanceAction
    maintenance_urgency: MaintenanceUrgency
    maintenance_window: float = Field(ge=0.0)      # days
    last_oil_analysis_id: str
    last_wear_analysis_id: str | None = None
    last_vibration_analysis_id: str | None = None
    assessment_method: str
    analysis_summary: str
    recommendations: tuple[str, ...] = ()
    analyst_id: str = "system"
    oil_assessment: OilConditionAssessment
    wear_assessment: WearAssessment | None = None


class MaintenanceRecommendation(BaseModel):
    model_config = _FROZEN

    equipment_id: str
    priority: FailureRisk
    action: str
    reasoning: str
    estimated_cost: float
    timeframe: str
