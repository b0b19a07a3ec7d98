"""
src/analytics/fusion.py
───────────────────────
Condition fusion: oil + wear + vibration + fault codes → one record.

Weights depend on which optional factors are present (oil, wear, vib, dtc):

  wear + vib + dtc   0.40 / 0.30 / 0.15 / 0.15
  wear + dtc         0.50 / 0.35 / 0    / 0.15
  wear               0.60 / 0.40
  dtc                0.70 / 0    / 0    / 0.30
  vib, no dtc        oil/wear blend first, then 0.8 / 0.2 with vibration
  vib + dtc, no wear four-factor weights renormalized over present factors

Failure risk buckets the overall score (≥85 low, ≥70 medium, ≥50 high,
else critical) except that a DTC score below 30 forces critical.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from config.scoring import (
    CONFIDENCE_INTERVAL,
    DEFAULT_COMPONENT_LIFE_DAYS,
    DTC_CRITICAL_SCORE,
    DTC_CRITICAL_TTF_DAYS,
    DTC_SERVICE_SCORE,
    DTC_SERVICE_TTF_DAYS,
    FAILURE_RISK_BANDS,
    FUSION_WEIGHTS,
    LEGACY_OIL_WEAR_WEIGHTS,
    LEGACY_VIBRATION_BLEND,
    MAINTENANCE_PLAN,
    MAINTENANCE_WINDOW_FRACTION,
)
from src.analytics.oil import assess_oil_condition
from src.analytics.statistics import clamp_score, round_half_up
from src.analytics.trend import classify_trend
from src.analytics.wear import assess_wear_condition
from src.data.models import (
    ConditionMonitoringRecord,
    FailureRisk,
    MaintenanceAction,
    MaintenanceRecommendation,
    MaintenanceUrgency,
    OilAnalysis,
    OilConditionAssessment,
    WearAssessment,
    WearParticleAnalysis,
)

logger = logging.getLogger(__name__)


# ── Scoring ───────────────────────────────────────────────────────────────────


def _renormalized_weights(has_wear: bool, has_vib: bool, has_dtc: bool) -> tuple[float, float, float, float]:
    full = FUSION_WEIGHTS[(True, True, True)]
    present = (True, has_wear, has_vib, has_dtc)
    total = sum(w for w, p in zip(full, present, strict=True) if p)
    w_oil, w_wear, w_vib, w_dtc = (w / total if p else 0.0 for w, p in zip(full, present, strict=True))
    return (w_oil, w_wear, w_vib, w_dtc)


def fusion_weights(has_wear: bool, has_vibration: bool, has_dtc: bool) -> tuple[float, float, float, float]:
    """(oil, wear, vibration, dtc) weights for a weighted-sum combination."""
    key = (has_wear, has_vibration, has_dtc)
    if key in FUSION_WEIGHTS:
        return FUSION_WEIGHTS[key]
    return _renormalized_weights(has_wear, has_vibration, has_dtc)


def overall_score(
    oil_score: float,
    wear_score: float | None = None,
    vibration_score: float | None = None,
    dtc_score: float | None = None,
) -> int:
    """Fused 0–100 condition score."""
    has_wear = wear_score is not None
    has_vib = vibration_score is not None
    has_dtc = dtc_score is not None

    if has_vib and not has_dtc:
        blended = float(oil_score)
        if has_wear:
            w_oil, w_wear = LEGACY_OIL_WEAR_WEIGHTS
            blended = round_half_up(oil_score * w_oil + wear_score * w_wear)
        w_base, w_vib = LEGACY_VIBRATION_BLEND
        return round_half_up(clamp_score(blended * w_base + vibration_score * w_vib))

    w_oil, w_wear, w_vib, w_dtc = fusion_weights(has_wear, has_vib, has_dtc)
    total = (
        w_oil * oil_score
        + w_wear * (wear_score or 0.0)
        + w_vib * (vibration_score or 0.0)
        + w_dtc * (dtc_score or 0.0)
    )
    return round_half_up(clamp_score(total))


def classify_failure_risk(score: float, dtc_score: float | None = None) -> FailureRisk:
    if dtc_score is not None and dtc_score < DTC_CRITICAL_SCORE:
        return FailureRisk.CRITICAL
    for min_score, label in FAILURE_RISK_BANDS:
        if score >= min_score:
            return FailureRisk(label)
    return FailureRisk.CRITICAL


def decide_maintenance(
    oil: OilConditionAssessment,
    wear: WearAssessment | None,
    risk: FailureRisk,
    dtc_score: float | None,
) -> tuple[MaintenanceAction, MaintenanceUrgency]:
    """Escalate monitor/routine → service/urgent → repair/immediate."""
    if risk == FailureRisk.CRITICAL or (dtc_score is not None and dtc_score < DTC_CRITICAL_SCORE):
        return MaintenanceAction.REPAIR, MaintenanceUrgency.IMMEDIATE
    if (
        oil.change_recommended
        or (wear is not None and wear.inspection_required)
        or (dtc_score is not None and dtc_score < DTC_SERVICE_SCORE)
    ):
        return MaintenanceAction.SERVICE, MaintenanceUrgency.URGENT
    return MaintenanceAction.MONITOR, MaintenanceUrgency.ROUTINE


def estimate_time_to_failure(
    oil: OilConditionAssessment,
    wear: WearAssessment | None,
    dtc_score: float | None,
) -> float:
    component_life = wear.estimated_component_life if wear is not None else DEFAULT_COMPONENT_LIFE_DAYS
    ttf = float(min(oil.estimated_remaining_life, component_life))
    if dtc_score is not None:
        if dtc_score < DTC_CRITICAL_SCORE:
            ttf = min(ttf, DTC_CRITICAL_TTF_DAYS)
        elif dtc_score < DTC_SERVICE_SCORE:
            ttf = min(ttf, DTC_SERVICE_TTF_DAYS)
    return ttf


def _dtc_recommendations(dtc_score: float | None) -> list[str]:
    if dtc_score is None:
        return []
    if dtc_score < DTC_CRITICAL_SCORE:
        return ["Critical fault codes active - remove from service and diagnose immediately"]
    if dtc_score < DTC_SERVICE_SCORE:
        return ["Multiple active fault codes - schedule diagnostic service"]
    return []


def _summary(
    oil: OilConditionAssessment,
    wear: WearAssessment | None,
    vibration_score: float | None,
    dtc_score: float | None,
) -> str:
    parts = [f"Oil condition: {oil.condition.value}"]
    if wear is not None:
        parts.append(f"Wear severity: {wear.wear_severity.value}")
    if vibration_score is not None:
        parts.append(f"Vibration score: {vibration_score:.0f}")
    if dtc_score is not None:
        parts.append(f"DTC score: {dtc_score:.0f}")
    return ", ".join(parts)


def _assessment_method(has_wear: bool, has_vib: bool, has_dtc: bool) -> str:
    method = "combined" if has_wear else "oil"
    if has_vib:
        method += "+vibration"
    if has_dtc:
        method += "+dtc"
    return method


# ── Main API ──────────────────────────────────────────────────────────────────


def fuse(
    oil_analysis: OilAnalysis,
    wear_analysis: WearParticleAnalysis | None = None,
    vibration_score: float | None = None,
    dtc_score: float | None = None,
    *,
    vibration_analysis_id: str | None = None,
    history: Sequence[float] | None = None,
    assessed_at: datetime | None = None,
) -> ConditionMonitoringRecord:
    """
    Build the integrated condition record for one equipment unit.

    `history` is the chronological list of earlier overall scores used for the
    trend label. `assessed_at` defaults to the oil sample date.
    """
    oil = assess_oil_condition(oil_analysis)
    wear = assess_wear_condition(wear_analysis) if wear_analysis is not None else None
    vib = clamp_score(vibration_score) if vibration_score is not None else None
    dtc = clamp_score(dtc_score) if dtc_score is not None else None

    score = overall_score(oil.overall_score, wear.overall_score if wear else None, vib, dtc)
    risk = classify_failure_risk(score, dtc)
    action, urgency = decide_maintenance(oil, wear, risk, dtc)
    ttf = estimate_time_to_failure(oil, wear, dtc)

    if history:
        trend, trend_confidence = classify_trend([*history, score])
    else:
        trend, trend_confidence = classify_trend([])

    recommendations = [
        *oil.recommendations,
        *(wear.recommendations if wear else ()),
        *_dtc_recommendations(dtc),
    ]

    logger.info(
        "Condition %s: score=%d risk=%s action=%s ttf=%.0fd",
        oil_analysis.equipment_id, score, risk.value, action.value, ttf,
    )

    return ConditionMonitoringRecord(
        equipment_id=oil_analysis.equipment_id,
        org_id=oil_analysis.org_id,
        assessed_at=assessed_at or oil_analysis.sample_date,
        oil_condition_score=oil.overall_score,
        wear_condition_score=wear.overall_score if wear else None,
        vibration_score=vib,
        dtc_score=dtc,
        overall_condition_score=score,
        trend=trend,
        trend_confidence=trend_confidence,
        failure_risk=risk,
        estimated_ttf=ttf,
        confidence_interval=CONFIDENCE_INTERVAL,
        maintenance_action=action,
        maintenance_urgency=urgency,
        maintenance_window=ttf * MAINTENANCE_WINDOW_FRACTION,
        last_oil_analysis_id=oil_analysis.id,
        last_wear_analysis_id=wear_analysis.id if wear_analysis is not None else None,
        last_vibration_analysis_id=vibration_analysis_id,
        assessment_method=_assessment_method(wear is not None, vib is not None, dtc is not None),
        analysis_summary=_summary(oil, wear, vib, dtc),
        recommendations=tuple(recommendations),
        oil_assessment=oil,
        wear_assessment=wear,
    )


def plan_maintenance(records: Iterable[ConditionMonitoringRecord]) -> list[MaintenanceRecommendation]:
    """Priority, cost and timeframe for each assessed unit."""
    plan = []
    for record in records:
        priority, cost, timeframe = MAINTENANCE_PLAN[record.failure_risk.value]
        plan.append(MaintenanceRecommendation(
            equipment_id=record.equipment_id,
            priority=FailureRisk(priority),
            action=record.maintenance_action.value,
            reasoning="; ".join(record.recommendations) or "Routine maintenance",
            estimated_cost=cost,
            timeframe=timeframe,
        ))
    return plan
