"""
src/analytics/wear.py
─────────────────────
Ferrography-based wear assessment.

  severity score   — PQ index above 50 costs 2 points per unit
  wear-mode score  — cutting / fatigue / sliding particle percentages
  overall          — mean of the two, rounded

Dominant wear mode follows rule priority (fatigue > abrasive > adhesive).
Bearing or gear wear indicators and fatigue particles force inspection.
"""
from __future__ import annotations

import logging

from config.scoring import (
    COMPONENT_RULES,
    PARTICLE_RULES,
    WEAR_RULES,
    WEAR_SEVERITY_BANDS,
    WearRules,
)
from src.analytics.statistics import clamp_score, round_half_up
from src.data.models import Trend, WearAssessment, WearMode, WearParticleAnalysis, WearSeverity

logger = logging.getLogger(__name__)


def classify_severity(overall_score: float) -> tuple[WearSeverity, int]:
    """Severity class and estimated component life (days) for a score."""
    for min_score, label, life_days in WEAR_SEVERITY_BANDS:
        if overall_score >= min_score:
            return WearSeverity(label), life_days
    _, label, life_days = WEAR_SEVERITY_BANDS[-1]
    return WearSeverity(label), life_days


def assess_wear_condition(wear: WearParticleAnalysis, rules: WearRules = WEAR_RULES) -> WearAssessment:
    """Score one wear-particle analysis."""
    recommendations: list[str] = []
    affected: list[str] = []
    inspection_required = False

    pq_index = wear.pq_index or 0.0
    severity_score = 100.0
    if pq_index > rules.pq_trigger:
        severity_score = max(0.0, 100.0 - (pq_index - rules.pq_trigger) * rules.pq_scale)
        if pq_index > rules.pq_inspection:
            recommendations.append(rules.pq_recommendation)
            inspection_required = True

    wear_mode_score = 100.0
    dominant = WearMode.NORMAL
    dominant_priority = 0
    for rule in PARTICLE_RULES:
        pct = getattr(wear, rule.field) or 0.0
        if pct <= rule.threshold_pct:
            continue
        wear_mode_score -= (pct - rule.threshold_pct) * rule.penalty_scale
        recommendations.append(rule.recommendation)
        inspection_required = inspection_required or rule.forces_inspection
        if rule.priority > dominant_priority:
            dominant = WearMode(rule.wear_mode)
            dominant_priority = rule.priority

    for rule in COMPONENT_RULES:
        indicator = getattr(wear, rule.field) or 0.0
        if indicator > rule.threshold:
            affected.append(rule.component)
            recommendations.append(rule.recommendation)
            inspection_required = inspection_required or rule.forces_inspection

    severity_score = clamp_score(severity_score)
    wear_mode_score = clamp_score(wear_mode_score)
    overall = round_half_up((severity_score + wear_mode_score) / 2.0)
    severity, component_life = classify_severity(overall)

    logger.debug(
        "Wear %s for %s: score=%d severity=%s mode=%s",
        wear.id, wear.equipment_id, overall, severity.value, dominant.value,
    )

    return WearAssessment(
        overall_score=overall,
        severity_score=round_half_up(severity_score),
        wear_mode_score=round_half_up(wear_mode_score),
        wear_severity=severity,
        dominant_wear_mode=dominant,
        affected_components=tuple(affected),
        wear_trend=Trend.STABLE,
        recommendations=tuple(recommendations),
        inspection_required=inspection_required,
        estimated_component_life=component_life,
    )


def wear_score(wear: WearParticleAnalysis) -> int:
    return assess_wear_condition(wear).overall_score
