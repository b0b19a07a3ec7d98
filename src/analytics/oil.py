"""
src/analytics/oil.py
────────────────────
Rule-based lubricant condition assessment.

Five sub-scores start at 100 and are penalized independently:

  viscosity      25%  — viscosity index drift from 100
  contamination  25%  — water content and fuel dilution
  wear_metals    25%  — Fe / Cr / Al / Cu / Pb / Sn over ppm limits
  additive       15%  — Ca / Zn depletion vs reference levels
  oxidation      10%  — oxidation and total acid number

Every rule that fires appends a concern and a recommendation. Thresholds and
weights come from config.scoring.
"""
from __future__ import annotations

import logging

from config.scoring import OIL_RULES, OIL_WEIGHTS, WEAR_METAL_LIMITS_PPM, OilRules
from src.analytics.statistics import clamp_score, round_half_up
from src.data.models import OilAnalysis, OilCondition, OilConditionAssessment

logger = logging.getLogger(__name__)


class _Findings:
    """Concerns and recommendations collected while scoring one sample."""

    def __init__(self) -> None:
        self.concerns: list[str] = []
        self.recommendations: list[str] = []
        self.change_recommended = False

    def add(self, concern: str, recommendation: str) -> None:
        self.concerns.append(concern)
        self.recommendations.append(recommendation)


# ── Sub-scores ────────────────────────────────────────────────────────────────


def _viscosity_score(oil: OilAnalysis, rules: OilRules, findings: _Findings) -> float:
    if not (oil.viscosity_40c and oil.viscosity_index):
        return 100.0
    deviation = abs(oil.viscosity_index - rules.viscosity_index_nominal)
    if deviation <= rules.viscosity_index_tolerance:
        return 100.0
    score = max(0.0, 100.0 - deviation * rules.viscosity_penalty_factor)
    if score < rules.viscosity_concern_score:
        findings.add("Viscosity degradation", "Monitor viscosity trend, consider oil change")
    return score


def _contamination_score(oil: OilAnalysis, rules: OilRules, findings: _Findings) -> float:
    score = 100.0
    water = oil.water_content or 0.0
    if water > rules.water_trigger_pct:
        score -= min(rules.water_penalty_cap, water * rules.water_scale)
        findings.add("Water contamination", "Investigate water ingress sources")
        if water > rules.water_change_pct:
            findings.change_recommended = True

    fuel = oil.fuel_dilution or 0.0
    if fuel > rules.fuel_trigger_pct:
        score -= min(rules.fuel_penalty_cap, fuel * rules.fuel_scale)
        findings.add("Fuel contamination", "Check fuel system for leaks")
        if fuel > rules.fuel_change_pct:
            findings.change_recommended = True
    return score


def _wear_metals_score(oil: OilAnalysis, rules: OilRules, findings: _Findings) -> float:
    total_excess = 0.0
    for metal, limit in WEAR_METAL_LIMITS_PPM.items():
        value = getattr(oil, metal) or 0.0
        if value <= limit:
            continue
        excess = (value - limit) / limit
        total_excess += excess
        if excess > rules.wear_metal_concern_ratio:
            findings.add(f"Elevated {metal} levels", f"Investigate {metal} source component wear")

    if total_excess > rules.wear_metal_change_ratio:
        findings.change_recommended = True
    return max(0.0, 100.0 - total_excess * rules.wear_metal_scale)


def _additive_score(oil: OilAnalysis, rules: OilRules, findings: _Findings) -> float:
    # Both elements must be reported for a depletion estimate
    if not (oil.calcium and oil.zinc):
        return 100.0
    calcium_depletion = max(0.0, (rules.calcium_reference_ppm - oil.calcium) / rules.calcium_reference_ppm)
    zinc_depletion = max(0.0, (rules.zinc_reference_ppm - oil.zinc) / rules.zinc_reference_ppm)
    penalty = (calcium_depletion + zinc_depletion) * rules.additive_scale
    if penalty > rules.additive_concern_penalty:
        findings.add("Additive depletion", "Monitor additive levels, plan oil change")
    return 100.0 - penalty


def _oxidation_score(oil: OilAnalysis, rules: OilRules, findings: _Findings) -> float:
    score = 100.0
    oxidation = oil.oxidation or 0.0
    if oxidation > rules.oxidation_trigger:
        score -= min(rules.oxidation_penalty_cap, (oxidation - rules.oxidation_trigger) / rules.oxidation_divisor)
        findings.add("Oil oxidation", "Monitor oxidation trend, improve oil cooling")
        if oxidation > rules.oxidation_change:
            findings.change_recommended = True

    acid = oil.acid_number or 0.0
    if acid > rules.acid_trigger:
        score -= min(rules.acid_penalty_cap, (acid - rules.acid_trigger) * rules.acid_scale)
        findings.add("Elevated acid number", "Consider oil change due to acid buildup")
        if acid > rules.acid_change:
            findings.change_recommended = True
    return score


# ── Condition and life ────────────────────────────────────────────────────────


def classify_condition(overall_score: float, rules: OilRules = OIL_RULES) -> OilCondition:
    if overall_score >= rules.normal_min_score:
        return OilCondition.NORMAL
    if overall_score >= rules.marginal_min_score:
        return OilCondition.MARGINAL
    return OilCondition.CRITICAL


def estimate_remaining_life(
    condition: OilCondition,
    service_hours: float | None,
    rules: OilRules = OIL_RULES,
) -> float:
    """Days until the next oil change is due."""
    if condition == OilCondition.CRITICAL:
        return rules.critical_life_days
    if condition == OilCondition.MARGINAL:
        return rules.marginal_life_days

    # Service hours only shorten the life of oil still in normal condition
    life = rules.default_life_days
    if service_hours and service_hours > rules.service_hours_trigger:
        hours_remaining = max(0.0, rules.change_interval_hours - service_hours)
        life = min(life, hours_remaining * rules.days_per_hour)
    return life


# ── Main API ──────────────────────────────────────────────────────────────────


def assess_oil_condition(oil: OilAnalysis, rules: OilRules = OIL_RULES) -> OilConditionAssessment:
    """Score one oil laboratory sample."""
    findings = _Findings()

    scores = {
        "viscosity": clamp_score(_viscosity_score(oil, rules, findings)),
        "contamination": clamp_score(_contamination_score(oil, rules, findings)),
        "wear_metals": clamp_score(_wear_metals_score(oil, rules, findings)),
        "additive": clamp_score(_additive_score(oil, rules, findings)),
        "oxidation": clamp_score(_oxidation_score(oil, rules, findings)),
    }
    overall = round_half_up(clamp_score(sum(OIL_WEIGHTS[k] * v for k, v in scores.items())))
    condition = classify_condition(overall, rules)
    remaining = estimate_remaining_life(condition, oil.service_hours, rules)

    logger.debug(
        "Oil %s for %s: score=%d condition=%s change=%s",
        oil.id, oil.equipment_id, overall, condition.value, findings.change_recommended,
    )

    return OilConditionAssessment(
        overall_score=overall,
        viscosity_score=round_half_up(scores["viscosity"]),
        contamination_score=round_half_up(scores["contamination"]),
        wear_metals_score=round_half_up(scores["wear_metals"]),
        additive_score=round_half_up(scores["additive"]),
        oxidation_score=round_half_up(scores["oxidation"]),
        condition=condition,
        primary_concerns=tuple(findings.concerns),
        recommendations=tuple(findings.recommendations),
        change_recommended=findings.change_recommended,
        estimated_remaining_life=round_half_up(remaining),
    )


def oil_quality_score(oil: OilAnalysis) -> int:
    return assess_oil_condition(oil).overall_score
