"""
src/analytics/dtc.py
────────────────────
Fault-code (DTC) health scoring.

Each active code costs a base penalty by severity (1=30, 2=20, 3=10, 4=5),
amplified by how often it has occurred (up to 3× at 20+ occurrences). The
summed penalty is capped at 100 and the DTC score is 100 − penalty.
"""
from __future__ import annotations

from collections.abc import Iterable

from config.scoring import (
    DTC_DEFAULT_SEVERITY,
    DTC_OCCURRENCE_CAP,
    DTC_OCCURRENCE_DIVISOR,
    DTC_PENALTY_CAP,
    DTC_SEVERITY_PENALTY,
)
from src.data.models import DtcFault, DtcSummary

TOP_FAULTS = 5


def dtc_health_penalty(faults: Iterable[DtcFault]) -> float:
    """Health penalty (0–100, higher = worse) from active fault codes."""
    penalty = 0.0
    for fault in faults:
        severity = fault.severity or DTC_DEFAULT_SEVERITY
        base = DTC_SEVERITY_PENALTY.get(severity, DTC_SEVERITY_PENALTY[DTC_DEFAULT_SEVERITY])
        multiplier = min(fault.occurrence_count / DTC_OCCURRENCE_DIVISOR, DTC_OCCURRENCE_CAP)
        penalty += base * (1.0 + multiplier)
    return min(penalty, DTC_PENALTY_CAP)


def dtc_score(faults: Iterable[DtcFault]) -> float:
    """0–100 health score; 100 when no codes are active."""
    return 100.0 - dtc_health_penalty(faults)


def summarize_dtcs(faults: Iterable[DtcFault]) -> DtcSummary:
    """Counts per severity plus the five most serious codes."""
    faults = list(faults)
    ranked = sorted(faults, key=lambda f: (f.severity or 999, -f.occurrence_count))
    return DtcSummary(
        active_count=len(faults),
        critical_count=sum(1 for f in faults if f.severity == 1),
        high_count=sum(1 for f in faults if f.severity == 2),
        moderate_count=sum(1 for f in faults if f.severity == 3),
        low_count=sum(1 for f in faults if f.severity == 4),
        top_faults=tuple(ranked[:TOP_FAULTS]),
    )
