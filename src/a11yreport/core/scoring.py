"""Health Score computation.

Exponential decay over a severity-weighted penalty:

    penalty = critical*10 + serious*6 + moderate*3 + minor*1
    score   = round(100 * exp(-0.05 * penalty / max(1, pages)))
"""

from __future__ import annotations

import math

from ..models.report import HealthScore, IssueBreakdown
from ..models.scan import Severity

HEALTH_SCORE_K = 0.05

SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.CRITICAL: 10,
    Severity.SERIOUS: 6,
    Severity.MODERATE: 3,
    Severity.MINOR: 1,
}

# (minimum value, grade, label), highest first
GRADE_THRESHOLDS: tuple[tuple[int, str, str], ...] = (
    (90, "A", "Excellent"),
    (80, "B", "Good"),
    (70, "C", "Fair"),
    (50, "D", "Needs Work"),
    (0, "F", "Poor"),
)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (``round`` is banker's)."""
    return int(math.floor(value + 0.5))


def grade_for(value: int) -> tuple[str, str]:
    """Return ``(grade, label)`` for a 0-100 score."""
    for minimum, grade, label in GRADE_THRESHOLDS:
        if value >= minimum:
            return grade, label
    return "F", "Poor"


def weighted_penalty(breakdown: IssueBreakdown) -> int:
    return (
        breakdown.critical * SEVERITY_WEIGHTS[Severity.CRITICAL]
        + breakdown.serious * SEVERITY_WEIGHTS[Severity.SERIOUS]
        + breakdown.moderate * SEVERITY_WEIGHTS[Severity.MODERATE]
        + breakdown.minor * SEVERITY_WEIGHTS[Severity.MINOR]
    )


def compute_health_score(breakdown: IssueBreakdown, pages_analyzed: int = 1) -> HealthScore:
    """Compute the Health Score for a severity breakdown.

    Raises ValueError for negative counts. ``IssueBreakdown`` already
    rejects them, so this only fires for instances built with
    ``model_construct`` or similar bypasses.
    """
    counts = (breakdown.critical, breakdown.serious, breakdown.moderate, breakdown.minor)
    if any(c < 0 for c in counts):
        raise ValueError(f"Severity counts must be non-negative, got {counts}")

    penalty = weighted_penalty(breakdown)
    normalized = penalty / max(1, pages_analyzed)
    raw_score = 100 * math.exp(-HEALTH_SCORE_K * normalized)
    value = max(0, min(100, round_half_up(raw_score)))
    grade, label = grade_for(value)

    return HealthScore(
        value=value,
        grade=grade,
        label=label,
        weighted_penalty=penalty,
        normalized_penalty=normalized,
    )
