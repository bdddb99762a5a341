# backend/app/core/scoring/grading.py
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Tuple

# Inclusive lower bounds, checked top-down
GRADE_THRESHOLDS: List[Tuple[float, str]] = [
    (9.0, "Excellent"),
    (7.5, "Good"),
    (6.0, "Average"),
    (4.0, "Improvement Required"),
]
LOWEST_GRADE = "Unsatisfactory"


def round1(value: float) -> float:
    """
    Round to one decimal place, half up, on the value's decimal repr
    (7.25 -> 7.3, 6.85 -> 6.9, 7.666... -> 7.7).
    """
    return float(Decimal(repr(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def grade_for(score: float) -> str:
    """Qualitative label for any 0-10 score (final score, field or sub-field)."""
    for lower_bound, label in GRADE_THRESHOLDS:
        if score >= lower_bound:
            return label
    return LOWEST_GRADE
