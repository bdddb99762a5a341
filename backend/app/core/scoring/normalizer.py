# backend/app/core/scoring/normalizer.py
import math
from typing import Iterable, Sequence

from backend.app.config.settings import DEFAULT_SUB_FIELD_MAX, NORMALIZED_MAX
from backend.app.core.errors import ValidationError
from backend.app.core.scoring.grading import round1
from backend.app.schemas.evaluation_schemas import RawSubScore


def _check_raw_scores(values: Iterable[float]) -> None:
    for v in values:
        if not math.isfinite(v):
            raise ValidationError(f"Raw score {v} is not a number")
        if v < 0:
            raise ValidationError(f"Raw score {v} is negative")


class ScoreNormalizer:
    """
    Rescales raw rubric input onto the common 0-10 range.

    Composite fields are scored against len(sub_scores) * sub_field_max,
    never against the form's declared parent max, which goes stale as soon
    as sub-fields are added or removed.
    """

    def __init__(self, normalized_max: float = NORMALIZED_MAX):
        self.normalized_max = normalized_max

    def normalize(self, raw_sub_scores: Sequence[RawSubScore],
                  sub_field_max: float = DEFAULT_SUB_FIELD_MAX) -> float:
        scores = [s.score for s in raw_sub_scores]
        _check_raw_scores(scores)

        effective_max = len(scores) * sub_field_max
        if effective_max <= 0:
            return 0.0

        total = sum(min(s, sub_field_max) for s in scores)
        normalized = total / effective_max * self.normalized_max
        return round1(min(normalized, self.normalized_max))

    def normalize_simple(self, raw_score: float, declared_max: float) -> float:
        _check_raw_scores([raw_score])
        if declared_max is None or declared_max <= 0:
            return 0.0

        normalized = min(raw_score, declared_max) / declared_max * self.normalized_max
        return round1(max(0.0, min(normalized, self.normalized_max)))
