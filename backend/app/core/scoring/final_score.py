# backend/app/core/scoring/final_score.py
from typing import Optional, Sequence

from backend.app.config.settings import NORMALIZED_MAX, STANDARD_METRICS
from backend.app.core.errors import ComputationError
from backend.app.core.scoring.grading import grade_for, round1
from backend.app.schemas.evaluation_schemas import FinalScore, NormalizedFieldScore


class FinalScoreCalculator:
    """
    Averages the standard metrics into the overall score and grade.

    Custom fields never enter the average. A standard metric missing from the
    record counts as 0; the denominator is always the number of standard metrics.
    """

    def __init__(self, standard_metrics: Optional[Sequence[str]] = None):
        self.standard_metrics = tuple(STANDARD_METRICS if standard_metrics is None else standard_metrics)
        if not self.standard_metrics:
            raise ComputationError("At least one standard metric is required")

    def compute_final(self, field_scores: Sequence[NormalizedFieldScore]) -> FinalScore:
        by_name = {fs.field_name: fs.score for fs in field_scores}
        total = sum(by_name.get(name, 0.0) for name in self.standard_metrics)
        final_score = round1(min(total / len(self.standard_metrics), NORMALIZED_MAX))
        return FinalScore(final_score=final_score, final_grade=grade_for(final_score))
