# backend/app/core/scoring/analytics.py
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from backend.app.core.errors import NotFoundError
from backend.app.core.scoring.grading import round1
from backend.app.schemas.student_schemas import (
    EvaluationHistoryEntry,
    EvaluationRecord,
    FormMeta,
    StudentAnalytics,
    StudentIdentity,
)

logger = logging.getLogger(__name__)

AVERAGE_SCORE = "average_score"


class _StudentAccumulator:
    def __init__(self, student: StudentIdentity):
        self.student = student
        self.total_score = 0.0
        self.form_count = 0
        self.metrics: Dict[str, Tuple[float, int]] = {}
        self.history: List[EvaluationHistoryEntry] = []

    def add(self, form: FormMeta, record: EvaluationRecord) -> None:
        self.history.append(EvaluationHistoryEntry(
            evaluation_id=record.evaluation_id,
            form_id=form.form_id,
            form_name=form.form_name,
            final_score=record.final_score,
            final_grade=record.final_grade,
            field_scores=record.field_scores,
            comment=record.comment,
            created_at=record.created_at,
        ))
        self.total_score += record.final_score
        self.form_count += 1
        for fs in record.field_scores:
            metric_sum, metric_count = self.metrics.get(fs.field_name, (0.0, 0))
            self.metrics[fs.field_name] = (metric_sum + fs.score, metric_count + 1)

    def to_analytics(self) -> StudentAnalytics:
        average = round1(self.total_score / self.form_count) if self.form_count else 0.0
        return StudentAnalytics(
            student_id=self.student.student_id,
            name=self.student.name,
            email=self.student.email,
            average_score=average,
            # partial mean: a metric only averages over evaluations that carry it
            metric_scores={name: round1(s / c) for name, (s, c) in self.metrics.items()},
            total_forms=self.form_count,
            evaluations=self.history,
        )


class GlobalAnalyticsAggregator:
    """
    Rolls every evaluation of every form up into a ranked list of students.

    The global view lists every student on the roster, evaluated or not.
    Passing ``form_id`` builds the single-form view instead, which only lists
    students holding an evaluation on that form. ``sort_by`` ranks on a named
    metric rather than the average score; a student without that metric
    sorts as 0. Ties go to the lower student id.
    """

    def aggregate(self,
                  students: Sequence[StudentIdentity],
                  forms: Sequence[FormMeta],
                  evaluations_by_form: Mapping[int, Sequence[EvaluationRecord]],
                  form_id: Optional[int] = None,
                  sort_by: Optional[str] = None) -> List[StudentAnalytics]:
        accumulators = {s.student_id: _StudentAccumulator(s) for s in students}
        forms_by_id = {f.form_id: f for f in forms}

        if form_id is not None and form_id not in forms_by_id:
            raise NotFoundError(f"Form {form_id} not found")

        for unknown in set(evaluations_by_form) - set(forms_by_id):
            logger.warning(f"Skipping evaluations of unknown form {unknown}")

        for form in forms:
            if form_id is not None and form.form_id != form_id:
                continue
            for record in evaluations_by_form.get(form.form_id, []):
                acc = accumulators.get(record.intern_id)
                if acc is None:
                    logger.warning(
                        f"Skipping evaluation on form '{form.form_name}' for unknown intern {record.intern_id}"
                    )
                    continue
                acc.add(form, record)

        results = [
            acc.to_analytics() for acc in accumulators.values()
            if form_id is None or acc.form_count > 0
        ]
        return rank_students(results, sort_by)


def sort_value(student: StudentAnalytics, sort_by: Optional[str]) -> float:
    if not sort_by or sort_by == AVERAGE_SCORE:
        return student.average_score
    return student.metric_scores.get(sort_by, 0.0)


def rank_students(students: List[StudentAnalytics], sort_by: Optional[str] = None) -> List[StudentAnalytics]:
    ordered = sorted(students, key=lambda s: (-sort_value(s, sort_by), s.student_id))
    for position, student in enumerate(ordered, start=1):
        student.rank = position
    return ordered
