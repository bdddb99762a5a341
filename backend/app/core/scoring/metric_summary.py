# backend/app/core/scoring/metric_summary.py
from typing import Dict, List, Mapping, Optional, Sequence

from backend.app.core.scoring.grading import round1
from backend.app.schemas.analytics_schemas import FormMetricSummary, InternMetricSummary, MetricType
from backend.app.schemas.student_schemas import EvaluationRecord, FormMeta


def _metric_values(record: EvaluationRecord, metric_type: MetricType) -> List[tuple]:
    if metric_type == "sub":
        return [(sub.sub_field_name, sub.score) for fs in record.field_scores for sub in fs.sub_scores]
    return [(fs.field_name, fs.score) for fs in record.field_scores]


def _averages(samples: Mapping[str, List[float]]) -> Dict[str, float]:
    return {name: round1(sum(values) / len(values)) for name, values in samples.items() if values}


def summarize_form_metrics(form: FormMeta,
                           tutor_id: int,
                           evaluations: Sequence[EvaluationRecord],
                           intern_names: Mapping[int, str],
                           metric_type: MetricType = "main") -> Optional[FormMetricSummary]:
    """
    Per-intern and form-wide metric averages for the selected interns.

    "main" averages the normalized field scores, "sub" the raw sub-scores.
    Returns None when none of the selected interns has an evaluation on the form.
    """
    per_intern: Dict[int, Dict[str, List[float]]] = {}
    form_wide: Dict[str, List[float]] = {}

    for record in evaluations:
        if record.intern_id not in intern_names:
            continue
        samples = per_intern.setdefault(record.intern_id, {})
        for name, value in _metric_values(record, metric_type):
            samples.setdefault(name, []).append(value)
            form_wide.setdefault(name, []).append(value)

    if not per_intern:
        return None

    interns = [
        InternMetricSummary(
            intern_id=intern_id,
            intern_name=intern_names[intern_id],
            metrics=_averages(per_intern[intern_id]),
        )
        for intern_id in intern_names
        if intern_id in per_intern
    ]
    return FormMetricSummary(
        form_id=form.form_id,
        form_name=form.form_name,
        tutor_id=tutor_id,
        avg_metrics=_averages(form_wide),
        interns=interns,
    )
