# backend/app/services/analytics_service.py
import logging
from typing import Dict, List, Optional

from sqlmodel import Session, select

from backend.app.core.errors import NotFoundError, ValidationError
from backend.app.core.scoring.analytics import GlobalAnalyticsAggregator
from backend.app.core.scoring.metric_summary import summarize_form_metrics
from backend.app.database.models import Evaluation, FormDefinition, Intern
from backend.app.schemas.analytics_schemas import VisualizationRequest, VisualizationResponse
from backend.app.schemas.evaluation_schemas import NormalizedFieldScore
from backend.app.schemas.student_schemas import EvaluationRecord, FormMeta, StudentAnalytics, StudentIdentity

logger = logging.getLogger(__name__)

analytics_aggregator = GlobalAnalyticsAggregator()


def _to_record(evaluation: Evaluation) -> EvaluationRecord:
    return EvaluationRecord(
        evaluation_id=evaluation.id,
        intern_id=evaluation.intern_id,
        final_score=evaluation.final_score,
        final_grade=evaluation.final_grade,
        field_scores=[NormalizedFieldScore.model_validate(fs) for fs in evaluation.field_scores or []],
        comment=evaluation.comment or "",
        created_at=evaluation.created_at,
    )


class AnalyticsService:
    @staticmethod
    def load_evaluations(session: Session, form_ids: Optional[List[int]] = None) -> Dict[int, List[EvaluationRecord]]:
        query = select(Evaluation).order_by(Evaluation.id)
        if form_ids is not None:
            query = query.where(Evaluation.form_id.in_(form_ids))

        by_form: Dict[int, List[EvaluationRecord]] = {}
        for ev in session.exec(query).all():
            by_form.setdefault(ev.form_id, []).append(_to_record(ev))
        return by_form

    @staticmethod
    def rankings(session: Session, form_id: Optional[int] = None,
                 sort_by: Optional[str] = None) -> List[StudentAnalytics]:
        """Full scan on every call; nothing is cached between requests."""
        students = [
            StudentIdentity(student_id=i.id, name=i.name, email=i.email)
            for i in session.exec(select(Intern).order_by(Intern.id)).all()
        ]
        forms = [
            FormMeta(form_id=f.id, form_name=f.form_name)
            for f in session.exec(select(FormDefinition).order_by(FormDefinition.id)).all()
        ]
        evaluations = AnalyticsService.load_evaluations(session, [form_id] if form_id is not None else None)

        ranked = analytics_aggregator.aggregate(students, forms, evaluations, form_id=form_id, sort_by=sort_by)
        logger.info(f"Ranked {len(ranked)} intern(s) (form={form_id}, sort_by={sort_by or 'average_score'})")
        return ranked

    @staticmethod
    def visualization_data(session: Session, request: VisualizationRequest) -> VisualizationResponse:
        if not request.form_ids or not request.intern_ids:
            raise ValidationError("Please select at least one form and one intern.")

        forms = session.exec(
            select(FormDefinition).where(FormDefinition.id.in_(request.form_ids)).order_by(FormDefinition.id)
        ).all()
        interns = session.exec(
            select(Intern).where(Intern.id.in_(request.intern_ids)).order_by(Intern.id)
        ).all()
        intern_names = {i.id: i.name for i in interns}
        evaluations = AnalyticsService.load_evaluations(session, [f.id for f in forms])

        data = []
        for form in forms:
            summary = summarize_form_metrics(
                FormMeta(form_id=form.id, form_name=form.form_name),
                form.tutor_id,
                evaluations.get(form.id, []),
                intern_names,
                request.metric_type,
            )
            if summary is not None:
                data.append(summary)

        if not data:
            raise NotFoundError("No evaluations found for selected filters.")
        return VisualizationResponse(metric_type=request.metric_type, data=data)
