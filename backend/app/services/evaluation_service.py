# backend/app/services/evaluation_service.py
import logging
from datetime import datetime
from typing import List, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from backend.app.config.settings import STANDARD_METRICS
from backend.app.core.errors import ConflictError, NotFoundError
from backend.app.core.scoring.field_aggregator import FieldAggregator
from backend.app.core.scoring.final_score import FinalScoreCalculator
from backend.app.database.models import Evaluation
from backend.app.schemas.evaluation_schemas import (
    EvaluationRead,
    EvaluationSubmission,
    EvaluationUpdate,
    FinalScore,
    NormalizedFieldScore,
    RawFieldInput,
)
from backend.app.schemas.form_schemas import FieldDefinition
from backend.app.services.form_service import FormService
from backend.app.services.intern_service import InternService

logger = logging.getLogger(__name__)

field_aggregator = FieldAggregator()
final_calculator = FinalScoreCalculator(STANDARD_METRICS)

ALREADY_EVALUATED = "An evaluation for this intern on this form already exists."


class EvaluationService:
    @staticmethod
    def score(form_fields: Sequence[FieldDefinition],
              raw_inputs: Sequence[RawFieldInput]) -> Tuple[List[NormalizedFieldScore], FinalScore]:
        """Run the full normalization pipeline; raises ValidationError before anything is stored."""
        field_scores = field_aggregator.aggregate(form_fields, raw_inputs)
        return field_scores, final_calculator.compute_final(field_scores)

    @staticmethod
    def submit(session: Session, form_id: int, submission: EvaluationSubmission) -> Evaluation:
        form = FormService.get_active(session, form_id)
        InternService.get(session, submission.intern_id)

        existing = session.exec(
            select(Evaluation).where(Evaluation.form_id == form_id, Evaluation.intern_id == submission.intern_id)
        ).first()
        if existing:
            logger.warning(f"Rejected duplicate evaluation: form {form_id}, intern {submission.intern_id}")
            raise ConflictError(ALREADY_EVALUATED)

        field_scores, final = EvaluationService.score(FormService.fields_of(form), submission.field_scores)

        evaluation = Evaluation(
            form_id=form_id,
            intern_id=submission.intern_id,
            tutor_id=form.tutor_id,
            field_scores=[fs.model_dump() for fs in field_scores],
            final_score=final.final_score,
            final_grade=final.final_grade,
            comment=submission.comment or "",
        )
        session.add(evaluation)
        try:
            session.commit()
        except IntegrityError:
            # lost the race against a concurrent submission for the same pair
            session.rollback()
            logger.warning(f"Rejected duplicate evaluation: form {form_id}, intern {submission.intern_id}")
            raise ConflictError(ALREADY_EVALUATED)
        session.refresh(evaluation)
        logger.info(
            f"Evaluation {evaluation.id} stored: form {form_id}, intern {submission.intern_id}, "
            f"final {final.final_score} ({final.final_grade})"
        )
        return evaluation

    @staticmethod
    def list_for_form(session: Session, form_id: int) -> List[Evaluation]:
        FormService.get(session, form_id)
        return list(session.exec(
            select(Evaluation).where(Evaluation.form_id == form_id).order_by(Evaluation.id)
        ).all())

    @staticmethod
    def get(session: Session, form_id: int, evaluation_id: int) -> Evaluation:
        evaluation = session.get(Evaluation, evaluation_id)
        if not evaluation or evaluation.form_id != form_id:
            raise NotFoundError("Evaluation not found")
        return evaluation

    @staticmethod
    def update(session: Session, form_id: int, evaluation_id: int, data: EvaluationUpdate) -> Evaluation:
        form = FormService.get_active(session, form_id)
        evaluation = EvaluationService.get(session, form_id, evaluation_id)

        field_scores, final = EvaluationService.score(FormService.fields_of(form), data.field_scores)

        evaluation.field_scores = [fs.model_dump() for fs in field_scores]
        evaluation.final_score = final.final_score
        evaluation.final_grade = final.final_grade
        evaluation.comment = data.comment or ""
        evaluation.updated_at = datetime.utcnow()
        session.add(evaluation)
        session.commit()
        session.refresh(evaluation)
        logger.info(f"Evaluation {evaluation_id} re-scored: final {final.final_score} ({final.final_grade})")
        return evaluation

    @staticmethod
    def delete(session: Session, form_id: int, evaluation_id: int) -> None:
        evaluation = EvaluationService.get(session, form_id, evaluation_id)
        session.delete(evaluation)
        session.commit()
        logger.info(f"Deleted evaluation {evaluation_id}")

    @staticmethod
    def to_read(evaluation: Evaluation) -> EvaluationRead:
        return EvaluationRead(
            id=evaluation.id,
            form_id=evaluation.form_id,
            intern_id=evaluation.intern_id,
            tutor_id=evaluation.tutor_id,
            field_scores=[NormalizedFieldScore.model_validate(fs) for fs in evaluation.field_scores or []],
            final_score=evaluation.final_score,
            final_grade=evaluation.final_grade,
            comment=evaluation.comment or "",
            created_at=evaluation.created_at,
            updated_at=evaluation.updated_at,
        )
