# backend/app/routers/evaluations.py
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List

from backend.app.database.session import get_db
from backend.app.schemas.evaluation_schemas import EvaluationRead, EvaluationSubmission, EvaluationUpdate
from backend.app.services.evaluation_service import EvaluationService

router = APIRouter(tags=["evaluations"])


@router.post("/api/evaluations/{form_id}", response_model=EvaluationRead, status_code=201)
def submit_evaluation(form_id: int, submission: EvaluationSubmission, session: Session = Depends(get_db)):
    """Normalize the tutor's raw scores and store the evaluation; one per intern per form."""
    return EvaluationService.to_read(EvaluationService.submit(session, form_id, submission))


@router.get("/api/evaluations/{form_id}", response_model=List[EvaluationRead])
def list_evaluations(form_id: int, session: Session = Depends(get_db)):
    return [EvaluationService.to_read(e) for e in EvaluationService.list_for_form(session, form_id)]


@router.get("/api/evaluations/{form_id}/{evaluation_id}", response_model=EvaluationRead)
def get_evaluation(form_id: int, evaluation_id: int, session: Session = Depends(get_db)):
    return EvaluationService.to_read(EvaluationService.get(session, form_id, evaluation_id))


@router.put("/api/evaluations/{form_id}/{evaluation_id}", response_model=EvaluationRead)
def update_evaluation(form_id: int, evaluation_id: int, data: EvaluationUpdate,
                      session: Session = Depends(get_db)):
    return EvaluationService.to_read(EvaluationService.update(session, form_id, evaluation_id, data))


@router.delete("/api/evaluations/{form_id}/{evaluation_id}")
def delete_evaluation(form_id: int, evaluation_id: int, session: Session = Depends(get_db)):
    EvaluationService.delete(session, form_id, evaluation_id)
    return {"msg": "Evaluation deleted successfully"}
