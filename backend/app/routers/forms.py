# backend/app/routers/forms.py
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List

from backend.app.database.session import get_db
from backend.app.schemas.form_schemas import FormCreate, FormRead, FormStatusUpdate
from backend.app.services.form_service import FormService

router = APIRouter(tags=["forms"])


@router.post("/api/forms", response_model=FormRead, status_code=201)
def create_form(data: FormCreate, session: Session = Depends(get_db)):
    return FormService.to_read(FormService.create(session, data))


@router.get("/api/forms", response_model=List[FormRead])
def list_forms(session: Session = Depends(get_db)):
    return [FormService.to_read(f) for f in FormService.list_forms(session)]


# declared before /{form_id} so "active" is not parsed as an id
@router.get("/api/forms/active", response_model=List[FormRead])
def list_active_forms(session: Session = Depends(get_db)):
    return [FormService.to_read(f) for f in FormService.list_forms(session, active_only=True)]


@router.get("/api/forms/{form_id}", response_model=FormRead)
def get_form(form_id: int, session: Session = Depends(get_db)):
    return FormService.to_read(FormService.get(session, form_id))


@router.patch("/api/forms/{form_id}/status", response_model=FormRead)
def set_form_status(form_id: int, data: FormStatusUpdate, session: Session = Depends(get_db)):
    return FormService.to_read(FormService.set_status(session, form_id, data.status))


@router.delete("/api/forms/{form_id}")
def delete_form(form_id: int, session: Session = Depends(get_db)):
    removed = FormService.delete(session, form_id)
    return {"msg": "Form deleted successfully", "evaluations_deleted": removed}
