# backend/app/routers/interns.py
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List

from backend.app.database.session import get_db
from backend.app.schemas.student_schemas import InternCreate, InternRead, InternUpdate
from backend.app.services.intern_service import InternService

router = APIRouter(tags=["interns"])


@router.post("/api/interns", response_model=InternRead, status_code=201)
def add_intern(data: InternCreate, session: Session = Depends(get_db)):
    return InternService.to_read(InternService.create(session, data))


@router.get("/api/interns", response_model=List[InternRead])
def list_interns(session: Session = Depends(get_db)):
    return [InternService.to_read(i) for i in InternService.list_interns(session)]


@router.get("/api/interns/{intern_id}", response_model=InternRead)
def get_intern(intern_id: int, session: Session = Depends(get_db)):
    return InternService.to_read(InternService.get(session, intern_id))


@router.put("/api/interns/{intern_id}", response_model=InternRead)
def update_intern(intern_id: int, data: InternUpdate, session: Session = Depends(get_db)):
    return InternService.to_read(InternService.update(session, intern_id, data))


@router.delete("/api/interns/{intern_id}")
def delete_intern(intern_id: int, session: Session = Depends(get_db)):
    InternService.delete(session, intern_id)
    return {"msg": "Intern deleted successfully"}
