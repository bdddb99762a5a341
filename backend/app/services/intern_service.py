# backend/app/services/intern_service.py
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from backend.app.core.errors import ConflictError, NotFoundError, ValidationError
from backend.app.database.models import Evaluation, Intern
from backend.app.schemas.student_schemas import InternCreate, InternRead, InternUpdate

logger = logging.getLogger(__name__)


class InternService:
    @staticmethod
    def create(session: Session, data: InternCreate) -> Intern:
        if not data.name or not data.email:
            raise ValidationError("Please provide all required fields")
        if session.exec(select(Intern).where(Intern.email == data.email)).first():
            raise ConflictError("An intern with this email already exists")

        intern = Intern(name=data.name, email=data.email)
        session.add(intern)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise ConflictError("An intern with this email already exists")
        session.refresh(intern)
        logger.info(f"Added intern {intern.email}")
        return intern

    @staticmethod
    def list_interns(session: Session) -> List[Intern]:
        return list(session.exec(select(Intern).order_by(Intern.name)).all())

    @staticmethod
    def get(session: Session, intern_id: int) -> Intern:
        intern = session.get(Intern, intern_id)
        if not intern:
            raise NotFoundError("Intern not found")
        return intern

    @staticmethod
    def update(session: Session, intern_id: int, data: InternUpdate) -> Intern:
        intern = InternService.get(session, intern_id)
        if data.name:
            intern.name = data.name
        if data.email and data.email != intern.email:
            clash = session.exec(
                select(Intern).where(Intern.email == data.email, Intern.id != intern_id)
            ).first()
            if clash:
                raise ConflictError("This email is already in use")
            intern.email = data.email

        session.add(intern)
        session.commit()
        session.refresh(intern)
        return intern

    @staticmethod
    def delete(session: Session, intern_id: int) -> None:
        intern = InternService.get(session, intern_id)
        evaluations = session.exec(select(Evaluation).where(Evaluation.intern_id == intern_id)).all()
        for ev in evaluations:
            session.delete(ev)
        session.delete(intern)
        session.commit()
        logger.info(f"Deleted intern {intern_id} and {len(evaluations)} evaluation(s)")

    @staticmethod
    def to_read(intern: Intern) -> InternRead:
        return InternRead(id=intern.id, name=intern.name, email=intern.email, created_at=intern.created_at)
