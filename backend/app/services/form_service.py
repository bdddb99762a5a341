# backend/app/services/form_service.py
import logging
from datetime import datetime
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from backend.app.config.settings import STANDARD_METRICS
from backend.app.core.errors import ConflictError, NotFoundError, ValidationError
from backend.app.core.scoring.rubric import default_standard_fields
from backend.app.database.models import Evaluation, FormDefinition
from backend.app.schemas.form_schemas import FieldDefinition, FormCreate, FormRead
from backend.app.services.user_service import UserService

logger = logging.getLogger(__name__)


def _validate_custom_fields(custom_fields: List[FieldDefinition]) -> None:
    seen = set()
    for field in custom_fields:
        name = field.name
        if not name:
            raise ValidationError("Custom field names cannot be empty")
        if name in STANDARD_METRICS:
            raise ValidationError(f"'{name}' is a standard metric and cannot be redefined")
        if name in seen:
            raise ValidationError(f"Duplicate custom field '{name}'")
        seen.add(name)

        sub_names = [sf.name for sf in field.sub_fields]
        if len(sub_names) != len(set(sub_names)):
            raise ValidationError(f"Duplicate sub-field names in '{name}'")
        if field.max_value is not None and field.max_value <= 0:
            raise ValidationError(f"Field '{name}' needs a positive maximum")
        if any(sf.max_value <= 0 for sf in field.sub_fields):
            raise ValidationError(f"Sub-fields of '{name}' need a positive maximum")


class FormService:
    @staticmethod
    def create(session: Session, data: FormCreate) -> FormDefinition:
        UserService.get_tutor(session, data.tutor_id)
        if session.exec(select(FormDefinition).where(FormDefinition.form_name == data.form_name)).first():
            raise ConflictError("A form with this name already exists")
        custom_fields = [f.model_copy(update={"name": f.name.strip()}) for f in data.custom_fields]
        _validate_custom_fields(custom_fields)

        form = FormDefinition(
            form_name=data.form_name,
            tutor_id=data.tutor_id,
            standard_fields=[f.model_dump() for f in default_standard_fields()],
            custom_fields=[f.model_dump() for f in custom_fields],
            status=data.status,
        )
        session.add(form)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise ConflictError("A form with this name already exists")
        session.refresh(form)
        logger.info(f"Created form '{form.form_name}' for tutor {form.tutor_id}")
        return form

    @staticmethod
    def list_forms(session: Session, active_only: bool = False) -> List[FormDefinition]:
        query = select(FormDefinition)
        if active_only:
            query = query.where(FormDefinition.status == "Active")
        return list(session.exec(query.order_by(FormDefinition.id)).all())

    @staticmethod
    def get(session: Session, form_id: int) -> FormDefinition:
        form = session.get(FormDefinition, form_id)
        if not form:
            raise NotFoundError("Form not found")
        return form

    @staticmethod
    def get_active(session: Session, form_id: int) -> FormDefinition:
        form = FormService.get(session, form_id)
        if form.status != "Active":
            raise NotFoundError("Active form not found")
        return form

    @staticmethod
    def set_status(session: Session, form_id: int, status: str) -> FormDefinition:
        form = FormService.get(session, form_id)
        form.status = status
        form.updated_at = datetime.utcnow()
        session.add(form)
        session.commit()
        session.refresh(form)
        logger.info(f"Form '{form.form_name}' is now {status}")
        return form

    @staticmethod
    def delete(session: Session, form_id: int) -> int:
        """Delete a form together with all of its evaluations; returns how many evaluations went."""
        form = FormService.get(session, form_id)
        evaluations = session.exec(select(Evaluation).where(Evaluation.form_id == form_id)).all()
        for ev in evaluations:
            session.delete(ev)
        session.delete(form)
        session.commit()
        logger.info(f"Deleted form '{form.form_name}' and {len(evaluations)} evaluation(s)")
        return len(evaluations)

    @staticmethod
    def fields_of(form: FormDefinition) -> List[FieldDefinition]:
        """Standard fields first, then custom fields, in declaration order."""
        return [FieldDefinition.model_validate(f) for f in (form.standard_fields or []) + (form.custom_fields or [])]

    @staticmethod
    def to_read(form: FormDefinition) -> FormRead:
        return FormRead(
            id=form.id,
            form_name=form.form_name,
            tutor_id=form.tutor_id,
            standard_fields=[FieldDefinition.model_validate(f) for f in form.standard_fields or []],
            custom_fields=[FieldDefinition.model_validate(f) for f in form.custom_fields or []],
            status=form.status,
            created_at=form.created_at,
            updated_at=form.updated_at,
        )
