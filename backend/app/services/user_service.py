# backend/app/services/user_service.py
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from backend.app.core.errors import ConflictError, NotFoundError, ValidationError
from backend.app.database.models import FormDefinition, User
from backend.app.schemas.user_schemas import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def create(session: Session, data: UserCreate) -> User:
        if session.exec(select(User).where(User.email == data.email)).first():
            raise ConflictError("User already exists with that email")

        user = User(name=data.name, email=data.email, role=data.role)
        session.add(user)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise ConflictError("User already exists with that email")
        session.refresh(user)
        logger.info(f"Created {user.role} {user.email}")
        return user

    @staticmethod
    def list_users(session: Session) -> List[User]:
        return list(session.exec(select(User).order_by(User.name)).all())

    @staticmethod
    def get(session: Session, user_id: int) -> User:
        user = session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def get_tutor(session: Session, user_id: int) -> User:
        user = UserService.get(session, user_id)
        if user.role != "tutor":
            raise ValidationError(f"User {user_id} is not a tutor")
        return user

    @staticmethod
    def update(session: Session, user_id: int, data: UserUpdate) -> User:
        user = UserService.get(session, user_id)
        if data.email and data.email != user.email:
            clash = session.exec(select(User).where(User.email == data.email)).first()
            if clash:
                raise ConflictError("This email is already in use")
            user.email = data.email
        if data.name:
            user.name = data.name
        if data.role:
            user.role = data.role

        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    @staticmethod
    def delete(session: Session, user_id: int) -> None:
        user = UserService.get(session, user_id)
        owned = session.exec(select(FormDefinition).where(FormDefinition.tutor_id == user_id)).first()
        if owned:
            raise ConflictError("User still owns evaluation forms; delete or reassign them first")
        session.delete(user)
        session.commit()
        logger.info(f"Deleted user {user_id}")

    @staticmethod
    def to_read(user: User) -> UserRead:
        return UserRead(id=user.id, name=user.name, email=user.email, role=user.role, created_at=user.created_at)
