# backend/app/database/seed.py
import logging
from typing import Optional

from sqlmodel import Session, select

from backend.app.config.settings import ADMIN_EMAIL, ADMIN_NAME
from backend.app.database.models import User

logger = logging.getLogger(__name__)


def seed_admin(session: Session, email: Optional[str] = ADMIN_EMAIL, name: str = ADMIN_NAME) -> Optional[User]:
    """Create the bootstrap admin account if it is configured and missing."""
    if not email:
        return None

    existing = session.exec(select(User).where(User.email == email)).first()
    if existing:
        return existing

    admin = User(name=name, email=email, role="admin")
    session.add(admin)
    session.commit()
    session.refresh(admin)
    logger.info(f"Seeded admin user {email}")
    return admin
