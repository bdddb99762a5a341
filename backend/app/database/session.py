# backend/app/database/session.py
import logging
from typing import Iterator

from sqlalchemy.exc import OperationalError
from sqlmodel import create_engine, Session, SQLModel
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type, before_sleep_log

from backend.app.config.settings import DATABASE_URL, DB_INIT_ATTEMPTS, SQL_ECHO

logger = logging.getLogger(__name__)

# SQLite connections are shared across FastAPI's worker threads
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=connect_args)


@retry(
    stop=stop_after_attempt(DB_INIT_ATTEMPTS),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(OperationalError),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
def init_db(bind=None):
    from backend.app.database import models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database tables ready")


def get_session() -> Session:
    return Session(engine)


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    with get_session() as session:
        yield session
