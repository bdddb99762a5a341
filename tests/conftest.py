"""
Shared fixtures: an in-memory SQLite database per test, seeded roster objects,
and a TestClient whose database dependency points at the same engine.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Dict, List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from backend.app.core.scoring.rubric import STANDARD_RUBRIC
from backend.app.database.session import get_db, init_db
from backend.app.main import app
from backend.app.schemas.evaluation_schemas import RawFieldInput, RawSubScore
from backend.app.schemas.form_schemas import FieldDefinition, FormCreate
from backend.app.schemas.student_schemas import InternCreate
from backend.app.schemas.user_schemas import UserCreate
from backend.app.services.form_service import FormService
from backend.app.services.intern_service import InternService
from backend.app.services.user_service import UserService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _override_get_db():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ----------------------------------------------------------------------
# Seed data
# ----------------------------------------------------------------------
@pytest.fixture
def tutor(session):
    return UserService.create(session, UserCreate(name="Tara Tutor", email="tara@example.com", role="tutor"))


@pytest.fixture
def interns(session):
    return [
        InternService.create(session, InternCreate(name="Alice", email="alice@example.com")),
        InternService.create(session, InternCreate(name="Bob", email="bob@example.com")),
        InternService.create(session, InternCreate(name="Cara", email="cara@example.com")),
    ]


@pytest.fixture
def form(session, tutor):
    return FormService.create(session, FormCreate(
        form_name="Week 1 Review",
        tutor_id=tutor.id,
        custom_fields=[FieldDefinition(name="Teamwork", max_value=10)],
    ))


@pytest.fixture
def make_inputs():
    """Build a raw submission for the standard rubric (+ optional simple custom fields)."""
    def _make(tc: Sequence[float] = (5, 5, 5),
              others: Sequence[float] = (3, 3, 3),
              custom: Optional[Dict[str, float]] = None) -> List[RawFieldInput]:
        inputs = []
        for name, subs in STANDARD_RUBRIC.items():
            values = tc if name == "Technical Competence" else others
            inputs.append(RawFieldInput(
                field_name=name,
                sub_scores=[RawSubScore(sub_field_name=s, score=v) for s, v in zip(subs, values)],
            ))
        for name, score in (custom or {}).items():
            inputs.append(RawFieldInput(field_name=name, score=score))
        return inputs
    return _make
