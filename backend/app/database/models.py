# backend/app/database/models.py
from typing import Any, Dict, List, Optional
from datetime import datetime

from sqlmodel import SQLModel, Field
from sqlalchemy import JSON, UniqueConstraint          # JSON works for SQLite, MySQL, PostgreSQL


# ----------------------------------------------------------------------
# Helper: JSON column that defaults to [] and allows NULL
# ----------------------------------------------------------------------
def json_field(default_factory: Any = list) -> Any:
    """Return a JSON column with a fresh mutable default per row."""
    return Field(default_factory=default_factory, sa_type=JSON)


# ----------------------------------------------------------------------
# Models
# ----------------------------------------------------------------------
class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    role: str = Field(default="tutor")  # admin | tutor
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Intern(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class FormDefinition(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    form_name: str = Field(index=True, unique=True)
    tutor_id: int = Field(foreign_key="user.id", index=True)
    # serialized FieldDefinition lists
    standard_fields: List[Dict[str, Any]] = json_field()
    custom_fields: List[Dict[str, Any]] = json_field()
    status: str = Field(default="Active")  # Active | Inactive
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class Evaluation(SQLModel, table=True):
    # one evaluation per intern per form, enforced by the database
    __table_args__ = (UniqueConstraint("form_id", "intern_id", name="uq_evaluation_form_intern"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    form_id: int = Field(foreign_key="formdefinition.id", index=True)
    intern_id: int = Field(foreign_key="intern.id", index=True)
    tutor_id: int = Field(foreign_key="user.id")
    # serialized NormalizedFieldScore list
    field_scores: List[Dict[str, Any]] = json_field()
    final_score: float = Field(default=0.0)
    final_grade: str = Field(default="")
    comment: str = Field(default="")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
