# backend/app/schemas/student_schemas.py
from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import datetime

from backend.app.schemas.evaluation_schemas import NormalizedFieldScore


class InternCreate(BaseModel):
    name: str
    email: str


class InternUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class InternRead(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime


class StudentIdentity(BaseModel):
    student_id: int
    name: str
    email: str = ""


class FormMeta(BaseModel):
    form_id: int
    form_name: str


class EvaluationRecord(BaseModel):
    """A persisted evaluation as the analytics pass sees it."""
    evaluation_id: Optional[int] = None
    intern_id: int
    final_score: float
    final_grade: str
    field_scores: List[NormalizedFieldScore] = []
    comment: str = ""
    created_at: Optional[datetime] = None


class EvaluationHistoryEntry(BaseModel):
    evaluation_id: Optional[int] = None
    form_id: int
    form_name: str
    final_score: float
    final_grade: str
    field_scores: List[NormalizedFieldScore] = []
    comment: str = ""
    created_at: Optional[datetime] = None


class StudentAnalytics(BaseModel):
    student_id: int
    name: str
    email: str = ""
    average_score: float = 0.0
    metric_scores: Dict[str, float] = {}
    total_forms: int = 0
    rank: int = 0
    evaluations: List[EvaluationHistoryEntry] = []
