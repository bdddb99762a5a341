# backend/app/schemas/evaluation_schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class RawSubScore(BaseModel):
    sub_field_name: str
    score: float


class RawFieldInput(BaseModel):
    field_name: str
    score: Optional[float] = None
    sub_scores: Optional[List[RawSubScore]] = None


class EvaluationSubmission(BaseModel):
    intern_id: int
    comment: str = ""
    field_scores: List[RawFieldInput] = Field(default_factory=list)


class EvaluationUpdate(BaseModel):
    comment: str = ""
    field_scores: List[RawFieldInput] = Field(default_factory=list)


class NormalizedFieldScore(BaseModel):
    field_name: str
    score: float  # 0..10, one decimal
    sub_scores: List[RawSubScore] = []


class FinalScore(BaseModel):
    final_score: float
    final_grade: str


class EvaluationRead(BaseModel):
    id: int
    form_id: int
    intern_id: int
    tutor_id: int
    field_scores: List[NormalizedFieldScore]
    final_score: float
    final_grade: str
    comment: str
    created_at: datetime
    updated_at: datetime
