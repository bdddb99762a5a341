# backend/app/schemas/analytics_schemas.py
from pydantic import BaseModel
from typing import Dict, List, Literal, Optional

from backend.app.schemas.student_schemas import StudentAnalytics

MetricType = Literal["main", "sub"]


class RankingResponse(BaseModel):
    form_id: Optional[int] = None
    sort_by: str = "average_score"
    students: List[StudentAnalytics]


class VisualizationRequest(BaseModel):
    form_ids: List[int]
    intern_ids: List[int]
    metric_type: MetricType = "main"


class InternMetricSummary(BaseModel):
    intern_id: int
    intern_name: str
    metrics: Dict[str, float]


class FormMetricSummary(BaseModel):
    form_id: int
    form_name: str
    tutor_id: int
    avg_metrics: Dict[str, float]
    interns: List[InternMetricSummary]


class VisualizationResponse(BaseModel):
    metric_type: MetricType
    data: List[FormMetricSummary]
