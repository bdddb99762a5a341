# backend/app/routers/analytics.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import Optional

from backend.app.database.session import get_db
from backend.app.schemas.analytics_schemas import RankingResponse, VisualizationRequest, VisualizationResponse
from backend.app.services.analytics_service import AnalyticsService

router = APIRouter(tags=["analytics"])


@router.get("/api/analytics/rankings", response_model=RankingResponse)
def get_rankings(
    form_id: Optional[int] = Query(None, description="Rank on this form's evaluations only"),
    sort_by: Optional[str] = Query(None, description="Metric name to rank by instead of the average score"),
    session: Session = Depends(get_db),
):
    students = AnalyticsService.rankings(session, form_id=form_id, sort_by=sort_by)
    return RankingResponse(form_id=form_id, sort_by=sort_by or "average_score", students=students)


@router.post("/api/visualizations/data", response_model=VisualizationResponse)
def get_visualization_data(request: VisualizationRequest, session: Session = Depends(get_db)):
    return AnalyticsService.visualization_data(session, request)
