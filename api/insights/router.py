"""Insights API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from analytics.workers_ai import WorkersAIClient
from api.dependencies import get_ai_client, get_db
from api.insights.schemas import InsightsResponse
from api.insights.service import InsightService

router = APIRouter(tags=["Insights"])


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(
    db: Session = Depends(get_db),
    ai: WorkersAIClient = Depends(get_ai_client),
):
    """Summarize the top issues and build a word cloud from recent feedback."""
    return await InsightService(db, ai).generate()
