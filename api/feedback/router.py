"""Feedback API routes."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.dependencies import get_db
from api.feedback.schemas import (
    FeedbackListResponse,
    FeedbackResponse,
    FeedbackStatsResponse,
    PageMeta,
)
from api.feedback.service import FeedbackService

router = APIRouter(tags=["Feedback"])


@router.get("/stats", response_model=FeedbackStatsResponse)
async def get_feedback_stats(db: Session = Depends(get_db)):
    """Get dashboard statistics."""
    service = FeedbackService(db)

    total = service.count()
    sentiment = service.sentiment_counts()
    categories = service.category_counts()
    recent = service.recent()

    return FeedbackStatsResponse(
        total=total,
        sentiment=sentiment,
        categories=categories,
        recent=[FeedbackResponse.model_validate(f) for f in recent],
    )


@router.get("/feedback", response_model=FeedbackListResponse)
async def list_feedback(
    limit: int = 50,
    offset: int = 0,
    sentiment: Optional[str] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List feedback with optional sentiment and category filters."""
    feedbacks = FeedbackService(db).list_page(
        limit=limit,
        offset=offset,
        sentiment=sentiment,
        category=category,
    )

    return FeedbackListResponse(
        feedback=[FeedbackResponse.model_validate(f) for f in feedbacks],
        meta=PageMeta(limit=limit, offset=offset),
    )
