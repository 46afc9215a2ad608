"""Feedback Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class FeedbackResponse(BaseModel):
    """Schema for a full feedback record."""

    id: str
    source: str
    content: str
    sentiment: Optional[str]
    category: Optional[str]
    created_at: datetime
    analyzed_at: Optional[datetime]

    class Config:
        from_attributes = True


class SentimentCounts(BaseModel):
    """Fixed-shape sentiment tally. Every key is always present."""

    positive: int = 0
    neutral: int = 0
    negative: int = 0


class FeedbackStatsResponse(BaseModel):
    """Schema for dashboard statistics."""

    total: int
    sentiment: SentimentCounts
    categories: dict[str, int]  # only categories that occur, no zero fill
    recent: list[FeedbackResponse]


class PageMeta(BaseModel):
    """Echo of the paging parameters that produced a list."""

    limit: int
    offset: int


class FeedbackListResponse(BaseModel):
    """Schema for a page of feedback."""

    feedback: list[FeedbackResponse]
    meta: PageMeta
