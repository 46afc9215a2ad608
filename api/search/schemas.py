"""Search and vectorization Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel

from api.feedback.schemas import FeedbackResponse


class SearchRequest(BaseModel):
    """Schema for a semantic search request."""

    query: Optional[str] = None
    limit: Optional[int] = None


class SearchResult(BaseModel):
    """One scored match. ``feedback`` is null when the record no longer exists."""

    score: float
    feedback: Optional[FeedbackResponse] = None


class SearchResponse(BaseModel):
    """Schema for semantic search results, in index ranking order."""

    results: list[SearchResult]


class VectorizeResponse(BaseModel):
    """Schema for the bulk re-embedding result."""

    success: bool
    vectorized: int
