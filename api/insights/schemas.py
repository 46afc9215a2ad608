"""Insights Pydantic schemas."""

from pydantic import BaseModel, Field


class WordCount(BaseModel):
    """A word cloud entry."""

    word: str
    count: int


class InsightsResponse(BaseModel):
    """Schema for AI-generated insights."""

    summary: str
    word_cloud: list[WordCount] = Field(alias="wordCloud")
    issue_count: int = Field(alias="issueCount")

    class Config:
        populate_by_name = True
