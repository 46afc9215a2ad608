"""Insight generation service layer."""

from sqlalchemy.orm import Session

from analytics.logging_config import get_logger
from analytics.prompts import SUMMARY_MAX_TOKENS, build_issue_summary_prompt
from analytics.wordcloud import WORD_CLOUD_SIZE, word_frequencies
from analytics.workers_ai import WorkersAIClient
from api.feedback.service import FeedbackService
from api.insights.schemas import InsightsResponse, WordCount

logger = get_logger("insights")

WORD_CLOUD_SAMPLE_SIZE = 50
ISSUE_SAMPLE_SIZE = 15


class InsightService:
    """Builds the word cloud and the LLM summary of the most pressing issues."""

    def __init__(self, db: Session, ai: WorkersAIClient):
        self.feedback = FeedbackService(db)
        self.ai = ai

    def word_cloud(self) -> list[WordCount]:
        contents = self.feedback.sample_contents(WORD_CLOUD_SAMPLE_SIZE)
        return [
            WordCount(word=word, count=count)
            for word, count in word_frequencies(contents, limit=WORD_CLOUD_SIZE)
        ]

    async def summarize_issues(self, issues: list[str]) -> str:
        """Ask the text model for a short summary. Runs even when ``issues`` is empty."""
        prompt = build_issue_summary_prompt(issues)
        response = await self.ai.generate(prompt, max_tokens=SUMMARY_MAX_TOKENS)
        return response.strip()

    async def generate(self) -> InsightsResponse:
        issues = self.feedback.recent_issue_contents(ISSUE_SAMPLE_SIZE)
        word_cloud = self.word_cloud()

        logger.info(f"Summarizing {len(issues)} issues; word cloud has {len(word_cloud)} words")
        summary = await self.summarize_issues(issues)

        return InsightsResponse(
            summary=summary,
            word_cloud=word_cloud,
            issue_count=len(issues),
        )
