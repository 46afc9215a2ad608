"""Feedback store queries."""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from analytics.logging_config import get_logger
from api.feedback.models import Feedback
from api.feedback.schemas import SentimentCounts

logger = get_logger("store")

RECENT_LIMIT = 5
ISSUE_CATEGORIES = ("bug", "complaint")


class FeedbackService:
    """Read-only queries over the feedback table."""

    def __init__(self, db: Session):
        self.db = db

    def count(self) -> int:
        return self.db.query(func.count(Feedback.id)).scalar() or 0

    def sentiment_counts(self) -> SentimentCounts:
        """Tally by sentiment. Unknown labels are ignored, known ones default to 0."""
        rows = (
            self.db.query(Feedback.sentiment, func.count(Feedback.id))
            .filter(Feedback.sentiment.isnot(None))
            .group_by(Feedback.sentiment)
            .all()
        )

        counts = SentimentCounts()
        for sentiment, count in rows:
            if sentiment in SentimentCounts.model_fields:
                setattr(counts, sentiment, count)
            else:
                logger.debug(f"Ignoring unknown sentiment label {sentiment!r} ({count} records)")
        return counts

    def category_counts(self) -> dict[str, int]:
        rows = (
            self.db.query(Feedback.category, func.count(Feedback.id))
            .filter(Feedback.category.isnot(None))
            .group_by(Feedback.category)
            .all()
        )
        return {category: count for category, count in rows}

    def recent(self, limit: int = RECENT_LIMIT) -> list[Feedback]:
        return self.db.query(Feedback).order_by(Feedback.created_at.desc()).limit(limit).all()

    def list_page(
        self,
        limit: int,
        offset: int,
        sentiment: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Feedback]:
        """
        Page through feedback, newest first.

        Filters are exact matches combined with AND and sent as bound
        parameters. ``limit`` and ``offset`` are passed to the store as-is.
        """
        query = self.db.query(Feedback)

        if sentiment:
            query = query.filter(Feedback.sentiment == sentiment)
        if category:
            query = query.filter(Feedback.category == category)

        logger.debug(
            f"Listing feedback limit={limit} offset={offset} sentiment={sentiment!r} category={category!r}"
        )
        return query.order_by(Feedback.created_at.desc()).limit(limit).offset(offset).all()

    def get_by_ids(self, ids: list[str]) -> dict[str, Feedback]:
        """Fetch many records in one lookup, keyed by id. Unknown ids are simply absent."""
        if not ids:
            return {}
        rows = self.db.query(Feedback).filter(Feedback.id.in_(ids)).all()
        logger.debug(f"Looked up {len(ids)} ids, found {len(rows)}")
        return {row.id: row for row in rows}

    def sample_contents(self, limit: int) -> list[str]:
        """Content of up to ``limit`` records, unfiltered and unordered."""
        return [content for (content,) in self.db.query(Feedback.content).limit(limit).all()]

    def recent_issue_contents(self, limit: int) -> list[str]:
        """Content of the newest negative, bug or complaint records."""
        rows = (
            self.db.query(Feedback.content)
            .filter(
                or_(
                    Feedback.sentiment == "negative",
                    Feedback.category.in_(ISSUE_CATEGORIES),
                )
            )
            .order_by(Feedback.created_at.desc())
            .limit(limit)
            .all()
        )
        return [content for (content,) in rows]

    def all_records(self) -> list[Feedback]:
        """Every record, for full re-embedding."""
        records = self.db.query(Feedback).all()
        logger.info(f"Loaded {len(records)} feedback records")
        return records
