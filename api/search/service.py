"""Semantic search and index maintenance service layer."""

from typing import Iterable, Iterator, Optional, TypeVar

from sqlalchemy.orm import Session

from analytics.exceptions import ValidationError
from analytics.logging_config import get_logger
from analytics.vectorize import VectorizeClient, VectorRecord
from analytics.workers_ai import WorkersAIClient
from api.feedback.models import Feedback
from api.feedback.schemas import FeedbackResponse
from api.feedback.service import FeedbackService
from api.search.schemas import SearchResult

logger = get_logger("search")

DEFAULT_SEARCH_LIMIT = 10

# Vectorize accepts a bounded number of vectors per upsert call
VECTORIZE_BATCH_SIZE = 10

T = TypeVar("T")


def ensure_query(query: Optional[str]) -> None:
    if not query:
        raise ValidationError("Missing query field")


def batched(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive lists of at most ``size`` items."""
    if size < 1:
        raise ValueError("batch size must be at least 1")

    batch: list[T] = []
    for item in items:
        batch.append(item)
        if len(batch) == size:
            yield batch
            batch = []
    if batch:
        yield batch


def vector_metadata(feedback: Feedback) -> dict[str, str]:
    """Metadata stored next to each vector. The index rejects nulls, so they become ''."""
    return {
        "source": feedback.source or "",
        "sentiment": feedback.sentiment or "",
        "category": feedback.category or "",
    }


class SearchService:
    """Embeds a query, asks the index for neighbours and joins them to stored records."""

    def __init__(self, db: Session, ai: WorkersAIClient, index: VectorizeClient):
        self.feedback = FeedbackService(db)
        self.ai = ai
        self.index = index

    async def search(self, query: Optional[str], limit: Optional[int] = None) -> list[SearchResult]:
        ensure_query(query)

        top_k = limit or DEFAULT_SEARCH_LIMIT
        embedding = await self.ai.embed(query)
        matches = await self.index.query(embedding, top_k=top_k)

        if not matches:
            return []

        records = self.feedback.get_by_ids([m.id for m in matches])
        missing = [m.id for m in matches if m.id not in records]
        if missing:
            logger.warning(f"{len(missing)} indexed ids have no stored feedback: {', '.join(missing)}")

        # Keep the index ranking; a match without a stored record keeps its score.
        return [
            SearchResult(
                score=match.score,
                feedback=FeedbackResponse.model_validate(records[match.id]) if match.id in records else None,
            )
            for match in matches
        ]


class VectorizationService:
    """Re-embeds every stored record and upserts it into the index."""

    def __init__(
        self,
        db: Session,
        ai: WorkersAIClient,
        index: VectorizeClient,
        batch_size: int = VECTORIZE_BATCH_SIZE,
    ):
        self.feedback = FeedbackService(db)
        self.ai = ai
        self.index = index
        self.batch_size = min(batch_size, VECTORIZE_BATCH_SIZE)

    async def embed_all(self) -> list[VectorRecord]:
        """Embed the records present right now, one call at a time."""
        records = []
        for item in self.feedback.all_records():
            embedding = await self.ai.embed(item.content)
            records.append(VectorRecord(id=item.id, values=embedding, metadata=vector_metadata(item)))
        return records

    async def run(self) -> int:
        """
        Embed all feedback and upsert it in sequential batches.

        Not resumable: a failure part way through leaves earlier batches
        written and the rest untouched. Returns the number of records
        vectorized.
        """
        records = await self.embed_all()
        logger.info(f"Embedded {len(records)} feedback records")

        for number, batch in enumerate(batched(records, self.batch_size), start=1):
            await self.index.upsert(batch)
            logger.debug(f"Upserted batch {number} ({len(batch)} vectors)")

        return len(records)
