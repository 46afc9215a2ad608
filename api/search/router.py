"""Semantic search and vectorization routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from analytics.vectorize import VectorizeClient
from analytics.workers_ai import WorkersAIClient
from api.dependencies import get_ai_client, get_db, get_vector_index
from api.search.schemas import SearchRequest, SearchResponse, VectorizeResponse
from api.search.service import SearchService, VectorizationService, ensure_query

router = APIRouter(tags=["Search"])


def validated_search_request(request: SearchRequest) -> SearchRequest:
    """Reject a missing query before any Cloudflare client is built."""
    ensure_query(request.query)
    return request


@router.post("/search", response_model=SearchResponse)
async def search_feedback(
    request: SearchRequest = Depends(validated_search_request),
    db: Session = Depends(get_db),
    ai: WorkersAIClient = Depends(get_ai_client),
    index: VectorizeClient = Depends(get_vector_index),
):
    """Find feedback semantically similar to a free-text query."""
    results = await SearchService(db, ai, index).search(request.query, request.limit)
    return SearchResponse(results=results)


@router.post("/vectorize", response_model=VectorizeResponse)
async def vectorize_feedback(
    db: Session = Depends(get_db),
    ai: WorkersAIClient = Depends(get_ai_client),
    index: VectorizeClient = Depends(get_vector_index),
):
    """Embed every stored feedback record into the vector index."""
    vectorized = await VectorizationService(db, ai, index).run()
    return VectorizeResponse(success=True, vectorized=vectorized)
