"""FastAPI dependency injection utilities."""

from typing import AsyncGenerator, Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from analytics.vectorize import VectorizeClient
from analytics.workers_ai import WorkersAIClient
from api.config import Settings, get_settings
from api.db.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def get_ai_client(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[WorkersAIClient, None]:
    """
    Workers AI client dependency.

    Raises:
        MissingCredentialsError: If the Cloudflare account or token is unset
    """
    async with WorkersAIClient(settings.cloudflare_config()) as client:
        yield client


async def get_vector_index(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[VectorizeClient, None]:
    """Vectorize index client dependency."""
    async with VectorizeClient(settings.cloudflare_config()) as client:
        yield client
