"""Vectorize index client."""

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from .cloudflare import CloudflareClient
from .exceptions import VectorizeError
from .logging_config import get_logger

logger = get_logger("vectorize")


@dataclass
class VectorRecord:
    """An entry to upsert into the index."""

    id: str
    values: list[float]
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class VectorMatch:
    """A single nearest-neighbour hit."""

    id: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)


class VectorizeClient(CloudflareClient):
    """Queries and writes a single Vectorize (v2) index."""

    @property
    def _index_path(self) -> str:
        return f"/vectorize/v2/indexes/{self.config.vectorize_index}"

    async def query(self, vector: list[float], top_k: int) -> list[VectorMatch]:
        """Return the ``top_k`` closest entries, best first, with all metadata."""
        result = await self._request(
            "POST",
            f"{self._index_path}/query",
            json={
                "vector": vector,
                "topK": top_k,
                "returnMetadata": "all",
                "returnValues": False,
            },
        )

        try:
            matches = [
                VectorMatch(
                    id=str(m["id"]),
                    score=float(m["score"]),
                    metadata=m.get("metadata") or {},
                )
                for m in result.get("matches", [])
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise VectorizeError("Malformed query response from Vectorize") from e

        logger.debug(f"Vectorize query returned {len(matches)} matches (topK={top_k})")
        return matches

    async def upsert(self, records: list[VectorRecord]) -> str | None:
        """Insert or replace entries by id. Returns the mutation id, if any."""
        body = "\n".join(json.dumps(asdict(record)) for record in records)
        result = await self._request(
            "POST",
            f"{self._index_path}/upsert",
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/x-ndjson"},
        )

        logger.info(f"Upserted {len(records)} vectors into {self.config.vectorize_index}")
        if isinstance(result, dict):
            return result.get("mutationId")
        return None
