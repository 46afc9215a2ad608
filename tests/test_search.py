"""Tests for semantic search and vectorization."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from analytics.exceptions import CloudflareAPIError
from analytics.vectorize import VectorMatch
from api.config import Settings, get_settings
from api.dependencies import get_db
from api.main import app
from api.search.service import VECTORIZE_BATCH_SIZE, VectorizationService, batched, vector_metadata


class TestSearchEndpoint:
    """Tests for POST /api/search."""

    def test_missing_query(self, client):
        """Test empty body is rejected."""
        response = client.post("/api/search", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing query field"}

    def test_empty_query(self, client, fake_ai):
        """Test empty query is rejected without calling the model."""
        response = client.post("/api/search", json={"query": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing query field"}
        assert fake_ai.embedded == []

    def test_empty_query_without_credentials(self, db_session):
        """Test the query is checked before Cloudflare clients are configured."""
        app.dependency_overrides[get_db] = lambda: db_session
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, cloudflare_account_id=None, cloudflare_api_token=None
        )
        try:
            response = TestClient(app, raise_server_exceptions=False).post(
                "/api/search", json={"query": ""}
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 400
        assert response.json() == {"error": "Missing query field"}

    def test_non_json_body(self, client):
        """Test a body that is not JSON is a bad request."""
        response = client.post(
            "/api/search", content=b"not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_no_matches_short_circuits(self, client, fake_ai, fake_index, db_session, monkeypatch):
        """Test zero matches returns an empty list without touching the store."""
        def fail(*args, **kwargs):
            raise AssertionError("store should not be queried")

        monkeypatch.setattr(db_session, "query", fail)

        response = client.post("/api/search", json={"query": "slow login"})

        assert response.status_code == 200
        assert response.json() == {"results": []}
        assert fake_ai.embedded == ["slow login"]

    def test_default_limit(self, client, fake_index):
        """Test topK defaults to 10."""
        client.post("/api/search", json={"query": "crash"})

        assert fake_index.queries[0][1] == 10

    def test_zero_limit_uses_default(self, client, fake_index):
        """Test a falsy limit falls back to the default."""
        client.post("/api/search", json={"query": "crash", "limit": 0})

        assert fake_index.queries[0][1] == 10

    def test_custom_limit_and_embedding(self, client, fake_ai, fake_index):
        """Test the query embedding and limit are sent to the index."""
        client.post("/api/search", json={"query": "crash", "limit": 3})

        vector, top_k = fake_index.queries[0]
        assert top_k == 3
        assert vector == [5.0, 0.5, 0.25]

    def test_results_keep_index_order(self, client, fake_index, make_feedback):
        """Test results follow the index ranking, not store order."""
        make_feedback(id="a", content="App crashes on login")
        make_feedback(id="b", content="Login is slow")
        make_feedback(id="c", content="Love the new theme", sentiment="positive")
        fake_index.matches = [
            VectorMatch(id="b", score=0.91),
            VectorMatch(id="a", score=0.87),
            VectorMatch(id="c", score=0.42),
        ]

        results = client.post("/api/search", json={"query": "login"}).json()["results"]

        assert [r["score"] for r in results] == [0.91, 0.87, 0.42]
        assert [r["feedback"]["id"] for r in results] == ["b", "a", "c"]
        assert results[0]["feedback"]["content"] == "Login is slow"
        assert results[2]["feedback"]["sentiment"] == "positive"

    def test_missing_record_is_null(self, client, fake_index, make_feedback):
        """Test an indexed id with no stored record keeps its slot with null feedback."""
        make_feedback(id="kept")
        fake_index.matches = [
            VectorMatch(id="deleted", score=0.99),
            VectorMatch(id="kept", score=0.5),
        ]

        results = client.post("/api/search", json={"query": "anything"}).json()["results"]

        assert len(results) == 2
        assert results[0] == {"score": 0.99, "feedback": None}
        assert results[1]["feedback"]["id"] == "kept"

    def test_upstream_failure_is_internal_error(self, client, fake_index):
        """Test an index failure surfaces as a 500 with its message."""
        async def broken_query(vector, top_k):
            raise CloudflareAPIError("Vectorize unavailable", status_code=503)

        fake_index.query = broken_query

        response = client.post("/api/search", json={"query": "crash"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal error: Vectorize unavailable"}


class TestBatched:
    """Tests for the bounded batch iterator."""

    def test_splits_with_remainder(self):
        assert list(batched(range(23), 10)) == [
            list(range(10)),
            list(range(10, 20)),
            [20, 21, 22],
        ]

    def test_exact_multiple(self):
        assert [len(b) for b in batched(range(20), 10)] == [10, 10]

    def test_empty(self):
        assert list(batched([], 10)) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            list(batched([1], 0))


class TestVectorMetadata:
    """Tests for index metadata."""

    def test_nulls_become_empty_strings(self, make_feedback):
        feedback = make_feedback(source="email")

        assert vector_metadata(feedback) == {"source": "email", "sentiment": "", "category": ""}

    def test_values_are_copied(self, make_feedback):
        feedback = make_feedback(source="app-store", sentiment="negative", category="bug")

        assert vector_metadata(feedback) == {
            "source": "app-store",
            "sentiment": "negative",
            "category": "bug",
        }


class TestVectorizeEndpoint:
    """Tests for POST /api/vectorize."""

    def test_empty_store(self, client, fake_index):
        """Test nothing is upserted when there is nothing to embed."""
        response = client.post("/api/vectorize")

        assert response.status_code == 200
        assert response.json() == {"success": True, "vectorized": 0}
        assert fake_index.upserts == []

    def test_batches_of_ten(self, client, fake_ai, fake_index, make_feedback):
        """Test all records are embedded and upserted in batches of at most 10."""
        for i in range(25):
            make_feedback(content=f"feedback item {i}", sentiment="neutral" if i % 2 else None)

        response = client.post("/api/vectorize")

        assert response.json() == {"success": True, "vectorized": 25}
        assert len(fake_ai.embedded) == 25
        assert [len(batch) for batch in fake_index.upserts] == [10, 10, 5]
        assert all(len(batch) <= VECTORIZE_BATCH_SIZE for batch in fake_index.upserts)

        upserted = [record for batch in fake_index.upserts for record in batch]
        assert len({record.id for record in upserted}) == 25
        first = next(r for r in upserted if r.id == "fb-001")
        assert first.metadata == {"source": "support", "sentiment": "", "category": ""}
        assert first.values == [float(len("feedback item 0")), 0.5, 0.25]

    def test_embedding_failure_aborts(self, client, fake_ai, fake_index, make_feedback):
        """Test a model failure fails the job before anything is written."""
        make_feedback()

        async def broken_embed(text):
            raise CloudflareAPIError("model overloaded", status_code=503)

        fake_ai.embed = broken_embed

        response = client.post("/api/vectorize")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal error: model overloaded"
        assert fake_index.upserts == []


class TestVectorizationService:
    """Tests for VectorizationService directly."""

    def test_batch_size_is_capped(self, db_session, fake_ai, fake_index, make_feedback):
        """Test a larger requested batch size cannot exceed the index limit."""
        for _ in range(12):
            make_feedback()

        service = VectorizationService(db_session, fake_ai, fake_index, batch_size=50)
        count = asyncio.run(service.run())

        assert count == 12
        assert [len(batch) for batch in fake_index.upserts] == [10, 2]

    def test_partial_failure_keeps_earlier_batches(self, db_session, fake_ai, fake_index, make_feedback):
        """Test a failing upsert leaves earlier batches written."""
        for _ in range(15):
            make_feedback()

        calls = {"n": 0}
        original_upsert = fake_index.upsert

        async def flaky_upsert(records):
            calls["n"] += 1
            if calls["n"] == 2:
                raise CloudflareAPIError("upsert rejected", status_code=400)
            return await original_upsert(records)

        fake_index.upsert = flaky_upsert
        service = VectorizationService(db_session, fake_ai, fake_index)

        with pytest.raises(CloudflareAPIError):
            asyncio.run(service.run())

        assert [len(batch) for batch in fake_index.upserts] == [10]
