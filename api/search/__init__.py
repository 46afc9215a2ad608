"""Semantic search and vector index maintenance."""
