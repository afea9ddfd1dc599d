"""Embedding orchestration for codecontext."""

from .indexer import DefaultIndexer, EmbeddingReport, generate_embeddings_for_session

__all__ = [
    "DefaultIndexer",
    "EmbeddingReport",
    "generate_embeddings_for_session",
]
