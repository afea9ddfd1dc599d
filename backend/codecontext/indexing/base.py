"""Indexer Interface."""

from __future__ import annotations

from ..core import Embedder, SourceFile


class Indexer:
    """Abstract base class for fragment embedding."""

    def generate_embeddings_for_file(self, file: SourceFile, embedder: Embedder) -> int:
        raise NotImplementedError

    def generate_embeddings_for_session(self, session_id: str, embedder: Embedder):
        raise NotImplementedError
