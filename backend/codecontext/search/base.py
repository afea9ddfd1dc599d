"""Searcher Interface."""

from __future__ import annotations

from ..core import Embedder, SearchReport


class Searcher:
    """Abstract base class for semantic search."""

    def search(
        self,
        session_id: str,
        query: str,
        embedder: Embedder,
        limit: int = 5,
    ) -> SearchReport:
        """Search a session's fragments for code semantically similar to query.

        Args:
            session_id: Session whose files are searched
            query: Search query text
            embedder: Provider used to embed the query
            limit: Number of results to return

        Returns:
            SearchReport with matches sorted by relevance
        """
        raise NotImplementedError
