"""Semantic search functionality."""

from __future__ import annotations

import logging

from ..core import Embedder, SearchReport
from ..storage import FileStore
from .base import Searcher
from .ranker import find_similar, iter_candidates

logger = logging.getLogger(__name__)


class DefaultSearcher(Searcher):

    def __init__(self, store: FileStore):
        self.store = store

    def search(
        self,
        session_id: str,
        query: str,
        embedder: Embedder,
        limit: int = 5,
    ) -> SearchReport:
        files = self.store.list_files_for_session(session_id)
        if not files:
            logger.info(f"No files in session {session_id}, nothing to search")
            return SearchReport(query=query)

        # ProviderError propagates: search callers report it, unlike context building
        qv = embedder.embed(query)
        matches = find_similar(qv, iter_candidates(files), limit)
        logger.info(f"Found {len(matches)} matches for query in session {session_id}")
        return SearchReport(query=query, matches=matches)


def search(store: FileStore, session_id: str, query: str, embedder: Embedder, limit: int = 5) -> SearchReport:
    searcher = DefaultSearcher(store)
    return searcher.search(session_id, query, embedder, limit=limit)
