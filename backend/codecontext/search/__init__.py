"""Similarity ranking and semantic search."""

from .ranker import cosine_similarity, find_similar, iter_candidates
from .searcher import DefaultSearcher, search

__all__ = [
    "cosine_similarity",
    "find_similar",
    "iter_candidates",
    "DefaultSearcher",
    "search",
]
