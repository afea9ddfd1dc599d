"""Cosine similarity ranking over in-memory fragment vectors."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from ..core.models import Fragment, RankedMatch, SourceFile

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors.

    Vectors of different lengths, empty or zero-magnitude vectors, and
    vectors with non-finite components score exactly 0.0.
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(va, vb)) / (norm_a * norm_b)
    # NaN or inf components would break the descending sort
    if not np.isfinite(score):
        return 0.0
    return float(np.clip(score, -1.0, 1.0))


def iter_candidates(files: Iterable[SourceFile]) -> Iterable[Tuple[SourceFile, Fragment]]:
    """Every embedded fragment, in file order then fragment order."""
    for file in files:
        for fragment in file.fragments:
            if fragment.has_embedding:
                yield file, fragment


def find_similar(
    query_vector: Sequence[float],
    candidates: Iterable[Tuple[SourceFile, Fragment]],
    limit: int,
) -> List[RankedMatch]:
    """Score candidates against the query and return the top ``limit``.

    Candidates without a vector are skipped. Ties keep input order.
    """
    if limit <= 0:
        return []

    scored: List[RankedMatch] = []
    for file, fragment in candidates:
        if not fragment.has_embedding:
            continue
        scored.append(
            RankedMatch(
                file=file,
                fragment=fragment,
                similarity=cosine_similarity(query_vector, fragment.embedding),
            )
        )

    # sorted() is stable, so equal scores stay in first-seen order
    ranked = sorted(scored, key=lambda m: m.similarity, reverse=True)[:limit]

    if ranked:
        top = ", ".join(f"{m.similarity:0.4f}" for m in ranked[:3])
        logger.debug(f"Scored {len(scored)} fragments, top similarities: {top}")
    return ranked
