"""ContextAssembler Interface."""

from __future__ import annotations

from typing import Optional

from ..core import AssembledContext, Embedder


class ContextAssembler:
    """Abstract base class for context assembly."""

    def build_context(
        self,
        query: str,
        session_id: str,
        embedder: Optional[Embedder] = None,
    ) -> AssembledContext:
        """Collect summary, ranked fragments and file previews for a query.

        Args:
            query: User question
            session_id: Session whose files provide the context
            embedder: Optional provider; without it no ranking is attempted

        Returns:
            AssembledContext, empty when the session has no files
        """
        raise NotImplementedError

    def build_prompt(self, query: str, context: AssembledContext) -> str:
        """Render the prompt handed to the language model."""
        raise NotImplementedError
