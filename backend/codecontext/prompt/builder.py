"""LLM prompt building from session files."""

from __future__ import annotations

import dataclasses
import functools
import logging
from typing import Dict, List, Optional, Sequence

import tiktoken

from ..config import load_config
from ..core import (
    AssembledContext,
    Embedder,
    FilePreview,
    ProjectSummary,
    RankedMatch,
    SourceFile,
)
from ..search.ranker import find_similar, iter_candidates
from ..storage import FileStore
from .base import ContextAssembler

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "...\n[Content truncated]"


# ----------------------------
# Token estimation
# ----------------------------

@functools.lru_cache(maxsize=1)
def _encoder():
    return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str) -> int:
    """Count tokens in text using tiktoken (cl100k_base)."""
    return len(_encoder().encode(text))


# ----------------------------
# Context building
# ----------------------------

def truncate_content(content: str, budget: int) -> str:
    """Cut content to ``budget`` characters, appending the truncation marker."""
    if len(content) <= budget:
        return content
    return content[:budget] + TRUNCATION_MARKER


def summarize_files(files: Sequence[SourceFile], main_markers: Sequence[str]) -> ProjectSummary:
    languages: List[str] = []
    for f in files:
        if f.language not in languages:
            languages.append(f.language)

    markers = [m.lower() for m in main_markers]
    return ProjectSummary(
        total_files=len(files),
        languages=languages,
        total_lines=sum(f.line_count for f in files),
        main_files=[f.name for f in files if any(m in f.name.lower() for m in markers)],
    )


@dataclasses.dataclass(frozen=True)
class AssemblerConfig:
    match_limit: int = 10
    prompt_matches: int = 5
    preview_files: int = 5
    prompt_previews: int = 3
    preview_char_budget: int = 2000
    main_file_markers: Sequence[str] = ("index", "main", "app")
    claim_unassigned_files: bool = True

    @classmethod
    def from_cfg(cls, cfg: Dict) -> "AssemblerConfig":
        ctx = cfg.get("context", {})
        known = {f.name for f in dataclasses.fields(cls)}
        values = {k: v for k, v in ctx.items() if k in known}
        if "main_file_markers" in values:
            values["main_file_markers"] = tuple(values["main_file_markers"])
        return cls(**values)


class DefaultContextAssembler(ContextAssembler):
    """Default implementation of ContextAssembler."""

    def __init__(self, store: FileStore, cfg: Optional[Dict] = None):
        self.store = store
        self.config = AssemblerConfig.from_cfg(cfg if cfg is not None else load_config())

    def _resolve_files(self, session_id: str) -> List[SourceFile]:
        files = self.store.list_files_for_session(session_id)
        logger.info(f"Found {len(files)} files for session {session_id}")
        if files or not self.config.claim_unassigned_files:
            return files

        unassigned = self.store.list_files_without_session()
        if not unassigned:
            return files

        self.store.reassign_files_to_session([f.id for f in unassigned], session_id)
        logger.info(f"Assigned {len(unassigned)} unassigned files to session {session_id}")
        return self.store.list_files_for_session(session_id)

    def _rank(self, query: str, files: Sequence[SourceFile], embedder: Embedder) -> List[RankedMatch]:
        try:
            qv = embedder.embed(query)
            matches = find_similar(qv, iter_candidates(files), self.config.match_limit)
        except Exception as e:
            logger.error(f"Error generating embeddings for query, continuing without ranked context: {e}", exc_info=True)
            return []

        logger.info(f"Found {len(matches)} relevant chunks for query")
        return [dataclasses.replace(m, similarity=round(m.similarity, 2)) for m in matches]

    def build_context(
        self,
        query: str,
        session_id: str,
        embedder: Optional[Embedder] = None,
    ) -> AssembledContext:
        files = self._resolve_files(session_id)
        if not files:
            logger.warning(f"No files found for session {session_id}")
            return AssembledContext(query=query)

        matches: List[RankedMatch] = []
        if embedder is not None:
            matches = self._rank(query, files, embedder)
        else:
            logger.warning("No embedding provider supplied, skipping similarity ranking")

        previews = [
            FilePreview(
                name=f.name,
                language=f.language,
                content=truncate_content(f.content, self.config.preview_char_budget),
                fragment_count=len(f.fragments),
            )
            for f in files[: self.config.preview_files]
        ]

        return AssembledContext(
            query=query,
            summary=summarize_files(files, self.config.main_file_markers),
            matches=matches,
            previews=previews,
        )

    def build_prompt(self, query: str, context: AssembledContext) -> str:
        return render_prompt(query, context, self.config)


def render_prompt(query: str, context: AssembledContext, config: Optional[AssemblerConfig] = None) -> str:
    """Render the prompt; the raw query when the context has no files."""
    config = config or AssemblerConfig()
    if context.is_empty:
        return query

    summary = context.summary
    lines: List[str] = []
    lines.append("You are an AI assistant helping with code analysis and development. Here's the context of the project:")
    lines.append("")
    lines.append("## Project Overview")
    lines.append(f"- Total files: {summary.total_files}")
    lines.append(f"- Languages: {', '.join(summary.languages)}")
    lines.append(f"- Total lines of code: {summary.total_lines}")
    if summary.main_files:
        lines.append(f"- Main files: {', '.join(summary.main_files)}")
    lines.append("")

    if context.matches:
        lines.append("## Most Relevant Code Sections")
        for i, m in enumerate(context.matches[: config.prompt_matches], start=1):
            fr = m.fragment
            lines.append(
                f"### {i}. {m.file.name} ({fr.kind.value}, lines {fr.start_line}-{fr.end_line})"
                f" - Similarity: {m.similarity}"
            )
            lines.append(f"```{m.file.language or 'text'}")
            lines.append(truncate_content(fr.text, config.preview_char_budget))
            lines.append("```")
            lines.append("")
    elif context.previews:
        lines.append("## Project Files")
        for i, p in enumerate(context.previews[: config.prompt_previews], start=1):
            lines.append(f"### {i}. {p.name} ({p.language})")
            lines.append(f"```{p.language}")
            lines.append(p.content)
            lines.append("```")
            lines.append("")

    lines.append("## User Question")
    lines.append(query)
    lines.append("")
    lines.append(
        "Please provide a helpful response based on the code context above. "
        "Reference specific files, functions, or code sections when relevant."
    )
    return "\n".join(lines)


def build_context(
    store: FileStore,
    query: str,
    session_id: str,
    embedder: Optional[Embedder] = None,
) -> AssembledContext:
    """Wrapper for DefaultContextAssembler.build_context."""
    return DefaultContextAssembler(store).build_context(query, session_id, embedder)


def build_prompt(query: str, context: AssembledContext) -> str:
    """Render a prompt with default settings."""
    return render_prompt(query, context)
