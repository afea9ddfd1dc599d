"""Core functionality for codecontext."""

from .models import (
    AssembledContext,
    FilePreview,
    Fragment,
    FragmentKind,
    ProjectSummary,
    RankedMatch,
    SearchReport,
    SourceFile,
)
from .chunking import (
    Chunker,
    DefaultChunker,
    LanguageProfile,
    chunk_text,
    detect_language,
    profile_for,
    should_process_file,
)
from .extraction import extract_dependencies, extract_exports
from .embeddings import (
    Embedder,
    GeminiEmbedder,
    ProviderError,
    SentenceTransformersEmbedder,
    make_embedder,
)

__all__ = [
    "AssembledContext",
    "FilePreview",
    "Fragment",
    "FragmentKind",
    "ProjectSummary",
    "RankedMatch",
    "SearchReport",
    "SourceFile",
    "Chunker",
    "DefaultChunker",
    "LanguageProfile",
    "chunk_text",
    "detect_language",
    "profile_for",
    "should_process_file",
    "extract_dependencies",
    "extract_exports",
    "Embedder",
    "GeminiEmbedder",
    "ProviderError",
    "SentenceTransformersEmbedder",
    "make_embedder",
]
