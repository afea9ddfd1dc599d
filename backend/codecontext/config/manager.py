"""Configuration management for codecontext."""

from __future__ import annotations

import copy
import os
from typing import Dict, List, Optional


DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    "node_modules/**",
    ".git/**",
    ".DS_Store",
    ".env",
    ".env.*",
    "*.log",
    "*.tmp",
    ".cache/**",
    "dist/**",
    "build/**",
    "coverage/**",
    ".nyc_output/**",
]

DEFAULT_CONFIG: Dict = {
    "embedding": {
        "backend": "gemini",
        "gemini_model": "embedding-001",
        "gemini_api_base": "https://generativelanguage.googleapis.com/v1beta",
        "sentence_transformers_model": "sentence-transformers/all-MiniLM-L6-v2",
        "timeout_seconds": 10,
    },
    "indexing": {
        "max_workers": 4,
    },
    "search": {"top_k": 5},
    "context": {
        "match_limit": 10,
        "prompt_matches": 5,
        "preview_files": 5,
        "prompt_previews": 3,
        "preview_char_budget": 2000,
        "main_file_markers": ["index", "main", "app"],
        # Compatibility fallback for files uploaded before their session existed
        "claim_unassigned_files": True,
    },
    "database": {
        "url": "sqlite:///./codecontext.db",
    },
}


def expand_pattern(pattern: str) -> List[str]:
    """Expand pattern to include both root and nested versions.

    Examples:
        '*.log' -> ['*.log', '**/*.log']
        'dist/**' -> ['dist/**', '**/dist/**']
    """
    pattern = pattern.strip()
    if not pattern or pattern.startswith("#"):
        return []

    if pattern.startswith("**/"):
        return [pattern]

    if pattern.startswith("*."):
        return [pattern, "**/" + pattern]

    if "/**" in pattern:
        return [pattern, "**/" + pattern]

    return [pattern, "**/" + pattern]


def _expand_patterns(patterns: List[str]) -> List[str]:
    """Expand and deduplicate patterns while preserving order."""
    out: List[str] = []
    seen: set[str] = set()
    for p in patterns:
        for ep in expand_pattern(p):
            if ep not in seen:
                seen.add(ep)
                out.append(ep)
    return out


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> Dict:
    """Load configuration.

    Returns default configuration with environment overrides and expanded
    exclude patterns.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    emb = config["embedding"]
    emb["backend"] = os.getenv("CODECONTEXT_EMBEDDING_BACKEND", emb["backend"])
    if os.getenv("GEMINI_API_KEY"):
        emb["api_key"] = os.getenv("GEMINI_API_KEY")
    emb["timeout_seconds"] = float(os.getenv("CODECONTEXT_EMBED_TIMEOUT", emb["timeout_seconds"]))

    config["indexing"]["max_workers"] = int(
        os.getenv("CODECONTEXT_MAX_WORKERS", config["indexing"]["max_workers"])
    )
    config["context"]["claim_unassigned_files"] = _env_flag(
        os.getenv("CODECONTEXT_CLAIM_UNASSIGNED_FILES"),
        config["context"]["claim_unassigned_files"],
    )
    config["database"]["url"] = os.getenv("DATABASE_URL", config["database"]["url"])

    config["exclude_globs"] = _expand_patterns(DEFAULT_EXCLUDE_PATTERNS)

    return config
