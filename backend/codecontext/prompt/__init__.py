"""Context assembly and prompt rendering."""

from .builder import (
    TRUNCATION_MARKER,
    AssemblerConfig,
    DefaultContextAssembler,
    build_context,
    build_prompt,
    count_tokens,
    render_prompt,
)

__all__ = [
    "TRUNCATION_MARKER",
    "AssemblerConfig",
    "DefaultContextAssembler",
    "build_context",
    "build_prompt",
    "count_tokens",
    "render_prompt",
]
