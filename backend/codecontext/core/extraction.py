"""Best-effort dependency and export extraction."""

from __future__ import annotations

from typing import List, Pattern, Sequence

from .chunking import profile_for


def _collect(content: str, patterns: Sequence[Pattern[str]]) -> List[str]:
    out: List[str] = []
    seen: set[str] = set()
    if not patterns:
        return out
    for line in content.split("\n"):
        trimmed = line.strip()
        for regex in patterns:
            m = regex.search(trimmed)
            if not m:
                continue
            value = m.group(1).strip() or "default"
            if value not in seen:
                seen.add(value)
                out.append(value)
    return out


def extract_dependencies(content: str, language: str) -> List[str]:
    """Imported module names, deduplicated in first-seen order."""
    return _collect(content, profile_for(language).dependencies)


def extract_exports(content: str, language: str) -> List[str]:
    """Exported symbol names, deduplicated in first-seen order."""
    return _collect(content, profile_for(language).exports)
