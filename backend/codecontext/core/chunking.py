"""Text chunking logic for source files using declaration boundaries."""

from __future__ import annotations

import dataclasses
import fnmatch
import logging
import os
import re
from typing import List, Optional, Pattern, Sequence, Tuple

from .models import Fragment, FragmentKind

logger = logging.getLogger(__name__)

# Language tags by file extension
EXT_TO_LANG = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".py": "python",
    ".java": "java",
    ".cpp": "cpp",
    ".c": "c",
    ".h": "c",
    ".hpp": "cpp",
    ".go": "go",
    ".rs": "rust",
    ".php": "php",
    ".rb": "ruby",
    ".cs": "csharp",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
    ".json": "json",
    ".xml": "xml",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".md": "markdown",
    ".txt": "text",
    ".sh": "bash",
    ".sql": "sql",
}


def detect_language(filename: str) -> str:
    """Get language tag from file extension, ``text`` when unknown."""
    _, ext = os.path.splitext(filename)
    return EXT_TO_LANG.get(ext.lower(), "text")


def should_process_file(filename: str, exclude_globs: Sequence[str]) -> bool:
    """Return False when the filename matches any exclude glob."""
    path = filename.replace("\\", "/")
    return not any(fnmatch.fnmatch(path, g) for g in exclude_globs)


# -----------------------------------------------------------------------------
# Language profiles
# -----------------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class LanguageProfile:
    """Ordered patterns owned by one language family.

    Boundary patterns are tried in order against each stripped line; the first
    match decides the fragment kind.
    """

    name: str
    tags: Tuple[str, ...]
    boundaries: Tuple[Tuple[Pattern[str], FragmentKind], ...]
    dependencies: Tuple[Pattern[str], ...] = ()
    exports: Tuple[Pattern[str], ...] = ()

    def match_boundary(self, line: str) -> Optional[FragmentKind]:
        for regex, kind in self.boundaries:
            if regex.match(line):
                return kind
        return None


SCRIPT_PROFILE = LanguageProfile(
    name="script",
    tags=("typescript", "javascript"),
    boundaries=(
        (re.compile(r"^(export\s+)?(default\s+)?(async\s+)?function\s+(\w+)"), FragmentKind.FUNCTION),
        (re.compile(r"^(export\s+)?(default\s+)?(abstract\s+)?class\s+(\w+)"), FragmentKind.CLASS),
        (re.compile(r"^(export\s+)?interface\s+(\w+)"), FragmentKind.INTERFACE),
        (re.compile(r"^(export\s+)?type\s+(\w+)"), FragmentKind.INTERFACE),
        (re.compile(r"^(export\s+)?const\s+(\w+)\s*=\s*(async\s+)?\("), FragmentKind.FUNCTION),
    ),
    dependencies=(
        re.compile(r"^import.*from\s+['\"]([^'\"]+)['\"]"),
        re.compile(r"require\(['\"]([^'\"]+)['\"]\)"),
    ),
    exports=(
        re.compile(r"^export\s+(?:function|class|interface|type|const|let|var)\s+([^\s(<:=;{]+)"),
        re.compile(r"^export\s+default\s+(?:async\s+)?(?:function\s+|class\s+)?([^\s(;{]+)"),
    ),
)

PYTHON_PROFILE = LanguageProfile(
    name="python",
    tags=("python",),
    boundaries=(
        (re.compile(r"^(async\s+)?def\s+(\w+)"), FragmentKind.FUNCTION),
        (re.compile(r"^class\s+(\w+)"), FragmentKind.CLASS),
    ),
    dependencies=(
        re.compile(r"^(?:import|from)\s+([^\s,;]+)"),
    ),
)

JAVA_PROFILE = LanguageProfile(
    name="java",
    tags=("java",),
    boundaries=(
        (re.compile(r"^(public|private|protected)?\s*(static\s+)?(\w+\s+)*(\w+)\s*\([^)]*\)\s*\{"), FragmentKind.FUNCTION),
        (re.compile(r"^(public|private|protected)?\s*(abstract\s+)?class\s+(\w+)"), FragmentKind.CLASS),
        (re.compile(r"^(public|private|protected)?\s*interface\s+(\w+)"), FragmentKind.INTERFACE),
    ),
    dependencies=(
        re.compile(r"^import\s+([^;]+);"),
    ),
)

C_PROFILE = LanguageProfile(
    name="c",
    tags=("c", "cpp"),
    boundaries=(
        (re.compile(r"^(\w+\s+)*(\w+)\s*\([^)]*\)\s*\{"), FragmentKind.FUNCTION),
        (re.compile(r"^(class|struct)\s+(\w+)"), FragmentKind.CLASS),
    ),
)

GENERIC_PROFILE = LanguageProfile(
    name="generic",
    tags=(),
    boundaries=(
        (re.compile(r"^(function|def|fn)\s+(\w+)"), FragmentKind.FUNCTION),
        (re.compile(r"^(class|struct|type)\s+(\w+)"), FragmentKind.CLASS),
    ),
)

PROFILES: Tuple[LanguageProfile, ...] = (
    SCRIPT_PROFILE,
    PYTHON_PROFILE,
    JAVA_PROFILE,
    C_PROFILE,
)


def profile_for(language: str) -> LanguageProfile:
    """Select the language family for a tag, falling back to generic."""
    tag = (language or "").strip().lower()
    for profile in PROFILES:
        if tag in profile.tags:
            return profile
    return GENERIC_PROFILE


# -----------------------------------------------------------------------------
# Interfaces
# -----------------------------------------------------------------------------

class Chunker:
    """Abstract base class for text chunking."""

    def chunk(self, content: str, language: str) -> List[Fragment]:
        """Chunk text into structural fragments.

        Args:
            content: Full file text
            language: Language tag of the file

        Returns:
            Fragments in line order, never empty
        """
        raise NotImplementedError


class DefaultChunker(Chunker):
    """Single-pass chunker splitting on declaration boundaries."""

    def chunk(self, content: str, language: str) -> List[Fragment]:
        profile = profile_for(language)
        lines = content.split("\n")

        spans: List[Tuple[int, int, FragmentKind]] = []
        open_start = 1
        open_kind = FragmentKind.OTHER
        found_boundary = False

        for idx, line in enumerate(lines):
            line_no = idx + 1
            kind = profile.match_boundary(line.strip())
            if kind is None:
                continue
            found_boundary = True
            if line_no > open_start:
                spans.append((open_start, line_no - 1, open_kind))
            open_start = line_no
            open_kind = kind

        if not found_boundary:
            logger.debug(f"No boundaries found for {language!r} content, using single fragment")
            return [Fragment(id="chunk_1", text=content, start_line=1, end_line=len(lines))]

        spans.append((open_start, len(lines), open_kind))

        fragments = []
        for n, (start, end, kind) in enumerate(spans, start=1):
            fragments.append(
                Fragment(
                    id=f"chunk_{n}",
                    text="\n".join(lines[start - 1:end]),
                    start_line=start,
                    end_line=end,
                    kind=kind,
                )
            )
        logger.debug(f"Created {len(fragments)} fragments using {profile.name} patterns")
        return fragments


def chunk_text(content: str, language: str) -> List[Fragment]:
    """Chunk text with the default chunker (Functional Wrapper)."""
    chunker = DefaultChunker()
    return chunker.chunk(content, language)
