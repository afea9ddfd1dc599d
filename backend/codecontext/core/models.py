"""Data models for codecontext."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import enum
from typing import Dict, List, Optional


class FragmentKind(str, enum.Enum):
    """Structural kind of a code fragment."""

    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    BLOCK = "block"
    OTHER = "other"


@dataclasses.dataclass
class Fragment:
    """A structurally meaningful slice of a source file."""

    id: str
    text: str
    start_line: int
    end_line: int
    kind: FragmentKind = FragmentKind.OTHER
    embedding: Optional[List[float]] = None

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)


@dataclasses.dataclass
class SourceFile:
    """An uploaded source file together with its fragments."""

    id: str
    name: str
    language: str
    content: str
    session_id: Optional[str] = None
    user_id: Optional[str] = None
    fragments: List[Fragment] = dataclasses.field(default_factory=list)
    dependencies: List[str] = dataclasses.field(default_factory=list)
    exports: List[str] = dataclasses.field(default_factory=list)
    uploaded_at: _dt.datetime = dataclasses.field(
        default_factory=lambda: _dt.datetime.now(_dt.timezone.utc)
    )

    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))

    @property
    def line_count(self) -> int:
        return len(self.content.split("\n"))

    def embedded_fragments(self) -> List[Fragment]:
        return [f for f in self.fragments if f.has_embedding]


@dataclasses.dataclass(frozen=True)
class RankedMatch:
    """A fragment scored against a query vector."""

    file: SourceFile
    fragment: Fragment
    similarity: float

    def to_dict(self) -> Dict:
        return {
            "file": {
                "id": self.file.id,
                "name": self.file.name,
                "language": self.file.language,
            },
            "chunk": {
                "id": self.fragment.id,
                "content": self.fragment.text,
                "start_line": self.fragment.start_line,
                "end_line": self.fragment.end_line,
                "type": self.fragment.kind.value,
            },
            "similarity": self.similarity,
        }


@dataclasses.dataclass
class SearchReport:
    """Ranked matches for a query, ready for serialization."""

    query: str
    matches: List[RankedMatch] = dataclasses.field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "query": self.query,
            "results": [m.to_dict() for m in self.matches],
        }


@dataclasses.dataclass
class ProjectSummary:
    total_files: int = 0
    languages: List[str] = dataclasses.field(default_factory=list)
    total_lines: int = 0
    main_files: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class FilePreview:
    """Raw file content used when no ranked fragments are available."""

    name: str
    language: str
    content: str
    fragment_count: int


@dataclasses.dataclass
class AssembledContext:
    """Per-query context handed to the prompt renderer."""

    query: str
    summary: ProjectSummary = dataclasses.field(default_factory=ProjectSummary)
    matches: List[RankedMatch] = dataclasses.field(default_factory=list)
    previews: List[FilePreview] = dataclasses.field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.summary.total_files == 0
