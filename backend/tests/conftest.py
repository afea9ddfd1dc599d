"""
Pytest configuration for the codecontext test suite.

Provides:
- deterministic fake embedders (no network)
- an in-memory file store and a SourceFile factory
"""
import datetime as _dt
import os
import threading

# The web app binds its engine at import time; keep it in memory
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest

from codecontext.config import load_config
from codecontext.core import Embedder, Fragment, FragmentKind, ProviderError, SourceFile
from codecontext.storage import InMemoryFileStore


VOCAB = ("auth", "login", "database", "query", "render", "button")


class KeywordEmbedder(Embedder):
    """Counts vocabulary words; raises for any text containing 'boom'."""

    def __init__(self):
        self.calls = []
        self._lock = threading.Lock()

    def embed(self, text):
        with self._lock:
            self.calls.append(text)
        if "boom" in text:
            raise ProviderError("quota exceeded")
        lowered = text.lower()
        return [float(lowered.count(w)) for w in VOCAB]


class FailingEmbedder(Embedder):
    def __init__(self):
        self.calls = 0

    def embed(self, text):
        self.calls += 1
        raise ProviderError("invalid API key")


@pytest.fixture
def keyword_embedder():
    return KeywordEmbedder()


@pytest.fixture
def failing_embedder():
    return FailingEmbedder()


@pytest.fixture
def cfg():
    return load_config()


@pytest.fixture
def store():
    return InMemoryFileStore()


@pytest.fixture
def make_file():
    """Build a SourceFile; fragments are given as (text, kind, embedding) tuples."""
    base = _dt.datetime(2024, 1, 1, tzinfo=_dt.timezone.utc)
    counter = {"n": 0}

    def _make(name, content=None, session_id="s1", language="python", fragments=None, age=None):
        counter["n"] += 1
        n = counter["n"]
        frags = []
        line = 1
        for i, (text, kind, emb) in enumerate(fragments or [], start=1):
            end = line + len(text.split("\n")) - 1
            frags.append(
                Fragment(
                    id=f"chunk_{i}",
                    text=text,
                    start_line=line,
                    end_line=end,
                    kind=kind or FragmentKind.OTHER,
                    embedding=emb,
                )
            )
            line = end + 1
        if content is None:
            content = "\n".join(t for t, _, _ in fragments or []) or f"# {name}"
        # later files are newer unless an explicit age (in minutes) is given
        offset = age if age is not None else -n
        return SourceFile(
            id=f"file-{n}",
            name=name,
            language=language,
            content=content,
            session_id=session_id,
            fragments=frags,
            uploaded_at=base - _dt.timedelta(minutes=offset),
        )

    return _make
