"""Tests for codecontext.indexing"""

import gc

import pytest

from codecontext.core import FragmentKind, ProviderError
from codecontext.indexing import DefaultIndexer, generate_embeddings_for_session
from codecontext.indexing import indexer as indexer_module
from codecontext.storage import InMemoryFileStore


class FlakySaveStore(InMemoryFileStore):
    """Fails to persist one particular file."""

    def __init__(self, bad_id):
        super().__init__()
        self.bad_id = bad_id
        self.fail = False

    def save_file(self, file):
        if self.fail and file.id == self.bad_id:
            raise OSError("disk full")
        super().save_file(file)


def test_failed_fragment_is_skipped_not_fatal(store, cfg, make_file, keyword_embedder):
    f = make_file("auth.py", fragments=[
        ("def login(): auth", FragmentKind.FUNCTION, None),
        ("def boom(): pass", FragmentKind.FUNCTION, None),
        ("class Database: query", FragmentKind.CLASS, None),
    ])
    store.save_file(f)

    count = DefaultIndexer(store, cfg).generate_embeddings_for_file(f, keyword_embedder)

    assert count == 2
    saved = store.get_file(f.id)
    assert saved.fragments[0].embedding == [1.0, 1.0, 0.0, 0.0, 0.0, 0.0]
    assert saved.fragments[1].embedding is None
    assert saved.fragments[2].embedding == [0.0, 0.0, 1.0, 1.0, 0.0, 0.0]
    assert len(keyword_embedder.calls) == 3


def test_rerun_is_idempotent(store, cfg, make_file, keyword_embedder):
    f = make_file("a.py", fragments=[("render button", FragmentKind.FUNCTION, None)])
    store.save_file(f)
    indexer = DefaultIndexer(store, cfg)

    indexer.generate_embeddings_for_file(f, keyword_embedder)
    first = store.get_file(f.id)
    indexer.generate_embeddings_for_file(f, keyword_embedder)
    second = store.get_file(f.id)

    assert first.fragments == second.fragments


def test_rerun_with_failing_provider_clears_stale_vectors(store, cfg, make_file, failing_embedder):
    f = make_file("a.py", fragments=[("x", FragmentKind.FUNCTION, [1.0, 2.0])])
    store.save_file(f)

    count = DefaultIndexer(store, cfg).generate_embeddings_for_file(f, failing_embedder)

    assert count == 0
    assert store.get_file(f.id).fragments[0].embedding is None


def test_file_missing_from_store_is_saved(store, cfg, make_file, keyword_embedder):
    f = make_file("new.py", fragments=[("auth", FragmentKind.OTHER, None)])

    assert DefaultIndexer(store, cfg).generate_embeddings_for_file(f, keyword_embedder) == 1
    assert store.get_file(f.id).fragments[0].has_embedding


def test_generate_for_unknown_file_id(store, cfg, keyword_embedder):
    with pytest.raises(LookupError):
        DefaultIndexer(store, cfg).generate_embeddings_for_file_id("nope", keyword_embedder)


@pytest.mark.parametrize("max_workers", [1, 4])
def test_session_embedding_continues_past_failed_file(cfg, make_file, keyword_embedder, max_workers):
    files = [
        make_file(f"m{i}.py", fragments=[(f"auth {i}", FragmentKind.FUNCTION, None)])
        for i in range(5)
    ]
    store = FlakySaveStore(bad_id=files[2].id)
    for f in files:
        store.save_file(f)
    other = make_file("other.py", session_id="s2", fragments=[("login", FragmentKind.OTHER, None)])
    store.save_file(other)
    store.fail = True
    cfg["indexing"]["max_workers"] = max_workers

    report = DefaultIndexer(store, cfg).generate_embeddings_for_session("s1", keyword_embedder)

    assert report.files_processed == 4
    assert report.fragments_embedded == 4
    assert report.failed_files == ["m2.py"]
    for f in files:
        saved = store.get_file(f.id)
        assert saved.fragments[0].has_embedding == (f.id != files[2].id)
    assert not store.get_file(other.id).fragments[0].has_embedding


def test_empty_session_reports_nothing(store, cfg, keyword_embedder):
    report = DefaultIndexer(store, cfg).generate_embeddings_for_session("empty", keyword_embedder)
    assert report.files_processed == 0
    assert report.failed_files == []
    assert keyword_embedder.calls == []


def test_session_wrapper(store, make_file, keyword_embedder):
    store.save_file(make_file("a.py", fragments=[("auth", FragmentKind.OTHER, None)]))
    store.save_file(make_file("b.py", fragments=[("boom", FragmentKind.OTHER, None)]))

    report = generate_embeddings_for_session(store, "s1", keyword_embedder)

    assert report.files_processed == 2
    assert report.fragments_embedded == 1


def test_process_upload_chunks_and_stores(store, cfg):
    content = "import React from 'react';\n\nexport function App() {\n  return null;\n}\n"

    f = DefaultIndexer(store, cfg).process_upload("src/App.tsx", content, session_id="s9", user_id="u1")

    saved = store.get_file(f.id)
    assert saved.language == "typescript"
    assert saved.session_id == "s9"
    assert saved.user_id == "u1"
    assert [(fr.start_line, fr.end_line, fr.kind) for fr in saved.fragments] == [
        (1, 2, FragmentKind.OTHER),
        (3, 6, FragmentKind.FUNCTION),
    ]
    assert saved.dependencies == ["react"]
    assert saved.exports == ["App"]


def test_process_upload_without_session(store, cfg):
    f = DefaultIndexer(store, cfg).process_upload("notes.txt", "hello", session_id="")
    assert f.session_id is None
    assert [x.id for x in store.list_files_without_session()] == [f.id]


def test_process_upload_rejects_excluded_files(store, cfg):
    with pytest.raises(ValueError):
        DefaultIndexer(store, cfg).process_upload("node_modules/lib/index.js", "x")
    assert store.list_files_without_session() == []


def test_provider_error_is_runtime_error():
    assert issubclass(ProviderError, RuntimeError)


def test_file_locks_are_released_after_use(store, cfg, make_file, keyword_embedder):
    indexer = DefaultIndexer(store, cfg)
    held = indexer._lock_for("pinned")
    assert indexer._lock_for("pinned") is held

    files = [make_file(f"l{i}.py", fragments=[("auth", FragmentKind.OTHER, None)]) for i in range(3)]
    for f in files:
        indexer.generate_embeddings_for_file(f, keyword_embedder)
    gc.collect()

    for f in files:
        assert f.id not in indexer_module._FILE_LOCKS
    assert indexer_module._FILE_LOCKS.get("pinned") is held
