"""Fragment embedding and upload processing."""

from __future__ import annotations

import dataclasses
import logging
import threading
import uuid
import weakref
from typing import Dict, List, Optional

from ..config import load_config
from ..core import (
    DefaultChunker,
    Embedder,
    SourceFile,
    detect_language,
    extract_dependencies,
    extract_exports,
    should_process_file,
)
from ..storage import FileStore
from ..utils import map_best_effort
from .base import Indexer

logger = logging.getLogger(__name__)

# Per-file locks shared across indexer instances, dropped once no caller holds them
_FILE_LOCKS: weakref.WeakValueDictionary = weakref.WeakValueDictionary()
_LOCKS_GUARD = threading.Lock()


@dataclasses.dataclass
class EmbeddingReport:
    """Outcome of embedding every file in a session."""

    session_id: str
    files_processed: int = 0
    fragments_embedded: int = 0
    failed_files: List[str] = dataclasses.field(default_factory=list)


class DefaultIndexer(Indexer):
    """Embeds fragments through an injected provider and persists the vectors.

    Work on one file id is serialised; different files may be processed
    concurrently.
    """

    def __init__(self, store: FileStore, cfg: Optional[Dict] = None):
        self.store = store
        self.cfg = cfg if cfg is not None else load_config()
        self.chunker = DefaultChunker()

    def _lock_for(self, file_id: str) -> threading.Lock:
        with _LOCKS_GUARD:
            return _FILE_LOCKS.setdefault(file_id, threading.Lock())

    def generate_embeddings_for_file(self, file: SourceFile, embedder: Embedder) -> int:
        """Embed every fragment of a file and save it.

        Fragments whose embedding fails are left without a vector. Returns the
        number of fragments that now carry one.
        """
        lock = self._lock_for(file.id)
        with lock:
            current = self.store.get_file(file.id) or file

            successes, failures = map_best_effort(
                current.fragments, lambda fragment: embedder.embed(fragment.text)
            )
            for fragment, error in failures:
                fragment.embedding = None
                logger.warning(f"Failed to generate embedding for chunk {fragment.id} of {current.name}: {error}")
            for fragment, vector in successes:
                fragment.embedding = list(vector)

            self.store.save_file(current)

        logger.info(f"Generated {len(successes)} embeddings for file {current.name}")
        return len(successes)

    def generate_embeddings_for_file_id(self, file_id: str, embedder: Embedder) -> int:
        file = self.store.get_file(file_id)
        if file is None:
            raise LookupError(f"File not found: {file_id}")
        return self.generate_embeddings_for_file(file, embedder)

    def generate_embeddings_for_session(self, session_id: str, embedder: Embedder) -> EmbeddingReport:
        """Embed all files of a session; a failing file never stops the rest."""
        files = self.store.list_files_for_session(session_id)
        max_workers = int(self.cfg.get("indexing", {}).get("max_workers", 4))
        logger.info(f"Generating embeddings for {len(files)} files in session {session_id}")

        successes, failures = map_best_effort(
            files,
            lambda f: self.generate_embeddings_for_file(f, embedder),
            max_workers=max_workers,
        )

        report = EmbeddingReport(session_id=session_id, files_processed=len(successes))
        for _, count in successes:
            report.fragments_embedded += count
        for file, error in failures:
            logger.warning(f"Failed to generate embeddings for file {file.name}: {error}")
            report.failed_files.append(file.name)

        logger.info(
            f"Completed embedding generation for session {session_id}: "
            f"{report.fragments_embedded} fragments, {len(report.failed_files)} failed files"
        )
        return report

    def process_upload(
        self,
        name: str,
        content: str,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> SourceFile:
        """Chunk a newly uploaded file, extract its metadata and store it.

        Raises:
            ValueError: If the filename matches an exclude pattern
        """
        exclude_globs = self.cfg.get("exclude_globs", [])
        if not should_process_file(name, exclude_globs):
            raise ValueError(f"File is excluded from processing: {name}")

        language = detect_language(name)
        file = SourceFile(
            id=uuid.uuid4().hex,
            name=name,
            language=language,
            content=content,
            session_id=session_id or None,
            user_id=user_id,
            fragments=self.chunker.chunk(content, language),
            dependencies=extract_dependencies(content, language),
            exports=extract_exports(content, language),
        )
        self.store.save_file(file)
        logger.info(f"Processed {name} ({language}) into {len(file.fragments)} fragments")
        return file


def generate_embeddings_for_session(store: FileStore, session_id: str, embedder: Embedder) -> EmbeddingReport:
    """Embed a session's files (Wrapper)."""
    indexer = DefaultIndexer(store)
    return indexer.generate_embeddings_for_session(session_id, embedder)
