"""In-process file store."""

from __future__ import annotations

import copy
import logging
import threading
from typing import Dict, List, Optional, Sequence

from ..core.models import SourceFile
from .base import FileStore

logger = logging.getLogger(__name__)


class InMemoryFileStore(FileStore):
    """Dictionary-backed store; records are copied on the way in and out."""

    def __init__(self, files: Optional[Sequence[SourceFile]] = None):
        self._files: Dict[str, SourceFile] = {}
        self._lock = threading.Lock()
        for f in files or []:
            self.save_file(f)

    def _sorted(self, files: List[SourceFile]) -> List[SourceFile]:
        return [copy.deepcopy(f) for f in sorted(files, key=lambda f: f.uploaded_at, reverse=True)]

    def list_files_for_session(self, session_id: str) -> List[SourceFile]:
        with self._lock:
            return self._sorted([f for f in self._files.values() if f.session_id == session_id])

    def list_files_without_session(self) -> List[SourceFile]:
        with self._lock:
            return self._sorted([f for f in self._files.values() if not f.session_id])

    def reassign_files_to_session(self, file_ids: Sequence[str], session_id: str) -> None:
        with self._lock:
            for file_id in file_ids:
                record = self._files.get(file_id)
                if record is not None:
                    record.session_id = session_id
        logger.debug(f"Reassigned {len(file_ids)} files to session {session_id}")

    def save_file(self, file: SourceFile) -> None:
        with self._lock:
            self._files[file.id] = copy.deepcopy(file)

    def get_file(self, file_id: str) -> Optional[SourceFile]:
        with self._lock:
            record = self._files.get(file_id)
            return copy.deepcopy(record) if record is not None else None
