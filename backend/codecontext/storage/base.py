"""Abstract file storage interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..core.models import SourceFile


class FileStore(ABC):
    """Abstract base class for source file storage backends.

    Listings return files newest upload first. ``save_file`` overwrites the
    whole file record, fragments and vectors included.
    """

    @abstractmethod
    def list_files_for_session(self, session_id: str) -> List[SourceFile]:
        """Files owned by a session."""
        pass

    @abstractmethod
    def list_files_without_session(self) -> List[SourceFile]:
        """Files that have no session association."""
        pass

    @abstractmethod
    def reassign_files_to_session(self, file_ids: Sequence[str], session_id: str) -> None:
        """Attach the given files to a session."""
        pass

    @abstractmethod
    def save_file(self, file: SourceFile) -> None:
        """Insert or overwrite a file record."""
        pass

    @abstractmethod
    def get_file(self, file_id: str) -> Optional[SourceFile]:
        """Fetch one file, None when missing."""
        pass

    def count(self, session_id: str) -> int:
        """Count files in a session (default implementation)."""
        return len(self.list_files_for_session(session_id))
