"""SQLAlchemy file store backend."""

from __future__ import annotations

import datetime as _dt
import logging
import threading
from typing import List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from ..core.models import Fragment, FragmentKind, SourceFile
from ..web.models import FragmentRow, SourceFileRow
from .base import FileStore

logger = logging.getLogger(__name__)


def _to_domain(row: SourceFileRow) -> SourceFile:
    uploaded_at = row.uploaded_at or _dt.datetime.now(_dt.timezone.utc)
    return SourceFile(
        id=row.id,
        name=row.name,
        language=row.language,
        content=row.content,
        session_id=row.session_id or None,
        user_id=row.user_id,
        dependencies=list(row.dependencies or []),
        exports=list(row.exports or []),
        uploaded_at=uploaded_at,
        fragments=[
            Fragment(
                id=fr.fragment_id,
                text=fr.text,
                start_line=fr.start_line,
                end_line=fr.end_line,
                kind=FragmentKind(fr.kind),
                embedding=list(fr.embedding) if fr.embedding else None,
            )
            for fr in row.fragments
        ],
    )


class SqlFileStore(FileStore):
    """File store over a SQLAlchemy session.

    Calls are serialised with a lock because one session may be shared by the
    embedding worker threads.
    """

    def __init__(self, db: Session):
        self.db = db
        self._lock = threading.RLock()

    def _query(self):
        return self.db.query(SourceFileRow).options(selectinload(SourceFileRow.fragments))

    def list_files_for_session(self, session_id: str) -> List[SourceFile]:
        with self._lock:
            rows = (
                self._query()
                .filter(SourceFileRow.session_id == session_id)
                .order_by(SourceFileRow.uploaded_at.desc())
                .all()
            )
            return [_to_domain(r) for r in rows]

    def list_files_without_session(self) -> List[SourceFile]:
        with self._lock:
            rows = (
                self._query()
                .filter(or_(SourceFileRow.session_id.is_(None), SourceFileRow.session_id == ""))
                .order_by(SourceFileRow.uploaded_at.desc())
                .all()
            )
            return [_to_domain(r) for r in rows]

    def reassign_files_to_session(self, file_ids: Sequence[str], session_id: str) -> None:
        if not file_ids:
            return
        with self._lock:
            try:
                (
                    self.db.query(SourceFileRow)
                    .filter(SourceFileRow.id.in_(list(file_ids)))
                    .update({SourceFileRow.session_id: session_id}, synchronize_session=False)
                )
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
            self.db.expire_all()
        logger.info(f"Assigned {len(file_ids)} files to session {session_id}")

    def save_file(self, file: SourceFile) -> None:
        with self._lock:
            try:
                row = self.db.get(SourceFileRow, file.id)
                if row is None:
                    row = SourceFileRow(id=file.id, uploaded_at=file.uploaded_at)
                    self.db.add(row)

                row.name = file.name
                row.language = file.language
                row.content = file.content
                row.size = file.size
                row.user_id = file.user_id
                row.session_id = file.session_id
                row.dependencies = list(file.dependencies)
                row.exports = list(file.exports)
                row.fragments = [
                    FragmentRow(
                        position=i,
                        fragment_id=f.id,
                        text=f.text,
                        start_line=f.start_line,
                        end_line=f.end_line,
                        kind=f.kind.value,
                        embedding=list(f.embedding) if f.embedding else None,
                    )
                    for i, f in enumerate(file.fragments)
                ]
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
        logger.debug(f"Saved file {file.name} with {len(file.fragments)} fragments")

    def get_file(self, file_id: str) -> Optional[SourceFile]:
        with self._lock:
            row = self._query().filter(SourceFileRow.id == file_id).first()
            return _to_domain(row) if row is not None else None
