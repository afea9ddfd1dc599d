"""File upload routes."""

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from ...core import SourceFile
from ...indexing import DefaultIndexer
from ...storage import FileStore

from ..deps import get_config, get_file_store
from ..schemas import FileCreate, FileSummary

router = APIRouter(prefix="/files")


def _to_response(file: SourceFile) -> FileSummary:
    return FileSummary(
        id=file.id,
        name=file.name,
        language=file.language,
        size=file.size,
        session_id=file.session_id,
        chunks=len(file.fragments),
        dependencies=file.dependencies,
        exports=file.exports,
        uploaded_at=file.uploaded_at,
    )


@router.post("", response_model=FileSummary)
def upload_file(
    request: FileCreate,
    store: FileStore = Depends(get_file_store),
    cfg: Dict = Depends(get_config),
):
    indexer = DefaultIndexer(store, cfg)
    try:
        file = indexer.process_upload(
            request.name,
            request.content,
            session_id=request.session_id,
            user_id=request.user_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(file)


@router.get("/{file_id}", response_model=FileSummary)
def get_file(file_id: str, store: FileStore = Depends(get_file_store)):
    file = store.get_file(file_id)
    if not file:
        raise HTTPException(status_code=404, detail="File not found")
    return _to_response(file)
