"""Embedding and semantic search routes."""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from ...core import ProviderError
from ...indexing import DefaultIndexer
from ...search import search as search_code
from ...storage import FileStore

from ..deps import EmbedderFactory, get_config, get_embedder_factory, get_file_store
from ..schemas import (
    FileEmbeddingsRequest,
    FileEmbeddingsResponse,
    GenerateEmbeddingsRequest,
    GenerateEmbeddingsResponse,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/embeddings")


def _make_embedder(factory: EmbedderFactory, api_key: str):
    try:
        return factory(api_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/generate", response_model=GenerateEmbeddingsResponse)
def generate_embeddings(
    request: GenerateEmbeddingsRequest,
    store: FileStore = Depends(get_file_store),
    factory: EmbedderFactory = Depends(get_embedder_factory),
    cfg: Dict = Depends(get_config),
):
    embedder = _make_embedder(factory, request.api_key)
    report = DefaultIndexer(store, cfg).generate_embeddings_for_session(request.session_id, embedder)
    return GenerateEmbeddingsResponse(
        success=True,
        files_processed=report.files_processed,
        embeddings=report.fragments_embedded,
        failed_files=report.failed_files,
        message=f"Generated {report.fragments_embedded} embeddings for {report.files_processed} files",
    )


@router.post("/files/{file_id}", response_model=FileEmbeddingsResponse)
def generate_file_embeddings(
    file_id: str,
    request: FileEmbeddingsRequest,
    store: FileStore = Depends(get_file_store),
    factory: EmbedderFactory = Depends(get_embedder_factory),
    cfg: Dict = Depends(get_config),
):
    embedder = _make_embedder(factory, request.api_key)
    try:
        count = DefaultIndexer(store, cfg).generate_embeddings_for_file_id(file_id, embedder)
    except LookupError:
        raise HTTPException(status_code=404, detail="File not found")
    return FileEmbeddingsResponse(
        success=True,
        embeddings=count,
        message=f"Generated {count} embeddings for file",
    )


@router.post("/search", response_model=SearchResponse)
def search_similar_code(
    request: SearchRequest,
    store: FileStore = Depends(get_file_store),
    factory: EmbedderFactory = Depends(get_embedder_factory),
):
    embedder = _make_embedder(factory, request.api_key)
    try:
        report = search_code(store, request.session_id, request.query, embedder, limit=request.limit)
    except ProviderError as e:
        logger.error(f"Error searching similar code: {e}")
        raise HTTPException(status_code=502, detail="Failed to search similar code")
    return SearchResponse(**report.to_dict())
