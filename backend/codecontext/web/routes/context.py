"""Context building routes."""

import dataclasses
import logging
import time
from typing import Dict

from fastapi import APIRouter, Depends

from ...prompt import DefaultContextAssembler, count_tokens
from ...storage import FileStore

from ..deps import EmbedderFactory, get_config, get_embedder_factory, get_file_store
from ..schemas import ContextRequest, ContextResponse, ProjectSummaryResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/context", response_model=ContextResponse)
def generate_context(
    request: ContextRequest,
    store: FileStore = Depends(get_file_store),
    factory: EmbedderFactory = Depends(get_embedder_factory),
    cfg: Dict = Depends(get_config),
):
    """Build the augmented prompt for a chat query."""
    try:
        embedder = factory(request.api_key)
    except ValueError as e:
        logger.warning(f"No embedding provider for context request: {e}")
        embedder = None

    start_time = time.time()
    assembler = DefaultContextAssembler(store, cfg)
    context = assembler.build_context(request.query, request.session_id, embedder)
    prompt = assembler.build_prompt(request.query, context)

    return ContextResponse(
        prompt=prompt,
        summary=ProjectSummaryResponse(**dataclasses.asdict(context.summary)),
        match_count=len(context.matches),
        total_tokens=count_tokens(prompt),
        build_context_time=time.time() - start_time,
    )
