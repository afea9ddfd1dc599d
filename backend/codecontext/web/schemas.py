from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class FileCreate(BaseModel):
    name: str
    content: str
    session_id: Optional[str] = None
    user_id: Optional[str] = None


class FileSummary(BaseModel):
    id: str
    name: str
    language: str
    size: int
    session_id: Optional[str]
    chunks: int
    dependencies: List[str]
    exports: List[str]
    uploaded_at: datetime


class GenerateEmbeddingsRequest(BaseModel):
    session_id: str
    api_key: str


class GenerateEmbeddingsResponse(BaseModel):
    success: bool
    files_processed: int
    embeddings: int
    failed_files: List[str]
    message: str


class FileEmbeddingsRequest(BaseModel):
    api_key: str


class FileEmbeddingsResponse(BaseModel):
    success: bool
    embeddings: int
    message: str


class SearchRequest(BaseModel):
    query: str
    session_id: str
    api_key: str
    limit: int = Field(default=5, ge=1, le=50)


class SearchFile(BaseModel):
    id: str
    name: str
    language: str


class SearchChunk(BaseModel):
    id: str
    content: str
    start_line: int
    end_line: int
    type: str


class SearchResult(BaseModel):
    file: SearchFile
    chunk: SearchChunk
    similarity: float


class SearchResponse(BaseModel):
    success: bool = True
    query: str
    results: List[SearchResult]


class ContextRequest(BaseModel):
    query: str
    session_id: str
    api_key: Optional[str] = None


class ProjectSummaryResponse(BaseModel):
    total_files: int
    languages: List[str]
    total_lines: int
    main_files: List[str]


class ContextResponse(BaseModel):
    prompt: str
    summary: ProjectSummaryResponse
    match_count: int
    total_tokens: Optional[int] = None
    build_context_time: Optional[float] = None
