"""
출장 규정 RAG API의 Pydantic 스키마 정의
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from .core.models import (
    ChunkPayload,
    ChunkRecord,
    DocumentSummary,
    CollectionStats,
    IngestionResult,
    ReprocessResult,
    RetrievedChunk,
)


class UploadResponse(BaseModel):
    """파일 업로드 결과"""
    success: bool
    message: str
    filename: str
    result: IngestionResult


class IngestRequest(BaseModel):
    """이미 청킹된 문서 수집 요청"""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    document_id: str = Field(..., alias="documentId")
    chunks: List[ChunkPayload]


class IngestResponse(BaseModel):
    success: bool
    message: str
    result: IngestionResult


class AdminRequest(BaseModel):
    """관리 작업 요청 (reembed | reprocess_all)"""
    model_config = ConfigDict(populate_by_name=True)

    action: str
    document_id: Optional[str] = Field(default=None, alias="documentId")


class AdminResponse(BaseModel):
    success: bool
    action: str
    message: str
    result: ReprocessResult


class DocumentListResponse(BaseModel):
    """저장된 문서 목록"""
    documents: List[DocumentSummary]
    total: int


class DeleteResponse(BaseModel):
    success: bool
    document_id: str
    chunks_deleted: int


class StatsResponse(BaseModel):
    stats: CollectionStats


class SearchRequest(BaseModel):
    """규정 검색 요청"""
    query: str
    top_k: Optional[int] = Field(default=None, ge=1, le=20)


class SearchResponse(BaseModel):
    query: str
    results: List[RetrievedChunk]
    context: str


class ChunkPreviewRequest(BaseModel):
    """청킹 미리보기 요청 (저장하지 않음)"""
    text: str
    document_id: str = "preview"
    chunk_size: Optional[int] = None
    overlap: Optional[int] = None


class ChunkPreviewResponse(BaseModel):
    document_id: str
    total_chunks: int
    table_chunks: int
    chunks: List[ChunkRecord]
