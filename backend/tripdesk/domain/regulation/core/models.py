"""
Core data models for Regulation RAG system
"""
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum

from .config import DEFAULT_REGULATION_KEYWORDS, RegulationRAGConfig, config as default_config
from .exceptions import ChunkingConfigurationException


class PriorityClass(str, Enum):
    """검색 우선순위 등급 (높은 순)"""
    TABLE_CRITICAL = "table_critical"  # 별표 본문에서 나온 청크
    TABLE_FLAGGED = "table_flagged"  # 본문인데 별표 머리표가 남아 있는 청크
    KEYWORD_FLAGGED = "keyword_flagged"  # 한도/교통비 등 규정 키워드 포함
    NORMAL = "normal"


class ChunkOrigin(str, Enum):
    """청크가 만들어진 구간"""
    TABLE = "table"
    PROSE = "prose"


class RegulationDocument(BaseModel):
    """업로드된 규정 문서"""
    document_id: str = Field(..., description="문서 고유 ID")
    title: str = Field(..., description="문서 제목")
    raw_text: str = Field(default="", description="추출된 전체 텍스트 (저장하지 않음)")


class TableSegment(BaseModel):
    """원문에서 별표로 인식된 연속 구간"""
    content: str = Field(..., description="정리된 표 텍스트 (머리표 강조 포함)")
    source_offset: int = Field(..., description="원문에서의 시작 위치")
    raw_text: str = Field(..., description="정리 전 원문 구간")
    heading: str = Field(..., description="구간을 연 머리표 (예: [별표 1])")

    @property
    def end_offset(self) -> int:
        return self.source_offset + len(self.raw_text)


class ResidualFragment(BaseModel):
    """표가 아닌 원문 조각"""
    text: str
    source_offset: int


class ExtractionResult(BaseModel):
    """Table Extractor 결과"""
    tables: List[TableSegment] = Field(default_factory=list)
    residual_fragments: List[ResidualFragment] = Field(default_factory=list)

    @property
    def residual_text(self) -> str:
        return "".join(fragment.text for fragment in self.residual_fragments)

    def reconstruct(self) -> str:
        """잔여 조각과 표 원문을 원래 위치 순서로 다시 이어 붙임"""
        spans = [(t.source_offset, t.raw_text) for t in self.tables]
        spans += [(f.source_offset, f.text) for f in self.residual_fragments]
        return "".join(text for _, text in sorted(spans, key=lambda span: span[0]))


class Chunk(BaseModel):
    """인덱스가 붙기 전의 청크"""
    model_config = ConfigDict(use_enum_values=True)

    content: str = Field(..., description="우선순위 마커가 앞에 붙은 청크 내용")
    priority_class: PriorityClass = Field(default=PriorityClass.NORMAL)
    origin: ChunkOrigin = Field(..., description="표/본문 구분")

    @property
    def is_table(self) -> bool:
        return self.origin == ChunkOrigin.TABLE


class ChunkRecord(BaseModel):
    """수집 경계로 넘기는 최종 청크"""
    model_config = ConfigDict(use_enum_values=True)

    document_id: str
    chunk_index: int = Field(..., ge=0)
    content: str
    priority_class: PriorityClass = Field(default=PriorityClass.NORMAL)
    origin: ChunkOrigin = Field(default=ChunkOrigin.PROSE)

    def to_payload(self) -> Dict[str, Any]:
        """rag-ingest 요청 형식 ({content, chunk_index})"""
        return {"content": self.content, "chunk_index": self.chunk_index}


class StoredChunk(BaseModel):
    """벡터 저장소에서 읽어 온 청크 행"""
    model_config = ConfigDict(use_enum_values=True)

    document_id: str
    chunk_index: int
    content: str
    doc_title: str = ""
    priority_class: PriorityClass = Field(default=PriorityClass.NORMAL)
    origin: ChunkOrigin = Field(default=ChunkOrigin.PROSE)
    created_at: Optional[datetime] = None
    score: Optional[float] = None


class ChunkingOptions(BaseModel):
    """청킹 설정 (호출마다 명시적으로 전달)"""
    chunk_size: int = 400
    overlap: int = 50
    table_window: int = 300
    table_step: int = 250
    min_chunk_length: int = 20
    min_table_length: int = 50
    keywords: List[str] = Field(default_factory=lambda: list(DEFAULT_REGULATION_KEYWORDS))

    @classmethod
    def from_config(cls, cfg: Optional[RegulationRAGConfig] = None, **overrides) -> "ChunkingOptions":
        cfg = cfg or default_config
        values = {
            "chunk_size": cfg.chunk_size,
            "overlap": cfg.chunk_overlap,
            "table_window": cfg.table_window,
            "table_step": cfg.table_step,
            "min_chunk_length": cfg.min_chunk_length,
            "min_table_length": cfg.min_table_length,
            "keywords": list(cfg.regulation_keywords),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def ensure_valid(self) -> "ChunkingOptions":
        """
        진행이 보장되지 않는 설정을 작업 전에 거부

        Raises:
            ChunkingConfigurationException: chunk_size <= 0, overlap < 0,
                overlap >= chunk_size, table_window/table_step <= 0
        """
        details = self.model_dump(exclude={"keywords"})
        if self.chunk_size <= 0:
            raise ChunkingConfigurationException("chunk_size must be positive", details=details)
        if self.overlap < 0:
            raise ChunkingConfigurationException("overlap must not be negative", details=details)
        if self.overlap >= self.chunk_size:
            raise ChunkingConfigurationException("overlap must be smaller than chunk_size", details=details)
        if self.table_window <= 0 or self.table_step <= 0:
            raise ChunkingConfigurationException("table_window and table_step must be positive", details=details)
        return self


class IngestionResult(BaseModel):
    """문서 수집 결과"""
    document_id: str
    title: str
    chunks_created: int
    table_chunks: int = 0
    processing_time_ms: float = 0.0


class ReprocessResult(BaseModel):
    """재임베딩/재처리 결과"""
    documents_processed: int = 0
    chunks_processed: int = 0
    chunks_updated: int = 0


class RetrievedChunk(StoredChunk):
    """검색 결과 청크 (유사도 + 우선순위 가중치)"""
    similarity: float = 0.0
    boost: float = 0.0


class DocumentSummary(BaseModel):
    """저장된 문서 요약"""
    document_id: str
    title: str = ""
    chunk_count: int = 0
    table_chunks: int = 0
    created_at: Optional[datetime] = None


class CollectionStats(BaseModel):
    """관리 화면 통계"""
    total_documents: int = 0
    total_chunks: int = 0
    table_chunks: int = 0
    last_updated: Optional[datetime] = None
    collection_name: str = ""
    embedding_model: str = ""
    chunk_size: int = 0
    chunk_overlap: int = 0


class ChunkPayload(BaseModel):
    """이미 청킹된 요청 형식의 청크 ({content, chunk_index})"""
    content: str
    chunk_index: int = Field(..., ge=0)
