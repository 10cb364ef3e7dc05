"""
출장 규정 RAG 모듈

규정 문서(PDF/DOCX)에서 별표를 우선 청크로 떼어 내고,
본문은 문장 경계 기준으로 청킹해 벡터 저장소에 넣습니다.
"""

from .chunker import chunk_document, extract_tables, PriorityChunker, emit_chunks
from .core import ChunkingOptions, ChunkRecord, PriorityClass, config
from .services import RegulationIngestionService, RegulationAdminService, RegulationRetriever

__all__ = [
    "chunk_document",
    "extract_tables",
    "PriorityChunker",
    "emit_chunks",
    "ChunkingOptions",
    "ChunkRecord",
    "PriorityClass",
    "config",
    "RegulationIngestionService",
    "RegulationAdminService",
    "RegulationRetriever",
]
