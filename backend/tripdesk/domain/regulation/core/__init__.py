"""Regulation RAG Core Module"""
from .models import (
    RegulationDocument,
    TableSegment,
    ResidualFragment,
    ExtractionResult,
    PriorityClass,
    ChunkOrigin,
    Chunk,
    ChunkRecord,
    StoredChunk,
    ChunkingOptions,
    IngestionResult,
    ReprocessResult,
    RetrievedChunk,
    DocumentSummary,
    CollectionStats,
    ChunkPayload,
)
from .config import config, RegulationRAGConfig
from .exceptions import (
    RegulationRAGException,
    ConfigurationException,
    ChunkingConfigurationException,
    ValidationException,
    DocumentProcessingException,
    UnsupportedDocumentException,
    EmptyDocumentException,
    DocumentNotFoundException,
    EmbeddingException,
    VectorStoreException,
    RetrievalException,
)

__all__ = [
    "RegulationDocument",
    "TableSegment",
    "ResidualFragment",
    "ExtractionResult",
    "PriorityClass",
    "ChunkOrigin",
    "Chunk",
    "ChunkRecord",
    "StoredChunk",
    "ChunkingOptions",
    "IngestionResult",
    "ReprocessResult",
    "RetrievedChunk",
    "DocumentSummary",
    "CollectionStats",
    "ChunkPayload",
    "config",
    "RegulationRAGConfig",
    "RegulationRAGException",
    "ConfigurationException",
    "ChunkingConfigurationException",
    "ValidationException",
    "DocumentProcessingException",
    "UnsupportedDocumentException",
    "EmptyDocumentException",
    "DocumentNotFoundException",
    "EmbeddingException",
    "VectorStoreException",
    "RetrievalException",
]
