"""
Custom exceptions for Regulation RAG system
"""


class RegulationRAGException(Exception):
    """Base exception for Regulation RAG system"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationException(RegulationRAGException):
    """Configuration related exceptions"""
    pass


class ChunkingConfigurationException(ConfigurationException):
    """청크 크기/오버랩 설정이 진행을 보장하지 못할 때"""
    pass


class ValidationException(RegulationRAGException):
    """Validation related exceptions"""
    pass


class DocumentProcessingException(RegulationRAGException):
    """Document processing exceptions"""
    pass


class UnsupportedDocumentException(DocumentProcessingException):
    """지원하지 않는 문서 형식"""
    pass


class EmptyDocumentException(DocumentProcessingException):
    """추출된 텍스트에서 청크가 하나도 만들어지지 않음"""
    pass


class DocumentNotFoundException(RegulationRAGException):
    """저장된 청크가 없는 문서"""
    pass


class EmbeddingException(RegulationRAGException):
    """Embedding generation exceptions"""
    pass


class VectorStoreException(RegulationRAGException):
    """Vector store related exceptions"""
    pass


class RetrievalException(RegulationRAGException):
    """Retrieval related exceptions"""
    pass
