"""Infrastructure layer"""
from .vectorstore import BaseVectorStore, ChromaVectorStore
from .embeddings import BaseEmbeddingProvider, OpenAIEmbeddingProvider
from .document_loader import (
    BaseDocumentLoader,
    LoadedDocument,
    DocumentMetadata,
    PDFDocumentLoader,
    DocxDocumentLoader,
    TextDocumentLoader,
    get_document_loader,
)

__all__ = [
    # Vector Store
    "BaseVectorStore",
    "ChromaVectorStore",
    # Embeddings
    "BaseEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    # Document Loader
    "BaseDocumentLoader",
    "LoadedDocument",
    "DocumentMetadata",
    "PDFDocumentLoader",
    "DocxDocumentLoader",
    "TextDocumentLoader",
    "get_document_loader",
]
