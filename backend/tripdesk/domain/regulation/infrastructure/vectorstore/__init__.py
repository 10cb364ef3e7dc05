"""Vector Store Infrastructure"""
from .base import BaseVectorStore, row_id, stored_order
from .chroma import ChromaVectorStore

__all__ = ["BaseVectorStore", "ChromaVectorStore", "row_id", "stored_order"]
