"""Regulation RAG Services Layer"""
from .ingestion import RegulationIngestionService
from .admin import RegulationAdminService
from .retriever import RegulationRetriever

__all__ = [
    "RegulationIngestionService",
    "RegulationAdminService",
    "RegulationRetriever",
]
