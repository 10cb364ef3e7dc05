"""Embedding Infrastructure"""
from .base import BaseEmbeddingProvider
from .openai import OpenAIEmbeddingProvider

__all__ = ["BaseEmbeddingProvider", "OpenAIEmbeddingProvider"]
