"""
출장 규정 RAG 테스트 공용 fixture

OpenAI/ChromaDB 없이 돌도록 임베딩 제공자와 벡터 저장소를 메모리 구현으로 대체합니다.
"""

import math
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from tripdesk.domain.regulation.core.models import ChunkingOptions, ChunkRecord, StoredChunk
from tripdesk.domain.regulation.infrastructure.embeddings import BaseEmbeddingProvider
from tripdesk.domain.regulation.infrastructure.vectorstore import BaseVectorStore, row_id, stored_order
from tripdesk.domain.regulation.services import (
    RegulationAdminService,
    RegulationIngestionService,
    RegulationRetriever,
)


class FakeEmbeddingProvider(BaseEmbeddingProvider):
    """문자 빈도 기반 결정적 임베딩"""

    def __init__(self, dimensions: int = 16):
        self.dimensions = dimensions
        self.calls: List[List[str]] = []

    def embed_text(self, text: str) -> List[float]:
        return self.embed_texts([text])[0]

    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def get_model_name(self) -> str:
        return "fake-embedding"

    def _vector(self, text: str) -> List[float]:
        vector = [0.0] * self.dimensions
        for ch in text:
            vector[ord(ch) % self.dimensions] += 1.0
        return vector


class InMemoryVectorStore(BaseVectorStore):
    """dict 기반 벡터 저장소"""

    def __init__(self):
        self.rows: Dict[str, StoredChunk] = {}
        self.embeddings: Dict[str, List[float]] = {}

    def add_records(
        self,
        records: List[ChunkRecord],
        embeddings: List[List[float]],
        doc_title: str = "",
        created_at: Optional[datetime] = None
    ) -> List[str]:
        timestamp = created_at or datetime.now(timezone.utc)
        ids = []
        for record, embedding in zip(records, embeddings):
            key = row_id(record.document_id, record.chunk_index)
            self.rows[key] = StoredChunk(
                document_id=record.document_id,
                chunk_index=record.chunk_index,
                content=record.content,
                doc_title=doc_title,
                priority_class=record.priority_class,
                origin=record.origin,
                created_at=timestamp,
            )
            self.embeddings[key] = embedding
            ids.append(key)
        return ids

    def get_document_chunks(self, document_id: str) -> List[StoredChunk]:
        chunks = [c for c in self.rows.values() if c.document_id == document_id]
        return sorted(chunks, key=lambda c: c.chunk_index)

    def get_all_chunks(self) -> List[StoredChunk]:
        return sorted(self.rows.values(), key=stored_order)

    def delete_document(self, document_id: str) -> int:
        keys = [k for k, c in self.rows.items() if c.document_id == document_id]
        for key in keys:
            del self.rows[key]
            del self.embeddings[key]
        return len(keys)

    def query(self, query_embedding: List[float], top_k: int = 5) -> List[StoredChunk]:
        scored = []
        for key, chunk in self.rows.items():
            result = chunk.model_copy()
            result.score = _cosine(query_embedding, self.embeddings[key])
            scored.append(result)
        scored.sort(key=lambda c: -c.score)
        return scored[:top_k]

    def count(self) -> int:
        return len(self.rows)

    def reset(self) -> bool:
        self.rows.clear()
        self.embeddings.clear()
        return True


def _cosine(a: List[float], b: List[float]) -> float:
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 0.0
    return sum(x * y for x, y in zip(a, b)) / norm


@pytest.fixture
def embedding_provider():
    return FakeEmbeddingProvider()


@pytest.fixture
def vector_store():
    return InMemoryVectorStore()


@pytest.fixture
def chunking_options():
    return ChunkingOptions()


@pytest.fixture
def ingestion_service(embedding_provider, vector_store, chunking_options):
    return RegulationIngestionService(embedding_provider, vector_store, options=chunking_options)


@pytest.fixture
def admin_service(embedding_provider, vector_store):
    return RegulationAdminService(embedding_provider, vector_store)


@pytest.fixture
def retriever(embedding_provider, vector_store):
    return RegulationRetriever(embedding_provider, vector_store)


# 별표 한 개와 본문이 섞인 여비 규정 예시
REGULATION_TEXT = """제1조(목적) 이 규정은 임직원의 국내외 출장에 필요한 여비 지급 기준을 정함을 목적으로 한다.
제2조(적용범위) 출장 여비는 이 규정에서 정하는 바에 따르며, 규정에 없는 사항은 대표이사가 따로 정한다.
제3조(숙박비) 숙박비는 별표 1의 한도 내에서 실비로 정산한다.

[별표 1] 직급별 출장 여비 지급 기준
구분      숙박비      식비      일비
임원      150000원      50000원      40000원
부장      120000원      40000원      30000원
사원      100000원      30000원      25000원
"""


@pytest.fixture
def regulation_text():
    return REGULATION_TEXT
