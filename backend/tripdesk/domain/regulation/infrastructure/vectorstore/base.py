"""
Base interface for vector store implementations
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ...core.models import ChunkRecord, StoredChunk


def row_id(document_id: str, chunk_index: int) -> str:
    """저장 행 ID: (document_id, chunk_index) 쌍"""
    return f"{document_id}:{chunk_index}"


class BaseVectorStore(ABC):
    """
    Vector Store 추상 인터페이스

    행은 (document_id, chunk_index)로 식별하며, 문서 단위로 삭제 후 다시 넣는 방식으로 갱신합니다.
    """

    @abstractmethod
    def add_records(
        self,
        records: List[ChunkRecord],
        embeddings: List[List[float]],
        doc_title: str = "",
        created_at: Optional[datetime] = None
    ) -> List[str]:
        """
        청크 레코드와 임베딩 저장

        Args:
            records: 저장할 청크
            embeddings: records와 같은 순서의 임베딩
            doc_title: 문서 제목
            created_at: 생성 시각 (None이면 현재 시각)

        Returns:
            저장된 행 ID 리스트
        """
        pass

    @abstractmethod
    def get_document_chunks(self, document_id: str) -> List[StoredChunk]:
        """
        문서의 모든 청크를 chunk_index 순으로 반환

        Args:
            document_id: 문서 ID

        Returns:
            저장된 청크 리스트 (없으면 빈 리스트)
        """
        pass

    @abstractmethod
    def get_all_chunks(self) -> List[StoredChunk]:
        """저장된 모든 청크"""
        pass

    @abstractmethod
    def delete_document(self, document_id: str) -> int:
        """
        문서의 모든 행 삭제

        Returns:
            삭제된 행 수
        """
        pass

    @abstractmethod
    def query(self, query_embedding: List[float], top_k: int = 5) -> List[StoredChunk]:
        """
        임베딩 유사도 검색

        Args:
            query_embedding: 쿼리 임베딩 벡터
            top_k: 반환할 개수

        Returns:
            score(코사인 유사도)가 채워진 청크 리스트 (유사도 내림차순)
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """저장된 행 수"""
        pass

    @abstractmethod
    def reset(self) -> bool:
        """모든 행 삭제"""
        pass

    def list_document_ids(self) -> List[str]:
        """저장된 문서 ID (처음 저장된 순서)"""
        seen = {}
        for chunk in self.get_all_chunks():
            seen.setdefault(chunk.document_id, None)
        return list(seen)


def stored_order(chunk: StoredChunk):
    """저장 시각, 문서 ID, chunk_index 순 정렬 키"""
    created = chunk.created_at.isoformat() if chunk.created_at else ""
    return created, chunk.document_id, chunk.chunk_index
