"""
ChromaDB implementation of vector store
"""
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import chromadb
from chromadb.config import Settings

from .base import BaseVectorStore, row_id, stored_order
from ...core.models import ChunkRecord, StoredChunk
from ...core.exceptions import VectorStoreException, ValidationException
from ...core.config import config


class ChromaVectorStore(BaseVectorStore):
    """ChromaDB 구현체 (cosine 거리)"""

    def __init__(
        self,
        collection_name: Optional[str] = None,
        persist_directory: Optional[str] = None,
        client=None
    ):
        """
        ChromaDB 초기화

        Args:
            collection_name: 컬렉션 이름
            persist_directory: 저장 디렉토리
            client: 미리 만든 ChromaDB 클라이언트 (테스트용 EphemeralClient 등)
        """
        self.collection_name = collection_name or config.collection_name
        self.persist_directory = persist_directory or config.vector_store_path
        abs_path = os.path.abspath(self.persist_directory)

        try:
            self.client = client or chromadb.PersistentClient(
                path=abs_path,
                settings=Settings(anonymized_telemetry=False, allow_reset=True)
            )
            self.collection = self._get_collection()
        except Exception as e:
            raise VectorStoreException(
                f"Failed to initialize ChromaDB: {str(e)}",
                details={"persist_directory": abs_path, "collection": self.collection_name}
            )

    def _get_collection(self):
        return self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"}
        )

    def add_records(
        self,
        records: List[ChunkRecord],
        embeddings: List[List[float]],
        doc_title: str = "",
        created_at: Optional[datetime] = None
    ) -> List[str]:
        """청크 추가"""
        if not records:
            return []
        if len(records) != len(embeddings):
            raise ValidationException(
                "records and embeddings must have the same length",
                details={"records": len(records), "embeddings": len(embeddings)}
            )

        timestamp = (created_at or datetime.now(timezone.utc)).isoformat()
        ids = [row_id(r.document_id, r.chunk_index) for r in records]

        try:
            self.collection.add(
                ids=ids,
                documents=[r.content for r in records],
                metadatas=[
                    {
                        "document_id": r.document_id,
                        "chunk_index": r.chunk_index,
                        "doc_title": doc_title,
                        "priority_class": r.priority_class,
                        "origin": r.origin,
                        "created_at": timestamp,
                    }
                    for r in records
                ],
                embeddings=embeddings
            )
            return ids

        except Exception as e:
            raise VectorStoreException(
                f"Failed to add records: {str(e)}",
                details={"num_records": len(records)}
            )

    def get_document_chunks(self, document_id: str) -> List[StoredChunk]:
        try:
            results = self.collection.get(
                where={"document_id": document_id},
                include=["documents", "metadatas"]
            )
        except Exception as e:
            raise VectorStoreException(
                f"Failed to get document chunks: {str(e)}",
                details={"document_id": document_id}
            )
        chunks = self._to_chunks(results["documents"], results["metadatas"])
        return sorted(chunks, key=lambda c: c.chunk_index)

    def get_all_chunks(self) -> List[StoredChunk]:
        try:
            results = self.collection.get(include=["documents", "metadatas"])
        except Exception as e:
            raise VectorStoreException(f"Failed to get chunks: {str(e)}")
        chunks = self._to_chunks(results["documents"], results["metadatas"])
        return sorted(chunks, key=stored_order)

    def delete_document(self, document_id: str) -> int:
        """문서 삭제"""
        try:
            existing = self.collection.get(where={"document_id": document_id}, include=[])
            ids = existing["ids"]
            if ids:
                self.collection.delete(ids=ids)
            return len(ids)
        except Exception as e:
            raise VectorStoreException(
                f"Failed to delete document: {str(e)}",
                details={"document_id": document_id}
            )

    def query(self, query_embedding: List[float], top_k: int = 5) -> List[StoredChunk]:
        """임베딩으로 검색"""
        total = self.count()
        if total == 0:
            return []

        try:
            results = self.collection.query(
                query_embeddings=[query_embedding],
                n_results=min(top_k, total),
                include=["documents", "metadatas", "distances"]
            )
        except Exception as e:
            raise VectorStoreException(
                f"Failed to search documents: {str(e)}",
                details={"top_k": top_k}
            )

        if not results["documents"]:
            return []

        chunks = self._to_chunks(results["documents"][0], results["metadatas"][0])
        for chunk, distance in zip(chunks, results["distances"][0]):
            # cosine 거리 → 유사도
            chunk.score = 1.0 - distance
        return chunks

    def count(self) -> int:
        """행 개수 반환"""
        try:
            return self.collection.count()
        except Exception as e:
            raise VectorStoreException(f"Failed to get document count: {str(e)}")

    def reset(self) -> bool:
        """컬렉션 초기화"""
        try:
            self.client.delete_collection(name=self.collection_name)
            self.collection = self._get_collection()
            return True
        except Exception as e:
            raise VectorStoreException(f"Failed to clear collection: {str(e)}")

    @staticmethod
    def _to_chunks(documents: List[str], metadatas: List[Dict[str, Any]]) -> List[StoredChunk]:
        chunks = []
        for content, metadata in zip(documents or [], metadatas or []):
            metadata = metadata or {}
            chunks.append(StoredChunk(
                document_id=metadata.get("document_id", ""),
                chunk_index=metadata.get("chunk_index", 0),
                content=content,
                doc_title=metadata.get("doc_title", ""),
                priority_class=metadata.get("priority_class", "normal"),
                origin=metadata.get("origin", "prose"),
                created_at=metadata.get("created_at"),
            ))
        return chunks
