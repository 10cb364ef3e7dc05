"""
규정 청크 관리 서비스

- 재임베딩: 저장된 본문은 그대로 두고 임베딩만 다시 계산
- 전체 재처리: 저장된 본문에 빠진 우선순위 마커를 붙이고 재임베딩 (다시 청킹하지 않음)
- 통계
"""

from typing import List, Optional

from tqdm import tqdm

from ..chunker import classify_content, default_heading_matcher, ensure_priority_marker, is_table_content
from ..chunker.heading import TableHeadingMatcher
from ..core.config import config
from ..core.exceptions import DocumentNotFoundException
from ..core.models import ChunkRecord, CollectionStats, PriorityClass, ReprocessResult, StoredChunk
from ..infrastructure.embeddings import BaseEmbeddingProvider
from ..infrastructure.vectorstore import BaseVectorStore
from ..utils import get_logger
from .ingestion import RegulationIngestionService

logger = get_logger(__name__)


class RegulationAdminService:
    """재임베딩 / 재처리 / 통계"""

    def __init__(
        self,
        embedding_provider: Optional[BaseEmbeddingProvider] = None,
        vector_store: Optional[BaseVectorStore] = None,
        matcher: Optional[TableHeadingMatcher] = None,
        keywords: Optional[List[str]] = None,
    ):
        # 임베딩/저장소 lazy loading은 수집 서비스와 공유
        self._ingestion = RegulationIngestionService(embedding_provider, vector_store)
        self.matcher = matcher or default_heading_matcher()
        self.keywords = list(keywords) if keywords is not None else list(config.regulation_keywords)

    @property
    def embedding_provider(self) -> BaseEmbeddingProvider:
        return self._ingestion.embedding_provider

    @property
    def vector_store(self) -> BaseVectorStore:
        return self._ingestion.vector_store

    def reembed(self, document_id: str) -> ReprocessResult:
        """
        문서 하나의 임베딩을 다시 계산

        Raises:
            DocumentNotFoundException: 저장된 청크가 없을 때
        """
        rows = self.vector_store.get_document_chunks(document_id)
        if not rows:
            raise DocumentNotFoundException(
                "No chunks found for document",
                details={"document_id": document_id}
            )

        self._rewrite(document_id, rows, [row.content for row in rows])
        logger.info(f"재임베딩 완료: {document_id} ({len(rows)}개 청크)")
        return ReprocessResult(documents_processed=1, chunks_processed=len(rows))

    def reprocess_all(self, show_progress: bool = False) -> ReprocessResult:
        """
        모든 문서의 우선순위 마커를 보정하고 재임베딩

        이미 마커가 있는 청크는 바꾸지 않으므로 여러 번 실행해도 마커가 중복되지 않습니다.
        """
        result = ReprocessResult()
        document_ids = self.vector_store.list_document_ids()

        for document_id in tqdm(document_ids, desc="Reprocessing", disable=not show_progress):
            rows = self.vector_store.get_document_chunks(document_id)
            if not rows:
                continue

            contents = [
                ensure_priority_marker(row.content, self.matcher, self.keywords)
                for row in rows
            ]
            updated = sum(1 for row, content in zip(rows, contents) if content != row.content)
            self._rewrite(document_id, rows, contents)

            result.documents_processed += 1
            result.chunks_processed += len(rows)
            result.chunks_updated += updated

        logger.info(
            f"전체 재처리 완료: 문서 {result.documents_processed}개, "
            f"청크 {result.chunks_processed}개, 마커 보정 {result.chunks_updated}개"
        )
        return result

    def stats(self) -> CollectionStats:
        """문서/청크/표 청크 수와 마지막 갱신 시각"""
        chunks = self.vector_store.get_all_chunks()
        timestamps = [c.created_at for c in chunks if c.created_at is not None]

        return CollectionStats(
            total_documents=len({c.document_id for c in chunks}),
            total_chunks=len(chunks),
            table_chunks=sum(1 for c in chunks if is_table_content(c.content)),
            last_updated=max(timestamps) if timestamps else None,
            collection_name=config.collection_name,
            embedding_model=config.embedding_model,
            chunk_size=config.chunk_size,
            chunk_overlap=config.chunk_overlap,
        )

    def _rewrite(self, document_id: str, rows: List[StoredChunk], contents: List[str]) -> None:
        records = []
        for row, content in zip(rows, contents):
            priority = classify_content(content)
            if priority == PriorityClass.NORMAL:
                priority = row.priority_class
            records.append(ChunkRecord(
                document_id=document_id,
                chunk_index=row.chunk_index,
                content=content,
                priority_class=priority,
                origin=row.origin,
            ))

        embeddings = self.embedding_provider.embed_texts(contents)
        self.vector_store.delete_document(document_id)
        self.vector_store.add_records(records, embeddings, doc_title=rows[0].doc_title)
