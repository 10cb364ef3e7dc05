"""
규정 문서 수집 서비스

추출 → 청킹 → 임베딩 → 저장 흐름을 묶습니다.
문서 단위로 기존 행을 지우고 다시 넣으므로 같은 문서를 여러 번 올려도 행이 중복되지 않습니다.
"""

import time
import uuid
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from ..chunker import chunk_document, classify_content, is_table_content
from ..chunker.heading import TableHeadingMatcher
from ..core.config import config
from ..core.exceptions import (
    DocumentNotFoundException,
    EmptyDocumentException,
    ValidationException,
)
from ..core.models import (
    ChunkingOptions,
    ChunkOrigin,
    ChunkPayload,
    ChunkRecord,
    DocumentSummary,
    IngestionResult,
    PriorityClass,
    RegulationDocument,
)
from ..infrastructure.document_loader import get_document_loader
from ..infrastructure.embeddings import BaseEmbeddingProvider
from ..infrastructure.vectorstore import BaseVectorStore
from ..utils import get_logger

logger = get_logger(__name__)


class RegulationIngestionService:
    """규정 문서 수집 서비스 (임베딩/저장소는 필요할 때 생성)"""

    def __init__(
        self,
        embedding_provider: Optional[BaseEmbeddingProvider] = None,
        vector_store: Optional[BaseVectorStore] = None,
        options: Optional[ChunkingOptions] = None,
        matcher: Optional[TableHeadingMatcher] = None,
    ):
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self.options = options
        self.matcher = matcher

    @property
    def embedding_provider(self) -> BaseEmbeddingProvider:
        if self._embedding_provider is None:
            from ..infrastructure.embeddings import OpenAIEmbeddingProvider
            self._embedding_provider = OpenAIEmbeddingProvider()
            logger.info(f"임베딩 모델 로드: {self._embedding_provider.get_model_name()}")
        return self._embedding_provider

    @property
    def vector_store(self) -> BaseVectorStore:
        if self._vector_store is None:
            from ..infrastructure.vectorstore import ChromaVectorStore
            self._vector_store = ChromaVectorStore()
            logger.info(f"벡터 스토어 연결: {config.collection_name}")
        return self._vector_store

    def ingest_text(
        self,
        raw_text: str,
        title: str,
        document_id: Optional[str] = None,
        options: Optional[ChunkingOptions] = None,
    ) -> IngestionResult:
        """
        추출된 텍스트 하나를 수집

        Args:
            raw_text: 문서 전체 텍스트
            title: 문서 제목
            document_id: 문서 ID (None이면 UUID 생성)
            options: 이번 호출에만 쓸 청킹 설정

        Returns:
            IngestionResult

        Raises:
            EmptyDocumentException: 청크가 하나도 만들어지지 않을 때
        """
        started = time.time()
        document = RegulationDocument(
            document_id=document_id or str(uuid.uuid4()),
            title=title,
            raw_text=raw_text or "",
        )

        records = chunk_document(
            document.raw_text,
            document.document_id,
            options=options or self.options,
            matcher=self.matcher,
        )
        if not records:
            raise EmptyDocumentException(
                "문서에서 저장할 청크를 만들지 못했습니다",
                details={"document_id": document.document_id, "text_length": len(document.raw_text)}
            )

        return self._replace(records, title, started)

    def ingest_file(
        self,
        path: str,
        title: Optional[str] = None,
        document_id: Optional[str] = None,
        options: Optional[ChunkingOptions] = None,
    ) -> IngestionResult:
        """파일에서 텍스트를 추출해 수집 (PDF/DOCX/TXT)"""
        loader = get_document_loader(path)
        loaded = loader.load(path)
        logger.info(f"문서 로드: {loaded.metadata.filename} ({len(loaded.content)}자)")
        return self.ingest_text(
            loaded.content,
            title or loaded.default_title,
            document_id=document_id,
            options=options,
        )

    def ingest_chunks(
        self,
        title: str,
        document_id: str,
        chunks: Sequence[Union[ChunkPayload, Dict[str, Any]]],
    ) -> IngestionResult:
        """
        이미 청킹된 요청을 수집 ({title, documentId, chunks:[{content, chunk_index}]})

        우선순위 등급은 본문 앞 마커로 판정합니다.

        Raises:
            ValidationException: 제목/문서 ID/청크가 비었거나 chunk_index가 중복될 때
        """
        started = time.time()

        if not title or not str(title).strip():
            raise ValidationException("title is required")
        if not document_id or not str(document_id).strip():
            raise ValidationException("documentId is required")
        if not chunks:
            raise ValidationException("chunks must not be empty", details={"document_id": document_id})

        try:
            payloads = [c if isinstance(c, ChunkPayload) else ChunkPayload(**c) for c in chunks]
        except (PydanticValidationError, TypeError) as e:
            raise ValidationException(
                "each chunk needs content and a non-negative chunk_index",
                details={"document_id": document_id, "error": str(e)}
            )
        indexes = [p.chunk_index for p in payloads]
        if len(set(indexes)) != len(indexes):
            raise ValidationException(
                "chunk_index must be unique within a document",
                details={"document_id": document_id}
            )

        records = []
        for payload in sorted(payloads, key=lambda p: p.chunk_index):
            priority = classify_content(payload.content)
            origin = ChunkOrigin.TABLE if priority == PriorityClass.TABLE_CRITICAL else ChunkOrigin.PROSE
            records.append(ChunkRecord(
                document_id=document_id,
                chunk_index=payload.chunk_index,
                content=payload.content,
                priority_class=priority,
                origin=origin,
            ))

        return self._replace(records, title, started)

    def list_documents(self) -> List[DocumentSummary]:
        """저장된 문서 목록 (처음 저장된 순서)"""
        summaries: Dict[str, DocumentSummary] = {}
        for chunk in self.vector_store.get_all_chunks():
            summary = summaries.get(chunk.document_id)
            if summary is None:
                summary = DocumentSummary(
                    document_id=chunk.document_id,
                    title=chunk.doc_title,
                    created_at=chunk.created_at,
                )
                summaries[chunk.document_id] = summary
            summary.chunk_count += 1
            if is_table_content(chunk.content):
                summary.table_chunks += 1
        return list(summaries.values())

    def delete_document(self, document_id: str) -> int:
        """
        문서의 모든 청크 삭제

        Raises:
            DocumentNotFoundException: 저장된 청크가 없을 때
        """
        deleted = self.vector_store.delete_document(document_id)
        if deleted == 0:
            raise DocumentNotFoundException(
                "No chunks found for document",
                details={"document_id": document_id}
            )
        logger.info(f"문서 삭제: {document_id} ({deleted}개 청크)")
        return deleted

    def _replace(self, records: List[ChunkRecord], title: str, started: float) -> IngestionResult:
        document_id = records[0].document_id

        # 임베딩이 끝난 뒤에 기존 행을 지움
        embeddings = self.embedding_provider.embed_texts([r.content for r in records])
        removed = self.vector_store.delete_document(document_id)
        self.vector_store.add_records(records, embeddings, doc_title=title)

        table_chunks = sum(1 for r in records if r.origin == ChunkOrigin.TABLE)
        elapsed_ms = (time.time() - started) * 1000
        logger.info(
            f"문서 수집 완료: {title} ({document_id}) - 청크 {len(records)}개 "
            f"(표 {table_chunks}개, 교체 {removed}개), {elapsed_ms:.0f}ms"
        )

        return IngestionResult(
            document_id=document_id,
            title=title,
            chunks_created=len(records),
            table_chunks=table_chunks,
            processing_time_ms=elapsed_ms,
        )
