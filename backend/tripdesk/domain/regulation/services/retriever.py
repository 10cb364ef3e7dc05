"""
규정 검색 서비스

유사도 후보를 넉넉히 가져온 뒤 priority_class별 가중치를 더해 다시 정렬합니다.
점수가 같으면 chunk_index가 작은(표가 먼저인) 청크가 앞에 옵니다.
"""

from typing import Dict, List, Optional

from ..core.config import config
from ..core.exceptions import ValidationException
from ..core.models import RetrievedChunk
from ..infrastructure.embeddings import BaseEmbeddingProvider
from ..infrastructure.vectorstore import BaseVectorStore
from ..utils import get_logger
from .ingestion import RegulationIngestionService

logger = get_logger(__name__)


class RegulationRetriever:
    """출장 규정 검색기"""

    def __init__(
        self,
        embedding_provider: Optional[BaseEmbeddingProvider] = None,
        vector_store: Optional[BaseVectorStore] = None,
        boosts: Optional[Dict[str, float]] = None,
        candidate_multiplier: Optional[int] = None,
    ):
        self._ingestion = RegulationIngestionService(embedding_provider, vector_store)
        self.boosts = dict(boosts if boosts is not None else config.priority_boosts)
        self.candidate_multiplier = max(1, candidate_multiplier or config.candidate_multiplier)

    def search(self, query: str, top_k: Optional[int] = None) -> List[RetrievedChunk]:
        """
        질문과 가까운 규정 청크 검색

        Args:
            query: 질문
            top_k: 반환할 개수 (None이면 설정값)

        Returns:
            점수 내림차순 RetrievedChunk 리스트
        """
        if not query or not query.strip():
            raise ValidationException("query must not be empty")

        top_k = config.top_k if top_k is None else top_k
        if top_k <= 0:
            raise ValidationException("top_k must be positive", details={"top_k": top_k})

        query_embedding = self._ingestion.embedding_provider.embed_text(query.strip())
        candidates = self._ingestion.vector_store.query(
            query_embedding,
            top_k=top_k * self.candidate_multiplier
        )

        results = []
        for candidate in candidates:
            similarity = candidate.score or 0.0
            boost = self.boosts.get(candidate.priority_class, 0.0)
            results.append(RetrievedChunk(
                **candidate.model_dump(exclude={"score"}),
                score=similarity + boost,
                similarity=similarity,
                boost=boost,
            ))

        results.sort(key=lambda r: (-r.score, r.chunk_index))
        logger.info(f"규정 검색: '{query[:30]}' 후보 {len(candidates)}개 → {min(top_k, len(results))}개")
        return results[:top_k]

    @staticmethod
    def build_context(chunks: List[RetrievedChunk]) -> str:
        """챗봇 프롬프트에 넣을 참고 문서 블록"""
        blocks = []
        for i, chunk in enumerate(chunks, start=1):
            title = chunk.doc_title or chunk.document_id
            blocks.append(f"[{i}] {title} (#{chunk.chunk_index})\n{chunk.content}")
        return "\n\n---\n\n".join(blocks)
