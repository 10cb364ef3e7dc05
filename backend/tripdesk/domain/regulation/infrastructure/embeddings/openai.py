"""
OpenAI embedding provider implementation
"""
from typing import List, Optional
from openai import OpenAI

from .base import BaseEmbeddingProvider
from ...core.config import config
from ...core.exceptions import EmbeddingException


class OpenAIEmbeddingProvider(BaseEmbeddingProvider):
    """OpenAI 임베딩 구현체"""

    def __init__(
        self,
        model: str = None,
        dimensions: int = None,
        batch_size: int = None,
        client: Optional[OpenAI] = None
    ):
        """
        OpenAI 임베딩 제공자 초기화

        Args:
            model: 임베딩 모델 이름
            dimensions: 임베딩 차원 수
            batch_size: 요청 한 번에 보낼 텍스트 수
            client: 미리 만든 OpenAI 클라이언트 (없으면 설정으로 생성)
        """
        self.model = model or config.embedding_model
        self.dimensions = dimensions or config.embedding_dimensions
        self.batch_size = batch_size or config.embedding_batch_size

        if client is not None:
            self.client = client
            return

        if not config.openai_api_key:
            raise EmbeddingException(
                "OPENAI_API_KEY가 설정되지 않았습니다",
                details={"model": self.model}
            )
        try:
            self.client = OpenAI(timeout=config.request_timeout, **config.get_openai_kwargs())
        except Exception as e:
            raise EmbeddingException(
                f"Failed to initialize OpenAI client: {str(e)}"
            )

    def embed_text(self, text: str) -> List[float]:
        """단일 텍스트 임베딩"""
        return self.embed_texts([text])[0]

    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        """여러 텍스트 배치 임베딩"""
        if not texts:
            return []

        cleaned_texts = [text.replace("\n", " ").strip() for text in texts]
        embeddings = []

        try:
            for i in range(0, len(cleaned_texts), self.batch_size):
                batch = cleaned_texts[i:i + self.batch_size]

                response = self.client.embeddings.create(
                    model=self.model,
                    input=batch,
                    dimensions=self.dimensions
                )

                # 응답 순서 보장
                ordered = sorted(response.data, key=lambda item: item.index)
                embeddings.extend(item.embedding for item in ordered)

        except Exception as e:
            raise EmbeddingException(
                f"Failed to embed texts: {str(e)}",
                details={"num_texts": len(texts), "model": self.model}
            )

        return embeddings

    def get_model_name(self) -> str:
        """모델 이름 반환"""
        return self.model
