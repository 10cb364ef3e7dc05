"""
Configuration management for Regulation RAG system
"""
import os
from typing import Dict, List, Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# 출장 규정 문서에서 별표(표)를 여는 괄호 머리표 라벨
DEFAULT_TABLE_HEADING_LABELS = ["별표", "Schedule"]

# 규정 본문에서 "중요규정" 표시 대상이 되는 키워드
DEFAULT_REGULATION_KEYWORDS = [
    "한도",
    "수당",
    "교통비",
    "숙박비",
    "식비",
    "일비",
    "여비",
    "출장비",
    "limit",
    "allowance",
    "transportation cost",
    "lodging",
    "meal cost",
    "per diem",
]


class RegulationRAGConfig(BaseSettings):
    """출장 규정 RAG 시스템 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REGULATION_RAG_",
        populate_by_name=True,
        case_sensitive=False,
        extra="ignore"
    )

    # ========================================
    # Vector Store Configuration
    # ========================================
    vector_store_path: str = "./internal_docs/chroma"
    collection_name: str = "regulation_documents"

    # ========================================
    # Embeddings Configuration
    # ========================================
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536
    embedding_batch_size: int = 100

    # ========================================
    # Chunking Configuration
    # ========================================
    chunk_size: int = 400
    chunk_overlap: int = 50
    table_window: int = 300
    table_step: int = 250
    min_chunk_length: int = 20
    min_table_length: int = 50
    table_heading_labels: List[str] = DEFAULT_TABLE_HEADING_LABELS
    regulation_keywords: List[str] = DEFAULT_REGULATION_KEYWORDS

    # ========================================
    # Retrieval Configuration
    # ========================================
    top_k: int = 5
    candidate_multiplier: int = 3
    priority_boosts: Dict[str, float] = {
        "table_critical": 0.15,
        "table_flagged": 0.10,
        "keyword_flagged": 0.05,
        "normal": 0.0,
    }

    # ========================================
    # OpenAI API Configuration
    # ========================================
    # REGULATION_RAG_OPENAI_API_KEY가 없으면 공용 OPENAI_API_KEY 사용
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("REGULATION_RAG_OPENAI_API_KEY", "OPENAI_API_KEY")
    )
    openai_organization: Optional[str] = None
    openai_api_base: Optional[str] = None

    # ========================================
    # Logging / Performance Configuration
    # ========================================
    log_level: str = "INFO"
    request_timeout: int = 60  # seconds

    @property
    def vector_store_full_path(self) -> str:
        """벡터 스토어 전체 경로 반환"""
        return os.path.abspath(self.vector_store_path)

    def get_openai_kwargs(self) -> dict:
        """OpenAI 초기화에 필요한 kwargs 반환"""
        kwargs = {"api_key": self.openai_api_key}
        if self.openai_organization:
            kwargs["organization"] = self.openai_organization
        if self.openai_api_base:
            kwargs["base_url"] = self.openai_api_base
        return kwargs


# 전역 설정 인스턴스
config = RegulationRAGConfig()
