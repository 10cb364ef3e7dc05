"""
규정 문서 청킹 파이프라인

원문 → 별표 추출 → 우선순위 청킹 → 순번 부여
"""

from typing import List, Optional

from ..core.models import ChunkingOptions, ChunkRecord
from ..utils import get_logger
from .emitter import emit_chunks
from .heading import TableHeadingMatcher, default_heading_matcher
from .priority_chunker import PriorityChunker
from .table_extractor import extract_tables

logger = get_logger(__name__)


def chunk_document(
    raw_text: str,
    document_id: str,
    options: Optional[ChunkingOptions] = None,
    matcher: Optional[TableHeadingMatcher] = None,
) -> List[ChunkRecord]:
    """
    문서 하나를 청크 레코드로 변환

    설정 검증은 추출 전에 끝나므로 잘못된 설정이면 아무 작업도 하지 않습니다.
    빈 텍스트는 빈 리스트를 반환합니다.

    Args:
        raw_text: 추출된 전체 텍스트
        document_id: 문서 ID
        options: 청킹 설정 (None이면 설정 파일 기본값)
        matcher: 별표 머리표 감지기

    Returns:
        chunk_index가 붙은 ChunkRecord 리스트
    """
    matcher = matcher or default_heading_matcher()
    chunker = PriorityChunker(options, matcher)

    extraction = extract_tables(
        raw_text or "",
        matcher=matcher,
        min_table_length=chunker.options.min_table_length,
    )
    records = emit_chunks(chunker.chunk(extraction), document_id)

    table_count = sum(1 for record in records if record.origin == "table")
    logger.info(
        f"문서 청킹: {document_id} (표 구간 {len(extraction.tables)}개, "
        f"청크 {len(records)}개 중 표 청크 {table_count}개)"
    )
    return records
