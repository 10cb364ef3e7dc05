"""
출장 규정 청킹 모듈

- 별표 머리표 감지 (교체 가능한 전략)
- 별표 구간 추출 및 구조 정리
- 표 우선 슬라이딩 윈도우 청킹
- 우선순위 마커 부여 및 순번 출력
"""

from .core import chunk_document
from .emitter import emit_chunks
from .heading import TableHeadingMatcher, BracketHeadingMatcher, default_heading_matcher
from .markers import (
    TABLE_SEGMENT_MARKER,
    TABLE_CHUNK_MARKER,
    TABLE_CONTAINED_MARKER,
    REGULATION_KEYWORD_MARKER,
    IMPORTANT_TABLE_WRAP,
    strip_markers,
    leading_markers,
    classify_content,
    marker_priority,
    ensure_priority_marker,
    is_table_content,
)
from .priority_chunker import PriorityChunker
from .table_extractor import extract_tables, clean_table_body

__all__ = [
    # Public API
    'chunk_document',
    'extract_tables',
    'PriorityChunker',
    'emit_chunks',
    # Heading strategy
    'TableHeadingMatcher',
    'BracketHeadingMatcher',
    'default_heading_matcher',
    # Markers
    'TABLE_SEGMENT_MARKER',
    'TABLE_CHUNK_MARKER',
    'TABLE_CONTAINED_MARKER',
    'REGULATION_KEYWORD_MARKER',
    'IMPORTANT_TABLE_WRAP',
    'strip_markers',
    'leading_markers',
    'classify_content',
    'marker_priority',
    'ensure_priority_marker',
    'is_table_content',
    'clean_table_body',
]
