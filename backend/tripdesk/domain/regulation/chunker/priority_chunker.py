"""
우선순위 청킹 모듈

표 구간은 작고 겹침이 큰 윈도우로, 본문은 문장 경계를 고려한 큰 윈도우로 나눕니다.
모든 표 청크가 본문 청크보다 먼저 나옵니다.
"""

import re
from typing import List, Optional

from ..core.models import Chunk, ChunkingOptions, ChunkOrigin, ExtractionResult, PriorityClass, TableSegment
from ..utils import get_logger
from .heading import TableHeadingMatcher, default_heading_matcher
from .markers import (
    TABLE_CHUNK_MARKER,
    TABLE_SEGMENT_MARKER,
    marker_priority,
    prose_marker,
    strip_markers,
)

logger = get_logger(__name__)

SENTENCE_TERMINALS = ".!?\n"
MIN_ADVANCE = 10

_WHITESPACE = re.compile(r"\s+")


class PriorityChunker:
    """
    표/본문 우선순위 청커

    설정은 생성 시 검증하며, 잘못된 설정이면 작업 전에 예외를 던집니다.
    """

    def __init__(
        self,
        options: Optional[ChunkingOptions] = None,
        matcher: Optional[TableHeadingMatcher] = None,
    ):
        self.options = (options or ChunkingOptions.from_config()).ensure_valid()
        self.matcher = matcher or default_heading_matcher()

    def chunk(self, extraction: ExtractionResult) -> List[Chunk]:
        """표 청크 뒤에 본문 청크를 이어 붙인 전체 청크 목록"""
        table_chunks: List[Chunk] = []
        for segment in extraction.tables:
            table_chunks.extend(self.chunk_table(segment))

        residual = "".join(fragment.text for fragment in extraction.residual_fragments)
        prose_chunks = self.chunk_prose(residual)

        logger.debug(f"청킹 완료: 표 {len(table_chunks)}개, 본문 {len(prose_chunks)}개")
        return table_chunks + prose_chunks

    def chunk_table(self, segment: TableSegment) -> List[Chunk]:
        """
        표 구간을 슬라이딩 윈도우로 분할

        Args:
            segment: 정리된 표 구간

        Returns:
            TABLE_CRITICAL 청크 리스트
        """
        window = self.options.table_window
        step = self.options.table_step
        min_length = self.options.min_chunk_length

        content = f"{TABLE_SEGMENT_MARKER}\n{segment.content}"
        chunks = []

        for start in range(0, len(content), step):
            piece = content[start:start + window].strip()
            if len(piece) <= min_length or len(strip_markers(piece)) <= min_length:
                continue
            chunks.append(Chunk(
                content=f"{TABLE_CHUNK_MARKER} {piece}",
                priority_class=PriorityClass.TABLE_CRITICAL,
                origin=ChunkOrigin.TABLE,
            ))

        return chunks

    def chunk_prose(self, text: str) -> List[Chunk]:
        """
        본문을 문장 경계를 고려해 분할

        윈도우 끝이 문서 끝이 아니면 마지막 문장 종결 문자(. ! ? 줄바꿈)까지 자르되,
        윈도우 절반보다 앞이면 자르지 않습니다.
        다음 시작 위치는 max(조각 길이 - overlap, 10)만큼 이동합니다.

        Args:
            text: 표를 뺀 나머지 본문

        Returns:
            본문 청크 리스트
        """
        text = _WHITESPACE.sub(" ", text or "").strip()
        if not text:
            return []

        size = self.options.chunk_size
        overlap = self.options.overlap
        min_length = self.options.min_chunk_length

        chunks = []
        start = 0
        while start < len(text):
            end = min(start + size, len(text))
            piece = text[start:end]

            if end < len(text):
                boundary = max(piece.rfind(ch) for ch in SENTENCE_TERMINALS)
                if boundary > size * 0.5:
                    piece = piece[:boundary + 1]

            trimmed = piece.strip()
            if len(strip_markers(trimmed)) > min_length:
                chunks.append(self._prose_chunk(trimmed))

            if end >= len(text):
                break
            start += max(len(piece) - overlap, MIN_ADVANCE)

        return chunks

    def _prose_chunk(self, piece: str) -> Chunk:
        marker = prose_marker(piece, self.matcher, self.options.keywords)
        content = f"{marker} {piece}" if marker else piece
        return Chunk(
            content=content,
            priority_class=marker_priority(marker),
            origin=ChunkOrigin.PROSE,
        )
