"""
별표(표) 추출 모듈

원문에서 별표 머리표로 시작하는 구간을 떼어 내고 표 구조를 정리합니다.

- 머리표부터 다음 머리표(또는 문서 끝) 직전까지를 하나의 구간으로 봄
- 연속 공백은 열 구분자(" | ")로, 여러 빈 줄은 한 줄로
- "300000원"처럼 숫자와 단위가 붙은 경우 공백 삽입
- 머리표는 【중요표】로 감싸서 다시 출력
- 정리 후 길이가 기준 이하인 구간은 표로 보지 않고 본문에 남김
"""

import re
from typing import List, Optional

from ..core.models import ExtractionResult, ResidualFragment, TableSegment
from ..utils import get_logger
from .heading import TableHeadingMatcher, default_heading_matcher
from .markers import IMPORTANT_TABLE_WRAP

logger = get_logger(__name__)

MIN_TABLE_LENGTH = 50

# 숫자 바로 뒤에 붙는 단위
UNIT_SUFFIXES = ["만원", "천원", "원", "%", "박", "일", "명", "인", "시간", "회", "개월", "km"]

_TRAILING_SPACE = re.compile(r"[ \t\u3000]+(?=\n)")
_BLANK_LINES = re.compile(r"\n[ \t\u3000]*(?:\n[ \t\u3000]*)+")
_COLUMN_GAP = re.compile(r"[ \t\u3000]{2,}")
_NUMERAL_UNIT = re.compile(r"(\d)(" + "|".join(re.escape(unit) for unit in UNIT_SUFFIXES) + r")")


def clean_table_body(text: str) -> str:
    """
    표 본문 구조 정리

    Args:
        text: 머리표를 뺀 표 구간 원문

    Returns:
        정리된 텍스트
    """
    text = _TRAILING_SPACE.sub("", text)
    text = _BLANK_LINES.sub("\n\n", text)
    text = _COLUMN_GAP.sub(" | ", text)
    text = _NUMERAL_UNIT.sub(r"\1 \2", text)
    return text.strip()


def clean_table_segment(span: str, heading: str) -> str:
    """머리표를 강조 표시로 감싸고 본문을 정리한 표 텍스트"""
    body = clean_table_body(span[len(heading):])
    marked_heading = f"{IMPORTANT_TABLE_WRAP} {heading.strip()} {IMPORTANT_TABLE_WRAP}"
    if not body:
        return marked_heading
    return f"{marked_heading}\n{body}"


def extract_tables(
    raw_text: str,
    matcher: Optional[TableHeadingMatcher] = None,
    min_table_length: int = MIN_TABLE_LENGTH,
) -> ExtractionResult:
    """
    원문을 표 구간과 나머지 본문 조각으로 분리

    Args:
        raw_text: 추출된 문서 전체 텍스트
        matcher: 머리표 감지기 (None이면 설정 라벨 사용)
        min_table_length: 이 길이 이하로 정리된 구간은 표로 보지 않음

    Returns:
        ExtractionResult: 표 구간 목록과 원래 순서의 본문 조각
    """
    if not raw_text:
        return ExtractionResult()

    matcher = matcher or default_heading_matcher()
    headings = matcher.find_headings(raw_text)

    if not headings:
        return ExtractionResult(
            residual_fragments=[ResidualFragment(text=raw_text, source_offset=0)]
        )

    tables: List[TableSegment] = []
    fragments: List[ResidualFragment] = []

    first_start = headings[0][0]
    if first_start > 0:
        fragments.append(ResidualFragment(text=raw_text[:first_start], source_offset=0))

    for i, (start, heading_end) in enumerate(headings):
        end = headings[i + 1][0] if i + 1 < len(headings) else len(raw_text)
        span = raw_text[start:end]
        heading = raw_text[start:heading_end]
        cleaned = clean_table_segment(span, heading)

        if len(cleaned) <= min_table_length:
            # 너무 짧은 구간은 본문으로 남김
            logger.debug(f"표 후보 제외 (정리 후 {len(cleaned)}자): {heading}")
            fragments.append(ResidualFragment(text=span, source_offset=start))
            continue

        tables.append(TableSegment(
            content=cleaned,
            source_offset=start,
            raw_text=span,
            heading=heading,
        ))

    logger.debug(
        f"별표 추출: 머리표 {len(headings)}개, 표 {len(tables)}개, 본문 조각 {len(fragments)}개"
    )
    return ExtractionResult(tables=tables, residual_fragments=fragments)
