"""
우선순위 마커 모듈

임베딩이 우선순위를 반영하도록 청크 본문 앞에 붙이는 마커 문자열과
마커 제거/판정 유틸리티를 제공합니다.
검색 순위는 구조화된 priority_class로 결정하며, 마커는 임베딩 힌트로만 사용합니다.
"""

from typing import Iterable, List, Optional

from ..core.models import PriorityClass
from .heading import TableHeadingMatcher

# 표 구간 전체 앞에 붙는 최상위 마커
TABLE_SEGMENT_MARKER = "【최우선_별표】"
# 표에서 잘라낸 각 윈도우 앞에 붙는 마커
TABLE_CHUNK_MARKER = "【별표_최우선순위】"
# 본문인데 별표 머리표가 남아 있는 경우
TABLE_CONTAINED_MARKER = "【우선순위: 별표 포함】"
# 규정 키워드를 포함한 본문
REGULATION_KEYWORD_MARKER = "【중요규정】"
# 표 머리표를 감싸는 강조 표시
IMPORTANT_TABLE_WRAP = "【중요표】"

PRIORITY_MARKERS = [
    TABLE_CHUNK_MARKER,
    TABLE_SEGMENT_MARKER,
    TABLE_CONTAINED_MARKER,
    REGULATION_KEYWORD_MARKER,
]
ALL_MARKERS = PRIORITY_MARKERS + [IMPORTANT_TABLE_WRAP]

# 관리 화면 통계에서 표 청크로 집계하는 표지
TABLE_CONTENT_INDICATORS = ["[별표", "최우선_별표", "별표_최우선순위", "중요표"]

_MARKER_CLASS = {
    TABLE_CHUNK_MARKER: PriorityClass.TABLE_CRITICAL,
    TABLE_SEGMENT_MARKER: PriorityClass.TABLE_CRITICAL,
    TABLE_CONTAINED_MARKER: PriorityClass.TABLE_FLAGGED,
    REGULATION_KEYWORD_MARKER: PriorityClass.KEYWORD_FLAGGED,
}


def leading_markers(content: str) -> List[str]:
    """본문 앞에 연속으로 붙어 있는 마커 목록"""
    found = []
    rest = (content or "").lstrip()
    while True:
        for marker in ALL_MARKERS:
            if rest.startswith(marker):
                found.append(marker)
                rest = rest[len(marker):].lstrip()
                break
        else:
            return found


def strip_markers(content: str) -> str:
    """
    앞쪽 마커를 모두 제거한 본문

    Args:
        content: 마커가 붙은 청크 본문

    Returns:
        마커와 앞뒤 공백이 제거된 텍스트
    """
    rest = (content or "").strip()
    for marker in leading_markers(rest):
        rest = rest[len(marker):].lstrip()
    return rest.strip()


def has_priority_marker(content: str) -> bool:
    return any(marker in PRIORITY_MARKERS for marker in leading_markers(content))


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    """대소문자 구분 없이 키워드 포함 여부 확인"""
    lowered = (text or "").lower()
    return any(keyword and keyword.lower() in lowered for keyword in keywords)


def prose_marker(
    text: str,
    matcher: TableHeadingMatcher,
    keywords: Iterable[str],
) -> Optional[str]:
    """
    본문 조각에 붙일 마커 결정

    머리표가 남아 있으면 별표 포함 마커, 아니면 키워드가 있을 때 중요규정 마커.
    둘 다 아니면 None.
    """
    if matcher.contains_heading(text):
        return TABLE_CONTAINED_MARKER
    if contains_keyword(text, keywords):
        return REGULATION_KEYWORD_MARKER
    return None


def marker_priority(marker: Optional[str]) -> PriorityClass:
    """마커 하나에 대응하는 우선순위 등급 (None이면 NORMAL)"""
    return _MARKER_CLASS.get(marker, PriorityClass.NORMAL)


def classify_content(content: str) -> PriorityClass:
    """앞쪽 마커로 우선순위 등급 판정 (마커가 없으면 NORMAL)"""
    for marker in leading_markers(content):
        if marker in _MARKER_CLASS:
            return _MARKER_CLASS[marker]
    return PriorityClass.NORMAL


def ensure_priority_marker(
    content: str,
    matcher: TableHeadingMatcher,
    keywords: Iterable[str],
) -> str:
    """
    저장된 청크에 빠진 우선순위 마커를 붙임

    이미 우선순위 마커가 있으면 그대로 반환하므로 여러 번 적용해도 결과가 같습니다.
    """
    if has_priority_marker(content):
        return content

    marker = prose_marker(strip_markers(content), matcher, keywords)
    if marker is None:
        return content
    return f"{marker} {content}"


def is_table_content(content: str) -> bool:
    """통계용 표 청크 판정"""
    return any(indicator in (content or "") for indicator in TABLE_CONTENT_INDICATORS)
