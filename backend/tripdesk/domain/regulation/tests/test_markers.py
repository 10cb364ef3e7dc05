"""
우선순위 마커 모듈 단위 테스트
"""

from tripdesk.domain.regulation.chunker import (
    IMPORTANT_TABLE_WRAP,
    REGULATION_KEYWORD_MARKER,
    TABLE_CHUNK_MARKER,
    TABLE_CONTAINED_MARKER,
    TABLE_SEGMENT_MARKER,
    classify_content,
    default_heading_matcher,
    ensure_priority_marker,
    is_table_content,
    leading_markers,
    strip_markers,
)
from tripdesk.domain.regulation.core.config import DEFAULT_REGULATION_KEYWORDS
from tripdesk.domain.regulation.core.models import PriorityClass


def test_strip_markers():
    """앞쪽 마커를 모두 제거"""
    content = f"{TABLE_CHUNK_MARKER} {TABLE_SEGMENT_MARKER}\n{IMPORTANT_TABLE_WRAP} [별표 1] {IMPORTANT_TABLE_WRAP}\n구분 | 금액"

    assert leading_markers(content) == [TABLE_CHUNK_MARKER, TABLE_SEGMENT_MARKER, IMPORTANT_TABLE_WRAP]
    assert strip_markers(content).startswith("[별표 1]")
    assert strip_markers("마커 없는 본문") == "마커 없는 본문"
    assert strip_markers("") == ""


def test_classify_content():
    """앞쪽 마커로 등급 판정"""
    assert classify_content(f"{TABLE_CHUNK_MARKER} 표") == PriorityClass.TABLE_CRITICAL
    assert classify_content(f"{TABLE_CONTAINED_MARKER} 본문") == PriorityClass.TABLE_FLAGGED
    assert classify_content(f"{REGULATION_KEYWORD_MARKER} 본문") == PriorityClass.KEYWORD_FLAGGED
    assert classify_content("그냥 본문") == PriorityClass.NORMAL
    # 본문 중간의 마커 문자열은 판정에 쓰지 않음
    assert classify_content(f"본문 {TABLE_CHUNK_MARKER}") == PriorityClass.NORMAL


def test_ensure_priority_marker_is_idempotent():
    """재처리를 두 번 해도 마커가 중복되지 않음"""
    matcher = default_heading_matcher()
    samples = [
        "숙박비 한도는 직급별로 다르며 별도 기준에 따른다.",
        "출장 시 숙박비는 [별표 1]에 따라 지급한다. 세부는 인사팀 문의.",
        "이 문장에는 특별한 단어가 하나도 들어 있지 않습니다.",
        f"{TABLE_CHUNK_MARKER} {TABLE_SEGMENT_MARKER}\n표 본문이 이어지는 청크입니다",
        f"{REGULATION_KEYWORD_MARKER} 식비는 실비로 정산한다는 규정입니다.",
    ]

    for content in samples:
        once = ensure_priority_marker(content, matcher, DEFAULT_REGULATION_KEYWORDS)
        twice = ensure_priority_marker(once, matcher, DEFAULT_REGULATION_KEYWORDS)
        assert once == twice
        assert len(leading_markers(twice)) <= len(leading_markers(content)) + 1


def test_ensure_priority_marker_adds_missing_marker():
    """마커가 빠진 저장 청크에만 마커 추가"""
    matcher = default_heading_matcher()

    keyword = ensure_priority_marker("숙박비 한도는 직급별로 다르다.", matcher, DEFAULT_REGULATION_KEYWORDS)
    heading = ensure_priority_marker("숙박비는 [별표 1]에 따른다.", matcher, DEFAULT_REGULATION_KEYWORDS)
    plain = ensure_priority_marker("특별한 단어가 없는 문장입니다.", matcher, DEFAULT_REGULATION_KEYWORDS)

    assert keyword.startswith(REGULATION_KEYWORD_MARKER)
    assert heading.startswith(TABLE_CONTAINED_MARKER)
    assert plain == "특별한 단어가 없는 문장입니다."


def test_is_table_content():
    """통계용 표 청크 판정"""
    assert is_table_content("[별표 1] 여비 기준")
    assert is_table_content(f"{TABLE_CHUNK_MARKER} {TABLE_SEGMENT_MARKER} 내용")
    assert is_table_content(f"{IMPORTANT_TABLE_WRAP} 내용")
    assert not is_table_content("일반 본문")
