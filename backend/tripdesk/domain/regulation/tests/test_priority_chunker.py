"""
우선순위 청킹 모듈 단위 테스트

표 우선 순서, 윈도우 보폭, 문장 경계, 최소 길이, 설정 검증
"""

import math

import pytest

from tripdesk.domain.regulation.chunker import (
    REGULATION_KEYWORD_MARKER,
    TABLE_CHUNK_MARKER,
    TABLE_CONTAINED_MARKER,
    TABLE_SEGMENT_MARKER,
    PriorityChunker,
    chunk_document,
    extract_tables,
    strip_markers,
)
from tripdesk.domain.regulation.core.exceptions import ChunkingConfigurationException
from tripdesk.domain.regulation.core.models import ChunkingOptions, PriorityClass, TableSegment

# 문장부호, 공백, 규정 키워드가 없는 본문
UNPUNCTUATED = "abcdefghij"


def expected_window_count(length: int, size: int, overlap: int) -> int:
    if length <= size:
        return 1
    return math.ceil((length - size) / (size - overlap)) + 1


def test_table_chunks_precede_prose(regulation_text):
    """표 청크의 chunk_index가 모든 본문 청크보다 작아야 함"""
    records = chunk_document(regulation_text, "doc-1")

    table_indexes = [r.chunk_index for r in records if r.origin == "table"]
    prose_indexes = [r.chunk_index for r in records if r.origin == "prose"]

    assert table_indexes and prose_indexes
    assert max(table_indexes) < min(prose_indexes)
    assert [r.chunk_index for r in records] == list(range(len(records)))


def test_schedule_example_yields_table_chunk_first():
    """Schedule 예시는 인덱스 0의 표 우선 청크를 만듦"""
    records = chunk_document("[Schedule 1] Lodging limit 100000원 Meal limit 30000원", "doc-s")

    assert len(records) >= 1
    assert records[0].chunk_index == 0
    assert records[0].priority_class == PriorityClass.TABLE_CRITICAL
    assert records[0].content.startswith(TABLE_CHUNK_MARKER)
    assert all(r.origin == "table" for r in records)


def test_plain_notice_has_no_table_marker():
    """표가 없는 공지는 표 마커 없는 본문 청크만"""
    text = "Plain notice with no tables, 45 characters long."
    records = chunk_document(text, "doc-p")

    assert len(records) == 1
    assert records[0].content == text
    assert records[0].priority_class == PriorityClass.NORMAL
    for record in records:
        assert TABLE_CHUNK_MARKER not in record.content
        assert TABLE_CONTAINED_MARKER not in record.content


def test_keyword_prose_gets_regulation_marker():
    """규정 키워드가 있으면 중요규정 마커 (표 마커 아님)"""
    text = "The lodging limit for managers is 100000 won per night."
    records = chunk_document(text, "doc-k")

    assert len(records) == 1
    assert records[0].content == f"{REGULATION_KEYWORD_MARKER} {text}"
    assert records[0].priority_class == PriorityClass.KEYWORD_FLAGGED
    assert TABLE_CHUNK_MARKER not in records[0].content


def test_prose_with_leftover_heading_is_flagged():
    """본문에 머리표가 남아 있으면 별표 포함 마커가 키워드보다 우선"""
    chunker = PriorityChunker(ChunkingOptions())
    chunks = chunker.chunk_prose("숙박비 한도는 [별표 1]을 따른다. 세부 사항은 인사팀에 문의한다.")

    assert len(chunks) == 1
    assert chunks[0].content.startswith(TABLE_CONTAINED_MARKER)
    assert chunks[0].priority_class == PriorityClass.TABLE_FLAGGED


@pytest.mark.parametrize("text", ["", "   \n\t ", "Hi", "짧은 문장입니다."])
def test_short_or_empty_input_yields_nothing(text):
    """빈 입력과 20자 이하 입력은 청크 없음"""
    assert chunk_document(text, "doc-e") == []


@pytest.mark.parametrize("length,size,overlap", [
    (1000, 400, 50),
    (2000, 300, 60),
    (850, 200, 20),
    (300, 400, 50),
])
def test_prose_window_count_follows_stride(length, size, overlap):
    """문장부호가 없으면 청크 수 = ceil((L - size) / (size - overlap)) + 1"""
    text = (UNPUNCTUATED * (length // len(UNPUNCTUATED) + 1))[:length]
    chunker = PriorityChunker(ChunkingOptions(chunk_size=size, overlap=overlap))

    chunks = chunker.chunk_prose(text)

    assert len(chunks) == expected_window_count(length, size, overlap)


def test_default_settings_on_1000_chars():
    """기본 400/50 설정, 1000자 본문은 3개"""
    text = UNPUNCTUATED * 100
    records = chunk_document(text, "doc-1000", options=ChunkingOptions(chunk_size=400, overlap=50))

    assert len(records) == expected_window_count(1000, 400, 50)


def test_consecutive_prose_chunks_share_overlap():
    """문장 경계로 잘리지 않은 연속 청크는 overlap만큼 겹침"""
    overlap = 50
    chunker = PriorityChunker(ChunkingOptions(chunk_size=400, overlap=overlap))
    chunks = chunker.chunk_prose(UNPUNCTUATED * 150)

    assert len(chunks) > 2
    for current, following in zip(chunks, chunks[1:]):
        assert current.content[-overlap:] == following.content[:overlap]


def test_sentence_boundary_truncation():
    """윈도우 끝이 문서 끝이 아니면 마지막 문장 종결 문자에서 자름"""
    sentence = "Employees must submit receipts within seven days. "
    text = sentence * 30
    chunker = PriorityChunker(ChunkingOptions(chunk_size=400, overlap=50))

    chunks = chunker.chunk_prose(text)

    assert len(chunks) > 1
    for chunk in chunks[:-1]:
        assert chunk.content.endswith(".")
        assert len(chunk.content) > 400 * 0.5
    assert chunks[-1].content.endswith("seven days.")


def test_large_overlap_terminates():
    """overlap이 chunk_size 직전이어도 최소 10자씩 전진해 끝남"""
    text = UNPUNCTUATED * 50
    chunker = PriorityChunker(ChunkingOptions(chunk_size=50, overlap=49))

    chunks = chunker.chunk_prose(text)

    assert 0 < len(chunks) <= len(text) // 10 + 1
    assert chunks[-1].content.endswith(text[-10:])


def test_minimum_length_after_marker_strip(regulation_text):
    """마커를 떼어 낸 청크 본문은 모두 20자 초과"""
    text = regulation_text + "\n짧다. 아주 짧다. 끝."
    for options in [ChunkingOptions(), ChunkingOptions(chunk_size=60, overlap=10)]:
        for record in chunk_document(text, "doc-m", options=options):
            assert len(strip_markers(record.content)) > 20


def test_marker_text_in_source_does_not_count_toward_length():
    """원문에 이미 마커 문자열이 있으면 떼어 낸 길이로 최소 길이를 판정"""
    text = f"{TABLE_SEGMENT_MARKER}{TABLE_CHUNK_MARKER}{REGULATION_KEYWORD_MARKER} abcdefghijkl"
    assert chunk_document(text, "doc-marker") == []


def test_marker_text_in_source_does_not_raise_priority():
    """원문에 있던 마커 문자열로 본문 청크가 표 등급이 되지 않음"""
    body = "abcdefghij klmnopqrst uvwxyz"
    records = chunk_document(f"{TABLE_SEGMENT_MARKER} {body}", "doc-marker")

    assert len(records) == 1
    assert records[0].origin == "prose"
    assert records[0].priority_class == PriorityClass.NORMAL

    flagged = chunk_document(f"{TABLE_CHUNK_MARKER} 숙박비는 실비로 정산한다 {body}", "doc-marker")
    assert flagged[0].priority_class == PriorityClass.KEYWORD_FLAGGED


def test_residual_fragments_joined_without_separator():
    """표가 빠진 자리에 원문에 없던 공백을 넣지 않음"""
    chunker = PriorityChunker(ChunkingOptions(chunk_size=400, overlap=50))
    text = "여비는 실제 경로에 따라 계산abcdefghij" + "[별표 9] 이하 생략"
    extraction = extract_tables(text)

    assert extraction.tables == []
    prose = chunker.chunk(extraction)
    assert "계산abcdefghij[별표 9]" in strip_markers(prose[0].content)


def test_table_windows():
    """표는 300자 윈도우, 250자 보폭으로 나뉘고 모두 표 우선 등급"""
    rows = "\n".join(f"직급{i:02d}      숙박비 {100000 + i}원      식비 30000원" for i in range(30))
    extraction = extract_tables(f"[별표 1] 직급별 여비\n{rows}")
    segment = extraction.tables[0]
    chunker = PriorityChunker(ChunkingOptions())

    chunks = chunker.chunk_table(segment)

    content_length = len(TABLE_SEGMENT_MARKER) + 1 + len(segment.content)
    assert len(chunks) <= len(range(0, content_length, 250))
    assert len(chunks) >= 3
    assert TABLE_SEGMENT_MARKER in chunks[0].content
    for chunk in chunks:
        assert chunk.content.startswith(TABLE_CHUNK_MARKER)
        assert chunk.priority_class == PriorityClass.TABLE_CRITICAL
        assert chunk.is_table
        assert len(chunk.content) <= len(TABLE_CHUNK_MARKER) + 1 + 300


def test_tiny_table_tail_is_discarded():
    """표 끝에 남은 20자 이하 조각은 버림"""
    segment = TableSegment(content="x" * 261, source_offset=0, raw_text="x" * 261, heading="[별표 9]")
    chunker = PriorityChunker(ChunkingOptions())

    # 마커 포함 270자 → 0~300 윈도우 하나, 250~ 윈도우는 20자
    chunks = chunker.chunk_table(segment)

    assert len(chunks) == 1


@pytest.mark.parametrize("options", [
    ChunkingOptions(chunk_size=0),
    ChunkingOptions(chunk_size=-10),
    ChunkingOptions(chunk_size=400, overlap=400),
    ChunkingOptions(chunk_size=400, overlap=500),
    ChunkingOptions(overlap=-1),
    ChunkingOptions(table_window=0),
    ChunkingOptions(table_step=0),
])
def test_invalid_configuration_rejected(options):
    """진행이 보장되지 않는 설정은 작업 전에 거부"""
    with pytest.raises(ChunkingConfigurationException):
        PriorityChunker(options)

    with pytest.raises(ChunkingConfigurationException):
        chunk_document("[별표 1] 숙박비 100000원 " * 10, "doc-x", options=options)


def test_from_config_overrides():
    """None이 아닌 값만 덮어씀"""
    options = ChunkingOptions.from_config(chunk_size=200, overlap=None)

    assert options.chunk_size == 200
    assert options.overlap == 50
    assert "숙박비" in options.keywords
