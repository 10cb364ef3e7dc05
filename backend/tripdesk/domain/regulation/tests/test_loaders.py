"""
문서 로더 테스트 (DOCX/TXT/PDF)
"""

import pytest
from docx import Document

from tripdesk.domain.regulation.chunker import chunk_document
from tripdesk.domain.regulation.core.exceptions import DocumentProcessingException, UnsupportedDocumentException
from tripdesk.domain.regulation.infrastructure.document_loader import (
    DocxDocumentLoader,
    PDFDocumentLoader,
    TextDocumentLoader,
    get_document_loader,
)


@pytest.fixture
def regulation_docx(tmp_path):
    """문단과 표가 섞인 규정 DOCX"""
    document = Document()
    document.add_paragraph("제3조(숙박비) 숙박비는 별표 1의 한도 내에서 실비로 정산한다.")
    document.add_paragraph("[별표 1] 직급별 숙박비 기준")
    table = document.add_table(rows=3, cols=2)
    for row, (grade, amount) in zip(table.rows, [("구분", "숙박비"), ("임원", "150000원"), ("사원", "100000원")]):
        row.cells[0].text = grade
        row.cells[1].text = amount
    document.add_paragraph("부칙 이 규정은 공포한 날부터 시행한다.")

    path = tmp_path / "여비규정.docx"
    document.save(str(path))
    return path


def test_docx_keeps_body_order(regulation_docx):
    """문단과 표 행이 본문 순서대로, 셀은 공백 두 칸으로 구분"""
    loaded = DocxDocumentLoader().load(str(regulation_docx))
    lines = loaded.content.split("\n")

    assert lines[0].startswith("제3조(숙박비)")
    assert lines[1] == "[별표 1] 직급별 숙박비 기준"
    assert lines[2:5] == ["구분  숙박비", "임원  150000원", "사원  100000원"]
    assert lines[5].startswith("부칙")
    assert loaded.metadata.document_type == "docx"
    assert loaded.default_title == "여비규정"


def test_docx_table_cells_become_columns(regulation_docx):
    """셀 구분이 별표 정리 후 열 구분자가 됨"""
    loaded = DocxDocumentLoader().load(str(regulation_docx))
    records = chunk_document(loaded.content, "docx-doc")

    table_records = [r for r in records if r.origin == "table"]
    assert table_records
    assert "임원 | 150000 원" in table_records[0].content


def test_text_loader(tmp_path):
    """UTF-8 텍스트"""
    path = tmp_path / "notice.txt"
    path.write_text("출장 신청은 3일 전까지 한다.", encoding="utf-8")

    loaded = TextDocumentLoader().load(str(path))

    assert loaded.content == "출장 신청은 3일 전까지 한다."
    assert loaded.metadata.filename == "notice.txt"


def test_get_document_loader():
    """확장자로 로더 선택"""
    assert isinstance(get_document_loader("a.PDF"), PDFDocumentLoader)
    assert isinstance(get_document_loader("a.docx"), DocxDocumentLoader)
    assert isinstance(get_document_loader("a.txt"), TextDocumentLoader)

    with pytest.raises(UnsupportedDocumentException):
        get_document_loader("a.hwp")


def test_missing_files(tmp_path):
    """없는 파일은 처리 오류"""
    with pytest.raises(DocumentProcessingException):
        PDFDocumentLoader().load(str(tmp_path / "missing.pdf"))
    with pytest.raises(DocumentProcessingException):
        DocxDocumentLoader().load(str(tmp_path / "missing.docx"))
    with pytest.raises(DocumentProcessingException):
        TextDocumentLoader().load(str(tmp_path / "missing.txt"))
