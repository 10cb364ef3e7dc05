"""
DOCX document loader (python-docx)
"""
from pathlib import Path
from typing import List

from docx import Document
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

from .base import BaseDocumentLoader, LoadedDocument
from ...core.exceptions import DocumentProcessingException
from ...utils import get_logger

logger = get_logger(__name__)

# 표 셀 구분 (별표 정리 단계에서 " | "로 바뀜)
CELL_SEPARATOR = "  "


class DocxDocumentLoader(BaseDocumentLoader):
    """
    Word 문서 로더

    본문 순서대로 문단과 표를 읽습니다. 표는 행마다 한 줄이며
    셀 사이는 공백 두 칸으로 이어 붙입니다.
    """

    suffixes = (".docx",)

    def load(self, source: str) -> LoadedDocument:
        docx_path = Path(source)

        if not docx_path.exists():
            raise DocumentProcessingException(
                f"DOCX 파일을 찾을 수 없습니다: {docx_path}",
                details={"source": str(source)}
            )

        try:
            document = Document(str(docx_path))
            lines = self._body_lines(document)
        except Exception as e:
            raise DocumentProcessingException(
                f"DOCX 텍스트 추출 실패: {str(e)}",
                details={"source": str(source)}
            )

        content = "\n".join(lines)
        logger.info(f"DOCX 로드 완료: {docx_path.name} ({len(content)}자)")

        return LoadedDocument(content=content, metadata=self._metadata(docx_path))

    def _body_lines(self, document) -> List[str]:
        lines = []
        for child in document.element.body.iterchildren():
            if child.tag == qn("w:p"):
                lines.append(Paragraph(child, document).text)
            elif child.tag == qn("w:tbl"):
                for row in Table(child, document).rows:
                    cells = [cell.text.strip() for cell in row.cells]
                    lines.append(CELL_SEPARATOR.join(cells))
        return lines
