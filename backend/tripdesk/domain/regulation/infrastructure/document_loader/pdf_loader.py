"""
PDF document loader (pdfplumber)
"""
from pathlib import Path
from typing import List

import pdfplumber

from .base import BaseDocumentLoader, LoadedDocument
from ...core.exceptions import DocumentProcessingException
from ...utils import get_logger

logger = get_logger(__name__)


class PDFDocumentLoader(BaseDocumentLoader):
    """
    PDF 문서 로더

    페이지 텍스트 사이에 "[page N]" 줄을 넣어 하나의 텍스트로 합칩니다.
    """

    suffixes = (".pdf",)

    def load(self, source: str) -> LoadedDocument:
        pdf_path = Path(source)

        if not pdf_path.exists():
            raise DocumentProcessingException(
                f"PDF 파일을 찾을 수 없습니다: {pdf_path}",
                details={"source": str(source)}
            )

        try:
            with pdfplumber.open(pdf_path) as pdf:
                page_texts: List[str] = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:
            raise DocumentProcessingException(
                f"PDF 텍스트 추출 실패: {str(e)}",
                details={"source": str(source)}
            )

        parts = []
        for page_num, text in enumerate(page_texts, start=1):
            if page_num > 1:
                parts.append(f"\n\n[page {page_num}]\n")
            parts.append(text)

        content = "".join(parts)
        logger.info(f"PDF 로드 완료: {pdf_path.name} ({len(page_texts)}페이지, {len(content)}자)")

        return LoadedDocument(
            content=content,
            metadata=self._metadata(pdf_path, total_pages=len(page_texts))
        )
