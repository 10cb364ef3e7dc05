"""Document loader infrastructure"""
from pathlib import Path
from typing import List

from .base import BaseDocumentLoader, LoadedDocument, DocumentMetadata
from .pdf_loader import PDFDocumentLoader
from .docx_loader import DocxDocumentLoader
from .text_loader import TextDocumentLoader
from ...core.exceptions import UnsupportedDocumentException

_LOADERS: List[BaseDocumentLoader] = [
    PDFDocumentLoader(),
    DocxDocumentLoader(),
    TextDocumentLoader(),
]


def supported_suffixes() -> List[str]:
    return [suffix for loader in _LOADERS for suffix in loader.suffixes]


def get_document_loader(source: str) -> BaseDocumentLoader:
    """
    파일 확장자로 로더 선택

    Raises:
        UnsupportedDocumentException: 지원하지 않는 형식
    """
    for loader in _LOADERS:
        if loader.supports(source):
            return loader
    raise UnsupportedDocumentException(
        f"지원하지 않는 문서 형식입니다: {Path(str(source)).suffix or source}",
        details={"supported": supported_suffixes()}
    )


__all__ = [
    "BaseDocumentLoader",
    "LoadedDocument",
    "DocumentMetadata",
    "PDFDocumentLoader",
    "DocxDocumentLoader",
    "TextDocumentLoader",
    "get_document_loader",
    "supported_suffixes",
]
