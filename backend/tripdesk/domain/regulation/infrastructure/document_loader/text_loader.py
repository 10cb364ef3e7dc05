"""
Plain text document loader
"""
from pathlib import Path

from .base import BaseDocumentLoader, LoadedDocument
from ...core.exceptions import DocumentProcessingException


class TextDocumentLoader(BaseDocumentLoader):
    """UTF-8 텍스트 파일 로더"""

    suffixes = (".txt", ".md")

    def load(self, source: str) -> LoadedDocument:
        path = Path(source)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentProcessingException(
                f"텍스트 파일 읽기 실패: {str(e)}",
                details={"source": str(source)}
            )
        return LoadedDocument(content=content, metadata=self._metadata(path))
