"""
Base document loader interface
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from pathlib import Path
from dataclasses import dataclass, field


@dataclass
class DocumentMetadata:
    """문서 메타데이터"""
    source: str  # 파일 경로
    filename: str
    total_pages: Optional[int] = None
    document_type: Optional[str] = None  # pdf, docx, txt
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LoadedDocument:
    """로드된 문서 (청킹 이전의 전체 텍스트)"""
    content: str
    metadata: DocumentMetadata

    @property
    def default_title(self) -> str:
        """제목이 없을 때 쓰는 파일 이름 (확장자 제외)"""
        return Path(self.metadata.filename).stem


class BaseDocumentLoader(ABC):
    """문서 로더 추상 인터페이스"""

    suffixes: tuple = ()

    @abstractmethod
    def load(self, source: str) -> LoadedDocument:
        """
        문서에서 전체 텍스트 추출

        Args:
            source: 파일 경로

        Returns:
            LoadedDocument
        """
        pass

    def supports(self, source: str) -> bool:
        """
        이 로더가 해당 소스를 지원하는지 확인

        Args:
            source: 파일 경로

        Returns:
            지원 여부
        """
        return Path(str(source)).suffix.lower() in self.suffixes

    def _metadata(self, path: Path, **kwargs) -> DocumentMetadata:
        return DocumentMetadata(
            source=str(path),
            filename=path.name,
            document_type=path.suffix.lower().lstrip("."),
            **kwargs
        )
