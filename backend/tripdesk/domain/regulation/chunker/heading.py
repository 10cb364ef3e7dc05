"""
별표 머리표 감지 전략

규정 문서의 표는 "[별표 1]", "[별표 2의3]", "[Schedule 1]" 같은 괄호 머리표로 시작합니다.
다른 문서 관례에도 같은 파이프라인을 쓸 수 있도록 머리표 감지를 전략 객체로 분리합니다.
"""

import re
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple


class TableHeadingMatcher(ABC):
    """표 머리표 감지 인터페이스"""

    @abstractmethod
    def find_headings(self, text: str) -> List[Tuple[int, int]]:
        """
        텍스트에서 머리표 위치를 찾음

        Args:
            text: 원문

        Returns:
            (start, end) 위치 리스트 (오름차순, 겹치지 않음)
        """
        pass

    def contains_heading(self, text: str) -> bool:
        """머리표가 하나라도 있는지 확인"""
        return bool(self.find_headings(text))


class BracketHeadingMatcher(TableHeadingMatcher):
    """
    괄호 머리표 감지기

    라벨 목록으로 정규식을 만들어 "[라벨 ...]" 형태를 찾습니다.
    괄호 안에는 줄바꿈이나 다른 괄호가 올 수 없습니다.
    """

    def __init__(self, labels: Optional[Iterable[str]] = None):
        if labels is None:
            from ..core.config import config
            labels = config.table_heading_labels
        self.labels = [label for label in labels if label]
        if not self.labels:
            raise ValueError("At least one heading label is required")

        alternatives = "|".join(re.escape(label) for label in self.labels)
        self.pattern = re.compile(rf"\[\s*(?:{alternatives})[^\[\]\n]*\]", re.IGNORECASE)

    def find_headings(self, text: str) -> List[Tuple[int, int]]:
        if not text:
            return []
        return [match.span() for match in self.pattern.finditer(text)]

    def contains_heading(self, text: str) -> bool:
        return bool(text) and self.pattern.search(text) is not None

    def __repr__(self) -> str:
        return f"BracketHeadingMatcher(labels={self.labels!r})"


def default_heading_matcher() -> TableHeadingMatcher:
    """설정된 라벨로 기본 감지기 생성"""
    return BracketHeadingMatcher()
