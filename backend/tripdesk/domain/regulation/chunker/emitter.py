"""
청크 출력 모듈

청크 순서대로 chunk_index를 0부터 붙여 수집 경계로 넘길 레코드를 만듭니다.
"""

from typing import List, Sequence

from ..core.exceptions import ValidationException
from ..core.models import Chunk, ChunkRecord


def emit_chunks(chunks: Sequence[Chunk], document_id: str) -> List[ChunkRecord]:
    """
    청크에 문서 ID와 순번 부여

    Args:
        chunks: PriorityChunker 출력 (표 청크가 앞)
        document_id: 문서 ID

    Returns:
        ChunkRecord 리스트

    Raises:
        ValidationException: document_id가 비어 있거나 문자열이 아닐 때
    """
    if not isinstance(document_id, str) or not document_id.strip():
        raise ValidationException(
            "document_id must be a non-empty string",
            details={"document_id": repr(document_id)},
        )

    return [
        ChunkRecord(
            document_id=document_id,
            chunk_index=index,
            content=chunk.content,
            priority_class=chunk.priority_class,
            origin=chunk.origin,
        )
        for index, chunk in enumerate(chunks)
    ]
