"""
Trip Desk 백엔드

출장 규정 문서 수집 및 규정 챗봇 검색 우선순위 파이프라인
"""

__version__ = "1.0.0"
