"""
출장 규정 RAG CLI 모듈 진입점

  python -m tripdesk.domain.regulation process internal_docs/uploads
  python -m tripdesk.domain.regulation search "숙박비 한도"
"""
from .cli import main

if __name__ == "__main__":
    main()
