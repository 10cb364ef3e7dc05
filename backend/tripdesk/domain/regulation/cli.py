"""
출장 규정 RAG CLI 인터페이스

  python -m tripdesk.domain.regulation process internal_docs/uploads
  python -m tripdesk.domain.regulation chunk 여비규정.pdf
  python -m tripdesk.domain.regulation search "숙박비 한도"
"""

import sys
import json
import argparse
from pathlib import Path

from .chunker import chunk_document
from .core.config import config
from .core.exceptions import RegulationRAGException
from .core.models import ChunkingOptions
from .infrastructure.document_loader import get_document_loader, supported_suffixes
from .services import RegulationAdminService, RegulationIngestionService, RegulationRetriever
from .utils import get_logger

logger = get_logger(__name__)


def main(argv=None):
    """출장 규정 RAG CLI 메인 함수"""
    parser = argparse.ArgumentParser(
        description="출장 규정 RAG 파이프라인 CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
사용 예시:
  # 문서 처리 (Extract → Chunk → Embed)
  python -m tripdesk.domain.regulation process internal_docs/uploads
  python -m tripdesk.domain.regulation process 여비규정.docx --title "여비 규정"

  # 청킹 결과만 확인 (저장 안 함)
  python -m tripdesk.domain.regulation chunk 여비규정.pdf --chunk-size 300 --overlap 30

  # 관리
  python -m tripdesk.domain.regulation reembed <document_id>
  python -m tripdesk.domain.regulation reprocess
  python -m tripdesk.domain.regulation stats
  python -m tripdesk.domain.regulation reset

  # 검색
  python -m tripdesk.domain.regulation search "숙박비 한도" --top-k 3
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="사용 가능한 명령어")

    process_parser = subparsers.add_parser("process", help="문서 처리 (Extract → Chunk → Embed)")
    process_parser.add_argument("input_path", help="문서 파일 또는 디렉토리 경로")
    process_parser.add_argument("--title", help="문서 제목 (파일 하나일 때만)")
    process_parser.add_argument("--document-id", help="문서 ID (파일 하나일 때만)")
    _add_chunking_arguments(process_parser)

    chunk_parser = subparsers.add_parser("chunk", help="청킹 결과 미리보기")
    chunk_parser.add_argument("input_path", help="문서 파일 경로")
    chunk_parser.add_argument("--json", action="store_true", help="JSON으로 출력")
    _add_chunking_arguments(chunk_parser)

    reembed_parser = subparsers.add_parser("reembed", help="문서 재임베딩")
    reembed_parser.add_argument("document_id", help="문서 ID")

    subparsers.add_parser("reprocess", help="전체 문서 우선순위 마커 보정 및 재임베딩")
    subparsers.add_parser("stats", help="규정 벡터 저장소 통계")

    search_parser = subparsers.add_parser("search", help="규정 검색")
    search_parser.add_argument("query", help="질문")
    search_parser.add_argument("--top-k", type=int, help="반환할 최대 결과 수")

    reset_parser = subparsers.add_parser("reset", help="규정 벡터 저장소 초기화")
    reset_parser.add_argument("--yes", action="store_true", help="확인 없이 초기화")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "process":
            process_command(args.input_path, args.title, args.document_id, _chunking_options(args))
        elif args.command == "chunk":
            chunk_command(args.input_path, _chunking_options(args), args.json)
        elif args.command == "reembed":
            reembed_command(args.document_id)
        elif args.command == "reprocess":
            reprocess_command()
        elif args.command == "stats":
            stats_command()
        elif args.command == "search":
            search_command(args.query, args.top_k)
        elif args.command == "reset":
            reset_command(args.yes)
    except RegulationRAGException as e:
        print(f"❌ 오류: {e}")
        logger.error(f"{args.command} 실패: {e}")
        sys.exit(1)


def _add_chunking_arguments(subparser: argparse.ArgumentParser):
    subparser.add_argument("--chunk-size", type=int, help=f"본문 청크 크기 (기본값: {config.chunk_size})")
    subparser.add_argument("--overlap", type=int, help=f"본문 청크 오버랩 (기본값: {config.chunk_overlap})")


def _chunking_options(args) -> ChunkingOptions:
    return ChunkingOptions.from_config(chunk_size=args.chunk_size, overlap=args.overlap).ensure_valid()


def _collect_files(input_path: Path):
    suffixes = supported_suffixes()
    if input_path.is_file():
        return [input_path]
    return sorted(p for p in input_path.iterdir() if p.suffix.lower() in suffixes)


def process_command(input_path: str, title: str = None, document_id: str = None, options: ChunkingOptions = None):
    """문서 처리 명령어"""
    input_path = Path(input_path)

    if not input_path.exists():
        print(f"❌ 오류: 경로를 찾을 수 없습니다: {input_path}")
        logger.error(f"경로를 찾을 수 없습니다: {input_path}")
        sys.exit(1)

    files = _collect_files(input_path)
    if not files:
        print(f"❌ 오류: 처리할 문서를 찾을 수 없습니다: {input_path} (지원 형식: {', '.join(supported_suffixes())})")
        sys.exit(1)

    if len(files) > 1 and (title or document_id):
        print("⚠️  --title/--document-id는 파일 하나일 때만 적용됩니다. 무시합니다.")
        title = document_id = None

    service = RegulationIngestionService(options=options)
    total_chunks = 0
    total_tables = 0

    print(f"\n📄 처리할 문서: {len(files)}개")
    for file_path in files:
        try:
            result = service.ingest_file(str(file_path), title=title, document_id=document_id)
        except RegulationRAGException as e:
            print(f"  ❌ {file_path.name}: {e}")
            logger.error(f"문서 처리 실패: {file_path.name} - {e}")
            continue

        total_chunks += result.chunks_created
        total_tables += result.table_chunks
        print(
            f"  ✅ {file_path.name} → {result.document_id} "
            f"(청크 {result.chunks_created}개, 별표 {result.table_chunks}개, {result.processing_time_ms:.0f}ms)"
        )

    print(f"\n✅ 완료: 청크 {total_chunks}개 (별표 청크 {total_tables}개)")


def chunk_command(input_path: str, options: ChunkingOptions, as_json: bool = False):
    """청킹 미리보기 명령어 (저장하지 않음)"""
    path = Path(input_path)
    loaded = get_document_loader(str(path)).load(str(path))
    records = chunk_document(loaded.content, loaded.default_title, options=options)

    if as_json:
        print(json.dumps([r.model_dump() for r in records], ensure_ascii=False, indent=2))
        return

    table_count = sum(1 for r in records if r.origin == "table")
    print(f"\n📄 {path.name}: {len(loaded.content)}자 → 청크 {len(records)}개 (별표 {table_count}개)")
    print("=" * 60)
    for record in records:
        preview = record.content[:80].replace("\n", " ")
        print(f"[{record.chunk_index:>3}] {record.priority_class:<16} {preview}")


def reembed_command(document_id: str):
    """재임베딩 명령어"""
    result = RegulationAdminService().reembed(document_id)
    print(f"✅ 재임베딩 완료: {document_id} (청크 {result.chunks_processed}개)")


def reprocess_command():
    """전체 재처리 명령어"""
    result = RegulationAdminService().reprocess_all(show_progress=True)
    print(
        f"✅ 재처리 완료: 문서 {result.documents_processed}개, "
        f"청크 {result.chunks_processed}개, 마커 보정 {result.chunks_updated}개"
    )


def stats_command():
    """통계 명령어"""
    stats = RegulationAdminService().stats()

    print("\n📊 출장 규정 RAG 통계")
    print("=" * 60)
    print(f"컬렉션: {stats.collection_name}")
    print(f"문서 수: {stats.total_documents}")
    print(f"청크 수: {stats.total_chunks}")
    print(f"별표 청크 수: {stats.table_chunks}")
    print(f"마지막 갱신: {stats.last_updated.isoformat() if stats.last_updated else '-'}")
    print(f"임베딩 모델: {stats.embedding_model}")
    print(f"청크 설정: size={stats.chunk_size}, overlap={stats.chunk_overlap}")


def search_command(query: str, top_k: int = None):
    """검색 명령어"""
    results = RegulationRetriever().search(query, top_k)

    if not results:
        print("🔍 검색 결과가 없습니다.")
        return

    print(f"\n🔍 '{query}' 검색 결과 {len(results)}개")
    print("=" * 60)
    for i, chunk in enumerate(results, start=1):
        print(
            f"\n[{i}] {chunk.doc_title or chunk.document_id} #{chunk.chunk_index} "
            f"score={chunk.score:.3f} (유사도 {chunk.similarity:.3f} + {chunk.boost:.2f}, {chunk.priority_class})"
        )
        print(chunk.content[:300])


def reset_command(confirmed: bool = False):
    """벡터 저장소 초기화 명령어"""
    if not confirmed:
        answer = input(f"⚠️  '{config.collection_name}' 컬렉션을 초기화합니다. 계속할까요? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("취소되었습니다.")
            return

    service = RegulationIngestionService()
    service.vector_store.reset()
    print(f"✅ 초기화 완료: {config.collection_name}")
    logger.info(f"컬렉션 초기화: {config.collection_name}")


if __name__ == "__main__":
    main()
