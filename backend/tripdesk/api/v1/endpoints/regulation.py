"""
출장 규정 RAG API 엔드포인트

규정 문서 업로드, 청크 수집, 재임베딩/재처리, 통계, 검색 API를 제공합니다.
"""

import asyncio
import shutil
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from tripdesk.core.config import settings
from tripdesk.domain.regulation.chunker import chunk_document
from tripdesk.domain.regulation.core.config import config
from tripdesk.domain.regulation.core.exceptions import (
    ChunkingConfigurationException,
    DocumentNotFoundException,
    EmptyDocumentException,
    RegulationRAGException,
    UnsupportedDocumentException,
    ValidationException,
)
from tripdesk.domain.regulation.core.models import ChunkingOptions
from tripdesk.domain.regulation.infrastructure.document_loader import supported_suffixes
from tripdesk.domain.regulation.schemas import (
    AdminRequest,
    AdminResponse,
    ChunkPreviewRequest,
    ChunkPreviewResponse,
    DeleteResponse,
    DocumentListResponse,
    IngestRequest,
    IngestResponse,
    SearchRequest,
    SearchResponse,
    StatsResponse,
    UploadResponse,
)
from tripdesk.domain.regulation.services import (
    RegulationAdminService,
    RegulationIngestionService,
    RegulationRetriever,
)
from tripdesk.domain.regulation.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()

ADMIN_ACTIONS = ("reembed", "reprocess_all")

# 전역 인스턴스 (lazy loading)
_ingestion_service = None
_admin_service = None
_retriever = None


def get_ingestion_service() -> RegulationIngestionService:
    """수집 서비스 lazy loading"""
    global _ingestion_service
    if _ingestion_service is None:
        _ingestion_service = RegulationIngestionService()
        logger.info("RegulationIngestionService 인스턴스 생성")
    return _ingestion_service


def get_admin_service() -> RegulationAdminService:
    """관리 서비스 lazy loading"""
    global _admin_service
    if _admin_service is None:
        _admin_service = RegulationAdminService()
        logger.info("RegulationAdminService 인스턴스 생성")
    return _admin_service


def get_retriever() -> RegulationRetriever:
    """검색기 lazy loading"""
    global _retriever
    if _retriever is None:
        _retriever = RegulationRetriever()
        logger.info("RegulationRetriever 인스턴스 생성")
    return _retriever


def _http_error(e: RegulationRAGException) -> HTTPException:
    """도메인 예외 → HTTP 상태 코드"""
    if isinstance(e, (ValidationException, ChunkingConfigurationException)):
        status_code = 400
    elif isinstance(e, DocumentNotFoundException):
        status_code = 404
    elif isinstance(e, UnsupportedDocumentException):
        status_code = 415
    elif isinstance(e, EmptyDocumentException):
        status_code = 422
    else:
        status_code = 500
        logger.error(f"규정 RAG 처리 오류: {e}")
    return HTTPException(status_code=status_code, detail=e.message)


async def _run(func, *args, **kwargs):
    """동기 작업을 스레드에서 실행 (요청 단위 타임아웃)"""
    try:
        return await asyncio.wait_for(
            run_in_threadpool(func, *args, **kwargs),
            timeout=config.request_timeout
        )
    except asyncio.TimeoutError:
        logger.error(f"요청 시간 초과: {getattr(func, '__name__', func)} ({config.request_timeout}s)")
        raise HTTPException(
            status_code=504,
            detail=f"처리 시간이 {config.request_timeout}초를 초과했습니다. 다시 시도해 주세요."
        )
    except RegulationRAGException as e:
        raise _http_error(e)


@router.post("/upload", response_model=UploadResponse)
async def upload_document(
    file: UploadFile = File(...),
    title: str = Form(None),
    document_id: str = Form(None, alias="documentId"),
    service: RegulationIngestionService = Depends(get_ingestion_service)
):
    """
    규정 문서 업로드 및 처리 (PDF/DOCX/TXT)

    타임아웃으로 504를 돌려줘도 스레드의 수집 작업은 끝까지 진행됩니다.
    같은 documentId로 재시도하면 앞서 저장된 청크를 교체하므로 중복이 생기지 않습니다.

    Args:
        file: 업로드할 문서
        title: 문서 제목 (없으면 파일 이름)
        document_id: 문서 ID (없으면 새로 생성)

    Returns:
        UploadResponse: 수집 결과
    """
    filename = file.filename or ""
    suffix = Path(filename).suffix.lower()
    if suffix not in supported_suffixes():
        raise HTTPException(
            status_code=415,
            detail=f"지원하지 않는 파일 형식입니다. ({', '.join(supported_suffixes())})"
        )

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    upload_path = upload_dir / f"{uuid.uuid4().hex}{suffix}"

    try:
        with upload_path.open("wb") as buffer:
            shutil.copyfileobj(file.file, buffer)

        if upload_path.stat().st_size > settings.max_upload_size_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"파일 크기는 {settings.MAX_UPLOAD_SIZE_MB}MB 이하만 가능합니다."
            )

        logger.info(f"파일 업로드 완료: {filename}")
        result = await _run(
            service.ingest_file,
            str(upload_path),
            title=title or Path(filename).stem,
            document_id=document_id,
        )
    finally:
        upload_path.unlink(missing_ok=True)

    return UploadResponse(
        success=True,
        message=f"{result.chunks_created}개 청크 저장 완료 (별표 {result.table_chunks}개)",
        filename=filename,
        result=result
    )


@router.post("/ingest", response_model=IngestResponse)
async def ingest_chunks(
    request: IngestRequest,
    service: RegulationIngestionService = Depends(get_ingestion_service)
):
    """이미 청킹된 문서 수집 ({title, documentId, chunks})"""
    result = await _run(service.ingest_chunks, request.title, request.document_id, request.chunks)
    return IngestResponse(
        success=True,
        message=f"{result.chunks_created}개 청크 저장 완료",
        result=result
    )


@router.post("/admin", response_model=AdminResponse)
async def admin_action(
    request: AdminRequest,
    service: RegulationAdminService = Depends(get_admin_service)
):
    """
    관리 작업

    - reembed: documentId 문서의 임베딩 재계산
    - reprocess_all: 모든 문서의 우선순위 마커 보정 및 재임베딩
    """
    if request.action not in ADMIN_ACTIONS:
        raise HTTPException(status_code=400, detail=f"지원하지 않는 작업입니다: {request.action}")

    if request.action == "reembed":
        if not request.document_id:
            raise HTTPException(status_code=400, detail="documentId가 필요합니다.")
        result = await _run(service.reembed, request.document_id)
        message = f"{result.chunks_processed}개 청크 재임베딩 완료"
    else:
        result = await _run(service.reprocess_all)
        message = (
            f"문서 {result.documents_processed}개, 청크 {result.chunks_processed}개 재처리 "
            f"(마커 보정 {result.chunks_updated}개)"
        )

    return AdminResponse(success=True, action=request.action, message=message, result=result)


@router.get("/stats", response_model=StatsResponse)
async def get_stats(service: RegulationAdminService = Depends(get_admin_service)):
    """문서/청크/별표 청크 통계"""
    stats = await _run(service.stats)
    return StatsResponse(stats=stats)


@router.get("/documents", response_model=DocumentListResponse)
async def list_documents(service: RegulationIngestionService = Depends(get_ingestion_service)):
    """저장된 문서 목록"""
    documents = await _run(service.list_documents)
    return DocumentListResponse(documents=documents, total=len(documents))


@router.delete("/document/{document_id}", response_model=DeleteResponse)
async def delete_document(
    document_id: str,
    service: RegulationIngestionService = Depends(get_ingestion_service)
):
    """문서의 모든 청크 삭제"""
    deleted = await _run(service.delete_document, document_id)
    return DeleteResponse(success=True, document_id=document_id, chunks_deleted=deleted)


@router.post("/search", response_model=SearchResponse)
async def search_regulations(
    request: SearchRequest,
    retriever: RegulationRetriever = Depends(get_retriever)
):
    """규정 검색 (별표 청크 우선)"""
    results = await _run(retriever.search, request.query, request.top_k)
    return SearchResponse(
        query=request.query,
        results=results,
        context=retriever.build_context(results)
    )


@router.post("/chunk", response_model=ChunkPreviewResponse)
async def preview_chunks(request: ChunkPreviewRequest):
    """청킹 미리보기 (저장하지 않음)"""
    try:
        options = ChunkingOptions.from_config(chunk_size=request.chunk_size, overlap=request.overlap)
        records = chunk_document(request.text, request.document_id, options=options)
    except RegulationRAGException as e:
        raise _http_error(e)

    return ChunkPreviewResponse(
        document_id=request.document_id,
        total_chunks=len(records),
        table_chunks=sum(1 for r in records if r.origin == "table"),
        chunks=records
    )
