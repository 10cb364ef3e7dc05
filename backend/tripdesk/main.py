from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from tripdesk.core.config import settings
from tripdesk.api.v1 import api_router
from tripdesk.domain.regulation.core.config import config as regulation_config


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 시작/종료 시 실행되는 함수
    """
    # 시작 시
    print(f"🚀 Starting {settings.APP_NAME} API...")
    print(f"📚 Regulation collection: {regulation_config.collection_name} ({regulation_config.vector_store_full_path})")
    if not regulation_config.openai_api_key:
        print("⚠️  OPENAI_API_KEY가 설정되지 않아 업로드/검색 API를 사용할 수 없습니다.")

    yield

    # 종료 시
    print("👋 Shutting down...")


# FastAPI 앱 생성
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Business-trip regulation ingestion and retrieval API",
    lifespan=lifespan
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API 라우터 등록
app.include_router(api_router, prefix=settings.API_PREFIX)


# Health Check
@app.get("/health")
async def health_check():
    """헬스 체크 엔드포인트"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tripdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
