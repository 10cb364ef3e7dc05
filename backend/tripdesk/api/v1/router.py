from fastapi import APIRouter
from tripdesk.api.v1.endpoints.regulation import router as regulation_router

api_router = APIRouter()

# 출장 규정 RAG 엔드포인트
api_router.include_router(
    regulation_router,
    prefix="/regulation",
    tags=["Regulation RAG"]
)
