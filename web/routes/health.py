"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

from fastapi import APIRouter

from core.constants import SERVICE_NAME, SERVICE_VERSION
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """서버 상태 확인

    Returns:
        HealthResponse: ok, service, version 정보
    """
    return HealthResponse(
        ok=True,
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
    )
