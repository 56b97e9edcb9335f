"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config.loader import get_settings
from core.constants import SERVICE_NAME, SERVICE_VERSION
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import accounts, health, payments

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.accounts.rest_client import AccountsRestClient
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
    from web.dependencies import set_accounts_client

    settings = get_settings()
    config = settings.config

    # 시작 시 - DB 스키마 자동 초기화
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)

    accounts_client = AccountsRestClient(
        base_url=config.accounts_url,
        timeout=config.accounts_timeout_sec,
    )
    set_accounts_client(accounts_client)

    logger.info(
        f"{SERVICE_NAME} 시작: mode={settings.mode.value}, "
        f"balance_mode={settings.balance_mode.value}, db={settings.db_path}"
    )

    yield

    # 종료 시 - 리소스 정리
    set_accounts_client(None)
    await accounts_client.close()
    logger.info(f"{SERVICE_NAME} 종료")


app = FastAPI(
    title="Accounts API",
    description="계좌 / 입출금 / 공과금 납부 API",
    version=SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(payments.router)
