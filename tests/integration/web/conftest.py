"""
Web API 통합 테스트 픽스처

httpx ASGITransport로 앱을 직접 호출 (서버 기동 없음).
ASGITransport는 lifespan을 실행하지 않으므로 스키마는 픽스처에서 초기화.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from adapters.accounts.rest_client import AccountsRestClient
from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import AppConfig, AuthConfig
from core.types import BalanceMode, RunMode
from web.app import app
from web.dependencies import get_accounts_client, get_app_config

BASE_URL = "http://test"


@pytest.fixture
def make_client(tmp_path: Path):
    """설정을 지정해 API 클라이언트 생성

    결제 서비스의 계좌 출금 호출도 같은 앱으로 라우팅.
    """

    @asynccontextmanager
    async def _make(
        balance_mode: BalanceMode = BalanceMode.ATOMIC,
        auth: AuthConfig | None = None,
    ) -> AsyncIterator[httpx.AsyncClient]:
        config = AppConfig(
            mode=RunMode.DEVELOPMENT,
            db_path=tmp_path / "api.db",
            balance_mode=balance_mode,
            auth=auth or AuthConfig(),
        )
        async with SQLiteAdapter(config.db_path) as db:
            await init_schema(db)

        transport = httpx.ASGITransport(app=app)
        accounts_client = AccountsRestClient(base_url=BASE_URL)
        accounts_client._client = httpx.AsyncClient(transport=transport, base_url=BASE_URL)

        app.dependency_overrides[get_app_config] = lambda: config
        app.dependency_overrides[get_accounts_client] = lambda: accounts_client
        try:
            async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
                yield client
        finally:
            app.dependency_overrides.clear()
            await accounts_client.close()

    return _make


@pytest_asyncio.fixture
async def client(make_client) -> AsyncIterator[httpx.AsyncClient]:
    """기본 설정 (atomic, 권한 검사 없음)"""
    async with make_client() as c:
        yield c
