"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from typing import AsyncGenerator

from fastapi import Depends, Header

from adapters.accounts.rest_client import AccountsRestClient
from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import AppConfig, get_settings
from core.ledger.authz import AllowAllAuthorizer, Authorizer, Caller, RoleAuthorizer


def get_app_config() -> AppConfig:
    """애플리케이션 설정 반환"""
    return get_settings().config


async def get_db(
    config: AppConfig = Depends(get_app_config),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (요청마다 별도 연결)

    계좌 변경 요청이 대부분이므로 쓰기 가능 연결 사용.
    """
    async with SQLiteAdapter(config.db_path) as db:
        yield db


def get_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    """게이트웨이가 주입한 헤더로 호출자 생성"""
    return Caller(user_id=x_user_id, role=x_user_role)


def get_authorizer(config: AppConfig = Depends(get_app_config)) -> Authorizer:
    """설정에 따른 권한 검사기 반환

    enforce_roles가 꺼져 있으면 게이트웨이에 위임 (모두 허용).
    """
    if not config.auth.enforce_roles:
        return AllowAllAuthorizer()
    return RoleAuthorizer(config.auth.policy)


# =========================================================================
# AccountsRestClient (결제 → 계좌 출금 호출, 프로세스 공유)
# =========================================================================

_accounts_client: AccountsRestClient | None = None


def set_accounts_client(client: AccountsRestClient | None) -> None:
    """AccountsRestClient 설정

    앱 시작 시 호출하여 전역 인스턴스 설정.
    """
    global _accounts_client
    _accounts_client = client


def get_accounts_client(
    config: AppConfig = Depends(get_app_config),
) -> AccountsRestClient:
    """AccountsRestClient 반환 (없으면 설정으로 생성)"""
    global _accounts_client
    if _accounts_client is None:
        _accounts_client = AccountsRestClient(
            base_url=config.accounts_url,
            timeout=config.accounts_timeout_sec,
        )
    return _accounts_client
