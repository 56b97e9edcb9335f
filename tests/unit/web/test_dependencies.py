"""
web/dependencies.py 테스트
"""

from core.config.loader import AppConfig, AuthConfig
from core.constants import Paths
from core.ledger.authz import AllowAllAuthorizer, Caller, RoleAuthorizer
from core.types import RunMode
from web.dependencies import (
    get_accounts_client,
    get_authorizer,
    get_caller,
    set_accounts_client,
)


def _config(**kwargs) -> AppConfig:
    return AppConfig(mode=RunMode.DEVELOPMENT, db_path=Paths.DEV_DB, **kwargs)


class TestGetCaller:
    """게이트웨이 헤더 → Caller"""

    def test_headers(self) -> None:
        assert get_caller(x_user_id="u1", x_user_role="admin") == Caller("u1", "admin")

    def test_no_headers(self) -> None:
        assert get_caller(x_user_id=None, x_user_role=None) == Caller.anonymous()


class TestGetAuthorizer:
    """설정에 따른 권한 검사기"""

    def test_not_enforced(self) -> None:
        assert isinstance(get_authorizer(_config()), AllowAllAuthorizer)

    def test_enforced(self) -> None:
        auth = AuthConfig(enforce_roles=True, policy={"update": frozenset({"admin"})})

        authorizer = get_authorizer(_config(auth=auth))

        assert isinstance(authorizer, RoleAuthorizer)
        assert authorizer.policy == {"update": frozenset({"admin"})}


class TestAccountsClient:
    """AccountsRestClient 전역 인스턴스"""

    def test_lazy_create_from_config(self) -> None:
        set_accounts_client(None)
        try:
            client = get_accounts_client(_config(accounts_url="http://a.test/", accounts_timeout_sec=1.5))

            assert client.base_url == "http://a.test"
            assert client.timeout == 1.5
            assert get_accounts_client(_config()) is client
        finally:
            set_accounts_client(None)
