"""
계좌 서비스

계좌 생명주기 / 잔고 변경 핸들러를 묶어 API 응답 dict 반환
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import AppConfig
from core.ledger.authz import Authorizer, Caller
from core.ledger.balance import BalanceOperationHandler
from core.ledger.lifecycle import AccountLifecycleHandler

logger = logging.getLogger(__name__)


class AccountService:
    """계좌 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        config: 애플리케이션 설정 (balance_mode, number_attempts)
        authorizer: 권한 검사기
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        config: AppConfig,
        authorizer: Authorizer | None = None,
    ):
        self.db = db
        self.lifecycle = AccountLifecycleHandler(
            db,
            authorizer=authorizer,
            number_attempts=config.number_attempts,
        )
        self.balance = BalanceOperationHandler(
            db,
            mode=config.balance_mode,
            authorizer=authorizer,
        )

    async def list_accounts(self, client_id: str | None = None) -> list[dict[str, Any]]:
        """계좌 목록 (clientId 필터)"""
        accounts = await self.lifecycle.list_accounts(client_id)
        return [a.to_dict() for a in accounts]

    async def create_account(
        self,
        client_id: str | None,
        account_type: str | None,
        currency: str | None,
        alias: str | None,
        caller: Caller,
    ) -> dict[str, Any]:
        """계좌 생성"""
        account = await self.lifecycle.create(
            client_id=client_id,
            account_type=account_type,
            currency=currency,
            alias=alias,
            caller=caller,
        )
        return account.to_dict()

    async def get_account(self, account_id: str) -> dict[str, Any]:
        """계좌 조회"""
        account = await self.lifecycle.get(account_id)
        return account.to_dict()

    async def update_account(
        self,
        account_id: str,
        changes: dict[str, Any],
        caller: Caller,
    ) -> dict[str, Any]:
        """별칭/상태 변경"""
        account = await self.lifecycle.update(account_id, changes, caller=caller)
        return account.to_dict()

    async def deposit(
        self,
        account_id: str,
        amount: Any,
        description: str | None,
        caller: Caller,
    ) -> dict[str, Any]:
        """입금"""
        account = await self.balance.deposit(account_id, amount, description, caller=caller)
        return account.to_dict()

    async def withdraw(
        self,
        account_id: str,
        amount: Any,
        description: str | None,
        caller: Caller,
    ) -> dict[str, Any]:
        """출금"""
        account = await self.balance.withdraw(account_id, amount, description, caller=caller)
        return account.to_dict()

    async def get_movements(self, account_id: str) -> list[dict[str, Any]]:
        """변동 기록 (최신 순)"""
        movements = await self.balance.list_movements(account_id)
        return [m.to_dict() for m in movements]
