"""
계좌 생명주기 핸들러

계좌 생성, 목록/조회, 별칭·상태 변경.
잔고는 이 모듈에서 변경하지 않는다 (balance.py 담당).
"""

from __future__ import annotations

import logging
import random
import uuid
from typing import TYPE_CHECKING, Any, Callable

import aiosqlite

from core.constants import AccountNumberRange, Defaults
from core.ledger.authz import AllowAllAuthorizer, Authorizer, Caller
from core.ledger.errors import (
    AccountNotFoundError,
    LedgerStoreError,
    LedgerValidationError,
)
from core.ledger.models import Account
from core.ledger.store import UPDATABLE_COLUMNS, AccountStore, store_errors, utc_now_iso
from core.types import AccountStatus, AccountType, Currency, LedgerAction

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


def generate_account_number() -> str:
    """10자리 계좌번호 생성 (중복 검사 없음)

    Returns:
        1000000000 ~ 9999999999 범위의 숫자 문자열
    """
    return str(random.randint(AccountNumberRange.MIN, AccountNumberRange.MAX))


def is_valid_account_id(account_id: str) -> bool:
    """UUID 형식의 계좌 ID인지 확인"""
    try:
        uuid.UUID(account_id)
    except (ValueError, AttributeError, TypeError):
        return False
    return True


def _parse_enum(enum_cls: Any, value: Any, field_name: str) -> Any:
    """enum 값 검증 (잘못된 값은 LedgerValidationError)"""
    try:
        return enum_cls(value)
    except ValueError:
        valid = [e.value for e in enum_cls]
        raise LedgerValidationError(
            f"{field_name} inválido",
            detail=f"'{value}' no está en {valid}",
        )


class AccountLifecycleHandler:
    """계좌 생명주기 핸들러

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        authorizer: 권한 검사기 (기본: 모두 허용)
        number_attempts: 계좌번호 중복 시 최대 시도 횟수 (1이면 재시도 없음)
        number_generator: 계좌번호 생성 함수 (테스트 주입용)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        authorizer: Authorizer | None = None,
        number_attempts: int = Defaults.NUMBER_ATTEMPTS,
        number_generator: Callable[[], str] = generate_account_number,
    ):
        self.db = db
        self.accounts = AccountStore(db)
        self.authorizer = authorizer or AllowAllAuthorizer()
        self.number_attempts = max(1, number_attempts)
        self.number_generator = number_generator

    async def create(
        self,
        client_id: Any,
        account_type: Any = None,
        currency: Any = None,
        alias: str | None = None,
        caller: Caller | None = None,
    ) -> Account:
        """계좌 생성

        Args:
            client_id: 고객 ID (필수, 존재 여부는 검증하지 않음)
            account_type: AHORRO / CORRIENTE (기본 AHORRO)
            currency: BOB / USD (기본 BOB)
            alias: 별칭
            caller: 호출자

        Returns:
            생성된 계좌 (잔고 0, ACTIVA)

        Raises:
            LedgerValidationError: clientId 누락, 잘못된 type/currency
            LedgerStoreError: 계좌번호 중복 (시도 횟수 소진)
        """
        self.authorizer.check(caller or Caller.anonymous(), LedgerAction.CREATE)

        if not client_id or not str(client_id).strip():
            raise LedgerValidationError("clientId requerido")

        acc_type = _parse_enum(AccountType, account_type or AccountType.AHORRO, "type")
        acc_currency = _parse_enum(Currency, currency or Currency.BOB, "currency")

        last_error: Exception | None = None
        for attempt in range(1, self.number_attempts + 1):
            now = utc_now_iso()
            account = Account(
                account_id=str(uuid.uuid4()),
                number=self.number_generator(),
                client_id=str(client_id),
                account_type=acc_type,
                currency=acc_currency,
                alias=alias,
                balance_minor=0,
                status=AccountStatus.ACTIVA,
                version=1,
                created_at=now,
                updated_at=now,
            )

            # 번호 중복(IntegrityError)은 재시도, 그 외 DB 오류는 즉시 LedgerStoreError
            with store_errors("No se pudo crear la cuenta"):
                try:
                    async with self.db.transaction():
                        await self.accounts.insert(account)
                except aiosqlite.IntegrityError as e:
                    last_error = e
                    logger.warning(
                        f"계좌번호 중복: {account.number} (시도 {attempt}/{self.number_attempts})"
                    )
                    continue

            logger.info(
                f"Account created: {account.number}",
                extra={"account_id": account.account_id, "client_id": account.client_id},
            )
            return account

        raise LedgerStoreError(
            "No se pudo crear la cuenta",
            detail=str(last_error) if last_error else None,
        )

    async def list_accounts(self, client_id: str | None = None) -> list[Account]:
        """계좌 목록 (최근 생성 순, 공백 client_id는 필터 없음)"""
        client_filter = (client_id or "").strip() or None
        return await self.accounts.list_accounts(client_filter)

    async def get(self, account_id: str) -> Account:
        """계좌 조회

        Raises:
            AccountNotFoundError: 없거나 형식이 잘못된 ID
        """
        if not is_valid_account_id(account_id):
            raise AccountNotFoundError(account_id)

        account = await self.accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def update(
        self,
        account_id: str,
        changes: dict[str, Any],
        caller: Caller | None = None,
    ) -> Account:
        """별칭/상태 부분 업데이트

        changes에 키가 존재하는 필드만 변경 (빈 문자열 alias는 값을 비움).
        상태 전이 순서는 검사하지 않는다.

        Args:
            account_id: 계좌 ID
            changes: {"alias"?: str | None, "status"?: str}
            caller: 호출자

        Raises:
            AccountNotFoundError: 계좌 없음
            LedgerValidationError: 잘못된 status 값
        """
        self.authorizer.check(caller or Caller.anonymous(), LedgerAction.UPDATE)

        if not is_valid_account_id(account_id):
            raise AccountNotFoundError(account_id)

        fields: dict[str, Any] = {}
        for key in UPDATABLE_COLUMNS:
            if key not in changes:
                continue
            value = changes[key]
            if key == "status":
                value = _parse_enum(AccountStatus, value, "status").value
            elif value is not None:
                value = str(value)
            fields[key] = value

        if not fields:
            return await self.get(account_id)

        with store_errors("No se pudo actualizar"):
            async with self.db.transaction():
                found = await self.accounts.update_fields(account_id, fields)

        if not found:
            raise AccountNotFoundError(account_id)

        logger.info(
            f"Account updated: {account_id}",
            extra={"fields": sorted(fields)},
        )
        return await self.get(account_id)
