"""
잔고 변경 핸들러

입금/출금 시 잔고 변경과 변동 기록(Movement) 추가를 처리.

두 가지 방식 제공 (BalanceMode):
- NAIVE: 계좌 조회 → 검사 → 잔고 계산 후 덮어쓰기 → 커밋 → Movement 추가 → 커밋.
  동시 출금 시 둘 다 같은 잔고를 읽고 통과할 수 있음 (lost update, 초과 인출).
  잔고 커밋 후 Movement 저장 실패 시 기록 없는 잔고 변경이 남는다.
- ATOMIC: 조건부 UPDATE(ACTIVA, 잔고 >= 출금액)와 Movement INSERT를
  하나의 트랜잭션으로 처리. 조건 불일치 시 계좌를 다시 읽어 원인 판별.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from core.constants import Defaults
from core.ledger.amounts import MAX_MINOR, format_amount, parse_amount
from core.ledger.authz import AllowAllAuthorizer, Authorizer, Caller
from core.ledger.errors import (
    AccountNotActiveError,
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
)
from core.ledger.lifecycle import is_valid_account_id
from core.ledger.models import Account, Movement
from core.ledger.store import AccountStore, MovementStore, store_errors, utc_now_iso
from core.types import BalanceMode, LedgerAction, MovementType

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


# 변동 유형별 기본 설명
DEFAULT_DESCRIPTIONS: dict[MovementType, str] = {
    MovementType.DEPOSITO: Defaults.DEPOSIT_DESCRIPTION,
    MovementType.RETIRO: Defaults.WITHDRAW_DESCRIPTION,
}

# 입금 후 잔고가 MAX_MINOR를 넘는 경우의 detail
BALANCE_LIMIT_DETAIL = "saldo máximo excedido"

# 변동 유형별 권한 검사 작업
_ACTIONS: dict[MovementType, LedgerAction] = {
    MovementType.DEPOSITO: LedgerAction.DEPOSIT,
    MovementType.RETIRO: LedgerAction.WITHDRAW,
}


class BalanceOperationHandler:
    """잔고 변경 핸들러

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        mode: 잔고 변경 방식 (기본 ATOMIC)
        authorizer: 권한 검사기 (기본: 모두 허용)

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        handler = BalanceOperationHandler(db, mode=BalanceMode.ATOMIC)
        account = await handler.deposit(account_id, "100")
        account = await handler.withdraw(account_id, 50, "Cajero")
    ```
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        mode: BalanceMode = BalanceMode.ATOMIC,
        authorizer: Authorizer | None = None,
    ):
        self.db = db
        self.mode = mode
        self.accounts = AccountStore(db)
        self.movements = MovementStore(db)
        self.authorizer = authorizer or AllowAllAuthorizer()

    async def deposit(
        self,
        account_id: str,
        amount: Any,
        description: str | None = None,
        caller: Caller | None = None,
    ) -> Account:
        """입금

        Raises:
            InvalidAmountError: 금액이 유한한 양수가 아님 (또는 입금 후 잔고 > MAX_MINOR)
            AccountNotFoundError: 계좌 없음
            AccountNotActiveError: ACTIVA 아님
        """
        return await self._apply(MovementType.DEPOSITO, account_id, amount, description, caller)

    async def withdraw(
        self,
        account_id: str,
        amount: Any,
        description: str | None = None,
        caller: Caller | None = None,
    ) -> Account:
        """출금

        Raises:
            InvalidAmountError: 금액이 유한한 양수가 아님
            AccountNotFoundError: 계좌 없음
            AccountNotActiveError: ACTIVA 아님
            InsufficientFundsError: 출금액 > 잔고
        """
        return await self._apply(MovementType.RETIRO, account_id, amount, description, caller)

    async def list_movements(self, account_id: str) -> list[Movement]:
        """계좌 변동 기록 (최신 순)

        없는 계좌도 404 없이 빈 목록 반환.
        """
        return await self.movements.list_by_account(account_id)

    # -------------------------------------------------------------------------
    # 내부 처리
    # -------------------------------------------------------------------------

    async def _apply(
        self,
        movement_type: MovementType,
        account_id: str,
        amount: Any,
        description: str | None,
        caller: Caller | None,
    ) -> Account:
        """공통 처리: 권한 → 금액 검증 → 방식별 적용"""
        self.authorizer.check(caller or Caller.anonymous(), _ACTIONS[movement_type])

        amount_minor = parse_amount(amount)

        if not is_valid_account_id(account_id):
            raise AccountNotFoundError(account_id)

        movement = Movement(
            movement_id=str(uuid.uuid4()),
            account_id=account_id,
            movement_type=movement_type,
            amount_minor=amount_minor,
            description=description or DEFAULT_DESCRIPTIONS[movement_type],
            created_at=utc_now_iso(),
        )

        with store_errors("No se pudo registrar el movimiento"):
            if self.mode == BalanceMode.NAIVE:
                account = await self._apply_naive(movement)
            else:
                account = await self._apply_atomic(movement)

        logger.info(
            f"{movement_type.value} {format_amount(amount_minor)} → {account.number}",
            extra={
                "account_id": account_id,
                "movement_id": movement.movement_id,
                "balance": format_amount(account.balance_minor),
                "mode": self.mode.value,
            },
        )
        return account

    async def _apply_naive(self, movement: Movement) -> Account:
        """읽기 → 검사 → 쓰기 (버전 검사, 트랜잭션 묶음 없음)"""
        account = await self.accounts.get(movement.account_id)
        if account is None:
            raise AccountNotFoundError(movement.account_id)

        if not account.is_active:
            raise AccountNotActiveError(account.account_id, account.status.value)

        if movement.movement_type == MovementType.RETIRO:
            if account.balance_minor < movement.amount_minor:
                raise InsufficientFundsError(account.account_id)
            account.balance_minor -= movement.amount_minor
        else:
            if account.balance_minor > MAX_MINOR - movement.amount_minor:
                raise InvalidAmountError(BALANCE_LIMIT_DETAIL)
            account.balance_minor += movement.amount_minor

        # 1) 잔고 저장
        await self.accounts.write_balance(account.account_id, account.balance_minor)
        await self.db.commit()

        # 2) 변동 기록 저장 (별도 커밋)
        await self.movements.append(movement)
        await self.db.commit()

        return await self._reload(account.account_id)

    async def _apply_atomic(self, movement: Movement) -> Account:
        """조건부 UPDATE + Movement INSERT 단일 트랜잭션"""
        if movement.movement_type == MovementType.RETIRO:
            delta = -movement.amount_minor
            required: int | None = movement.amount_minor
            ceiling: int | None = None
        else:
            delta = movement.amount_minor
            required = None
            ceiling = MAX_MINOR - movement.amount_minor

        async with self.db.transaction():
            applied = await self.accounts.adjust_balance(
                movement.account_id,
                delta,
                required_minor=required,
                ceiling_minor=ceiling,
            )
            if not applied:
                await self._raise_rejection(movement)

            await self.movements.append(movement)

        return await self._reload(movement.account_id)

    async def _raise_rejection(self, movement: Movement) -> None:
        """조건부 UPDATE 불일치 원인 판별 후 예외 발생"""
        account = await self.accounts.get(movement.account_id)
        if account is None:
            raise AccountNotFoundError(movement.account_id)

        if not account.is_active:
            raise AccountNotActiveError(account.account_id, account.status.value)

        if movement.movement_type == MovementType.DEPOSITO:
            raise InvalidAmountError(BALANCE_LIMIT_DETAIL)

        raise InsufficientFundsError(account.account_id)

    async def _reload(self, account_id: str) -> Account:
        """변경 후 계좌 재조회"""
        account = await self.accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account
