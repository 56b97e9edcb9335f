"""
계좌 원장 저장소

accounts / movements 테이블 접근.
커밋은 호출자(핸들러)가 결정: 저장소 메서드는 커밋하지 않는다.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Iterator

import aiosqlite

from core.ledger.errors import LedgerStoreError
from core.ledger.models import ACCOUNT_COLUMNS, MOVEMENT_COLUMNS, Account, Movement
from core.types import AccountStatus

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

# PATCH로 변경 가능한 컬럼 (API 필드 → DB 컬럼)
UPDATABLE_COLUMNS: dict[str, str] = {
    "alias": "alias",
    "status": "status",
}


def utc_now_iso() -> str:
    """현재 UTC 시각 (ISO 8601)"""
    return datetime.now(timezone.utc).isoformat()


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """DB 오류 → LedgerStoreError (원인 메시지는 detail)

    사용 예시:
    ```python
    with store_errors("No se pudo actualizar"):
        await store.update_fields(account_id, fields)
    ```
    """
    try:
        yield
    except aiosqlite.Error as e:
        logger.error(f"{message}: {e}")
        raise LedgerStoreError(message, detail=str(e)) from e


class AccountStore:
    """계좌 저장소

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(self, account: Account) -> None:
        """계좌 INSERT

        Raises:
            aiosqlite.IntegrityError: 계좌번호 중복
        """
        await self.db.execute(
            """
            INSERT INTO accounts (
                account_id, number, client_id, account_type, currency, alias,
                balance_minor, status, version, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                account.account_id,
                account.number,
                account.client_id,
                account.account_type.value,
                account.currency.value,
                account.alias,
                account.balance_minor,
                account.status.value,
                account.version,
                account.created_at,
                account.updated_at,
            ),
        )

    async def get(self, account_id: str) -> Account | None:
        """계좌 조회"""
        row = await self.db.fetchone(
            f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE account_id = ?",
            (account_id,),
        )
        return Account.from_row(row) if row else None

    async def list_accounts(self, client_id: str | None = None) -> list[Account]:
        """계좌 목록 (최근 생성 순)

        Args:
            client_id: 고객 필터 (None이면 전체)
        """
        if client_id:
            rows = await self.db.fetchall(
                f"""
                SELECT {ACCOUNT_COLUMNS} FROM accounts
                WHERE client_id = ?
                ORDER BY created_at DESC, rowid DESC
                """,
                (client_id,),
            )
        else:
            rows = await self.db.fetchall(
                f"""
                SELECT {ACCOUNT_COLUMNS} FROM accounts
                ORDER BY created_at DESC, rowid DESC
                """
            )
        return [Account.from_row(row) for row in rows]

    async def update_fields(self, account_id: str, fields: dict[str, Any]) -> bool:
        """별칭/상태 부분 업데이트 (잔고는 건드리지 않음)

        Args:
            account_id: 계좌 ID
            fields: {API 필드: 값} (UPDATABLE_COLUMNS 키만 허용)

        Returns:
            대상 계좌 존재 여부
        """
        assignments: list[str] = []
        params: list[Any] = []
        for key, value in fields.items():
            column = UPDATABLE_COLUMNS[key]
            assignments.append(f"{column} = ?")
            params.append(value)

        assignments.append("version = version + 1")
        assignments.append("updated_at = ?")
        params.append(utc_now_iso())
        params.append(account_id)

        cursor = await self.db.execute(
            f"UPDATE accounts SET {', '.join(assignments)} WHERE account_id = ?",
            tuple(params),
        )
        return cursor.rowcount > 0

    async def write_balance(self, account_id: str, balance_minor: int) -> None:
        """잔고 덮어쓰기 (읽은 값 기준 계산 결과 저장)

        버전 검사 없음: 동시 요청 시 마지막 쓰기가 이긴다.
        """
        await self.db.execute(
            """
            UPDATE accounts
            SET balance_minor = ?, version = version + 1, updated_at = ?
            WHERE account_id = ?
            """,
            (balance_minor, utc_now_iso(), account_id),
        )

    async def adjust_balance(
        self,
        account_id: str,
        delta_minor: int,
        required_minor: int | None = None,
        ceiling_minor: int | None = None,
    ) -> bool:
        """조건부 잔고 증감 (단일 UPDATE)

        ACTIVA 상태이고, required_minor가 주어지면 잔고가 그 이상일 때,
        ceiling_minor가 주어지면 잔고가 그 이하일 때만 적용.

        Args:
            account_id: 계좌 ID
            delta_minor: 증감액 (출금은 음수)
            required_minor: 필요 최소 잔고 (출금액)
            ceiling_minor: 적용 전 허용 최대 잔고 (MAX_MINOR - 입금액)

        Returns:
            적용 여부 (False면 호출자가 원인 판별)
        """
        cursor = await self.db.execute(
            """
            UPDATE accounts
            SET balance_minor = balance_minor + ?,
                version = version + 1,
                updated_at = ?
            WHERE account_id = ?
              AND status = ?
              AND (? IS NULL OR balance_minor >= ?)
              AND (? IS NULL OR balance_minor <= ?)
            """,
            (
                delta_minor,
                utc_now_iso(),
                account_id,
                AccountStatus.ACTIVA.value,
                required_minor,
                required_minor,
                ceiling_minor,
                ceiling_minor,
            ),
        )
        return cursor.rowcount > 0


class MovementStore:
    """잔고 변동 기록 저장소 (append-only)

    UPDATE / DELETE 메서드는 제공하지 않음.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def append(self, movement: Movement) -> None:
        """변동 기록 추가"""
        await self.db.execute(
            """
            INSERT INTO movements (
                movement_id, account_id, movement_type, amount_minor,
                description, created_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                movement.movement_id,
                movement.account_id,
                movement.movement_type.value,
                movement.amount_minor,
                movement.description,
                movement.created_at,
            ),
        )

    async def list_by_account(self, account_id: str) -> list[Movement]:
        """계좌별 변동 기록 (최신 순, 페이지네이션 없음)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {MOVEMENT_COLUMNS} FROM movements
            WHERE account_id = ?
            ORDER BY seq DESC
            """,
            (account_id,),
        )
        return [Movement.from_row(row) for row in rows]
