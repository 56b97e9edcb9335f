"""
PaymentStore - 공과금 납부 기록 저장소

service_payments 테이블 CRUD.
"""

import logging

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.models import PAYMENT_COLUMNS, ServicePayment

logger = logging.getLogger(__name__)


class PaymentStore:
    """납부 기록 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(self, payment: ServicePayment) -> None:
        """납부 기록 저장 (커밋 포함)"""
        await self.db.execute(
            """
            INSERT INTO service_payments (
                payment_id, account_id, service_type, reference, amount_minor,
                status, provider_response, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                payment.payment_id,
                payment.account_id,
                payment.service_type.value,
                payment.reference,
                payment.amount_minor,
                payment.status.value,
                payment.provider_response,
                payment.created_at,
                payment.updated_at,
            ),
        )
        await self.db.commit()

    async def get(self, payment_id: str) -> ServicePayment | None:
        """납부 기록 조회"""
        row = await self.db.fetchone(
            f"SELECT {PAYMENT_COLUMNS} FROM service_payments WHERE payment_id = ?",
            (payment_id,),
        )
        return ServicePayment.from_row(row) if row else None

    async def list_payments(self, account_id: str | None = None) -> list[ServicePayment]:
        """납부 기록 목록 (최신 순)

        Args:
            account_id: 계좌 필터 (None이면 전체)
        """
        if account_id:
            rows = await self.db.fetchall(
                f"""
                SELECT {PAYMENT_COLUMNS} FROM service_payments
                WHERE account_id = ?
                ORDER BY created_at DESC, rowid DESC
                """,
                (account_id,),
            )
        else:
            rows = await self.db.fetchall(
                f"""
                SELECT {PAYMENT_COLUMNS} FROM service_payments
                ORDER BY created_at DESC, rowid DESC
                """
            )
        return [ServicePayment.from_row(row) for row in rows]
