"""
결제 서비스

공과금 납부: 계좌 서비스에 출금 요청 → 성공 시 납부 기록 저장.
보상 처리 없음: 출금 후 기록 저장이 실패하면 출금만 남는다.
"""

import logging
import uuid
from typing import Any

import aiosqlite

from adapters.accounts.rest_client import AccountsApiError, AccountsRestClient
from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.amounts import parse_amount, to_decimal
from core.ledger.errors import (
    InvalidAmountError,
    LedgerError,
    LedgerStoreError,
    LedgerValidationError,
)
from core.ledger.models import ServicePayment
from core.ledger.store import utc_now_iso
from core.storage.payment_store import PaymentStore
from core.types import SERVICE_CATALOG, PaymentStatus, ServiceType

logger = logging.getLogger(__name__)


class PaymentDebitError(LedgerError):
    """계좌 출금 단계 실패 (계좌 서비스 응답 메시지 전달)"""

    code = "debit_failed"


class PaymentRecordError(LedgerStoreError):
    """출금 후 납부 기록 저장 실패 (출금은 되돌리지 않음)"""

    status_code = 500

    def __init__(self, detail: str | None = None):
        super().__init__("No se pudo procesar el pago", detail)


class PaymentNotFoundError(LedgerError):
    """납부 기록 없음"""

    code = "not_found"
    status_code = 404

    def __init__(self, payment_id: str):
        super().__init__("no encontrado")
        self.payment_id = payment_id


class PaymentService:
    """결제 서비스

    Args:
        db: SQLite 어댑터
        accounts_client: 계좌 서비스 REST 클라이언트
    """

    def __init__(self, db: SQLiteAdapter, accounts_client: AccountsRestClient):
        self.db = db
        self.store = PaymentStore(db)
        self.accounts_client = accounts_client

    @staticmethod
    def get_services() -> list[dict[str, str]]:
        """납부 가능 서비스 목록"""
        return [dict(s) for s in SERVICE_CATALOG]

    async def create_payment(
        self,
        account_id: str | None,
        service_type: str | None,
        reference: str | None,
        amount: Any,
    ) -> dict[str, Any]:
        """공과금 납부

        Raises:
            LedgerValidationError: 누락/잘못된 값, 지원하지 않는 서비스
            PaymentDebitError: 계좌 서비스 출금 실패 (2xx 외 응답, 타임아웃)
            PaymentRecordError: 출금 성공 후 기록 저장 실패
        """
        try:
            amount_minor = parse_amount(amount)
        except InvalidAmountError:
            amount_minor = 0

        if not account_id or not service_type or not reference or amount_minor <= 0:
            raise LedgerValidationError("Datos incompletos o inválidos")

        try:
            service = ServiceType(service_type)
        except ValueError:
            raise LedgerValidationError("Tipo de servicio inválido")

        amount_dec = to_decimal(amount_minor)
        logger.info(
            f"결제 시도: {service.value} {amount_dec}",
            extra={"account_id": account_id, "reference": reference},
        )

        # 1) 계좌 서비스 출금
        try:
            await self.accounts_client.withdraw(
                account_id,
                amount_dec,
                f"Pago {service.value} ref {reference}",
            )
        except AccountsApiError as e:
            logger.error(f"계좌 출금 실패: {e.message}", extra={"account_id": account_id})
            raise PaymentDebitError(e.message or "error al debitar cuenta")

        # 2) 공급자 처리 (시뮬레이션)
        provider_response = f"Pago simulado a proveedor {service.value} OK"

        # 3) 납부 기록 저장
        now = utc_now_iso()
        payment = ServicePayment(
            payment_id=str(uuid.uuid4()),
            account_id=str(account_id),
            service_type=service,
            reference=reference,
            amount_minor=amount_minor,
            status=PaymentStatus.CONFIRMADO,
            provider_response=provider_response,
            created_at=now,
            updated_at=now,
        )
        try:
            await self.store.insert(payment)
        except aiosqlite.Error as e:
            logger.error(
                f"출금 완료, 납부 기록 저장 실패: {e}",
                extra={"account_id": account_id, "payment_id": payment.payment_id},
            )
            raise PaymentRecordError(str(e)) from e

        logger.info(f"결제 기록 완료: {payment.payment_id}")
        return payment.to_dict()

    async def list_payments(self, account_id: str | None = None) -> list[dict[str, Any]]:
        """납부 기록 목록 (최신 순)"""
        account_filter = (account_id or "").strip() or None
        payments = await self.store.list_payments(account_filter)
        return [p.to_dict() for p in payments]

    async def get_payment(self, payment_id: str) -> dict[str, Any]:
        """납부 기록 조회

        Raises:
            PaymentNotFoundError: 없음
        """
        payment = await self.store.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment.to_dict()
