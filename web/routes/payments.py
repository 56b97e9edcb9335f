"""
결제 라우트

공과금 서비스 목록, 납부 실행/조회 API
"""

from fastapi import APIRouter, Depends, Path, Query

from adapters.accounts.rest_client import AccountsRestClient
from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.errors import LedgerError
from web.dependencies import get_accounts_client, get_db
from web.errors import to_http_exception
from web.models.requests import PaymentCreateRequest
from web.models.responses import PaymentResponse, ServiceResponse
from web.services.payment_service import PaymentService

router = APIRouter(tags=["Payments"])


def _service(
    db: SQLiteAdapter = Depends(get_db),
    accounts_client: AccountsRestClient = Depends(get_accounts_client),
) -> PaymentService:
    """요청별 PaymentService 생성"""
    return PaymentService(db, accounts_client)


@router.get("/services", response_model=list[ServiceResponse])
async def get_services() -> list[ServiceResponse]:
    """납부 가능 서비스 목록"""
    return [ServiceResponse(**s) for s in PaymentService.get_services()]


@router.post("/payments", response_model=PaymentResponse, status_code=201)
async def create_payment(
    request: PaymentCreateRequest,
    service: PaymentService = Depends(_service),
) -> PaymentResponse:
    """공과금 납부

    계좌 서비스 출금이 실패하면 400 (계좌 서비스 메시지 전달).
    출금 후 기록 저장이 실패하면 500 store_error.
    """
    try:
        payment = await service.create_payment(
            account_id=request.account_id,
            service_type=request.service_type,
            reference=request.reference,
            amount=request.amount,
        )
    except LedgerError as e:
        raise to_http_exception(e)

    return PaymentResponse.model_validate(payment)


@router.get("/payments", response_model=list[PaymentResponse])
async def list_payments(
    account_id: str | None = Query(default=None, alias="accountId", description="계좌 ID 필터"),
    service: PaymentService = Depends(_service),
) -> list[PaymentResponse]:
    """납부 기록 목록 (최신 순)"""
    payments = await service.list_payments(account_id)
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get("/payments/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: str = Path(..., description="납부 ID"),
    service: PaymentService = Depends(_service),
) -> PaymentResponse:
    """납부 기록 상세"""
    try:
        payment = await service.get_payment(payment_id)
    except LedgerError as e:
        raise to_http_exception(e)

    return PaymentResponse.model_validate(payment)
