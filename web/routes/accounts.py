"""
계좌 라우트

계좌 생성/조회/변경, 입출금, 변동 기록 API
(게이트웨이가 /api/accounts → /accounts 로 재작성)
"""

from fastapi import APIRouter, Depends, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import AppConfig
from core.ledger.authz import Authorizer, Caller
from core.ledger.errors import LedgerError
from web.dependencies import get_app_config, get_authorizer, get_caller, get_db
from web.errors import to_http_exception
from web.models.requests import (
    AccountCreateRequest,
    AccountUpdateRequest,
    BalanceOperationRequest,
)
from web.models.responses import AccountResponse, MovementResponse
from web.services.account_service import AccountService

router = APIRouter(prefix="/accounts", tags=["Accounts"])


def _service(
    db: SQLiteAdapter = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    authorizer: Authorizer = Depends(get_authorizer),
) -> AccountService:
    """요청별 AccountService 생성"""
    return AccountService(db, config, authorizer)


@router.get("", response_model=list[AccountResponse])
async def list_accounts(
    client_id: str | None = Query(default=None, alias="clientId", description="고객 ID 필터"),
    service: AccountService = Depends(_service),
) -> list[AccountResponse]:
    """계좌 목록 조회 (최근 생성 순, 페이지네이션 없음)"""
    accounts = await service.list_accounts(client_id)
    return [AccountResponse.model_validate(a) for a in accounts]


@router.post("", response_model=AccountResponse, status_code=201)
async def create_account(
    request: AccountCreateRequest,
    service: AccountService = Depends(_service),
    caller: Caller = Depends(get_caller),
) -> AccountResponse:
    """계좌 생성

    잔고 0, ACTIVA 상태로 생성. 계좌번호는 10자리 난수.
    """
    try:
        account = await service.create_account(
            client_id=request.client_id,
            account_type=request.type,
            currency=request.currency,
            alias=request.alias,
            caller=caller,
        )
    except LedgerError as e:
        raise to_http_exception(e)

    return AccountResponse.model_validate(account)


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: str = Path(..., description="계좌 ID"),
    service: AccountService = Depends(_service),
) -> AccountResponse:
    """계좌 상세 조회"""
    try:
        account = await service.get_account(account_id)
    except LedgerError as e:
        raise to_http_exception(e)

    return AccountResponse.model_validate(account)


@router.patch("/{account_id}", response_model=AccountResponse)
async def update_account(
    request: AccountUpdateRequest,
    account_id: str = Path(..., description="계좌 ID"),
    service: AccountService = Depends(_service),
    caller: Caller = Depends(get_caller),
) -> AccountResponse:
    """별칭/상태 변경

    요청 본문에 포함된 키만 변경. 상태 전이 순서는 검사하지 않음.
    """
    try:
        account = await service.update_account(account_id, request.changes(), caller)
    except LedgerError as e:
        raise to_http_exception(e)

    return AccountResponse.model_validate(account)


@router.post("/{account_id}/deposit", response_model=AccountResponse)
async def deposit(
    account_id: str = Path(..., description="계좌 ID"),
    request: BalanceOperationRequest | None = None,
    service: AccountService = Depends(_service),
    caller: Caller = Depends(get_caller),
) -> AccountResponse:
    """입금 (ACTIVA 계좌만)"""
    request = request or BalanceOperationRequest()
    try:
        account = await service.deposit(account_id, request.amount, request.description, caller)
    except LedgerError as e:
        raise to_http_exception(e)

    return AccountResponse.model_validate(account)


@router.post("/{account_id}/withdraw", response_model=AccountResponse)
async def withdraw(
    account_id: str = Path(..., description="계좌 ID"),
    request: BalanceOperationRequest | None = None,
    service: AccountService = Depends(_service),
    caller: Caller = Depends(get_caller),
) -> AccountResponse:
    """출금 (ACTIVA 계좌, 잔고 이내)"""
    request = request or BalanceOperationRequest()
    try:
        account = await service.withdraw(account_id, request.amount, request.description, caller)
    except LedgerError as e:
        raise to_http_exception(e)

    return AccountResponse.model_validate(account)


@router.get("/{account_id}/movements", response_model=list[MovementResponse])
async def get_movements(
    account_id: str = Path(..., description="계좌 ID"),
    service: AccountService = Depends(_service),
) -> list[MovementResponse]:
    """변동 기록 조회 (최신 순)"""
    movements = await service.get_movements(account_id)
    return [MovementResponse.model_validate(m) for m in movements]
