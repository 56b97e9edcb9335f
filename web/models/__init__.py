"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AccountCreateRequest,
    AccountUpdateRequest,
    BalanceOperationRequest,
    PaymentCreateRequest,
)
from web.models.responses import (
    AccountResponse,
    HealthResponse,
    MovementResponse,
    PaymentResponse,
    ServiceResponse,
)

__all__ = [
    # Requests
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "BalanceOperationRequest",
    "PaymentCreateRequest",
    # Responses
    "AccountResponse",
    "HealthResponse",
    "MovementResponse",
    "PaymentResponse",
    "ServiceResponse",
]
