"""
요청 스키마 (Pydantic)

Web API 요청 데이터 파싱.
업무 검증(필수값, enum, 금액)은 핸들러에서 수행하여 400으로 응답.
"""

from typing import Any

from pydantic import BaseModel, Field


class AccountCreateRequest(BaseModel):
    """계좌 생성 요청"""

    client_id: str | None = Field(default=None, alias="clientId", description="고객 ID")
    type: str | None = Field(default=None, description="계좌 유형 (AHORRO/CORRIENTE)")
    currency: str | None = Field(default=None, description="통화 (BOB/USD)")
    alias: str | None = Field(default=None, description="별칭")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "clientId": "c1",
                    "type": "AHORRO",
                    "currency": "BOB",
                    "alias": "Ahorro principal",
                },
            ]
        },
    }


class AccountUpdateRequest(BaseModel):
    """계좌 별칭/상태 변경 요청

    전달된 키만 변경 (model_fields_set 기준).
    """

    alias: str | None = Field(default=None, description="별칭 (빈 문자열이면 비움)")
    status: str | None = Field(default=None, description="상태 (ACTIVA/BLOQUEADA/CERRADA)")

    def changes(self) -> dict[str, Any]:
        """요청에 실제로 포함된 필드만 반환"""
        return self.model_dump(include=self.model_fields_set)


class BalanceOperationRequest(BaseModel):
    """입금/출금 요청"""

    amount: Any = Field(
        default=None,
        description="금액 (유한한 양수). 소수점 3자리 이상은 invalid_amount로 거부",
    )
    description: str | None = Field(default=None, description="설명")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"amount": 100, "description": "Depósito ventanilla"},
            ]
        }
    }


class PaymentCreateRequest(BaseModel):
    """공과금 납부 요청"""

    account_id: str | None = Field(default=None, alias="accountId", description="계좌 ID")
    service_type: str | None = Field(default=None, alias="serviceType", description="서비스 코드")
    reference: str | None = Field(default=None, description="납부 참조번호")
    amount: Any = Field(default=None, description="금액 (양수, 소수점 2자리까지)")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "accountId": "0b6f3c52-8f0e-4d0a-9c39-6a8a4f1e2b7d",
                    "serviceType": "LUZ",
                    "reference": "CRE-123456",
                    "amount": 150.5,
                },
            ]
        },
    }
