"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화 (JSON 필드명은 camelCase)
금액은 소수점 2자리 문자열.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    ok: bool = Field(default=True, description="서비스 상태")
    service: str = Field(..., description="서비스 이름")
    version: str = Field(..., description="서비스 버전")


class AccountResponse(BaseModel):
    """계좌 응답"""

    id: str = Field(..., description="계좌 ID")
    number: str = Field(..., description="10자리 계좌번호")
    client_id: str = Field(..., alias="clientId", description="고객 ID")
    type: str = Field(..., description="계좌 유형")
    currency: str = Field(..., description="통화")
    alias: str | None = Field(default=None, description="별칭")
    balance: str = Field(..., description="잔고")
    status: str = Field(..., description="상태")
    version: int = Field(..., description="쓰기 버전")
    created_at: str = Field(..., alias="createdAt", description="생성 시간 (UTC)")
    updated_at: str = Field(..., alias="updatedAt", description="수정 시간 (UTC)")


class MovementResponse(BaseModel):
    """잔고 변동 기록 응답"""

    id: str = Field(..., description="변동 ID")
    account_id: str = Field(..., alias="accountId", description="계좌 ID")
    type: str = Field(..., description="변동 유형 (DEPOSITO/RETIRO/PAGO_SERVICIO)")
    amount: str = Field(..., description="금액")
    description: str | None = Field(default=None, description="설명")
    created_at: str = Field(..., alias="createdAt", description="생성 시간 (UTC)")


class ServiceResponse(BaseModel):
    """납부 가능 서비스"""

    code: str = Field(..., description="서비스 코드")
    name: str = Field(..., description="서비스 이름")


class PaymentResponse(BaseModel):
    """공과금 납부 응답"""

    id: str = Field(..., description="납부 ID")
    account_id: str = Field(..., alias="accountId", description="계좌 ID")
    service_type: str = Field(..., alias="serviceType", description="서비스 코드")
    reference: str = Field(..., description="참조번호")
    amount: str = Field(..., description="금액")
    status: str = Field(..., description="상태")
    provider_response: str | None = Field(default=None, alias="providerResponse", description="공급자 응답")
    created_at: str = Field(..., alias="createdAt", description="생성 시간 (UTC)")
    updated_at: str = Field(..., alias="updatedAt", description="수정 시간 (UTC)")
