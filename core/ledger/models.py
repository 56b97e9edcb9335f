"""
계좌 원장 모델

Account / Movement / ServicePayment 데이터 구조.
DB 행(tuple) ↔ 모델 ↔ API dict 변환 담당.
"""

from dataclasses import dataclass
from typing import Any

from core.ledger.amounts import format_amount
from core.types import (
    AccountStatus,
    AccountType,
    Currency,
    MovementType,
    PaymentStatus,
    ServiceType,
)

# SELECT 컬럼 순서 (from_row와 일치해야 함)
ACCOUNT_COLUMNS = """
    account_id, number, client_id, account_type, currency, alias,
    balance_minor, status, version, created_at, updated_at
"""

MOVEMENT_COLUMNS = """
    movement_id, account_id, movement_type, amount_minor, description, created_at
"""

PAYMENT_COLUMNS = """
    payment_id, account_id, service_type, reference, amount_minor,
    status, provider_response, created_at, updated_at
"""


@dataclass
class Account:
    """계좌

    Attributes:
        account_id: 시스템 생성 ID (UUID)
        number: 10자리 계좌번호
        client_id: 고객 참조 (검증하지 않음)
        account_type: AHORRO / CORRIENTE
        currency: BOB / USD
        alias: 별칭 (선택)
        balance_minor: 잔고 (센트 단위)
        status: ACTIVA / BLOQUEADA / CERRADA
        version: 쓰기마다 증가하는 버전
        created_at: 생성 시각 (ISO)
        updated_at: 수정 시각 (ISO)
    """

    account_id: str
    number: str
    client_id: str
    account_type: AccountType
    currency: Currency
    alias: str | None
    balance_minor: int
    status: AccountStatus
    version: int
    created_at: str
    updated_at: str

    @property
    def is_active(self) -> bool:
        """입출금 가능 여부"""
        return self.status == AccountStatus.ACTIVA

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Account":
        """DB 행에서 생성"""
        return cls(
            account_id=row[0],
            number=row[1],
            client_id=row[2],
            account_type=AccountType(row[3]),
            currency=Currency(row[4]),
            alias=row[5],
            balance_minor=int(row[6]),
            status=AccountStatus(row[7]),
            version=int(row[8]),
            created_at=row[9],
            updated_at=row[10],
        )

    def to_dict(self) -> dict[str, Any]:
        """API 응답 dict 변환"""
        return {
            "id": self.account_id,
            "number": self.number,
            "clientId": self.client_id,
            "type": self.account_type.value,
            "currency": self.currency.value,
            "alias": self.alias,
            "balance": format_amount(self.balance_minor),
            "status": self.status.value,
            "version": self.version,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class Movement:
    """잔고 변동 기록 (생성 후 불변)"""

    movement_id: str
    account_id: str
    movement_type: MovementType
    amount_minor: int
    description: str | None
    created_at: str

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Movement":
        """DB 행에서 생성"""
        return cls(
            movement_id=row[0],
            account_id=row[1],
            movement_type=MovementType(row[2]),
            amount_minor=int(row[3]),
            description=row[4],
            created_at=row[5],
        )

    def to_dict(self) -> dict[str, Any]:
        """API 응답 dict 변환"""
        return {
            "id": self.movement_id,
            "accountId": self.account_id,
            "type": self.movement_type.value,
            "amount": format_amount(self.amount_minor),
            "description": self.description,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class ServicePayment:
    """공과금 납부 기록"""

    payment_id: str
    account_id: str
    service_type: ServiceType
    reference: str
    amount_minor: int
    status: PaymentStatus
    provider_response: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "ServicePayment":
        """DB 행에서 생성"""
        return cls(
            payment_id=row[0],
            account_id=row[1],
            service_type=ServiceType(row[2]),
            reference=row[3],
            amount_minor=int(row[4]),
            status=PaymentStatus(row[5]),
            provider_response=row[6],
            created_at=row[7],
            updated_at=row[8],
        )

    def to_dict(self) -> dict[str, Any]:
        """API 응답 dict 변환"""
        return {
            "id": self.payment_id,
            "accountId": self.account_id,
            "serviceType": self.service_type.value,
            "reference": self.reference,
            "amount": format_amount(self.amount_minor),
            "status": self.status.value,
            "providerResponse": self.provider_response,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
