"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class RunMode(str, Enum):
    """실행 모드 (운영 / 개발)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class AccountType(str, Enum):
    """계좌 유형"""

    AHORRO = "AHORRO"  # 저축 예금
    CORRIENTE = "CORRIENTE"  # 당좌 예금


class Currency(str, Enum):
    """통화"""

    BOB = "BOB"
    USD = "USD"


class AccountStatus(str, Enum):
    """계좌 상태

    전이 규칙 없음: 관리자가 어떤 상태로든 변경 가능.
    입출금은 ACTIVA 상태에서만 허용.
    """

    ACTIVA = "ACTIVA"
    BLOQUEADA = "BLOQUEADA"
    CERRADA = "CERRADA"


class MovementType(str, Enum):
    """잔고 변동 유형"""

    DEPOSITO = "DEPOSITO"  # 입금
    RETIRO = "RETIRO"  # 출금
    PAGO_SERVICIO = "PAGO_SERVICIO"  # 공과금 납부


class BalanceMode(str, Enum):
    """잔고 변경 방식

    - NAIVE: 읽기 → 계산 → 쓰기 (경합 시 lost update 가능)
    - ATOMIC: 조건부 UPDATE + 이동 기록을 단일 트랜잭션으로 처리
    """

    NAIVE = "naive"
    ATOMIC = "atomic"


class ServiceType(str, Enum):
    """납부 가능한 공과금 종류"""

    LUZ = "LUZ"
    AGUA = "AGUA"
    TELEFONO = "TELEFONO"
    GAS = "GAS"
    OTRO = "OTRO"


# 서비스 카탈로그 (GET /services)
SERVICE_CATALOG: list[dict[str, str]] = [
    {"code": ServiceType.LUZ.value, "name": "Energía eléctrica"},
    {"code": ServiceType.AGUA.value, "name": "Agua potable"},
    {"code": ServiceType.TELEFONO.value, "name": "Telefonía"},
    {"code": ServiceType.GAS.value, "name": "Gas domiciliario"},
    {"code": ServiceType.OTRO.value, "name": "Otros servicios"},
]


class PaymentStatus(str, Enum):
    """결제 상태"""

    CONFIRMADO = "CONFIRMADO"


class LedgerAction(str, Enum):
    """권한 검사 대상 작업"""

    CREATE = "create"
    UPDATE = "update"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
