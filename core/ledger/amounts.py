"""
금액 변환 유틸리티

API 금액(Decimal) ↔ 저장 금액(센트 단위 정수) 변환.
부동소수점 누적 오차 방지를 위해 잔고는 정수로만 계산.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from core.ledger.errors import InvalidAmountError

# 소수점 자릿수 (BOB, USD 모두 2자리)
MINOR_DIGITS: int = 2
MINOR_FACTOR: int = 10 ** MINOR_DIGITS
# SQLite INTEGER 범위 내 최대 금액 (단일 금액, 계좌 잔고 공통 상한)
MAX_MINOR: int = 2 ** 62
CENT: Decimal = Decimal(1).scaleb(-MINOR_DIGITS)


def parse_amount(value: Any) -> int:
    """요청 금액을 센트 단위 정수로 변환

    숫자 또는 숫자 문자열을 허용.

    Args:
        value: 요청 본문의 amount 값

    Returns:
        센트 단위 양의 정수

    Raises:
        InvalidAmountError: None, bool, 숫자가 아닌 값, NaN/Infinity,
            0 이하, 소수점 3자리 이상

    Example:
        >>> parse_amount("100")
        10000
        >>> parse_amount(0.5)
        50
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError()

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidAmountError()
    elif not isinstance(value, (int, float, Decimal)):
        raise InvalidAmountError()

    try:
        # float는 str 경유 (0.1 → Decimal('0.1'))
        amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError):
        raise InvalidAmountError()

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError()

    if amount > Decimal(MAX_MINOR) / MINOR_FACTOR:
        raise InvalidAmountError()

    minor = amount * MINOR_FACTOR
    if minor != minor.to_integral_value():
        raise InvalidAmountError(f"máximo {MINOR_DIGITS} decimales")

    return int(minor)


def to_decimal(minor: int) -> Decimal:
    """센트 단위 정수 → Decimal (소수점 2자리 고정)

    Example:
        >>> to_decimal(10050)
        Decimal('100.50')
    """
    return (Decimal(minor) / MINOR_FACTOR).quantize(CENT)


def format_amount(minor: int) -> str:
    """센트 단위 정수 → API 응답 문자열

    Example:
        >>> format_amount(10000)
        '100.00'
    """
    return str(to_decimal(minor))
